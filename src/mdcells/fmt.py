from __future__ import annotations

from dataclasses import replace
from io import StringIO
from typing import Any, List, Mapping, Sequence

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from .model import Cell, CellKind
from .parse import YAML_LOAD_ERRORS, load_yaml, parse_text
from .serialize import DEFAULT_SEPARATOR, serialize


def _round_trip_yaml() -> YAML:
    yaml = YAML()
    yaml.preserve_quotes = True
    return yaml


def _dump(yaml: YAML, data: Any) -> str:
    out = StringIO()
    yaml.dump(data, out)
    return out.getvalue().rstrip("\n")


def _load_or_none(content: str) -> Any:
    try:
        return load_yaml(content)
    except YAML_LOAD_ERRORS:
        return None


def format_front_matter(content: str) -> str:
    """Re-emit a front matter mapping in canonical block style.

    Comments, key order and quoting survive. Content that is empty, not a
    mapping or not valid YAML is returned unchanged.
    """
    if not content.strip():
        return content
    yaml = _round_trip_yaml()
    try:
        data = yaml.load(content)
    except YAML_LOAD_ERRORS:
        return content
    if not isinstance(data, CommentedMap):
        return content
    return _dump(yaml, data)


def format_cells(cells: Sequence[Cell]) -> List[Cell]:
    """Return cells laid out canonically: one blank line between cells,
    nothing before the first cell, a single newline at the end."""
    out: List[Cell] = []
    last = len(cells) - 1
    for idx, cell in enumerate(cells):
        content = cell.content
        if cell.kind is CellKind.FRONT_MATTER:
            content = format_front_matter(content)
        out.append(
            replace(
                cell,
                content=content,
                leading_whitespace="",
                trailing_whitespace="\n" if idx == last else DEFAULT_SEPARATOR,
            )
        )
    return out


def format_text(text: str) -> str:
    return serialize(format_cells(parse_text(text)))


def update_front_matter(cells: Sequence[Cell], updates: Mapping[str, Any]) -> List[Cell]:
    """Merge `updates` into the document's front matter.

    The first cell's YAML is edited in round-trip mode so comments and key
    order survive. A document without front matter gets a new first cell.
    The given cells are left untouched; a new list is returned.
    """
    yaml = _round_trip_yaml()
    out = list(cells)

    data: Any = None
    if out and out[0].kind is CellKind.FRONT_MATTER and out[0].content.strip():
        try:
            data = yaml.load(out[0].content)
        except YAML_LOAD_ERRORS:
            data = None
    if not isinstance(data, CommentedMap):
        data = CommentedMap()

    for key, value in updates.items():
        data[key] = value

    content = _dump(yaml, data)
    if out and out[0].kind is CellKind.FRONT_MATTER:
        out[0] = replace(out[0], content=content, front_matter=_load_or_none(content))
    else:
        out.insert(
            0,
            Cell(
                kind=CellKind.FRONT_MATTER,
                content=content,
                language="yaml",
                front_matter=_load_or_none(content),
            ),
        )
    return out
