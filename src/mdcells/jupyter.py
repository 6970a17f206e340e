from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import nbformat
from nbformat import v4

from .log import get_logger
from .model import Cell, CellKind
from .parse import YAML_LOAD_ERRORS, load_yaml, parse_file
from .serialize import serialize

logger = get_logger(__name__)

META_KEY = "mdcells"
DEFAULT_LANGUAGE = "python"


def _notebook_language(cells: Sequence[Cell]) -> str:
    for c in cells:
        if c.kind is CellKind.CODE and c.language:
            return c.language
    return DEFAULT_LANGUAGE


def _str_or_none(value: Any) -> Optional[str]:
    # Hand-edited metadata may hold anything; non-strings count as not captured
    return value if isinstance(value, str) else None


def cells_to_ipynb_dict(cells: Sequence[Cell]) -> Dict:
    """Convert cells to an nbformat v4 notebook.

    - Prose becomes "markdown", code becomes "code", front matter becomes "raw".
    - Sources are stored verbatim.
    - Whitespace and indentation bookkeeping is kept in
      cell.metadata["mdcells"] so the Markdown can be rebuilt exactly.
    """
    language = _notebook_language(cells)

    def _cell_to_nb(c: Cell):
        meta = {
            META_KEY: {
                "language": c.language,
                "indentation": c.indentation,
                "leading_whitespace": c.leading_whitespace,
                "trailing_whitespace": c.trailing_whitespace,
            }
        }
        if c.empty_block:
            meta[META_KEY]["empty_block"] = True
        if c.kind is CellKind.PROSE:
            return v4.new_markdown_cell(c.content, metadata=meta)
        if c.kind is CellKind.CODE:
            return v4.new_code_cell(c.content, metadata=meta)
        if c.kind is CellKind.FRONT_MATTER:
            meta[META_KEY]["front_matter"] = True
            return v4.new_raw_cell(c.content, metadata=meta)
        raise ValueError(f"Unknown cell kind: {c.kind!r}")

    nb = v4.new_notebook(
        cells=[_cell_to_nb(c) for c in cells],
        metadata={
            "kernelspec": {"name": language, "display_name": language, "language": language},
            "language_info": {"name": language},
        },
    )
    return nb


def ipynb_dict_to_cells(d: Dict) -> List[Cell]:
    """Convert an nbformat v4 notebook dict to cells.

    - "markdown" -> prose, "code" -> code
    - "raw" -> front matter when flagged in mdcells metadata, prose otherwise
    - Cells without mdcells metadata get no captured whitespace, so the
      serializer separates them with a blank line
    """
    meta = d.get("metadata", {}) if isinstance(d, dict) else {}
    lang_info = meta.get("language_info", {}) if isinstance(meta, dict) else {}
    default_language = lang_info.get("name") or DEFAULT_LANGUAGE

    cells_in = d.get("cells", []) if isinstance(d, dict) else []
    cells: List[Cell] = []
    for jc in cells_in:
        if not isinstance(jc, dict):
            continue
        jtype = str(jc.get("cell_type") or "raw")
        src = jc.get("source", "")
        content = "".join(src) if isinstance(src, list) else str(src)
        jmeta = jc.get("metadata", {})
        ours = jmeta.get(META_KEY, {}) if isinstance(jmeta, dict) else {}
        if not isinstance(ours, dict):
            ours = {}

        common = dict(
            indentation=_str_or_none(ours.get("indentation")) or "",
            leading_whitespace=_str_or_none(ours.get("leading_whitespace")),
            trailing_whitespace=_str_or_none(ours.get("trailing_whitespace")),
            empty_block=ours.get("empty_block") is True,
        )
        if jtype == "code":
            language = _str_or_none(ours.get("language")) or default_language
            cells.append(Cell(kind=CellKind.CODE, content=content, language=language, **common))
        elif jtype == "raw" and ours.get("front_matter"):
            try:
                data = load_yaml(content)
            except YAML_LOAD_ERRORS:
                data = None
            cells.append(
                Cell(kind=CellKind.FRONT_MATTER, content=content, language="yaml", front_matter=data, **common)
            )
        else:
            if jtype not in ("markdown", "raw"):
                logger.debug("Unknown cell type %r imported as prose", jtype)
            cells.append(Cell(kind=CellKind.PROSE, content=content, language="markdown", **common))
    return cells


def export_ipynb_text(cells: Sequence[Cell]) -> str:
    nbnode = nbformat.from_dict(cells_to_ipynb_dict(cells))
    s = nbformat.writes(nbnode, version=4)
    if not s.endswith("\n"):
        s += "\n"
    return s


def import_ipynb_text(text: str) -> List[Cell]:
    nbnode = nbformat.reads(text, as_version=4)
    return ipynb_dict_to_cells(nbnode)


def export_file_to_ipynb(in_path: str, out_path: Optional[str] = None) -> None:
    text = export_ipynb_text(parse_file(in_path))
    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        print(text, end="")


def import_ipynb_file(in_path: str, out_path: Optional[str] = None) -> None:
    with open(in_path, "r", encoding="utf-8") as f:
        text = f.read()
    out_text = serialize(import_ipynb_text(text))
    if out_path:
        with open(out_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(out_text)
    else:
        print(out_text, end="")
