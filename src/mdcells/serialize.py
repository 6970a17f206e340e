from __future__ import annotations

from typing import List, Optional, Sequence

from .languages import encode_language
from .model import FENCE, FRONT_MATTER_DELIMITER, Cell, CellKind

# Separator for cells that carry no captured whitespace, e.g. inserted by a host
DEFAULT_SEPARATOR = "\n\n"


def _has_no_lines(cell: Cell) -> bool:
    return cell.empty_block and cell.content == ""


def _render_code(cell: Cell) -> str:
    indent = cell.indentation or ""
    prefix = indent + FENCE + encode_language(cell.language) + "\n"
    if _has_no_lines(cell):
        return prefix + indent + FENCE
    body = "\n".join(
        indent + line for line in cell.content.replace("\r\n", "\n").split("\n")
    )
    return prefix + body + "\n" + indent + FENCE


def render_cell(cell: Cell) -> str:
    if cell.kind is CellKind.PROSE:
        return cell.content
    if cell.kind is CellKind.FRONT_MATTER:
        if _has_no_lines(cell):
            return f"{FRONT_MATTER_DELIMITER}\n{FRONT_MATTER_DELIMITER}"
        return f"{FRONT_MATTER_DELIMITER}\n{cell.content}\n{FRONT_MATTER_DELIMITER}"
    if cell.kind is CellKind.CODE:
        return _render_code(cell)
    raise ValueError(f"Unknown cell kind: {cell.kind!r}")


def whitespace_between(cell: Cell, next_cell: Optional[Cell]) -> str:
    """Whitespace written after `cell`, given the cell that follows it."""
    trailing = cell.trailing_whitespace
    if next_cell is None:
        return trailing if trailing is not None else "\n"

    leading = next_cell.leading_whitespace
    if trailing is not None and leading is not None:
        return trailing + leading

    # At least one side was never parsed from text
    combined = (trailing or "") + (leading or "")
    if combined in ("", "\n"):
        return DEFAULT_SEPARATOR
    return combined


def serialize(cells: Sequence[Cell]) -> str:
    """Write cells back to Markdown text.

    Unedited cells from parse_text reproduce the original document exactly.
    """
    parts: List[str] = []
    if cells:
        parts.append(cells[0].leading_whitespace or "")
    for idx, cell in enumerate(cells):
        next_cell = cells[idx + 1] if idx + 1 < len(cells) else None
        parts.append(render_cell(cell))
        parts.append(whitespace_between(cell, next_cell))
    return "".join(parts)


def write_file(path: str, cells: Sequence[Cell]) -> None:
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(serialize(cells))
