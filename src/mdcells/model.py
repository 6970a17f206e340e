from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

FENCE = "```"
FRONT_MATTER_DELIMITER = "---"


class CellKind(str, Enum):
    PROSE = "prose"
    CODE = "code"
    FRONT_MATTER = "front_matter"


@dataclass
class Cell:
    """A single cell of a Markdown document.

    content: cell text without fences, indentation or separating blank lines.
    language: "markdown" for prose, canonical id for code, "yaml" for front matter.
    indentation: prefix shared by the fences and every line of an indented code block.
    leading_whitespace / trailing_whitespace: the literal run of newlines
      before/after the cell in the source. None means the cell was never
      parsed from text (e.g. inserted by a host) and the serializer picks a
      separator for it.
    front_matter: loaded YAML of a front matter cell (advisory only).
    empty_block: the fences (or --- delimiters) enclosed no lines at all, as
      opposed to one empty line; only consulted while content is empty.
    """

    kind: CellKind
    content: str
    language: str
    indentation: str = ""
    leading_whitespace: Optional[str] = None
    trailing_whitespace: Optional[str] = None
    front_matter: Any = None
    empty_block: bool = False

    @property
    def is_front_matter(self) -> bool:
        return self.kind is CellKind.FRONT_MATTER


def front_matter_of(cells: Sequence[Cell]) -> Any:
    """Return the loaded front matter of a document, or None if it has none."""
    if cells and cells[0].is_front_matter:
        return cells[0].front_matter
    return None
