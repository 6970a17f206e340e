from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .languages import LANG_IDS, SUPPORTED_LANGUAGES
from .model import FRONT_MATTER_DELIMITER, Cell, CellKind
from .parse import parse_text

_KNOWN_LANGUAGES = frozenset(SUPPORTED_LANGUAGES) | frozenset(LANG_IDS.values())


@dataclass
class LintIssue:
    level: str  # "ERROR" | "WARN"
    message: str


def lint_cells(cells: Sequence[Cell]) -> Tuple[List[LintIssue], List[LintIssue]]:
    errors: List[LintIssue] = []
    warns: List[LintIssue] = []

    for idx, c in enumerate(cells):
        if c.kind is CellKind.FRONT_MATTER:
            if idx != 0:
                errors.append(
                    LintIssue("ERROR", f"Front matter must be the first cell (found at cell {idx + 1})")
                )
            if c.front_matter is not None and not isinstance(c.front_matter, dict):
                warns.append(
                    LintIssue("WARN", f"Front matter is a {type(c.front_matter).__name__}, not a mapping")
                )
        elif c.kind is CellKind.CODE:
            if c.language and c.language not in _KNOWN_LANGUAGES:
                warns.append(LintIssue("WARN", f"Cell {idx + 1} uses unknown language: {c.language}"))

    return errors, warns


def lint_text(text: str) -> Tuple[List[LintIssue], List[LintIssue]]:
    cells = parse_text(text)
    errors, warns = lint_cells(cells)

    first_line = text.replace("\r\n", "\n").split("\n", 1)[0]
    if first_line == FRONT_MATTER_DELIMITER and not (cells and cells[0].is_front_matter):
        warns.insert(
            0,
            LintIssue("WARN", "Document starts with '---' but has no valid front matter; treated as prose"),
        )
    return errors, warns
