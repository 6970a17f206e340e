from __future__ import annotations

import re
from typing import Any, List, Optional, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .languages import decode_language
from .log import get_logger
from .model import FRONT_MATTER_DELIMITER, Cell, CellKind

logger = get_logger(__name__)

# Indented blocks are only recognised with four spaces or a single tab, the
# usual nesting inside list items.
_CODE_BLOCK_START_RE = re.compile(r"^(    |\t)?```(\S*)")
_CODE_BLOCK_END_RE = re.compile(r"^\s*```")


def parse_code_block_start(line: str) -> Optional[Tuple[str, str]]:
    """Return (indentation, fence tag) if the line opens a code block."""
    m = _CODE_BLOCK_START_RE.match(line)
    if m is None:
        return None
    return m.group(1) or "", m.group(2)


def is_code_block_end(line: str) -> bool:
    return _CODE_BLOCK_END_RE.match(line) is not None


# Timestamps such as 2021-02-30 fail in the date constructor with a plain
# ValueError rather than a YAMLError
YAML_LOAD_ERRORS = (YAMLError, ValueError)


def load_yaml(text: str) -> Any:
    """Load YAML with the safe loader; raises one of YAML_LOAD_ERRORS on bad input."""
    yaml = YAML(typ="safe")
    return yaml.load(text)


class _LineScanner:
    """Single forward pass over the lines of a document.

    Each _parse_* method starts at self.i and leaves it on the first line it
    did not consume.
    """

    def __init__(self, lines: List[str]):
        self.lines = lines
        self.n = len(lines)
        self.i = 0
        self.cells: List[Cell] = []

    def scan(self) -> List[Cell]:
        if self.lines[0] == FRONT_MATTER_DELIMITER and self._parse_front_matter():
            leading = None
        else:
            leading = self._parse_whitespace(first=True)
            if self.i >= self.n:
                return self._blank_document(leading)

        while self.i < self.n:
            block = parse_code_block_start(self.lines[self.i])
            if block is not None:
                self._parse_code_block(leading or "", *block)
            else:
                self._parse_prose(leading or "")
            leading = None
        return self.cells

    def _blank_document(self, leading: str) -> List[Cell]:
        # n segments of an all-blank document hold n - 1 newlines
        if self.n == 1:
            return []
        whitespace = "\n" * (self.n - 1)
        return [
            Cell(
                kind=CellKind.PROSE,
                content="",
                language="markdown",
                leading_whitespace=whitespace,
                trailing_whitespace="",
            )
        ]

    def _parse_whitespace(self, first: bool) -> str:
        start = self.i
        end = start
        while end < self.n and self.lines[end] == "":
            end += 1
        at_end = end >= self.n
        self.i = end
        count = end - start
        # Between two cells the newline ending the previous cell's last line
        # belongs to the run as well
        if not first and not at_end:
            count += 1
        return "\n" * count

    def _parse_front_matter(self) -> bool:
        start = self.i + 1
        close = start
        while close < self.n and self.lines[close] != FRONT_MATTER_DELIMITER:
            close += 1
        if close >= self.n:
            logger.debug("Front matter is never closed; parsing '---' as prose")
            return False

        content = "\n".join(self.lines[start:close])
        try:
            data = load_yaml(content)
        except YAML_LOAD_ERRORS as e:
            logger.debug("Front matter is not valid YAML (%s); parsing as prose", e)
            return False

        self.i = close + 1
        self.cells.append(
            Cell(
                kind=CellKind.FRONT_MATTER,
                content=content,
                language="yaml",
                leading_whitespace="",
                trailing_whitespace=self._parse_whitespace(first=False),
                front_matter=data,
                empty_block=close == start,
            )
        )
        return True

    def _parse_code_block(self, leading: str, indentation: str, tag: str) -> None:
        self.i += 1
        start = self.i
        closed = False
        while self.i < self.n:
            line = self.lines[self.i]
            self.i += 1
            if is_code_block_end(line):
                closed = True
                break

        if closed:
            end = self.i - 1
        else:
            # Implicit close at end of document; trailing blank lines stay
            # whitespace rather than code
            end = self.i
            while end > start and self.lines[end - 1] == "":
                end -= 1
            self.i = end
            logger.debug("Code block opened on line %d is never closed", start)

        body_lines = self.lines[start:end]
        if indentation:
            body_lines = [
                line[len(indentation):] if line.startswith(indentation) else line
                for line in body_lines
            ]
        self.cells.append(
            Cell(
                kind=CellKind.CODE,
                content="\n".join(body_lines),
                language=decode_language(tag),
                indentation=indentation,
                leading_whitespace=leading,
                trailing_whitespace=self._parse_whitespace(first=False),
                empty_block=end == start,
            )
        )

    def _parse_prose(self, leading: str) -> None:
        start = self.i
        while self.i < self.n:
            line = self.lines[self.i]
            if line == "" or parse_code_block_start(line) is not None:
                break
            self.i += 1

        self.cells.append(
            Cell(
                kind=CellKind.PROSE,
                content="\n".join(self.lines[start:self.i]),
                language="markdown",
                leading_whitespace=leading,
                trailing_whitespace=self._parse_whitespace(first=False),
            )
        )


def parse_text(text: str) -> List[Cell]:
    """Split a Markdown document into prose, code and front matter cells.

    Never raises: unclosed fences close at end of document, and front matter
    that is unterminated or not valid YAML is parsed as ordinary prose.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    return _LineScanner(lines).scan()


def parse_file(path: str) -> List[Cell]:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return parse_text(f.read())
