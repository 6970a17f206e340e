"""mdcells: Markdown documents as notebook cells.

Parses Markdown into prose, fenced code and YAML front matter cells and
writes them back, byte-for-byte when nothing was edited.
"""

__all__ = [
    "Cell",
    "CellKind",
    "SUPPORTED_LANGUAGES",
    "front_matter_of",
    "parse_text",
    "parse_file",
    "serialize",
]

__version__ = "0.1.0"

from .languages import SUPPORTED_LANGUAGES  # noqa: E402
from .model import Cell, CellKind, front_matter_of  # noqa: E402
from .parse import parse_text, parse_file  # noqa: E402
from .serialize import serialize  # noqa: E402
