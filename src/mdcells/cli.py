from __future__ import annotations

import argparse
import sys
from io import StringIO
from pathlib import Path
from typing import Any, Dict, List

from ruamel.yaml import YAML

from .fmt import format_text, update_front_matter
from .jupyter import export_file_to_ipynb, import_ipynb_file
from .languages import SUPPORTED_LANGUAGES
from .lint import lint_text
from .log import get_logger, setup_logging
from .model import front_matter_of
from .parse import YAML_LOAD_ERRORS, load_yaml, parse_file, parse_text
from .serialize import serialize

logger = get_logger(__name__)


def _read(path: Path) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)


def _cmd_cells(path: Path) -> int:
    cells = parse_file(str(path))
    for idx, c in enumerate(cells, start=1):
        first = c.content.split("\n", 1)[0]
        if len(first) > 60:
            first = first[:57] + "..."
        print(f"{idx:>3}  {c.kind.value:<12} {c.language:<12} {first}")
    return 0


def _cmd_fmt(path: Path, check: bool) -> int:
    original = _read(path)
    text = format_text(original)
    if check:
        if text != original:
            print(f"Would reformat: {path}")
            return 1
        print(f"Already formatted: {path}")
        return 0
    _write(path, text)
    print(f"Formatted: {path}")
    return 0


def _cmd_lint(path: Path) -> int:
    errors, warns = lint_text(_read(path))
    for w in warns:
        print(f"WARN: {w.message}")
    for e in errors:
        print(f"ERROR: {e.message}")
    if errors:
        return 1
    print("OK: no lint errors")
    return 0


def _parse_assignments(items: List[str]) -> Dict[str, Any]:
    """Parse KEY=VALUE pairs; values are read as YAML scalars."""
    out: Dict[str, Any] = {}
    for item in items:
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got: {item!r}")
        try:
            out[key] = load_yaml(raw) if raw.strip() else ""
        except YAML_LOAD_ERRORS:
            out[key] = raw
    return out


def _cmd_meta(path: Path, assignments: List[str] | None) -> int:
    if assignments:
        cells = update_front_matter(parse_text(_read(path)), _parse_assignments(assignments))
        _write(path, serialize(cells))
        print(f"Updated front matter: {path}")
        return 0

    data = front_matter_of(parse_file(str(path)))
    if data is None:
        print("No front matter")
        return 0
    yaml = YAML(typ="safe")
    yaml.default_flow_style = False
    out = StringIO()
    yaml.dump(data, out)
    print(out.getvalue(), end="")
    return 0


def _cmd_languages() -> int:
    for lang in SUPPORTED_LANGUAGES:
        print(lang)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="mdcells", description="Markdown notebook cells CLI")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Logging level (default: $MDCELLS_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_cells = sub.add_parser("cells", help="List the cells of a Markdown file")
    p_cells.add_argument("file")

    p_fmt = sub.add_parser("fmt", help="Format a Markdown file (blank lines, front matter, fence tags)")
    p_fmt.add_argument("file")
    p_fmt.add_argument(
        "--check",
        action="store_true",
        help="Report whether the file would change without writing it",
    )

    p_lint = sub.add_parser("lint", help="Lint a Markdown file")
    p_lint.add_argument("file")

    p_meta = sub.add_parser("meta", help="Show or update YAML front matter")
    p_meta.add_argument("file")
    p_meta.add_argument(
        "--set",
        dest="assignments",
        action="append",
        metavar="KEY=VALUE",
        help="Set a front matter key (may be repeated)",
    )

    p_export = sub.add_parser("export", help="Export Markdown to .ipynb")
    p_export.add_argument("file", help="Input Markdown file")
    p_export.add_argument("-o", "--output", help="Output .ipynb file (default: stdout)")

    p_import = sub.add_parser("import", help="Import .ipynb to Markdown")
    p_import.add_argument("file", help="Input .ipynb file")
    p_import.add_argument("-o", "--output", help="Output Markdown file (default: stdout)")

    sub.add_parser("languages", help="List language ids offered for code cells")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    cmd = args.cmd
    path = Path(args.file) if getattr(args, "file", None) else None

    try:
        if cmd == "cells":
            return _cmd_cells(path)
        if cmd == "fmt":
            return _cmd_fmt(path, args.check)
        if cmd == "lint":
            return _cmd_lint(path)
        if cmd == "meta":
            return _cmd_meta(path, args.assignments)
        if cmd == "export":
            export_file_to_ipynb(str(path), args.output)
            return 0
        if cmd == "import":
            import_ipynb_file(str(path), args.output)
            return 0
        if cmd == "languages":
            return _cmd_languages()
    except (OSError, ValueError) as e:
        logger.debug("Command %s failed", cmd, exc_info=True)
        print(f"ERROR: {e}")
        return 1

    parser.error(f"unknown command: {cmd}")
    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
