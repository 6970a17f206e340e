"""Fence tag aliases and the list of language ids offered to hosts."""

from __future__ import annotations

from typing import Dict

# Short fence tag -> canonical language id. Several tags may share an id; the
# first one listed is the tag written back out.
LANG_IDS: Dict[str, str] = {
    "bat": "batch",
    "c++": "cpp",
    "js": "javascript",
    "ts": "typescript",
    "cs": "csharp",
    "py": "python",
    "py2": "python",
    "py3": "python",
}

LANG_ABBREVS: Dict[str, str] = {
    lang: tag for tag, lang in reversed(list(LANG_IDS.items()))
}


def decode_language(tag: str) -> str:
    """Map a fence tag to its canonical id; unknown tags pass through."""
    return LANG_IDS.get(tag, tag)


def encode_language(language: str) -> str:
    """Map a canonical id to the fence tag written to disk."""
    return LANG_ABBREVS.get(language, language)


SUPPORTED_LANGUAGES = (
    "plaintext",
    "bat",
    "clojure",
    "coffeescript",
    "jsonc",
    "c",
    "cpp",
    "csharp",
    "css",
    "dockerfile",
    "ignore",
    "fsharp",
    "diff",
    "go",
    "groovy",
    "handlebars",
    "hlsl",
    "html",
    "ini",
    "properties",
    "java",
    "javascriptreact",
    "javascript",
    "jsx-tags",
    "json",
    "less",
    "lua",
    "makefile",
    "markdown",
    "objective-c",
    "objective-cpp",
    "perl",
    "perl6",
    "php",
    "powershell",
    "jade",
    "python",
    "r",
    "razor",
    "ruby",
    "rust",
    "scss",
    "search-result",
    "shaderlab",
    "shellscript",
    "sql",
    "swift",
    "typescript",
    "typescriptreact",
    "vb",
    "xml",
    "xsl",
    "yaml",
    "github-issues",
)
