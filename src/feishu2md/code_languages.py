"""Docx code-block language tags mapped to Markdown fence languages."""

from __future__ import annotations

from typing import Final

# Ordered as the docx API enumerates them, starting at 1 (plain text).
_LANGUAGES: Final[tuple[str, ...]] = (
    "",
    "abap",
    "ada",
    "apache",
    "apex",
    "assembly",
    "bash",
    "csharp",
    "cpp",
    "c",
    "cobol",
    "css",
    "coffeescript",
    "d",
    "dart",
    "delphi",
    "django",
    "dockerfile",
    "erlang",
    "fortran",
    "foxpro",
    "go",
    "groovy",
    "html",
    "htmlbars",
    "http",
    "haskell",
    "json",
    "java",
    "javascript",
    "julia",
    "kotlin",
    "latex",
    "lisp",
    "logo",
    "lua",
    "matlab",
    "makefile",
    "markdown",
    "nginx",
    "objectivec",
    "openedge-abl",
    "php",
    "perl",
    "postscript",
    "powershell",
    "prolog",
    "protobuf",
    "python",
    "r",
    "rpg",
    "ruby",
    "rust",
    "sas",
    "scss",
    "sql",
    "scala",
    "scheme",
    "scratch",
    "shell",
    "swift",
    "thrift",
    "typescript",
    "vbscript",
    "vbnet",
    "xml",
    "yaml",
)

CODE_LANGUAGES: Final[dict[int, str]] = {tag: name for tag, name in enumerate(_LANGUAGES, start=1)}


def fence_language(tag: int | None) -> str:
    """Return the fence language for a docx language tag, empty if unmapped."""
    if tag is None:
        return ""
    return CODE_LANGUAGES.get(tag, "")
