"""Language configurations: the single source of truth for per-language patterns.

Adding a new language:
  1. Add a LanguageConfig entry to LANGUAGES below.
  2. Register a syntax visitor for it in ``syntax.py``.
"""

from __future__ import annotations

import re as _re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional


@dataclass(frozen=True)
class LanguageConfig:
    """Everything the indexer needs to know about a language."""

    name: str
    extensions: tuple[str, ...]

    # Each tuple is (pattern, flags). Matches are removed but their newlines kept.
    comment_patterns: tuple[tuple[str, int], ...] = ()

    # Extensions tried, in order, when resolving an extension-less import.
    resolve_extensions: tuple[str, ...] = ()

    # Directory entry-point file stems, e.g. "index" for "./lib" -> "lib/index.ts".
    index_stems: tuple[str, ...] = ()

    # File-name pattern that marks a test file on its own.
    test_file_pattern: str = r"$^"


_C_LINE_COMMENT = (r"//.*", 0)
_C_BLOCK_COMMENT = (r"/\*.*?\*/", _re.DOTALL)
_HASH_COMMENT = (r"#.*", 0)

_JS_FAMILY_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")
_JS_TEST_FILE = r"\.(spec|test)\.[jt]sx?$"


LANGUAGES: dict[str, LanguageConfig] = {
    "typescript": LanguageConfig(
        name="typescript",
        extensions=(".ts",),
        comment_patterns=(_C_BLOCK_COMMENT, _C_LINE_COMMENT),
        resolve_extensions=_JS_FAMILY_EXTENSIONS,
        index_stems=("index",),
        test_file_pattern=_JS_TEST_FILE,
    ),
    "tsx": LanguageConfig(
        name="tsx",
        extensions=(".tsx",),
        comment_patterns=(_C_BLOCK_COMMENT, _C_LINE_COMMENT),
        resolve_extensions=_JS_FAMILY_EXTENSIONS,
        index_stems=("index",),
        test_file_pattern=_JS_TEST_FILE,
    ),
    "javascript": LanguageConfig(
        name="javascript",
        extensions=(".js", ".jsx", ".mjs", ".cjs"),
        comment_patterns=(_C_BLOCK_COMMENT, _C_LINE_COMMENT),
        resolve_extensions=_JS_FAMILY_EXTENSIONS,
        index_stems=("index",),
        test_file_pattern=_JS_TEST_FILE,
    ),
    "python": LanguageConfig(
        name="python",
        extensions=(".py",),
        comment_patterns=(_HASH_COMMENT,),
        resolve_extensions=(".py",),
        index_stems=("__init__",),
        test_file_pattern=r"(^test_.*\.py$)|(_test\.py$)",
    ),
}

_EXTENSION_MAP: dict[str, LanguageConfig] = {
    ext: config for config in LANGUAGES.values() for ext in config.extensions
}

SOURCE_EXTENSIONS: frozenset[str] = frozenset(_EXTENSION_MAP)


def language_for_extension(extension: str) -> Optional[LanguageConfig]:
    """Return the language config for an extension such as ``".tsx"``."""
    return _EXTENSION_MAP.get(extension.lower())


def language_for_path(path: str) -> Optional[LanguageConfig]:
    """Return the language config for a file path, or None if unsupported."""
    return language_for_extension(PurePosixPath(path).suffix)
