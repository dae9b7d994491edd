"""Tree-sitter parser wrapper.

Provides a unified interface for tree-sitter parsing across Python and
the JavaScript/TypeScript family.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes, "typescript")
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import tree_sitter
import tree_sitter_javascript
import tree_sitter_python
import tree_sitter_typescript

logger = logging.getLogger(__name__)

# language name -> grammar factory returning the raw language pointer
_GRAMMARS: dict[str, Callable[[], Any]] = {
    "python": tree_sitter_python.language,
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


def get_supported_languages() -> list[str]:
    """Get list of languages with installed grammars."""
    return list(_GRAMMARS.keys())


class TreeSitterParser:
    """Wrapper around tree-sitter for multi-language parsing."""

    def __init__(self) -> None:
        self._parsers: dict[str, tree_sitter.Parser] = {}

        for lang_name, lang_fn in _GRAMMARS.items():
            lang_obj = tree_sitter.Language(lang_fn())
            self._parsers[lang_name] = tree_sitter.Parser(lang_obj)

    def parse(self, code: bytes, language: str) -> tree_sitter.Tree | None:
        """Parse code and return syntax tree.

        Args:
            code: Source code as bytes
            language: Language name (e.g., "typescript")

        Returns:
            Tree object, or None if the language is not supported
        """
        parser = self._parsers.get(language)
        if parser is None:
            return None
        return parser.parse(code)

    def is_language_supported(self, language: str) -> bool:
        """Check if a language is supported."""
        return language in self._parsers
