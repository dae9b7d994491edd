"""Line normalisation for text-based analyzers.

Comments are removed without shifting line numbers, whitespace runs are
collapsed, and blank results are dropped. Every surviving line keeps its
original 1-based line number through a parallel list.
"""

from __future__ import annotations

import re

from .languages import LanguageConfig

_LINE_SPLIT = re.compile(r"\r?\n")
_WHITESPACE_RUN = re.compile(r"\s+")


def split_lines(content: str) -> list[str]:
    """Split on LF or CRLF. A trailing newline yields a final empty entry."""
    return _LINE_SPLIT.split(content)


def _keep_newlines(match: re.Match) -> str:
    return "\n" * match.group(0).count("\n")


def strip_comments(content: str, language: LanguageConfig) -> str:
    """Remove comments, leaving the same number of lines behind."""
    for pattern, flags in language.comment_patterns:
        content = re.sub(pattern, _keep_newlines, content, flags=flags)
    return content


def normalize_content(content: str, language: LanguageConfig) -> tuple[list[str], list[int]]:
    """Produce the normalized line corpus for a file.

    Returns:
        (normalized_lines, line_numbers) of equal length, where
        line_numbers are strictly increasing 1-based original lines.
    """
    normalized_lines: list[str] = []
    line_numbers: list[int] = []

    for index, raw in enumerate(split_lines(strip_comments(content, language))):
        normalized = _WHITESPACE_RUN.sub(" ", raw).strip()
        if not normalized:
            continue
        normalized_lines.append(normalized)
        line_numbers.append(index + 1)

    return normalized_lines, line_numbers
