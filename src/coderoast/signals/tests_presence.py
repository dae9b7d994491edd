"""Test-file presence detection."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import PurePosixPath

from ..scanning.languages import language_for_path
from .models import TestPresence

TEST_DIRECTORIES = frozenset({"__tests__", "test", "tests"})


def is_test_path(path: str) -> bool:
    """True for files under a test directory or named like a test file."""
    parts = PurePosixPath(path).parts
    if any(part in TEST_DIRECTORIES for part in parts[:-1]):
        return True

    language = language_for_path(path)
    if language is None:
        return False
    return re.search(language.test_file_pattern, parts[-1]) is not None


def detect_test_presence(paths: Iterable[str]) -> TestPresence:
    test_files = sorted(path for path in paths if is_test_path(path))
    return TestPresence(has_tests=bool(test_files), test_files=test_files)
