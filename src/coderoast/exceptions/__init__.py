"""Exception hierarchy for coderoast."""

from .analysis import AnalysisError, FileAccessError, ParsingError, UnsupportedLanguageError
from .base import CoderoastError
from .config import ConfigurationError, InvalidConfigError
from .patch import (
    DiffParseError,
    EmptyPatchError,
    HunkBeforeFileHeaderError,
    HunkContextMismatchError,
    HunkRangeError,
    MalformedDiffHeaderError,
    MalformedHunkHeaderError,
    NoActualChangesError,
    OutOfScopeEditError,
    PatchError,
    PatchGenerationError,
)

__all__ = [
    "CoderoastError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "UnsupportedLanguageError",
    "ConfigurationError",
    "InvalidConfigError",
    "PatchError",
    "PatchGenerationError",
    "DiffParseError",
    "MalformedDiffHeaderError",
    "MalformedHunkHeaderError",
    "HunkBeforeFileHeaderError",
    "EmptyPatchError",
    "NoActualChangesError",
    "OutOfScopeEditError",
    "HunkRangeError",
    "HunkContextMismatchError",
]
