"""Scanning layer: file records, normalisation, syntax extraction, indexing."""

from .discovery import discover_files
from .indexer import SourceIndexer, to_absolute_path
from .languages import LANGUAGES, SOURCE_EXTENSIONS, LanguageConfig, language_for_path
from .models import FileRecord, FunctionSpan, ImportRef, IndexedFile, NormalizedFile, Overlay
from .normalizer import normalize_content, split_lines

__all__ = [
    "discover_files",
    "SourceIndexer",
    "to_absolute_path",
    "LANGUAGES",
    "SOURCE_EXTENSIONS",
    "LanguageConfig",
    "language_for_path",
    "FileRecord",
    "FunctionSpan",
    "ImportRef",
    "IndexedFile",
    "NormalizedFile",
    "Overlay",
    "normalize_content",
    "split_lines",
]
