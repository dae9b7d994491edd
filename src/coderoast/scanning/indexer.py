"""Source Indexer: reads, parses and normalizes candidate files.

Reads go through the overlay first so the same indexing code serves both the
on-disk pass and the verification pass over patched content.

Usage:
    indexer = SourceIndexer(root, overlay={"src/a.ts": patched_text})
    indexed = indexer.index_all(records)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..exceptions import FileAccessError, ParsingError, UnsupportedLanguageError
from .languages import language_for_extension
from .models import FileRecord, IndexedFile, NormalizedFile, Overlay
from .normalizer import normalize_content
from .syntax import SyntaxVisitor, build_visitors

logger = logging.getLogger(__name__)


def to_absolute_path(root: Path, relative_path: str) -> Path:
    """Join a posix-relative path onto the analysed root."""
    return root.joinpath(*relative_path.split("/"))


class SourceIndexer:
    """Turns FileRecords into IndexedFiles.

    Attributes:
        skipped: Paths that could not be read or parsed in the last run
    """

    def __init__(
        self,
        root: Path,
        overlay: Optional[Overlay] = None,
        visitors: Optional[dict[str, SyntaxVisitor]] = None,
    ) -> None:
        self.root = Path(root)
        self.overlay: Overlay = dict(overlay or {})
        self._visitors = visitors if visitors is not None else build_visitors()
        self.skipped: list[str] = []

    def read_text(self, relative_path: str) -> str:
        """Return overlay content for the path if present, else disk content.

        Raises:
            FileAccessError: If the file cannot be read from disk
        """
        if relative_path in self.overlay:
            return self.overlay[relative_path]

        absolute = to_absolute_path(self.root, relative_path)
        try:
            return absolute.read_bytes().decode("utf-8", errors="replace")
        except OSError as e:
            raise FileAccessError(absolute, str(e))

    def index_file(self, record: FileRecord) -> IndexedFile:
        """Index a single file.

        Raises:
            FileAccessError: If the file cannot be read
            UnsupportedLanguageError: If no language handles the extension
            ParsingError: If the syntax visitor cannot parse the content
        """
        language = language_for_extension(record.extension)
        if language is None:
            raise UnsupportedLanguageError(record.extension)

        content = self.read_text(record.path)
        syntax = self._visitors[language.name].visit(content, record.path)
        normalized_lines, line_numbers = normalize_content(content, language)

        return IndexedFile(
            record=record,
            normalized=NormalizedFile(
                path=record.path,
                extension=record.extension,
                normalized_lines=normalized_lines,
                line_numbers=line_numbers,
                imports=syntax.imports,
            ),
            functions=syntax.functions,
        )

    def index_all(self, records: list[FileRecord]) -> list[IndexedFile]:
        """Index every record in path order, skipping unreadable or unparsable files."""
        self.skipped = []
        indexed: list[IndexedFile] = []

        for record in sorted(records, key=lambda r: r.path):
            try:
                indexed.append(self.index_file(record))
            except FileAccessError as e:
                logger.warning(f"Skipping unreadable file {record.path}: {e.reason}")
                self.skipped.append(record.path)
            except ParsingError as e:
                logger.warning(f"Skipping unparsable file {record.path}: {e.reason}")
                self.skipped.append(record.path)
            except UnsupportedLanguageError:
                logger.debug(f"Skipping {record.path}: unsupported extension")
                self.skipped.append(record.path)

        return indexed
