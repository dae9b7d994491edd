"""Minimal file discovery.

Directory traversal proper (ignore files, language counting, scan deadlines)
lives outside this package; this walker only produces the FileRecords the
indexer needs when coderoast is driven on its own.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..config import AnalysisConfig
from ..exceptions import ConfigurationError
from .languages import SOURCE_EXTENSIONS
from .models import FileRecord

logger = logging.getLogger(__name__)


def discover_files(root: Path, config: AnalysisConfig) -> list[FileRecord]:
    """Collect supported source files under ``root``, sorted by path."""
    root = Path(root)
    if not root.is_dir():
        raise ConfigurationError(f"Not a directory: {root}")

    excluded = set(config.exclude_dirs)
    records: list[FileRecord] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            d
            for d in dirnames
            if d not in excluded and (config.allow_hidden_files or not d.startswith("."))
        )
        for filename in filenames:
            if not config.allow_hidden_files and filename.startswith("."):
                continue
            extension = os.path.splitext(filename)[1].lower()
            if extension not in SOURCE_EXTENSIONS:
                continue

            absolute = Path(dirpath) / filename
            try:
                size = absolute.stat().st_size
            except OSError as e:
                logger.warning(f"Cannot stat {absolute}: {e}")
                continue
            if size > config.max_file_size_bytes:
                logger.debug(f"Skipping {absolute}: {size} bytes exceeds limit")
                continue

            relative = absolute.relative_to(root).as_posix()
            records.append(FileRecord(path=relative, extension=extension))

    return sorted(records, key=lambda r: r.path)
