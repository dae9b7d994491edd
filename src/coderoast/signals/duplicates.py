"""Duplicate-block detection over normalized line corpora.

Algorithm:
    1. Slide a fixed window of ``min_lines`` normalized lines over every file
       and group window starts by their exact joined text.
    2. For each group with at least ``min_occurrences`` starts, extend the
       block one line at a time (up to ``max_lines``) while every occurrence
       still has a next line equal to the first occurrence's next line.
    3. Re-group by the extended text; map each occurrence back to original
       line numbers and de-duplicate by (file, start, end).
    4. Drop groups that fall below ``min_occurrences`` and groups that are
       entirely covered by a larger reported block.

Grouping is by text equality. The sha1 fingerprint is only a label.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field

from ..scanning.models import NormalizedFile
from .models import DuplicateBlock, DuplicateOccurrence

logger = logging.getLogger(__name__)

FINGERPRINT_LENGTH = 12


def fingerprint(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


@dataclass
class _MergedBlock:
    length: int
    occurrences: list[DuplicateOccurrence] = field(default_factory=list)
    seen: set[tuple[str, int, int]] = field(default_factory=set)

    def add(self, occurrence: DuplicateOccurrence) -> None:
        key = (occurrence.file, occurrence.start_line, occurrence.end_line)
        if key in self.seen:
            return
        self.seen.add(key)
        self.occurrences.append(occurrence)


def detect_duplicate_blocks(
    files: list[NormalizedFile],
    min_lines: int = 10,
    max_lines: int = 50,
    min_occurrences: int = 2,
) -> list[DuplicateBlock]:
    """Find repeated runs of normalized lines across ``files``.

    Args:
        files: Normalized corpora, processed in the given order
        min_lines: Window size and minimum block length
        max_lines: Maximum block length after extension
        min_occurrences: Distinct occurrences needed to report a block

    Returns:
        Blocks in discovery order, each with at least ``min_occurrences``
        occurrences expressed in original line numbers.
    """
    by_path = {f.path: f for f in files}

    windows: dict[str, list[tuple[str, int]]] = {}
    for f in files:
        lines = f.normalized_lines
        for start in range(len(lines) - min_lines + 1):
            key = "\n".join(lines[start : start + min_lines])
            windows.setdefault(key, []).append((f.path, start))

    merged: dict[str, _MergedBlock] = {}
    for starts in windows.values():
        if len(starts) < min_occurrences:
            continue

        length = _extend(starts, by_path, min_lines, max_lines)
        base_path, base_start = starts[0]
        base_lines = by_path[base_path].normalized_lines
        text = "\n".join(base_lines[base_start : base_start + length])

        block = merged.setdefault(text, _MergedBlock(length=length))
        for path, start in starts:
            line_numbers = by_path[path].line_numbers
            block.add(
                DuplicateOccurrence(
                    file=path,
                    start_line=line_numbers[start],
                    end_line=line_numbers[start + length - 1],
                )
            )

    blocks = [
        DuplicateBlock(hash=fingerprint(text), length=m.length, occurrences=m.occurrences)
        for text, m in merged.items()
        if len(m.occurrences) >= min_occurrences
    ]
    reported = _drop_subsumed(blocks)
    logger.debug(f"Duplicate detection: {len(blocks)} candidate blocks, {len(reported)} reported")
    return reported


def _extend(
    starts: list[tuple[str, int]],
    by_path: dict[str, NormalizedFile],
    min_lines: int,
    max_lines: int,
) -> int:
    """Greedily grow the block while every occurrence agrees on the next line."""
    base_path, base_start = starts[0]
    base_lines = by_path[base_path].normalized_lines

    length = min_lines
    while length < max_lines:
        base_index = base_start + length
        if base_index >= len(base_lines):
            break
        expected = base_lines[base_index]

        for path, start in starts[1:]:
            lines = by_path[path].normalized_lines
            index = start + length
            if index >= len(lines) or lines[index] != expected:
                return length

        length += 1
    return length


def _contains(outer: DuplicateOccurrence, inner: DuplicateOccurrence) -> bool:
    return (
        outer.file == inner.file
        and outer.start_line <= inner.start_line
        and inner.end_line <= outer.end_line
    )


def _drop_subsumed(blocks: list[DuplicateBlock]) -> list[DuplicateBlock]:
    """Remove blocks whose occurrences all sit inside another block's occurrences."""
    kept: list[DuplicateBlock] = []
    for block in blocks:
        covered = any(
            other is not block
            and len(other.occurrences) >= len(block.occurrences)
            and all(
                any(_contains(outer, inner) for outer in other.occurrences)
                for inner in block.occurrences
            )
            for other in blocks
        )
        if not covered:
            kept.append(block)
    return kept
