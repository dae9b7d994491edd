"""Patch Applicator: applies FilePatches to in-memory content.

Nothing here touches disk. The result is an overlay (path -> new content)
that the signal engine reads in place of the original files.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..exceptions import HunkContextMismatchError, HunkRangeError
from ..scanning.models import Overlay
from ..scanning.normalizer import split_lines
from .models import FilePatch

logger = logging.getLogger(__name__)


def apply_file_patch(content: str, patch: FilePatch) -> str:
    """Apply every hunk of ``patch`` to ``content`` in one pass.

    Hunks are interpreted in original-file coordinates and must appear in
    ascending, non-overlapping order. A hunk with no old lines inserts after
    line ``old_start``. Lines are joined with ``\\n``.

    Raises:
        HunkRangeError: Hunk starts outside the buffer, overlaps the previous
            hunk, or runs past the end of the file
        HunkContextMismatchError: A context or removed line differs from the
            buffer (trailing whitespace ignored)
    """
    path = patch.file_path
    lines = split_lines(content)
    output: list[str] = []
    cursor = 0

    for hunk in patch.hunks:
        start = hunk.old_start - 1 if hunk.old_lines > 0 else hunk.old_start
        if start < 0 or start > len(lines):
            raise HunkRangeError(
                f"Hunk start {hunk.old_start} is out of range for {path} ({len(lines)} lines)",
                path,
                hunk.old_start,
            )
        if start < cursor:
            raise HunkRangeError(
                f"Hunk at line {hunk.old_start} overlaps the previous hunk in {path}",
                path,
                hunk.old_start,
            )

        output.extend(lines[cursor:start])
        cursor = start

        for line in hunk.lines:
            if line.kind == "add":
                output.append(line.text)
                continue

            if cursor >= len(lines):
                raise HunkRangeError(
                    f"Hunk at line {hunk.old_start} runs past the end of {path}",
                    path,
                    cursor + 1,
                )
            if lines[cursor].rstrip() != line.text.rstrip():
                raise HunkContextMismatchError(
                    f"Line {cursor + 1} of {path} does not match the patch",
                    path,
                    cursor + 1,
                )
            if line.kind == "context":
                output.append(lines[cursor])
            cursor += 1

    output.extend(lines[cursor:])
    return "\n".join(output)


def build_overlay(read: Callable[[str], str], patches: list[FilePatch]) -> Overlay:
    """Apply patches in order, starting each file from ``read(path)``.

    Several FilePatches for the same path apply against the evolving buffer.
    """
    overlay: Overlay = {}
    for patch in patches:
        base = overlay[patch.file_path] if patch.file_path in overlay else read(patch.file_path)
        overlay[patch.file_path] = apply_file_patch(base, patch)
        logger.debug(f"Applied {len(patch.hunks)} hunks to {patch.file_path}")
    return overlay
