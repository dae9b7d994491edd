"""Unified diff parser for untrusted, generated patch text.

Tolerated noise: markdown code fences, ``diff --git`` / ``index`` / mode
lines, and free-form narrative around the diff. Anything outside a hunk that
is not a ``---``/``+++`` pair or an ``@@`` header is ignored.

Inside a hunk the header counts decide how many old/new lines are still
expected. While lines are expected, a blank line is an empty context line.
A ``--- `` line followed by a ``+++ `` line always starts the next file,
even when the previous hunk overstated its counts; without a ``+++ ``
line it is a removed line (of text starting with ``-- ``).
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from ..exceptions import (
    EmptyPatchError,
    HunkBeforeFileHeaderError,
    MalformedDiffHeaderError,
    MalformedHunkHeaderError,
    NoActualChangesError,
)
from ..scanning.normalizer import split_lines
from .models import FilePatch, Hunk, HunkLine

logger = logging.getLogger(__name__)

DEV_NULL = "/dev/null"

_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$")


def normalize_diff_path(value: str) -> str:
    """Strip whitespace, a trailing tab timestamp and the a/ or b/ prefix."""
    cleaned = value.split("\t", 1)[0].strip()
    if cleaned == DEV_NULL:
        return cleaned
    if cleaned.startswith(("a/", "b/")):
        return cleaned[2:]
    return cleaned


def parse_hunk_header(line: str, line_number: Optional[int] = None) -> Hunk:
    """Parse ``@@ -a[,b] +c[,d] @@ section``.

    Raises:
        MalformedHunkHeaderError: If the line does not match
    """
    match = _HUNK_HEADER_RE.match(line.rstrip())
    if match is None:
        raise MalformedHunkHeaderError(line, line_number)

    old_start, old_lines, new_start, new_lines, section = match.groups()
    return Hunk(
        old_start=int(old_start),
        old_lines=int(old_lines) if old_lines is not None else 1,
        new_start=int(new_start),
        new_lines=int(new_lines) if new_lines is not None else 1,
        section=section.strip(),
    )


class _HunkReader:
    """Tracks how many old/new lines the open hunk still expects."""

    def __init__(self, hunk: Hunk) -> None:
        self.hunk = hunk
        self.old_remaining = hunk.old_lines
        self.new_remaining = hunk.new_lines

    @property
    def expecting(self) -> bool:
        return self.old_remaining > 0 or self.new_remaining > 0

    def add(self, kind: str, text: str) -> None:
        self.hunk.lines.append(HunkLine(kind, text))  # type: ignore[arg-type]
        if kind in ("context", "remove"):
            self.old_remaining -= 1
        if kind in ("context", "add"):
            self.new_remaining -= 1


def _is_file_header(lines: list[str], index: int) -> bool:
    return lines[index].startswith("--- ") and _find_new_header(lines, index + 1) is not None


def _find_new_header(lines: list[str], index: int) -> Optional[int]:
    """Index of the ``+++ `` line completing a ``--- `` header, skipping blank/index lines."""
    while index < len(lines):
        line = lines[index]
        if line.startswith("+++ "):
            return index
        if line.strip() and not line.startswith("index "):
            return None
        index += 1
    return None


def parse_unified_diff(text: str) -> list[FilePatch]:
    """Parse generated diff text into FilePatches.

    Raises:
        HunkBeforeFileHeaderError: ``@@`` before any ``---``/``+++`` pair
        MalformedHunkHeaderError: ``@@`` line with the wrong shape
        MalformedDiffHeaderError: ``---`` not followed by ``+++``
        EmptyPatchError: No file sections at all
        NoActualChangesError: No added or removed lines anywhere
    """
    lines = split_lines(text)
    while lines and not lines[-1].strip():
        lines.pop()
    patches: list[FilePatch] = []
    current: Optional[FilePatch] = None
    reader: Optional[_HunkReader] = None

    i = 0
    while i < len(lines):
        line = lines[i]
        line_number = i + 1

        if reader is not None:
            consumed = True
            if line.startswith("\\"):
                pass
            elif line.startswith("--- ") and _is_file_header(lines, i):
                consumed = False
            elif line.startswith("@@"):
                consumed = False
            elif line.startswith(" "):
                reader.add("context", line[1:])
            elif line.startswith("-"):
                reader.add("remove", line[1:])
            elif line.startswith("+"):
                reader.add("add", line[1:])
            elif line == "" and reader.expecting:
                reader.add("context", "")
            else:
                consumed = False

            if consumed:
                i += 1
                continue
            reader = None

        if line.startswith("--- "):
            new_index = _find_new_header(lines, i + 1)
            if new_index is None:
                raise MalformedDiffHeaderError(line_number)
            old_path = normalize_diff_path(line[4:])
            new_path = normalize_diff_path(lines[new_index][4:])
            current = FilePatch(
                file_path=new_path if new_path != DEV_NULL else old_path,
                old_path=old_path,
                new_path=new_path,
            )
            patches.append(current)
            i = new_index + 1
            continue

        if line.startswith("@@"):
            if current is None:
                raise HunkBeforeFileHeaderError(line_number)
            hunk = parse_hunk_header(line, line_number)
            current.hunks.append(hunk)
            reader = _HunkReader(hunk)

        i += 1

    if not patches:
        raise EmptyPatchError()
    if not any(hunk.has_changes for patch in patches for hunk in patch.hunks):
        raise NoActualChangesError()

    logger.debug(
        f"Parsed diff: {len(patches)} files, {sum(len(p.hunks) for p in patches)} hunks"
    )
    return patches
