"""Evidence-Scope Validator.

A patch may only touch lines already cited as evidence for the issue it
claims to fix. Walking each hunk with an old-file cursor that starts at
``old_start``:

    context line  -> cursor advances, no check
    removed line  -> cursor must be inside an allowed range, then advances
    added line    -> cursor (the insertion point) must be inside an allowed
                     range; cursor does not advance
"""

from __future__ import annotations

from collections.abc import Iterable

from ..exceptions import OutOfScopeEditError
from ..insights.models import EvidenceItem
from .models import FilePatch

LineRange = tuple[int, int]


def allowed_ranges(evidence: Iterable[EvidenceItem]) -> dict[str, list[LineRange]]:
    """Group evidence line ranges by file, preserving first-seen file order."""
    ranges: dict[str, list[LineRange]] = {}
    for item in evidence:
        ranges.setdefault(item.file, []).append((item.start_line, item.end_line))
    return ranges


def line_in_ranges(line: int, ranges: list[LineRange]) -> bool:
    return any(start <= line <= end for start, end in ranges)


def validate_scope(patches: list[FilePatch], allowed: dict[str, list[LineRange]]) -> None:
    """Reject the whole patch on the first out-of-scope edit.

    Raises:
        OutOfScopeEditError: Naming the offending file and line
    """
    for patch in patches:
        ranges = allowed.get(patch.file_path)
        if not ranges:
            raise OutOfScopeEditError(
                f"Patch touches file outside evidence: {patch.file_path}", patch.file_path
            )

        for hunk in patch.hunks:
            cursor = hunk.old_start
            for line in hunk.lines:
                if line.kind == "context":
                    cursor += 1
                elif line.kind == "remove":
                    if not line_in_ranges(cursor, ranges):
                        raise OutOfScopeEditError(
                            f"Patch removes line {cursor} outside evidence in {patch.file_path}",
                            patch.file_path,
                            cursor,
                        )
                    cursor += 1
                elif not line_in_ranges(cursor, ranges):
                    raise OutOfScopeEditError(
                        f"Patch adds line outside evidence near {cursor} in {patch.file_path}",
                        patch.file_path,
                        cursor,
                    )
