"""Tests for the evidence-scope validator."""

import pytest

from coderoast.exceptions import OutOfScopeEditError
from coderoast.fixes.models import FilePatch, Hunk, HunkLine
from coderoast.fixes.scope import allowed_ranges, validate_scope
from coderoast.insights.models import EvidenceItem, EvidenceMetric


def patch(path, old_start, *lines):
    hunk = Hunk(old_start=old_start, old_lines=0, new_start=old_start, new_lines=0)
    hunk.lines = [HunkLine(kind, text) for kind, text in lines]
    return FilePatch(file_path=path, old_path=path, new_path=path, hunks=[hunk])


ALLOWED = {"a.ts": [(10, 20)], "b.ts": [(1, 3), (40, 45)]}


class TestAllowedRanges:
    def test_grouped_by_file(self):
        evidence = [
            EvidenceItem("a.ts", 1, 5, [EvidenceMetric("loc", 5)]),
            EvidenceItem("b.ts", 7, 9, [EvidenceMetric("loc", 3)]),
            EvidenceItem("a.ts", 30, 40, [EvidenceMetric("loc", 11)]),
        ]
        assert allowed_ranges(evidence) == {"a.ts": [(1, 5), (30, 40)], "b.ts": [(7, 9)]}


class TestValidateScope:
    """Cursor rules for context, removed and added lines."""

    def test_edits_inside_range_accepted(self):
        validate_scope(
            [patch("a.ts", 9, ("context", "x"), ("remove", "y"), ("add", "z"), ("remove", "w"))],
            ALLOWED,
        )

    def test_context_may_sit_outside_range(self):
        validate_scope(
            [patch("a.ts", 5, *[("context", "c")] * 5, ("remove", "first in range"))], ALLOWED
        )

    def test_removal_outside_range_rejected(self):
        with pytest.raises(OutOfScopeEditError, match="outside evidence") as info:
            validate_scope([patch("a.ts", 21, ("remove", "x"))], ALLOWED)
        assert info.value.line == 21
        assert info.value.file_path == "a.ts"
        assert "a.ts" in info.value.message

    def test_insertion_point_checked_for_adds(self):
        with pytest.raises(OutOfScopeEditError, match="outside evidence"):
            validate_scope([patch("a.ts", 18, *[("context", "c")] * 3, ("add", "x"))], ALLOWED)

    def test_adds_do_not_advance_cursor(self):
        validate_scope(
            [patch("a.ts", 20, ("add", "a"), ("add", "b"), ("add", "c"), ("remove", "d"))],
            ALLOWED,
        )

    def test_second_range_of_same_file(self):
        validate_scope([patch("b.ts", 44, ("remove", "x"), ("remove", "y"))], ALLOWED)
        with pytest.raises(OutOfScopeEditError):
            validate_scope([patch("b.ts", 45, ("remove", "x"), ("remove", "y"))], ALLOWED)

    def test_file_without_evidence_rejected(self):
        with pytest.raises(OutOfScopeEditError, match="c.ts"):
            validate_scope([patch("c.ts", 1, ("remove", "x"))], ALLOWED)

    def test_any_violation_rejects_whole_patch(self):
        good = patch("a.ts", 10, ("remove", "x"))
        bad = patch("b.ts", 10, ("remove", "x"))
        with pytest.raises(OutOfScopeEditError):
            validate_scope([good, bad], ALLOWED)
