"""Evidence Guard: structural validation of issue evidence.

Rules are checked in order, item by item, and the first failure wins:

    1. no evidence items                      -> "no evidence items provided"
    2. item without a non-empty file path     -> "evidence item missing file path"
    3. item without start/end line            -> "evidence item missing line range"
       non-positive or non-integer line,
       or end before start                    -> "evidence item line range is invalid"
    4. item with no metrics                   -> "evidence item missing metrics"
    5. metric with an empty type, or a value
       that is neither a finite non-negative
       number nor a non-empty string          -> "evidence item has invalid metric"

Nothing downstream may act on an issue this module did not mark complete.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from .models import EvidenceItem, GuardedIssue, Issue

REASON_NO_EVIDENCE = "no evidence items provided"
REASON_MISSING_FILE = "evidence item missing file path"
REASON_MISSING_RANGE = "evidence item missing line range"
REASON_INVALID_RANGE = "evidence item line range is invalid"
REASON_MISSING_METRICS = "evidence item missing metrics"
REASON_INVALID_METRIC = "evidence item has invalid metric"


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_valid_line(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_valid_metric_value(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value) and value >= 0
    return _is_non_empty_string(value)


def _item_problem(item: EvidenceItem) -> Optional[str]:
    if not _is_non_empty_string(item.file):
        return REASON_MISSING_FILE
    if item.start_line is None or item.end_line is None:
        return REASON_MISSING_RANGE
    if not (_is_valid_line(item.start_line) and _is_valid_line(item.end_line)):
        return REASON_INVALID_RANGE
    if item.end_line < item.start_line:
        return REASON_INVALID_RANGE
    if not item.metrics:
        return REASON_MISSING_METRICS
    for metric in item.metrics:
        if not _is_non_empty_string(metric.type) or not _is_valid_metric_value(metric.value):
            return REASON_INVALID_METRIC
    return None


def missing_evidence_reason(issue: Issue) -> Optional[str]:
    """Return the first rule violation for ``issue``, or None if it is complete."""
    if not issue.evidence:
        return REASON_NO_EVIDENCE
    for item in issue.evidence:
        problem = _item_problem(item)
        if problem is not None:
            return problem
    return None


def guard_issue(issue: Issue) -> GuardedIssue:
    reason = missing_evidence_reason(issue)
    return GuardedIssue(
        type=issue.type,
        signal=issue.signal,
        confidence=issue.confidence,
        evidence=list(issue.evidence),
        evidence_complete=reason is None,
        missing_evidence_reason=reason,
    )


def guard_issues(issues: list[Issue]) -> list[GuardedIssue]:
    """Stamp every issue; order is preserved."""
    return [guard_issue(issue) for issue in issues]
