"""Issue aggregation and the Evidence Guard."""

from .aggregator import aggregate_issues
from .guard import guard_issue, guard_issues, missing_evidence_reason
from .models import (
    SIGNAL_CIRCULAR_DEPENDENCIES,
    SIGNAL_DUPLICATE_BLOCKS,
    SIGNAL_LONG_FUNCTIONS,
    SIGNAL_TEST_PRESENCE,
    EvidenceItem,
    EvidenceMetric,
    GuardedIssue,
    Issue,
)

__all__ = [
    "aggregate_issues",
    "guard_issue",
    "guard_issues",
    "missing_evidence_reason",
    "SIGNAL_CIRCULAR_DEPENDENCIES",
    "SIGNAL_DUPLICATE_BLOCKS",
    "SIGNAL_LONG_FUNCTIONS",
    "SIGNAL_TEST_PRESENCE",
    "EvidenceItem",
    "EvidenceMetric",
    "GuardedIssue",
    "Issue",
]
