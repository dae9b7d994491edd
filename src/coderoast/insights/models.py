"""Data models for aggregated, evidence-bearing issues."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union

Confidence = Literal["low", "medium", "high"]

# Metric types carried by evidence items
METRIC_LOC = "loc"
METRIC_COUNT = "count"
METRIC_HASH = "hash"

# Signal identifiers used on issues
SIGNAL_LONG_FUNCTIONS = "longFunctions"
SIGNAL_DUPLICATE_BLOCKS = "duplicateBlocks"
SIGNAL_CIRCULAR_DEPENDENCIES = "circularDependencies"
SIGNAL_TEST_PRESENCE = "testPresence"


@dataclass
class EvidenceMetric:
    type: str  # "loc", "count", "hash"
    value: Union[int, float, str]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "value": self.value}


@dataclass
class EvidenceItem:
    """A file region cited as evidence (1-based, inclusive lines)."""

    file: str
    start_line: int
    end_line: int
    metrics: list[EvidenceMetric] = field(default_factory=list)

    def metric(self, metric_type: str) -> Optional[Union[int, float, str]]:
        for m in self.metrics:
            if m.type == metric_type:
                return m.value
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "startLine": self.start_line,
            "endLine": self.end_line,
            "metrics": [m.to_dict() for m in self.metrics],
        }


@dataclass
class Issue:
    type: str  # "maintainability", "duplication", "architecture", "testing"
    signal: str
    confidence: Confidence
    evidence: list[EvidenceItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "signal": self.signal,
            "confidence": self.confidence,
            "evidence": [item.to_dict() for item in self.evidence],
        }


@dataclass
class GuardedIssue(Issue):
    """An Issue stamped by the Evidence Guard.

    ``missing_evidence_reason`` is set exactly when ``evidence_complete`` is False.
    """

    evidence_complete: bool = False
    missing_evidence_reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["evidenceComplete"] = self.evidence_complete
        if self.missing_evidence_reason is not None:
            data["missingEvidenceReason"] = self.missing_evidence_reason
        return data
