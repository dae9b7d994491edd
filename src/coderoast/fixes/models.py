"""Data models for the evidence-locked patch pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from ..signals.models import AnalysisMetrics

HunkLineKind = Literal["context", "add", "remove"]


@dataclass(frozen=True)
class HunkLine:
    kind: HunkLineKind
    text: str  # without the leading marker


@dataclass
class Hunk:
    """One ``@@ -a,b +c,d @@`` section. Counts default to 1 when omitted."""

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: list[HunkLine] = field(default_factory=list)
    section: str = ""

    @property
    def has_changes(self) -> bool:
        return any(line.kind != "context" for line in self.lines)


@dataclass
class FilePatch:
    """All hunks for one file.

    ``file_path`` is the new path, or the old path when the new one is
    ``/dev/null`` (deletion).
    """

    file_path: str
    old_path: str
    new_path: str
    hunks: list[Hunk] = field(default_factory=list)


@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    message: str
    details: Optional[str] = None


@dataclass
class FixSuggestion:
    """Outcome of one fix attempt; rejected attempts carry ``verified=False``."""

    issue_id: int
    issue_type: str
    signal: str
    files: list[str]
    patch: str
    verified: bool
    message: str
    details: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "issueId": self.issue_id,
            "issueType": self.issue_type,
            "signal": self.signal,
            "files": list(self.files),
            "patch": self.patch,
            "verified": self.verified,
            "verificationMessage": self.message,
        }
        if self.details is not None:
            data["verificationDetails"] = self.details
        return data


@dataclass
class FixPreviewSummary:
    """Before/after metrics for the best verified suggestion."""

    issue_id: int
    before: AnalysisMetrics
    after: AnalysisMetrics

    @property
    def delta(self) -> dict[str, float]:
        return {
            "maxFunctionLength": self.after.max_function_length - self.before.max_function_length,
            "avgFunctionLength": round(
                self.after.avg_function_length - self.before.avg_function_length, 2
            ),
            "duplicateBlocks": self.after.duplicate_blocks - self.before.duplicate_blocks,
            "totalFunctions": self.after.total_functions - self.before.total_functions,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "issueId": self.issue_id,
            "before": self.before.to_dict(),
            "after": self.after.to_dict(),
            "delta": self.delta,
        }


@dataclass
class FixResult:
    suggestions: list[FixSuggestion] = field(default_factory=list)
    preview: Optional[FixPreviewSummary] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"suggestions": [s.to_dict() for s in self.suggestions]}
        if self.preview is not None:
            data["previewSummary"] = self.preview.to_dict()
        return data
