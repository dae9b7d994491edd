"""Verification Engine: compares signal-engine output before and after a patch."""

from __future__ import annotations

from ..insights.models import EvidenceItem
from ..signals.functions import max_long_function_in_range
from ..signals.models import AnalysisResult
from .models import VerificationResult


def verify_long_function_fix(
    before: AnalysisResult, after: AnalysisResult, evidence: EvidenceItem, threshold: int
) -> VerificationResult:
    """Succeeds when the longest long function in the evidence range got shorter.

    No long function in range afterwards counts as success. No long function
    in range beforehand is a signal/evidence mismatch and fails.
    """
    before_max = max_long_function_in_range(
        before.signals.long_functions, evidence.file, evidence.start_line, evidence.end_line
    )
    after_max = max_long_function_in_range(
        after.signals.long_functions, evidence.file, evidence.start_line, evidence.end_line
    )

    if before_max == 0:
        return VerificationResult(ok=False, message="No long function found in evidence range.")

    after_label = f"< {threshold}" if after_max == 0 else str(after_max)
    details = f"longFunctionLength: {before_max} -> {after_label}"
    if after_max == 0 or after_max < before_max:
        return VerificationResult(ok=True, message="Long function length reduced.", details=details)
    return VerificationResult(
        ok=False, message="Long function length did not improve.", details=details
    )


def verify_duplicate_fix(before: AnalysisResult, after: AnalysisResult) -> VerificationResult:
    """Succeeds iff the total duplicate-block count strictly decreases."""
    before_count = before.metrics.duplicate_blocks
    after_count = after.metrics.duplicate_blocks
    details = f"duplicateBlocks: {before_count} -> {after_count}"
    if after_count < before_count:
        return VerificationResult(ok=True, message="Duplicate blocks reduced.", details=details)
    return VerificationResult(ok=False, message="Duplicate blocks did not improve.", details=details)
