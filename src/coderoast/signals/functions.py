"""Function-length signal."""

from __future__ import annotations

from ..scanning.models import FunctionSpan
from .models import AnalysisMetrics


def long_functions(spans: list[FunctionSpan], threshold: int) -> list[FunctionSpan]:
    """Spans whose inclusive length is at least ``threshold``, in input order."""
    return [span for span in spans if span.length >= threshold]


def function_metrics(spans: list[FunctionSpan]) -> AnalysisMetrics:
    """Max length, mean length (2 decimals) and count across all spans.

    ``duplicate_blocks`` is left at zero for the caller to fill in.
    """
    total = len(spans)
    if total == 0:
        return AnalysisMetrics()

    lengths = [span.length for span in spans]
    return AnalysisMetrics(
        max_function_length=max(lengths),
        avg_function_length=round(sum(lengths) / total, 2),
        total_functions=total,
    )


def max_long_function_in_range(
    long_functions: list[FunctionSpan], file: str, start_line: int, end_line: int
) -> int:
    """Largest long-function length overlapping ``file:start_line-end_line``; 0 if none."""
    lengths = [
        fn.length
        for fn in long_functions
        if fn.file == file and fn.start_line <= end_line and fn.end_line >= start_line
    ]
    return max(lengths, default=0)
