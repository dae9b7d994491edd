"""Signal Aggregator: ranks and caps analyzer output into evidence-bearing issues.

Ordering is deterministic for unchanged input:
    longFunctions        longest first, then path, then start line
    duplicateBlocks      most occurrences first, then longest, then first location
    circularDependencies analyzer order (sorted file order)
"""

from __future__ import annotations

import logging

from ..signals.models import AnalysisResult, DuplicateBlock
from .models import (
    METRIC_COUNT,
    METRIC_HASH,
    METRIC_LOC,
    SIGNAL_CIRCULAR_DEPENDENCIES,
    SIGNAL_DUPLICATE_BLOCKS,
    SIGNAL_LONG_FUNCTIONS,
    SIGNAL_TEST_PRESENCE,
    EvidenceItem,
    EvidenceMetric,
    Issue,
)

logger = logging.getLogger(__name__)


def aggregate_issues(analysis: AnalysisResult, max_evidence_items: int = 5) -> list[Issue]:
    """Turn one analysis result into issues with at most ``max_evidence_items`` each."""
    signals = analysis.signals
    issues: list[Issue] = []

    if signals.long_functions:
        ranked = sorted(
            signals.long_functions, key=lambda fn: (-fn.length, fn.file, fn.start_line)
        )
        issues.append(
            Issue(
                type="maintainability",
                signal=SIGNAL_LONG_FUNCTIONS,
                confidence="medium",
                evidence=[
                    EvidenceItem(
                        file=fn.file,
                        start_line=fn.start_line,
                        end_line=fn.end_line,
                        metrics=[EvidenceMetric(METRIC_LOC, fn.length)],
                    )
                    for fn in ranked[:max_evidence_items]
                ],
            )
        )

    if signals.duplicate_blocks:
        issues.append(
            Issue(
                type="duplication",
                signal=SIGNAL_DUPLICATE_BLOCKS,
                confidence="high",
                evidence=_duplicate_evidence(signals.duplicate_blocks, max_evidence_items),
            )
        )

    if signals.circular_dependencies:
        evidence: list[EvidenceItem] = []
        for cycle in signals.circular_dependencies:
            count = [EvidenceMetric(METRIC_COUNT, 2)]
            evidence.append(
                EvidenceItem(cycle.from_file, cycle.from_start_line, cycle.from_end_line, count)
            )
            evidence.append(
                EvidenceItem(cycle.to_file, cycle.to_start_line, cycle.to_end_line, list(count))
            )
        issues.append(
            Issue(
                type="architecture",
                signal=SIGNAL_CIRCULAR_DEPENDENCIES,
                confidence="high",
                evidence=evidence[:max_evidence_items],
            )
        )

    if not signals.test_presence.has_tests:
        issues.append(
            Issue(type="testing", signal=SIGNAL_TEST_PRESENCE, confidence="medium", evidence=[])
        )

    logger.debug(f"Aggregated {len(issues)} issues")
    return issues


def _duplicate_evidence(blocks: list[DuplicateBlock], limit: int) -> list[EvidenceItem]:
    """One evidence item per occurrence, from the most repeated blocks down."""

    def rank(block: DuplicateBlock):
        first = block.occurrences[0]
        return (-len(block.occurrences), -block.length, first.file, first.start_line)

    evidence: list[EvidenceItem] = []
    for block in sorted(blocks, key=rank):
        for occurrence in block.occurrences:
            if len(evidence) >= limit:
                return evidence
            evidence.append(
                EvidenceItem(
                    file=occurrence.file,
                    start_line=occurrence.start_line,
                    end_line=occurrence.end_line,
                    metrics=[
                        EvidenceMetric(METRIC_LOC, block.length),
                        EvidenceMetric(METRIC_COUNT, len(block.occurrences)),
                        EvidenceMetric(METRIC_HASH, block.hash),
                    ],
                )
            )
    return evidence
