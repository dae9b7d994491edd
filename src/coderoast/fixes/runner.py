"""Fix-It orchestration: generate, parse, scope-check, apply, re-analyze, verify.

Every failure inside one attempt becomes a rejected FixSuggestion; nothing
here aborts the run or leaks into another issue's attempt.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..config import AnalysisConfig
from ..exceptions import CoderoastError, DiffParseError
from ..insights.models import (
    SIGNAL_DUPLICATE_BLOCKS,
    SIGNAL_LONG_FUNCTIONS,
    EvidenceItem,
    GuardedIssue,
)
from ..scanning.indexer import SourceIndexer
from ..scanning.models import FileRecord
from ..signals.engine import SignalEngine
from ..signals.models import AnalysisResult
from .applicator import build_overlay
from .diff_parser import parse_unified_diff
from .generator import PatchGenerator
from .models import FilePatch, FixPreviewSummary, FixResult, FixSuggestion, VerificationResult
from .prompts import build_fix_prompt, build_retry_prompt, snippet_for
from .scope import allowed_ranges, validate_scope
from .verifier import verify_duplicate_fix, verify_long_function_fix

logger = logging.getLogger(__name__)

FIXABLE_SIGNALS = frozenset({SIGNAL_LONG_FUNCTIONS, SIGNAL_DUPLICATE_BLOCKS})

# first request plus one stricter retry after an unparseable diff
MAX_GENERATION_ATTEMPTS = 2


def select_evidence(issue: GuardedIssue) -> list[EvidenceItem]:
    """Evidence items shown to the generator for one attempt.

    Long functions use the first (longest) item. Duplicates prefer two
    occurrences in the same file, else the first two items.
    """
    if issue.signal == SIGNAL_LONG_FUNCTIONS:
        return issue.evidence[:1]

    by_file: dict[str, list[EvidenceItem]] = {}
    for item in issue.evidence:
        by_file.setdefault(item.file, []).append(item)
    for items in by_file.values():
        if len(items) >= 2:
            return items[:2]
    return issue.evidence[:2]


def fix_candidates(issues: list[GuardedIssue], max_fixes: int) -> list[GuardedIssue]:
    """Complete, fixable issues in input order, capped at ``max_fixes``."""
    fixable = [i for i in issues if i.evidence_complete and i.signal in FIXABLE_SIGNALS]
    return fixable[:max_fixes]


class FixRunner:
    """Runs fix attempts sequentially for the candidate issues.

    Usage:
        runner = FixRunner(config, generator)
        result = runner.run(root, records, analysis, guarded_issues)
    """

    def __init__(
        self,
        config: AnalysisConfig,
        generator: PatchGenerator,
        engine: Optional[SignalEngine] = None,
    ) -> None:
        self.config = config
        self.generator = generator
        self.engine = engine or SignalEngine(config)

    def run(
        self,
        root: Path,
        files: list[FileRecord],
        analysis: AnalysisResult,
        issues: list[GuardedIssue],
    ) -> FixResult:
        result = FixResult()
        for index, issue in enumerate(fix_candidates(issues, self.config.max_fixes)):
            issue_id = index + 1
            suggestion, after = self.attempt(issue_id, issue, root, files, analysis)
            result.suggestions.append(suggestion)
            if suggestion.verified and after is not None and result.preview is None:
                result.preview = FixPreviewSummary(
                    issue_id=issue_id, before=analysis.metrics, after=after.metrics
                )
            logger.info(
                f"Fix {issue_id} ({issue.signal}): "
                f"{'verified' if suggestion.verified else 'rejected'} - {suggestion.message}"
            )
        return result

    def attempt(
        self,
        issue_id: int,
        issue: GuardedIssue,
        root: Path,
        files: list[FileRecord],
        analysis: AnalysisResult,
    ) -> tuple[FixSuggestion, Optional[AnalysisResult]]:
        """One fix attempt. Returns the suggestion and, if it got that far, the re-analysis."""
        allowed = allowed_ranges(issue.evidence)
        evidence = select_evidence(issue)
        reader = SourceIndexer(root, visitors={})
        patch_text = ""

        def rejected(message: str) -> FixSuggestion:
            return FixSuggestion(
                issue_id=issue_id,
                issue_type=issue.type,
                signal=issue.signal,
                files=list(allowed),
                patch=patch_text.strip(),
                verified=False,
                message=message,
            )

        try:
            snippets = [snippet_for(reader.read_text(item.file), item) for item in evidence]
            prompt = build_fix_prompt(issue, snippets)

            patches: list[FilePatch] = []
            request = prompt
            for attempt in range(MAX_GENERATION_ATTEMPTS):
                patch_text = self.generator.generate(request)
                try:
                    patches = parse_unified_diff(patch_text)
                    break
                except DiffParseError as e:
                    if attempt + 1 >= MAX_GENERATION_ATTEMPTS:
                        raise
                    logger.info(f"Fix {issue_id}: invalid diff ({e.message}), retrying")
                    request = build_retry_prompt(prompt, e.message)

            validate_scope(patches, allowed)
            overlay = build_overlay(reader.read_text, patches)
            after = self.engine.analyze(root, files, overlay=overlay)
        except CoderoastError as e:
            logger.debug(f"Fix {issue_id} rejected: {e}")
            return rejected(e.message), None

        verification = self._verify(issue, evidence, analysis, after)
        return (
            FixSuggestion(
                issue_id=issue_id,
                issue_type=issue.type,
                signal=issue.signal,
                files=list(allowed),
                patch=patch_text.strip(),
                verified=verification.ok,
                message=verification.message,
                details=verification.details,
            ),
            after,
        )

    def _verify(
        self,
        issue: GuardedIssue,
        evidence: list[EvidenceItem],
        before: AnalysisResult,
        after: AnalysisResult,
    ) -> VerificationResult:
        if issue.signal == SIGNAL_LONG_FUNCTIONS:
            return verify_long_function_fix(
                before, after, evidence[0], self.config.thresholds.long_function_threshold
            )
        return verify_duplicate_fix(before, after)
