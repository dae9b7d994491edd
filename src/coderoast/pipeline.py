"""End-to-end wiring: discovery -> signal engine -> aggregator -> guard -> fixes.

Example:
    >>> from coderoast.config import load_config
    >>> from coderoast.pipeline import run_pipeline
    >>> result = run_pipeline(Path("."), load_config(enable_fixes=False))
    >>> [issue.signal for issue in result.report.issues]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .config import AnalysisConfig
from .fixes.generator import OpenAIPatchGenerator, PatchGenerator
from .fixes.models import FixResult
from .fixes.runner import FixRunner
from .insights.aggregator import aggregate_issues
from .insights.guard import guard_issues
from .insights.models import GuardedIssue
from .logging_config import get_logger
from .scanning.discovery import discover_files
from .scanning.models import FileRecord
from .signals.engine import SignalEngine
from .signals.models import AnalysisResult

logger = get_logger(__name__)


@dataclass
class AnalysisReport:
    """Analysis output for one root, before any fix attempt."""

    root: Path
    files: list[FileRecord]
    analysis: AnalysisResult
    issues: list[GuardedIssue] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = self.analysis.to_dict()
        data["root"] = str(self.root)
        data["files"] = len(self.files)
        data["issues"] = [issue.to_dict() for issue in self.issues]
        return data


@dataclass
class PipelineResult:
    report: AnalysisReport
    fixes: Optional[FixResult] = None

    def to_dict(self) -> dict[str, Any]:
        data = self.report.to_dict()
        if self.fixes is not None:
            data["fixes"] = self.fixes.to_dict()
        return data


def run_analysis(
    root: Path, config: AnalysisConfig, engine: Optional[SignalEngine] = None
) -> AnalysisReport:
    """Discover, analyze, aggregate and guard.

    Raises:
        ConfigurationError: If ``root`` is not a directory
    """
    root = Path(root).resolve()
    files = discover_files(root, config)
    logger.info(f"Discovered {len(files)} source files under {root}")

    engine = engine or SignalEngine(config)
    analysis = engine.analyze(root, files)
    issues = guard_issues(aggregate_issues(analysis, config.max_evidence_items))
    return AnalysisReport(root=root, files=files, analysis=analysis, issues=issues)


def run_pipeline(
    root: Path,
    config: AnalysisConfig,
    generator: Optional[PatchGenerator] = None,
) -> PipelineResult:
    """Run the analysis and, when enabled, the fix attempts.

    Without an injected ``generator`` the OpenAI-compatible client is built
    from ``config.generator``; if no API key is configured, fixes are skipped.
    """
    engine = SignalEngine(config)
    report = run_analysis(root, config, engine=engine)
    if not config.enable_fixes:
        return PipelineResult(report=report)

    if generator is None:
        if not config.generator.is_configured:
            logger.warning("Fixes requested but no generator API key is configured; skipping")
            return PipelineResult(report=report, fixes=FixResult())
        generator = OpenAIPatchGenerator(config.generator)

    runner = FixRunner(config, generator, engine=engine)
    fixes = runner.run(report.root, report.files, report.analysis, report.issues)
    return PipelineResult(report=report, fixes=fixes)
