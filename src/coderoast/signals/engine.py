"""Signal Engine: indexes a file set and computes every signal.

The same engine runs over the on-disk tree and over patched overlays, so
verification compares like with like.

Usage:
    engine = SignalEngine(config)
    result = engine.analyze(root, records)
    after = engine.analyze(root, records, overlay={"src/a.ts": patched})
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..config import AnalysisConfig
from ..scanning.indexer import SourceIndexer
from ..scanning.models import FileRecord, FunctionSpan, Overlay
from ..scanning.syntax import SyntaxVisitor, build_visitors
from .cycles import build_dependency_graph, find_reciprocal_imports, summarize_dependencies
from .duplicates import detect_duplicate_blocks
from .functions import function_metrics, long_functions
from .models import AnalysisResult, AnalysisSignals
from .tests_presence import detect_test_presence

logger = logging.getLogger(__name__)


class SignalEngine:
    """Computes metrics and signals for a set of FileRecords."""

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        visitors: Optional[dict[str, SyntaxVisitor]] = None,
    ) -> None:
        self.config = config or AnalysisConfig()
        self._visitors = visitors if visitors is not None else build_visitors()

    def analyze(
        self, root: Path, files: list[FileRecord], overlay: Optional[Overlay] = None
    ) -> AnalysisResult:
        """Run one full analysis pass.

        Args:
            root: Directory the record paths are relative to
            files: Candidate files; order does not matter
            overlay: Replacement contents that take precedence over disk

        Returns:
            AnalysisResult with metrics, signals and a dependency summary
        """
        thresholds = self.config.thresholds
        records = sorted(files, key=lambda r: r.path)

        indexer = SourceIndexer(root, overlay=overlay, visitors=self._visitors)
        indexed = indexer.index_all(records)
        logger.debug(f"Indexed {len(indexed)} of {len(records)} files")

        spans: list[FunctionSpan] = [span for f in indexed for span in f.functions]
        normalized = [f.normalized for f in indexed]

        metrics = function_metrics(spans)
        duplicates = detect_duplicate_blocks(
            normalized,
            min_lines=thresholds.duplicate_min_lines,
            max_lines=thresholds.duplicate_max_lines,
            min_occurrences=thresholds.duplicate_min_occurrences,
        )
        metrics.duplicate_blocks = len(duplicates)

        known_paths = {f.path for f in indexed}
        graph = build_dependency_graph(normalized, known_paths)
        cycles = find_reciprocal_imports(graph)

        signals = AnalysisSignals(
            long_functions=long_functions(spans, thresholds.long_function_threshold),
            duplicate_blocks=duplicates,
            circular_dependencies=cycles,
            test_presence=detect_test_presence(r.path for r in records),
        )

        logger.info(
            f"Analysis complete: {metrics.total_functions} functions, "
            f"{len(signals.long_functions)} long, {len(duplicates)} duplicate blocks, "
            f"{len(cycles)} cycles"
        )

        return AnalysisResult(
            metrics=metrics,
            signals=signals,
            dependency_summary=summarize_dependencies(graph, cycles),
            skipped_files=list(indexer.skipped),
        )
