"""Data models for the signal engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..scanning.models import FunctionSpan

LineRange = tuple[int, int]


@dataclass(frozen=True)
class DuplicateOccurrence:
    """One place a duplicated block appears (original, 1-based, inclusive lines)."""

    file: str
    start_line: int
    end_line: int


@dataclass
class DuplicateBlock:
    """A maximal run of normalized lines repeated at two or more places.

    Attributes:
        hash: Fingerprint of the matched text (advisory; equality is textual)
        length: Number of normalized lines in the block
        occurrences: Distinct (file, start, end) places the block appears
    """

    hash: str
    length: int
    occurrences: list[DuplicateOccurrence] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hash": self.hash,
            "length": self.length,
            "occurrences": [
                {"file": o.file, "startLine": o.start_line, "endLine": o.end_line}
                for o in self.occurrences
            ],
        }


@dataclass(frozen=True)
class CircularDependency:
    """A direct reciprocal import between two files.

    The line ranges are the first import statement found in each direction.
    """

    from_file: str
    to_file: str
    from_start_line: int
    from_end_line: int
    to_start_line: int
    to_end_line: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_file,
            "to": self.to_file,
            "fromStartLine": self.from_start_line,
            "fromEndLine": self.from_end_line,
            "toStartLine": self.to_start_line,
            "toEndLine": self.to_end_line,
        }


@dataclass
class DependencyGraph:
    """Resolved relative-import edges.

    Edges are directed: adjacency[A][B] lists the import statement ranges in A
    that resolve to B.
    """

    adjacency: dict[str, dict[str, list[LineRange]]] = field(default_factory=dict)
    unresolved_imports: dict[str, list[str]] = field(default_factory=dict)

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.adjacency.values())


@dataclass
class TestPresence:
    __test__ = False

    has_tests: bool
    test_files: list[str] = field(default_factory=list)


@dataclass
class AnalysisMetrics:
    max_function_length: int = 0
    avg_function_length: float = 0.0
    duplicate_blocks: int = 0
    total_functions: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "maxFunctionLength": self.max_function_length,
            "avgFunctionLength": self.avg_function_length,
            "duplicateBlocks": self.duplicate_blocks,
            "totalFunctions": self.total_functions,
        }


@dataclass
class AnalysisSignals:
    long_functions: list[FunctionSpan] = field(default_factory=list)
    duplicate_blocks: list[DuplicateBlock] = field(default_factory=list)
    circular_dependencies: list[CircularDependency] = field(default_factory=list)
    test_presence: TestPresence = field(default_factory=lambda: TestPresence(False))


@dataclass
class DependencySummary:
    nodes: int = 0
    edges: int = 0
    top_importers: list[tuple[str, int]] = field(default_factory=list)
    top_imported: list[tuple[str, int]] = field(default_factory=list)
    cycles: int = 0
    sample_cycle: Optional[tuple[str, str]] = None


@dataclass
class AnalysisResult:
    """Everything one signal-engine pass produces."""

    metrics: AnalysisMetrics
    signals: AnalysisSignals
    dependency_summary: DependencySummary = field(default_factory=DependencySummary)
    skipped_files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "metrics": self.metrics.to_dict(),
            "signals": {
                "longFunctions": [
                    {
                        "file": fn.file,
                        "name": fn.name,
                        "length": fn.length,
                        "startLine": fn.start_line,
                        "endLine": fn.end_line,
                    }
                    for fn in self.signals.long_functions
                ],
                "duplicateBlocks": [b.to_dict() for b in self.signals.duplicate_blocks],
                "circularDependencies": [
                    c.to_dict() for c in self.signals.circular_dependencies
                ],
                "testPresence": {
                    "hasTests": self.signals.test_presence.has_tests,
                    "testFiles": list(self.signals.test_presence.test_files),
                },
            },
        }
