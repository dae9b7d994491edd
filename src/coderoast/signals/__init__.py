"""Signal engine: function lengths, duplicates, import cycles, test presence."""

from .cycles import build_dependency_graph, detect_cycles, resolve_import
from .duplicates import detect_duplicate_blocks
from .engine import SignalEngine
from .functions import function_metrics, long_functions, max_long_function_in_range
from .models import (
    AnalysisMetrics,
    AnalysisResult,
    AnalysisSignals,
    CircularDependency,
    DependencyGraph,
    DependencySummary,
    DuplicateBlock,
    DuplicateOccurrence,
    TestPresence,
)
from .tests_presence import detect_test_presence, is_test_path

__all__ = [
    "SignalEngine",
    "build_dependency_graph",
    "detect_cycles",
    "resolve_import",
    "detect_duplicate_blocks",
    "function_metrics",
    "long_functions",
    "max_long_function_in_range",
    "detect_test_presence",
    "is_test_path",
    "AnalysisMetrics",
    "AnalysisResult",
    "AnalysisSignals",
    "CircularDependency",
    "DependencyGraph",
    "DependencySummary",
    "DuplicateBlock",
    "DuplicateOccurrence",
    "TestPresence",
]
