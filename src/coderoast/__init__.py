"""
coderoast - evidence-locked static signals and patch verification

Finds long functions, duplicated blocks, direct import cycles and missing
tests with exact line ranges, then optionally asks a model for unified
diffs that may only touch those ranges and are verified by re-analysis
before anything reaches disk.
"""

__version__ = "0.1.0"

from .pipeline import AnalysisReport, PipelineResult, run_analysis, run_pipeline
from .signals.engine import SignalEngine

__all__ = [
    "run_analysis",
    "run_pipeline",
    "AnalysisReport",
    "PipelineResult",
    "SignalEngine",
]
