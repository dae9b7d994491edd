"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    fix: bool = False,
    max_fixes: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build config from CLI options."""
    overrides: dict = {}
    if fix:
        overrides["enable_fixes"] = True
    if max_fixes is not None:
        overrides["max_fixes"] = max_fixes
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)
