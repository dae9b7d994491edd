"""Configuration loading and management for coderoast.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.coderoast.toml)
    3. Project config (./coderoast.toml)
    4. Explicit config file
    5. Environment variables (CODEROAST_* prefix)
    6. Keyword overrides (typically CLI flags)

The signal engine and patch pipeline never read the environment themselves;
everything they need arrives through these dataclasses.

Example:
    >>> config = load_config(max_fixes=1)
    >>> config.max_fixes
    1
    >>> config.thresholds.long_function_threshold
    50
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "CODEROAST_"
GENERATOR_ENV_PREFIX = "CODEROAST_GENERATOR_"


@dataclass(frozen=True)
class ThresholdConfig:
    """Signal thresholds.

    Attributes:
        long_function_threshold: A function spanning at least this many
            lines is reported as a long function.
        duplicate_min_lines: Fixed window size for duplicate candidates.
        duplicate_max_lines: Upper bound for greedy block extension.
        duplicate_min_occurrences: Occurrences needed to report a block.
    """

    long_function_threshold: int = 50
    duplicate_min_lines: int = 10
    duplicate_max_lines: int = 50
    duplicate_min_occurrences: int = 2

    def __post_init__(self) -> None:
        if self.long_function_threshold < 1:
            raise ValueError("long_function_threshold must be at least 1")
        if self.duplicate_min_lines < 1:
            raise ValueError("duplicate_min_lines must be at least 1")
        if self.duplicate_max_lines < self.duplicate_min_lines:
            raise ValueError("duplicate_max_lines must be >= duplicate_min_lines")
        if self.duplicate_min_occurrences < 2:
            raise ValueError("duplicate_min_occurrences must be at least 2")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class GeneratorConfig:
    """Injected settings for the patch-generation collaborator.

    The defaults target Gemini's OpenAI-compatible endpoint; any
    OpenAI-compatible server works by changing ``base_url`` and ``model``.
    """

    api_key: Optional[str] = None
    model: str = "gemini-2.0-flash"
    base_url: Optional[str] = "https://generativelanguage.googleapis.com/v1beta/openai/"
    temperature: float = 0.1
    max_output_tokens: int = 900
    timeout_seconds: float = 60.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError("temperature must be between 0.0 and 2.0")
        if self.max_output_tokens < 1:
            raise ValueError("max_output_tokens must be at least 1")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    @property
    def is_configured(self) -> bool:
        """True when an API key is available."""
        return bool(self.api_key)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        File selection:
            max_file_size_mb: Files larger than this are not indexed
            exclude_dirs: Directory names never descended into
            allow_hidden_files: Include dot-files and dot-directories

        Aggregation:
            max_evidence_items: Cap on evidence items per issue

        Fixes:
            enable_fixes: Attempt patch generation for fixable issues
            max_fixes: Maximum issues attempted per run

        Output control:
            verbosity: Logging verbosity level (quiet, normal, verbose)
            log_file: Optional file that also receives log records
    """

    max_file_size_mb: float = 5.0
    exclude_dirs: tuple[str, ...] = (
        ".git",
        "node_modules",
        "dist",
        "build",
        ".next",
        "out",
        ".turbo",
        "__pycache__",
        "venv",
        ".venv",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
    )
    allow_hidden_files: bool = False

    max_evidence_items: int = 5

    enable_fixes: bool = False
    max_fixes: int = 2

    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    def __post_init__(self) -> None:
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if self.max_evidence_items < 1:
            raise ValueError("max_evidence_items must be at least 1")
        if self.max_fixes < 0:
            raise ValueError("max_fixes must be non-negative")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be quiet, normal or verbose")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".coderoast.toml"
    if global_config.exists():
        _merge_file(merged, global_config, "global")

    project_config = Path.cwd() / "coderoast.toml"
    if project_config.exists():
        _merge_file(merged, project_config, "project")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge_file(merged, config_file, "explicit")

    _merge_sections(merged, _load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    _merge_sections(merged, overrides)

    merged["thresholds"] = _build_section(ThresholdConfig, merged.pop("thresholds", None))
    merged["generator"] = _build_section(GeneratorConfig, merged.pop("generator", None))

    if "exclude_dirs" in merged and isinstance(merged["exclude_dirs"], list):
        merged["exclude_dirs"] = tuple(merged["exclude_dirs"])

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge_file(merged: dict, path: Path, label: str) -> None:
    try:
        data = _load_toml_file(path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid {label} config '{path}': {e}")
    _merge_sections(merged, data)


def _merge_sections(merged: dict, data: dict) -> None:
    """Merge ``data`` into ``merged``; nested tables are merged key by key."""
    for key, value in data.items():
        if key in ("thresholds", "generator") and isinstance(value, dict):
            section = dict(merged.get(key) or {})
            section.update(value)
            merged[key] = section
        else:
            merged[key] = value


def _build_section(cls: type, value: Any) -> Any:
    if value is None:
        return cls()
    if isinstance(value, cls):
        return value
    if not isinstance(value, dict):
        raise InvalidConfigError(cls.__name__, value, "expected a table")
    try:
        return cls(**value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid {cls.__name__} config: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CODEROAST_* environment variables.

    Top-level fields use ``CODEROAST_<FIELD>`` (e.g. CODEROAST_MAX_FIXES).
    Generator fields use ``CODEROAST_GENERATOR_<FIELD>`` (e.g.
    CODEROAST_GENERATOR_API_KEY, CODEROAST_GENERATOR_MODEL).
    """
    result: dict[str, Any] = _env_for(AnalysisConfig, ENV_PREFIX)
    generator = _env_for(GeneratorConfig, GENERATOR_ENV_PREFIX)
    if generator:
        result["generator"] = generator
    return result


def _env_for(cls: type, prefix: str) -> dict[str, Any]:
    type_hints = get_type_hints(cls)
    result: dict[str, Any] = {}

    for f in fields(cls):
        env_key = f"{prefix}{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(f.name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[f.name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot come from the environment (tuples,
    nested configs).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is tuple or type_hint is tuple:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    with open(path, "rb") as f:
        return tomllib.load(f)
