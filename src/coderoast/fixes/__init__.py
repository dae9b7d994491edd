"""Evidence-locked patch pipeline."""

from .applicator import apply_file_patch, build_overlay
from .diff_parser import normalize_diff_path, parse_hunk_header, parse_unified_diff
from .generator import OpenAIPatchGenerator, PatchGenerator
from .models import (
    FilePatch,
    FixPreviewSummary,
    FixResult,
    FixSuggestion,
    Hunk,
    HunkLine,
    VerificationResult,
)
from .prompts import build_fix_prompt, build_retry_prompt, numbered_snippet
from .runner import FIXABLE_SIGNALS, FixRunner, fix_candidates, select_evidence
from .scope import allowed_ranges, validate_scope
from .verifier import verify_duplicate_fix, verify_long_function_fix

__all__ = [
    "apply_file_patch",
    "build_overlay",
    "normalize_diff_path",
    "parse_hunk_header",
    "parse_unified_diff",
    "OpenAIPatchGenerator",
    "PatchGenerator",
    "FilePatch",
    "FixPreviewSummary",
    "FixResult",
    "FixSuggestion",
    "Hunk",
    "HunkLine",
    "VerificationResult",
    "build_fix_prompt",
    "build_retry_prompt",
    "numbered_snippet",
    "FIXABLE_SIGNALS",
    "FixRunner",
    "fix_candidates",
    "select_evidence",
    "allowed_ranges",
    "validate_scope",
    "verify_duplicate_fix",
    "verify_long_function_fix",
]
