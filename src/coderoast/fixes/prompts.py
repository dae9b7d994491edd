"""Prompt construction for the patch-generation collaborator."""

from __future__ import annotations

from dataclasses import dataclass

from ..insights.models import SIGNAL_DUPLICATE_BLOCKS, SIGNAL_LONG_FUNCTIONS, EvidenceItem, Issue
from ..scanning.normalizer import split_lines

GOALS = {
    SIGNAL_LONG_FUNCTIONS: "Goal: reduce function length below the long-function threshold.",
    SIGNAL_DUPLICATE_BLOCKS: "Goal: eliminate duplication by changing one occurrence.",
}

_HEADER = [
    "You are a code fixer. Output ONLY a unified diff.",
    "You must only modify lines within the evidence line ranges provided.",
    "Do not add new files. Do not edit outside the ranges.",
]

_STRICT_RULES = [
    "",
    "Your previous answer could not be used: {error}",
    "Respond again with ONLY the unified diff, nothing else:",
    "- start with '--- a/<path>' and '+++ b/<path>' lines using the exact paths above",
    "- each hunk header must look like '@@ -<start>,<count> +<start>,<count> @@'",
    "- prefix every hunk line with ' ', '-' or '+'",
    "- no markdown fences and no explanations",
]


@dataclass(frozen=True)
class Snippet:
    file: str
    start_line: int
    end_line: int
    text: str


def numbered_snippet(content: str, start_line: int, end_line: int) -> str:
    """Lines ``start_line..end_line`` of ``content``, each as ``'%4d | line'``."""
    lines = split_lines(content)[start_line - 1 : end_line]
    return "\n".join(f"{start_line + offset:4d} | {line}" for offset, line in enumerate(lines))


def snippet_for(content: str, item: EvidenceItem) -> Snippet:
    return Snippet(
        file=item.file,
        start_line=item.start_line,
        end_line=item.end_line,
        text=numbered_snippet(content, item.start_line, item.end_line),
    )


def summarize_evidence(issue: Issue) -> str:
    return "; ".join(f"{item.file}:{item.start_line}-{item.end_line}" for item in issue.evidence)


def build_fix_prompt(issue: Issue, snippets: list[Snippet]) -> str:
    lines = list(_HEADER)
    lines.append(GOALS.get(issue.signal, "Goal: resolve the issue within the evidence ranges."))
    lines.extend(
        [
            "",
            f"Issue type: {issue.type}",
            f"Signal: {issue.signal}",
            f"Evidence: {summarize_evidence(issue)}",
            "",
            "Evidence snippets (with line numbers):",
        ]
    )
    lines.extend(
        f"File: {s.file} ({s.start_line}-{s.end_line})\n{s.text}" for s in snippets
    )
    return "\n".join(lines)


def build_retry_prompt(prompt: str, error: str) -> str:
    """The original prompt followed by stricter output rules and the parse error."""
    return prompt + "\n" + "\n".join(_STRICT_RULES).format(error=error)
