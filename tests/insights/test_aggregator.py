"""Tests for the signal aggregator."""

from coderoast.insights.aggregator import aggregate_issues
from coderoast.insights.guard import guard_issues
from coderoast.scanning.models import FunctionSpan
from coderoast.signals.models import (
    AnalysisMetrics,
    AnalysisResult,
    AnalysisSignals,
    CircularDependency,
    DuplicateBlock,
    DuplicateOccurrence,
    TestPresence,
)


def analysis(long_functions=(), blocks=(), cycles=(), has_tests=True):
    return AnalysisResult(
        metrics=AnalysisMetrics(),
        signals=AnalysisSignals(
            long_functions=list(long_functions),
            duplicate_blocks=list(blocks),
            circular_dependencies=list(cycles),
            test_presence=TestPresence(has_tests, ["a.test.ts"] if has_tests else []),
        ),
    )


def block(hash_, length, *places):
    return DuplicateBlock(
        hash=hash_,
        length=length,
        occurrences=[DuplicateOccurrence(f, s, s + length - 1) for f, s in places],
    )


class TestAggregateIssues:
    def test_clean_analysis_has_no_issues(self):
        assert aggregate_issues(analysis()) == []

    def test_long_functions_ranked_longest_first_and_capped(self):
        fns = [FunctionSpan("a.ts", f"f{n}", 1, n) for n in (55, 90, 60, 70, 80, 100)]
        issues = aggregate_issues(analysis(long_functions=fns), max_evidence_items=3)

        assert len(issues) == 1
        issue = issues[0]
        assert (issue.type, issue.signal, issue.confidence) == (
            "maintainability",
            "longFunctions",
            "medium",
        )
        assert [item.end_line for item in issue.evidence] == [100, 90, 80]
        assert issue.evidence[0].metric("loc") == 100

    def test_duplicates_ranked_by_occurrences_then_length(self):
        small = block("s", 10, ("a.ts", 1), ("b.ts", 1))
        long = block("l", 30, ("c.ts", 1), ("d.ts", 1))
        many = block("m", 10, ("e.ts", 1), ("f.ts", 1), ("g.ts", 1))
        issues = aggregate_issues(analysis(blocks=[small, long, many]), max_evidence_items=5)

        issue = issues[0]
        assert (issue.type, issue.signal, issue.confidence) == ("duplication", "duplicateBlocks", "high")
        assert [item.file for item in issue.evidence] == ["e.ts", "f.ts", "g.ts", "c.ts", "d.ts"]
        first = issue.evidence[0]
        assert first.metric("loc") == 10
        assert first.metric("count") == 3
        assert first.metric("hash") == "m"

    def test_cycles_carry_both_import_ranges(self):
        cycle = CircularDependency("a.ts", "b.ts", 1, 1, 4, 5)
        issue = aggregate_issues(analysis(cycles=[cycle]))[0]

        assert (issue.type, issue.signal, issue.confidence) == (
            "architecture",
            "circularDependencies",
            "high",
        )
        assert [(i.file, i.start_line, i.end_line) for i in issue.evidence] == [
            ("a.ts", 1, 1),
            ("b.ts", 4, 5),
        ]

    def test_missing_tests_issue_is_never_complete(self):
        issues = aggregate_issues(analysis(has_tests=False))
        assert [(i.type, i.signal) for i in issues] == [("testing", "testPresence")]

        guarded = guard_issues(issues)
        assert not guarded[0].evidence_complete
        assert guarded[0].missing_evidence_reason == "no evidence items provided"

    def test_deterministic_for_same_input(self):
        fns = [FunctionSpan("b.ts", "x", 1, 60), FunctionSpan("a.ts", "y", 1, 60)]
        first = aggregate_issues(analysis(long_functions=fns))
        second = aggregate_issues(analysis(long_functions=list(reversed(fns))))
        assert [i.to_dict() for i in first] == [i.to_dict() for i in second]
        assert [e.file for e in first[0].evidence] == ["a.ts", "b.ts"]
