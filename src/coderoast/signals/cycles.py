"""Relative-import resolution and direct reciprocal cycle detection."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Collection
from typing import Optional

from ..scanning.languages import language_for_path
from ..scanning.models import NormalizedFile
from .models import CircularDependency, DependencyGraph, DependencySummary

logger = logging.getLogger(__name__)

TOP_N = 5


def resolve_import(importer: str, specifier: str, known_paths: Collection[str]) -> Optional[str]:
    """Resolve a relative specifier against the analysed file set.

    Candidates, in order: the literal path, the path with each of the
    importer language's extensions appended, then ``<path>/<index><ext>``.
    Bare (package) specifiers and paths escaping the root resolve to None.
    """
    if not specifier.startswith("."):
        return None

    language = language_for_path(importer)
    if language is None:
        return None

    combined = posixpath.normpath(posixpath.join(posixpath.dirname(importer), specifier))
    if combined == ".." or combined.startswith("../"):
        return None

    candidates = [combined]
    candidates.extend(combined + ext for ext in language.resolve_extensions)
    candidates.extend(
        posixpath.normpath(posixpath.join(combined, stem + ext))
        for stem in language.index_stems
        for ext in language.resolve_extensions
    )

    for candidate in candidates:
        if candidate in known_paths:
            return candidate
    return None


def build_dependency_graph(
    files: list[NormalizedFile], known_paths: Collection[str]
) -> DependencyGraph:
    """Directed graph of resolved relative imports, keyed in input order."""
    graph = DependencyGraph()

    for f in files:
        targets = graph.adjacency.setdefault(f.path, {})
        for ref in f.imports:
            target = resolve_import(f.path, ref.specifier, known_paths)
            if target is None:
                if ref.specifier.startswith("."):
                    graph.unresolved_imports.setdefault(f.path, []).append(ref.specifier)
                continue
            if target == f.path:
                continue
            targets.setdefault(target, []).append((ref.start_line, ref.end_line))

    return graph


def find_reciprocal_imports(graph: DependencyGraph) -> list[CircularDependency]:
    """One CircularDependency per unordered pair of files importing each other."""
    cycles: list[CircularDependency] = []
    seen: set[tuple[str, str]] = set()

    for source, targets in graph.adjacency.items():
        for target, ranges in targets.items():
            back = graph.adjacency.get(target, {}).get(source)
            if not back:
                continue

            pair = (source, target) if source < target else (target, source)
            if pair in seen:
                continue
            seen.add(pair)

            cycles.append(
                CircularDependency(
                    from_file=source,
                    to_file=target,
                    from_start_line=ranges[0][0],
                    from_end_line=ranges[0][1],
                    to_start_line=back[0][0],
                    to_end_line=back[0][1],
                )
            )

    return cycles


def detect_cycles(
    files: list[NormalizedFile], known_paths: Collection[str]
) -> list[CircularDependency]:
    """Direct reciprocal imports among ``files``. Longer cycles are not reported."""
    return find_reciprocal_imports(build_dependency_graph(files, known_paths))


def summarize_dependencies(
    graph: DependencyGraph, cycles: list[CircularDependency]
) -> DependencySummary:
    in_degree: dict[str, int] = {}
    for targets in graph.adjacency.values():
        for target in targets:
            in_degree[target] = in_degree.get(target, 0) + 1

    out_degree = {path: len(targets) for path, targets in graph.adjacency.items() if targets}

    return DependencySummary(
        nodes=len(graph.adjacency),
        edges=graph.edge_count,
        top_importers=_top(out_degree),
        top_imported=_top(in_degree),
        cycles=len(cycles),
        sample_cycle=(cycles[0].from_file, cycles[0].to_file) if cycles else None,
    )


def _top(counts: dict[str, int]) -> list[tuple[str, int]]:
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:TOP_N]
