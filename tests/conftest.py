"""Shared test fixtures for coderoast tests."""

from pathlib import Path

import pytest

from coderoast.scanning.models import FileRecord


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def make_project(tmp_path):
    """Write {relative path: content} under tmp_path and return the root."""

    def _make(files: dict) -> Path:
        for relative, content in files.items():
            target = tmp_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def records():
    """Build FileRecords from relative paths."""

    def _records(*paths: str) -> list:
        return [FileRecord(path=p, extension=Path(p).suffix) for p in paths]

    return _records


@pytest.fixture
def long_ts_function():
    """TypeScript function source spanning exactly ``total_lines`` lines."""

    def _make(name: str, total_lines: int) -> list:
        body = [f"  const {name}_v{i} = x + {i};" for i in range(total_lines - 3)]
        return [f"export function {name}(x: number): number {{", *body, "  return x;", "}"]

    return _make


@pytest.fixture
def duplicated_ts_source():
    """Two functions sharing a 12-line body; the shared block is lines 2-14 and 16-28."""
    body = [f"  const r{i} = a * {i} + 1;" for i in range(11)] + ["  return r10;"]
    lines = [
        "export function first(a: number): number {",
        *body,
        "}",
        "export function second(a: number): number {",
        *body,
        "}",
    ]
    return "\n".join(lines) + "\n"
