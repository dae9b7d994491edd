"""Data models for the scanning layer."""

from __future__ import annotations

from dataclasses import dataclass, field

# path -> full replacement content, used instead of disk during verification
Overlay = dict[str, str]


@dataclass(frozen=True)
class FileRecord:
    """A candidate source file.

    Attributes:
        path: Posix path relative to the analysed root (identity)
        extension: Lower-cased extension including the dot, e.g. ".ts"
    """

    path: str
    extension: str


@dataclass(frozen=True)
class FunctionSpan:
    """A function-like construct with a body.

    Line numbers are 1-based and inclusive.
    """

    file: str
    name: str
    start_line: int
    end_line: int

    def __post_init__(self) -> None:
        if self.end_line < self.start_line:
            raise ValueError(
                f"function span ends before it starts: {self.file}:{self.start_line}-{self.end_line}"
            )

    @property
    def length(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass(frozen=True)
class ImportRef:
    """A statically visible import/require specifier and the statement lines."""

    specifier: str
    start_line: int
    end_line: int


@dataclass
class NormalizedFile:
    """Comment-stripped, whitespace-collapsed line corpus for one file.

    ``normalized_lines[i]`` came from original line ``line_numbers[i]``.
    Blank and comment-only lines are never present.
    """

    path: str
    extension: str
    normalized_lines: list[str]
    line_numbers: list[int]
    imports: list[ImportRef] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.normalized_lines) != len(self.line_numbers):
            raise ValueError(
                f"{self.path}: {len(self.normalized_lines)} lines but "
                f"{len(self.line_numbers)} line numbers"
            )


@dataclass
class IndexedFile:
    """Everything the analyzers need from one source file."""

    record: FileRecord
    normalized: NormalizedFile
    functions: list[FunctionSpan]

    @property
    def path(self) -> str:
        return self.record.path
