"""Patch pipeline exceptions.

Everything raised between receiving generated diff text and producing an
overlay derives from ``PatchError``. The fix runner catches these per issue
and turns them into rejected suggestions.
"""

from typing import Optional

from .base import CoderoastError


class PatchError(CoderoastError):
    """Base class for patch pipeline failures."""

    pass


class PatchGenerationError(PatchError):
    """Raised when the patch-generation collaborator fails to answer."""

    def __init__(self, reason: str):
        super().__init__(f"Patch generation failed: {reason}", details={})
        self.reason = reason


class DiffParseError(PatchError):
    """Base class for unified diff syntax errors."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        details = {"line": str(line_number)} if line_number is not None else {}
        super().__init__(message, details=details)
        self.line_number = line_number


class MalformedDiffHeaderError(DiffParseError):
    """A ``---`` line is not followed by a ``+++`` line."""

    def __init__(self, line_number: Optional[int] = None):
        super().__init__("Malformed diff header: '---' without '+++'", line_number)


class MalformedHunkHeaderError(DiffParseError):
    """A line starting with ``@@`` does not have the expected shape."""

    def __init__(self, header: str, line_number: Optional[int] = None):
        super().__init__(f"Malformed hunk header: {header.strip()}", line_number)
        self.header = header


class HunkBeforeFileHeaderError(DiffParseError):
    """A hunk header appears before any ``---``/``+++`` pair."""

    def __init__(self, line_number: Optional[int] = None):
        super().__init__("Hunk found before file header", line_number)


class EmptyPatchError(DiffParseError):
    """The text contains no file sections at all."""

    def __init__(self):
        super().__init__("Invalid patch: patch contains no changes (no file headers found)")


class NoActualChangesError(DiffParseError):
    """Every hunk consists solely of context lines."""

    def __init__(self):
        super().__init__("Invalid patch: patch contains no changes")


class OutOfScopeEditError(PatchError):
    """A patch touches a file or line not cited as evidence."""

    def __init__(self, message: str, file_path: str, line: Optional[int] = None):
        details = {"file": file_path}
        if line is not None:
            details["line"] = str(line)
        super().__init__(message, details=details)
        self.file_path = file_path
        self.line = line


class HunkRangeError(PatchError):
    """A hunk does not fit inside the current file buffer."""

    def __init__(self, message: str, file_path: str, line: int):
        super().__init__(message, details={"file": file_path, "line": str(line)})
        self.file_path = file_path
        self.line = line


class HunkContextMismatchError(HunkRangeError):
    """A context or removed line does not match the file content."""

    pass
