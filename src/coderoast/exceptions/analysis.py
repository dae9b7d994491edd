"""Analysis-related exceptions: file access, parsing and languages."""

from pathlib import Path

from .base import CoderoastError


class AnalysisError(CoderoastError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be read during indexing."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class UnsupportedLanguageError(AnalysisError):
    """Raised when no syntax visitor is registered for an extension."""

    def __init__(self, extension: str):
        super().__init__(
            f"Unsupported source extension: {extension}",
            details={"extension": extension},
        )
        self.extension = extension


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""

    def __init__(self, filepath: str, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": filepath, "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason
