"""Package-specific exception types."""

from __future__ import annotations


class HeadingDecoratorError(Exception):
    """Base class for errors raised outside the numbering engine."""


class DocumentReadError(HeadingDecoratorError):
    """Raised when a Markdown document cannot be read.

    Args:
        filepath: Path of the document.
        reason: Human-readable cause.
    """

    def __init__(self, filepath: object, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"Error reading {filepath}: {reason}")


class FileTooLargeError(DocumentReadError):
    """Raised when a document exceeds the configured size limit.

    Args:
        filepath: Path of the document.
        max_size: Maximum allowed size in bytes.
    """

    def __init__(self, filepath: object, max_size: int):
        self.max_size = max_size
        super().__init__(filepath, f"exceeds the maximum allowed size of {max_size} bytes")
