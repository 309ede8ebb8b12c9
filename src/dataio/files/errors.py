"""
Error kinds raised by file handles and table loading.

Each error also derives from the matching built-in exception, so callers
that already catch ``FileNotFoundError`` or ``PermissionError`` keep working.
"""

from pathlib import Path


class DataIOError(Exception):
    """Base class for all dataio errors."""

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = None if path is None else str(path)


class NotFoundError(DataIOError, FileNotFoundError):
    """The path (or its parent directory, for writes) does not exist."""


class AccessDeniedError(DataIOError, PermissionError):
    """The process lacks permission to open the path in the requested mode."""


class OpenFailedError(DataIOError, OSError):
    """The OS refused to open the path for another reason (e.g. a directory)."""


class EncodingError(DataIOError, ValueError):
    """Text could not be decoded or encoded with the handle's encoding."""

    def __init__(
        self, message: str, *, path: str | Path | None = None, encoding: str
    ) -> None:
        super().__init__(message, path=path)
        self.encoding = encoding


class HandleStateError(DataIOError):
    """The operation is not valid for the handle's current state or mode."""


class UnsupportedFormatError(DataIOError, ValueError):
    """No table format is registered under the requested name or suffix."""
