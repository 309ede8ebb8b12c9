"""
Scoped file handles for text and byte I/O.

All file access in dataio goes through this module so that every
handle is released exactly once on every exit path.
"""

from dataio.files.errors import (
    AccessDeniedError,
    DataIOError,
    EncodingError,
    HandleStateError,
    NotFoundError,
    OpenFailedError,
    UnsupportedFormatError,
)
from dataio.files.handle import FileHandle, HandleMode, HandleState, open_handle
from dataio.files.scoped import (
    append_text,
    read_bytes,
    read_lines,
    read_text,
    with_file,
    write_lines,
    write_text,
)

__all__ = [
    "AccessDeniedError",
    "DataIOError",
    "EncodingError",
    "FileHandle",
    "HandleMode",
    "HandleState",
    "HandleStateError",
    "NotFoundError",
    "OpenFailedError",
    "UnsupportedFormatError",
    "append_text",
    "open_handle",
    "read_bytes",
    "read_lines",
    "read_text",
    "with_file",
    "write_lines",
    "write_text",
]
