"""
Scoped acquisition helpers.

``with_file`` runs a unit of work against a freshly opened handle and
releases the handle exactly once, whether the work returns or raises.
The remaining functions are one-shot conveniences built on it.
"""

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TypeVar

from dataio.config.settings import HandleConfig
from dataio.files.handle import FileHandle, HandleMode, open_handle
from dataio.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")


def with_file(
    path: str | Path,
    mode: HandleMode | str,
    work: Callable[[FileHandle], T],
    *,
    encoding: str | None = None,
    config: HandleConfig | None = None,
) -> T:
    """
    Open a handle, pass it to ``work`` and release it afterwards.

    If both ``work`` and the release fail, the error from ``work`` is
    raised and the release failure is logged.

    Args:
        path: File path.
        mode: "read", "write" or "append".
        work: Unit of work receiving the open handle.
        encoding: Text encoding override.
        config: Handle defaults.

    Returns:
        Whatever ``work`` returns.
    """
    with open_handle(path, mode, encoding=encoding, config=config) as handle:
        return work(handle)


def read_text(
    path: str | Path,
    *,
    encoding: str | None = None,
    config: HandleConfig | None = None,
) -> str:
    """Read a whole file as a string."""
    return with_file(
        path, HandleMode.READ, FileHandle.read_all, encoding=encoding, config=config
    )


def read_bytes(path: str | Path, *, config: HandleConfig | None = None) -> bytes:
    """Read a whole file as bytes."""
    return with_file(path, HandleMode.READ, FileHandle.read_bytes, config=config)


def read_lines(
    path: str | Path,
    *,
    encoding: str | None = None,
    config: HandleConfig | None = None,
) -> list[str]:
    """
    Read all lines of a file, terminators stripped.

    The lines are materialized before the handle is released.
    """
    return with_file(
        path,
        HandleMode.READ,
        lambda handle: list(handle.read_lines()),
        encoding=encoding,
        config=config,
    )


def write_text(
    path: str | Path,
    text: str,
    *,
    encoding: str | None = None,
    config: HandleConfig | None = None,
) -> int:
    """
    Replace a file's content with ``text``.

    Returns:
        Number of bytes written.
    """
    return with_file(
        path,
        HandleMode.WRITE,
        lambda handle: handle.write_text(text),
        encoding=encoding,
        config=config,
    )


def append_text(
    path: str | Path,
    text: str,
    *,
    encoding: str | None = None,
    config: HandleConfig | None = None,
) -> int:
    """
    Append ``text`` to a file, creating it if needed.

    Returns:
        Number of bytes written.
    """
    return with_file(
        path,
        HandleMode.APPEND,
        lambda handle: handle.write_text(text),
        encoding=encoding,
        config=config,
    )


def write_lines(
    path: str | Path,
    lines: Iterable[str],
    *,
    append: bool = False,
    encoding: str | None = None,
    config: HandleConfig | None = None,
) -> int:
    """
    Write each string as a newline-terminated line.

    Args:
        path: File path.
        lines: Lines without terminators.
        append: Keep existing content instead of truncating.
        encoding: Text encoding override.
        config: Handle defaults.

    Returns:
        Number of bytes written.
    """
    mode = HandleMode.APPEND if append else HandleMode.WRITE
    written = with_file(
        path,
        mode,
        lambda handle: handle.write_lines(lines),
        encoding=encoding,
        config=config,
    )
    log.debug("Wrote lines", path=str(path), mode=mode.value, bytes=written)
    return written
