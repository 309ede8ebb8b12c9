"""
Scoped file handle.

A FileHandle owns exactly one binary stream. Text is encoded and decoded
by the handle itself, so string and byte writes share a single stream and
land in the file in call order. Each handle moves through
unopened -> open -> closed once; reopening requires a new handle.
"""

import codecs
from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

from dataio.config.settings import DEFAULT_CHUNK_SIZE, DEFAULT_ENCODING, HandleConfig
from dataio.files.errors import (
    AccessDeniedError,
    EncodingError,
    HandleStateError,
    NotFoundError,
    OpenFailedError,
)
from dataio.utils.logging import get_logger

log = get_logger(__name__)

Opener = Callable[[Path, str], BinaryIO]


class HandleMode(str, Enum):
    """Mode a handle is opened in."""

    READ = "read"
    WRITE = "write"  # truncates
    APPEND = "append"

    @property
    def flag(self) -> str:
        """Binary mode string passed to the opener."""
        return {"read": "rb", "write": "wb", "append": "ab"}[self.value]

    @property
    def readable(self) -> bool:
        """Whether read operations are allowed."""
        return self is HandleMode.READ

    @property
    def writable(self) -> bool:
        """Whether write operations are allowed."""
        return self is not HandleMode.READ


class HandleState(str, Enum):
    """Lifecycle state of a handle."""

    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"


def _default_opener(path: Path, flag: str) -> BinaryIO:
    return path.open(flag)


class FileHandle:
    """
    File handle with guaranteed single release.

    Use it as a context manager, or through ``with_file`` for the
    higher-order form::

        with open_handle("notes.txt", "write") as handle:
            handle.write_line("Hello world!")

    Attributes:
        path: Target path.
        mode: Mode the handle was created for.
        encoding: Text encoding used by string operations.
        chunk_size: Bytes requested per read while streaming lines.
        state: Current lifecycle state.
    """

    def __init__(
        self,
        path: str | Path,
        mode: HandleMode | str = HandleMode.READ,
        *,
        encoding: str = DEFAULT_ENCODING,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        create_parents: bool = False,
        opener: Opener | None = None,
    ) -> None:
        """
        Create an unopened handle.

        Args:
            path: File path.
            mode: "read", "write" or "append".
            encoding: Text encoding for string operations.
            chunk_size: Bytes per read when streaming lines.
            create_parents: Create missing parent directories for writes.
            opener: Callable returning a binary stream for (path, flag).
                Defaults to ``Path.open``.
        """
        if chunk_size < 1:
            msg = f"chunk_size must be positive, got {chunk_size}"
            raise ValueError(msg)
        try:
            codec = codecs.lookup(encoding)
        except LookupError as e:
            msg = f"Unknown encoding: {encoding!r}"
            raise ValueError(msg) from e
        self.path = Path(path)
        self.mode = HandleMode(mode)
        self.encoding = codec.name
        self.chunk_size = chunk_size
        self.create_parents = create_parents
        self.state = HandleState.UNOPENED
        self._opener = opener or _default_opener
        self._stream: BinaryIO | None = None
        self._encoder: codecs.IncrementalEncoder | None = None

    def __repr__(self) -> str:
        return (
            f"FileHandle(path={str(self.path)!r}, mode={self.mode.value!r}, "
            f"state={self.state.value!r})"
        )

    @property
    def closed(self) -> bool:
        """True once the handle has been released."""
        return self.state is HandleState.CLOSED

    def open(self) -> "FileHandle":
        """
        Acquire the underlying stream.

        Returns:
            The handle itself, for chaining.

        Raises:
            HandleStateError: If the handle was opened before.
            NotFoundError: If the path (or, for writes, its parent) is missing.
            AccessDeniedError: If permission is denied.
            OpenFailedError: If the OS refuses the path for another reason,
                e.g. it is a directory.
        """
        if self.state is not HandleState.UNOPENED:
            msg = f"Handle for {self.path} is {self.state.value}; open a new handle"
            raise HandleStateError(msg, path=self.path)

        try:
            if self.mode.writable and self.create_parents:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self._stream = self._opener(self.path, self.mode.flag)
        except FileNotFoundError as e:
            msg = f"File not found: {self.path}"
            raise NotFoundError(msg, path=self.path) from e
        except PermissionError as e:
            msg = f"Permission denied ({self.mode.value}): {self.path}"
            raise AccessDeniedError(msg, path=self.path) from e
        except OSError as e:
            msg = f"Cannot open {self.path} for {self.mode.value}: {e.strerror or e}"
            raise OpenFailedError(msg, path=self.path) from e

        self.state = HandleState.OPEN
        log.debug("Opened handle", path=str(self.path), mode=self.mode.value)
        return self

    def close(self) -> None:
        """
        Release the underlying stream.

        The state moves to closed before the stream is released, so the
        release is attempted exactly once even if it fails. Closing an
        unopened or already closed handle only marks it closed.
        """
        if self.state is HandleState.CLOSED:
            return
        stream, self._stream = self._stream, None
        self.state = HandleState.CLOSED
        if stream is not None:
            stream.close()
            log.debug("Closed handle", path=str(self.path))

    def __enter__(self) -> "FileHandle":
        if self.state is not HandleState.OPEN:
            self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.close()
        except Exception as release_error:
            if exc is None:
                raise
            # The unit of work already failed; its error wins.
            log.warning(
                "Release failed while another error was pending",
                path=str(self.path),
                release_error=repr(release_error),
                pending_error=repr(exc),
            )

    # Writing

    def write_text(self, text: str) -> int:
        """
        Append a string encoded with the handle's encoding.

        Args:
            text: String to write. No newline is added.

        Returns:
            Number of bytes written.

        Raises:
            EncodingError: If the string cannot be encoded.
        """
        self._require(writing=True)
        if self._encoder is None:
            self._encoder = codecs.getincrementalencoder(self.encoding)(errors="strict")
        try:
            data = self._encoder.encode(text)
        except UnicodeEncodeError as e:
            msg = f"Cannot encode text as {self.encoding}: {e.reason}"
            raise EncodingError(msg, path=self.path, encoding=self.encoding) from e
        return self.write_bytes(data)

    def write_bytes(self, data: bytes) -> int:
        """
        Append raw bytes, independent of the handle's encoding.

        Returns:
            Number of bytes written.
        """
        stream = self._require(writing=True)
        stream.write(data)
        return len(data)

    def write_line(self, line: str) -> int:
        """Append a string followed by a newline."""
        return self.write_text(line + "\n")

    def write_lines(self, lines: Iterable[str]) -> int:
        """
        Append each string followed by a newline.

        Returns:
            Total number of bytes written.
        """
        return sum(self.write_line(line) for line in lines)

    # Reading

    def read_all(self) -> str:
        """
        Read the remaining content as a single string.

        Raises:
            EncodingError: If the content is not valid in the handle's encoding.
        """
        return self._decode(self.read_bytes())

    def read_bytes(self) -> bytes:
        """Read the remaining content as raw bytes."""
        stream = self._require(reading=True)
        return stream.read()

    def read_lines(self) -> Iterator[str]:
        """
        Lazily yield the remaining lines without their terminators.

        Both "\\n" and "\\r\\n" terminate a line. A final line with no
        terminator is still yielded; an empty file yields nothing. The
        iterator consumes the handle; reopen the file to iterate again.

        Raises:
            EncodingError: If the content is not valid in the handle's encoding.
            HandleStateError: If the handle is not open for reading, or is
                closed while iterating.
        """
        self._require(reading=True)
        return self._iter_lines()

    def __iter__(self) -> Iterator[str]:
        return self.read_lines()

    # Internals

    def _iter_lines(self) -> Iterator[str]:
        decoder = codecs.getincrementaldecoder(self.encoding)(errors="strict")
        pending = ""
        while True:
            chunk = self._require(reading=True).read(self.chunk_size)
            pending += self._decode(chunk, decoder=decoder, final=not chunk)
            *complete, pending = pending.split("\n")
            for line in complete:
                yield line.removesuffix("\r")
            if not chunk:
                break
        if pending:
            yield pending

    def _require(self, *, reading: bool = False, writing: bool = False) -> BinaryIO:
        if self.state is not HandleState.OPEN or self._stream is None:
            msg = f"Handle for {self.path} is {self.state.value}"
            raise HandleStateError(msg, path=self.path)
        if reading and not self.mode.readable:
            msg = f"Handle for {self.path} was opened for {self.mode.value}, not read"
            raise HandleStateError(msg, path=self.path)
        if writing and not self.mode.writable:
            msg = f"Handle for {self.path} was opened for read, not write"
            raise HandleStateError(msg, path=self.path)
        return self._stream

    def _decode(
        self,
        data: bytes,
        *,
        decoder: codecs.IncrementalDecoder | None = None,
        final: bool = True,
    ) -> str:
        try:
            if decoder is None:
                return data.decode(self.encoding)
            return decoder.decode(data, final=final)
        except UnicodeDecodeError as e:
            msg = f"Cannot decode {self.path} as {self.encoding}: {e.reason}"
            raise EncodingError(msg, path=self.path, encoding=self.encoding) from e


def open_handle(
    path: str | Path,
    mode: HandleMode | str = HandleMode.READ,
    *,
    encoding: str | None = None,
    chunk_size: int | None = None,
    create_parents: bool | None = None,
    opener: Opener | None = None,
    config: HandleConfig | None = None,
) -> FileHandle:
    """
    Create and open a handle.

    Explicit keyword arguments take precedence over ``config``, which in
    turn falls back to the HandleConfig defaults.

    Args:
        path: File path.
        mode: "read", "write" or "append".
        encoding: Text encoding override.
        chunk_size: Read chunk size override.
        create_parents: Parent directory creation override.
        opener: Optional stream opener.
        config: Handle defaults.

    Returns:
        An open FileHandle.
    """
    defaults = config or HandleConfig()
    handle = FileHandle(
        path,
        mode,
        encoding=encoding or defaults.encoding,
        chunk_size=defaults.chunk_size if chunk_size is None else chunk_size,
        create_parents=(
            defaults.create_parents if create_parents is None else create_parents
        ),
        opener=opener,
    )
    return handle.open()
