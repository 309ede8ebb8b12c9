"""Pytest configuration and shared fixtures."""

import io
from collections.abc import Iterator
from pathlib import Path

import pandas as pd
import pytest
import structlog

from dataio.utils.logging import configure_library_defaults

HAPPY_LINES = ["Don't worry, be happy!", "Hello world!", "Print?"]


class CountingStream(io.BytesIO):
    """In-memory binary stream that counts close() calls."""

    def __init__(self, data: bytes = b"", *, fail_on_close: bool = False) -> None:
        super().__init__(data)
        self.close_calls = 0
        self.fail_on_close = fail_on_close

    def close(self) -> None:
        self.close_calls += 1
        super().close()
        if self.fail_on_close:
            msg = "disk went away"
            raise OSError(msg)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Restore the library logging defaults after each test."""
    yield
    structlog.reset_defaults()
    configure_library_defaults()


@pytest.fixture
def counting_stream() -> type[CountingStream]:
    """Stream class whose instances record how often they were closed."""
    return CountingStream


@pytest.fixture
def happy_lines() -> list[str]:
    """Lines used throughout the read/write scenarios."""
    return list(HAPPY_LINES)


@pytest.fixture
def happy_file(tmp_path: Path) -> Path:
    """A UTF-8 file holding the happy lines, newline-terminated."""
    path = tmp_path / "happy.txt"
    path.write_bytes("".join(f"{line}\n" for line in HAPPY_LINES).encode("utf-8"))
    return path


@pytest.fixture
def sample_stations() -> pd.DataFrame:
    """Create a small station count table."""
    return pd.DataFrame(
        {
            "station": ["north", "south", "east"],
            "count": [12, 40, 7],
            "share": [0.25, 0.5, 0.125],
        }
    )
