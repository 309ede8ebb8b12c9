"""
Registry of table formats.

Parsing and serialization are delegated to pandas; each entry only
records how to hand a decoded payload to pandas and how to get one back.
"""

import io
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

import pandas as pd

from dataio.files.errors import UnsupportedFormatError

Reader = Callable[..., pd.DataFrame]
Writer = Callable[..., str | bytes]


@dataclass(frozen=True)
class FormatInfo:
    """Metadata and pandas hooks for one table format."""

    name: str
    suffixes: tuple[str, ...]
    binary: bool
    description: str
    reader: Reader
    writer: Writer

    def read(self, payload: str | bytes, **options: Any) -> pd.DataFrame:
        """
        Parse a decoded payload into a DataFrame.

        Args:
            payload: Text for text formats, bytes for binary formats.
            **options: Extra keyword arguments for the pandas reader.
        """
        buffer: io.StringIO | io.BytesIO
        if isinstance(payload, bytes):
            buffer = io.BytesIO(payload)
        else:
            buffer = io.StringIO(payload)
        return self.reader(buffer, **options)

    def write(self, df: pd.DataFrame, **options: Any) -> str | bytes:
        """Serialize a DataFrame to text (or bytes for binary formats)."""
        return self.writer(df, **options)


def _read_csv(buffer: io.StringIO, **options: Any) -> pd.DataFrame:
    return pd.read_csv(buffer, **options)


def _read_tsv(buffer: io.StringIO, **options: Any) -> pd.DataFrame:
    return pd.read_csv(buffer, sep="\t", **options)


def _read_json(buffer: io.StringIO, **options: Any) -> pd.DataFrame:
    return pd.read_json(buffer, orient="records", **options)


def _read_jsonl(buffer: io.StringIO, **options: Any) -> pd.DataFrame:
    return pd.read_json(buffer, orient="records", lines=True, **options)


def _read_parquet(buffer: io.BytesIO, **options: Any) -> pd.DataFrame:
    return pd.read_parquet(buffer, **options)


def _write_csv(df: pd.DataFrame, **options: Any) -> str:
    return df.to_csv(index=False, **options)


def _write_tsv(df: pd.DataFrame, **options: Any) -> str:
    return df.to_csv(sep="\t", index=False, **options)


def _write_json(df: pd.DataFrame, **options: Any) -> str:
    return df.to_json(orient="records", **options)


def _write_jsonl(df: pd.DataFrame, **options: Any) -> str:
    text = df.to_json(orient="records", lines=True, **options)
    return text if text.endswith("\n") else text + "\n"


def _write_parquet(df: pd.DataFrame, **options: Any) -> bytes:
    return df.to_parquet(index=False, **options)


class FormatRegistry:
    """
    Centralized registry of supported table formats.

    Formats are looked up by name or inferred from a file suffix.
    """

    _formats: ClassVar[dict[str, FormatInfo]] = {
        "csv": FormatInfo(
            name="csv",
            suffixes=(".csv",),
            binary=False,
            description="Comma-separated values",
            reader=_read_csv,
            writer=_write_csv,
        ),
        "tsv": FormatInfo(
            name="tsv",
            suffixes=(".tsv", ".tab"),
            binary=False,
            description="Tab-separated values",
            reader=_read_tsv,
            writer=_write_tsv,
        ),
        "json": FormatInfo(
            name="json",
            suffixes=(".json",),
            binary=False,
            description="JSON array of row objects",
            reader=_read_json,
            writer=_write_json,
        ),
        "jsonl": FormatInfo(
            name="jsonl",
            suffixes=(".jsonl", ".ndjson"),
            binary=False,
            description="One JSON row object per line",
            reader=_read_jsonl,
            writer=_write_jsonl,
        ),
        "parquet": FormatInfo(
            name="parquet",
            suffixes=(".parquet", ".pq"),
            binary=True,
            description="Apache Parquet columnar file (requires pyarrow)",
            reader=_read_parquet,
            writer=_write_parquet,
        ),
    }

    @classmethod
    def get(cls, name: str) -> FormatInfo:
        """
        Get a format by name.

        Args:
            name: Format identifier (case-insensitive).

        Returns:
            FormatInfo for the format.

        Raises:
            UnsupportedFormatError: If the format is not registered.
        """
        key = name.lower().lstrip(".")
        if key not in cls._formats:
            available = ", ".join(cls._formats.keys())
            msg = f"Unknown format '{name}'. Available: {available}"
            raise UnsupportedFormatError(msg)
        return cls._formats[key]

    @classmethod
    def for_path(cls, path: str | Path, default: str | None = None) -> FormatInfo:
        """
        Infer the format from a file suffix.

        Args:
            path: File path.
            default: Format name used when the suffix is not recognized.

        Returns:
            FormatInfo for the inferred format.

        Raises:
            UnsupportedFormatError: If the suffix is unknown and no default
                is given.
        """
        suffix = Path(path).suffix.lower()
        for info in cls._formats.values():
            if suffix in info.suffixes:
                return info
        if default is not None:
            return cls.get(default)
        msg = f"Cannot infer table format from suffix {suffix!r} of {path}"
        raise UnsupportedFormatError(msg, path=path)

    @classmethod
    def list_formats(cls) -> list[str]:
        """List all registered format names."""
        return list(cls._formats.keys())

    @classmethod
    def infos(cls) -> list[FormatInfo]:
        """List all registered formats with metadata."""
        return list(cls._formats.values())
