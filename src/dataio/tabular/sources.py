"""
Table sources backed by scoped file handles.

The handle reads and decodes the file; pandas parses the payload. An
optional Pandera schema validates the result at the boundary.
"""

from pathlib import Path
from typing import Any, TypeVar

import pandas as pd
import pandera.pandas as pa

from dataio.config.settings import DataIOConfig
from dataio.files.handle import FileHandle, HandleMode
from dataio.files.scoped import with_file
from dataio.tabular.formats import FormatInfo, FormatRegistry
from dataio.tabular.sinks import Sink
from dataio.utils.logging import get_logger, log_context

log = get_logger(__name__)

T = TypeVar("T")


def _resolve_format(path: Path, fmt: str | None, config: DataIOConfig) -> FormatInfo:
    if fmt is not None:
        return FormatRegistry.get(fmt)
    return FormatRegistry.for_path(path, default=config.tabular.default_format)


class TableSource:
    """
    A file exposed as a table.

    Attributes:
        path: File path.
        format: Resolved table format.
        schema: Optional Pandera schema applied on load.
        read_options: Extra keyword arguments for the pandas reader.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        fmt: str | None = None,
        schema: type[pa.DataFrameModel] | None = None,
        config: DataIOConfig | None = None,
        **read_options: Any,
    ) -> None:
        """
        Initialize a table source.

        Args:
            path: File path.
            fmt: Format name. Inferred from the suffix if not given, falling
                back to the configured default format.
            schema: Pandera schema for validation.
            config: dataio configuration.
            **read_options: Passed to the pandas reader.
        """
        self.path = Path(path)
        self.config = config or DataIOConfig()
        self.format = _resolve_format(self.path, fmt, self.config)
        self.schema = schema
        self.read_options = read_options

    def _read_payload(self, handle: FileHandle) -> str | bytes:
        if self.format.binary:
            return handle.read_bytes()
        return handle.read_all()

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Load and optionally validate the table.

        Args:
            validate: Whether to validate against the schema, if one is set.

        Returns:
            Loaded (and optionally validated) DataFrame.

        Raises:
            NotFoundError: If the file does not exist.
            EncodingError: If a text format cannot be decoded.
            pandera.errors.SchemaError: If validation fails.
        """
        with log_context(path=str(self.path), format=self.format.name):
            log.info("Loading table")

            payload = with_file(
                self.path,
                HandleMode.READ,
                self._read_payload,
                config=self.config.handles,
            )
            df = self.format.read(payload, **self.read_options)
            log.info("Loaded table", rows=len(df), columns=list(df.columns))

            if validate and self.schema is not None:
                df = self.schema.validate(df)
                log.info("Schema validation passed", schema=self.schema.__name__)

        return df

    def into(self, sink: Sink[T], *, validate: bool = True) -> T:
        """
        Load the table and convert it with a sink.

        Args:
            sink: Callable converting the DataFrame, e.g. ``to_records``.
            validate: Whether to validate against the schema first.

        Returns:
            Whatever the sink produces.
        """
        return sink(self.load(validate=validate))


def read_table(
    path: str | Path,
    *,
    fmt: str | None = None,
    schema: type[pa.DataFrameModel] | None = None,
    config: DataIOConfig | None = None,
    **read_options: Any,
) -> pd.DataFrame:
    """
    Convenience function to load a table.

    Args:
        path: File path.
        fmt: Format name, inferred from the suffix if not given.
        schema: Pandera schema for validation.
        config: dataio configuration.
        **read_options: Passed to the pandas reader.

    Returns:
        Loaded DataFrame.
    """
    source = TableSource(path, fmt=fmt, schema=schema, config=config, **read_options)
    return source.load()


def write_table(
    df: pd.DataFrame,
    path: str | Path,
    *,
    fmt: str | None = None,
    config: DataIOConfig | None = None,
    **write_options: Any,
) -> int:
    """
    Serialize a DataFrame with pandas and write it through a scoped handle.

    Args:
        df: Table to write.
        path: Target path. Existing content is replaced.
        fmt: Format name, inferred from the suffix if not given.
        config: dataio configuration.
        **write_options: Passed to the pandas writer.

    Returns:
        Number of bytes written.
    """
    cfg = config or DataIOConfig()
    target = Path(path)
    info = _resolve_format(target, fmt, cfg)
    payload = info.write(df, **write_options)

    def _write(handle: FileHandle) -> int:
        if isinstance(payload, bytes):
            return handle.write_bytes(payload)
        return handle.write_text(payload)

    written = with_file(target, HandleMode.WRITE, _write, config=cfg.handles)
    log.info(
        "Wrote table",
        path=str(target),
        format=info.name,
        rows=len(df),
        bytes=written,
    )
    return written
