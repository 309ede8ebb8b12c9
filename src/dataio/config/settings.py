"""
Typed configuration models using Pydantic.

All tunable behavior of handles, table loading and logging is defined
here with explicit typing and validation.
"""

import codecs

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ENCODING = "utf-8"
DEFAULT_CHUNK_SIZE = 64 * 1024


class HandleConfig(BaseModel):
    """Defaults applied when opening file handles."""

    model_config = ConfigDict(frozen=True)

    encoding: str = Field(
        default=DEFAULT_ENCODING, description="Text encoding for string reads and writes"
    )
    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        ge=1,
        description="Number of bytes requested per read when streaming lines",
    )
    create_parents: bool = Field(
        default=False,
        description="Create missing parent directories for write and append handles",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Ensure the encoding is known to the codec registry."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            msg = f"Unknown encoding: {v!r}"
            raise ValueError(msg) from e
        return v


class TabularConfig(BaseModel):
    """Table loading and preview configuration."""

    model_config = ConfigDict(frozen=True)

    default_format: str = Field(
        default="csv",
        description="Format used when it cannot be inferred from the file suffix",
    )
    preview_rows: int = Field(
        default=10, ge=1, description="Rows shown by the CLI table preview"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="WARNING", description="Log level name")
    json_output: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check the level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Invalid log level: {v!r}"
            raise ValueError(msg)
        return level


class DataIOConfig(BaseModel):
    """Complete dataio configuration."""

    model_config = ConfigDict(frozen=True)

    handles: HandleConfig = Field(default_factory=HandleConfig)
    tabular: TabularConfig = Field(default_factory=TabularConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def encoding(self) -> str:
        """Convenience accessor for the default text encoding."""
        return self.handles.encoding
