"""Sinks: convert a loaded table into a concrete Python structure."""

from collections.abc import Callable
from typing import Any, TypeVar

import pandas as pd

T = TypeVar("T")

Sink = Callable[[pd.DataFrame], T]


def to_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Return the DataFrame unchanged."""
    return df


def to_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    """One dict per row, keyed by column name."""
    return df.to_dict(orient="records")


def to_columns(df: pd.DataFrame) -> dict[str, list[Any]]:
    """One list per column, keyed by column name."""
    return df.to_dict(orient="list")
