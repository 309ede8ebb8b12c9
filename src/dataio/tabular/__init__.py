"""
Tabular sources and sinks.

Format parsing is delegated to pandas; dataio only moves decoded text
or bytes between scoped file handles and the pandas readers and writers.
"""

from dataio.tabular.formats import FormatInfo, FormatRegistry
from dataio.tabular.sinks import Sink, to_columns, to_frame, to_records
from dataio.tabular.sources import TableSource, read_table, write_table

__all__ = [
    "FormatInfo",
    "FormatRegistry",
    "Sink",
    "TableSource",
    "read_table",
    "to_columns",
    "to_frame",
    "to_records",
    "write_table",
]
