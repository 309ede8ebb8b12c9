"""
dataio: Safe reading and writing of data files.

This package provides a scoped file handle with guaranteed release,
text and byte helpers, and thin tabular sources and sinks that delegate
format parsing to pandas.
"""

from importlib.metadata import version

__version__ = version("dataio")

__all__ = ["__version__"]
