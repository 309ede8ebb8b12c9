"""
Configuration management with typed Pydantic models.

Provides handle, tabular and logging settings with YAML loading.
"""

from dataio.config.loader import load_config
from dataio.config.settings import (
    DataIOConfig,
    HandleConfig,
    LoggingConfig,
    TabularConfig,
)

__all__ = [
    "DataIOConfig",
    "HandleConfig",
    "LoggingConfig",
    "TabularConfig",
    "load_config",
]
