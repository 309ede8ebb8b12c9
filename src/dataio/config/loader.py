"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance
from a sibling ``base.yaml``. Every key is optional.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from dataio.config.settings import (
    DataIOConfig,
    HandleConfig,
    LoggingConfig,
    TabularConfig,
)


_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}")


def _expand_env(text: str) -> str:
    """
    Replace ${VAR} and ${VAR:default} references with environment values.

    An unset variable without a default expands to an empty string.
    """
    return _ENV_REFERENCE.sub(
        lambda ref: os.environ.get(ref["name"], ref["default"] or ""), text
    )


def _expand_env_tree(node: Any) -> Any:
    """Apply env expansion to every string inside nested YAML data."""
    if isinstance(node, str):
        return _expand_env(node)
    if isinstance(node, list):
        return list(map(_expand_env_tree, node))
    if isinstance(node, dict):
        return {key: _expand_env_tree(child) for key, child in node.items()}
    return node


def _merge_sections(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Overlay override onto base; nested mappings merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        below = merged.get(key)
        if isinstance(below, dict) and isinstance(value, dict):
            value = _merge_sections(below, value)
        merged[key] = value
    return merged


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config section, rejecting non-mapping values."""
    section = data.get(name) or {}
    if not isinstance(section, dict):
        msg = f"Config section '{name}' must be a mapping, got {type(section).__name__}"
        raise ValueError(msg)
    return section


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        msg = f"Config file must contain a mapping: {path}"
        raise ValueError(msg)
    return _expand_env_tree(data) if data else {}


def load_config(
    config_path: Path | None = None,
    base_path: Path | None = None,
) -> DataIOConfig:
    """
    Load dataio configuration from YAML file(s).

    Recognized layout::

        handles:
          encoding: utf-8
          chunk_size: 65536
          create_parents: false
        tabular:
          default_format: csv
          preview_rows: 10
        logging:
          level: WARNING
          json_output: false

    Args:
        config_path: Path to the main configuration file. If None,
            defaults are returned.
        base_path: Optional path to base configuration for inheritance.
            If None, a ``base.yaml`` next to config_path is used when present.

    Returns:
        Fully validated DataIOConfig instance.

    Raises:
        FileNotFoundError: If config_path does not exist.
        ValueError: If a value fails validation.
    """
    if config_path is None:
        return DataIOConfig()

    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        base_data = (
            load_yaml(potential_base)
            if potential_base.exists() and potential_base != config_path
            else {}
        )

    merged = _merge_sections(base_data, load_yaml(config_path))

    handles_data = _section(merged, "handles")
    tabular_data = _section(merged, "tabular")
    logging_data = _section(merged, "logging")

    return DataIOConfig(
        handles=HandleConfig(**handles_data),
        tabular=TabularConfig(**tabular_data),
        logging=LoggingConfig(**logging_data),
    )
