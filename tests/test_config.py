"""Tests for configuration system."""

from pathlib import Path

import pytest

from dataio.config import (
    DataIOConfig,
    HandleConfig,
    LoggingConfig,
    TabularConfig,
    load_config,
)


class TestHandleConfig:
    """Tests for HandleConfig."""

    def test_defaults(self) -> None:
        """Test default handle settings."""
        config = HandleConfig()
        assert config.encoding == "utf-8"
        assert config.chunk_size == 64 * 1024
        assert config.create_parents is False

    def test_unknown_encoding(self) -> None:
        """Test that unknown encodings are rejected."""
        with pytest.raises(ValueError, match="Unknown encoding"):
            HandleConfig(encoding="klingon-8")

    def test_chunk_size_must_be_positive(self) -> None:
        """Test chunk size bounds."""
        with pytest.raises(ValueError):
            HandleConfig(chunk_size=0)

    def test_frozen(self) -> None:
        """Test that configs are immutable."""
        config = HandleConfig()
        with pytest.raises(ValueError):
            config.encoding = "latin-1"  # type: ignore[misc]


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_level_is_normalized(self) -> None:
        """Test that level names are upper-cased."""
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level(self) -> None:
        """Test that unknown levels are rejected."""
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingConfig(level="chatty")


class TestTabularConfig:
    """Tests for TabularConfig."""

    def test_preview_rows_bounds(self) -> None:
        """Test that preview_rows must be positive."""
        with pytest.raises(ValueError):
            TabularConfig(preview_rows=0)


class TestLoadConfig:
    """Tests for YAML config loading."""

    def test_no_path_returns_defaults(self) -> None:
        """Test that loading without a file gives defaults."""
        assert load_config() == DataIOConfig()

    def test_load_full_config(self, tmp_path: Path) -> None:
        """Test loading every section."""
        path = tmp_path / "dataio.yaml"
        path.write_text(
            """
handles:
  encoding: latin-1
  chunk_size: 128
  create_parents: true
tabular:
  default_format: tsv
  preview_rows: 3
logging:
  level: info
  json_output: true
""",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.encoding == "latin-1"
        assert config.handles.chunk_size == 128
        assert config.handles.create_parents is True
        assert config.tabular.default_format == "tsv"
        assert config.tabular.preview_rows == 3
        assert config.logging.level == "INFO"
        assert config.logging.json_output is True

    def test_partial_config_keeps_defaults(self, tmp_path: Path) -> None:
        """Test that omitted keys fall back to defaults."""
        path = tmp_path / "dataio.yaml"
        path.write_text("tabular:\n  preview_rows: 5\n", encoding="utf-8")

        config = load_config(path)

        assert config.tabular.preview_rows == 5
        assert config.handles == HandleConfig()

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that an empty file gives defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == DataIOConfig()

    def test_env_var_interpolation(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test environment variable interpolation with and without defaults."""
        monkeypatch.setenv("TEST_DATAIO_ENCODING", "cp1252")
        monkeypatch.delenv("TEST_DATAIO_LEVEL", raising=False)
        path = tmp_path / "dataio.yaml"
        path.write_text(
            """
handles:
  encoding: "${TEST_DATAIO_ENCODING:utf-8}"
logging:
  level: "${TEST_DATAIO_LEVEL:error}"
""",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.encoding == "cp1252"
        assert config.logging.level == "ERROR"

    def test_base_yaml_inheritance(self, tmp_path: Path) -> None:
        """Test that a sibling base.yaml is merged under the main file."""
        (tmp_path / "base.yaml").write_text(
            "handles:\n  encoding: latin-1\n  chunk_size: 256\n", encoding="utf-8"
        )
        path = tmp_path / "dataio.yaml"
        path.write_text("handles:\n  chunk_size: 512\n", encoding="utf-8")

        config = load_config(path)

        assert config.encoding == "latin-1"
        assert config.handles.chunk_size == 512

    def test_explicit_base_path(self, tmp_path: Path) -> None:
        """Test inheritance from an explicitly given base file."""
        base = tmp_path / "shared.yaml"
        base.write_text("tabular:\n  default_format: json\n", encoding="utf-8")
        path = tmp_path / "dataio.yaml"
        path.write_text("tabular:\n  preview_rows: 2\n", encoding="utf-8")

        config = load_config(path, base_path=base)

        assert config.tabular.default_format == "json"
        assert config.tabular.preview_rows == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_value(self, tmp_path: Path) -> None:
        """Test that invalid values raise errors."""
        path = tmp_path / "dataio.yaml"
        path.write_text("handles:\n  encoding: nonsense-codec\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Unknown encoding"):
            load_config(path)

    def test_section_must_be_mapping(self, tmp_path: Path) -> None:
        """Test that scalar sections are rejected."""
        path = tmp_path / "dataio.yaml"
        path.write_text("handles: utf-8\n", encoding="utf-8")

        with pytest.raises(ValueError, match="must be a mapping"):
            load_config(path)
