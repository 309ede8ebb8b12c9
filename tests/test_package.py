"""Basic package tests to verify installation."""


def test_package_imports() -> None:
    """Verify the main package can be imported."""
    import dataio

    assert dataio.__version__


def test_files_module_imports() -> None:
    """Verify the files module exports the handle API."""
    from dataio.files import (
        AccessDeniedError,
        EncodingError,
        FileHandle,
        HandleMode,
        NotFoundError,
        open_handle,
        with_file,
    )

    assert FileHandle is not None
    assert HandleMode.READ.value == "read"
    assert open_handle is not None
    assert with_file is not None
    assert issubclass(NotFoundError, FileNotFoundError)
    assert issubclass(AccessDeniedError, PermissionError)
    assert issubclass(EncodingError, ValueError)


def test_config_module_imports() -> None:
    """Verify config module structure is correct."""
    from dataio.config import (
        DataIOConfig,
        HandleConfig,
        LoggingConfig,
        TabularConfig,
        load_config,
    )

    assert DataIOConfig is not None
    assert HandleConfig is not None
    assert LoggingConfig is not None
    assert TabularConfig is not None
    assert load_config is not None


def test_tabular_module_imports() -> None:
    """Verify tabular module structure is correct."""
    from dataio.tabular import (
        FormatRegistry,
        TableSource,
        read_table,
        to_records,
        write_table,
    )

    assert FormatRegistry is not None
    assert TableSource is not None
    assert read_table is not None
    assert write_table is not None
    assert to_records is not None
