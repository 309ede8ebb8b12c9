"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any, TextIO

import structlog


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structured logging for the library and CLI.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, render log events as JSON lines.
        stream: Output stream for log events. Defaults to stderr so that
            file content printed by the CLI stays clean on stdout.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)
    out = stream if stream is not None else sys.stderr

    logging.basicConfig(
        format="%(message)s",
        stream=out,
        level=log_level,
    )

    logger_factory: Any
    if stream is None:
        # Resolve stderr per logger so redirected streams are honored
        def logger_factory(*args: Any) -> structlog.PrintLogger:
            return structlog.PrintLogger(sys.stderr)

    else:
        logger_factory = structlog.PrintLoggerFactory(file=stream)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=out.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )


def configure_library_defaults() -> None:
    """
    Route events through stdlib logging until an application configures them.

    Events are filtered by the stdlib logger level, so debug and info stay
    silent by default and warnings reach stderr via logging's fallback handler.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_library_defaults()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Configured structlog logger.
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind key-value pairs to every log event emitted inside the block.

    Example:
        with log_context(path="data/measurements.csv"):
            log.info("Loading table")  # includes path

    Args:
        **kwargs: Key-value pairs to add to log context.

    Returns:
        Context manager that binds the values.
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
