"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any

import structlog

# Library default: silent until the application configures logging.
logging.getLogger("fars").addHandler(logging.NullHandler())


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    capture_warnings: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Module loggers are backed by the standard library, so nothing is printed
    until this is called. Logs go to stderr so tables printed by the CLI on
    stdout stay clean.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, output logs as JSON lines.
        capture_warnings: If True, route Python warnings (year coercion and
            per-year load failures) through the logging system.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )
    logging.captureWarnings(capture_warnings)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
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
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance.

    Events are rendered by structlog and handed to the standard library
    logger of the same name, whose level and handlers decide what is shown.

    Args:
        name: Logger name (typically __name__ of the module).
    """
    return structlog.wrap_logger(logging.getLogger(name))


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Context manager binding values to every log event inside the block.

    Example:
        with log_context(year=2014):
            log.info("Reading accidents")  # event carries year=2014
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
