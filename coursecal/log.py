"""
Structured logging configuration using structlog.

Console output for interactive use, JSON output when piping into other tools.
Modules obtain their logger through get_logger(__name__). Without
setup_logging(), only warnings and errors are printed, to stderr.
"""

import logging
import sys

import structlog


def setup_logging(json_output: bool = False, log_level: str = "WARNING") -> None:
    """Configure structlog processors and output format.

    Args:
        json_output: If True, render JSON lines. If False, console format.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    # stdout may carry calendar text (export without --out)
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _configure_library_defaults() -> None:
    """Until setup_logging() runs: warnings and above only, on stderr."""
    if structlog.is_configured():
        return
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance bound with the module name."""
    _configure_library_defaults()
    return structlog.get_logger(name)
