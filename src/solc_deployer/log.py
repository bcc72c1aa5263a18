"""Logging configuration for solc-deployer library."""

import logging
import sys

import structlog


def configure_logging(verbose: bool = False) -> None:
    """
    Configure structlog for console output on stderr.

    Args:
        verbose: Include debug events such as cache hits
    """
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
