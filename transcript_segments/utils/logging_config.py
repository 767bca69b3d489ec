"""Centralized logging configuration for transcript segmentation.

This module provides consistent logging setup across the CLI and library
callers. Configuration respects the ``LOG_LEVEL`` environment variable and
provides sensible defaults for production and development.
"""

from __future__ import annotations

import logging
import sys
from typing import Literal

from transcript_segments.utils.constant import LOG_LEVEL

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(
    *,
    level: LogLevel | None = None,
    verbose: bool = False,
    quiet: bool = False,
    format_string: str | None = None,
) -> None:
    """Configure centralized logging for the application.

    This should be called once at application startup (CLI entry). Library
    code only obtains loggers via :func:`get_logger` and never configures
    handlers itself.

    Args:
        level: Explicit log level (overrides verbose/quiet).
        verbose: Enable verbose logging (DEBUG level).
        quiet: Suppress all non-critical logs.
        format_string: Custom log format (uses default if None).

    Examples:
        >>> # CLI verbose mode
        >>> configure_logging(verbose=True)

        >>> # Quiet mode for piping output
        >>> configure_logging(quiet=True)
    """
    # Determine effective log level
    if level is not None:
        log_level = getattr(logging, level.upper())
    elif verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.CRITICAL
    else:
        log_level = getattr(logging, LOG_LEVEL, logging.INFO)

    # Default format with timestamp
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Logs go to stderr so formatted segments on stdout stay machine-readable.
    logging.basicConfig(
        level=log_level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,  # Reconfigure even if already configured
    )

    if not quiet:
        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={logging.getLevelName(log_level)}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of calling module).

    Returns:
        Configured logger instance.

    Examples:
        >>> logger = get_logger(__name__)
        >>> logger.info("Segmentation started")
    """
    return logging.getLogger(name)
