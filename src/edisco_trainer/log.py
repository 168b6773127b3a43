"""loguru configuration shared by the CLI and tests."""

from __future__ import annotations

import sys

from loguru import logger

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_CHOICES = [
    "TRACE",
    "DEBUG",
    "INFO",
    "SUCCESS",
    "WARNING",
    "ERROR",
    "CRITICAL",
]


def configure_logger(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Replace loguru's handlers with a single stderr sink at ``level``."""
    normalized = level.upper()
    if normalized not in LOG_LEVEL_CHOICES:
        raise ValueError(f"Unsupported log level '{level}'")
    logger.remove()
    logger.add(
        sys.stderr,
        level=normalized,
        enqueue=False,
        colorize=False,
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level:<8}</level> | {message}",
    )
