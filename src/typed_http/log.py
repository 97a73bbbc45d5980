"""Logging setup for the command line tool."""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>"


def check_level(level: str) -> str:
    """Return the upper-cased level name.

    Raises:
        ValueError: If loguru has no level with that name
    """
    name = level.strip().upper()
    logger.level(name)
    return name


def configure_logging(level: str = "WARNING") -> None:
    """Replace loguru's sinks with a single stderr sink at ``level``."""
    level = check_level(level)
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)
