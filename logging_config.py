"""Centralized logging configuration for Planet Builder."""

from __future__ import annotations

import logging
import os
from typing import Optional

from config import LOG_LEVEL_ENV

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = "INFO"
LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def parse_log_level(value: str) -> str:
    """Normalize a level name such as ``debug``.

    Raises:
        ValueError: if ``value`` is not one of LEVEL_NAMES
    """
    name = value.strip().upper()
    if name not in LEVEL_NAMES:
        raise ValueError(f"unknown log level {value!r} (choose from {', '.join(LEVEL_NAMES)})")
    return name


def configure_logging(
    level: Optional[str] = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
) -> str:
    """Configure root logging.

    Args:
        level: Optional explicit log level. Falls back to the
            ``PLANET_LOG_LEVEL`` env var or INFO when not provided.
        format: Log format string.
        datefmt: Date format string.

    Returns:
        The resolved level name. An unknown name resolves to INFO and is
        reported as a warning once logging is up.
    """
    raw_level = level if level is not None else os.getenv(LOG_LEVEL_ENV)
    rejected = None
    try:
        resolved_level = parse_log_level(raw_level) if raw_level else DEFAULT_LEVEL
    except ValueError as e:
        rejected = e
        resolved_level = DEFAULT_LEVEL

    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)
    logging.getLogger().setLevel(resolved_level)

    logger = logging.getLogger(__name__)
    if rejected is not None:
        logger.warning("%s; using %s", rejected, resolved_level)
    logger.debug("Logging configured at %s", resolved_level)
    return resolved_level
