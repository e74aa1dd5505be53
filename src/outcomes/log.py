"""Logger setup for the outcomes package.

The library only attaches a NullHandler; applications decide where records go.
"""

from __future__ import annotations

import logging
from typing import get_args

from .config import LogLevel, get_settings

logger = logging.getLogger("outcomes")
logger.addHandler(logging.NullHandler())

_LEVELS: tuple[str, ...] = get_args(LogLevel)


def get_logger(name: str) -> logging.Logger:
    """Child logger under the outcomes namespace."""
    return logger.getChild(name)


def configure_logging(level: str | None = None) -> int:
    """Set the outcomes logger level, defaulting to OUTCOMES_LOG_LEVEL.

    Returns the numeric level applied.

    Raises:
        ValueError: If level is not a standard level name
    """
    name = (level or get_settings().logging.level).upper()
    if name not in _LEVELS:
        raise ValueError(f"Unknown level: {name}. Use one of {', '.join(_LEVELS)}")
    level_int: int = getattr(logging, name)
    logger.setLevel(level_int)
    return level_int


__all__ = ["configure_logging", "get_logger", "logger"]
