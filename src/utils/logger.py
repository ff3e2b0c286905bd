"""Centralised Loguru logger shared by the risk engine and its entry points."""
from __future__ import annotations

import sys

from loguru import logger

_DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """Route all project logs to stderr at ``level``.

    Entry points call this once after reading the configuration file; library
    code only imports ``logger`` and never touches the sinks.
    """

    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_DEFAULT_FORMAT)


__all__ = ["configure_logging", "logger"]
