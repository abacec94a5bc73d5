"""Centralised Loguru logger shared by every module of the project."""
from __future__ import annotations

import sys

from loguru import logger

DEFAULT_LEVEL = "INFO"


def configure_logging(level: str = DEFAULT_LEVEL) -> None:
    """Route project logs to stderr at ``level``.

    Loguru ships with a DEBUG sink attached to stderr; command-line entry points
    call this once after loading the configuration so the YAML ``logging.level``
    setting takes effect.
    """

    logger.remove()
    logger.add(sys.stderr, level=level.upper())


__all__ = ["configure_logging", "logger"]
