"""Logging configuration shared by the web app and the CLI.

Both read the level from ``LOG_LEVEL``; the web app defaults to INFO so drink
additions and deletions show up, the CLI to WARNING so its output stays clean.
"""

import logging
import os

LOGGER_NAME = "drink_safer"
LOG_LEVEL_ENV = "LOG_LEVEL"


def log_level_from_env(default: str = "INFO") -> str:
    """Level name from ``LOG_LEVEL``, or ``default`` when unset or unknown."""
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if isinstance(logging.getLevelName(raw), int):
        return raw
    return default.upper()


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach one stream handler to the ``drink_safer`` logger and set its level.

    Calling it again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    name = (level or log_level_from_env()).upper()
    logger.setLevel(getattr(logging, name, logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
