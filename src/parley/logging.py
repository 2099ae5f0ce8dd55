"""Logging helpers for Parley.

The library only ever logs through the ``parley`` logger hierarchy
(``parley.scoring``, ``parley.generation``...). Host applications usually
configure logging themselves; ``configure_logging`` is a convenience for
scripts and notebooks.
"""

from __future__ import annotations

import logging
from typing import Any

LOGGER_NAME = "parley"
_configured = False


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child logger when ``name`` is given."""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)


def configure_logging(level: str | None = None, *, force: bool = False, **extra: Any) -> None:
    """Configure the parley logger once.

    If the logger already has handlers attached we assume the embedding
    application configured logging and we only adjust the level (unless
    ``force`` is True).
    """
    global _configured
    logger = get_logger()
    if not force and _configured:
        if level:
            logger.setLevel(level.upper())
        return
    if level:
        logger.setLevel(level.upper())
    if not logger.handlers or force:
        h = logging.StreamHandler()
        fmt = extra.get(
            "format",
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        datefmt = extra.get("datefmt", "%H:%M:%S")
        h.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
        if force:
            logger.handlers.clear()
        logger.addHandler(h)
    logger.propagate = False
    _configured = True
