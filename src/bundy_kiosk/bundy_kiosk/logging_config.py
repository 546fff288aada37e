from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from .core.constants import DEFAULT_LOG_LEVEL

NO_COLOR = os.getenv("NO_COLOR") is not None
LOG_FILE = os.getenv("LOG_FILE")

_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _C:
    RESET = "\033[0m"
    DIM = "\033[2m"
    YELLOW = "\033[33m"
    RED = "\033[31m"


LEVEL_COLORS = {
    logging.DEBUG: _C.DIM,
    logging.WARNING: _C.YELLOW,
    logging.ERROR: _C.RED,
    logging.CRITICAL: _C.RED,
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = None if NO_COLOR else LEVEL_COLORS.get(record.levelno)
        return f"{color}{line}{_C.RESET}" if color else line


def configure_logging(level_name: Optional[str] = None) -> logging.Logger:
    """Attach kiosk handlers to the ``bundy_kiosk`` logger (idempotent)."""

    name = (os.getenv("LOG_LEVEL") or level_name or DEFAULT_LOG_LEVEL).upper()
    level = getattr(logging, name, logging.INFO)

    logger = logging.getLogger(__name__.rsplit(".", 1)[0])
    logger.setLevel(level)
    logger.handlers.clear()

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(ColorFormatter(_FORMAT, datefmt=_DATEFMT))
    logger.addHandler(stream_handler)

    if LOG_FILE:
        try:
            file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot open LOG_FILE %s: %s", LOG_FILE, exc)
        else:
            file_handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
            logger.addHandler(file_handler)

    return logger
