"""Logging bootstrap for the application."""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.settings import LOGGING

LOGGER_NAME = "weekly_task"


def configure_logging(
    path: Optional[Path] = None,
    *,
    level: Optional[int] = None,
    name: str = LOGGER_NAME,
) -> logging.Logger:
    """Attach a rotating file handler to the application logger once."""

    logger = logging.getLogger(name)
    if not logger.handlers:
        target = Path(path or LOGGING.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            target,
            maxBytes=LOGGING.max_bytes,
            backupCount=LOGGING.backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOGGING.fmt))
        logger.addHandler(handler)
    logger.setLevel(level if level is not None else LOGGING.level)
    return logger


__all__ = ["LOGGER_NAME", "configure_logging"]
