"""Application logging.

Everything goes to one rotating file. The terminal belongs to command output
and the TUI, so nothing is logged there.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "tasklite"
LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
LOG_DIR_ENV = "TASKLITE_LOG_DIR"
LOG_LEVEL_ENV = "TASKLITE_LOG_LEVEL"

_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 3


def log_path() -> Path:
    """``$TASKLITE_LOG_DIR/tasklite.log``, else under the platform log dir."""
    base = os.environ.get(LOG_DIR_ENV) or user_log_dir(LOGGER_NAME)
    return Path(base) / f"{LOGGER_NAME}.log"


def get_logger(name: str | None = None) -> logging.Logger:
    """The ``tasklite`` logger, or its ``tasklite.<name>`` child.

    The file handler is attached on first use.
    """
    app_logger = logging.getLogger(LOGGER_NAME)
    if not app_logger.handlers:
        _configure(app_logger)
    return app_logger.getChild(name) if name else app_logger


def _configure(app_logger: logging.Logger) -> None:
    path = log_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    app_logger.addHandler(handler)

    level = os.environ.get(LOG_LEVEL_ENV, "DEBUG").upper()
    if level not in logging.getLevelNamesMapping():
        level = "DEBUG"
    app_logger.setLevel(level)
    app_logger.propagate = False
