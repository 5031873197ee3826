"""Application-wide logger writing to platformdirs user_log_dir.

All records go to a rotating ``todolist.log``; modules ask for a child logger
(``get_logger("task_service")``) so the source shows up in each line.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "todolist_service"
_LOG_FILE = "todolist.log"
_LEVEL_ENV = "TODOLIST_LOG_LEVEL"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def _configure() -> logging.Logger:
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(_APP_NAME)
    level = os.environ.get(_LEVEL_ENV, "INFO").upper()
    logger.setLevel(getattr(logging, level, logging.INFO))

    has_file_handler = any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    )
    if not has_file_handler:
        log_dir = Path(user_log_dir(_APP_NAME))
        log_dir.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            log_dir / _LOG_FILE,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, or a named child of it.

    The log file handler is attached on first call.
    """
    logger = _configure()
    return logger.getChild(name) if name else logger
