"""Rotating file log for FlowFast.

Modules log through ``logging.getLogger(__name__)``. Everything under the
``flowfast_cli`` namespace reaches the file once ``get_logger`` has run.
The threshold comes from the profile's ``log.level``: the command wrapper
opens the log at INFO and ``start`` narrows or widens it after loading the
profile, so DEBUG shows every tick being scheduled and cancelled.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "flowfast_cli"
_LOG_FILE = "flowfast.log"
_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 3
_DEFAULT_LEVEL = "INFO"

_logger: logging.Logger | None = None


def log_file() -> Path:
    """Where the rotating log is written."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
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
    return handler


def get_logger(level: str | None = None) -> logging.Logger:
    """Return the application logger, attaching the file handler once.

    *level* is a level name such as ``"DEBUG"``. It is applied on every call
    that passes it, so a later call can retune an already open log.
    """
    global _logger
    if _logger is None:
        logger = logging.getLogger(_APP_NAME)
        if not logger.handlers:
            logger.addHandler(_file_handler(log_file()))
        logger.setLevel(_DEFAULT_LEVEL)
        logger.propagate = False
        _logger = logger

    if level is not None:
        _logger.setLevel(level.upper())
    return _logger
