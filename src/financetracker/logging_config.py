"""Logging setup: readable console output plus a rotating JSON log file."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import BaseConfig

LOGGER_NAME = "financetracker"
LOG_FILENAME = "financetracker.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

_DEV_CONSOLE = ("[%(asctime)s] %(levelname)-8s %(name)s:%(lineno)d %(message)s", "%H:%M:%S")
_PROD_CONSOLE = ("%(asctime)s %(levelname)s %(name)s: %(message)s", "%Y-%m-%d %H:%M:%S")

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` fields are nested under ``"extra"``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            exc_type, exc_value, _tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value is not None else None,
                "traceback": self.formatException(record.exc_info),
            }
        extra = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if extra:
            entry["extra"] = extra
        return json.dumps(entry, default=str)


def _console_handler(dev_mode: bool) -> logging.Handler:
    fmt, datefmt = _DEV_CONSOLE if dev_mode else _PROD_CONSOLE
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO if dev_mode else logging.WARNING)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach console and ``<DATA_DIR>/logs`` handlers to the app logger.

    Calling it again replaces the handlers instead of adding more, so app
    factories built repeatedly in tests log each line once.
    """

    log_path = Path(config.DATA_DIR) / "logs" / LOG_FILENAME
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(_console_handler(config.DEV_MODE))
    logger.addHandler(_file_handler(log_path))

    logger.info(
        "Logging initialized",
        extra={"dev_mode": config.DEV_MODE, "log_file": str(log_path)},
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger nested under ``financetracker``; ``__name__`` of package modules works as-is."""

    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
