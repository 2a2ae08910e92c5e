"""JSON-lines logging for the dashboard refresh runner.

Each refresh cycle logs one record per chart with the symbol, point count and
latest overlay values passed through ``extra=``. Those keys land at the top
level of the JSON object so the log file can be filtered by symbol.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging import Logger
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Iterator, Tuple

LOG_FILE_NAME = "dashboard_current.jsonl"
RETAINED_DAYS = 14

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def _utc_stamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=timezone.utc).isoformat().replace("+00:00", "Z")


def _extra_fields(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
    """Yield the caller's ``extra=`` keys; unserializable values become ``repr``."""

    for key, value in record.__dict__.items():
        if key.startswith("_") or key in _RESERVED_ATTRS:
            continue
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            value = repr(value)
        yield key, value


class JsonFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _utc_stamp(record.created),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        for key, value in _extra_fields(record):
            payload.setdefault(key, value)
        return json.dumps(payload, ensure_ascii=False)


def _attach(logger: Logger, handler: logging.Handler) -> None:
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)


def configure_logging(
    *,
    log_dir: Path,
    level: str = "INFO",
    logger_name: str = "stockdash",
) -> Logger:
    """Route ``logger_name`` to ``<log_dir>/dashboard_current.jsonl`` and stderr.

    The file rolls over at midnight. Handlers from an earlier call are closed
    first, so calling this again does not duplicate output.
    """

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    logger = logging.getLogger(logger_name)
    logger.setLevel(level.upper())
    for existing in list(logger.handlers):
        existing.close()
        logger.removeHandler(existing)

    _attach(logger, TimedRotatingFileHandler(log_file, when="midnight", backupCount=RETAINED_DAYS, encoding="utf-8"))
    _attach(logger, logging.StreamHandler())

    logger.propagate = False
    logger.debug("JSON logging configured", extra={"log_file": str(log_file)})
    return logger


__all__ = ["configure_logging", "JsonFormatter", "LOG_FILE_NAME"]
