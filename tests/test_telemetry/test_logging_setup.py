from __future__ import annotations

import json
import logging
from pathlib import Path

from stockdash.telemetry.logging_setup import LOG_FILE_NAME, JsonFormatter, configure_logging


def test_json_formatter_should_include_extra_fields() -> None:
    record = logging.LogRecord("stockdash.charts", logging.INFO, __file__, 10, "Chart %s", ("AAPL",), None)
    record.points = 30
    record.window = object()
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "Chart AAPL"
    assert payload["level"] == "INFO"
    assert payload["points"] == 30
    assert payload["timestamp"].endswith("Z")
    assert "args" not in payload
    assert isinstance(payload["window"], str)


def test_configure_logging_should_write_jsonl(tmp_path: Path) -> None:
    logger = configure_logging(log_dir=tmp_path / "logs", level="debug", logger_name="stockdash_logging_test")
    logger.info("Chart refreshed", extra={"symbol": "AAPL"})
    for handler in logger.handlers:
        handler.flush()
    lines = (tmp_path / "logs" / "dashboard_current.jsonl").read_text(encoding="utf-8").strip().splitlines()
    records = [json.loads(line) for line in lines]
    assert records[-1]["message"] == "Chart refreshed"
    assert records[-1]["symbol"] == "AAPL"
    assert logger.propagate is False
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def test_configure_logging_twice_should_replace_handlers(tmp_path: Path) -> None:
    configure_logging(log_dir=tmp_path, logger_name="stockdash_logging_reconfigure")
    logger = configure_logging(log_dir=tmp_path, level="warning", logger_name="stockdash_logging_reconfigure")
    assert len(logger.handlers) == 2
    assert logger.level == logging.WARNING
    assert (tmp_path / LOG_FILE_NAME).exists()
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
