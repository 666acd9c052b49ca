"""Structured logging — JSON lines with selected extras."""

import json
import logging

from roster_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "roster_api.test", logging.ERROR, __file__, 1, "store failed", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "ERROR"
    assert log["logger"] == "roster_api.test"
    assert log["message"] == "store failed"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(error_code="STORE_ERROR", table="users", secret="x"),
    ))
    assert log["error_code"] == "STORE_ERROR"
    assert log["table"] == "users"
    assert "secret" not in log


def test_setup_logging_does_not_stack_handlers():
    first = setup_logging("DEBUG", "json")
    second = setup_logging("INFO", "text")
    try:
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert sum(h is second for h in logging.root.handlers) == 1
        assert logging.root.level == logging.INFO
    finally:
        logging.root.removeHandler(second)
