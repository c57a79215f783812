"""Structured Logging — JSONFormatter output and setup_logging idempotency."""

import json
import logging

from app.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "app.services.user_controller", logging.ERROR, __file__, 1,
        "login-v2 error: %s", ("boom",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_core_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "ERROR"
    assert payload["logger"] == "app.services.user_controller"
    assert payload["message"] == "login-v2 error: boom"
    assert "timestamp" in payload


def test_json_formatter_surfaces_extra_fields():
    payload = json.loads(JSONFormatter().format(
        _record(component="UserController", route="login-v2", error_code="EMAIL_EXISTS"),
    ))
    assert payload["component"] == "UserController"
    assert payload["route"] == "login-v2"
    assert payload["error_code"] == "EMAIL_EXISTS"
    assert "user_id" not in payload


def test_setup_logging_does_not_stack_handlers():
    before = len(logging.root.handlers)
    setup_logging("DEBUG", "json")
    setup_logging("WARNING", "text")
    try:
        assert len(logging.root.handlers) == before + 1
        assert logging.root.level == logging.WARNING
    finally:
        for handler in list(logging.root.handlers):
            if handler.get_name() == "hive-user-api":
                logging.root.removeHandler(handler)
