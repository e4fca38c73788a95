"""Structured Logging — formatter output and setup idempotence."""

import json
import logging
import sys

import pytest

from devcamper.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "devcamper.test", logging.WARNING, __file__, 1, "Deleted %s", ("review",), None,
    )
    record.__dict__.update(extra)
    return record


def test_formatter_emits_core_keys_and_set_context():
    line = json.loads(JSONFormatter().format(
        _record(error_code="not_found", http_status=404, resource_id=None),
    ))
    assert line["message"] == "Deleted review"
    assert line["level"] == "WARNING"
    assert line["logger"] == "devcamper.test"
    assert (line["error_code"], line["http_status"]) == ("not_found", 404)
    assert "resource_id" not in line


def test_formatter_includes_exception_type():
    try:
        raise KeyError("missing")
    except KeyError:
        record = _record()
        record.exc_info = sys.exc_info()
    line = json.loads(JSONFormatter().format(record))
    assert line["exc_type"] == "KeyError"
    assert "Traceback" in line["exception"]


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_is_idempotent(restore_root_logging):
    first = setup_logging("INFO")
    second = setup_logging("INFO")
    root = logging.getLogger()
    assert first not in root.handlers
    assert second in root.handlers
    assert isinstance(second.formatter, JSONFormatter)


def test_setup_logging_levels(restore_root_logging):
    setup_logging("warning", fmt="text")
    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    setup_logging("not-a-level")
    assert logging.getLogger().level == logging.INFO
