"""Tests for logging configuration and formatters."""

import json
import logging
import sys

import pytest

from jobboard.logging import ComponentLoggerAdapter, get_logger
from jobboard.logging.config import (
    SERVICE_NAME,
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from jobboard.logging.context import clear_log_context, log_context


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    clear_log_context()
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_log_context()


def make_record(message="Broadcast finished", **extra):
    record = logging.LogRecord(
        name="jobboard.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    def test_installs_single_handler(self):
        configure_logging(level="DEBUG", format_type="json", environment="test")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_key_value_format(self):
        configure_logging(level="info", format_type="key-value")
        assert isinstance(logging.getLogger().handlers[0].formatter, KeyValueFormatter)

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(level="LOUD")

    def test_invalid_format(self):
        with pytest.raises(ValueError, match="Invalid log format"):
            configure_logging(format_type="xml")


class TestContextualFilter:
    def test_adds_service_environment_and_context(self):
        record = make_record()

        with log_context(job_id="job-1"):
            assert ContextualFilter(environment="prod").filter(record) is True

        assert record.service == SERVICE_NAME
        assert record.environment == "prod"
        assert record.job_id == "job-1"

    def test_explicit_extra_wins_over_context(self):
        record = make_record(job_id="explicit")

        with log_context(job_id="job-1"):
            ContextualFilter().filter(record)

        assert record.job_id == "explicit"


class TestFormatters:
    def test_json_payload(self):
        record = make_record(event="broadcast.completed", notifications_sent=2)

        payload = json.loads(JSONFormatter().format(record))

        assert payload["message"] == "Broadcast finished"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "jobboard.test"
        assert payload["event"] == "broadcast.completed"
        assert payload["notifications_sent"] == 2
        assert payload["timestamp"].endswith("Z")

    def test_json_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record()
            record.exc_info = sys.exc_info()

        payload = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in payload["exc_info"]

    def test_key_value_pairs(self):
        record = make_record(
            event="broadcast.completed", failed=False, error=None, job_title="Data Analyst",
            service=SERVICE_NAME,
        )

        line = KeyValueFormatter("%(levelname)s %(message)s").format(record)

        assert line.startswith("INFO Broadcast finished")
        assert "event=broadcast.completed" in line
        assert "failed=false" in line
        assert "error=null" in line
        assert 'job_title="Data Analyst"' in line
        assert "service=" not in line


class TestGetLogger:
    def test_plain_logger(self):
        assert isinstance(get_logger("jobboard.x"), logging.Logger)

    def test_component_adapter_merges_extra(self):
        adapter = get_logger("jobboard.x", component="broadcaster")
        assert isinstance(adapter, ComponentLoggerAdapter)

        _, kwargs = adapter.process("msg", {"extra": {"event": "broadcast.started"}})

        assert kwargs["extra"] == {"component": "broadcaster", "event": "broadcast.started"}
