"""Tests for structured logging formatters and request context."""

import json
import logging
import sys

import pytest

from exec_stats.observability.logging import (
    HumanReadableFormatter,
    StructuredFormatter,
    clear_log_context,
    configure_logging,
    set_log_context,
)


def make_record(message="statistics loaded", level=logging.INFO, exc_info=None):
    return logging.LogRecord(
        name="exec_stats.test",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=exc_info,
    )


@pytest.fixture(autouse=True)
def _reset_context():
    clear_log_context()
    yield
    clear_log_context()


class TestStructuredFormatter:

    def test_basic_fields(self):
        entry = json.loads(StructuredFormatter().format(make_record()))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "exec_stats.test"
        assert entry["message"] == "statistics loaded"
        assert "org_id" not in entry

    def test_context_fields(self):
        set_log_context(org_id="org-1", user_id="user-1", request_id="req-1")
        entry = json.loads(StructuredFormatter().format(make_record()))
        assert entry["org_id"] == "org-1"
        assert entry["user_id"] == "user-1"
        assert entry["request_id"] == "req-1"

    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record(level=logging.ERROR, exc_info=sys.exc_info())
        entry = json.loads(StructuredFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]


class TestHumanReadableFormatter:

    def test_context_suffix(self):
        set_log_context(org_id="org-1", request_id="abc")
        line = HumanReadableFormatter().format(make_record())
        assert "statistics loaded" in line
        assert line.endswith("[org=org-1, req=abc]")

    def test_no_suffix_without_context(self):
        line = HumanReadableFormatter().format(make_record())
        assert line.endswith("statistics loaded")

    def test_clear_log_context(self):
        set_log_context(user_id="user-1")
        clear_log_context()
        assert "user=" not in HumanReadableFormatter().format(make_record())


class TestConfigureLogging:

    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_production_uses_json(self):
        configure_logging(environment="production", log_level="warning")
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_development_is_human_readable(self):
        configure_logging(environment="development")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, HumanReadableFormatter)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
