"""Tests for log formatting."""

import json
import logging
import sys

import pytest

from colcache.observability.logging import (
    ConsoleFormatter,
    JsonFormatter,
    LogContext,
    configure_logging,
    current_context,
)


def make_record(message: str = "Derived 4 keys") -> logging.LogRecord:
    return logging.LogRecord(
        name="colcache.cache.deriver",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestJsonFormatter:
    """Test JsonFormatter."""

    def test_basic_fields(self) -> None:
        data = json.loads(JsonFormatter().format(make_record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "colcache.cache.deriver"
        assert data["message"] == "Derived 4 keys"
        assert "table" not in data

    def test_includes_table_context(self) -> None:
        with LogContext(table="default.sales"):
            data = json.loads(JsonFormatter().format(make_record()))
        assert data["table"] == "default.sales"

    def test_includes_extras(self) -> None:
        record = make_record()
        record.key_count = 12
        record.unserializable = object()
        data = json.loads(JsonFormatter().format(record))
        assert data["key_count"] == 12
        assert isinstance(data["unserializable"], str)

    def test_exception_info(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record()
            record.exc_info = sys.exc_info()
        data = json.loads(JsonFormatter().format(record))
        assert data["exception"]["type"] == "RuntimeError"
        assert data["exception"]["message"] == "boom"


class TestConsoleFormatter:
    """Test ConsoleFormatter."""

    def test_plain_output(self) -> None:
        output = ConsoleFormatter(use_colors=False).format(make_record())
        assert "| INFO     | colcache.cache.deriver | Derived 4 keys" in output

    def test_context_suffix(self) -> None:
        with LogContext(table="db.t"):
            output = ConsoleFormatter(use_colors=False).format(make_record())
        assert output.endswith("| table=db.t")


class TestLogContext:
    """Test LogContext."""

    def test_restores_previous_value(self) -> None:
        with LogContext(table="outer"):
            with LogContext(table="inner"):
                assert current_context() == {"table": "inner"}
            assert current_context() == {"table": "outer"}
        assert current_context() == {}

    def test_binds_table_and_segment(self) -> None:
        with LogContext(table="db.t"):
            with LogContext(segment="0"):
                assert current_context() == {"table": "db.t", "segment": "0"}
                data = json.loads(JsonFormatter().format(make_record()))
            assert current_context() == {"table": "db.t"}

        assert data["table"] == "db.t"
        assert data["segment"] == "0"

    def test_rejects_unknown_keys(self) -> None:
        with pytest.raises(ValueError, match="request_id"):
            LogContext(request_id="abc")


def test_configure_logging_replaces_handlers() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging(json_format=True, level="debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

        configure_logging(json_format=False, level="WARNING", use_colors=False)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, ConsoleFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
