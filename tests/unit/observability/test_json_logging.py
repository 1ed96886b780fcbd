"""
StashIt — Structured Logging Tests

Tests the JSON formatter, trace id context and setup_logging().
"""

import json
import logging
import sys
from collections.abc import Generator

import pytest

from stashit.config import reload_config
from stashit.observability import (
    JSONFormatter,
    generate_trace_id,
    get_trace_id,
    set_trace_id,
    setup_logging,
)


@pytest.fixture(autouse=True)
def clear_trace_id() -> Generator[None, None, None]:
    set_trace_id(None)
    yield
    set_trace_id(None)


def make_record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="stashit.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="cache %s",
        args=("hit",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestTraceId:
    """Test suite for trace id helpers."""

    def test_unset_by_default(self) -> None:
        assert get_trace_id() is None

    def test_generate_sets_context(self) -> None:
        trace_id = generate_trace_id()

        assert get_trace_id() == trace_id
        assert len(trace_id) == 36


class TestJSONFormatter:
    """Test suite for JSONFormatter."""

    def test_formats_core_fields(self) -> None:
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "stashit.test"
        assert data["message"] == "cache hit"
        assert data["line"] == 10
        assert data["timestamp"].endswith("Z")
        assert "trace_id" not in data

    def test_includes_extra_fields(self) -> None:
        data = json.loads(JSONFormatter().format(make_record(operation="getItem", key="k", _private=1)))

        assert data["operation"] == "getItem"
        assert data["key"] == "k"
        assert "_private" not in data
        assert "args" not in data

    def test_includes_trace_id(self) -> None:
        set_trace_id("trace-abc")

        data = json.loads(JSONFormatter().format(make_record()))

        assert data["trace_id"] == "trace-abc"

    def test_serializes_unknown_types(self) -> None:
        data = json.loads(JSONFormatter().format(make_record(value=object())))

        assert data["value"].startswith("<object object")

    def test_includes_exception(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in data["exception"]


class TestSetupLogging:
    """Test suite for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_logger(self) -> Generator[None, None, None]:
        logger = logging.getLogger("stashit")
        handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
        yield
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate

    def test_json_handler(self) -> None:
        logger = setup_logging("WARNING", "json")

        assert logger.name == "stashit"
        assert logger.level == logging.WARNING
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_text_handler_replaces_previous(self) -> None:
        setup_logging("INFO", "json")
        logger = setup_logging("DEBUG", "text")

        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_defaults_from_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.setenv("LOG_FORMAT", "text")
        reload_config()

        logger = setup_logging()

        assert logger.level == logging.ERROR
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_explicit_arguments_override_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        reload_config()

        logger = setup_logging(level="INFO")

        assert logger.level == logging.INFO

    def test_rejects_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            setup_logging("INFO", "xml")
