"""Tests for logging configuration, formatters and the component adapter."""

import json
import logging

import pytest

from talentmatch.logging import ComponentLoggerAdapter, get_logger
from talentmatch.logging.config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from talentmatch.logging.context import log_context


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def logger():
    """Create a test logger for building records."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


def make_record(logger, message="Search completed", extra=None):
    return logger.makeRecord(
        "talentmatch.search.service", logging.INFO, "service.py", 1, message, (), None, extra=extra
    )


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    output = JSONFormatter().format(make_record(logger))

    log_obj = json.loads(output)
    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Search completed"
    assert log_obj["timestamp"].endswith("Z")
    # YYYY-MM-DDTHH:MM:SS.sssZ
    assert len(log_obj["timestamp"]) == 24


def test_json_formatter_with_extra_fields(logger):
    """Test JSONFormatter includes extra fields and serializes sets."""
    record = make_record(
        logger,
        extra={
            "event": "search.completed",
            "returned": 12,
            "truncated": False,
            "active_dimensions": frozenset({"skills", "experience"}),
        },
    )

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "search.completed"
    assert log_obj["returned"] == 12
    assert log_obj["truncated"] is False
    assert log_obj["active_dimensions"] == ["experience", "skills"]
    assert "name" not in log_obj
    assert "levelno" not in log_obj


def test_contextual_filter_adds_static_fields(logger):
    """Test ContextualFilter adds service and environment."""
    record = make_record(logger)

    ContextualFilter(service="talentmatch", environment="test").filter(record)

    assert record.service == "talentmatch"
    assert record.environment == "test"


def test_contextual_filter_adds_context_fields(logger):
    """Test ContextualFilter copies fields from the active log context."""
    with log_context(search_id="s-42", candidate_id="c-7"):
        record = make_record(logger)
        ContextualFilter().filter(record)

    assert record.search_id == "s-42"
    assert record.candidate_id == "c-7"


def test_contextual_filter_keeps_explicit_extra(logger):
    """Test that explicit extra fields win over context fields."""
    with log_context(candidate_id="from-context"):
        record = make_record(logger, extra={"candidate_id": "from-call"})
        ContextualFilter().filter(record)

    assert record.candidate_id == "from-call"


def test_key_value_formatter(logger):
    """Test KeyValueFormatter output and value quoting."""
    formatter = KeyValueFormatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    record = make_record(
        logger,
        extra={"event": "search.completed", "returned": 3, "note": "two words", "top_score": None},
    )
    ContextualFilter().filter(record)

    output = formatter.format(record)

    assert "[INFO] talentmatch.search.service: Search completed" in output
    assert "event=search.completed" in output
    assert "returned=3" in output
    assert 'note="two words"' in output
    assert "top_score=null" in output
    assert "service=" not in output


def test_component_adapter_tags_records(caplog):
    """Test that get_logger with a component adds it to every record."""
    adapter = get_logger("talentmatch.tests.adapter", component="matching")
    assert isinstance(adapter, ComponentLoggerAdapter)

    with caplog.at_level(logging.INFO, logger="talentmatch.tests.adapter"):
        adapter.info("scored", extra={"event": "matching.candidate.scored"})
        adapter.info("override", extra={"component": "custom"})

    assert caplog.records[0].component == "matching"
    assert caplog.records[0].event == "matching.candidate.scored"
    assert caplog.records[1].component == "custom"


def test_get_logger_without_component():
    """Test that get_logger without a component returns a plain logger."""
    assert isinstance(get_logger("talentmatch.tests.plain"), logging.Logger)


def test_configure_logging_invalid_level(restore_root_logger):
    """Test configure_logging rejects invalid log level."""
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="LOUD")


def test_configure_logging_invalid_format(restore_root_logger):
    """Test configure_logging rejects invalid format type."""
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="xml")


@pytest.mark.parametrize(
    "format_type,formatter_cls",
    [("json", JSONFormatter), ("key-value", KeyValueFormatter)],
)
def test_configure_logging_installs_single_handler(restore_root_logger, format_type, formatter_cls):
    """Test that configure_logging replaces root handlers with one formatted handler."""
    configure_logging(level="warning", format_type=format_type, environment="test")

    root_logger = restore_root_logger
    assert len(root_logger.handlers) == 1
    assert root_logger.level == logging.WARNING

    handler = root_logger.handlers[0]
    assert isinstance(handler.formatter, formatter_cls)
    contextual = [f for f in handler.filters if isinstance(f, ContextualFilter)]
    assert contextual and contextual[0].environment == "test"
