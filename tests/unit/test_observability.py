"""
Tests for iacmodel logging.

Tests the structured and human-readable formatters, the AdaptLogger
event helpers, and logging configuration.
"""

from __future__ import annotations

import io
import json
import logging

import pytest

from iacmodel.observability import (
    AdaptLogger,
    HumanReadableFormatter,
    StructuredFormatter,
    configure_logging,
    get_logger,
)


def _record(msg: str = "Test message", level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="iacmodel.test",
        level=level,
        pathname="/app/module.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_logging():
    """Restore the iacmodel logger after a test reconfigures it."""
    yield
    configure_logging(level="INFO", format="human")


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_format_basic_record(self) -> None:
        """Test formatting a basic log record."""
        data = json.loads(StructuredFormatter().format(_record()))
        assert data["message"] == "Test message"
        assert data["level"] == "info"
        assert data["logger"] == "iacmodel.test"
        assert data["timestamp"].endswith("Z")

    def test_format_without_timestamp(self) -> None:
        """Test formatting without timestamp."""
        formatter = StructuredFormatter(include_timestamp=False)
        data = json.loads(formatter.format(_record(level=logging.WARNING)))
        assert "timestamp" not in data
        assert data["level"] == "warning"

    def test_format_with_location(self) -> None:
        """Test formatting with location info."""
        formatter = StructuredFormatter(include_location=True)
        data = json.loads(formatter.format(_record()))
        assert data["location"]["line"] == 42

    def test_extra_fields_are_top_level(self) -> None:
        """Test fields passed with a log call become top-level keys."""
        record = _record(event_type="adaptation.completed", family="azure.storage")
        data = json.loads(StructuredFormatter().format(record))
        assert data["event_type"] == "adaptation.completed"
        assert data["family"] == "azure.storage"
        assert "lineno" not in data

    def test_formatter_extra_fields(self) -> None:
        """Test formatter-level fields are added to every record."""
        formatter = StructuredFormatter(extra_fields={"run": "ci"})
        assert json.loads(formatter.format(_record()))["run"] == "ci"


class TestHumanReadableFormatter:
    """Tests for HumanReadableFormatter."""

    def test_format_basic_record(self) -> None:
        """Test formatting a basic log record."""
        formatter = HumanReadableFormatter(use_colors=False, include_timestamp=False)
        output = formatter.format(_record())
        assert output.split() == ["INFO", "iacmodel.test:", "Test", "message"]

    def test_timestamp_prefix(self) -> None:
        """Test the timestamp is bracketed at the start."""
        output = HumanReadableFormatter(use_colors=False).format(_record())
        assert output.startswith("[")


class TestAdaptLogger:
    """Tests for AdaptLogger."""

    @pytest.fixture
    def logger(self) -> AdaptLogger:
        """Return a logger under the iacmodel namespace."""
        return get_logger("tests")

    def test_get_logger_namespace(self, logger) -> None:
        """Test loggers live under the iacmodel namespace."""
        assert logger.logger.name == "iacmodel.tests"

    def test_adaptation_completed_event(self, logger, caplog) -> None:
        """Test the completion event carries its fields."""
        with caplog.at_level(logging.INFO, logger="iacmodel"):
            logger.adaptation_completed("azure.storage", entity_count=3, duration_seconds=0.5)
        record = caplog.records[-1]
        assert record.event_type == "adaptation.completed"
        assert record.family == "azure.storage"
        assert record.entity_count == 3

    def test_adaptation_failed_event(self, logger, caplog) -> None:
        """Test failures are logged at error level."""
        with caplog.at_level(logging.INFO, logger="iacmodel"):
            logger.adaptation_failed("azure.synapse", "boom")
        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error == "boom"

    def test_debug_events(self, logger, caplog) -> None:
        """Test orphan and default events are debug records."""
        with caplog.at_level(logging.DEBUG, logger="iacmodel"):
            logger.orphan_synthesized("azure.storage", None, "azurerm_storage_container.c")
            logger.field_defaulted("a.enable_https_traffic_only", True, "absent")
        orphan, defaulted = caplog.records[-2:]
        assert orphan.event_type == "orphan.synthesized"
        assert orphan.orphan_key is None
        assert defaulted.default is True
        assert defaulted.levelno == logging.DEBUG

    def test_context_fields(self, logger, caplog) -> None:
        """Test persistent context is attached until cleared."""
        logger.set_context(run_id="r1")
        with caplog.at_level(logging.INFO, logger="iacmodel"):
            logger.info("with context")
            logger.clear_context()
            logger.info("without context")
        assert caplog.records[-2].run_id == "r1"
        assert not hasattr(caplog.records[-1], "run_id")


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_level_and_single_handler(self, restore_logging) -> None:
        """Test configuration replaces handlers and sets the level."""
        configure_logging(level="DEBUG")
        configure_logging(level="WARNING")
        root = logging.getLogger("iacmodel")
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_json_format(self, restore_logging) -> None:
        """Test json format installs the structured formatter."""
        configure_logging(format="json", extra_fields={"service": "iacmodel"})
        handler = logging.getLogger("iacmodel").handlers[0]
        assert isinstance(handler.formatter, StructuredFormatter)
        stream = io.StringIO()
        handler.setStream(stream)
        get_logger("tests").warning("hello", family="azure.storage")
        data = json.loads(stream.getvalue())
        assert data["message"] == "hello"
        assert data["family"] == "azure.storage"
        assert data["service"] == "iacmodel"
