"""Unit tests for logging configuration, filters and correlation IDs."""

from __future__ import annotations

import logging
import sys
from collections.abc import Generator

import pytest

from datausage_settings.utils.logging import (
    CorrelationIDFilter,
    SubscriberRedactingFilter,
    configure_logging,
    correlation_id_context,
    generate_correlation_id,
    get_correlation_id,
)
from datausage_settings.utils.sanitization import REDACTED

IMSI = "310260123456789"


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Restore root logger handlers and level after a test reconfigures them."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.mark.unit
class TestCorrelationId:
    """Test correlation ID generation and scoping."""

    def test_no_id_by_default(self) -> None:
        """Test no correlation ID is set outside a context."""
        assert get_correlation_id() is None

    def test_context_sets_and_resets(self) -> None:
        """Test the context sets the ID and restores the previous one."""
        with correlation_id_context("outer"):
            assert get_correlation_id() == "outer"
            with correlation_id_context("inner"):
                assert get_correlation_id() == "inner"
            assert get_correlation_id() == "outer"

        assert get_correlation_id() is None

    def test_context_resets_on_error(self) -> None:
        """Test the previous ID is restored when the body raises."""
        with pytest.raises(RuntimeError), correlation_id_context("failing"):
            raise RuntimeError("boom")

        assert get_correlation_id() is None

    def test_generate_with_prefix(self) -> None:
        """Test generated IDs carry the prefix and a short hex suffix."""
        correlation_id = generate_correlation_id("datausage")
        prefix, _, suffix = correlation_id.partition("-")

        assert prefix == "datausage"
        assert len(suffix) == 12
        assert set(suffix) <= set("0123456789abcdef")

    def test_generated_ids_are_unique(self) -> None:
        """Test two generated IDs differ."""
        assert generate_correlation_id() != generate_correlation_id()


@pytest.mark.unit
class TestCorrelationIDFilter:
    """Test CorrelationIDFilter."""

    def test_placeholder_without_context(self) -> None:
        """Test records outside a context get a placeholder."""
        record = _record("message")

        assert CorrelationIDFilter().filter(record)
        assert getattr(record, "correlation_id") == "N/A"

    def test_current_id_attached(self) -> None:
        """Test records inside a context carry its ID."""
        record = _record("message")

        with correlation_id_context("refresh-1"):
            _ = CorrelationIDFilter().filter(record)

        assert getattr(record, "correlation_id") == "refresh-1"


@pytest.mark.unit
class TestSubscriberRedactingFilter:
    """Test SubscriberRedactingFilter."""

    def test_message_and_args_masked(self) -> None:
        """Test IMSIs are masked in the message and its args."""
        record = _record(f"direct {IMSI} and %s", IMSI)

        assert SubscriberRedactingFilter().filter(record)
        assert IMSI not in record.getMessage()
        assert record.getMessage() == f"direct 310260{REDACTED} and 310260{REDACTED}"

    def test_extra_fields_masked(self) -> None:
        """Test sensitive extra fields are redacted and others kept."""
        record = _record("Template selected")
        record.subscriber_id = IMSI
        record.sections = 3

        _ = SubscriberRedactingFilter().filter(record)

        assert getattr(record, "subscriber_id") == REDACTED
        assert getattr(record, "sections") == 3

    def test_standard_attributes_untouched(self) -> None:
        """Test standard record attributes are not rewritten."""
        record = _record("message")
        record.correlation_id = "refresh-1"

        _ = SubscriberRedactingFilter().filter(record)

        assert record.name == "test"
        assert getattr(record, "correlation_id") == "refresh-1"


@pytest.mark.unit
class TestConfigureLogging:
    """Test configure_logging."""

    def test_console_handler(self, restore_root_logger: logging.Logger) -> None:
        """Test a single stderr handler with both filters is installed."""
        configure_logging(log_level="DEBUG")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        handler = restore_root_logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr
        filter_types = {type(log_filter) for log_filter in handler.filters}
        assert filter_types == {CorrelationIDFilter, SubscriberRedactingFilter}

    def test_reconfigure_replaces_handlers(self, restore_root_logger: logging.Logger) -> None:
        """Test repeated configuration does not duplicate handlers."""
        configure_logging()
        configure_logging(log_level="warning")

        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, restore_root_logger: logging.Logger) -> None:
        """Test an unknown level name falls back to INFO."""
        configure_logging(log_level="CHATTY")

        assert restore_root_logger.level == logging.INFO

    def test_console_disabled(self, restore_root_logger: logging.Logger) -> None:
        """Test no handlers are installed when every output is disabled."""
        configure_logging(enable_console=False, enable_syslog=False)

        assert restore_root_logger.handlers == []
