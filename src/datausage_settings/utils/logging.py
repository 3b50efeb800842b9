"""Structured logging infrastructure with correlation ID tracking.

This module provides the logging setup for datausage-settings: console and
optional syslog handlers, a correlation ID carried in a ContextVar so every
record emitted during one screen refresh can be grouped, and a filter that
masks subscriber identities before records are written.
"""

import contextvars
import logging
import logging.handlers
import sys
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from typing import Final, override

from datausage_settings.utils.sanitization import sanitize_args, sanitize_text, sanitize_value

# Correlation ID context variable for grouping records of one refresh cycle
correlation_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id",
    default=None,
)

# Log format constants
DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - %(message)s"

SYSLOG_LOG_FORMAT: Final[str] = (
    "datausage-settings[%(process)d]: %(levelname)s - [%(correlation_id)s] - %(name)s - %(message)s"
)

DEFAULT_SYSLOG_ADDRESS: Final[str] = "/dev/log"

# LogRecord attributes that are never sanitized
_STANDARD_ATTRS: Final[frozenset[str]] = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "correlation_id",
    }
)


class CorrelationIDFilter(logging.Filter):
    """Logging filter that adds the current correlation ID to log records."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = correlation_id_var.get()
        record.correlation_id = correlation_id if correlation_id is not None else "N/A"
        return True


class SubscriberRedactingFilter(logging.Filter):
    """Logging filter that masks subscriber identities in log records.

    Sanitizes the message text, the %-formatting args tuple, and any extra
    fields passed to the logger.

    Examples:
        >>> logger.info("Using subscriber %s", "310260123456789")
        # Logged as: "Using subscriber 310260<REDACTED>"

        >>> logger.debug("Template", extra={"subscriber_id": "310260123456789"})
        # extra field logged as: "<REDACTED>"
    """

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = sanitize_text(record.msg)

        if record.args and isinstance(record.args, tuple):
            record.args = sanitize_args(record.args)

        for attr_name in list(record.__dict__.keys()):
            if attr_name in _STANDARD_ATTRS or attr_name.startswith("_"):
                continue
            attr_value: object = getattr(record, attr_name)  # pyright: ignore[reportAny]
            setattr(record, attr_name, sanitize_value(attr_value, field_name=attr_name))

        return True


def configure_logging(
    *,
    log_level: str = "INFO",
    enable_syslog: bool = False,
    syslog_address: str = DEFAULT_SYSLOG_ADDRESS,
    enable_console: bool = True,
) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_syslog: Enable syslog handler
        syslog_address: Syslog socket address
        enable_console: Enable console output handler (stderr)

    Example:
        >>> configure_logging(log_level="DEBUG", enable_syslog=False)
        >>> logger = logging.getLogger(__name__)
        >>> with correlation_id_context("refresh-1"):
        ...     logger.info("Screen refreshed")
    """
    root_logger = logging.getLogger()

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    correlation_filter = CorrelationIDFilter()
    redacting_filter = SubscriberRedactingFilter()

    if enable_syslog:
        try:
            syslog_handler = logging.handlers.SysLogHandler(
                address=syslog_address,
                facility=logging.handlers.SysLogHandler.LOG_USER,
            )
            syslog_handler.setFormatter(logging.Formatter(SYSLOG_LOG_FORMAT))
            syslog_handler.addFilter(correlation_filter)
            syslog_handler.addFilter(redacting_filter)
            root_logger.addHandler(syslog_handler)
        except OSError as exc:
            # Syslog not available (e.g., development environment)
            print(
                f"Warning: Could not connect to syslog at {syslog_address}: {exc}",
                file=sys.stderr,
            )

    if enable_console:
        # Report goes to stdout, so logs stay on stderr
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        console_handler.addFilter(correlation_filter)
        console_handler.addFilter(redacting_filter)
        root_logger.addHandler(console_handler)


def get_correlation_id() -> str | None:
    """Get the current correlation ID from context."""
    return correlation_id_var.get()


def generate_correlation_id(prefix: str | None = None) -> str:
    """Return a new short correlation ID, optionally prefixed.

    Examples:
        >>> generate_correlation_id("refresh").startswith("refresh-")
        True
    """
    short_id = uuid.uuid4().hex[:12]
    return f"{prefix}-{short_id}" if prefix else short_id


@contextmanager
def correlation_id_context(correlation_id: str | None) -> Generator[None, None, None]:
    """Temporarily set the correlation ID for the current context.

    Args:
        correlation_id: The correlation ID to set (None to clear)

    Yields:
        None
    """
    token = correlation_id_var.set(correlation_id)
    try:
        yield
    finally:
        correlation_id_var.reset(token)
