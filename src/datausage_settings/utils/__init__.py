"""Shared utility modules for logging and subscriber-identity redaction."""

from datausage_settings.utils.logging import (
    configure_logging,
    correlation_id_context,
    generate_correlation_id,
    get_correlation_id,
)
from datausage_settings.utils.sanitization import (
    REDACTED,
    is_sensitive_field,
    sanitize_text,
    sanitize_value,
)

__all__ = [
    # Logging
    "configure_logging",
    "correlation_id_context",
    "generate_correlation_id",
    "get_correlation_id",
    # Sanitization
    "REDACTED",
    "is_sensitive_field",
    "sanitize_text",
    "sanitize_value",
]
