"""Subscriber identity sanitization for logging and error messages.

Subscriber ids (IMSIs) and phone numbers identify a person and must never
reach log output. This module masks them in strings and in structured data
before records are emitted.

Examples:
    >>> sanitize_text("template for 310260123456789")
    'template for 310260<REDACTED>'

    >>> sanitize_value({"subscriber_id": "310260123456789", "count": 42})
    {'subscriber_id': '<REDACTED>', 'count': 42}
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import TypeIs

# Redaction marker for sanitized values
REDACTED = "<REDACTED>"

# IMSI: 3-digit MCC + 2/3-digit MNC + MSIN, 14-15 digits total
# The MCC/MNC prefix identifies only the carrier and is kept for debugging
_IMSI_PATTERN = re.compile(r"(?<!\d)(\d{6})\d{8,9}(?!\d)")

# Sensitive field name patterns (case-insensitive)
_SENSITIVE_FIELD_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in [
        r".*subscriber.*",
        r".*imsi.*",
        r".*iccid.*",
        r".*msisdn.*",
        r".*phone.*number.*",
    ]
]


def is_sensitive_field(field_name: str) -> bool:
    """Check if a field name indicates subscriber identity data.

    Examples:
        >>> is_sensitive_field("subscriber_id")
        True
        >>> is_sensitive_field("merged_subscriber_ids")
        True
        >>> is_sensitive_field("subscription_id")
        False
    """
    return any(pattern.match(field_name) for pattern in _SENSITIVE_FIELD_PATTERNS)


def sanitize_text(text: str) -> str:
    """Mask IMSI-like digit runs in free text, keeping the carrier prefix.

    Args:
        text: Text to sanitize

    Returns:
        Text with subscriber digits replaced by the REDACTED marker
    """
    if not text:
        return text
    return _IMSI_PATTERN.sub(rf"\1{REDACTED}", text)


def _is_primitive(value: object) -> TypeIs[str | int | float | bool | None]:
    return isinstance(value, (str, int, float, bool, type(None)))


def _is_mapping(value: object) -> TypeIs[Mapping[str, object]]:
    return isinstance(value, Mapping)


def _is_sequence(value: object) -> TypeIs[Sequence[object]]:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def sanitize_value(
    value: object,
    *,
    field_name: str | None = None,
) -> object:
    """Recursively sanitize subscriber identities from structured data.

    Args:
        value: The value to sanitize (can be any type)
        field_name: Optional field name for context-aware sanitization

    Returns:
        Sanitized value; containers are rebuilt, other values returned as-is
        or as sanitized strings
    """
    # Field name alone is enough to redact the whole value
    if field_name and is_sensitive_field(field_name):
        return REDACTED

    if _is_primitive(value):
        if type(value) is str:
            return sanitize_text(value)
        return value

    if _is_mapping(value):
        return {key: sanitize_value(val, field_name=str(key)) for key, val in value.items()}

    if _is_sequence(value):
        sanitized_items = [sanitize_value(item) for item in value]
        if isinstance(value, tuple):
            return tuple(sanitized_items)
        return sanitized_items

    # Dataclasses and other objects: sanitize their string form
    return sanitize_text(str(value))


def sanitize_args(args: tuple[object, ...]) -> tuple[object, ...]:
    """Sanitize a tuple of logging arguments."""
    return tuple(sanitize_value(arg) for arg in args)
