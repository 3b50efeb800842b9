"""Pure calculation functions for the data usage header.

This module provides stateless, side-effect-free functions for deriving
the values shown in the usage header from a usage snapshot:
- Effective limit used as the right-hand label of the progress bar
- Used/reserved/remaining fractions of the progress bar
- Whole-number usage percentage for the dashboard summary

All functions take immutable dataclasses or plain integers and return
immutable results.
"""

from datausage_settings.types.models import DisplayRatios, UsageInfo

# Progress bar shown when nothing is known: empty and fully "remaining"
EMPTY_RATIOS = DisplayRatios(used_fraction=0.0, reserved_fraction=0.0, remaining_fraction=1.0)


def effective_limit(usage: UsageInfo) -> int:
    """Return the byte count the progress bar is scaled against.

    The configured limit wins when set; otherwise the warning level is used.
    If usage already exceeds that value, usage itself becomes the limit so
    the used fraction never exceeds 1.0.

    Args:
        usage: Usage snapshot (usage level must be non-negative)

    Returns:
        Effective limit in bytes (0 when no limit, no warning and no usage)

    Edge cases:
        - Negative warning/limit (disabled sentinels) count as unset
        - Both unset and zero usage returns 0

    Examples:
        >>> effective_limit(UsageInfo(usage_level=500, warning_level=1000, limit_level=0))
        1000
        >>> effective_limit(UsageInfo(usage_level=1500, warning_level=1000, limit_level=1000))
        1500
    """
    if usage.usage_level < 0:
        msg = "usage_level must be non-negative"
        raise ValueError(msg)

    limit = usage.limit_level
    if limit <= 0:
        limit = max(0, usage.warning_level)

    if usage.usage_level > limit:
        limit = usage.usage_level

    return limit


def compute_display_ratios(usage: UsageInfo) -> DisplayRatios:
    """Compute progress bar fractions from a usage snapshot.

    Args:
        usage: Usage snapshot (usage level must be non-negative)

    Returns:
        DisplayRatios whose fractions sum to 1.0. The reserved fraction is
        always 0.0.

    Edge cases:
        - Effective limit of 0 returns (0.0, 0.0, 1.0) instead of dividing by zero
        - Usage above the limit returns (1.0, 0.0, 0.0)

    Examples:
        >>> compute_display_ratios(UsageInfo(usage_level=500, warning_level=1000, limit_level=0))
        DisplayRatios(used_fraction=0.5, reserved_fraction=0.0, remaining_fraction=0.5)
        >>> compute_display_ratios(UsageInfo(usage_level=0))
        DisplayRatios(used_fraction=0.0, reserved_fraction=0.0, remaining_fraction=1.0)
    """
    limit = effective_limit(usage)

    # Edge case: No warning, no limit, no usage
    if limit == 0:
        return EMPTY_RATIOS

    used = usage.usage_level / limit
    remaining = (limit - usage.usage_level) / limit
    return DisplayRatios(used_fraction=used, reserved_fraction=0.0, remaining_fraction=remaining)


def usage_percentage(*, usage_level: int, limit_level: int) -> int:
    """Return usage as a whole percentage of the limit.

    Args:
        usage_level: Bytes used (must be non-negative)
        limit_level: Limit in bytes (must be positive)

    Returns:
        Percentage rounded half-up to a whole number; may exceed 100

    Examples:
        >>> usage_percentage(usage_level=250, limit_level=1000)
        25
        >>> usage_percentage(usage_level=2000, limit_level=1000)
        200
    """
    if usage_level < 0:
        msg = "usage_level must be non-negative"
        raise ValueError(msg)
    if limit_level <= 0:
        msg = "limit_level must be positive"
        raise ValueError(msg)

    # Integer arithmetic avoids float rounding on multi-terabyte counters
    return (usage_level * 200 + limit_level) // (limit_level * 2)
