"""Default network template selection.

Pure functions deciding which traffic-accounting template the data usage
screen summarizes, and whether the Ethernet section is worth showing.
None of these functions perform I/O on their own; ``observe_ethernet_bytes``
only calls the stats collaborator it is handed.
"""

import logging
from collections.abc import Sequence
from typing import Final, TypeGuard

from datausage_settings.core.exceptions import StatsUnavailableError
from datausage_settings.types.aliases import NetworkTemplate, SubscriptionId
from datausage_settings.types.models import (
    INVALID_SUBSCRIPTION_ID,
    Ethernet,
    MobileAll,
    WifiWildcard,
)
from datausage_settings.types.protocols import StatsQuery

logger = logging.getLogger(__name__)

# Full history window (epoch milliseconds) used when probing for Ethernet traffic
ALL_TIME_START: Final[int] = -(2**63)
ALL_TIME_END: Final[int] = 2**63 - 1


def build_mobile_template(
    subscriber_id: str | None,
    merged_subscriber_ids: Sequence[str] | None = None,
) -> MobileAll:
    """Build a mobile template normalized against merged subscriber ids.

    Carriers that account several SIMs as one expose a merged id set. When
    the subscriber belongs to that set, the template is rewritten to the
    first merged id and matches every member, so usage from all merged SIMs
    lands in the same bucket.

    Args:
        subscriber_id: Subscriber identity, or None if the SIM is unreadable
        merged_subscriber_ids: Merged id set reported by telephony, if any

    Returns:
        Normalized MobileAll template

    Examples:
        >>> build_mobile_template("310260000000001")
        MobileAll(subscriber_id='310260000000001', match_subscriber_ids=('310260000000001',))
        >>> build_mobile_template("b", ["a", "b"])
        MobileAll(subscriber_id='a', match_subscriber_ids=('a', 'b'))
    """
    if subscriber_id is None:
        return MobileAll(subscriber_id=None, match_subscriber_ids=())

    merged = tuple(merged_subscriber_ids) if merged_subscriber_ids else ()
    if subscriber_id in merged:
        return MobileAll(subscriber_id=merged[0], match_subscriber_ids=merged)

    return MobileAll(subscriber_id=subscriber_id, match_subscriber_ids=(subscriber_id,))


def select_default_template(
    has_mobile_data: bool,
    subscription_id: SubscriptionId | None,
    has_wifi: bool,
    *,
    subscriber_id: str | None = None,
    merged_subscriber_ids: Sequence[str] | None = None,
) -> NetworkTemplate:
    """Select the template the usage header summarizes.

    Precedence is mobile (when supported and a valid subscription exists),
    then Wi-Fi, then Ethernet. Ethernet is returned as the last resort even
    when no Ethernet hardware is present; callers that care must check
    hardware separately.

    Args:
        has_mobile_data: Whether the device supports mobile data
        subscription_id: Default data subscription, possibly invalid
        has_wifi: Whether the device has a Wi-Fi radio
        subscriber_id: Subscriber identity of ``subscription_id``
        merged_subscriber_ids: Merged subscriber id set, if any

    Returns:
        Exactly one template; this function never raises

    Examples:
        >>> select_default_template(False, INVALID_SUBSCRIPTION_ID, True)
        WifiWildcard()
        >>> select_default_template(False, INVALID_SUBSCRIPTION_ID, False)
        Ethernet()
    """
    if has_mobile_data and is_valid_subscription(subscription_id):
        return build_mobile_template(subscriber_id, merged_subscriber_ids)
    if has_wifi:
        return WifiWildcard()
    return Ethernet()


def is_valid_subscription(subscription_id: SubscriptionId | None) -> TypeGuard[SubscriptionId]:
    """Return True if the id refers to a real subscription."""
    return subscription_id is not None and subscription_id != INVALID_SUBSCRIPTION_ID


def has_usable_ethernet(ethernet_supported: bool, observed_bytes: int) -> bool:
    """Decide whether the Ethernet section should be shown.

    Both the hardware must be present and some traffic must have been
    recorded, which hides Ethernet on emulators and never-used ports.

    Examples:
        >>> has_usable_ethernet(True, 1)
        True
        >>> has_usable_ethernet(True, 0)
        False
        >>> has_usable_ethernet(False, 10_000)
        False
    """
    return ethernet_supported and observed_bytes > 0


def observe_ethernet_bytes(stats: StatsQuery | None) -> int:
    """Return all-time Ethernet traffic, failing closed to zero.

    Args:
        stats: Stats collaborator, or None if no session could be opened

    Returns:
        Total bytes recorded on the Ethernet template, or 0 if the stats
        service is unavailable
    """
    if stats is None:
        logger.debug("No stats session available, assuming no Ethernet traffic")
        return 0

    try:
        total = stats.get_total_bytes(Ethernet(), ALL_TIME_START, ALL_TIME_END)
    except StatsUnavailableError as exc:
        logger.warning(
            "Ethernet traffic history unavailable, hiding Ethernet section",
            extra={"error": str(exc), "cause": exc.cause},
        )
        return 0

    return max(0, total)
