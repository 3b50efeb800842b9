"""Subscription and capability resolution.

Reads the subscription and connectivity collaborators once per refresh and
reduces them to the plain values the evaluation functions take.
"""

import logging

from datausage_settings.core.templates import has_usable_ethernet, is_valid_subscription, observe_ethernet_bytes
from datausage_settings.types.aliases import SubscriptionId
from datausage_settings.types.models import INVALID_SUBSCRIPTION_ID, CapabilitySet, NetworkKind
from datausage_settings.types.protocols import ConnectivityQuery, StatsQuery, SubscriptionQuery

logger = logging.getLogger(__name__)


def resolve_default_subscription_id(query: SubscriptionQuery | None) -> SubscriptionId:
    """Return the subscription whose usage the header should show.

    The default data subscription is preferred. When it is unset or reported
    as INVALID_SUBSCRIPTION_ID, the first known subscription is used.

    Args:
        query: Subscription collaborator, or None if the service is missing

    Returns:
        Subscription id, or INVALID_SUBSCRIPTION_ID if there is none
    """
    if query is None:
        return INVALID_SUBSCRIPTION_ID

    default_id = query.get_default_data_subscription_id()
    if is_valid_subscription(default_id):
        return default_id

    all_ids = query.list_all_subscription_ids()
    if not all_ids:
        logger.debug("No subscriptions present")
        return INVALID_SUBSCRIPTION_ID

    return all_ids[0]


def detect_capabilities(
    connectivity: ConnectivityQuery,
    stats: StatsQuery | None = None,
) -> CapabilitySet:
    """Snapshot the transports available on this device.

    Ethernet only counts as available when it has carried traffic before.

    Args:
        connectivity: Connectivity collaborator
        stats: Stats collaborator used to probe Ethernet history

    Returns:
        CapabilitySet for this refresh
    """
    ethernet_supported = connectivity.is_network_supported(NetworkKind.ETHERNET)
    # Skip the stats probe entirely when there is no Ethernet hardware
    observed_bytes = observe_ethernet_bytes(stats) if ethernet_supported else 0
    has_ethernet = has_usable_ethernet(ethernet_supported, observed_bytes)

    capabilities = CapabilitySet(
        has_mobile_data=connectivity.is_network_supported(NetworkKind.MOBILE),
        has_wifi_radio=connectivity.is_network_supported(NetworkKind.WIFI),
        has_ethernet=has_ethernet,
    )
    logger.debug(
        "Detected network capabilities",
        extra={
            "mobile": capabilities.has_mobile_data,
            "wifi": capabilities.has_wifi_radio,
            "ethernet": capabilities.has_ethernet,
        },
    )
    return capabilities
