"""Protocol definitions for platform collaborators.

This module defines structural subtyping protocols for the platform
services the evaluation layer reads from. Implementations live outside the
pure core (see ``datausage_settings.platform``); the core only ever calls
them through these interfaces.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from datausage_settings.types.aliases import NetworkTemplate, SubscriptionId
from datausage_settings.types.models import NetworkKind, NetworkPolicy, UsageInfo


@runtime_checkable
class ConnectivityQuery(Protocol):
    """Reports which network transports the device supports."""

    def is_network_supported(self, kind: NetworkKind) -> bool:
        """Check whether the device supports a transport.

        Args:
            kind: Transport to check

        Returns:
            True if the hardware for this transport is present
        """
        ...


@runtime_checkable
class SubscriptionQuery(Protocol):
    """Read access to the cellular subscription service."""

    def get_default_data_subscription_id(self) -> SubscriptionId | None:
        """Return the subscription selected for mobile data.

        None or INVALID_SUBSCRIPTION_ID both mean no default is set.
        """
        ...

    def list_all_subscription_ids(self) -> Sequence[SubscriptionId]:
        """Return every known subscription, in platform order."""
        ...

    def list_active_subscription_ids(self) -> Sequence[SubscriptionId] | None:
        """Return the currently active subscriptions, or None if unknown."""
        ...


@runtime_checkable
class TelephonyQuery(Protocol):
    """Read access to subscriber identities."""

    def get_subscriber_id(self, subscription_id: SubscriptionId) -> str | None:
        """Return the subscriber identity (IMSI) for a subscription."""
        ...

    def get_merged_subscriber_ids(self) -> Sequence[str] | None:
        """Return subscriber ids the carrier accounts as one, or None."""
        ...


@runtime_checkable
class StatsQuery(Protocol):
    """Read access to historical network statistics."""

    def get_total_bytes(self, template: NetworkTemplate, from_time: int, to_time: int) -> int:
        """Return total bytes recorded for a template in a time window.

        Args:
            template: Traffic-accounting template to sum
            from_time: Window start in epoch milliseconds
            to_time: Window end in epoch milliseconds

        Returns:
            Total received and transmitted bytes

        Raises:
            StatsUnavailableError: If the stats session cannot be opened
        """
        ...


@runtime_checkable
class PolicyQuery(Protocol):
    """Read access to configured network policies."""

    def get_policy(self, template: NetworkTemplate) -> NetworkPolicy:
        """Return the warning/limit policy for a template."""
        ...


@runtime_checkable
class UsageQuery(Protocol):
    """Read access to the current billing-period usage."""

    def get_data_usage_info(self, template: NetworkTemplate) -> UsageInfo | None:
        """Return the usage snapshot for a template, or None if unavailable."""
        ...


@runtime_checkable
class SystemSettingsQuery(Protocol):
    """Read access to secure/system settings and navigation mode."""

    def get_secure_int(self, name: str, default: int) -> int:
        """Return an integer from the secure settings table."""
        ...

    def get_system_int(self, name: str, default: int) -> int:
        """Return an integer from the system settings table."""
        ...

    def is_edge_to_edge_enabled(self) -> bool:
        """Return True if gesture (edge-to-edge) navigation is active."""
        ...

    def is_swipe_up_enabled(self) -> bool:
        """Return True if two-button swipe-up navigation is active."""
        ...


@runtime_checkable
class UserQuery(Protocol):
    """Read access to the current user's role."""

    def is_admin_user(self) -> bool:
        """Return True if the current user may change device-wide policy."""
        ...
