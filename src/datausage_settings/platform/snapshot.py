"""Platform collaborators backed by a configured device snapshot.

``SnapshotPlatform`` implements every query protocol the presenters use
over a ``DeviceSnapshotConfig``, so screens can be evaluated from a YAML
file without a device.
"""

import logging
from collections.abc import Sequence

from datausage_settings.core.config import DeviceSnapshotConfig, SubscriptionsConfig
from datausage_settings.core.exceptions import StatsUnavailableError
from datausage_settings.core.services import PlatformServices
from datausage_settings.types.aliases import NetworkTemplate, SubscriptionId
from datausage_settings.types.models import NetworkKind, NetworkPolicy, UsageInfo

logger = logging.getLogger(__name__)

# Secure/system settings names served from the recents section
_SECURE_SETTINGS = ("hardware_keys_enable",)
_SYSTEM_SETTINGS = ("rr_config_anim",)


class SnapshotSubscriptions:
    """Subscription service view of a snapshot."""

    config: SubscriptionsConfig

    def __init__(self, config: SubscriptionsConfig) -> None:
        self.config = config

    def get_default_data_subscription_id(self) -> SubscriptionId | None:
        return self.config.default_data

    def list_all_subscription_ids(self) -> Sequence[SubscriptionId]:
        return tuple(self.config.all)

    def list_active_subscription_ids(self) -> Sequence[SubscriptionId] | None:
        if self.config.active is None:
            return None
        return tuple(self.config.active)


class SnapshotPlatform:
    """Connectivity, telephony, stats, policy, usage, user and settings queries."""

    snapshot: DeviceSnapshotConfig

    def __init__(self, snapshot: DeviceSnapshotConfig) -> None:
        """Initialize the platform view.

        Args:
            snapshot: Validated device snapshot
        """
        self.snapshot = snapshot

    def is_network_supported(self, kind: NetworkKind) -> bool:
        networks = self.snapshot.networks
        match kind:
            case NetworkKind.MOBILE:
                return networks.mobile
            case NetworkKind.WIFI:
                return networks.wifi
            case NetworkKind.ETHERNET:
                return networks.ethernet

    def get_subscriber_id(self, subscription_id: SubscriptionId) -> str | None:
        subscriptions = self.snapshot.subscriptions
        if subscriptions is None:
            return None
        return subscriptions.subscriber_ids.get(subscription_id)

    def get_merged_subscriber_ids(self) -> Sequence[str] | None:
        subscriptions = self.snapshot.subscriptions
        if subscriptions is None or subscriptions.merged_subscriber_ids is None:
            return None
        return tuple(subscriptions.merged_subscriber_ids)

    def get_total_bytes(self, template: NetworkTemplate, from_time: int, to_time: int) -> int:
        if not self.snapshot.stats_available:
            msg = "Network stats session could not be opened"
            raise StatsUnavailableError(msg, cause="stats_available is false")
        logger.debug(
            "Serving stats from snapshot",
            extra={"template": template.kind, "from_time": from_time, "to_time": to_time},
        )
        return self.snapshot.history_bytes.get(template.kind.value, 0)

    def get_policy(self, template: NetworkTemplate) -> NetworkPolicy:
        policy = self.snapshot.policies.get(template.kind.value)
        if policy is None:
            return NetworkPolicy()
        return policy.to_policy()

    def get_data_usage_info(self, template: NetworkTemplate) -> UsageInfo | None:
        usage = self.snapshot.usage.get(template.kind.value)
        if usage is None:
            return None
        return usage.to_usage_info()

    def is_admin_user(self) -> bool:
        return self.snapshot.is_admin

    def get_secure_int(self, name: str, default: int) -> int:
        if name not in _SECURE_SETTINGS:
            return default
        return int(getattr(self.snapshot.recents, name))  # pyright: ignore[reportAny]  # known int fields

    def get_system_int(self, name: str, default: int) -> int:
        if name not in _SYSTEM_SETTINGS:
            return default
        return int(getattr(self.snapshot.recents, name))  # pyright: ignore[reportAny]  # known int fields

    def is_edge_to_edge_enabled(self) -> bool:
        return self.snapshot.recents.edge_to_edge

    def is_swipe_up_enabled(self) -> bool:
        return self.snapshot.recents.swipe_up


def build_services(snapshot: DeviceSnapshotConfig) -> PlatformServices:
    """Build the collaborator bundle for a device snapshot.

    A null ``subscriptions`` section models a device without a
    subscription service.
    """
    platform = SnapshotPlatform(snapshot)
    subscriptions = (
        SnapshotSubscriptions(snapshot.subscriptions) if snapshot.subscriptions is not None else None
    )
    return PlatformServices(
        connectivity=platform,
        telephony=platform,
        policies=platform,
        usage=platform,
        user=platform,
        settings=platform,
        subscriptions=subscriptions,
        stats=platform,
    )
