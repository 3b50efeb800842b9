"""Type definitions and protocols for datausage-settings.

This package provides:
- Data models (immutable dataclasses)
- Protocol definitions (structural subtyping interfaces)
- Type aliases (PEP 695 modern syntax)
"""

from datausage_settings.types.aliases import NetworkTemplate, SubscriptionId
from datausage_settings.types.models import (
    INVALID_SUBSCRIPTION_ID,
    LIMIT_DISABLED,
    WARNING_DISABLED,
    CapabilitySet,
    DisplayRatios,
    Ethernet,
    MobileAll,
    NetworkKind,
    NetworkPolicy,
    SearchIndexableResource,
    UsageInfo,
    WifiWildcard,
)
from datausage_settings.types.protocols import (
    ConnectivityQuery,
    PolicyQuery,
    StatsQuery,
    SubscriptionQuery,
    SystemSettingsQuery,
    TelephonyQuery,
    UsageQuery,
    UserQuery,
)

__all__ = [
    # Type aliases
    "NetworkTemplate",
    "SubscriptionId",
    # Constants
    "INVALID_SUBSCRIPTION_ID",
    "LIMIT_DISABLED",
    "WARNING_DISABLED",
    # Data models
    "CapabilitySet",
    "DisplayRatios",
    "Ethernet",
    "MobileAll",
    "NetworkKind",
    "NetworkPolicy",
    "SearchIndexableResource",
    "UsageInfo",
    "WifiWildcard",
    # Protocols
    "ConnectivityQuery",
    "PolicyQuery",
    "StatsQuery",
    "SubscriptionQuery",
    "SystemSettingsQuery",
    "TelephonyQuery",
    "UsageQuery",
    "UserQuery",
]
