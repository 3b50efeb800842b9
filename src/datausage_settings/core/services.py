"""Bundle of platform collaborators handed to the screen presenters."""

from dataclasses import dataclass

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


@dataclass(slots=True, frozen=True)
class PlatformServices:
    """Platform collaborators available to a presenter.

    ``subscriptions`` and ``stats`` may be None on devices where the
    corresponding service is missing; the evaluation layer degrades to
    "no subscription" and "no Ethernet traffic" respectively.
    """

    connectivity: ConnectivityQuery
    telephony: TelephonyQuery
    policies: PolicyQuery
    usage: UsageQuery
    user: UserQuery
    settings: SystemSettingsQuery
    subscriptions: SubscriptionQuery | None = None
    stats: StatsQuery | None = None
