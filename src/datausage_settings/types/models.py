"""Data models for datausage-settings.

This module defines immutable dataclasses used throughout the application
for type-safe data transfer between the platform collaborators and the
pure evaluation functions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, override

# Subscription identifier used when no cellular subscription is available
INVALID_SUBSCRIPTION_ID: Final[int] = -1

# Policy sentinels reported by the policy service for disabled thresholds
WARNING_DISABLED: Final[int] = -1
LIMIT_DISABLED: Final[int] = -1


class NetworkKind(str, Enum):
    """Network transport kinds queried from the connectivity service."""

    MOBILE = "mobile"
    WIFI = "wifi"
    ETHERNET = "ethernet"

    @override
    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(slots=True, frozen=True)
class MobileAll:
    """Template matching all mobile traffic for a subscriber.

    ``match_subscriber_ids`` holds every subscriber id whose traffic is
    accounted under this template (more than one for merged multi-SIM
    carriers).
    """

    subscriber_id: str | None
    match_subscriber_ids: tuple[str, ...] = ()

    @property
    def kind(self) -> NetworkKind:
        return NetworkKind.MOBILE


@dataclass(slots=True, frozen=True)
class WifiWildcard:
    """Template matching traffic on any Wi-Fi network."""

    @property
    def kind(self) -> NetworkKind:
        return NetworkKind.WIFI


@dataclass(slots=True, frozen=True)
class Ethernet:
    """Template matching all Ethernet traffic."""

    @property
    def kind(self) -> NetworkKind:
        return NetworkKind.ETHERNET


@dataclass(slots=True, frozen=True)
class CapabilitySet:
    """Point-in-time snapshot of which transports the device can use."""

    has_mobile_data: bool
    has_wifi_radio: bool
    has_ethernet: bool


@dataclass(slots=True, frozen=True)
class NetworkPolicy:
    """Warning and limit thresholds configured for a template, in bytes."""

    warning_bytes: int = WARNING_DISABLED
    limit_bytes: int = LIMIT_DISABLED


@dataclass(slots=True, frozen=True)
class UsageInfo:
    """Usage snapshot reported by the stats and policy services.

    All levels are in bytes. ``period`` is the human-readable billing
    period supplied by the platform (e.g. "Oct 1 - Oct 31").
    """

    usage_level: int
    warning_level: int = 0
    limit_level: int = 0
    period: str = ""


@dataclass(slots=True, frozen=True)
class DisplayRatios:
    """Fractions of the usage progress bar, always summing to 1.0."""

    used_fraction: float
    reserved_fraction: float
    remaining_fraction: float

    @property
    def total(self) -> float:
        return self.used_fraction + self.reserved_fraction + self.remaining_fraction


@dataclass(slots=True, frozen=True)
class SearchIndexableResource:
    """Preference XML resource exposed to the settings search indexer."""

    xml_res_id: str
