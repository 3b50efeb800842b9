"""Settings search index providers for both screens."""

from typing import Final

from datausage_settings.core.summary import KEY_RESTRICT_BACKGROUND
from datausage_settings.types.models import CapabilitySet, SearchIndexableResource

# Preference XML resources
DATA_USAGE_XML: Final[str] = "data_usage"
DATA_USAGE_CELLULAR_XML: Final[str] = "data_usage_cellular"
DATA_USAGE_WIFI_XML: Final[str] = "data_usage_wifi"
RECENTS_XML: Final[str] = "rr_recents"


def data_usage_indexable_resources(capabilities: CapabilitySet) -> list[SearchIndexableResource]:
    """Return the data usage XML resources the indexer should crawl.

    Ethernet is never indexed; it is only shown after traffic is observed.
    """
    resources = [SearchIndexableResource(DATA_USAGE_XML)]
    if capabilities.has_mobile_data:
        resources.append(SearchIndexableResource(DATA_USAGE_CELLULAR_XML))
    if capabilities.has_wifi_radio:
        resources.append(SearchIndexableResource(DATA_USAGE_WIFI_XML))
    return resources


def data_usage_non_indexable_keys(capabilities: CapabilitySet) -> list[str]:
    """Return preference keys that must not appear in search results."""
    keys: list[str] = []
    if capabilities.has_mobile_data:
        keys.append(KEY_RESTRICT_BACKGROUND)
    return keys


def recents_indexable_resources() -> list[SearchIndexableResource]:
    """Return the recents XML resources the indexer should crawl."""
    return [SearchIndexableResource(RECENTS_XML)]


def recents_non_indexable_keys() -> list[str]:
    """Return recents keys hidden from search (none)."""
    return []
