"""Data usage summary screen evaluation.

Everything the data usage screen shows is derived here from explicit
snapshots: which template the header summarizes, which per-network sections
exist, which rows are hidden, and what the header and limit rows display.

``evaluate_data_usage_screen`` is the pure entry point. ``DataUsageScreen``
is a thin presenter that reads the platform collaborators once per refresh
and hands the snapshots to it; it keeps no state between refreshes.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Final, override

from datausage_settings.core.calculation import compute_display_ratios, effective_limit, usage_percentage
from datausage_settings.core.services import PlatformServices
from datausage_settings.core.subscriptions import detect_capabilities, resolve_default_subscription_id
from datausage_settings.core.templates import build_mobile_template, is_valid_subscription, select_default_template
from datausage_settings.types.aliases import NetworkTemplate, SubscriptionId
from datausage_settings.types.models import (
    CapabilitySet,
    DisplayRatios,
    Ethernet,
    NetworkKind,
    NetworkPolicy,
    UsageInfo,
    WifiWildcard,
)
from datausage_settings.utils.logging import correlation_id_context, generate_correlation_id

logger = logging.getLogger(__name__)

# Preference keys on the data usage screen
KEY_STATUS_HEADER: Final[str] = "status_header"
KEY_LIMIT_SUMMARY: Final[str] = "limit_summary"
KEY_RESTRICT_BACKGROUND: Final[str] = "restrict_background"

# Subscription id recorded for sections that are not tied to a SIM
NO_SUBSCRIPTION: Final[int] = 0


class TitleTemplate(str, Enum):
    """String resource used for the usage header title."""

    CELL_DATA = "cell_data_template"
    WIFI_DATA = "wifi_data_template"
    ETHERNET_DATA = "ethernet_data_template"

    @override
    def __str__(self) -> str:
        return self.value


class LimitSummaryKind(str, Enum):
    """String resource used for the warning/limit row."""

    WARNING_ONLY = "cell_warning_only"
    WARNING_AND_LIMIT = "cell_warning_and_limit"

    @override
    def __str__(self) -> str:
        return self.value


class UsageSummaryKind(str, Enum):
    """How the dashboard tile reports usage."""

    BYTES = "bytes"
    PERCENTAGE = "percentage"

    @override
    def __str__(self) -> str:
        return self.value


@dataclass(slots=True, frozen=True)
class UsageSection:
    """Per-network category appended below the header."""

    kind: NetworkKind
    template: NetworkTemplate
    subscription_id: SubscriptionId = NO_SUBSCRIPTION


@dataclass(slots=True, frozen=True)
class HeaderState:
    """Values shown in the usage header and its progress bar."""

    title_template: TitleTemplate
    usage_level: int
    period: str
    limit_label_bytes: int
    ratios: DisplayRatios


@dataclass(slots=True, frozen=True)
class LimitSummary:
    """Values shown in the warning/limit row."""

    kind: LimitSummaryKind
    warning_bytes: int
    limit_bytes: int


@dataclass(slots=True, frozen=True)
class UsageSummary:
    """Dashboard tile summary: raw bytes used, or a percentage of the limit."""

    kind: UsageSummaryKind
    value: int

    @property
    def display(self) -> str:
        if self.kind is UsageSummaryKind.PERCENTAGE:
            return f"{self.value}%"
        return str(self.value)


@dataclass(slots=True, frozen=True)
class DataUsageInputs:
    """Snapshot of platform state taken at the start of a refresh."""

    capabilities: CapabilitySet
    default_subscription_id: SubscriptionId
    active_subscription_ids: Sequence[SubscriptionId] | None = None
    subscriber_ids: Mapping[SubscriptionId, str | None] | None = None
    merged_subscriber_ids: Sequence[str] | None = None
    is_admin: bool = True


@dataclass(slots=True, frozen=True)
class DataUsageScreenState:
    """Everything the data usage screen renders for one refresh."""

    default_template: NetworkTemplate
    mobile_available: bool
    title_template: TitleTemplate
    sections: tuple[UsageSection, ...]
    show_restrict_background: bool
    show_limit_summary: bool
    header_selectable: bool
    show_cellular_menu: bool
    header: HeaderState | None
    limit_summary: LimitSummary | None
    usage_summary: UsageSummary

    @property
    def removed_keys(self) -> tuple[str, ...]:
        removed: list[str] = []
        if not self.show_restrict_background:
            removed.append(KEY_RESTRICT_BACKGROUND)
        if not self.show_limit_summary:
            removed.append(KEY_LIMIT_SUMMARY)
        return tuple(removed)


def select_title_template(mobile_available: bool, has_wifi: bool) -> TitleTemplate:
    """Pick the header title using the same precedence as template selection."""
    if mobile_available:
        return TitleTemplate.CELL_DATA
    if has_wifi:
        return TitleTemplate.WIFI_DATA
    return TitleTemplate.ETHERNET_DATA


def default_template_for(inputs: DataUsageInputs) -> NetworkTemplate:
    """Select the default template for a snapshot."""
    subscriber_ids = inputs.subscriber_ids or {}
    return select_default_template(
        inputs.capabilities.has_mobile_data,
        inputs.default_subscription_id,
        inputs.capabilities.has_wifi_radio,
        subscriber_id=subscriber_ids.get(inputs.default_subscription_id),
        merged_subscriber_ids=inputs.merged_subscriber_ids,
    )


def build_sections(inputs: DataUsageInputs) -> tuple[UsageSection, ...]:
    """List the per-network sections in display order.

    Mobile sections come first, one per active subscription. When the active
    list is empty or unknown, a single section for the default subscription
    is shown instead. Wi-Fi and Ethernet follow when present.

    Args:
        inputs: Refresh snapshot

    Returns:
        Sections in the order they are appended to the screen
    """
    sections: list[UsageSection] = []
    subscriber_ids = inputs.subscriber_ids or {}

    if _mobile_available(inputs):
        subscription_ids = inputs.active_subscription_ids or (inputs.default_subscription_id,)
        for subscription_id in subscription_ids:
            template = build_mobile_template(
                subscriber_ids.get(subscription_id),
                inputs.merged_subscriber_ids,
            )
            sections.append(UsageSection(NetworkKind.MOBILE, template, subscription_id))

    if inputs.capabilities.has_wifi_radio:
        sections.append(UsageSection(NetworkKind.WIFI, WifiWildcard()))

    if inputs.capabilities.has_ethernet:
        sections.append(UsageSection(NetworkKind.ETHERNET, Ethernet()))

    return tuple(sections)


def apply_policy(usage: UsageInfo, policy: NetworkPolicy | None) -> UsageInfo:
    """Return usage with its warning level taken from the configured policy."""
    if policy is None:
        return usage
    return replace(usage, warning_level=policy.warning_bytes)


def build_header(usage: UsageInfo, title_template: TitleTemplate) -> HeaderState:
    """Derive header values from a policy-adjusted usage snapshot."""
    return HeaderState(
        title_template=title_template,
        usage_level=usage.usage_level,
        period=usage.period,
        limit_label_bytes=effective_limit(usage),
        ratios=compute_display_ratios(usage),
    )


def build_limit_summary(usage: UsageInfo) -> LimitSummary:
    """Derive the warning/limit row from a policy-adjusted usage snapshot."""
    kind = LimitSummaryKind.WARNING_ONLY if usage.limit_level <= 0 else LimitSummaryKind.WARNING_AND_LIMIT
    return LimitSummary(kind=kind, warning_bytes=usage.warning_level, limit_bytes=usage.limit_level)


def summarize_usage(usage: UsageInfo | None) -> UsageSummary:
    """Summarize usage for the dashboard tile.

    Examples:
        >>> summarize_usage(None).display
        '0'
        >>> summarize_usage(UsageInfo(usage_level=300, limit_level=1200)).display
        '25%'
    """
    if usage is None:
        return UsageSummary(kind=UsageSummaryKind.BYTES, value=0)
    if usage.limit_level <= 0:
        return UsageSummary(kind=UsageSummaryKind.BYTES, value=usage.usage_level)
    return UsageSummary(
        kind=UsageSummaryKind.PERCENTAGE,
        value=usage_percentage(usage_level=usage.usage_level, limit_level=usage.limit_level),
    )


def evaluate_data_usage_screen(
    inputs: DataUsageInputs,
    *,
    usage: UsageInfo | None,
    policy: NetworkPolicy | None,
) -> DataUsageScreenState:
    """Evaluate the full data usage screen for one refresh.

    Args:
        inputs: Capability and subscription snapshot
        usage: Usage for the default template, or None if unavailable
        policy: Policy for the default template, or None if unavailable

    Returns:
        Screen state; ``header`` and ``limit_summary`` are None when usage
        is unavailable. ``usage_summary`` is computed from the raw usage,
        before the policy warning is applied
    """
    mobile_available = _mobile_available(inputs)
    title_template = select_title_template(mobile_available, inputs.capabilities.has_wifi_radio)

    header: HeaderState | None = None
    limit_summary: LimitSummary | None = None
    if usage is not None:
        adjusted = apply_policy(usage, policy)
        header = build_header(adjusted, title_template)
        if mobile_available:
            limit_summary = build_limit_summary(adjusted)

    return DataUsageScreenState(
        default_template=default_template_for(inputs),
        mobile_available=mobile_available,
        title_template=title_template,
        sections=build_sections(inputs),
        show_restrict_background=mobile_available and inputs.is_admin,
        show_limit_summary=mobile_available,
        header_selectable=mobile_available,
        show_cellular_menu=inputs.is_admin,
        header=header,
        limit_summary=limit_summary,
        usage_summary=summarize_usage(usage),
    )


def _mobile_available(inputs: DataUsageInputs) -> bool:
    # Mobile data without a valid subscription is treated as no mobile data
    return inputs.capabilities.has_mobile_data and is_valid_subscription(inputs.default_subscription_id)


class DataUsageScreen:
    """Presenter for the data usage summary screen.

    Reads the platform collaborators on every refresh and delegates all
    decisions to ``evaluate_data_usage_screen``.
    """

    services: PlatformServices

    def __init__(self, services: PlatformServices) -> None:
        """Initialize the presenter.

        Args:
            services: Platform collaborators to read from
        """
        self.services = services

    def collect_inputs(self) -> DataUsageInputs:
        """Take a fresh snapshot of capabilities and subscriptions."""
        services = self.services
        capabilities = detect_capabilities(services.connectivity, services.stats)
        default_subscription_id = resolve_default_subscription_id(services.subscriptions)

        active_ids: Sequence[SubscriptionId] | None = None
        if services.subscriptions is not None:
            active_ids = services.subscriptions.list_active_subscription_ids()

        wanted_ids = {default_subscription_id, *(active_ids or ())}
        subscriber_ids = {
            subscription_id: services.telephony.get_subscriber_id(subscription_id)
            for subscription_id in wanted_ids
            if is_valid_subscription(subscription_id)
        }

        return DataUsageInputs(
            capabilities=capabilities,
            default_subscription_id=default_subscription_id,
            active_subscription_ids=tuple(active_ids) if active_ids is not None else None,
            subscriber_ids=subscriber_ids,
            merged_subscriber_ids=services.telephony.get_merged_subscriber_ids(),
            is_admin=services.user.is_admin_user(),
        )

    def refresh(self) -> DataUsageScreenState:
        """Evaluate the screen from a fresh snapshot."""
        with correlation_id_context(generate_correlation_id("datausage")):
            inputs = self.collect_inputs()
            template = default_template_for(inputs)

            usage = self.services.usage.get_data_usage_info(template)
            if usage is None:
                logger.warning("No usage information for default template", extra={"template": template.kind})
            policy = self.services.policies.get_policy(template)

            state = evaluate_data_usage_screen(inputs, usage=usage, policy=policy)
            logger.info(
                "Data usage screen refreshed",
                extra={
                    "template": template.kind,
                    "sections": len(state.sections),
                    "removed": state.removed_keys,
                },
            )
            return state

    def dashboard_summary(self) -> UsageSummary:
        """Summarize default-template usage for the dashboard tile.

        Reads only what the tile needs. Callers that also render the screen
        should use ``refresh().usage_summary`` so both come from one snapshot.
        """
        with correlation_id_context(generate_correlation_id("dashboard")):
            inputs = self.collect_inputs()
            usage = self.services.usage.get_data_usage_info(default_template_for(inputs))
            summary = summarize_usage(usage)
            logger.debug("Dashboard summary computed", extra={"kind": summary.kind})
            return summary
