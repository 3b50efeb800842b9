"""Configuration system for datausage-settings.

This module implements the configuration schema using Pydantic for
validation, with support for environment variable resolution and fail-fast
validation with actionable error messages.

The ``device`` section describes a snapshot of platform state (radios,
subscriptions, usage, policies, system settings). It is served to the
screen presenters by ``datausage_settings.platform.snapshot``.
"""

import os
import re
from pathlib import Path
from typing import Annotated, Final, Self

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from datausage_settings.types.models import LIMIT_DISABLED, WARNING_DISABLED, NetworkPolicy, UsageInfo

# Matches ${VARIABLE_NAME} where VARIABLE_NAME can contain letters, digits, and underscores
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")


class NetworksConfig(BaseModel):
    """Transports the device hardware supports."""

    mobile: Annotated[bool, Field(description="Device supports mobile data")] = False
    wifi: Annotated[bool, Field(description="Device has a Wi-Fi radio")] = False
    ethernet: Annotated[bool, Field(description="Device has an Ethernet port")] = False


class SubscriptionsConfig(BaseModel):
    """Cellular subscriptions known to the device.

    ``active`` defaults to unknown (None), in which case the screen shows a
    single mobile section for the default subscription.
    """

    default_data: Annotated[
        int | None,
        Field(ge=0, description="Subscription selected for mobile data"),
    ] = None
    all: Annotated[
        list[int],
        Field(description="Every known subscription id, in platform order"),
    ] = []
    active: Annotated[
        list[int] | None,
        Field(description="Currently active subscription ids"),
    ] = None
    subscriber_ids: Annotated[
        dict[int, str],
        Field(description="Subscriber identity (IMSI) per subscription id"),
    ] = {}
    merged_subscriber_ids: Annotated[
        list[str] | None,
        Field(description="Subscriber ids the carrier accounts as one"),
    ] = None

    @field_validator("all", mode="after")
    @classmethod
    def validate_subscription_ids(cls, v: list[int]) -> list[int]:
        """Validate subscription ids are non-negative and unique.

        Raises:
            ValueError: If an id is negative or repeated
        """
        for subscription_id in v:
            if subscription_id < 0:
                msg = f"Subscription id must be non-negative, got: {subscription_id}"
                raise ValueError(msg)
        if len(set(v)) != len(v):
            msg = "Subscription ids must be unique"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_active_subset(self) -> Self:
        """Validate that active subscriptions are known subscriptions.

        Raises:
            ValueError: If an active id is missing from ``all``
        """
        if self.active:
            unknown = set(self.active) - set(self.all)
            if unknown:
                msg = f"Active subscription(s) not listed in 'all': {', '.join(map(str, sorted(unknown)))}"
                raise ValueError(msg)
        return self


class UsageConfig(BaseModel):
    """Billing-period usage reported for one transport."""

    usage_level: Annotated[int, Field(ge=0, description="Bytes used this period")] = 0
    warning_level: Annotated[int, Field(description="Warning threshold in bytes")] = 0
    limit_level: Annotated[int, Field(description="Limit in bytes (<= 0 means none)")] = 0
    period: Annotated[str, Field(description="Human-readable billing period")] = ""

    def to_usage_info(self) -> UsageInfo:
        """Convert to the immutable usage model."""
        return UsageInfo(
            usage_level=self.usage_level,
            warning_level=self.warning_level,
            limit_level=self.limit_level,
            period=self.period,
        )


class PolicyConfig(BaseModel):
    """Warning/limit policy for one transport."""

    warning_bytes: Annotated[
        int,
        Field(ge=WARNING_DISABLED, description="Warning threshold in bytes (-1 disables)"),
    ] = WARNING_DISABLED
    limit_bytes: Annotated[
        int,
        Field(ge=LIMIT_DISABLED, description="Limit in bytes (-1 disables)"),
    ] = LIMIT_DISABLED

    def to_policy(self) -> NetworkPolicy:
        """Convert to the immutable policy model."""
        return NetworkPolicy(warning_bytes=self.warning_bytes, limit_bytes=self.limit_bytes)


class RecentsConfig(BaseModel):
    """System settings read by the recents screen."""

    hardware_keys_enable: Annotated[int, Field(description="Secure setting, non-zero when keys are on")] = 1
    rr_config_anim: Annotated[int, Field(ge=0, description="Recents animation style")] = 0
    edge_to_edge: Annotated[bool, Field(description="Gesture navigation active")] = False
    swipe_up: Annotated[bool, Field(description="Two-button navigation active")] = False


class DeviceSnapshotConfig(BaseModel):
    """Snapshot of platform state served to the screen presenters."""

    networks: NetworksConfig = NetworksConfig()
    subscriptions: Annotated[
        SubscriptionsConfig | None,
        Field(description="Subscription service state (null when the service is missing)"),
    ] = SubscriptionsConfig()
    stats_available: Annotated[
        bool,
        Field(description="Whether the network stats service can be queried"),
    ] = True
    history_bytes: Annotated[
        dict[str, int],
        Field(description="All-time bytes per transport (mobile, wifi, ethernet)"),
    ] = {}
    usage: Annotated[
        dict[str, UsageConfig],
        Field(description="Current-period usage per transport"),
    ] = {}
    policies: Annotated[
        dict[str, PolicyConfig],
        Field(description="Policy per transport"),
    ] = {}
    is_admin: Annotated[bool, Field(description="Current user is the device admin")] = True
    recents: RecentsConfig = RecentsConfig()

    @field_validator("history_bytes", "usage", "policies", mode="after")
    @classmethod
    def validate_transport_keys(cls, v: dict[str, object]) -> dict[str, object]:
        """Validate per-transport mappings only use known transport names.

        Raises:
            ValueError: If a key is not mobile, wifi or ethernet
        """
        unknown = set(v) - {"mobile", "wifi", "ethernet"}
        if unknown:
            msg = f"Unknown transport(s): {', '.join(sorted(unknown))}. Expected: ethernet, mobile, wifi"
            raise ValueError(msg)
        return v


class ApplicationConfig(BaseModel):
    """Configuration for application-level settings."""

    log_level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "INFO"
    syslog_enabled: Annotated[
        bool,
        Field(
            description="Enable syslog integration",
        ),
    ] = False


class MainConfig(BaseModel):
    """Main application configuration schema.

    Top-level configuration container aggregating:
    - application: Application-level settings
    - device: Platform state snapshot
    """

    application: Annotated[
        ApplicationConfig,
        Field(
            description="Application-level configuration",
        ),
    ] = ApplicationConfig()
    device: Annotated[
        DeviceSnapshotConfig,
        Field(
            description="Platform state snapshot",
        ),
    ]


class EnvironmentVariableError(Exception):
    """Exception raised when environment variable resolution fails."""


class ConfigurationError(Exception):
    """Exception raised when configuration loading or validation fails.

    Messages are actionable: they name the file and, for validation
    failures, every offending field.
    """


def resolve_env_var(value: str) -> str:
    """Resolve environment variable references in a string value.

    Args:
        value: String potentially containing ${VARIABLE_NAME} references

    Returns:
        String with environment variables resolved

    Raises:
        EnvironmentVariableError: If a referenced environment variable is missing

    Examples:
        >>> os.environ["TEST_VAR"] = "value"
        >>> resolve_env_var("prefix_${TEST_VAR}_suffix")
        'prefix_value_suffix'
    """

    def replace_match(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)

        if env_value is None:
            msg = (
                f"Required environment variable '{var_name}' is not set. "
                f"Please set this variable before starting the application."
            )
            raise EnvironmentVariableError(msg)

        return env_value

    return ENV_VAR_PATTERN.sub(replace_match, value)


def resolve_env_vars(data: object) -> object:
    """Recursively resolve environment variables in YAML data.

    Strings are resolved; dictionaries and lists are walked; all other
    values are preserved as-is.

    Raises:
        EnvironmentVariableError: If a referenced environment variable is missing

    Examples:
        >>> os.environ["PERIOD"] = "Oct 1 - Oct 31"
        >>> resolve_env_vars({"usage": {"mobile": {"period": "${PERIOD}"}}})
        {'usage': {'mobile': {'period': 'Oct 1 - Oct 31'}}}
    """
    if isinstance(data, str):
        return resolve_env_var(data)
    if isinstance(data, dict):
        # YAML data is untyped at load time; validated by Pydantic after resolution
        return {key: resolve_env_vars(value) for key, value in data.items()}  # pyright: ignore[reportUnknownVariableType]  # YAML boundary
    if isinstance(data, list):
        return [resolve_env_vars(item) for item in data]  # pyright: ignore[reportUnknownVariableType]  # YAML boundary
    return data


def load_main_config(config_path: Path) -> MainConfig:
    """Load and validate application configuration from a YAML file.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated MainConfig instance

    Raises:
        ConfigurationError: If the file cannot be loaded, references a
            missing environment variable, or fails validation
    """
    if not config_path.exists():
        msg = (
            f"Configuration file not found: {config_path}\n"
            f"Please create a configuration file at this location."
        )
        raise ConfigurationError(msg)

    try:
        with config_path.open("r") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        msg = (
            f"Failed to parse YAML configuration file: {config_path}\n"
            f"YAML parsing error: {e}\n"
            f"Please check the file for syntax errors."
        )
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file: {config_path}\nError: {e}\nPlease check file permissions."
        raise ConfigurationError(msg) from e

    if not isinstance(raw_data, dict):
        msg = (
            f"Invalid configuration file format: {config_path}\n"
            f"Expected YAML dictionary at root level, got: {type(raw_data).__name__}\n"
            f"Configuration file must contain key-value pairs."
        )
        raise ConfigurationError(msg)

    try:
        resolved_data = resolve_env_vars(raw_data)
    except EnvironmentVariableError as e:
        msg = (
            f"Environment variable resolution failed in: {config_path}\n"
            f"{e}\n"
            f"Set the required environment variable before starting the application."
        )
        raise ConfigurationError(msg) from e

    try:
        config = MainConfig.model_validate(resolved_data)
    except ValidationError as e:
        raise ConfigurationError(format_validation_error(e, config_path)) from e

    return config


def format_validation_error(error: ValidationError, config_path: Path) -> str:
    """Format Pydantic validation errors with field-level diagnostics."""
    error_lines = ["Configuration validation failed:", ""]
    for detail in error.errors():
        field_path = " → ".join(str(loc) for loc in detail["loc"])
        error_lines.append(f"  Field: {field_path}")
        error_lines.append(f"  Error: {detail['msg']}")
        error_lines.append(f"  Type: {detail['type']}")
        error_lines.append("")

    error_lines.append(f"Configuration file: {config_path}")
    error_lines.append("Please fix the above errors and try again.")
    return "\n".join(error_lines)

