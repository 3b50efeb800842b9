"""Unit tests for configuration system.

Tests for Pydantic configuration models including validation logic,
environment variable resolution, and YAML loading diagnostics.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from pydantic import ValidationError

from datausage_settings.core.config import (
    ENV_VAR_PATTERN,
    ApplicationConfig,
    ConfigurationError,
    DeviceSnapshotConfig,
    EnvironmentVariableError,
    MainConfig,
    PolicyConfig,
    SubscriptionsConfig,
    UsageConfig,
    load_main_config,
    resolve_env_var,
    resolve_env_vars,
)
from datausage_settings.types.models import LIMIT_DISABLED, WARNING_DISABLED, NetworkPolicy, UsageInfo

VALID_CONFIG = """
application:
  log_level: DEBUG
device:
  networks:
    mobile: true
    wifi: true
  subscriptions:
    default_data: 3
    all: [3, 4]
    subscriber_ids:
      3: "310260000000003"
  usage:
    mobile:
      usage_level: 100
      limit_level: 400
      period: "${BILLING_PERIOD}"
  policies:
    mobile:
      warning_bytes: 200
"""


@pytest.mark.unit
class TestSubscriptionsConfig:
    """Test SubscriptionsConfig validation and defaults."""

    def test_default_values(self) -> None:
        """Test an empty section means no subscriptions."""
        config = SubscriptionsConfig()

        assert config.default_data is None
        assert config.all == []
        assert config.active is None
        assert config.subscriber_ids == {}
        assert config.merged_subscriber_ids is None

    def test_negative_subscription_id_rejected(self) -> None:
        """Test subscription ids must be non-negative."""
        with pytest.raises(ValidationError) as exc_info:
            _ = SubscriptionsConfig(all=[1, -2])

        assert "must be non-negative" in str(exc_info.value)

    def test_duplicate_subscription_ids_rejected(self) -> None:
        """Test subscription ids must be unique."""
        with pytest.raises(ValidationError) as exc_info:
            _ = SubscriptionsConfig(all=[1, 1])

        assert "must be unique" in str(exc_info.value)

    def test_active_must_be_known(self) -> None:
        """Test active subscriptions must appear in the full list."""
        with pytest.raises(ValidationError) as exc_info:
            _ = SubscriptionsConfig(all=[1], active=[1, 5])

        assert "not listed in 'all': 5" in str(exc_info.value)

    def test_default_data_must_be_non_negative(self) -> None:
        """Test the default data subscription cannot be a sentinel."""
        with pytest.raises(ValidationError):
            _ = SubscriptionsConfig(default_data=-1)


@pytest.mark.unit
class TestUsageAndPolicyConfig:
    """Test conversion of usage and policy sections to models."""

    def test_usage_conversion(self) -> None:
        """Test usage config converts to UsageInfo."""
        config = UsageConfig(usage_level=5, warning_level=6, limit_level=7, period="Oct")

        assert config.to_usage_info() == UsageInfo(usage_level=5, warning_level=6, limit_level=7, period="Oct")

    def test_negative_usage_rejected(self) -> None:
        """Test usage level must be non-negative."""
        with pytest.raises(ValidationError):
            _ = UsageConfig(usage_level=-1)

    def test_policy_defaults_are_disabled(self) -> None:
        """Test an empty policy disables warning and limit."""
        config = PolicyConfig()

        assert config.warning_bytes == WARNING_DISABLED
        assert config.limit_bytes == LIMIT_DISABLED
        assert config.to_policy() == NetworkPolicy()

    def test_policy_below_sentinel_rejected(self) -> None:
        """Test policy values below the disabled sentinel are rejected."""
        with pytest.raises(ValidationError):
            _ = PolicyConfig(limit_bytes=-2)


@pytest.mark.unit
class TestDeviceSnapshotConfig:
    """Test DeviceSnapshotConfig validation."""

    def test_defaults_describe_bare_device(self) -> None:
        """Test defaults describe a device without radios."""
        config = DeviceSnapshotConfig()

        assert not config.networks.mobile
        assert not config.networks.wifi
        assert not config.networks.ethernet
        assert config.stats_available
        assert config.is_admin
        assert config.recents.hardware_keys_enable == 1
        assert config.recents.rr_config_anim == 0

    def test_null_subscriptions_allowed(self) -> None:
        """Test a null subscriptions section models a missing service."""
        config = DeviceSnapshotConfig.model_validate({"subscriptions": None})

        assert config.subscriptions is None

    @pytest.mark.parametrize("field", ["history_bytes", "usage", "policies"])
    def test_unknown_transport_rejected(self, field: str) -> None:
        """Test per-transport sections only accept known transports."""
        value = 1 if field == "history_bytes" else {}

        with pytest.raises(ValidationError) as exc_info:
            _ = DeviceSnapshotConfig.model_validate({field: {"bluetooth": value}})

        assert "Unknown transport(s): bluetooth" in str(exc_info.value)


@pytest.mark.unit
class TestApplicationConfig:
    """Test ApplicationConfig validation."""

    def test_defaults(self) -> None:
        """Test default log level and syslog settings."""
        config = ApplicationConfig()

        assert config.log_level == "INFO"
        assert not config.syslog_enabled

    def test_invalid_log_level_rejected(self) -> None:
        """Test log level must be a standard level name."""
        with pytest.raises(ValidationError):
            _ = ApplicationConfig(log_level="VERBOSE")

    def test_device_section_required(self) -> None:
        """Test the main config requires a device section."""
        with pytest.raises(ValidationError) as exc_info:
            _ = MainConfig.model_validate({})

        assert "device" in str(exc_info.value)


@pytest.mark.unit
class TestEnvironmentVariableResolution:
    """Test environment variable resolution."""

    def test_pattern_matches_upper_case_names(self) -> None:
        """Test the pattern captures variable names."""
        match = ENV_VAR_PATTERN.search("x ${BILLING_PERIOD_1} y")

        assert match is not None
        assert match.group(1) == "BILLING_PERIOD_1"

    def test_resolve_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test references are replaced with environment values."""
        monkeypatch.setenv("CARRIER", "acme")

        assert resolve_env_var("carrier=${CARRIER}") == "carrier=acme"

    def test_missing_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a missing variable raises with its name."""
        monkeypatch.delenv("MISSING_VAR", raising=False)

        with pytest.raises(EnvironmentVariableError) as exc_info:
            _ = resolve_env_var("${MISSING_VAR}")

        assert "MISSING_VAR" in str(exc_info.value)

    def test_resolve_nested(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test nested dictionaries and lists are walked."""
        monkeypatch.setenv("IMSI", "310260000000009")

        resolved = resolve_env_vars({"ids": ["${IMSI}", 4], "flag": True, "nested": {"id": "${IMSI}"}})

        assert resolved == {"ids": ["310260000000009", 4], "flag": True, "nested": {"id": "310260000000009"}}


@pytest.mark.unit
class TestLoadMainConfig:
    """Test YAML loading and error reporting."""

    def test_load_valid_config(
        self,
        write_config: Callable[[str], Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test a valid file loads into typed sections."""
        monkeypatch.setenv("BILLING_PERIOD", "Oct 1 - Oct 31")

        config = load_main_config(write_config(VALID_CONFIG))

        assert config.application.log_level == "DEBUG"
        assert config.device.networks.mobile
        assert config.device.subscriptions is not None
        assert config.device.subscriptions.default_data == 3
        assert config.device.subscriptions.subscriber_ids == {3: "310260000000003"}
        assert config.device.usage["mobile"].period == "Oct 1 - Oct 31"
        assert config.device.policies["mobile"].to_policy() == NetworkPolicy(warning_bytes=200)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file reports its path."""
        path = tmp_path / "absent.yaml"

        with pytest.raises(ConfigurationError) as exc_info:
            _ = load_main_config(path)

        assert "Configuration file not found" in str(exc_info.value)
        assert str(path) in str(exc_info.value)

    def test_invalid_yaml(self, write_config: Callable[[str], Path]) -> None:
        """Test YAML syntax errors are wrapped."""
        with pytest.raises(ConfigurationError) as exc_info:
            _ = load_main_config(write_config("device: [unclosed"))

        assert "Failed to parse YAML" in str(exc_info.value)

    def test_non_mapping_root(self, write_config: Callable[[str], Path]) -> None:
        """Test the root must be a mapping."""
        with pytest.raises(ConfigurationError) as exc_info:
            _ = load_main_config(write_config("- a\n- b\n"))

        assert "got: list" in str(exc_info.value)

    def test_missing_env_var_wrapped(
        self,
        write_config: Callable[[str], Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test missing environment variables surface as configuration errors."""
        monkeypatch.delenv("BILLING_PERIOD", raising=False)

        with pytest.raises(ConfigurationError) as exc_info:
            _ = load_main_config(write_config(VALID_CONFIG))

        assert "BILLING_PERIOD" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, EnvironmentVariableError)

    def test_validation_error_lists_fields(self, write_config: Callable[[str], Path]) -> None:
        """Test validation failures name every offending field."""
        content = """
device:
  subscriptions:
    all: [1, 1]
  policies:
    mobile:
      limit_bytes: -5
"""
        with pytest.raises(ConfigurationError) as exc_info:
            _ = load_main_config(write_config(content))

        message = str(exc_info.value)
        assert "Configuration validation failed" in message
        assert "device → subscriptions → all" in message
        assert "device → policies → mobile → limit_bytes" in message
