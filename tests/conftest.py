"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from datausage_settings.core.services import PlatformServices
from tests.fixtures.platform_fakes import FakePlatform, FakeSubscriptions, ServicesFactory


@pytest.fixture
def fake_platform() -> FakePlatform:
    """Provide an empty fake platform (no radios, no subscriptions)."""
    return FakePlatform()


@pytest.fixture
def fake_subscriptions() -> FakeSubscriptions:
    """Provide a fake subscription service with no subscriptions."""
    return FakeSubscriptions()


@pytest.fixture
def make_services() -> ServicesFactory:
    """Provide a factory wiring fakes into a PlatformServices bundle."""

    def factory(platform: FakePlatform, subscriptions: FakeSubscriptions | None) -> PlatformServices:
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

    return factory


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Provide a helper that writes YAML text to a temporary config file."""

    def writer(content: str) -> Path:
        path = tmp_path / "datausage-settings.yaml"
        _ = path.write_text(content)
        return path

    return writer
