"""Unit tests for the recents settings screen."""

import pytest

from datausage_settings.core.recents import (
    HARDWARE_KEYS_ENABLE,
    KEY_ANIMATION,
    KEY_PREVIEW,
    NAVBAR_NOT_ACTIVE,
    RR_CONFIG_ANIM,
    SLIM_RECENTS_SUMMARY,
    RecentsScreenState,
    evaluate_recents_screen,
    load_recents_screen,
    removed_recents_keys,
    slim_recents_available,
)
from tests.fixtures.platform_fakes import FakePlatform


@pytest.mark.unit
class TestSlimRecentsAvailable:
    """Test suite for slim_recents_available."""

    @pytest.mark.parametrize(
        ("hardware_keys_enabled", "edge_to_edge", "swipe_up", "expected"),
        [
            (True, False, False, True),
            (True, True, False, False),
            (True, False, True, False),
            (False, False, False, False),
            (False, True, True, False),
        ],
    )
    def test_requires_three_button_navigation(
        self, hardware_keys_enabled: bool, edge_to_edge: bool, swipe_up: bool, expected: bool
    ) -> None:
        """Test slim recents is only available with three-button navigation."""
        result = slim_recents_available(
            hardware_keys_enabled=hardware_keys_enabled,
            edge_to_edge=edge_to_edge,
            swipe_up=swipe_up,
        )
        assert result is expected


@pytest.mark.unit
class TestRemovedRecentsKeys:
    """Test suite for removed_recents_keys."""

    @pytest.mark.parametrize(
        ("anim_config", "expected"),
        [
            (0, (KEY_ANIMATION,)),
            (1, (KEY_PREVIEW,)),
            (2, (KEY_ANIMATION, KEY_PREVIEW)),
            (3, ()),
            (99, ()),
        ],
    )
    def test_rows_removed_per_style(self, anim_config: int, expected: tuple[str, ...]) -> None:
        """Test which rows each animation style hides."""
        assert removed_recents_keys(anim_config) == expected


@pytest.mark.unit
class TestEvaluateRecentsScreen:
    """Test suite for evaluate_recents_screen and load_recents_screen."""

    def test_enabled_summary(self) -> None:
        """Test the enabled switch uses the slim recents summary."""
        state = evaluate_recents_screen(
            hardware_keys_enabled=True, edge_to_edge=False, swipe_up=False, anim_config=1
        )

        assert state == RecentsScreenState(
            slim_recents_enabled=True,
            slim_recents_summary=SLIM_RECENTS_SUMMARY,
            removed_keys=(KEY_PREVIEW,),
        )

    def test_disabled_summary(self) -> None:
        """Test the disabled switch explains the navigation bar is inactive."""
        state = evaluate_recents_screen(
            hardware_keys_enabled=True, edge_to_edge=True, swipe_up=False, anim_config=0
        )

        assert not state.slim_recents_enabled
        assert state.slim_recents_summary == NAVBAR_NOT_ACTIVE

    def test_load_uses_defaults(self, fake_platform: FakePlatform) -> None:
        """Test unset settings default to keys enabled and animation style 0."""
        state = load_recents_screen(fake_platform)

        assert state.slim_recents_enabled
        assert state.removed_keys == (KEY_ANIMATION,)

    def test_load_reads_settings(self, fake_platform: FakePlatform) -> None:
        """Test settings values are read from the secure and system tables."""
        fake_platform.secure[HARDWARE_KEYS_ENABLE] = 0
        fake_platform.system[RR_CONFIG_ANIM] = 2

        state = load_recents_screen(fake_platform)

        assert not state.slim_recents_enabled
        assert state.removed_keys == (KEY_ANIMATION, KEY_PREVIEW)

    def test_load_reads_navigation_mode(self, fake_platform: FakePlatform) -> None:
        """Test swipe-up navigation disables slim recents."""
        fake_platform.swipe_up = True

        assert not load_recents_screen(fake_platform).slim_recents_enabled
