"""Recents settings screen evaluation.

Decides whether the slim recents switch can be toggled and which recents
rows are removed for the configured animation style.
"""

import logging
from dataclasses import dataclass
from typing import Final

from datausage_settings.types.protocols import SystemSettingsQuery

logger = logging.getLogger(__name__)

# Preference keys on the recents screen
KEY_SLIM_RECENTS: Final[str] = "use_slim_recents"
KEY_ANIMATION: Final[str] = "animation"
KEY_PREVIEW: Final[str] = "preview"

# Settings read by the recents screen
HARDWARE_KEYS_ENABLE: Final[str] = "hardware_keys_enable"
RR_CONFIG_ANIM: Final[str] = "rr_config_anim"

# String resources for the slim recents summary
NAVBAR_NOT_ACTIVE: Final[str] = "navbar_not_active"
SLIM_RECENTS_SUMMARY: Final[str] = "slim_recents_summary"

# Rows removed for each animation style; unknown styles remove nothing
_REMOVED_BY_ANIM: Final[dict[int, tuple[str, ...]]] = {
    0: (KEY_ANIMATION,),
    1: (KEY_PREVIEW,),
    2: (KEY_ANIMATION, KEY_PREVIEW),
}


@dataclass(slots=True, frozen=True)
class RecentsScreenState:
    """Everything the recents screen renders."""

    slim_recents_enabled: bool
    slim_recents_summary: str
    removed_keys: tuple[str, ...]


def slim_recents_available(*, hardware_keys_enabled: bool, edge_to_edge: bool, swipe_up: bool) -> bool:
    """Slim recents needs the classic three-button navigation bar.

    Examples:
        >>> slim_recents_available(hardware_keys_enabled=True, edge_to_edge=False, swipe_up=False)
        True
        >>> slim_recents_available(hardware_keys_enabled=True, edge_to_edge=True, swipe_up=False)
        False
    """
    return hardware_keys_enabled and not edge_to_edge and not swipe_up


def removed_recents_keys(anim_config: int) -> tuple[str, ...]:
    """Return the rows hidden for an animation style."""
    return _REMOVED_BY_ANIM.get(anim_config, ())


def evaluate_recents_screen(
    *,
    hardware_keys_enabled: bool,
    edge_to_edge: bool,
    swipe_up: bool,
    anim_config: int,
) -> RecentsScreenState:
    """Evaluate the recents screen from a settings snapshot."""
    enabled = slim_recents_available(
        hardware_keys_enabled=hardware_keys_enabled,
        edge_to_edge=edge_to_edge,
        swipe_up=swipe_up,
    )
    return RecentsScreenState(
        slim_recents_enabled=enabled,
        slim_recents_summary=SLIM_RECENTS_SUMMARY if enabled else NAVBAR_NOT_ACTIVE,
        removed_keys=removed_recents_keys(anim_config),
    )


def load_recents_screen(settings: SystemSettingsQuery) -> RecentsScreenState:
    """Read the recents settings and evaluate the screen."""
    state = evaluate_recents_screen(
        hardware_keys_enabled=settings.get_secure_int(HARDWARE_KEYS_ENABLE, 1) != 0,
        edge_to_edge=settings.is_edge_to_edge_enabled(),
        swipe_up=settings.is_swipe_up_enabled(),
        anim_config=settings.get_system_int(RR_CONFIG_ANIM, 0),
    )
    logger.info(
        "Recents screen evaluated",
        extra={"slim_recents_enabled": state.slim_recents_enabled, "removed": state.removed_keys},
    )
    return state
