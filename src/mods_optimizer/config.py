"""Configuration knobs for reading legacy saves.

Defaults reproduce what version 1.2 of the save format implied for the
fields it did not store.
"""

from dataclasses import dataclass

from mods_optimizer.models.constants import MIN_MOD_DOTS, PLACEHOLDER_AVATAR


@dataclass(frozen=True, slots=True)
class MigrationConfig:
    """Values filled in for data a legacy save never recorded."""

    placeholder_avatar: str = PLACEHOLDER_AVATAR
    five_dot_threshold: int = 5            # useOnly5DotMods set
    minimum_dot_threshold: int = MIN_MOD_DOTS  # no rarity filter
    default_slice_mods: bool = False
    default_locked: bool = False
