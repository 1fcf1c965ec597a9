"""The four records a Character is composed of.

CharacterSettings and GameSettings come from the catalog and the game and
never change for a given character. PlayerValues mirrors the player's
roster. OptimizerSettings is the only part the player edits through the
optimizer: which target is selected, the named targets, and the mod
filters.

All records are frozen; every "with_" method returns a new instance.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from mods_optimizer.errors import CharacterDeserializationError, require
from mods_optimizer.models.character_stats import NULL_CHARACTER_STATS, CharacterStats
from mods_optimizer.models.constants import MAX_MOD_DOTS, MIN_MOD_DOTS, DamageType
from mods_optimizer.models.optimization_plan import OptimizationPlan


# ---------------------------------------------------------------------------
# Catalog / game records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CharacterSettings:
    """Built-in defaults for a character: damage type, targets, search tags."""

    targets: tuple[OptimizationPlan, ...] = ()
    extra_tags: tuple[str, ...] = ()
    damage_type: DamageType = DamageType.PHYSICAL

    def target(self, name: str) -> OptimizationPlan | None:
        """The default target called `name`, if there is one."""
        return next((t for t in self.targets if t.name == name), None)

    def serialize(self) -> dict[str, Any]:
        return {
            "targets": [t.serialize() for t in self.targets],
            "extraTags": list(self.extra_tags),
            "damageType": self.damage_type.value,
        }

    @classmethod
    def deserialize(cls, data: Mapping[str, Any]) -> CharacterSettings:
        targets = require(data, "targets", "defaultSettings")
        try:
            damage_type = DamageType(data.get("damageType", DamageType.PHYSICAL.value))
        except ValueError as exc:
            raise CharacterDeserializationError(str(exc)) from exc
        return cls(
            targets=tuple(OptimizationPlan.deserialize(t) for t in targets),
            extra_tags=tuple(data.get("extraTags") or ()),
            damage_type=damage_type,
        )


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Display metadata for a character as published by the game.

    The saved form does not carry the base ID; the owning Character stamps
    it in when reading. It takes no part in equality.
    """

    name: str
    avatar: str = ""
    tags: tuple[str, ...] = ()
    description: str = ""
    base_id: str | None = field(default=None, compare=False)

    def serialize(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "avatarUrl": self.avatar,
            "tags": list(self.tags),
            "description": self.description,
        }

    @classmethod
    def deserialize(cls, data: Mapping[str, Any]) -> GameSettings:
        return cls(
            name=require(data, "name", "gameSettings"),
            avatar=data.get("avatarUrl", ""),
            tags=tuple(data.get("tags") or ()),
            description=data.get("description", ""),
            base_id=data.get("baseID"),
        )


# ---------------------------------------------------------------------------
# Player records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PlayerValues:
    """The player's copy of a character: level, stars, gear, power, stats."""

    level: int = 1
    stars: int = 1
    gear_level: int = 1
    gear_pieces: tuple[Any, ...] = ()
    galactic_power: int = 0
    base_stats: CharacterStats = NULL_CHARACTER_STATS
    equipped_stats: CharacterStats = NULL_CHARACTER_STATS

    def serialize(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "stars": self.stars,
            "gearLevel": self.gear_level,
            "gearPieces": list(self.gear_pieces),
            "galacticPower": self.galactic_power,
            "baseStats": self.base_stats.serialize(),
            "equippedStats": self.equipped_stats.serialize(),
        }

    @classmethod
    def deserialize(cls, data: Mapping[str, Any]) -> PlayerValues:
        level = require(data, "level", "playerValues")
        galactic_power = require(data, "galacticPower", "playerValues")
        base_stats = data.get("baseStats")
        equipped_stats = data.get("equippedStats")
        return cls(
            level=level,
            stars=data.get("stars", 1),
            gear_level=data.get("gearLevel", 1),
            gear_pieces=tuple(data.get("gearPieces") or ()),
            galactic_power=galactic_power,
            base_stats=(
                CharacterStats.deserialize(base_stats) if base_stats is not None
                else NULL_CHARACTER_STATS
            ),
            equipped_stats=(
                CharacterStats.deserialize(equipped_stats) if equipped_stats is not None
                else NULL_CHARACTER_STATS
            ),
        )


@dataclass(frozen=True, slots=True)
class OptimizerSettings:
    """Per-character optimizer configuration.

    `targets` is the player's collection of named targets; names are unique
    within it. `target` is the selected one and, when set, is normally also
    an entry of `targets`. `minimum_mod_dots` filters mods by rarity; the
    lowest value means no filter.
    """

    target: OptimizationPlan | None = None
    targets: tuple[OptimizationPlan, ...] = ()
    minimum_mod_dots: int = MIN_MOD_DOTS
    slice_mods: bool = False
    is_locked: bool = False

    def target_names(self) -> list[str]:
        return [t.name for t in self.targets]

    # --- Target management ----------------------------------------------

    def with_target(self, target: OptimizationPlan | None) -> OptimizerSettings:
        """Select `target`, storing it over any existing target of the same name.

        Passing None clears the selection and leaves the collection alone.
        """
        if target is None:
            return replace(self, target=None)

        targets = list(self.targets)
        for i, existing in enumerate(targets):
            if existing.name == target.name:
                targets[i] = target
                break
        else:
            targets.append(target)
        return replace(self, target=target, targets=tuple(targets))

    def with_target_overrides(self, targets: Iterable[OptimizationPlan]) -> OptimizerSettings:
        """Replace the whole target collection.

        The selection follows its name into the new collection, falls back to
        the first new target, or is cleared when the collection is empty.
        """
        new_targets = tuple(targets)
        selected = None
        if self.target is not None:
            selected = next((t for t in new_targets if t.name == self.target.name), None)
        if selected is None and new_targets:
            selected = new_targets[0]
        return replace(self, target=selected, targets=new_targets)

    def with_deleted_target(self, target_name: str) -> OptimizerSettings:
        """Drop the target called `target_name`. Unknown names are a no-op."""
        if target_name not in self.target_names():
            return self

        remaining = tuple(t for t in self.targets if t.name != target_name)
        selected = self.target
        if selected is not None and selected.name == target_name:
            selected = remaining[0] if remaining else None
        return replace(self, target=selected, targets=remaining)

    # --- Filters ----------------------------------------------------------

    def with_minimum_mod_dots(self, dots: int) -> OptimizerSettings:
        if not MIN_MOD_DOTS <= dots <= MAX_MOD_DOTS:
            raise ValueError(
                f"minimum_mod_dots must be between {MIN_MOD_DOTS} and {MAX_MOD_DOTS}, got {dots}"
            )
        return replace(self, minimum_mod_dots=dots)

    def with_mod_slicing(self, slice_mods: bool) -> OptimizerSettings:
        return replace(self, slice_mods=slice_mods)

    def with_locked(self, is_locked: bool) -> OptimizerSettings:
        return replace(self, is_locked=is_locked)

    # --- Serialization ----------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        return {
            "target": self.target.serialize() if self.target is not None else None,
            "targets": [t.serialize() for t in self.targets],
            "minimumModDots": self.minimum_mod_dots,
            "sliceMods": self.slice_mods,
            "isLocked": self.is_locked,
        }

    @classmethod
    def deserialize(cls, data: Mapping[str, Any]) -> OptimizerSettings:
        target = require(data, "target", "optimizerSettings")
        return cls(
            target=OptimizationPlan.deserialize(target) if target is not None else None,
            targets=tuple(OptimizationPlan.deserialize(t) for t in data.get("targets") or ()),
            minimum_mod_dots=data.get("minimumModDots", MIN_MOD_DOTS),
            slice_mods=data.get("sliceMods", False),
            is_locked=data.get("isLocked", False),
        )
