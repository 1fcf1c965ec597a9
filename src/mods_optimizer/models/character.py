"""Character aggregate: one roster entry and everything the optimizer knows about it.

A Character bundles four records:
  - default_settings:   catalog defaults (damage type, default targets, tags)
  - game_settings:      display metadata from the game (name, image, tags)
  - player_values:      the player's level, stars, gear, GP and stats
  - optimizer_settings: selected target, named targets, mod filters, lock

Characters are frozen. Every change goes through a with_* method that
returns a new Character sharing the untouched records with the old one.
Operations that need catalog defaults take the catalog as an argument.
"""

from __future__ import annotations

import locale
import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from mods_optimizer.config import MigrationConfig
from mods_optimizer.errors import CharacterDeserializationError, ensure_mapping, require
from mods_optimizer.models.character_data import (
    CharacterSettings,
    GameSettings,
    OptimizerSettings,
    PlayerValues,
)
from mods_optimizer.models.character_stats import NULL_CHARACTER_STATS, CharacterStats
from mods_optimizer.models.constants import UNNAMED_TARGET
from mods_optimizer.models.optimization_plan import OptimizationPlan

if TYPE_CHECKING:
    from mods_optimizer.catalog import CharacterCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Character:
    """A single character in the player's roster."""

    base_id: str
    default_settings: CharacterSettings | None = None
    game_settings: GameSettings | None = None
    player_values: PlayerValues | None = None
    optimizer_settings: OptimizerSettings | None = None

    @property
    def galactic_power(self) -> int:
        return self.player_values.galactic_power if self.player_values is not None else 0

    # --- Copy-on-write ----------------------------------------------------

    def clone(self) -> Character:
        """Shallow copy: new player/optimizer records, everything else shared."""
        return Character(
            self.base_id,
            self.default_settings,
            self.game_settings,
            replace(self.player_values) if self.player_values is not None else None,
            replace(self.optimizer_settings) if self.optimizer_settings is not None else None,
        )

    def with_default_settings(self, default_settings: CharacterSettings | None) -> Character:
        if default_settings is None:
            return self
        return replace(self, default_settings=default_settings)

    def with_game_settings(self, game_settings: GameSettings | None) -> Character:
        if game_settings is None:
            return self
        return replace(self, game_settings=game_settings)

    def with_player_values(self, player_values: PlayerValues | None) -> Character:
        if player_values is None:
            return self
        return replace(self, player_values=player_values)

    def with_optimizer_settings(self, optimizer_settings: OptimizerSettings | None) -> Character:
        if optimizer_settings is None:
            return self
        return replace(self, optimizer_settings=optimizer_settings)

    # --- Targets ----------------------------------------------------------

    def _optimizer(self) -> OptimizerSettings:
        return self.optimizer_settings if self.optimizer_settings is not None else OptimizerSettings()

    def with_reset_target(self, target_name: str, catalog: CharacterCatalog) -> Character:
        """Put the catalog default called `target_name` back in place of the player's version.

        Without a matching default the selected target is cleared.
        """
        default = catalog.target_for(self.base_id, target_name)
        return replace(self, optimizer_settings=self._optimizer().with_target(default))

    def with_reset_targets(self, catalog: CharacterCatalog) -> Character:
        """Throw away every player target and start over from the catalog defaults."""
        defaults = catalog.targets_for(self.base_id)
        return replace(self, optimizer_settings=self._optimizer().with_target_overrides(defaults))

    def with_deleted_target(self, target_name: str) -> Character:
        """Drop a player target. Without optimizer settings there is nothing to drop."""
        if self.optimizer_settings is None:
            return self
        optimizer_settings = self.optimizer_settings.with_deleted_target(target_name)
        if optimizer_settings is self.optimizer_settings:
            return self
        return replace(self, optimizer_settings=optimizer_settings)

    def targets(self, catalog: CharacterCatalog) -> list[OptimizationPlan]:
        """All targets available to this character.

        Catalog defaults come first; a player target with the same name
        takes the default's place, other player targets follow in order.
        """
        merged: dict[str, OptimizationPlan] = {}
        for target in catalog.targets_for(self.base_id):
            merged[target.name] = target
        for target in self._optimizer().targets:
            merged[target.name] = target
        return list(merged.values())

    def default_target(self, catalog: CharacterCatalog) -> OptimizationPlan:
        targets = self.targets(catalog)
        return targets[0] if targets else OptimizationPlan(UNNAMED_TARGET)

    # --- Ordering ---------------------------------------------------------

    def compare_gp(self, other: Character) -> int:
        """Comparator for sorting by Galactic Power, highest first.

        Positive when `other` has more GP, negative when this one does. Ties
        are broken by base ID with locale.strcoll, which follows LC_COLLATE.
        Until the process calls locale.setlocale that is the C locale, where
        the order is plain code-point order.
        """
        if other.galactic_power == self.galactic_power:
            result = locale.strcoll(self.base_id, other.base_id)
            return (result > 0) - (result < 0)
        return other.galactic_power - self.galactic_power

    # --- Serialization ----------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        # defaultSettings/gameSettings are left out when unset, the other two
        # are written as null. Readers rely on this shape.
        data: dict[str, Any] = {"baseID": self.base_id}
        if self.default_settings is not None:
            data["defaultSettings"] = self.default_settings.serialize()
        if self.game_settings is not None:
            data["gameSettings"] = self.game_settings.serialize()
        data["playerValues"] = (
            self.player_values.serialize() if self.player_values is not None else None
        )
        data["optimizerSettings"] = (
            self.optimizer_settings.serialize() if self.optimizer_settings is not None else None
        )
        return data

    @classmethod
    def deserialize(cls, data: Mapping[str, Any]) -> Character:
        """Read a Character saved in the current format.

        playerValues and optimizerSettings are mandatory keys (they may be
        null). The input mapping is left untouched.
        """
        base_id = require(data, "baseID", "character")
        try:
            return cls._deserialize_current(base_id, data)
        except CharacterDeserializationError as exc:
            raise CharacterDeserializationError(str(exc), base_id) from exc

    @classmethod
    def _deserialize_current(cls, base_id: str, data: Mapping[str, Any]) -> Character:
        player_values = require(data, "playerValues", "character")
        optimizer_settings = require(data, "optimizerSettings", "character")
        default_settings = data.get("defaultSettings")
        game_settings = data.get("gameSettings")
        return cls(
            base_id,
            CharacterSettings.deserialize(default_settings) if default_settings is not None else None,
            GameSettings.deserialize({**ensure_mapping(game_settings, "gameSettings"), "baseID": base_id})
            if game_settings is not None else None,
            PlayerValues.deserialize(player_values) if player_values is not None else None,
            OptimizerSettings.deserialize(optimizer_settings)
            if optimizer_settings is not None else None,
        )

    @classmethod
    def deserialize_version_one_two(
        cls,
        data: Mapping[str, Any],
        catalog: CharacterCatalog,
        config: MigrationConfig | None = None,
    ) -> Character:
        """Read a Character saved in the flat version 1.2 format.

        That format kept a single `optimizationPlan` plus an optional
        `namedPlans` mapping, and stored player values at the top level.
        Fields it never had (image, tags, description) get placeholders.
        """
        base_id = require(data, "baseID", "character")
        try:
            return cls._deserialize_legacy(base_id, data, catalog, config or MigrationConfig())
        except CharacterDeserializationError as exc:
            raise CharacterDeserializationError(str(exc), base_id) from exc

    @classmethod
    def _deserialize_legacy(
        cls,
        base_id: str,
        data: Mapping[str, Any],
        catalog: CharacterCatalog,
        config: MigrationConfig,
    ) -> Character:
        serialized_plan = require(data, "optimizationPlan", "character")
        serialized_named_plans = data.get("namedPlans") or {UNNAMED_TARGET: serialized_plan}
        # Plans saved without a name are known by their key.
        named_plans = [
            OptimizationPlan.deserialize(plan, default_name=name)
            for name, plan in ensure_mapping(serialized_named_plans, "namedPlans").items()
        ]

        selected_target = OptimizationPlan.deserialize(serialized_plan)

        # An unnamed selection that matches a named plan was saved twice; point
        # the selection at the named copy.
        if selected_target.name == UNNAMED_TARGET:
            candidate = selected_target
            for target in named_plans:
                if candidate.rename(target.name) == target:
                    selected_target = target
            if selected_target is not candidate:
                logger.debug(
                    "%s: unnamed target resolved to %r", base_id, selected_target.name
                )

        game_settings = GameSettings(
            data.get("name", base_id),
            config.placeholder_avatar,
            (),
            "",
            base_id=base_id,
        )
        player_values = PlayerValues(
            data.get("level", 1),
            data.get("starLevel", 1),
            data.get("gearLevel", 1),
            tuple(data.get("gearPieces") or ()),
            data.get("galacticPower", 0),
            _legacy_stats(data.get("baseStats"), "baseStats"),
            _legacy_stats(data.get("totalStats"), "totalStats"),
        )
        optimizer_settings = OptimizerSettings(
            selected_target,
            tuple(named_plans),
            config.five_dot_threshold if data.get("useOnly5DotMods")
            else config.minimum_dot_threshold,
            data.get("sliceMods") or config.default_slice_mods,
            data.get("isLocked") or config.default_locked,
        )

        return cls(
            base_id,
            catalog.get(base_id),
            game_settings,
            player_values,
            optimizer_settings,
        )


def _legacy_stats(data: Mapping[str, Any] | None, owner: str) -> CharacterStats:
    if not data:
        return NULL_CHARACTER_STATS
    return CharacterStats.deserialize(ensure_mapping(data, owner))
