"""Built-in per-character defaults, looked up by base ID.

The catalog is passed to the Character operations that need it rather than
read from a module global, so callers and tests can supply their own.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from mods_optimizer.errors import ensure_mapping
from mods_optimizer.models.character_data import CharacterSettings
from mods_optimizer.models.constants import DamageType
from mods_optimizer.models.optimization_plan import OptimizationPlan

logger = logging.getLogger(__name__)


class CharacterCatalog(Mapping[str, CharacterSettings]):
    """Read-only mapping of base ID -> CharacterSettings.

    Lookups for unknown IDs return None (or an empty target list); they
    never raise.
    """

    __slots__ = ("_settings",)

    def __init__(self, settings: Mapping[str, CharacterSettings] | None = None) -> None:
        self._settings: dict[str, CharacterSettings] = dict(settings or {})

    def __getitem__(self, base_id: str) -> CharacterSettings:
        return self._settings[base_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._settings)

    def __len__(self) -> int:
        return len(self._settings)

    def get(self, base_id: str, default: CharacterSettings | None = None) -> CharacterSettings | None:
        settings = self._settings.get(base_id)
        if settings is None:
            logger.debug("No catalog entry for %s", base_id)
            return default
        return settings

    def targets_for(self, base_id: str) -> tuple[OptimizationPlan, ...]:
        """Default targets for a character, in catalog order."""
        settings = self.get(base_id)
        return settings.targets if settings is not None else ()

    def target_for(self, base_id: str, target_name: str) -> OptimizationPlan | None:
        settings = self.get(base_id)
        return settings.target(target_name) if settings is not None else None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> CharacterCatalog:
        """Build a catalog from {baseID: serialized CharacterSettings}."""
        ensure_mapping(data, "catalog")
        return cls({
            base_id: CharacterSettings.deserialize(entry)
            for base_id, entry in data.items()
        })


def default_catalog() -> CharacterCatalog:
    """A small built-in catalog covering a handful of common characters."""
    return CharacterCatalog({
        "DARTHVADER": CharacterSettings(
            targets=(
                OptimizationPlan("Speed", {"speed": 100, "potency": 50, "health": 10}),
                OptimizationPlan("Damage", {"speed": 50, "physDmg": 100, "critDmg": 80, "critChance": 40}),
            ),
            extra_tags=("vader", "sith"),
            damage_type=DamageType.PHYSICAL,
        ),
        "GENERALKENOBI": CharacterSettings(
            targets=(
                OptimizationPlan("Tank", {"health": 60, "protection": 100, "speed": 40, "defense": 20}),
            ),
            extra_tags=("obi-wan", "tank"),
            damage_type=DamageType.PHYSICAL,
        ),
        "BASTILASHAN": CharacterSettings(
            targets=(
                OptimizationPlan("Leader", {"speed": 100, "potency": 30, "health": 20}),
                OptimizationPlan("Nuker", {"speed": 60, "specialDmg": 100, "critChance": 50}),
            ),
            extra_tags=("bastila",),
            damage_type=DamageType.SPECIAL,
        ),
    })
