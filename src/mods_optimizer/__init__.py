"""Character model for the mods optimizer."""

from mods_optimizer.catalog import CharacterCatalog, default_catalog
from mods_optimizer.models.character import Character
from mods_optimizer.models.character_data import (
    CharacterSettings,
    GameSettings,
    OptimizerSettings,
    PlayerValues,
)
from mods_optimizer.models.optimization_plan import OptimizationPlan

__all__ = [
    "Character",
    "CharacterCatalog",
    "CharacterSettings",
    "GameSettings",
    "OptimizationPlan",
    "OptimizerSettings",
    "PlayerValues",
    "default_catalog",
]
