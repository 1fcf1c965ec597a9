"""Raw stat block for a character, as reported by the game.

Used for both the unmodded base stats and the equipped total stats stored
in PlayerValues. Legacy saves may lack either block, in which case
NULL_CHARACTER_STATS stands in.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from mods_optimizer.errors import ensure_mapping


# Field name -> saved JSON key
_JSON_KEYS: dict[str, str] = {
    "health": "health",
    "protection": "protection",
    "speed": "speed",
    "potency": "potency",
    "tenacity": "tenacity",
    "physical_damage": "physDmg",
    "special_damage": "specialDmg",
    "crit_damage": "critDmg",
    "physical_crit_chance": "physCritChance",
    "special_crit_chance": "specCritChance",
    "armor": "armor",
    "resistance": "resistance",
    "accuracy": "accuracy",
    "crit_avoidance": "critAvoid",
}


@dataclass(frozen=True, slots=True)
class CharacterStats:
    """A full set of character stats.

    Percent stats (potency, crit chance, ...) are stored as percentages,
    flat stats as integers.
    """
    health: float = 0
    protection: float = 0
    speed: float = 0
    potency: float = 0
    tenacity: float = 0
    physical_damage: float = 0
    special_damage: float = 0
    crit_damage: float = 0
    physical_crit_chance: float = 0
    special_crit_chance: float = 0
    armor: float = 0
    resistance: float = 0
    accuracy: float = 0
    crit_avoidance: float = 0

    def serialize(self) -> dict[str, float]:
        return {_JSON_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def deserialize(cls, data: Mapping[str, Any]) -> "CharacterStats":
        """Read a saved stat block. Stats missing from the payload read as 0."""
        ensure_mapping(data, "stats")
        return cls(**{
            name: data.get(key, 0) or 0
            for name, key in _JSON_KEYS.items()
        })


# An empty-but-valid stat block for characters whose stats were never recorded.
NULL_CHARACTER_STATS = CharacterStats()
