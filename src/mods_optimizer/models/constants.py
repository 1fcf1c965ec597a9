"""Stat names, damage types, and fixed values shared by the character model.

Stat keys use the camelCase spelling of the saved JSON so that plans and
stat blocks can be serialized without a translation table.
"""

from enum import Enum


class DamageType(str, Enum):
    """Which offensive stat a character scales with."""
    PHYSICAL = "physical"
    SPECIAL = "special"
    MIXED = "mixed"


# Stats a target can weigh, in display order.
TARGET_STATS: tuple[str, ...] = (
    "health",
    "protection",
    "speed",
    "critDmg",
    "potency",
    "tenacity",
    "physDmg",
    "specialDmg",
    "critChance",
    "defense",
    "accuracy",
    "critAvoid",
)

# Mod slots a target may restrict the primary stat of.
MOD_SLOTS: tuple[str, ...] = (
    "square",
    "arrow",
    "diamond",
    "triangle",
    "circle",
    "cross",
)

UNNAMED_TARGET = "unnamed"

# Shown for characters migrated from saves that did not record an image.
PLACEHOLDER_AVATAR = "//swgoh.gg/static/img/assets/blank-character.png"

# Mod rarity ("dots") bounds. The minimum means no rarity filter at all.
MIN_MOD_DOTS = 1
MAX_MOD_DOTS = 6
