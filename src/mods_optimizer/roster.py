"""Roster-level helpers: GP ordering and versioned save/load.

A saved roster looks like:

    {"version": "1.4", "characters": {baseID: <serialized Character>, ...}}

Saves written by version 1.2 (and earlier 1.x releases) use the flat
per-character format and go through Character.deserialize_version_one_two.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from functools import cmp_to_key
from typing import Any

from mods_optimizer.catalog import CharacterCatalog
from mods_optimizer.config import MigrationConfig
from mods_optimizer.errors import CharacterDeserializationError, UnsupportedVersionError
from mods_optimizer.models.character import Character

logger = logging.getLogger(__name__)

CURRENT_VERSION = "1.4"
# Releases whose saves use the flat character format.
LEGACY_VERSIONS = frozenset({"1.0", "1.1", "1.2"})


def sort_by_gp(characters: Iterable[Character]) -> list[Character]:
    """Highest Galactic Power first, ties by base ID."""
    return sorted(characters, key=cmp_to_key(Character.compare_gp))


def serialize_roster(characters: Iterable[Character]) -> dict[str, Any]:
    return {
        "version": CURRENT_VERSION,
        "characters": {c.base_id: c.serialize() for c in characters},
    }


def _character_entries(payload: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    entries = payload.get("characters")
    if entries is None:
        raise CharacterDeserializationError("roster is missing 'characters'")
    if isinstance(entries, Mapping):
        return list(entries.values())
    if not isinstance(entries, list):
        raise CharacterDeserializationError("roster 'characters' must be a list or an object")
    return entries


def deserialize_roster(
    payload: Mapping[str, Any],
    catalog: CharacterCatalog,
    config: MigrationConfig | None = None,
) -> dict[str, Character]:
    """Read a saved roster of any supported version, keyed by base ID."""
    if not isinstance(payload, Mapping):
        raise CharacterDeserializationError("roster must be a JSON object")
    version = str(payload.get("version", ""))
    entries = _character_entries(payload)

    if version == CURRENT_VERSION:
        characters = [Character.deserialize(entry) for entry in entries]
    elif version in LEGACY_VERSIONS:
        characters = [
            Character.deserialize_version_one_two(entry, catalog, config)
            for entry in entries
        ]
        logger.info("Migrated %d characters from version %s", len(characters), version)
    else:
        raise UnsupportedVersionError(payload.get("version"))

    return {c.base_id: c for c in characters}
