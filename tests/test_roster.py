"""Tests for roster ordering, versioned roster loading, and the catalog."""

import pytest

from mods_optimizer.catalog import CharacterCatalog, default_catalog
from mods_optimizer.errors import CharacterDeserializationError, UnsupportedVersionError
from mods_optimizer.models.character import Character
from mods_optimizer.models.character_data import OptimizerSettings, PlayerValues
from mods_optimizer.roster import (
    CURRENT_VERSION,
    deserialize_roster,
    serialize_roster,
    sort_by_gp,
)


def _character(base_id: str, gp: int) -> Character:
    return Character(
        base_id,
        player_values=PlayerValues(level=85, galactic_power=gp),
        optimizer_settings=OptimizerSettings(),
    )


def _legacy_character(base_id: str, gp: int) -> dict:
    return {
        "baseID": base_id,
        "name": base_id.title(),
        "level": 85,
        "starLevel": 7,
        "gearLevel": 12,
        "gearPieces": [],
        "galacticPower": gp,
        "optimizationPlan": {"name": "unnamed", "speed": 100},
        "useOnly5DotMods": True,
    }


# --- sort_by_gp ---

def test_sort_by_gp_highest_first_then_base_id():
    roster = [_character("C", 100), _character("A", 300), _character("B", 100)]
    assert [c.base_id for c in sort_by_gp(roster)] == ["A", "B", "C"]


# --- serialize / deserialize ---

def test_serialize_roster_keys_by_base_id():
    payload = serialize_roster([_character("A", 1), _character("B", 2)])
    assert payload["version"] == CURRENT_VERSION
    assert list(payload["characters"]) == ["A", "B"]


def test_current_roster_round_trip():
    roster = [_character("A", 1), _character("B", 2)]
    loaded = deserialize_roster(serialize_roster(roster), CharacterCatalog())
    assert loaded == {"A": roster[0], "B": roster[1]}


def test_legacy_roster_is_migrated():
    payload = {
        "version": "1.2",
        "characters": [_legacy_character("DARTHVADER", 30000), _legacy_character("NOBODY", 10)],
    }
    loaded = deserialize_roster(payload, default_catalog())
    vader = loaded["DARTHVADER"]
    assert vader.default_settings is not None
    assert vader.optimizer_settings.minimum_mod_dots == 5
    assert loaded["NOBODY"].default_settings is None


def test_unknown_version_raises():
    with pytest.raises(UnsupportedVersionError):
        deserialize_roster({"version": "9.9", "characters": {}}, CharacterCatalog())


def test_missing_characters_raises():
    with pytest.raises(CharacterDeserializationError, match="characters"):
        deserialize_roster({"version": CURRENT_VERSION}, CharacterCatalog())


# --- Catalog ---

def test_catalog_miss_degrades_gracefully():
    catalog = CharacterCatalog()
    assert catalog.get("NOBODY") is None
    assert catalog.targets_for("NOBODY") == ()
    assert catalog.target_for("NOBODY", "Speed") is None
    assert "NOBODY" not in catalog


def test_default_catalog_targets():
    catalog = default_catalog()
    assert "DARTHVADER" in catalog
    assert [t.name for t in catalog.targets_for("DARTHVADER")] == ["Speed", "Damage"]
    assert catalog.target_for("DARTHVADER", "Damage").weight("physDmg") == 100


def test_catalog_from_json():
    source = default_catalog()
    data = {base_id: settings.serialize() for base_id, settings in source.items()}
    loaded = CharacterCatalog.from_json(data)
    assert len(loaded) == len(source)
    assert loaded["BASTILASHAN"] == source["BASTILASHAN"]
