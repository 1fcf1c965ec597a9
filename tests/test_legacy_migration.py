"""Tests for reading characters saved in the flat version 1.2 format."""

import pytest

from mods_optimizer.catalog import CharacterCatalog
from mods_optimizer.config import MigrationConfig
from mods_optimizer.errors import CharacterDeserializationError
from mods_optimizer.models.character import Character
from mods_optimizer.models.character_data import CharacterSettings
from mods_optimizer.models.character_stats import NULL_CHARACTER_STATS
from mods_optimizer.models.constants import PLACEHOLDER_AVATAR
from mods_optimizer.models.optimization_plan import OptimizationPlan


DEFAULTS = CharacterSettings(targets=(OptimizationPlan("Speed", {"speed": 100}),))
CATALOG = CharacterCatalog({"HERO": DEFAULTS})
EMPTY = CharacterCatalog()


def _legacy(**overrides) -> dict:
    data = {
        "baseID": "HERO",
        "name": "Hero",
        "level": 85,
        "starLevel": 7,
        "gearLevel": 12,
        "gearPieces": ["x"],
        "galacticPower": 21000,
        "optimizationPlan": {"name": "unnamed", "speed": 100, "health": 20},
    }
    data.update(overrides)
    return data


def test_flat_fields_become_player_values():
    c = Character.deserialize_version_one_two(_legacy(), CATALOG)
    pv = c.player_values
    assert (pv.level, pv.stars, pv.gear_level, pv.galactic_power) == (85, 7, 12, 21000)
    assert pv.gear_pieces == ("x",)


def test_missing_stat_blocks_use_null_stats():
    pv = Character.deserialize_version_one_two(_legacy(), CATALOG).player_values
    assert pv.base_stats is NULL_CHARACTER_STATS
    assert pv.equipped_stats is NULL_CHARACTER_STATS


def test_stat_blocks_are_read():
    c = Character.deserialize_version_one_two(
        _legacy(baseStats={"speed": 150}, totalStats={"speed": 300, "physDmg": 4000}),
        CATALOG,
    )
    assert c.player_values.base_stats.speed == 150
    assert c.player_values.equipped_stats.physical_damage == 4000


def test_game_settings_are_placeholders():
    game = Character.deserialize_version_one_two(_legacy(), CATALOG).game_settings
    assert game.name == "Hero"
    assert game.avatar == PLACEHOLDER_AVATAR
    assert game.tags == ()
    assert game.description == ""


def test_without_named_plans_single_unnamed_target():
    opt = Character.deserialize_version_one_two(_legacy(), CATALOG).optimizer_settings
    assert opt.target_names() == ["unnamed"]
    assert opt.target.name == "unnamed"
    assert opt.target == opt.targets[0]


def test_unnamed_selection_resolves_to_matching_named_plan():
    c = Character.deserialize_version_one_two(
        _legacy(namedPlans={
            "X": {"name": "X", "speed": 100, "health": 20},
            "Other": {"name": "Other", "potency": 10},
        }),
        CATALOG,
    )
    opt = c.optimizer_settings
    assert opt.target.name == "X"
    assert opt.target is opt.targets[0]
    assert opt.target_names() == ["X", "Other"]


def test_unnamed_selection_without_match_stays_unnamed():
    c = Character.deserialize_version_one_two(
        _legacy(namedPlans={"X": {"name": "X", "speed": 50}}),
        CATALOG,
    )
    assert c.optimizer_settings.target.name == "unnamed"
    assert c.optimizer_settings.target_names() == ["X"]


def test_named_selection_is_kept():
    c = Character.deserialize_version_one_two(
        _legacy(
            optimizationPlan={"name": "Y", "speed": 100, "health": 20},
            namedPlans={"X": {"name": "X", "speed": 100, "health": 20}},
        ),
        CATALOG,
    )
    assert c.optimizer_settings.target.name == "Y"


def test_flag_defaults():
    opt = Character.deserialize_version_one_two(_legacy(), CATALOG).optimizer_settings
    assert opt.minimum_mod_dots == 1
    assert opt.slice_mods is False
    assert opt.is_locked is False


def test_flags_are_read():
    opt = Character.deserialize_version_one_two(
        _legacy(useOnly5DotMods=True, sliceMods=True, isLocked=True), CATALOG
    ).optimizer_settings
    assert opt.minimum_mod_dots == 5
    assert opt.slice_mods is True
    assert opt.is_locked is True


def test_config_overrides_placeholders():
    config = MigrationConfig(placeholder_avatar="blank.png", five_dot_threshold=6)
    c = Character.deserialize_version_one_two(_legacy(useOnly5DotMods=True), CATALOG, config)
    assert c.game_settings.avatar == "blank.png"
    assert c.optimizer_settings.minimum_mod_dots == 6


def test_default_settings_from_catalog():
    assert Character.deserialize_version_one_two(_legacy(), CATALOG).default_settings is DEFAULTS


def test_unknown_character_has_no_default_settings():
    c = Character.deserialize_version_one_two(_legacy(baseID="NOBODY"), CATALOG)
    assert c.default_settings is None
    assert c.base_id == "NOBODY"


def test_missing_optimization_plan_raises():
    data = _legacy()
    del data["optimizationPlan"]
    with pytest.raises(CharacterDeserializationError, match="HERO"):
        Character.deserialize_version_one_two(data, CATALOG)


def test_migrated_character_round_trips_in_current_format():
    c = Character.deserialize_version_one_two(_legacy(namedPlans={"X": {"name": "X", "speed": 1}}), CATALOG)
    assert Character.deserialize(c.serialize()) == c


def test_named_plans_without_names_take_their_keys():
    c = Character.deserialize_version_one_two(
        _legacy(
            optimizationPlan={"speed": 100},
            namedPlans={"X": {"speed": 100}, "Y": {"potency": 5}},
        ),
        EMPTY,
    )
    opt = c.optimizer_settings
    assert opt.target_names() == ["X", "Y"]
    assert opt.target is opt.targets[0]
    assert [t.name for t in c.targets(EMPTY)] == ["X", "Y"]


def test_name_field_wins_over_key():
    c = Character.deserialize_version_one_two(
        _legacy(namedPlans={"old key": {"name": "Real", "speed": 1}}), EMPTY
    )
    assert c.optimizer_settings.target_names() == ["Real"]


@pytest.mark.parametrize("overrides", [
    {"optimizationPlan": None},
    {"namedPlans": {"X": None}},
    {"namedPlans": ["X"]},
    {"baseStats": [1, 2]},
    {"optimizationPlan": {"name": "X", "primaryStatRestrictions": {"hat": "speed"}}},
])
def test_malformed_legacy_payload_raises_deserialization_error(overrides):
    with pytest.raises(CharacterDeserializationError, match="HERO"):
        Character.deserialize_version_one_two(_legacy(**overrides), CATALOG)
