"""Optimization target ("plan") for a single character.

A target is a named set of stat weights plus restrictions on which mods the
optimizer may pick. Only its value semantics live here; scoring mods
against a target is the optimizer's business.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from mods_optimizer.errors import CharacterDeserializationError, ensure_mapping
from mods_optimizer.models.constants import MOD_SLOTS, TARGET_STATS, UNNAMED_TARGET


@dataclass(frozen=True, slots=True)
class OptimizationPlan:
    """A named optimization target.

    Two plans are equal when every field matches, name included. Zero
    weights are dropped on construction so that {"speed": 0} and {} compare
    equal. The mapping fields are copied into read-only views, so a plan
    shared between characters cannot be changed through any of them.
    """

    name: str = UNNAMED_TARGET
    weights: Mapping[str, float] = field(default_factory=dict)
    upgrade_mods: bool = True
    # slot -> required primary stat
    primary_stat_restrictions: Mapping[str, str] = field(default_factory=dict)
    # set name -> number of sets required
    set_restrictions: Mapping[str, int] = field(default_factory=dict)
    use_only_full_sets: bool = False

    def __post_init__(self) -> None:
        unknown = set(self.weights) - set(TARGET_STATS)
        if unknown:
            raise ValueError(f"Unknown target stats: {sorted(unknown)}")
        bad_slots = set(self.primary_stat_restrictions) - set(MOD_SLOTS)
        if bad_slots:
            raise ValueError(f"Unknown mod slots: {sorted(bad_slots)}")
        object.__setattr__(
            self, "weights", MappingProxyType({k: v for k, v in self.weights.items() if v})
        )
        object.__setattr__(
            self, "primary_stat_restrictions", MappingProxyType(dict(self.primary_stat_restrictions))
        )
        object.__setattr__(
            self, "set_restrictions", MappingProxyType(dict(self.set_restrictions))
        )

    def __hash__(self) -> int:
        return hash((
            self.name,
            frozenset(self.weights.items()),
            self.upgrade_mods,
            frozenset(self.primary_stat_restrictions.items()),
            frozenset(self.set_restrictions.items()),
            self.use_only_full_sets,
        ))

    def rename(self, name: str) -> OptimizationPlan:
        """Return a copy of this plan under a different name."""
        return replace(self, name=name)

    def weight(self, stat: str) -> float:
        return self.weights.get(stat, 0)

    def serialize(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        for stat in TARGET_STATS:
            data[stat] = self.weight(stat)
        data["upgradeMods"] = self.upgrade_mods
        data["primaryStatRestrictions"] = dict(self.primary_stat_restrictions)
        data["setRestrictions"] = dict(self.set_restrictions)
        data["useOnlyFullSets"] = self.use_only_full_sets
        return data

    @classmethod
    def deserialize(cls, data: Mapping[str, Any], default_name: str = UNNAMED_TARGET) -> OptimizationPlan:
        """Read a saved plan.

        Stat weights are stored flat next to the name. Older saves carry no
        restrictions and may carry no name; the name then falls back to
        `default_name`.
        """
        ensure_mapping(data, "optimizationPlan")
        try:
            return cls(
                name=data.get("name") or default_name,
                weights={stat: data[stat] for stat in TARGET_STATS if data.get(stat)},
                upgrade_mods=data.get("upgradeMods", True),
                primary_stat_restrictions=dict(data.get("primaryStatRestrictions") or {}),
                set_restrictions=dict(data.get("setRestrictions") or {}),
                use_only_full_sets=data.get("useOnlyFullSets", False),
            )
        except (TypeError, ValueError) as exc:
            raise CharacterDeserializationError(f"invalid optimizationPlan: {exc}") from exc
