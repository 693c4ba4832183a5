"""Reference catalogs — ability templates, unit templates, per-kind stat blocks.

Loaded once at import and treated as read-only lookup tables.  Templates are
pydantic dataclasses so malformed entries fail at import, not mid-battle.

Key types:
  AbilityTemplate   — immutable blueprint for one ability
  UnitTemplate      — immutable blueprint a unit is spawned from
  KIND_BASE_STATS   — closed UnitKind -> Stats table (checked exhaustively)
"""

from __future__ import annotations

from pydantic.dataclasses import dataclass as pydantic_dataclass

from tactics.core.enums import Affinity, CostType, TargetType, UnitKind
from tactics.core.models import Stats


# ---------------------------------------------------------------------------
# Default stat block per unit kind
# ---------------------------------------------------------------------------

KIND_BASE_STATS: dict[UnitKind, Stats] = {
    UnitKind.WARRIOR: Stats(
        hp=40, max_hp=40, movement_range=4, jump_range=1,
        patk=12, matk=2, def_=8, res=3, agi=5, skill=4, luck=3, wis=1,
        hit_rate=0.9, evasion_rate=0.05, resolve=0.1,
    ),
    UnitKind.ARCHER: Stats(
        hp=30, max_hp=30, movement_range=5, jump_range=2,
        patk=10, matk=2, def_=4, res=4, agi=8, skill=9, luck=5, wis=2,
        hit_rate=0.95, evasion_rate=0.12, resolve=0.05,
    ),
    UnitKind.MAGE: Stats(
        hp=24, max_hp=24, movement_range=3, jump_range=1,
        patk=3, matk=14, def_=2, res=9, agi=6, skill=3, luck=4, wis=10,
        hit_rate=0.9, evasion_rate=0.08, resolve=0.05,
    ),
}

_missing_kinds = set(UnitKind) - set(KIND_BASE_STATS)
if _missing_kinds:
    raise RuntimeError(f"KIND_BASE_STATS missing entries for {sorted(k.name for k in _missing_kinds)}")


def base_stats_for(kind: UnitKind) -> Stats:
    """Fresh copy of the default stat block for *kind*."""
    return KIND_BASE_STATS[kind].copy()


# ---------------------------------------------------------------------------
# Abilities
# ---------------------------------------------------------------------------

@pydantic_dataclass(frozen=True)
class AbilityTemplate:
    """Immutable blueprint describing one ability."""

    ability_id: str
    name: str
    description: str
    cost_type: int              # CostType enum value
    cost_value: int
    range: int                  # Cells from the caster
    area: int                   # Radius around the target cell
    affinity: int               # Affinity enum value
    target_type: int            # TargetType enum value
    effects: tuple[str, ...] = ()
    cooldown: int = 0           # In turns
    unlock_level: int = 1


ABILITY_TEMPLATES: dict[str, AbilityTemplate] = {}


def _ability(t: AbilityTemplate) -> None:
    ABILITY_TEMPLATES[t.ability_id] = t


# -- Basic --
_ability(AbilityTemplate(
    "basic_attack", "Attack", "A basic attack that deals physical damage based on PATK.",
    CostType.SP, 5, range=1, area=0, affinity=Affinity.NEUTRAL, target_type=TargetType.ENEMY,
    effects=("deal_physical_damage",),
))

# -- Warrior --
_ability(AbilityTemplate(
    "shield_bash", "Shield Bash",
    "Strikes an enemy with your shield, dealing moderate damage and stunning them for 1 turn.",
    CostType.SP, 15, range=1, area=0, affinity=Affinity.EARTH, target_type=TargetType.ENEMY,
    effects=("deal_physical_damage", "apply_stun"), cooldown=3, unlock_level=3,
))
_ability(AbilityTemplate(
    "provoke", "Provoke", "Taunts nearby enemies, forcing them to target you for 2 turns.",
    CostType.SP, 10, range=0, area=2, affinity=Affinity.NEUTRAL, target_type=TargetType.ENEMY,
    effects=("apply_taunt",), cooldown=4, unlock_level=5,
))

# -- Archer --
_ability(AbilityTemplate(
    "precise_shot", "Precise Shot", "A carefully aimed shot with an increased critical chance.",
    CostType.SP, 12, range=5, area=0, affinity=Affinity.WIND, target_type=TargetType.ENEMY,
    effects=("deal_physical_damage", "increased_crit"), cooldown=2, unlock_level=2,
))
_ability(AbilityTemplate(
    "multishot", "Multishot",
    "Fires multiple arrows at nearby enemies, dealing damage to all targets in the area.",
    CostType.SP, 20, range=4, area=1, affinity=Affinity.WIND, target_type=TargetType.ENEMY,
    effects=("deal_physical_damage",), cooldown=3, unlock_level=5,
))

# -- Mage --
_ability(AbilityTemplate(
    "fireball", "Fireball", "Hurls a ball of fire that burns everything in a small area.",
    CostType.MP, 10, range=3, area=1, affinity=Affinity.FIRE, target_type=TargetType.ENEMY,
    effects=("deal_magical_damage", "apply_burn"), cooldown=2, unlock_level=1,
))
_ability(AbilityTemplate(
    "lightning_bolt", "Lightning Bolt", "Calls down a bolt of lightning on a single enemy.",
    CostType.MP, 15, range=4, area=0, affinity=Affinity.LIGHTNING, target_type=TargetType.ENEMY,
    effects=("deal_magical_damage",), cooldown=3, unlock_level=4,
))
_ability(AbilityTemplate(
    "ice_shard", "Ice Shard", "Launches a shard of ice that damages and slows the target.",
    CostType.MP, 12, range=3, area=0, affinity=Affinity.WATER, target_type=TargetType.ENEMY,
    effects=("deal_magical_damage", "apply_slow"), cooldown=2, unlock_level=3,
))

# -- Support --
_ability(AbilityTemplate(
    "heal", "Heal", "Restores HP to a single ally based on MATK.",
    CostType.MP, 10, range=3, area=0, affinity=Affinity.WATER, target_type=TargetType.ALLY,
    effects=("restore_hp",), cooldown=1, unlock_level=1,
))
_ability(AbilityTemplate(
    "mass_heal", "Mass Heal", "Restores HP to all allies in an area based on MATK.",
    CostType.MP, 20, range=3, area=2, affinity=Affinity.WATER, target_type=TargetType.ALLY,
    effects=("restore_hp",), cooldown=4, unlock_level=8,
))
_ability(AbilityTemplate(
    "revive", "Revive", "Brings a fallen ally back with a portion of their HP.",
    CostType.MP, 30, range=2, area=0, affinity=Affinity.NEUTRAL, target_type=TargetType.ALLY,
    effects=("revive",), cooldown=6, unlock_level=10,
))
_ability(AbilityTemplate(
    "protect", "Protect", "Surrounds an ally with a barrier that absorbs damage.",
    CostType.MP, 15, range=3, area=0, affinity=Affinity.NEUTRAL, target_type=TargetType.ALLY,
    effects=("apply_barrier",), cooldown=3, unlock_level=3,
))

# -- Rogue --
_ability(AbilityTemplate(
    "backstab", "Backstab", "Strikes from behind for bonus damage.",
    CostType.SP, 15, range=1, area=0, affinity=Affinity.NEUTRAL, target_type=TargetType.ENEMY,
    effects=("deal_physical_damage", "positional_bonus"), cooldown=2, unlock_level=2,
))
_ability(AbilityTemplate(
    "poison_strike", "Poison Strike", "A venomous strike that poisons the target.",
    CostType.SP, 12, range=1, area=0, affinity=Affinity.NEUTRAL, target_type=TargetType.ENEMY,
    effects=("deal_physical_damage", "apply_poison"), cooldown=3, unlock_level=4,
))
_ability(AbilityTemplate(
    "shadow_step", "Shadow Step", "Vanishes and reappears on a nearby tile.",
    CostType.SP, 18, range=3, area=0, affinity=Affinity.NEUTRAL, target_type=TargetType.TILE,
    effects=("teleport",), cooldown=4, unlock_level=6,
))


def get_ability_template(ability_id: str) -> AbilityTemplate | None:
    return ABILITY_TEMPLATES.get(ability_id)


def abilities_by_affinity(affinity: Affinity) -> list[AbilityTemplate]:
    return [a for a in ABILITY_TEMPLATES.values() if a.affinity == affinity]


def abilities_unlocked_at(level: int) -> list[AbilityTemplate]:
    return [a for a in ABILITY_TEMPLATES.values() if a.unlock_level <= level]


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------

@pydantic_dataclass(frozen=True)
class UnitTemplate:
    """Immutable blueprint a unit is spawned from.

    Stat overrides are applied on top of the kind's default block; zero
    means "keep the default".
    """

    template_id: str
    name: str
    kind: int                   # UnitKind enum value
    ability_ids: tuple[str, ...] = ()
    affinity: int = Affinity.NEUTRAL
    level: int = 1
    max_hp: int = 0
    movement_range: int = 0
    jump_range: int = 0

    def build_stats(self) -> Stats:
        stats = base_stats_for(UnitKind(self.kind))
        stats.level = self.level
        if self.max_hp:
            stats.max_hp = self.max_hp
            stats.hp = self.max_hp
        if self.movement_range:
            stats.movement_range = self.movement_range
        if self.jump_range:
            stats.jump_range = self.jump_range
        return stats


UNIT_TEMPLATES: dict[str, UnitTemplate] = {}


def _unit(t: UnitTemplate) -> None:
    UNIT_TEMPLATES[t.template_id] = t


_unit(UnitTemplate(
    "squire", "Squire", UnitKind.WARRIOR,
    ability_ids=("basic_attack", "shield_bash"),
))
_unit(UnitTemplate(
    "knight", "Knight", UnitKind.WARRIOR,
    ability_ids=("basic_attack", "shield_bash", "provoke"),
    affinity=Affinity.EARTH, level=5, max_hp=55, movement_range=3,
))
_unit(UnitTemplate(
    "scout", "Scout", UnitKind.ARCHER,
    ability_ids=("basic_attack", "precise_shot"),
    affinity=Affinity.WIND, jump_range=3,
))
_unit(UnitTemplate(
    "ranger", "Ranger", UnitKind.ARCHER,
    ability_ids=("basic_attack", "precise_shot", "multishot"),
    affinity=Affinity.WIND, level=5,
))
_unit(UnitTemplate(
    "apprentice", "Apprentice", UnitKind.MAGE,
    ability_ids=("basic_attack", "fireball"),
    affinity=Affinity.FIRE,
))
_unit(UnitTemplate(
    "cleric", "Cleric", UnitKind.MAGE,
    ability_ids=("basic_attack", "heal", "protect"),
    affinity=Affinity.WATER, level=3,
))
_unit(UnitTemplate(
    "rogue", "Rogue", UnitKind.ARCHER,
    ability_ids=("basic_attack", "backstab", "poison_strike", "shadow_step"),
    level=4, movement_range=6, jump_range=2,
))

_unknown_abilities = {
    aid for t in UNIT_TEMPLATES.values() for aid in t.ability_ids
} - set(ABILITY_TEMPLATES)
if _unknown_abilities:
    raise RuntimeError(f"Unit templates reference unknown abilities: {sorted(_unknown_abilities)}")


def get_unit_template(template_id: str) -> UnitTemplate | None:
    return UNIT_TEMPLATES.get(template_id)
