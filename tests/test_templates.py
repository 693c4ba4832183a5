"""Tests for the ability / unit template catalogs and per-kind stats."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from pydantic import ValidationError

from tactics.core.enums import Affinity, UnitKind
from tactics.core.templates import (
    ABILITY_TEMPLATES,
    KIND_BASE_STATS,
    UNIT_TEMPLATES,
    AbilityTemplate,
    abilities_by_affinity,
    abilities_unlocked_at,
    base_stats_for,
    get_ability_template,
    get_unit_template,
)


class TestKindStats:
    def test_every_kind_has_stats(self):
        assert set(KIND_BASE_STATS) == set(UnitKind)

    def test_stats_are_sane(self):
        for kind, stats in KIND_BASE_STATS.items():
            assert stats.hp == stats.max_hp > 0, kind
            assert stats.movement_range > 0, kind
            assert stats.jump_range >= 0, kind

    def test_base_stats_returns_copy(self):
        a = base_stats_for(UnitKind.ARCHER)
        b = base_stats_for(UnitKind.ARCHER)
        assert a is not b
        a.hp = 0
        assert b.hp > 0


class TestAbilities:
    def test_catalog_size(self):
        assert len(ABILITY_TEMPLATES) == 15

    def test_lookup(self):
        fireball = get_ability_template("fireball")
        assert fireball is not None
        assert fireball.affinity == Affinity.FIRE
        assert get_ability_template("nope") is None

    def test_by_affinity(self):
        fire = abilities_by_affinity(Affinity.FIRE)
        assert fire
        assert all(a.affinity == Affinity.FIRE for a in fire)

    def test_unlocked_at_is_monotonic(self):
        assert len(abilities_unlocked_at(1)) <= len(abilities_unlocked_at(99))
        assert len(abilities_unlocked_at(99)) == len(ABILITY_TEMPLATES)

    def test_templates_are_frozen(self):
        t = get_ability_template("heal")
        with pytest.raises(Exception):
            t.range = 99

    def test_malformed_template_rejected(self):
        with pytest.raises(ValidationError):
            AbilityTemplate(
                ability_id="bad", name="Bad", description="", cost_type="lots",
                cost_value=1, range=1, area=0, affinity=0, target_type=0,
            )


class TestUnitTemplates:
    def test_lookup(self):
        assert get_unit_template("squire").kind == UnitKind.WARRIOR
        assert get_unit_template("missing") is None

    def test_abilities_exist(self):
        for t in UNIT_TEMPLATES.values():
            for aid in t.ability_ids:
                assert aid in ABILITY_TEMPLATES, (t.template_id, aid)

    def test_build_stats_applies_overrides(self):
        rogue = get_unit_template("rogue").build_stats()
        assert rogue.movement_range == 6
        assert rogue.jump_range == 2
        assert rogue.level == 4

    def test_build_stats_keeps_defaults(self):
        squire = get_unit_template("squire").build_stats()
        base = KIND_BASE_STATS[UnitKind.WARRIOR]
        assert squire.max_hp == base.max_hp
        assert squire.movement_range == base.movement_range
