"""Tests for the presentation snapshot."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json

from tactics.core.snapshot import BattleSnapshot
from tests.helpers.battlefield import Battlefield


def _battle():
    bf = Battlefield([[1, 2], [1, 1]])
    p = bf.add_player("Blue")
    u = bf.add_unit(p, 0, 0, movement=2, abilities=["basic_attack"])
    bf.session.start_turn(p)
    bf.session.select_unit(u.id)
    return bf, p, u


class TestSnapshot:
    def test_terrain_section(self):
        bf, _, _ = _battle()
        snap = BattleSnapshot.from_session(bf.session)
        assert len(snap.terrain.cells) == len(bf.grid)
        assert snap.terrain.width == 2
        occupied = [c for c in snap.terrain.cells if c.occupant is not None]
        assert len(occupied) == 1

    def test_top_cells_only(self):
        bf, _, _ = _battle()
        snap = BattleSnapshot.from_session(bf.session, include_buried=False)
        assert len(snap.terrain.cells) == 4
        assert all(c.traversable for c in snap.terrain.cells)

    def test_units_and_players(self):
        bf, p, u = _battle()
        snap = BattleSnapshot.from_session(bf.session)
        assert [pl.unit_ids for pl in snap.players] == [[u.id]]
        unit = snap.units[0]
        assert unit.id == u.id
        assert unit.player_id == p
        assert (unit.x, unit.y, unit.z) == (0, 0, 0)
        assert unit.kind == "WARRIOR"
        assert unit.state == "IDLE"
        assert unit.stats.movement_range == 2
        assert unit.abilities == ["basic_attack"]

    def test_turn_section(self):
        bf, p, u = _battle()
        snap = BattleSnapshot.from_session(bf.session)
        assert snap.turn.current_player_id == p
        assert snap.turn.phase == "MOVEMENT"
        assert snap.turn.selected_unit_id == u.id
        assert len(snap.turn.reachable) == len(bf.session.state.reachable)
        assert snap.turn.reachable[0] == (0, 0, 0)

    def test_json_round_trip(self):
        bf, _, _ = _battle()
        snap = BattleSnapshot.from_session(bf.session)
        data = json.loads(snap.model_dump_json())
        assert set(data) == {"terrain", "players", "units", "turn"}
        assert BattleSnapshot.model_validate(data) == snap

    def test_snapshot_is_a_copy(self):
        bf, _, u = _battle()
        snap = BattleSnapshot.from_session(bf.session)
        bf.session.commit_move(u.id, bf.cell(0, 1))
        assert (snap.units[0].x, snap.units[0].z) == (0, 0)
