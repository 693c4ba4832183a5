"""Smoke tests for the headless CLI."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json

import pytest

import tactics.utils.logging as tactics_logging
from tactics.__main__ import main


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    # Keep pytest's own log capture handlers in place
    monkeypatch.setattr(tactics_logging, "setup_logging", lambda *args, **kwargs: None)


class TestCli:
    def test_demo_prints_snapshot(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", [
            "tactics", "demo", "--seed", "3", "--width", "8", "--depth", "8",
            "--height", "4", "--rounds", "2", "--json",
        ])
        main()
        data = json.loads(capsys.readouterr().out)
        assert data["terrain"]["seed"] == 3
        assert len(data["terrain"]["cells"]) == 64
        assert len(data["players"]) == 2
        assert data["turn"]["turn_number"] == 5
        positions = [(u["x"], u["y"], u["z"]) for u in data["units"]]
        assert len(positions) == len(set(positions))

    def test_demo_is_deterministic(self, monkeypatch, capsys):
        argv = ["tactics", "demo", "--seed", "9", "--width", "6", "--depth", "6", "--json"]
        monkeypatch.setattr(sys, "argv", argv)
        main()
        first = capsys.readouterr().out
        main()
        assert capsys.readouterr().out == first

    def test_terrain_height_map(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", [
            "tactics", "terrain", "--seed", "1", "--width", "5", "--depth", "3", "--height", "4",
        ])
        main()
        rows = capsys.readouterr().out.strip().splitlines()
        assert len(rows) == 3
        for row in rows:
            heights = [int(h) for h in row.split()]
            assert len(heights) == 5
            assert all(1 <= h <= 4 for h in heights)
