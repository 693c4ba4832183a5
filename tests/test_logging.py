"""Tests for setup_logging."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import io
import logging

import pytest

from tactics.utils.logging import setup_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    search = [logging.getLogger(n) for n in ("tactics.movement.pathfinding", "tactics.movement.reachability")]
    search_levels = [lg.level for lg in search]
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for lg, lvl in zip(search, search_levels):
        lg.setLevel(lvl)


class TestSetupLogging:
    def test_format_and_level(self, restore_root):
        buf = io.StringIO()
        setup_logging("WARNING", stream=buf)
        logging.getLogger("tactics.core.turns").info("hidden")
        logging.getLogger("tactics.core.turns").warning("shown %d", 3)
        out = buf.getvalue()
        assert "hidden" not in out
        assert "[WARNING] tactics.core.turns" in out
        assert out.rstrip().endswith("| shown 3")

    def test_search_debug_muted_by_default(self, restore_root):
        buf = io.StringIO()
        setup_logging("DEBUG", stream=buf)
        logging.getLogger("tactics.movement.pathfinding").debug("expanded")
        logging.getLogger("tactics.core.session").debug("visible")
        out = buf.getvalue()
        assert "expanded" not in out
        assert "visible" in out

    def test_trace_search(self, restore_root):
        buf = io.StringIO()
        setup_logging("DEBUG", stream=buf, trace_search=True)
        logging.getLogger("tactics.movement.reachability").debug("flood")
        assert "flood" in buf.getvalue()

    def test_unknown_level_falls_back_to_info(self, restore_root):
        setup_logging("chatty", stream=io.StringIO())
        assert logging.getLogger().level == logging.INFO
