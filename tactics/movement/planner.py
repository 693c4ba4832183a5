"""MovementPlanner — unit-aware front end to reachability and A*.

Both queries are read-only: they propose cells and paths, and the session
commits any resulting move.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tactics.movement.pathfinding import Pathfinder
from tactics.movement.reachability import reachable_cells

if TYPE_CHECKING:
    from tactics.core.grid import Grid
    from tactics.core.models import Cell, Unit


class MovementPlanner:
    """Answers "where can this unit go" and "how does it get there"."""

    __slots__ = ("_grid", "_pathfinder", "_tolerance")

    def __init__(self, grid: Grid, max_nodes: int | None = None, tolerance: float = 0.1) -> None:
        self._grid = grid
        self._pathfinder = Pathfinder(grid, max_nodes=max_nodes)
        self._tolerance = tolerance

    @property
    def grid(self) -> Grid:
        return self._grid

    def cell_of(self, unit: Unit) -> Cell | None:
        """The traversable cell the unit stands on, or None if it is off-grid."""
        return self._grid.find_cell(unit.pos, self._tolerance, traversable_only=True)

    def reachable(self, unit: Unit) -> list[Cell]:
        """Cells the unit could end its move on; empty if it is off-grid or defeated."""
        if unit.defeated:
            return []
        start = self.cell_of(unit)
        if start is None:
            return []
        return reachable_cells(
            self._grid, start, unit.movement_range, unit.jump_range, mover_id=unit.id,
        )

    def find_path(self, start: Cell, goal: Cell, mover_id: int | None = None) -> list[Cell]:
        """Unconstrained A* between two cells (see Pathfinder.find_path)."""
        return self._pathfinder.find_path(start, goal, mover_id=mover_id)

    def plan_move(self, unit: Unit, goal: Cell, reachable: list[Cell] | None = None) -> list[Cell]:
        """A* path for *unit* to *goal*, or [] when *goal* is outside its reachable set.

        Pass a precomputed *reachable* list to skip the flood fill.

        Only the goal is held to the unit's jump limit.  The A* search itself
        is unconstrained, so cells along the returned path may climb more
        than ``unit.jump_range``.
        """
        if reachable is None:
            reachable = self.reachable(unit)
        if not any(c.same_position(goal) for c in reachable):
            return []
        start = reachable[0]
        return self._pathfinder.find_path(start, goal, mover_id=unit.id)
