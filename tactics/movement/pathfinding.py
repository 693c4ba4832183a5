"""A* pathfinding over the voxel grid with asymmetric climb costs.

Climbing costs one extra point per level, dropping costs half a point per
level.  The heuristic weighs height at 1.5 per level and counts horizontal
distance in Manhattan steps, which overestimates diagonal moves: the search
is deliberately approximate and may return a slightly longer route on some
terrain.  Keep it that way unless strict optimality is required.

Usage:
    pf = Pathfinder(grid)
    path = pf.find_path(start_cell, goal_cell)   # list[Cell], [] when unreachable
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from tactics.core.errors import SearchAbortedError
from tactics.core.models import Cell, CellKey

if TYPE_CHECKING:
    from tactics.core.grid import Grid

logger = logging.getLogger(__name__)

VERTICAL_HEURISTIC_WEIGHT = 1.5


def edge_cost(current: Cell, neighbor: Cell) -> float:
    """Cost of stepping from *current* onto the adjacent *neighbor*."""
    dh = neighbor.y - current.y
    return 1 + (dh if dh > 0 else abs(dh) / 2)


def heuristic(a: Cell, b: Cell) -> float:
    horizontal = abs(a.x - b.x) + abs(a.z - b.z)
    return horizontal + abs(a.y - b.y) * VERTICAL_HEURISTIC_WEIGHT


def path_cost(path: Sequence[Cell]) -> float:
    """Total edge cost along *path*; 0.0 for an empty or single-cell path."""
    return sum(edge_cost(a, b) for a, b in zip(path, path[1:]))


# ---------------------------------------------------------------------------
# A* Pathfinder
# ---------------------------------------------------------------------------

class Pathfinder:
    """A* pathfinder operating on a Grid.

    Read-only: never touches occupancy, callers commit moves themselves.
    With *max_nodes* set, a search that expands more nodes raises
    SearchAbortedError instead of running to exhaustion.
    """

    __slots__ = ("_grid", "_max_nodes")

    def __init__(self, grid: Grid, max_nodes: int | None = None) -> None:
        self._grid = grid
        self._max_nodes = max_nodes

    @property
    def grid(self) -> Grid:
        return self._grid

    def find_path(self, start: Cell, goal: Cell, mover_id: int | None = None) -> list[Cell]:
        """Compute an A* path from *start* to *goal*.

        Returns the cells from *start* to *goal* inclusive, ``[start]`` when
        they coincide, or ``[]`` when the goal cannot be reached.

        A cell occupied by anyone other than the goal's occupant (or
        *mover_id*) is not walkable, so a unit can path up to an occupied
        goal without passing through other units.
        """
        if start.same_position(goal):
            return [start]

        grid = self._grid
        goal_occupant = goal.occupant
        goal_key = goal.key

        # Insertion-ordered open set: min() returns the first minimal fScore.
        open_set: dict[CellKey, Cell] = {start.key: start}
        closed: set[CellKey] = set()
        came_from: dict[CellKey, Cell] = {}
        g_score: dict[CellKey, float] = {start.key: 0.0}
        f_score: dict[CellKey, float] = {start.key: heuristic(start, goal)}
        expanded = 0

        while open_set:
            ckey = min(open_set, key=f_score.__getitem__)
            current = open_set[ckey]

            if ckey == goal_key:
                path = self._reconstruct(came_from, current)
                logger.debug(
                    "A* %r -> %r: %d steps, cost %.1f, %d nodes expanded",
                    start, goal, len(path) - 1, g_score[ckey], expanded,
                )
                return path

            del open_set[ckey]
            closed.add(ckey)
            expanded += 1
            if self._max_nodes is not None and expanded > self._max_nodes:
                raise SearchAbortedError(expanded, self._max_nodes)

            current_g = g_score[ckey]

            for neighbor in grid.neighbors_of(current):
                nkey = neighbor.key
                if nkey in closed:
                    continue

                occ = neighbor.occupant
                if occ is not None and occ != goal_occupant and occ != mover_id:
                    continue

                tentative_g = current_g + edge_cost(current, neighbor)
                if nkey in open_set and tentative_g >= g_score[nkey]:
                    continue

                came_from[nkey] = current
                g_score[nkey] = tentative_g
                f_score[nkey] = tentative_g + heuristic(neighbor, goal)
                open_set.setdefault(nkey, neighbor)

        logger.debug("A* %r -> %r: no path (%d nodes expanded)", start, goal, expanded)
        return []

    @staticmethod
    def _reconstruct(came_from: dict[CellKey, Cell], current: Cell) -> list[Cell]:
        """Walk back through came_from to build the path, start first."""
        path: list[Cell] = [current]
        key = current.key
        while key in came_from:
            current = came_from[key]
            path.append(current)
            key = current.key
        path.reverse()
        return path
