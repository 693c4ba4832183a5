"""Cost-bounded flood fill: every cell a unit can end its move on.

Breadth-first over a FIFO frontier.  Each frontier entry carries two
running totals:

  movement_cost  steps taken (a horizontal diagonal counts as two)
  jump_cost      sum of upward height changes only

A cell is claimed by the first entry that dequeues it; cheaper routes found
later are ignored.  The result is a bounded enumeration, not a cost map.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, NamedTuple

from tactics.core.models import Cell, CellKey

if TYPE_CHECKING:
    from tactics.core.grid import Grid

logger = logging.getLogger(__name__)


class _Frontier(NamedTuple):
    cell: Cell
    movement_cost: int
    jump_cost: float


def step_cost(current: Cell, neighbor: Cell) -> int:
    """Movement points spent on one step: horizontal Manhattan delta, at least 1."""
    return max(1, int(abs(neighbor.x - current.x) + abs(neighbor.z - current.z)))


def reachable_cells(
    grid: Grid,
    start: Cell,
    movement_range: int,
    jump_range: int,
    mover_id: int | None = None,
) -> list[Cell]:
    """Cells reachable from *start* within the movement and jump budgets.

    Returned in discovery order, *start* first.  Cells held by another
    entity block movement and are never part of the result.
    """
    reachable: list[Cell] = []
    visited: set[CellKey] = set()
    queue: deque[_Frontier] = deque([_Frontier(start, 0, 0)])
    start_y = start.y

    while queue:
        current = queue.popleft()
        ckey = current.cell.key
        if ckey in visited:
            continue
        visited.add(ckey)
        reachable.append(current.cell)

        for neighbor in grid.neighbors_of(current.cell):
            if neighbor.key in visited:
                continue
            if neighbor.occupant is not None and neighbor.occupant != mover_id:
                continue

            new_movement = current.movement_cost + step_cost(current.cell, neighbor)
            if new_movement > movement_range:
                continue

            dh = neighbor.y - current.cell.y
            new_jump = current.jump_cost + (dh if dh > 0 else 0)
            if new_jump > jump_range:
                continue
            if abs(neighbor.y - start_y) > jump_range:
                continue

            queue.append(_Frontier(neighbor, new_movement, new_jump))

    logger.debug(
        "Reachable from %r (mov=%d, jump=%d): %d cells",
        start, movement_range, jump_range, len(reachable),
    )
    return reachable
