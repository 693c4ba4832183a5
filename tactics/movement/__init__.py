"""Movement layer: reachable-set flood fill and A* pathfinding."""

from tactics.movement.pathfinding import Pathfinder, edge_cost, heuristic, path_cost
from tactics.movement.planner import MovementPlanner
from tactics.movement.reachability import reachable_cells, step_cost

__all__ = [
    "MovementPlanner",
    "Pathfinder",
    "edge_cost",
    "heuristic",
    "path_cost",
    "reachable_cells",
    "step_cost",
]
