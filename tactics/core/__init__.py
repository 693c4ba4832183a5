"""Core data models and battle state."""

from tactics.core.enums import EventKind, Faction, Phase, TerrainType, UnitKind, UnitState
from tactics.core.errors import (
    InvalidConfigError,
    OccupancyError,
    SearchAbortedError,
    TacticsError,
    UnknownTemplateError,
)
from tactics.core.grid import Grid
from tactics.core.models import Cell, Player, Stats, Unit, Vector3

__all__ = [
    "Cell",
    "EventKind",
    "Faction",
    "Grid",
    "InvalidConfigError",
    "OccupancyError",
    "Phase",
    "Player",
    "SearchAbortedError",
    "Stats",
    "TacticsError",
    "TerrainType",
    "Unit",
    "UnitKind",
    "UnitState",
    "UnknownTemplateError",
    "Vector3",
]
