"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0
    SPAWN = 1


@unique
class TerrainType(IntEnum):
    """Terrain tag carried by every cell."""

    GRASS = 0
    WATER = 1
    MOUNTAIN = 2
    FOREST = 3


@unique
class UnitKind(IntEnum):
    """Closed set of unit archetypes; each maps to a default stat block."""

    WARRIOR = 0
    ARCHER = 1
    MAGE = 2


@unique
class UnitState(IntEnum):
    """Lifecycle state of a unit."""

    IDLE = 0
    MOVING = 1
    ACTING = 2
    DEFEATED = 3


@unique
class Faction(IntEnum):
    """Side a player fights for."""

    PLAYER = 0
    ENEMY = 1
    NEUTRAL = 2


@unique
class Phase(IntEnum):
    """Sub-stage of a player's turn."""

    MOVEMENT = 0
    ACTION = 1
    END = 2


@unique
class Affinity(IntEnum):
    """Elemental affinity of abilities and unit templates."""

    NEUTRAL = 0
    FIRE = 1
    WATER = 2
    WIND = 3
    EARTH = 4
    LIGHTNING = 5


@unique
class TargetType(IntEnum):
    """What an ability may be aimed at."""

    ENEMY = 0
    ALLY = 1
    SELF = 2
    TILE = 3


@unique
class CostType(IntEnum):
    """Resource an ability consumes."""

    NONE = 0
    MP = 1
    SP = 2
    HP = 3


@unique
class MoveRejection(IntEnum):
    """Why a move commit was refused."""

    UNKNOWN_UNIT = 0
    NOT_SELECTED = 1
    UNIT_DEFEATED = 2
    NOT_REACHABLE = 3
    NO_PATH = 4
    TARGET_OCCUPIED = 5


@unique
class EventKind(str, Enum):
    """Topics published on the event bus.

    Values match the topic names the presentation layer subscribes to.
    """

    TERRAIN_GENERATED = "terrainGenerated"
    PLAYER_CREATED = "playerCreated"
    UNIT_CREATED = "unitCreated"
    UNIT_SELECTED = "unitSelected"
    UNIT_DESELECTED = "unitDeselected"
    ABILITY_SELECTED = "abilitySelected"
    REACHABLE_CELLS_CALCULATED = "reachableCellsCalculated"
    PATH_FOUND = "pathFound"
    PATH_EXECUTED = "pathExecuted"
    UNIT_MOVED = "unitMoved"
    MOVE_REJECTED = "moveRejected"
    UNIT_DEFEATED = "unitDefeated"
    PHASE_CHANGED = "phaseChanged"
    TURN_STARTED = "turnStarted"
    TURN_ENDED = "turnEnded"
