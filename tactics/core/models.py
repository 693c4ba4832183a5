"""Core data models: Vector3, Cell, Stats, Unit, Player."""

from __future__ import annotations

from dataclasses import dataclass, field

from tactics.core.enums import Faction, TerrainType, UnitKind, UnitState

CellKey = tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class Vector3:
    """Immutable world coordinate.  ``y`` is height."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def manhattan_xz(self, other: Vector3) -> float:
        return abs(self.x - other.x) + abs(self.z - other.z)

    def as_tuple(self) -> CellKey:
        return (self.x, self.y, self.z)

    def __repr__(self) -> str:
        return f"({self.x:g}, {self.y:g}, {self.z:g})"


# 8 horizontal moves, 2 straight vertical moves and 8 orthogonal moves with a
# one-level step up or down.
NEIGHBOR_OFFSETS: tuple[tuple[int, int, int], ...] = (
    # Horizontal
    (1, 0, 0), (-1, 0, 0), (0, 0, 1), (0, 0, -1),
    # Diagonal
    (1, 0, 1), (1, 0, -1), (-1, 0, 1), (-1, 0, -1),
    # Vertical
    (0, 1, 0), (0, -1, 0),
    # Diagonal vertical
    (1, 1, 0), (-1, 1, 0), (0, 1, 1), (0, 1, -1),
    (1, -1, 0), (-1, -1, 0), (0, -1, 1), (0, -1, -1),
)


@dataclass(slots=True, eq=False)
class Cell:
    """One voxel of the battlefield.

    Identity-hashed: a grid holds exactly one Cell object per coordinate, and
    ``occupant`` is the only field that changes after generation.
    """

    x: float
    y: float
    z: float
    traversable: bool = False
    terrain: TerrainType = TerrainType.GRASS
    occupant: int | None = None

    @property
    def key(self) -> CellKey:
        return (self.x, self.y, self.z)

    @property
    def pos(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    @property
    def occupied(self) -> bool:
        return self.occupant is not None

    def same_position(self, other: Cell) -> bool:
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __repr__(self) -> str:
        flag = "T" if self.traversable else "-"
        occ = f" @{self.occupant}" if self.occupant is not None else ""
        return f"Cell({self.x:g}, {self.y:g}, {self.z:g} {flag}{occ})"


@dataclass(slots=True)
class Stats:
    """Unit statistics.

    Only ``movement_range`` and ``jump_range`` feed the movement planner; the
    combat block is carried for out-of-core combat resolution.
    """

    # --- Vitals ---
    hp: int = 20
    max_hp: int = 20
    level: int = 1
    exp: int = 0

    # --- Movement ---
    movement_range: int = 4     # Max cell-to-cell steps per move
    jump_range: int = 1         # Max upward budget and total height difference

    # --- Combat ---
    patk: int = 5               # Physical attack
    matk: int = 0               # Magical attack
    def_: int = 0               # Physical defense
    res: int = 0                # Magical defense
    agi: int = 5                # Speed / turn order
    skill: int = 5              # Physical crit chance
    luck: int = 0
    wis: int = 0                # Magical crit chance

    # --- Attributes ---
    hit_rate: float = 0.9
    evasion_rate: float = 0.05
    resolve: float = 0.0        # Chance to survive fatal damage

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def hp_ratio(self) -> float:
        return self.hp / self.max_hp if self.max_hp > 0 else 0.0

    def copy(self) -> Stats:
        return Stats(
            hp=self.hp, max_hp=self.max_hp, level=self.level, exp=self.exp,
            movement_range=self.movement_range, jump_range=self.jump_range,
            patk=self.patk, matk=self.matk, def_=self.def_, res=self.res,
            agi=self.agi, skill=self.skill, luck=self.luck, wis=self.wis,
            hit_rate=self.hit_rate, evasion_rate=self.evasion_rate,
            resolve=self.resolve,
        )


@dataclass(slots=True)
class Unit:
    """A combatant standing on the battlefield."""

    id: int
    player_id: int
    pos: Vector3
    kind: UnitKind = UnitKind.WARRIOR
    name: str = ""
    stats: Stats = field(default_factory=Stats)
    state: UnitState = UnitState.IDLE
    template_id: str | None = None
    abilities: list[str] = field(default_factory=list)

    @property
    def defeated(self) -> bool:
        return self.state == UnitState.DEFEATED

    @property
    def movement_range(self) -> int:
        return self.stats.movement_range

    @property
    def jump_range(self) -> int:
        return self.stats.jump_range


@dataclass(slots=True)
class Player:
    """A side in the battle; owns an ordered roster of unit ids."""

    id: int
    name: str
    faction: Faction = Faction.PLAYER
    unit_ids: list[int] = field(default_factory=list)
    gold: int = 0
