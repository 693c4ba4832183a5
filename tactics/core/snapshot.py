"""Serializable snapshot of a battle for the presentation layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from tactics.core.models import Cell, Unit

if TYPE_CHECKING:
    from tactics.core.session import BattleSession


# --- Terrain ---

class CellSchema(BaseModel):
    x: float
    y: float
    z: float
    traversable: bool = False
    terrain: str = "GRASS"
    occupant: int | None = None

    @classmethod
    def from_cell(cls, cell: Cell) -> CellSchema:
        return cls(
            x=cell.x, y=cell.y, z=cell.z,
            traversable=cell.traversable,
            terrain=cell.terrain.name,
            occupant=cell.occupant,
        )


class TerrainSchema(BaseModel):
    width: int = 0
    depth: int = 0
    max_height: int = 0
    seed: int | None = None
    cells: list[CellSchema] = Field(default_factory=list)


# --- Entities ---

class StatsSchema(BaseModel):
    hp: int
    max_hp: int
    level: int = 1
    exp: int = 0
    movement_range: int
    jump_range: int
    patk: int = 0
    matk: int = 0
    def_: int = Field(0, alias="def")
    res: int = 0
    agi: int = 0

    class Config:
        populate_by_name = True


class UnitSchema(BaseModel):
    id: int
    player_id: int
    name: str
    kind: str
    state: str
    x: float
    y: float
    z: float
    template_id: str | None = None
    abilities: list[str] = Field(default_factory=list)
    stats: StatsSchema

    @classmethod
    def from_unit(cls, unit: Unit) -> UnitSchema:
        s = unit.stats
        return cls(
            id=unit.id,
            player_id=unit.player_id,
            name=unit.name,
            kind=unit.kind.name,
            state=unit.state.name,
            x=unit.pos.x, y=unit.pos.y, z=unit.pos.z,
            template_id=unit.template_id,
            abilities=list(unit.abilities),
            stats=StatsSchema(
                hp=s.hp, max_hp=s.max_hp, level=s.level, exp=s.exp,
                movement_range=s.movement_range, jump_range=s.jump_range,
                patk=s.patk, matk=s.matk, def_=s.def_, res=s.res, agi=s.agi,
            ),
        )


class PlayerSchema(BaseModel):
    id: int
    name: str
    faction: str
    unit_ids: list[int] = Field(default_factory=list)
    gold: int = 0


# --- Turn ---

class TurnSchema(BaseModel):
    current_player_id: int | None = None
    phase: str = "MOVEMENT"
    turn_number: int = 0
    round_number: int = 0
    selected_unit_id: int | None = None
    selected_ability_id: str | None = None
    reachable: list[tuple[float, float, float]] = Field(default_factory=list)
    path: list[tuple[float, float, float]] = Field(default_factory=list)


class BattleSnapshot(BaseModel):
    """Everything a renderer needs to draw the current frame."""

    terrain: TerrainSchema
    players: list[PlayerSchema] = Field(default_factory=list)
    units: list[UnitSchema] = Field(default_factory=list)
    turn: TurnSchema = Field(default_factory=TurnSchema)

    @classmethod
    def from_session(cls, session: BattleSession, include_buried: bool = True) -> BattleSnapshot:
        """Copy the session's state; pass ``include_buried=False`` to send top cells only."""
        grid = session.grid
        cells = grid.cells if include_buried else grid.traversable_cells()
        st = session.state
        return cls(
            terrain=TerrainSchema(
                width=grid.width,
                depth=grid.depth,
                max_height=grid.max_height,
                seed=grid.seed,
                cells=[CellSchema.from_cell(c) for c in cells],
            ),
            players=[
                PlayerSchema(
                    id=p.id, name=p.name, faction=p.faction.name,
                    unit_ids=list(p.unit_ids), gold=p.gold,
                )
                for p in session.entities.players.values()
            ],
            units=[UnitSchema.from_unit(u) for u in session.entities.units.values()],
            turn=TurnSchema(
                current_player_id=st.current_player_id,
                phase=st.phase.name,
                turn_number=st.turn_number,
                round_number=st.round_number,
                selected_unit_id=st.selected_unit_id,
                selected_ability_id=st.selected_ability_id,
                reachable=[c.key for c in st.reachable],
                path=[c.key for c in st.path],
            ),
        )
