"""Entity model — players, units and their occupancy on the grid.

Together with the Grid this is the single source of truth for who stands
where.  Every living unit's position coincides with exactly one traversable
cell, and that cell's occupant is the unit's id; ``relocate`` is the only
code path that moves a unit and it restores both sides in one step.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from tactics.core.enums import EventKind, Faction, UnitKind, UnitState
from tactics.core.errors import OccupancyError, UnknownTemplateError
from tactics.core.models import Cell, Player, Stats, Unit, Vector3
from tactics.core.templates import base_stats_for, get_unit_template

if TYPE_CHECKING:
    from tactics.core.grid import Grid
    from tactics.utils.events import EventBus

logger = logging.getLogger(__name__)


class EntityRegistry:
    """Creates players and units and keeps occupancy consistent."""

    __slots__ = ("players", "units", "_grid", "_bus", "_tolerance", "_next_id")

    def __init__(self, grid: Grid, bus: EventBus, tolerance: float = 0.1) -> None:
        self.players: dict[int, Player] = {}
        self.units: dict[int, Unit] = {}
        self._grid = grid
        self._bus = bus
        self._tolerance = tolerance
        self._next_id: int = 1

    @property
    def grid(self) -> Grid:
        return self._grid

    def allocate_id(self) -> int:
        eid = self._next_id
        self._next_id += 1
        return eid

    def reset_grid(self, grid: Grid) -> list[int]:
        """Swap in a freshly generated grid; units on the old grid are dropped.

        Players and their ids survive, their rosters are emptied.  Returns
        the ids of the dropped units.
        """
        dropped = list(self.units)
        self.units.clear()
        for player in self.players.values():
            player.unit_ids.clear()
        self._grid = grid
        if dropped:
            logger.warning("New terrain: dropped %d units from the previous battlefield", len(dropped))
        return dropped

    # -- players --

    def create_player(self, name: str, faction: Faction = Faction.PLAYER, gold: int = 0) -> Player:
        player = Player(id=self.allocate_id(), name=name, faction=faction, gold=gold)
        self.players[player.id] = player
        logger.info("Created player %r #%d (%s)", name, player.id, faction.name)
        self._bus.emit(EventKind.PLAYER_CREATED, player.id)
        return player

    def get_player(self, player_id: int | None) -> Player | None:
        if player_id is None:
            return None
        return self.players.get(player_id)

    def player_order(self) -> list[int]:
        """Player ids in registration order."""
        return list(self.players)

    # -- units --

    def get_unit(self, unit_id: int | None) -> Unit | None:
        if unit_id is None:
            return None
        return self.units.get(unit_id)

    def units_of(self, player_id: int) -> list[Unit]:
        player = self.players.get(player_id)
        if player is None:
            return []
        return [self.units[uid] for uid in player.unit_ids if uid in self.units]

    def living_units(self) -> list[Unit]:
        return [u for u in self.units.values() if not u.defeated]

    def cell_of(self, unit: Unit) -> Cell | None:
        return self._grid.find_cell(unit.pos, self._tolerance, traversable_only=True)

    def spawn_unit(
        self,
        player_id: int,
        position: Vector3 | tuple[float, float, float],
        stats: Stats | None = None,
        kind: UnitKind = UnitKind.WARRIOR,
        name: str = "",
        abilities: Iterable[str] = (),
        template_id: str | None = None,
    ) -> Unit | None:
        """Place a new unit for *player_id* on the traversable cell at *position*.

        Returns None without mutating anything when the player is unknown,
        there is no traversable cell there, or the cell is taken.
        """
        player = self.players.get(player_id)
        if player is None:
            logger.warning("Spawn refused: unknown player %r", player_id)
            return None
        cell = self._grid.find_cell(position, self._tolerance, traversable_only=True)
        if cell is None:
            logger.warning("Spawn refused: no traversable cell at %s", position)
            return None
        if cell.occupant is not None:
            logger.warning("Spawn refused: %r already occupied by #%d", cell, cell.occupant)
            return None

        unit = Unit(
            id=self.allocate_id(),
            player_id=player_id,
            pos=cell.pos,
            kind=kind,
            name=name or f"{kind.name.title()} {len(player.unit_ids) + 1}",
            stats=stats.copy() if stats is not None else base_stats_for(kind),
            template_id=template_id,
            abilities=list(abilities),
        )
        self.units[unit.id] = unit
        player.unit_ids.append(unit.id)
        self._grid.set_occupant(cell, unit.id)
        logger.info("Spawned %s #%d for player #%d at %s", unit.name, unit.id, player_id, unit.pos)
        self._bus.emit(EventKind.UNIT_CREATED, unit.id, player_id)
        return unit

    def spawn_from_template(
        self,
        player_id: int,
        template_id: str,
        position: Vector3 | tuple[float, float, float],
        name: str | None = None,
    ) -> Unit | None:
        """Spawn a unit from the catalog.  Unknown *template_id* raises UnknownTemplateError."""
        template = get_unit_template(template_id)
        if template is None:
            raise UnknownTemplateError(template_id)
        return self.spawn_unit(
            player_id,
            position,
            stats=template.build_stats(),
            kind=UnitKind(template.kind),
            name=name or template.name,
            abilities=template.ability_ids,
            template_id=template.template_id,
        )

    def relocate(self, unit: Unit, target: Cell) -> None:
        """Move *unit* onto *target*, updating both cells and the unit together."""
        source = self.cell_of(unit)
        if source is None or source.occupant != unit.id:
            raise OccupancyError(
                f"Unit #{unit.id} at {unit.pos} is not the occupant of its cell ({source!r})"
            )
        if target.occupant is not None and target.occupant != unit.id:
            raise OccupancyError(f"Target {target!r} is held by #{target.occupant}")
        self._grid.set_occupant(source, None)
        self._grid.set_occupant(target, unit.id)
        unit.pos = target.pos

    def set_hp(self, unit_id: int, hp: int) -> Unit | None:
        """Set a unit's hp (clamped to [0, max_hp]).  At 0 the unit is defeated.

        A defeated unit leaves the battlefield: its cell is freed and it no
        longer blocks movement.
        """
        unit = self.units.get(unit_id)
        if unit is None or unit.defeated:
            return None
        unit.stats.hp = max(0, min(hp, unit.stats.max_hp))
        if unit.stats.hp == 0:
            cell = self.cell_of(unit)
            if cell is not None and cell.occupant == unit.id:
                self._grid.set_occupant(cell, None)
            unit.state = UnitState.DEFEATED
            logger.info("%s #%d defeated at %s", unit.name, unit.id, unit.pos)
            self._bus.emit(EventKind.UNIT_DEFEATED, unit.id, unit.player_id)
        return unit

    # -- invariants --

    def check_invariants(self) -> None:
        """Raise OccupancyError if any position/occupant pair disagrees."""
        for unit in self.living_units():
            cell = self.cell_of(unit)
            if cell is None:
                raise OccupancyError(f"Unit #{unit.id} at {unit.pos} stands on no traversable cell")
            if cell.occupant != unit.id:
                raise OccupancyError(
                    f"Unit #{unit.id} at {unit.pos}: cell occupant is {cell.occupant!r}"
                )
        for cell in self._grid.occupied_cells():
            unit = self.units.get(cell.occupant)
            unit_cell = self.cell_of(unit) if unit is not None and not unit.defeated else None
            if unit_cell is not cell:
                raise OccupancyError(f"{cell!r} holds #{cell.occupant} which is not standing there")
