"""BattleSession — the in-process API a host drives a battle through.

One session owns the event bus, the grid, the entity registry, the
movement planner and the turn controller.  There is no process-global
state: two sessions never see each other's events or units.
"""

from __future__ import annotations

from typing import Iterable

from tactics.config import BattleConfig
from tactics.core.entities import EntityRegistry
from tactics.core.enums import EventKind, Faction, Phase, UnitKind
from tactics.core.grid import Grid
from tactics.core.models import Cell, Player, Stats, Unit, Vector3
from tactics.core.turns import MoveResult, TurnController, TurnState
from tactics.movement.planner import MovementPlanner
from tactics.systems.noise import NoiseSource
from tactics.systems.terrain import TerrainGenerator
from tactics.utils.events import EventBus


class BattleSession:
    """Facade over terrain, entities, movement and turn flow for one battle."""

    def __init__(self, config: BattleConfig | None = None, noise: NoiseSource | None = None) -> None:
        self.config = config or BattleConfig()
        self.config.validate()
        self.bus = EventBus()
        self._generator = TerrainGenerator(self.config, noise=noise)
        self.grid = Grid([])
        self.entities = EntityRegistry(self.grid, self.bus, tolerance=self.config.cell_tolerance)
        self.planner = self._make_planner(self.grid)
        self.turns = TurnController(self.entities, self.planner, self.bus)

    def _make_planner(self, grid: Grid) -> MovementPlanner:
        return MovementPlanner(
            grid, max_nodes=self.config.max_search_nodes, tolerance=self.config.cell_tolerance,
        )

    # ------------------------------------------------------------------
    # Terrain
    # ------------------------------------------------------------------

    def generate_terrain(
        self,
        width: int | None = None,
        max_height: int | None = None,
        depth: int | None = None,
        noise_scale: float | None = None,
        seed: int | None = None,
    ) -> Grid:
        """Generate a fresh battlefield and make it the session's grid.

        Units standing on the previous grid are discarded; players are kept.
        """
        grid = self._generator.generate(
            width=width, max_height=max_height, depth=depth,
            noise_scale=noise_scale, seed=seed,
        )
        self.use_grid(grid)
        return grid

    def use_grid(self, grid: Grid) -> None:
        """Install an already built grid (generated or hand-made)."""
        self.grid = grid
        self.entities.reset_grid(grid)
        self.planner = self._make_planner(grid)
        self.turns.set_planner(self.planner)
        self.bus.emit(EventKind.TERRAIN_GENERATED, grid)

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    def create_player(self, name: str, faction: Faction = Faction.PLAYER, gold: int = 0) -> Player:
        return self.entities.create_player(name, faction, gold)

    def spawn_unit(
        self,
        player_id: int,
        position: Vector3 | tuple[float, float, float],
        stats: Stats | None = None,
        kind: UnitKind = UnitKind.WARRIOR,
        name: str = "",
        abilities: Iterable[str] = (),
    ) -> Unit | None:
        return self.entities.spawn_unit(
            player_id, position, stats=stats, kind=kind, name=name, abilities=abilities,
        )

    def spawn_from_template(
        self,
        player_id: int,
        template_id: str,
        position: Vector3 | tuple[float, float, float],
        name: str | None = None,
    ) -> Unit | None:
        return self.entities.spawn_from_template(player_id, template_id, position, name=name)

    def set_unit_hp(self, unit_id: int, hp: int) -> Unit | None:
        """Set hp; a unit reaching 0 is defeated and dropped from the selection."""
        unit = self.entities.set_hp(unit_id, hp)
        if unit is not None and unit.defeated and self.turns.state.selected_unit_id == unit.id:
            self.turns.select_unit(None)
        return unit

    def get_unit(self, unit_id: int | None) -> Unit | None:
        return self.entities.get_unit(unit_id)

    def get_player(self, player_id: int | None) -> Player | None:
        return self.entities.get_player(player_id)

    def unit_at(self, position: Vector3 | tuple[float, float, float]) -> Unit | None:
        cell = self.grid.find_cell(position, self.config.cell_tolerance, traversable_only=True)
        if cell is None or cell.occupant is None:
            return None
        return self.entities.get_unit(cell.occupant)

    # ------------------------------------------------------------------
    # Turn flow
    # ------------------------------------------------------------------

    @property
    def state(self) -> TurnState:
        return self.turns.state

    def start_turn(self, player_id: int) -> bool:
        return self.turns.start_turn(player_id)

    def end_turn(self) -> int | None:
        return self.turns.end_turn()

    def set_phase(self, phase: Phase) -> None:
        self.turns.set_phase(phase)

    def select_unit(self, unit_id: int | None) -> bool:
        return self.turns.select_unit(unit_id)

    def select_ability(self, ability_id: str | None) -> bool:
        return self.turns.select_ability(ability_id)

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def reachable(self, unit_id: int) -> list[Cell]:
        """Reachable set for any unit, without touching the selection."""
        unit = self.entities.get_unit(unit_id)
        if unit is None:
            return []
        return self.planner.reachable(unit)

    def find_path(self, target: Cell) -> list[Cell]:
        return self.turns.find_path(target)

    def execute_path(self) -> MoveResult:
        return self.turns.execute_path()

    def commit_move(self, unit_id: int, target: Cell) -> MoveResult:
        return self.turns.commit_move(unit_id, target)

    def check_invariants(self) -> None:
        self.entities.check_invariants()
