"""Turn / phase state machine with selection sub-state.

Whose turn it is, which phase that turn is in, and what the acting side
has selected.  Phase changes inside a turn are driven by the host (UI
action selection); the machine records them but does not enforce an order.

The reachable set and path held here are derived from the selected unit
and are rebuilt on every selection change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tactics.core.enums import EventKind, MoveRejection, Phase, UnitState
from tactics.core.models import Cell, CellKey

if TYPE_CHECKING:
    from tactics.core.entities import EntityRegistry
    from tactics.movement.planner import MovementPlanner
    from tactics.utils.events import EventBus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TurnState:
    """Transient turn data; never persisted apart from its source unit."""

    current_player_id: int | None = None
    phase: Phase = Phase.MOVEMENT
    selected_unit_id: int | None = None
    selected_ability_id: str | None = None
    reachable: list[Cell] = field(default_factory=list)
    path: list[Cell] = field(default_factory=list)
    turn_number: int = 0
    round_number: int = 0

    def reachable_keys(self) -> set[CellKey]:
        return {c.key for c in self.reachable}

    def clear_selection(self) -> None:
        self.selected_unit_id = None
        self.selected_ability_id = None
        self.reachable = []
        self.path = []


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of a move commit.  ``rejection`` is set iff ``ok`` is False."""

    ok: bool
    unit_id: int | None = None
    rejection: MoveRejection | None = None
    path: tuple[Cell, ...] = ()

    @classmethod
    def rejected(cls, unit_id: int | None, reason: MoveRejection) -> MoveResult:
        return cls(ok=False, unit_id=unit_id, rejection=reason)


class TurnController:
    """Drives turns, selection and move commits for one battle."""

    __slots__ = ("state", "_entities", "_planner", "_bus")

    def __init__(self, entities: EntityRegistry, planner: MovementPlanner, bus: EventBus) -> None:
        self.state = TurnState()
        self._entities = entities
        self._planner = planner
        self._bus = bus

    def set_planner(self, planner: MovementPlanner) -> None:
        self._planner = planner
        self.state.clear_selection()

    # -- turn flow --

    def start_turn(self, player_id: int) -> bool:
        """Hand the turn to *player_id* in the movement phase.  Unknown player: no-op."""
        if self._entities.get_player(player_id) is None:
            logger.warning("start_turn: unknown player %r", player_id)
            return False
        st = self.state
        st.current_player_id = player_id
        st.phase = Phase.MOVEMENT
        st.clear_selection()
        st.turn_number += 1
        if st.round_number == 0:
            st.round_number = 1
        logger.info("Turn %d (round %d): player #%d", st.turn_number, st.round_number, player_id)
        self._bus.emit(EventKind.TURN_STARTED, player_id)
        return True

    def end_turn(self) -> int | None:
        """Pass the turn to the next player in registration order.

        Returns the new current player id, or None when no players exist.
        """
        order = self._entities.player_order()
        if not order:
            return None
        st = self.state
        previous = st.current_player_id

        if previous is None or previous not in order:
            next_id = order[0]
        else:
            idx = order.index(previous) + 1
            if idx >= len(order):
                idx = 0
                st.round_number += 1
            next_id = order[idx]

        if previous is not None:
            st.phase = Phase.END
            logger.info("Player #%d ended turn %d", previous, st.turn_number)
            self._bus.emit(EventKind.TURN_ENDED, previous)

        self.start_turn(next_id)
        return next_id

    def set_phase(self, phase: Phase) -> None:
        """Record a phase change requested by the host."""
        if self.state.phase == phase:
            return
        self.state.phase = phase
        self._bus.emit(EventKind.PHASE_CHANGED, self.state.current_player_id, phase)

    # -- selection --

    def select_unit(self, unit_id: int | None) -> bool:
        """Select a unit (recomputing its reachable set) or clear the selection."""
        st = self.state
        if unit_id is None:
            had_selection = st.selected_unit_id is not None
            st.clear_selection()
            if had_selection:
                self._bus.emit(EventKind.UNIT_DESELECTED)
            return True

        unit = self._entities.get_unit(unit_id)
        if unit is None:
            logger.debug("select_unit: unknown unit %r", unit_id)
            return False

        st.clear_selection()
        st.selected_unit_id = unit.id
        self._bus.emit(EventKind.UNIT_SELECTED, unit.id)
        self.recompute_reachable()
        return True

    def recompute_reachable(self) -> list[Cell]:
        st = self.state
        unit = self._entities.get_unit(st.selected_unit_id)
        st.reachable = self._planner.reachable(unit) if unit is not None else []
        st.path = []
        self._bus.emit(EventKind.REACHABLE_CELLS_CALCULATED, list(st.reachable))
        return st.reachable

    def select_ability(self, ability_id: str | None) -> bool:
        """Select one of the selected unit's abilities, or clear it."""
        st = self.state
        if ability_id is None:
            st.selected_ability_id = None
            self._bus.emit(EventKind.ABILITY_SELECTED, st.selected_unit_id, None)
            return True
        unit = self._entities.get_unit(st.selected_unit_id)
        if unit is None or ability_id not in unit.abilities:
            logger.debug("select_ability: %r not available", ability_id)
            return False
        st.selected_ability_id = ability_id
        self._bus.emit(EventKind.ABILITY_SELECTED, unit.id, ability_id)
        return True

    # -- movement --

    def find_path(self, target: Cell) -> list[Cell]:
        """A* path for the selected unit to a cell of its reachable set.

        Stores the path for ``execute_path``.  Empty when nothing is
        selected or *target* is out of reach.
        """
        st = self.state
        unit = self._entities.get_unit(st.selected_unit_id)
        if unit is None or not st.reachable:
            return []
        path = self._planner.plan_move(unit, target, reachable=st.reachable)
        if path:
            st.path = path
            self._bus.emit(EventKind.PATH_FOUND, list(path))
        return path

    def commit_move(self, unit_id: int, target: Cell) -> MoveResult:
        """Move the selected unit onto a cell of its last reachable set.

        Any other request is rejected without touching state; the reason is
        in the result and on the ``moveRejected`` event.
        """
        st = self.state
        unit = self._entities.get_unit(unit_id)
        if unit is None:
            return self._reject(unit_id, MoveRejection.UNKNOWN_UNIT)
        if unit.defeated:
            return self._reject(unit_id, MoveRejection.UNIT_DEFEATED)
        if st.selected_unit_id != unit_id:
            return self._reject(unit_id, MoveRejection.NOT_SELECTED)
        if target.key not in st.reachable_keys():
            return self._reject(unit_id, MoveRejection.NOT_REACHABLE)

        # Reachable cells are live grid cells; resolve by key in case the
        # caller built its own Cell.
        dest = self._planner.grid.cell_at(*target.key)
        if dest is None:
            return self._reject(unit_id, MoveRejection.NOT_REACHABLE)
        # The reachable set may be stale: units can arrive after selection.
        if dest.occupant not in (None, unit_id):
            return self._reject(unit_id, MoveRejection.TARGET_OCCUPIED)

        path = st.path if st.path and st.path[-1] is dest else []
        if any(c.occupant not in (None, unit_id) for c in path):
            path = []
        if not path:
            path = self._planner.plan_move(unit, dest, reachable=st.reachable)
            if not path:
                return self._reject(unit_id, MoveRejection.NO_PATH)

        unit.state = UnitState.MOVING
        self._entities.relocate(unit, dest)
        unit.state = UnitState.IDLE
        st.reachable = []
        st.path = []
        logger.info("%s #%d moved to %s (%d steps)", unit.name, unit.id, unit.pos, len(path) - 1)
        self._bus.emit(EventKind.UNIT_MOVED, unit.id, unit.pos)
        return MoveResult(ok=True, unit_id=unit.id, path=tuple(path))

    def execute_path(self) -> MoveResult:
        """Commit the move along the path stored by ``find_path``."""
        st = self.state
        if st.selected_unit_id is None or not st.path:
            return self._reject(st.selected_unit_id, MoveRejection.NO_PATH)
        result = self.commit_move(st.selected_unit_id, st.path[-1])
        if result.ok:
            self._bus.emit(EventKind.PATH_EXECUTED, result.unit_id, list(result.path))
        return result

    def _reject(self, unit_id: int | None, reason: MoveRejection) -> MoveResult:
        logger.warning("Move rejected for unit %r: %s", unit_id, reason.name)
        self._bus.emit(EventKind.MOVE_REJECTED, unit_id, reason)
        return MoveResult.rejected(unit_id, reason)
