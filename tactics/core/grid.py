"""Voxel grid / spatial index."""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Iterable, Iterator

from tactics.core.errors import InvalidConfigError
from tactics.core.models import NEIGHBOR_OFFSETS, Cell, CellKey, Vector3


class Grid:
    """Ordered collection of voxel cells with coordinate and column indexes.

    Cells keep their generation order.  Lookups by exact coordinate are a
    dict hit; tolerant lookups (``find_cell``) scan at most eight unit
    buckets.  Only ``Cell.occupant`` is mutable after construction.
    """

    __slots__ = ("width", "depth", "max_height", "seed", "_cells", "_by_key", "_buckets", "_columns")

    def __init__(
        self,
        cells: Iterable[Cell],
        width: int = 0,
        depth: int = 0,
        max_height: int = 0,
        seed: int | None = None,
    ) -> None:
        self.width = width
        self.depth = depth
        self.max_height = max_height
        self.seed = seed
        self._cells: list[Cell] = []
        self._by_key: dict[CellKey, Cell] = {}
        self._buckets: dict[tuple[int, int, int], list[Cell]] = defaultdict(list)
        self._columns: dict[tuple[float, float], list[Cell]] = defaultdict(list)
        for cell in cells:
            key = cell.key
            if key in self._by_key:
                raise InvalidConfigError(f"Duplicate cell at {key}")
            self._cells.append(cell)
            self._by_key[key] = cell
            self._buckets[_bucket(cell.x, cell.y, cell.z)].append(cell)
            self._columns[(cell.x, cell.z)].append(cell)

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> Grid:
        """Index hand-built cells; dimensions are derived from their extent."""
        cells = list(cells)
        if not cells:
            return cls([])
        xs = {c.x for c in cells}
        zs = {c.z for c in cells}
        ys = [c.y for c in cells]
        width = int(max(xs) - min(xs)) + 1
        depth = int(max(zs) - min(zs)) + 1
        max_height = int(max(ys) - min(ys)) + 1
        return cls(cells, width=width, depth=depth, max_height=max_height)

    # -- access --

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    @property
    def cells(self) -> list[Cell]:
        return self._cells

    def cell_at(self, x: float, y: float, z: float) -> Cell | None:
        return self._by_key.get((x, y, z))

    def find_cell(
        self,
        position: Vector3 | tuple[float, float, float],
        tolerance: float = 0.1,
        traversable_only: bool = False,
    ) -> Cell | None:
        """Return the cell within *tolerance* of *position* on every axis.

        Positions often arrive as render-space floats, so an exact match is
        not required.  Returns None on a miss.
        """
        if isinstance(position, Vector3):
            px, py, pz = position.x, position.y, position.z
        else:
            px, py, pz = position
        exact = self._by_key.get((px, py, pz))
        if exact is not None and (exact.traversable or not traversable_only):
            return exact

        for bx in _span(px, tolerance):
            for by in _span(py, tolerance):
                for bz in _span(pz, tolerance):
                    for cell in self._buckets.get((bx, by, bz), ()):
                        if traversable_only and not cell.traversable:
                            continue
                        if (
                            abs(cell.x - px) < tolerance
                            and abs(cell.y - py) < tolerance
                            and abs(cell.z - pz) < tolerance
                        ):
                            return cell
        return None

    def column(self, x: float, z: float) -> list[Cell]:
        """All cells of the (x, z) stack, bottom first."""
        return sorted(self._columns.get((x, z), ()), key=lambda c: c.y)

    def columns(self) -> Iterator[tuple[tuple[float, float], list[Cell]]]:
        for key, stack in self._columns.items():
            yield key, stack

    def top_cell(self, x: float, z: float) -> Cell | None:
        """The traversable cell of the (x, z) stack, if any."""
        for cell in self._columns.get((x, z), ()):
            if cell.traversable:
                return cell
        return None

    def traversable_cells(self) -> list[Cell]:
        return [c for c in self._cells if c.traversable]

    # -- adjacency --

    def neighbors_of(self, cell: Cell) -> list[Cell]:
        """Traversable cells one king-move (with optional step) away.

        Candidates outside the generated volume or buried inside a stack are
        skipped silently.
        """
        result: list[Cell] = []
        by_key = self._by_key
        x, y, z = cell.x, cell.y, cell.z
        for dx, dy, dz in NEIGHBOR_OFFSETS:
            n = by_key.get((x + dx, y + dy, z + dz))
            if n is not None and n.traversable:
                result.append(n)
        return result

    @staticmethod
    def are_adjacent(a: Cell, b: Cell) -> bool:
        delta = (b.x - a.x, b.y - a.y, b.z - a.z)
        return delta in NEIGHBOR_OFFSETS

    # -- occupancy --

    def set_occupant(self, cell: Cell, entity_id: int | None) -> None:
        cell.occupant = entity_id

    def occupied_cells(self) -> list[Cell]:
        return [c for c in self._cells if c.occupant is not None]


def _bucket(x: float, y: float, z: float) -> tuple[int, int, int]:
    return math.floor(x), math.floor(y), math.floor(z)


def _span(value: float, tolerance: float) -> range:
    return range(math.floor(value - tolerance), math.floor(value + tolerance) + 1)
