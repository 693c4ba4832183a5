"""Tests for the voxel Grid: lookups, tolerance, adjacency and occupancy."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from tactics.core.errors import InvalidConfigError
from tactics.core.grid import Grid
from tactics.core.models import NEIGHBOR_OFFSETS, Cell, Vector3
from tests.helpers.battlefield import column_cells


def _grid(heights, origin=(0, 0)) -> Grid:
    return Grid.from_cells(column_cells(heights, origin))


class TestConstruction:
    def test_from_cells_derives_extent(self):
        g = _grid([[1, 2, 3], [1, 1, 1]])
        assert g.width == 3
        assert g.depth == 2
        assert g.max_height == 3
        assert len(g) == 9

    def test_duplicate_coordinates_rejected(self):
        cells = [Cell(0, 0, 0, traversable=True), Cell(0, 0, 0)]
        with pytest.raises(InvalidConfigError):
            Grid(cells)

    def test_empty_grid(self):
        g = Grid.from_cells([])
        assert len(g) == 0
        assert g.find_cell((0, 0, 0)) is None
        assert g.occupied_cells() == []

    def test_keeps_insertion_order(self):
        cells = column_cells([[2, 1]])
        g = Grid.from_cells(cells)
        assert g.cells == cells


class TestLookup:
    def test_exact_lookup(self):
        g = _grid([[2]])
        assert g.cell_at(0, 1, 0).traversable
        assert not g.cell_at(0, 0, 0).traversable
        assert g.cell_at(0, 2, 0) is None

    def test_find_cell_within_tolerance(self):
        g = _grid([[1, 1]])
        cell = g.find_cell(Vector3(1.05, -0.04, 0.08))
        assert cell is g.cell_at(1, 0, 0)

    def test_find_cell_outside_tolerance(self):
        g = _grid([[1, 1]])
        assert g.find_cell((0.5, 0, 0)) is None

    def test_find_cell_across_bucket_boundary(self):
        g = _grid([[1, 1]], origin=(-1, 0))
        # -0.02 floors into bucket -1 while the cell lives in bucket 0
        assert g.find_cell((-0.02, 0.0, 0.0)) is g.cell_at(0, 0, 0)

    def test_find_cell_half_offsets(self):
        cells = [Cell(-1.5, -2.5, 0.5, traversable=True)]
        g = Grid(cells)
        assert g.find_cell((-1.5, -2.5, 0.5)) is cells[0]
        assert g.find_cell((-1.45, -2.55, 0.52)) is cells[0]

    def test_find_cell_traversable_only(self):
        g = _grid([[3]])
        assert g.find_cell((0, 0, 0)) is g.cell_at(0, 0, 0)
        assert g.find_cell((0, 0, 0), traversable_only=True) is None
        assert g.find_cell((0, 2, 0), traversable_only=True) is g.cell_at(0, 2, 0)

    def test_column_and_top_cell(self):
        g = _grid([[3, 1]])
        col = g.column(0, 0)
        assert [c.y for c in col] == [0, 1, 2]
        assert g.top_cell(0, 0) is col[-1]
        assert g.top_cell(1, 0).y == 0
        assert g.top_cell(5, 5) is None

    def test_one_traversable_cell_per_column(self):
        g = _grid([[3, 1, 2], [2, 4, 1]])
        for _, stack in g.columns():
            assert sum(1 for c in stack if c.traversable) == 1


class TestNeighbors:
    def test_eighteen_direction_vectors(self):
        assert len(NEIGHBOR_OFFSETS) == 18
        assert len(set(NEIGHBOR_OFFSETS)) == 18
        assert (0, 0, 0) not in NEIGHBOR_OFFSETS

    def test_flat_center_has_eight_neighbors(self):
        g = _grid([[1, 1, 1]] * 3)
        center = g.cell_at(1, 0, 1)
        assert len(g.neighbors_of(center)) == 8

    def test_corner_excludes_out_of_bounds(self):
        g = _grid([[1, 1, 1]] * 3)
        corner = g.cell_at(0, 0, 0)
        keys = {c.key for c in g.neighbors_of(corner)}
        assert keys == {(1, 0, 0), (0, 0, 1), (1, 0, 1)}

    def test_step_up_and_down(self):
        g = _grid([[1, 2, 1]])
        mid = g.cell_at(1, 1, 0)
        keys = {c.key for c in g.neighbors_of(mid)}
        assert keys == {(0, 0, 0), (2, 0, 0)}
        left = g.cell_at(0, 0, 0)
        assert g.cell_at(1, 1, 0) in g.neighbors_of(left)

    def test_buried_and_distant_cells_excluded(self):
        g = _grid([[1, 3]])
        low = g.cell_at(0, 0, 0)
        # (1, 0, 0) is buried, (1, 2, 0) is two levels up
        assert g.neighbors_of(low) == []

    def test_are_adjacent(self):
        a = Cell(0, 0, 0, traversable=True)
        assert Grid.are_adjacent(a, Cell(1, 1, 0))
        assert Grid.are_adjacent(a, Cell(1, 0, 1))
        assert not Grid.are_adjacent(a, Cell(2, 0, 0))
        assert not Grid.are_adjacent(a, Cell(1, 1, 1))


class TestOccupancy:
    def test_set_and_clear_occupant(self):
        g = _grid([[1, 1]])
        cell = g.cell_at(0, 0, 0)
        g.set_occupant(cell, 9)
        assert cell.occupied
        assert g.occupied_cells() == [cell]
        g.set_occupant(cell, None)
        assert g.occupied_cells() == []
