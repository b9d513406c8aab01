"""Tests for grid.py - board geometry and wrap/seal rules."""

import pytest

from grid import Axis, Direction, Grid, manhattan, resolve_boundary


class TestResolveBoundary:
    def test_in_range_coordinate_is_unchanged(self):
        assert resolve_boundary(5, 40, sealed=False) == (5, False)
        assert resolve_boundary(5, 40, sealed=True) == (5, False)

    def test_open_axis_wraps_negative(self):
        assert resolve_boundary(-1, 40, sealed=False) == (39, False)

    def test_open_axis_wraps_past_end(self):
        assert resolve_boundary(40, 40, sealed=False) == (0, False)

    def test_sealed_axis_collides_out_of_range(self):
        assert resolve_boundary(-1, 40, sealed=True)[1] is True
        assert resolve_boundary(30, 30, sealed=True)[1] is True


class TestDirection:
    def test_opposites(self):
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.LEFT.opposite is Direction.RIGHT

    def test_is_reverse_of(self):
        assert Direction.LEFT.is_reverse_of(Direction.RIGHT)
        assert not Direction.UP.is_reverse_of(Direction.RIGHT)
        assert not Direction.RIGHT.is_reverse_of(Direction.RIGHT)


class TestGrid:
    def test_rejects_empty_dimensions(self):
        with pytest.raises(ValueError):
            Grid(0, 10)

    def test_cells_cover_the_board(self):
        grid = Grid(3, 2)
        cells = list(grid.cells())
        assert len(cells) == grid.area == 6
        assert cells[0] == (0, 0)
        assert cells[-1] == (2, 1)

    def test_step_wraps_when_open(self):
        grid = Grid(40, 30)
        assert grid.step((0, 5), Direction.LEFT, frozenset()) == ((39, 5), False)
        assert grid.step((5, 29), Direction.DOWN, frozenset()) == ((5, 0), False)

    def test_step_collides_only_on_sealed_axis(self):
        grid = Grid(40, 30)
        assert grid.step((0, 5), Direction.LEFT, frozenset({Axis.X}))[1] is True
        # X sealed does not seal the Y axis.
        assert grid.step((5, 0), Direction.UP, frozenset({Axis.X})) == ((5, 29), False)

    def test_manhattan(self):
        assert manhattan((0, 0), (3, 4)) == 7
