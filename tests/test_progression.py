"""Tests for progression.py - levels, obstacle counts and wall policy."""

import random

import pytest

from grid import Axis
from progression import (
    Rules,
    choose_closed_axis,
    is_level_up,
    obstacle_count_for_level,
    sealed_axes,
    should_close_wall,
)


class TestObstacleCount:
    @pytest.mark.parametrize("level,expected", [(1, 1), (2, 2), (3, 3), (4, 4), (5, 6), (6, 8), (10, 16)])
    def test_formula(self, level, expected):
        assert obstacle_count_for_level(level) == expected

    def test_never_decreases_with_level(self):
        counts = [obstacle_count_for_level(level) for level in range(1, 30)]
        assert counts == sorted(counts)


class TestLevelUp:
    def test_multiples_of_step(self):
        assert is_level_up(50)
        assert is_level_up(100)
        assert not is_level_up(60)
        assert not is_level_up(0)

    def test_custom_step(self):
        assert is_level_up(30, Rules(level_score_step=30))


class TestWalls:
    def test_open_below_first_threshold(self):
        assert sealed_axes(240, None) == frozenset()
        assert sealed_axes(240, Axis.X) == frozenset()

    def test_closed_axis_sealed_from_first_threshold(self):
        assert sealed_axes(250, Axis.Y) == frozenset({Axis.Y})
        assert sealed_axes(490, Axis.X) == frozenset({Axis.X})

    def test_everything_sealed_from_second_threshold(self):
        assert sealed_axes(500, Axis.X) == frozenset({Axis.X, Axis.Y})
        assert sealed_axes(500, None) == frozenset({Axis.X, Axis.Y})

    def test_should_close_wall_only_once(self):
        assert should_close_wall(250, None)
        assert not should_close_wall(250, Axis.X)
        assert not should_close_wall(240, None)

    def test_choose_closed_axis_picks_both_eventually(self):
        rng = random.Random(3)
        picks = {choose_closed_axis(rng) for _ in range(50)}
        assert picks == {Axis.X, Axis.Y}
