from __future__ import annotations

import random
from dataclasses import dataclass
from typing import FrozenSet, Optional

from grid import Axis

FOOD_POINTS = 10
BONUS_POINTS = 50
LEVEL_SCORE_STEP = 50
WALL_CLOSE_SCORE = 250
ALL_WALLS_SCORE = 500
OBSTACLE_MIN_DISTANCE = 5

_NO_AXES: FrozenSet[Axis] = frozenset()
_ALL_AXES: FrozenSet[Axis] = frozenset((Axis.X, Axis.Y))


@dataclass(frozen=True)
class Rules:
    """Scoring and difficulty thresholds for a run."""

    food_points: int = FOOD_POINTS
    bonus_points: int = BONUS_POINTS
    level_score_step: int = LEVEL_SCORE_STEP
    wall_close_score: int = WALL_CLOSE_SCORE
    all_walls_score: int = ALL_WALLS_SCORE
    obstacle_min_distance: int = OBSTACLE_MIN_DISTANCE


def obstacle_count_for_level(level: int) -> int:
    """Target obstacle count: one per level up to 4, then two per level."""
    if level <= 4:
        return level
    return 4 + (level - 4) * 2


def is_level_up(score: int, rules: Rules = Rules()) -> bool:
    """True when a freshly incremented score lands on a level boundary."""
    return score > 0 and score % rules.level_score_step == 0


def choose_closed_axis(rng: random.Random) -> Axis:
    return rng.choice((Axis.X, Axis.Y))


def should_close_wall(
    score: int, closed_axis: Optional[Axis], rules: Rules = Rules()
) -> bool:
    """True the first time score reaches the wall-closing threshold."""
    return closed_axis is None and score >= rules.wall_close_score


def sealed_axes(
    score: int, closed_axis: Optional[Axis], rules: Rules = Rules()
) -> FrozenSet[Axis]:
    """Axes on which leaving the board is fatal for the given score.

    Below the first threshold both axes wrap; from the first threshold the
    chosen closed axis is sealed; from the second threshold both are.
    """
    if score >= rules.all_walls_score:
        return _ALL_AXES
    if score >= rules.wall_close_score and closed_axis is not None:
        return frozenset((closed_axis,))
    return _NO_AXES
