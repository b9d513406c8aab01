from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Iterator, Tuple

from game_types import Cell


class Axis(Enum):
    X = "x"
    Y = "y"


class Direction(Enum):
    """Movement direction as a unit (dx, dy) delta. Screen y grows downwards."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))

    def is_reverse_of(self, other: "Direction") -> bool:
        return self.opposite is other


def resolve_boundary(coord: int, size: int, sealed: bool) -> Tuple[int, bool]:
    """Resolve a single coordinate against one axis of the board.

    Args:
        coord: Prospective coordinate, possibly outside [0, size).
        size: Number of cells along the axis.
        sealed: Whether leaving the board on this axis is fatal.

    Returns:
        (coord', collided). On an open axis the coordinate wraps around and
        collided is False. On a sealed axis an out-of-range coordinate
        collides; coord' is then returned unchanged and must not be used.
    """
    if 0 <= coord < size:
        return coord, False
    if sealed:
        return coord, True
    # Python's modulo is already non-negative for a positive size.
    return coord % size, False


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass(frozen=True)
class Grid:
    """Fixed width x height board of integer cells."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}."
            )

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, cell: Cell) -> bool:
        return 0 <= cell[0] < self.width and 0 <= cell[1] < self.height

    def cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def step(
        self, cell: Cell, direction: Direction, sealed_axes: AbstractSet[Axis]
    ) -> Tuple[Cell, bool]:
        """Move one cell in direction, wrapping open axes.

        Returns:
            (next_cell, collided). collided is True when the move leaves the
            board across a sealed axis; next_cell is meaningless in that case.
        """
        dx, dy = direction.delta
        x, hit_x = resolve_boundary(cell[0] + dx, self.width, Axis.X in sealed_axes)
        y, hit_y = resolve_boundary(cell[1] + dy, self.height, Axis.Y in sealed_axes)
        return (x, y), hit_x or hit_y
