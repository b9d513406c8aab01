from __future__ import annotations

import logging
import random
from typing import AbstractSet, Iterable, List, Optional

from game_types import Cell
from grid import Grid, manhattan


logger = logging.getLogger(__name__)


class PlacementError(RuntimeError):
    """Raised when the board has no free cell left for a new entity."""


def free_cells(
    grid: Grid,
    forbidden_sets: Iterable[AbstractSet[Cell]],
    avoid: Optional[Cell] = None,
    min_distance: int = 0,
) -> List[Cell]:
    """Return all cells not in any forbidden set, in row-major order.

    Args:
        grid: The board.
        forbidden_sets: Occupied cell sets (snake, obstacles, food, bonus...).
        avoid: Optional cell to keep a distance from (usually the snake head).
        min_distance: Minimum Manhattan distance from avoid; 0 disables it.
    """
    occupied: set[Cell] = set()
    for cells in forbidden_sets:
        occupied.update(cells)

    result: List[Cell] = []
    for cell in grid.cells():
        if cell in occupied:
            continue
        if avoid is not None and min_distance > 0 and manhattan(cell, avoid) < min_distance:
            continue
        result.append(cell)
    return result


def place_random(
    grid: Grid,
    forbidden_sets: Iterable[AbstractSet[Cell]],
    rng: random.Random,
    avoid: Optional[Cell] = None,
    min_distance: int = 0,
) -> Cell:
    """Pick a cell uniformly among the free cells of the board.

    Sampling from the explicit free-cell list always terminates, unlike
    rejection sampling on a nearly full board.

    Raises:
        PlacementError: If no cell satisfies the constraints.
    """
    candidates = free_cells(grid, forbidden_sets, avoid=avoid, min_distance=min_distance)
    if not candidates:
        raise PlacementError(
            f"No free cell on {grid.width}x{grid.height} board"
            + (f" at distance >= {min_distance} from {avoid}" if avoid is not None and min_distance else "")
        )
    cell = candidates[rng.randrange(len(candidates))]
    logger.debug("placed entity at %s (%d candidates)", cell, len(candidates))
    return cell
