from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List

from game_types import Cell, Color

LIFE_DECAY_PER_FRAME = 0.02
BURST_SIZE = 10


@dataclass
class Particle:
    """Short-lived cosmetic point. Coordinates are in cell units."""

    x: float
    y: float
    vx: float
    vy: float
    size: float
    color: Color
    life: float = 1.0

    def update(self) -> None:
        self.x += self.vx
        self.y += self.vy
        self.life -= LIFE_DECAY_PER_FRAME

    @property
    def alive(self) -> bool:
        return self.life > 0


def spawn_burst(
    cell: Cell, color: Color, rng: random.Random, count: int = BURST_SIZE
) -> List[Particle]:
    """Create count particles scattering from the center of cell."""
    cx = cell[0] + 0.5
    cy = cell[1] + 0.5
    # Speeds are a fraction of a cell per frame.
    return [
        Particle(
            x=cx,
            y=cy,
            vx=(rng.random() * 2 - 1) * 0.05,
            vy=(rng.random() * 2 - 1) * 0.05,
            size=rng.random() * 3 + 1,
            color=color,
        )
        for _ in range(count)
    ]


def update_particles(particles: List[Particle]) -> List[Particle]:
    """Advance every particle one frame and return the survivors."""
    survivors: List[Particle] = []
    for p in particles:
        p.update()
        if p.alive:
            survivors.append(p)
    return survivors
