from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import FrozenSet, List, Optional, Set, Tuple

from game_types import Cell, Color
from grid import Axis, Direction
from particles import Particle
from progression import Rules


# ----------------------------
# Configuration
# ----------------------------


@dataclass(frozen=True)
class GridConfig:
    width: int
    height: int
    cell_size: int  # pixels per cell, presentation only


@dataclass(frozen=True)
class TimingConfig:
    tick_ms: int
    frame_ms: int
    fps: int
    max_catchup_ticks: int


@dataclass(frozen=True)
class BonusConfig:
    spawn_interval_ms: int
    spawn_chance: float
    lifetime_ms: int


@dataclass(frozen=True)
class ColorsConfig:
    background: Color
    grid_line: Color
    snake_head: Color
    snake_body: Color
    food: Color
    bonus: Color
    obstacle: Color
    wall: Color
    text: Color
    accent: Color
    level_up: Color


@dataclass(frozen=True)
class WindowConfig:
    title: str
    fullscreen: bool
    hud_height: int
    show_grid: bool


@dataclass(frozen=True)
class GameConfig:
    grid: GridConfig
    timing: TimingConfig
    bonus: BonusConfig
    rules: Rules
    colors: ColorsConfig
    window: WindowConfig
    leaderboard_file: Path
    leaderboard_size: int
    default_player_name: str
    log_level: str


# ----------------------------
# Run state
# ----------------------------


class Phase(Enum):
    READY = "ready"
    RUNNING = "running"
    GAME_OVER = "game_over"


class EventKind(Enum):
    FOOD_EATEN = "food_eaten"
    BONUS_EATEN = "bonus_eaten"
    LEVEL_UP = "level_up"
    BONUS_SPAWNED = "bonus_spawned"
    BONUS_EXPIRED = "bonus_expired"
    WALL_CLOSED = "wall_closed"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    cell: Optional[Cell] = None


@dataclass
class BonusItem:
    cell: Cell
    remaining_ms: float
    lifetime_ms: float

    @property
    def remaining_fraction(self) -> float:
        if self.lifetime_ms <= 0:
            return 0.0
        return max(0.0, min(1.0, self.remaining_ms / self.lifetime_ms))


INITIAL_SNAKE: Tuple[Cell, ...] = ((10, 10), (9, 10), (8, 10))


@dataclass
class Run:
    """All mutable state of a single play-through."""

    player_name: str = ""
    phase: Phase = Phase.READY
    snake: List[Cell] = field(default_factory=lambda: list(INITIAL_SNAKE))
    direction: Direction = Direction.RIGHT
    next_direction: Direction = Direction.RIGHT
    food: Optional[Cell] = None
    obstacles: Set[Cell] = field(default_factory=set)
    bonus: Optional[BonusItem] = None
    score: int = 0
    level: int = 1
    closed_axis: Optional[Axis] = None
    reason: Optional[str] = None
    clock_ms: float = 0.0
    last_bonus_attempt_ms: float = 0.0
    move_accumulator_ms: float = 0.0
    particles: List[Particle] = field(default_factory=list)
    events: List[GameEvent] = field(default_factory=list)

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER


@dataclass(frozen=True)
class BonusView:
    cell: Cell
    remaining_fraction: float


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a run handed to the presentation layer."""

    phase: Phase
    player_name: str
    snake: Tuple[Cell, ...]
    direction: Direction
    food: Optional[Cell]
    obstacles: Tuple[Cell, ...]
    bonus: Optional[BonusView]
    sealed_axes: FrozenSet[Axis]
    closed_axis: Optional[Axis]
    score: int
    level: int
    reason: Optional[str]
    particles: Tuple[Particle, ...]

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER
