from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional

from game_types import Cell, Color
from grid import Direction, Grid
from models import (
    BonusConfig,
    BonusItem,
    BonusView,
    EventKind,
    GameConfig,
    GameEvent,
    Phase,
    Run,
    Snapshot,
    TimingConfig,
)
from particles import spawn_burst, update_particles
from placement import PlacementError, place_random
from progression import (
    Rules,
    choose_closed_axis,
    is_level_up,
    obstacle_count_for_level,
    sealed_axes,
    should_close_wall,
)


logger = logging.getLogger(__name__)

GameOverCallback = Callable[[str, int], None]

DEFAULT_TIMING = TimingConfig(tick_ms=100, frame_ms=16, fps=60, max_catchup_ticks=3)
DEFAULT_BONUS = BonusConfig(spawn_interval_ms=10000, spawn_chance=0.1, lifetime_ms=5000)
DEFAULT_BURST_COLORS: Dict[EventKind, Color] = {
    EventKind.FOOD_EATEN: (244, 114, 182),
    EventKind.BONUS_EATEN: (250, 204, 21),
    EventKind.LEVEL_UP: (167, 139, 250),
}


class SnakeSimulation:
    """Owns a single Run and advances it.

    Two cadences feed the run: movement ticks every ``timing.tick_ms`` and
    frame work (bonus countdown, particle decay) every rendered frame. Both
    go through :meth:`update`; :meth:`tick` and :meth:`advance_frame` are
    exposed for deterministic stepping.
    """

    def __init__(
        self,
        grid: Grid,
        rules: Rules = Rules(),
        timing: TimingConfig = DEFAULT_TIMING,
        bonus: BonusConfig = DEFAULT_BONUS,
        rng: Optional[random.Random] = None,
        default_player_name: str = "Player",
        burst_colors: Optional[Dict[EventKind, Color]] = None,
        on_game_over: Optional[GameOverCallback] = None,
    ) -> None:
        self.grid = grid
        self.rules = rules
        self.timing = timing
        self.bonus_cfg = bonus
        self.rng = rng if rng is not None else random.Random()
        self.default_player_name = default_player_name
        self.burst_colors = dict(DEFAULT_BURST_COLORS)
        if burst_colors:
            self.burst_colors.update(burst_colors)
        self.on_game_over = on_game_over
        self.run = Run()

    @classmethod
    def from_config(
        cls,
        cfg: GameConfig,
        rng: Optional[random.Random] = None,
        on_game_over: Optional[GameOverCallback] = None,
    ) -> "SnakeSimulation":
        return cls(
            grid=Grid(cfg.grid.width, cfg.grid.height),
            rules=cfg.rules,
            timing=cfg.timing,
            bonus=cfg.bonus,
            rng=rng,
            default_player_name=cfg.default_player_name,
            burst_colors={
                EventKind.FOOD_EATEN: cfg.colors.food,
                EventKind.BONUS_EATEN: cfg.colors.bonus,
                EventKind.LEVEL_UP: cfg.colors.level_up,
            },
            on_game_over=on_game_over,
        )

    # ----------------------------
    # Commands
    # ----------------------------

    def start(self, player_name: str = "") -> None:
        """Begin a fresh run, discarding whatever state the previous one had."""
        name = (player_name or "").strip() or self.default_player_name
        self.run = Run(player_name=name, phase=Phase.RUNNING)
        self.run.food = self._place_food()
        self._top_up_obstacles()
        logger.info(
            "run started for %r (food=%s, obstacles=%d)",
            name,
            self.run.food,
            len(self.run.obstacles),
        )

    def restart(self) -> bool:
        """Return from GAME_OVER to READY. Returns False in any other phase."""
        if self.run.phase is not Phase.GAME_OVER:
            return False
        self.run = Run(player_name=self.run.player_name, phase=Phase.READY)
        return True

    def buffer_direction(self, direction: Direction) -> bool:
        """Queue the direction for the next tick unless it reverses the current one.

        Returns:
            True if the input was accepted.
        """
        if direction.is_reverse_of(self.run.direction):
            return False
        self.run.next_direction = direction
        return True

    # ----------------------------
    # Clocks
    # ----------------------------

    def update(self, elapsed_ms: float) -> None:
        """Advance both clocks by elapsed_ms of wall time."""
        run = self.run
        if run.phase is Phase.RUNNING:
            run.move_accumulator_ms += elapsed_ms
            steps = 0
            while run.move_accumulator_ms >= self.timing.tick_ms:
                run.move_accumulator_ms -= self.timing.tick_ms
                self.tick()
                steps += 1
                if run.phase is not Phase.RUNNING:
                    break
                if steps >= self.timing.max_catchup_ticks:
                    # Drop the backlog after a long stall instead of fast-forwarding.
                    run.move_accumulator_ms = 0.0
                    break
        self.advance_frame(elapsed_ms)

    def advance_frame(self, elapsed_ms: Optional[float] = None) -> None:
        """Frame-cadence work: bonus lifecycle and particle decay."""
        if elapsed_ms is None:
            elapsed_ms = self.timing.frame_ms
        run = self.run
        if run.phase is Phase.RUNNING:
            run.clock_ms += elapsed_ms
            self._update_bonus(elapsed_ms)
        run.particles = update_particles(run.particles)

    def tick(self) -> None:
        """Advance the snake by one cell and resolve what it lands on."""
        run = self.run
        if run.phase is not Phase.RUNNING:
            return

        run.direction = run.next_direction
        sealed = sealed_axes(run.score, run.closed_axis, self.rules)
        head, hit_wall = self.grid.step(run.head, run.direction, sealed)

        if hit_wall:
            self._end_run("wall")
            return
        if head in run.snake:
            self._end_run("self")
            return
        if head in run.obstacles:
            self._end_run("obstacle")
            return

        run.snake.insert(0, head)

        if head == run.food:
            self._eat_food(head)
        elif run.bonus is not None and head == run.bonus.cell:
            self._eat_bonus(head)
        else:
            run.snake.pop()

    # ----------------------------
    # Outputs
    # ----------------------------

    def snapshot(self) -> Snapshot:
        run = self.run
        bonus = None
        if run.bonus is not None:
            bonus = BonusView(run.bonus.cell, run.bonus.remaining_fraction)
        return Snapshot(
            phase=run.phase,
            player_name=run.player_name,
            snake=tuple(run.snake),
            direction=run.direction,
            food=run.food,
            obstacles=tuple(sorted(run.obstacles)),
            bonus=bonus,
            sealed_axes=sealed_axes(run.score, run.closed_axis, self.rules),
            closed_axis=run.closed_axis,
            score=run.score,
            level=run.level,
            reason=run.reason,
            particles=tuple(run.particles),
        )

    def drain_events(self) -> List[GameEvent]:
        """Return and clear the events emitted since the last call."""
        events = self.run.events
        self.run.events = []
        return events

    # ----------------------------
    # Internals
    # ----------------------------

    def _emit(self, kind: EventKind, cell: Optional[Cell] = None) -> None:
        self.run.events.append(GameEvent(kind, cell))
        color = self.burst_colors.get(kind)
        if color is not None and cell is not None:
            self.run.particles.extend(spawn_burst(cell, color, self.rng))

    def _end_run(self, reason: str) -> None:
        run = self.run
        run.phase = Phase.GAME_OVER
        run.reason = reason
        run.move_accumulator_ms = 0.0
        self._emit(EventKind.GAME_OVER, run.head)
        logger.info(
            "game over for %r: %s (score=%d, level=%d)",
            run.player_name,
            reason,
            run.score,
            run.level,
        )
        if self.on_game_over is not None:
            self.on_game_over(run.player_name, run.score)

    def _award(self, points: int) -> None:
        run = self.run
        before = sealed_axes(run.score, run.closed_axis, self.rules)
        run.score += points
        if should_close_wall(run.score, run.closed_axis, self.rules):
            run.closed_axis = choose_closed_axis(self.rng)
            logger.info("wall closed on axis %s at score %d", run.closed_axis.name, run.score)
        if sealed_axes(run.score, run.closed_axis, self.rules) != before:
            self._emit(EventKind.WALL_CLOSED)

    def _eat_food(self, head: Cell) -> None:
        run = self.run
        self._award(self.rules.food_points)
        self._emit(EventKind.FOOD_EATEN, head)

        if is_level_up(run.score, self.rules):
            run.level += 1
            logger.debug("level up to %d at score %d", run.level, run.score)
            self._emit(EventKind.LEVEL_UP, head)
            self._top_up_obstacles()

        try:
            run.food = self._place_food()
        except PlacementError:
            run.food = None
            logger.warning("no room left for food")
            self._end_run("board_full")

    def _eat_bonus(self, head: Cell) -> None:
        self._award(self.rules.bonus_points)
        self._emit(EventKind.BONUS_EATEN, head)
        self.run.bonus = None

    def _place_food(self) -> Cell:
        run = self.run
        forbidden = [set(run.snake), run.obstacles]
        if run.bonus is not None:
            forbidden.append({run.bonus.cell})
        return place_random(self.grid, forbidden, self.rng)

    def _occupied_by_items(self) -> set[Cell]:
        run = self.run
        items: set[Cell] = set()
        if run.food is not None:
            items.add(run.food)
        if run.bonus is not None:
            items.add(run.bonus.cell)
        return items

    def _top_up_obstacles(self) -> None:
        """Add obstacles until the level's target count is met. Never removes any."""
        run = self.run
        target = obstacle_count_for_level(run.level)
        body = set(run.snake)
        while len(run.obstacles) < target:
            try:
                cell = place_random(
                    self.grid,
                    [body, run.obstacles, self._occupied_by_items()],
                    self.rng,
                    avoid=run.head,
                    min_distance=self.rules.obstacle_min_distance,
                )
            except PlacementError:
                logger.warning(
                    "could only place %d of %d obstacles", len(run.obstacles), target
                )
                return
            run.obstacles.add(cell)

    def _update_bonus(self, elapsed_ms: float) -> None:
        run = self.run
        if run.bonus is not None:
            run.bonus.remaining_ms -= elapsed_ms
            if run.bonus.remaining_ms <= 0:
                logger.debug("bonus at %s expired", run.bonus.cell)
                self._emit(EventKind.BONUS_EXPIRED, run.bonus.cell)
                run.bonus = None
            return

        if run.clock_ms - run.last_bonus_attempt_ms < self.bonus_cfg.spawn_interval_ms:
            return
        run.last_bonus_attempt_ms = run.clock_ms
        if self.rng.random() >= self.bonus_cfg.spawn_chance:
            return

        forbidden = [set(run.snake), run.obstacles]
        if run.food is not None:
            forbidden.append({run.food})
        try:
            cell = place_random(self.grid, forbidden, self.rng)
        except PlacementError:
            logger.debug("no room for a bonus item")
            return
        lifetime = float(self.bonus_cfg.lifetime_ms)
        run.bonus = BonusItem(cell=cell, remaining_ms=lifetime, lifetime_ms=lifetime)
        logger.debug("bonus spawned at %s", cell)
        self._emit(EventKind.BONUS_SPAWNED, cell)
