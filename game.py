from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import pygame

from config_io import load_json_config
from config_parsing import parse_game_config
from grid import Direction
from models import EventKind, GameConfig, Phase
from rendering import GameRenderer
from scoreboard import LeaderboardFile, ScoreEntry
from simulation import SnakeSimulation


logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 16

KEY_DIRECTIONS: Dict[int, Direction] = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}


class Game:
    """Top-level game orchestration (config, loop, input, leaderboard, render)."""

    def __init__(self, cfg_path: Path) -> None:
        self.cfg: GameConfig = parse_game_config(load_json_config(cfg_path))
        logging.getLogger().setLevel(self.cfg.log_level)
        self.leaderboard = LeaderboardFile(self.cfg.leaderboard_file, self.cfg.leaderboard_size)
        self.leaderboard_entries: List[ScoreEntry] = self.leaderboard.load()
        self.new_record = False
        self.name_buffer = ""
        self.cursor_ms = 0.0

        self.sim = SnakeSimulation.from_config(self.cfg, on_game_over=self._record_score)

        self.board_w = self.cfg.grid.width * self.cfg.grid.cell_size
        self.board_h = self.cfg.grid.height * self.cfg.grid.cell_size
        self.window_w = self.board_w
        self.window_h = self.board_h + self.cfg.window.hud_height
        self.windowed_size = (self.window_w, self.window_h)
        self.fullscreen = self.cfg.window.fullscreen

        self._init_pygame()
        self.renderer = GameRenderer(
            self.window_w,
            self.window_h,
            self.cfg.grid.cell_size,
            self.cfg.window.hud_height,
            self.cfg.colors,
            show_grid=self.cfg.window.show_grid,
        )

    # ----------------------------
    # Initialization
    # ----------------------------

    def _init_pygame(self) -> None:
        """Initialize pygame and create window + clock."""
        pygame.init()
        self._apply_display_mode()
        self.clock = pygame.time.Clock()

    def _apply_display_mode(self) -> None:
        """Create or recreate the display surface with the current mode."""
        flags = pygame.FULLSCREEN if self.fullscreen else 0
        self.screen = pygame.display.set_mode((self.window_w, self.window_h), flags)
        # Capture the actual size in case the platform adjusted it.
        self.window_w, self.window_h = self.screen.get_size()
        if hasattr(self, "renderer"):
            self.renderer.update_window_size(self.window_w, self.window_h)
        pygame.display.set_caption(self.cfg.window.title)

    def _toggle_fullscreen(self) -> None:
        """Toggle between windowed and fullscreen display modes."""
        self.fullscreen = not self.fullscreen
        if self.fullscreen:
            self.windowed_size = (self.window_w, self.window_h)
            info = pygame.display.Info()
            self.window_w = info.current_w
            self.window_h = info.current_h
        else:
            self.window_w, self.window_h = self.windowed_size
        self._apply_display_mode()

    # ----------------------------
    # Run lifecycle
    # ----------------------------

    def start_run(self) -> None:
        """Leave the start screen and begin a fresh run."""
        self.new_record = False
        self.sim.start(self.name_buffer)
        self.name_buffer = self.sim.run.player_name

    def restart(self) -> None:
        """Back to the start screen with the leaderboard refreshed."""
        if self.sim.restart():
            self.leaderboard_entries = self.leaderboard.load()

    def _record_score(self, name: str, score: int) -> None:
        """Submit a finished run; called once by the simulation on game over."""
        try:
            self.leaderboard_entries, self.new_record = self.leaderboard.submit(name, score)
        except OSError as e:
            logger.error("could not save leaderboard to %s: %s", self.leaderboard.path, e)
            self.new_record = self.leaderboard.is_new_record(score, self.leaderboard_entries)

    # ----------------------------
    # Events / loop
    # ----------------------------

    def _handle_keydown(self, event: pygame.event.Event) -> bool:
        """Handle KEYDOWN events.

        Returns:
            False if the game should exit, True otherwise.
        """
        key = event.key
        if key == pygame.K_ESCAPE:
            return False
        if key == pygame.K_F11:
            self._toggle_fullscreen()
            return True

        phase = self.sim.run.phase
        if phase is Phase.READY:
            self._handle_name_entry(event)
        elif phase is Phase.RUNNING:
            direction = KEY_DIRECTIONS.get(key)
            if direction is not None:
                self.sim.buffer_direction(direction)
        elif phase is Phase.GAME_OVER:
            if key in (pygame.K_r, pygame.K_RETURN, pygame.K_KP_ENTER):
                self.restart()
        return True

    def _handle_name_entry(self, event: pygame.event.Event) -> None:
        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
            self.start_run()
        elif event.key == pygame.K_BACKSPACE:
            self.name_buffer = self.name_buffer[:-1]
        elif event.unicode and event.unicode.isprintable():
            if len(self.name_buffer) < MAX_NAME_LENGTH:
                self.name_buffer += event.unicode

    def _handle_events(self) -> bool:
        """Process pygame events.

        Returns:
            False if the game should exit, True otherwise.
        """
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            if e.type == pygame.KEYDOWN:
                if not self._handle_keydown(e):
                    return False
        return True

    def _log_events(self) -> None:
        for event in self.sim.drain_events():
            if event.kind is EventKind.LEVEL_UP:
                logger.info("level %d reached", self.sim.run.level)
            elif event.kind is EventKind.WALL_CLOSED:
                logger.debug(
                    "walls sealed: %s", sorted(a.name for a in self.sim.snapshot().sealed_axes)
                )

    def _cursor_visible(self) -> bool:
        return int(self.cursor_ms // 500) % 2 == 0

    def run(self) -> None:
        """Run the main game loop."""
        running = True
        while running:
            elapsed_ms = self.clock.tick(self.cfg.timing.fps)
            running = self._handle_events()
            if not running:
                break

            self.cursor_ms += elapsed_ms
            self.sim.update(elapsed_ms)
            self._log_events()

            self.renderer.render_frame(
                screen=self.screen,
                snapshot=self.sim.snapshot(),
                board_size=(self.cfg.grid.width, self.cfg.grid.height),
                leaderboard=self.leaderboard_entries,
                name_buffer=self.name_buffer,
                new_record=self.new_record,
                cursor_on=self._cursor_visible(),
            )

        pygame.quit()
