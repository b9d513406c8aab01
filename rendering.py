from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

import pygame

from game_types import Cell, Color
from grid import Axis
from models import ColorsConfig, Phase, Snapshot
from particles import Particle
from scoreboard import ScoreEntry
from utils import scale_color


def board_origin(
    window_w: int, window_h: int, board_w: int, board_h: int, hud_height: int
) -> Tuple[int, int]:
    """Top-left pixel of the board, centered below the HUD bar."""
    x = max(0, (window_w - board_w) // 2)
    y = hud_height + max(0, (window_h - hud_height - board_h) // 2)
    return x, y


def cell_rect(cell: Cell, origin: Tuple[int, int], cell_size: int) -> pygame.Rect:
    return pygame.Rect(
        origin[0] + cell[0] * cell_size, origin[1] + cell[1] * cell_size, cell_size, cell_size
    )


def _vertical_gradient_surface(
    size: Tuple[int, int], top: Color, bottom: Color
) -> pygame.Surface:
    """Create a vertical gradient surface from top to bottom."""
    w, h = size
    grad = pygame.Surface((w, h), pygame.SRCALPHA)

    def lerp(a: int, b: int, t: float) -> int:
        return int(a + (b - a) * t)

    for y in range(h):
        t = y / max(1, h - 1)
        color = (
            lerp(top[0], bottom[0], t),
            lerp(top[1], bottom[1], t),
            lerp(top[2], bottom[2], t),
        )
        grad.fill(color, pygame.Rect(0, y, w, 1))
    return grad


def _draw_gradient_rect(
    surf: pygame.Surface, rect: pygame.Rect, color: Color, border_radius: int = 0
) -> None:
    """Draw a rounded rect with a smooth vertical gradient derived from base color."""
    grad = _vertical_gradient_surface(
        (rect.w, rect.h), scale_color(color, 1.05), scale_color(color, 0.55)
    )
    mask = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
    pygame.draw.rect(
        mask,
        (255, 255, 255),
        pygame.Rect(0, 0, rect.w, rect.h),
        border_radius=border_radius,
    )
    grad.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MULT)
    surf.blit(grad, rect.topleft)


def draw_grid_lines(
    surf: pygame.Surface,
    origin: Tuple[int, int],
    width: int,
    height: int,
    cell_size: int,
    color: Color,
) -> None:
    """Draw the faint cell grid."""
    ox, oy = origin
    for x in range(width + 1):
        sx = ox + x * cell_size
        pygame.draw.line(surf, color, (sx, oy), (sx, oy + height * cell_size), 1)
    for y in range(height + 1):
        sy = oy + y * cell_size
        pygame.draw.line(surf, color, (ox, sy), (ox + width * cell_size, sy), 1)


def draw_sealed_walls(
    surf: pygame.Surface, board: pygame.Rect, sealed: Sequence[Axis], color: Color
) -> None:
    """Mark sealed borders: X seals left/right, Y seals top/bottom."""
    thickness = 4
    if Axis.X in sealed:
        pygame.draw.rect(surf, color, pygame.Rect(board.left - thickness, board.top, thickness, board.h))
        pygame.draw.rect(surf, color, pygame.Rect(board.right, board.top, thickness, board.h))
    if Axis.Y in sealed:
        pygame.draw.rect(surf, color, pygame.Rect(board.left, board.top - thickness, board.w, thickness))
        pygame.draw.rect(surf, color, pygame.Rect(board.left, board.bottom, board.w, thickness))


def draw_obstacles(
    surf: pygame.Surface,
    obstacles: Sequence[Cell],
    origin: Tuple[int, int],
    cell_size: int,
    color: Color,
) -> None:
    for cell in obstacles:
        r = cell_rect(cell, origin, cell_size).inflate(-2, -2)
        pygame.draw.rect(surf, color, r, border_radius=3)
        pygame.draw.rect(surf, scale_color(color, 0.6), r, width=2, border_radius=3)


def draw_food(
    surf: pygame.Surface, food: Optional[Cell], origin: Tuple[int, int], cell_size: int, color: Color
) -> None:
    if food is None:
        return
    r = cell_rect(food, origin, cell_size)
    pygame.draw.circle(surf, color, r.center, max(2, cell_size // 2 - 2))


def draw_bonus(
    surf: pygame.Surface,
    cell: Cell,
    remaining_fraction: float,
    origin: Tuple[int, int],
    cell_size: int,
    color: Color,
) -> None:
    """Draw the bonus item with a ring that shrinks as its timer runs out."""
    r = cell_rect(cell, origin, cell_size)
    pygame.draw.circle(surf, color, r.center, max(2, cell_size // 2 - 4))
    if remaining_fraction <= 0:
        return
    ring = r.inflate(4, 4)
    start = math.pi / 2
    stop = start + 2 * math.pi * remaining_fraction
    pygame.draw.arc(surf, color, ring, start, stop, 2)


def draw_snake(
    surf: pygame.Surface,
    snake: Sequence[Cell],
    origin: Tuple[int, int],
    cell_size: int,
    head_color: Color,
    body_color: Color,
) -> None:
    """Draw body segments first so the head ends up on top."""
    for index in range(len(snake) - 1, -1, -1):
        r = cell_rect(snake[index], origin, cell_size).inflate(-2, -2)
        color = head_color if index == 0 else body_color
        _draw_gradient_rect(surf, r, color, border_radius=4)


def draw_particles(
    surf: pygame.Surface, particles: Sequence[Particle], origin: Tuple[int, int], cell_size: int
) -> None:
    for p in particles:
        alpha = int(255 * max(0.0, min(1.0, p.life)))
        radius = max(1, int(p.size))
        dot = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(dot, (*p.color, alpha), (radius, radius), radius)
        sx = origin[0] + int(p.x * cell_size) - radius
        sy = origin[1] + int(p.y * cell_size) - radius
        surf.blit(dot, (sx, sy))


def draw_hud(
    surf: pygame.Surface,
    hud_font: pygame.font.Font,
    snapshot: Snapshot,
    hud_height: int,
    colors: ColorsConfig,
) -> None:
    """Draw the top status bar."""
    if hud_height <= 0:
        return
    bar = pygame.Surface((surf.get_width(), hud_height), pygame.SRCALPHA)
    bar.fill((0, 0, 0, 230))
    surf.blit(bar, (0, 0))

    if len(snapshot.sealed_axes) == 2:
        walls = "Walls: ALL"
    elif snapshot.sealed_axes:
        walls = f"Walls: {next(iter(snapshot.sealed_axes)).name}"
    else:
        walls = "Walls: open"
    txt = (
        f"{snapshot.player_name or '-'} | Score: {snapshot.score} | Level: {snapshot.level} "
        f"| {walls} | ESC: quit"
    )
    label = hud_font.render(txt, True, colors.text)
    surf.blit(label, (12, (hud_height - label.get_height()) // 2))


def _draw_panel(surf: pygame.Surface, window_w: int, window_h: int) -> pygame.Rect:
    """Dim the screen and return a centered framed panel rect."""
    dim = pygame.Surface((window_w, window_h), pygame.SRCALPHA)
    dim.fill((0, 0, 0, 200))
    surf.blit(dim, (0, 0))

    panel_w = min(int(window_w * 0.8), 560)
    panel_h = min(int(window_h * 0.86), 520)
    panel = pygame.Rect(0, 0, panel_w, panel_h)
    panel.center = (window_w // 2, window_h // 2)
    pygame.draw.rect(surf, (0, 0, 0), panel)
    pygame.draw.rect(surf, (255, 255, 255), panel, width=2)
    return panel


def _blit_centered(
    surf: pygame.Surface, font: pygame.font.Font, text: str, color: Color, centerx: int, top: int
) -> int:
    """Blit a line centered on centerx; returns the y below it."""
    label = font.render(text, True, color)
    rect = label.get_rect()
    rect.centerx = centerx
    rect.top = top
    surf.blit(label, rect.topleft)
    return rect.bottom


def draw_leaderboard(
    surf: pygame.Surface,
    font: pygame.font.Font,
    entries: Sequence[ScoreEntry],
    panel: pygame.Rect,
    top: int,
    colors: ColorsConfig,
) -> int:
    """Draw the ranked table inside panel starting at top; returns the y below it."""
    y = _blit_centered(surf, font, "Leaderboard", colors.accent, panel.centerx, top) + 6
    if not entries:
        return _blit_centered(surf, font, "No scores yet", colors.grid_line, panel.centerx, y) + 4

    left = panel.left + 40
    right = panel.right - 40
    for rank, entry in enumerate(entries, start=1):
        color = colors.bonus if rank == 1 else colors.text
        name = entry.name if len(entry.name) <= 18 else entry.name[:17] + "…"
        rank_label = font.render(f"{rank:>2}. {name}", True, color)
        score_label = font.render(str(entry.score), True, color)
        surf.blit(rank_label, (left, y))
        surf.blit(score_label, (right - score_label.get_width(), y))
        y += rank_label.get_height() + 2
    return y


def draw_start_overlay(
    surf: pygame.Surface,
    title_font: pygame.font.Font,
    body_font: pygame.font.Font,
    name_buffer: str,
    entries: Sequence[ScoreEntry],
    window_w: int,
    window_h: int,
    colors: ColorsConfig,
    cursor_on: bool,
) -> None:
    panel = _draw_panel(surf, window_w, window_h)
    y = panel.top + 20
    y = _blit_centered(surf, title_font, "SNAKE", colors.snake_head, panel.centerx, y) + 14
    y = _blit_centered(surf, body_font, "Your name:", colors.text, panel.centerx, y) + 6

    box = pygame.Rect(0, 0, min(320, panel.w - 60), body_font.get_height() + 14)
    box.centerx = panel.centerx
    box.top = y
    pygame.draw.rect(surf, (255, 255, 255), box, width=2)
    shown = name_buffer + ("_" if cursor_on else " ")
    label = body_font.render(shown, True, colors.text)
    surf.blit(label, (box.left + 8, box.top + 7))
    y = box.bottom + 18

    y = draw_leaderboard(surf, body_font, entries, panel, y, colors) + 14
    hint_top = max(y, panel.bottom - body_font.get_height() - 16)
    _blit_centered(surf, body_font, "ENTER / SPACE: start", colors.accent, panel.centerx, hint_top)


def draw_game_over_overlay(
    surf: pygame.Surface,
    title_font: pygame.font.Font,
    body_font: pygame.font.Font,
    snapshot: Snapshot,
    new_record: bool,
    entries: Sequence[ScoreEntry],
    window_w: int,
    window_h: int,
    colors: ColorsConfig,
) -> None:
    panel = _draw_panel(surf, window_w, window_h)
    y = panel.top + 20
    y = _blit_centered(surf, title_font, "GAME OVER", colors.wall, panel.centerx, y) + 10
    y = _blit_centered(
        surf, body_font, f"Final score: {snapshot.score}", colors.text, panel.centerx, y
    ) + 6
    if new_record:
        y = _blit_centered(surf, body_font, "New record!", colors.bonus, panel.centerx, y) + 6
    y += 8
    y = draw_leaderboard(surf, body_font, entries, panel, y, colors) + 14
    hint_top = max(y, panel.bottom - body_font.get_height() - 16)
    _blit_centered(surf, body_font, "R / ENTER: play again", colors.accent, panel.centerx, hint_top)


class GameRenderer:
    """Renderer that centralizes fonts and shared styling for the board, HUD and overlays."""

    def __init__(
        self,
        window_w: int,
        window_h: int,
        cell_size: int,
        hud_height: int,
        colors: ColorsConfig,
        show_grid: bool = False,
    ) -> None:
        self.window_w = window_w
        self.window_h = window_h
        self.cell_size = cell_size
        self.hud_height = hud_height
        self.colors = colors
        self.show_grid = show_grid
        self.update_fonts()

    def update_window_size(self, window_w: int, window_h: int) -> None:
        self.window_w = window_w
        self.window_h = window_h

    def update_fonts(self) -> None:
        """Create the monospace fonts used by the HUD and overlays."""
        body_size = max(16, int(self.cell_size * 0.9))
        self.hud_font = pygame.font.SysFont("monospace", max(14, self.hud_height // 2))
        self.body_font = pygame.font.SysFont("monospace", body_size)
        self.title_font = pygame.font.SysFont("monospace", int(body_size * 1.8), bold=True)

    def render_frame(
        self,
        screen: pygame.Surface,
        snapshot: Snapshot,
        board_size: Tuple[int, int],
        leaderboard: Sequence[ScoreEntry],
        name_buffer: str = "",
        new_record: bool = False,
        cursor_on: bool = True,
    ) -> None:
        """Render and present a full frame."""
        c = self.colors
        cs = self.cell_size
        board_w, board_h = board_size[0] * cs, board_size[1] * cs
        origin = board_origin(self.window_w, self.window_h, board_w, board_h, self.hud_height)
        board = pygame.Rect(origin[0], origin[1], board_w, board_h)

        screen.fill(scale_color(c.background, 0.6))
        pygame.draw.rect(screen, c.background, board)
        if self.show_grid:
            draw_grid_lines(screen, origin, board_size[0], board_size[1], cs, c.grid_line)
        draw_sealed_walls(screen, board, tuple(snapshot.sealed_axes), c.wall)

        if snapshot.phase is not Phase.READY:
            draw_obstacles(screen, snapshot.obstacles, origin, cs, c.obstacle)
            draw_food(screen, snapshot.food, origin, cs, c.food)
            if snapshot.bonus is not None:
                draw_bonus(
                    screen, snapshot.bonus.cell, snapshot.bonus.remaining_fraction, origin, cs, c.bonus
                )
            draw_snake(screen, snapshot.snake, origin, cs, c.snake_head, c.snake_body)
            draw_particles(screen, snapshot.particles, origin, cs)

        draw_hud(screen, self.hud_font, snapshot, self.hud_height, c)

        if snapshot.phase is Phase.READY:
            draw_start_overlay(
                screen,
                self.title_font,
                self.body_font,
                name_buffer,
                leaderboard,
                self.window_w,
                self.window_h,
                c,
                cursor_on,
            )
        elif snapshot.phase is Phase.GAME_OVER:
            draw_game_over_overlay(
                screen,
                self.title_font,
                self.body_font,
                snapshot,
                new_record,
                leaderboard,
                self.window_w,
                self.window_h,
                c,
            )
        pygame.display.flip()
