from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from models import (
    BonusConfig,
    ColorsConfig,
    GameConfig,
    GridConfig,
    TimingConfig,
    WindowConfig,
)
from progression import Rules
from utils import as_color, clamp_float, clamp_int, deep_get

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _int(cfg: Dict[str, Any], path: str, default: int, lo: int, hi: int) -> int:
    """Read an integer at a dotted path, clamped; falls back on bad values."""
    raw = deep_get(cfg, path, default)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = default
    return clamp_int(value, lo, hi)


def _float(cfg: Dict[str, Any], path: str, default: float, lo: float, hi: float) -> float:
    raw = deep_get(cfg, path, default)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = default
    return clamp_float(value, lo, hi)


def _str(cfg: Dict[str, Any], path: str, default: str) -> str:
    raw = deep_get(cfg, path, default)
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return default


def parse_grid_config(cfg: Dict[str, Any]) -> GridConfig:
    # The starting snake sits at (8..10, 10), so smaller boards can't host it.
    return GridConfig(
        width=_int(cfg, "grid.width", 40, 12, 400),
        height=_int(cfg, "grid.height", 30, 12, 400),
        cell_size=_int(cfg, "grid.cell_size", 20, 4, 128),
    )


def parse_timing_config(cfg: Dict[str, Any]) -> TimingConfig:
    return TimingConfig(
        tick_ms=_int(cfg, "timing.tick_ms", 100, 10, 5000),
        frame_ms=_int(cfg, "timing.frame_ms", 16, 1, 1000),
        fps=_int(cfg, "timing.fps", 60, 1, 480),
        max_catchup_ticks=_int(cfg, "timing.max_catchup_ticks", 3, 1, 50),
    )


def parse_bonus_config(cfg: Dict[str, Any]) -> BonusConfig:
    return BonusConfig(
        spawn_interval_ms=_int(cfg, "bonus.spawn_interval_ms", 10000, 0, 10**7),
        spawn_chance=_float(cfg, "bonus.spawn_chance", 0.1, 0.0, 1.0),
        lifetime_ms=_int(cfg, "bonus.lifetime_ms", 5000, 1, 10**7),
    )


def parse_rules(cfg: Dict[str, Any]) -> Rules:
    """Parse scoring/difficulty thresholds; defaults match the classic game."""
    defaults = Rules()
    return Rules(
        food_points=_int(cfg, "rules.food_points", defaults.food_points, 1, 10**6),
        bonus_points=_int(cfg, "rules.bonus_points", defaults.bonus_points, 1, 10**6),
        level_score_step=_int(
            cfg, "rules.level_score_step", defaults.level_score_step, 1, 10**6
        ),
        wall_close_score=_int(
            cfg, "rules.wall_close_score", defaults.wall_close_score, 0, 10**9
        ),
        all_walls_score=_int(
            cfg, "rules.all_walls_score", defaults.all_walls_score, 0, 10**9
        ),
        obstacle_min_distance=_int(
            cfg, "rules.obstacle_min_distance", defaults.obstacle_min_distance, 0, 1000
        ),
    )


def parse_colors_config(cfg: Dict[str, Any]) -> ColorsConfig:
    """Parse palette colors ([r, g, b] lists or "#rrggbb" strings)."""

    def color(key: str, default: tuple[int, int, int]) -> tuple[int, int, int]:
        return as_color(deep_get(cfg, f"colors.{key}", None), default)

    return ColorsConfig(
        background=color("background", (30, 41, 59)),
        grid_line=color("grid_line", (51, 65, 85)),
        snake_head=color("snake_head", (134, 239, 172)),
        snake_body=color("snake_body", (74, 222, 128)),
        food=color("food", (244, 114, 182)),
        bonus=color("bonus", (250, 204, 21)),
        obstacle=color("obstacle", (148, 163, 184)),
        wall=color("wall", (239, 68, 68)),
        text=color("text", (241, 245, 249)),
        accent=color("accent", (56, 189, 248)),
        level_up=color("level_up", (167, 139, 250)),
    )


def parse_window_config(cfg: Dict[str, Any]) -> WindowConfig:
    return WindowConfig(
        title=_str(cfg, "window.title", "Snake"),
        fullscreen=bool(deep_get(cfg, "window.fullscreen", False)),
        hud_height=_int(cfg, "window.hud_height", 40, 0, 400),
        show_grid=bool(deep_get(cfg, "window.show_grid", False)),
    )


def _parse_log_level(cfg: Dict[str, Any]) -> str:
    level = _str(cfg, "log_level", "INFO").upper()
    return level if level in _LOG_LEVELS else "INFO"


def parse_game_config(cfg: Dict[str, Any]) -> GameConfig:
    """Parse the whole game config.

    Args:
        cfg: Raw JSON data (missing keys and bad values fall back to defaults).

    Returns:
        GameConfig with defaults applied.
    """
    if not isinstance(cfg, dict):
        cfg = {}
    return GameConfig(
        grid=parse_grid_config(cfg),
        timing=parse_timing_config(cfg),
        bonus=parse_bonus_config(cfg),
        rules=parse_rules(cfg),
        colors=parse_colors_config(cfg),
        window=parse_window_config(cfg),
        leaderboard_file=Path(_str(cfg, "leaderboard.file", "leaderboard.json")),
        leaderboard_size=_int(cfg, "leaderboard.size", 10, 1, 1000),
        default_player_name=_str(cfg, "default_player_name", "Player"),
        log_level=_parse_log_level(cfg),
    )
