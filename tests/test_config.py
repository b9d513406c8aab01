"""Tests for config_io.py / config_parsing.py."""

import json
from pathlib import Path

import pytest

from config_io import load_json_config
from config_parsing import parse_game_config
from progression import Rules


class TestParseGameConfig:
    def test_defaults_from_empty_config(self):
        cfg = parse_game_config({})
        assert (cfg.grid.width, cfg.grid.height, cfg.grid.cell_size) == (40, 30, 20)
        assert cfg.timing.tick_ms == 100
        assert cfg.timing.frame_ms == 16
        assert cfg.bonus.spawn_interval_ms == 10000
        assert cfg.bonus.spawn_chance == 0.1
        assert cfg.bonus.lifetime_ms == 5000
        assert cfg.rules == Rules()
        assert cfg.leaderboard_file == Path("leaderboard.json")
        assert cfg.leaderboard_size == 10
        assert cfg.default_player_name == "Player"
        assert cfg.log_level == "INFO"

    def test_values_are_read_and_clamped(self):
        cfg = parse_game_config(
            {
                "grid": {"width": 3, "height": "25"},
                "bonus": {"spawn_chance": 4},
                "rules": {"food_points": 20},
                "log_level": "debug",
            }
        )
        assert cfg.grid.width == 12
        assert cfg.grid.height == 25
        assert cfg.bonus.spawn_chance == 1.0
        assert cfg.rules.food_points == 20
        assert cfg.log_level == "DEBUG"

    def test_bad_values_fall_back(self):
        cfg = parse_game_config(
            {"timing": {"tick_ms": "fast"}, "log_level": "LOUD", "default_player_name": "  "}
        )
        assert cfg.timing.tick_ms == 100
        assert cfg.log_level == "INFO"
        assert cfg.default_player_name == "Player"

    def test_colors_accept_hex_and_lists(self):
        cfg = parse_game_config({"colors": {"food": "#ff0080", "bonus": [300, -5, 10]}})
        assert cfg.colors.food == (255, 0, 128)
        assert cfg.colors.bonus == (255, 0, 10)

    def test_shipped_config_parses(self):
        path = Path(__file__).resolve().parent.parent / "config.json"
        cfg = parse_game_config(load_json_config(path))
        assert cfg.grid.width == 40
        assert cfg.colors.snake_head == (134, 239, 172)


class TestLoadJsonConfig:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json_config(tmp_path / "missing.json")

    def test_invalid_json_exits_with_message(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{ oops", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            load_json_config(path)
        assert "not valid JSON" in str(exc.value)

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(SystemExit):
            load_json_config(path)
