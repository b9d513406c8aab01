"""Headless tests for game.py / rendering.py using SDL's dummy drivers."""

import json
import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

pygame = pytest.importorskip("pygame")

from game import Game  # noqa: E402
from models import Phase  # noqa: E402


def key_event(key, unicode=""):
    return pygame.event.Event(pygame.KEYDOWN, key=key, unicode=unicode, mod=0)


@pytest.fixture
def game(tmp_path):
    cfg = {
        "grid": {"width": 20, "height": 15, "cell_size": 10},
        "leaderboard": {"file": str(tmp_path / "lb.json")},
        "log_level": "WARNING",
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(cfg), encoding="utf-8")
    g = Game(path)
    yield g
    pygame.quit()


def render(g):
    g.renderer.render_frame(
        screen=g.screen,
        snapshot=g.sim.snapshot(),
        board_size=(g.cfg.grid.width, g.cfg.grid.height),
        leaderboard=g.leaderboard_entries,
        name_buffer=g.name_buffer,
        new_record=g.new_record,
    )


def test_name_entry_and_start(game):
    for ch in "Bo":
        assert game._handle_keydown(key_event(ord(ch.lower()), ch))
    assert game._handle_keydown(key_event(pygame.K_BACKSPACE))
    assert game.name_buffer == "B"
    render(game)

    game._handle_keydown(key_event(pygame.K_RETURN))
    assert game.sim.run.phase is Phase.RUNNING
    assert game.sim.run.player_name == "B"
    render(game)


def test_blank_name_uses_default(game):
    game._handle_keydown(key_event(pygame.K_SPACE, " "))
    assert game.sim.run.player_name == "Player"


def test_arrow_keys_buffer_direction(game):
    game.start_run()
    game._handle_keydown(key_event(pygame.K_UP))
    assert game.sim.run.next_direction.name == "UP"
    game._handle_keydown(key_event(pygame.K_LEFT))
    assert game.sim.run.next_direction.name == "UP"


def test_game_over_records_score_and_restarts(game):
    game.start_run()
    game.sim.run.score = 70
    game.sim.run.obstacles = {(11, 10)}
    game.sim.run.food = (0, 0)
    game.sim.tick()

    assert game.sim.run.phase is Phase.GAME_OVER
    assert game.new_record is True
    assert [(e.name, e.score) for e in game.leaderboard_entries] == [("Player", 70)]
    render(game)

    game._handle_keydown(key_event(pygame.K_r, "r"))
    assert game.sim.run.phase is Phase.READY
    render(game)


def test_escape_quits(game):
    assert game._handle_keydown(key_event(pygame.K_ESCAPE)) is False
