import random

import pytest

from spaceshooter.game import Game, KEY_LEFT, KEY_RIGHT, NAME_MAX
from spaceshooter.leaderboard import read_entries
from spaceshooter.world import GameState, World


@pytest.fixture
def sounds():
    return []


@pytest.fixture
def volumes():
    return []


@pytest.fixture
def game(tmp_path, sounds, volumes):
    world = World(rng=random.Random(0))
    return Game(world, tmp_path / "board.txt", sounds.append, volumes.append)


def test_space_at_home_enters_name(game, sounds):
    game.handle_key(" ")
    assert game.state is GameState.ENTER_NAME
    assert "clicksound.wav" in sounds


def test_name_editing(game):
    game.state = GameState.ENTER_NAME
    for ch in "abc":
        game.handle_key(ch)
    game.handle_key(8)
    assert game.player_name == "ab"
    game.handle_key("\r")
    assert game.state is GameState.MENU


def test_enter_without_name_stays(game):
    game.state = GameState.ENTER_NAME
    game.handle_key("\r")
    assert game.state is GameState.ENTER_NAME


def test_name_is_capped(game):
    game.state = GameState.ENTER_NAME
    for _ in range(NAME_MAX + 5):
        game.handle_key("x")
    assert len(game.player_name) == NAME_MAX


def test_menu_to_level(game):
    game.state = GameState.MENU
    game.handle_click(300, 600)
    assert game.state is GameState.LEVEL_MENU
    game.handle_click(300, 430)
    assert game.state is GameState.PLAY
    assert game.world.level == 3
    assert game.world.speed == 9.0


def test_settings_back_returns_to_previous(game):
    game.state = GameState.PAUSE_MENU
    game.handle_click(300, 350)
    assert game.state is GameState.SETTINGS
    game.handle_click(300, 350)
    assert game.state is GameState.PAUSE_MENU


def test_sound_off(game, volumes):
    game.state = GameState.MENU
    game.handle_click(300, 350)
    game.handle_click(300, 470)
    assert game.state is GameState.SOUND_MENU
    game.handle_click(300, 350)
    assert volumes == [0]
    assert game.state is GameState.MENU


def test_quit_button_and_escape(game):
    game.state = GameState.MENU
    game.handle_click(300, 220)
    assert game.quit_requested
    other = Game(World(rng=random.Random(1)))
    other.handle_key(27)
    assert other.quit_requested


def test_pause_and_return(game):
    game.world.reset()
    game.world.score = 50
    game.handle_key("p")
    assert game.state is GameState.PAUSE_MENU
    game.handle_click(300, 220)
    assert game.state is GameState.MENU
    assert game.world.score == 0


def test_cheat_then_win_records_score(game, tmp_path, sounds):
    game.player_name = "ace"
    game.world.reset()
    game.handle_key("c")
    assert game.world.score == 1490
    game.world.score = 1500
    game.after_frame()
    assert game.state is GameState.WIN_GAME
    assert "gamewinsound.wav" in sounds
    game.after_frame()
    game.after_frame()
    entries = read_entries(tmp_path / "board.txt")
    assert [(e.name, e.score) for e in entries] == [("ace", 1500)]


def test_w_on_win_returns_to_menu(game):
    game.state = GameState.WIN_GAME
    game.world.score = 1500
    game.handle_key("w")
    assert game.state is GameState.MENU
    assert game.world.score == 0


def test_special_keys_move_ship(game):
    start = game.world.ship.x
    game.handle_special_key(KEY_RIGHT)
    game.handle_special_key(KEY_RIGHT)
    game.handle_special_key(KEY_LEFT)
    assert game.world.ship.x == start + 10


def test_hover(game):
    game.state = GameState.LEVEL_MENU
    game.handle_hover(300, 170)
    assert game.hover == "back"
    game.state = GameState.MENU
    game.handle_hover(100, 620)
    assert game.hover == "leaderboard"
    game.handle_hover(10, 10)
    assert game.hover is None


def test_help_back(game):
    game.state = GameState.MENU
    game.handle_click(300, 470)
    assert game.state is GameState.HELP_MENU
    game.handle_click(70, 620)
    assert game.state is GameState.MENU