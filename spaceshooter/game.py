"""Screen flow and input handling for the space shooter."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from spaceshooter import leaderboard
from spaceshooter.world import SHIP_START, SHIP_STEP, WIN_SCORE, GameState, World

NAME_MAX = 13
CHEAT_SCORE = 1490
KEY_ESCAPE = 27
KEY_BACKSPACE = 8
KEY_LEFT = "left"
KEY_RIGHT = "right"

SOUND_CLICK = "clicksound.wav"
SOUND_WIN = "gamewinsound.wav"

BUTTON_WIDTH = 250
BUTTON_HEIGHT = 30
BUTTON_LEFT = 250

MAIN_BUTTONS = {"play": 585, "help": 460, "settings": 335, "quit": 210}
SETTINGS_BUTTONS = {"sound": 460, "back": 335}
SOUND_BUTTONS = {"on": 460, "off": 335}
LEVEL_BUTTONS = {
    "level1": 585,
    "level2": 500,
    "level3": 415,
    "level4": 330,
    "level5": 245,
    "back": 160,
}
LEADERBOARD_BUTTON = (50, 600, 100, 50)
HELP_BACK_CLICK = (50, 600, 60, 50)
HELP_BACK_BUTTON = (50, 600, 50, 50)


def _inside(x, y, rect) -> bool:
    left, bottom, width, height = rect
    return left < x < left + width and bottom < y < bottom + height


def _button_at(x, y, buttons: dict[str, int]) -> str | None:
    """Name of the standard-size button under (x, y), if any."""
    for name, bottom in buttons.items():
        if _inside(x, y, (BUTTON_LEFT, bottom, BUTTON_WIDTH, BUTTON_HEIGHT)):
            return name
    return None


class Game:
    """The world plus menus, player name and leaderboard bookkeeping."""

    def __init__(
        self,
        world: World | None = None,
        leaderboard_path="leaderboard.txt",
        on_sound: Callable[[str], None] | None = None,
        on_music_volume: Callable[[int], None] | None = None,
    ):
        self.world = world if world is not None else World()
        if on_sound is not None:
            self.world.on_sound = on_sound
        self.on_music_volume = on_music_volume
        self.leaderboard_path = Path(leaderboard_path)
        self.player_name = ""
        self.hover: str | None = None
        self.quit_requested = False

    @property
    def state(self) -> GameState:
        return self.world.state

    @state.setter
    def state(self, value: GameState) -> None:
        self.world.state = value

    def _sound(self, name: str) -> None:
        if self.world.on_sound is not None:
            self.world.on_sound(name)

    def _click(self) -> None:
        self._sound(SOUND_CLICK)

    def _set_music(self, percent: int) -> None:
        if self.on_music_volume is not None:
            self.on_music_volume(percent)

    def return_to_menu(self) -> None:
        """Start over and show the main menu."""
        self.world.reset()
        self.state = GameState.MENU

    def handle_key(self, key) -> None:
        """React to a typed character (or its code)."""
        if isinstance(key, int):
            key = chr(key)
        world = self.world
        playing = self.state is GameState.PLAY
        if key == "c" and playing:
            world.score = CHEAT_SCORE
        if key == "b" and playing:
            self.state = GameState.MENU
        if key == "a" and playing:
            world.move_ship(-SHIP_STEP)
        if key == "d" and playing:
            world.move_ship(SHIP_STEP)
        if key == "r" and self.state in (GameState.PLAY, GameState.GAMEOVER):
            world.reset()
        if key == "p" and self.state is GameState.PLAY:
            self.state = GameState.PAUSE_MENU
        if key == chr(KEY_ESCAPE):
            self.quit_requested = True
        if key == " " and self.state is GameState.PLAY:
            world.fire_bullet()
        if key == "m" and self.state in (GameState.GAMEOVER, GameState.HELP_MENU):
            self.return_to_menu()
        if key == " " and self.state is GameState.HOME:
            self._click()
            self.state = GameState.ENTER_NAME
        if self.state is GameState.ENTER_NAME:
            self._edit_name(key)
            return
        if self.state is GameState.LEADERBOARD and key == "b":
            self.state = GameState.MENU
            self.world.previous_state = GameState.LEADERBOARD
        if self.state is GameState.WIN_GAME and key == "w":
            self.return_to_menu()

    def _edit_name(self, key: str) -> None:
        if key in ("\r", "\n") and self.player_name:
            self.state = GameState.MENU
        elif key == chr(KEY_BACKSPACE) and self.player_name:
            self.player_name = self.player_name[:-1]
        elif 32 <= ord(key) <= 126 and len(self.player_name) < NAME_MAX:
            self.player_name += key

    def handle_special_key(self, key) -> None:
        """Arrow keys move the ship."""
        if key == KEY_LEFT:
            self.world.move_ship(-SHIP_STEP)
        elif key == KEY_RIGHT:
            self.world.move_ship(SHIP_STEP)

    def handle_click(self, x, y) -> None:
        """A left-button press at (x, y), in bottom-left coordinates."""
        world = self.world
        state = self.state
        if state is GameState.MENU:
            button = _button_at(x, y, MAIN_BUTTONS)
            targets = {
                "play": GameState.LEVEL_MENU,
                "help": GameState.HELP_MENU,
                "settings": GameState.SETTINGS,
            }
            if button in targets:
                self._click()
                self.state = targets[button]
                world.previous_state = GameState.MENU
            elif button == "quit":
                self._click()
                self.quit_requested = True
            elif _inside(x, y, LEADERBOARD_BUTTON):
                self._click()
                self.state = GameState.LEADERBOARD
                world.previous_state = GameState.MENU
        elif state is GameState.HELP_MENU:
            if _inside(x, y, HELP_BACK_CLICK) and world.previous_state in (
                GameState.MENU,
                GameState.PAUSE_MENU,
            ):
                self._click()
                self.state = world.previous_state
                world.previous_state = GameState.HELP_MENU
        elif state is GameState.PAUSE_MENU:
            button = _button_at(x, y, MAIN_BUTTONS)
            targets = {
                "play": GameState.PLAY,
                "help": GameState.HELP_MENU,
                "settings": GameState.SETTINGS,
            }
            if button in targets:
                self._click()
                self.state = targets[button]
                world.previous_state = GameState.PAUSE_MENU
            elif button == "quit":
                self._click()
                world.score = 0
                world.bullets = []
                world.asteroids = []
                world.ship.set_position(*SHIP_START)
                self.state = GameState.MENU
                world.previous_state = GameState.PAUSE_MENU
        elif state is GameState.SETTINGS:
            button = _button_at(x, y, SETTINGS_BUTTONS)
            if button == "sound":
                self._click()
                self.state = GameState.SOUND_MENU
            elif button == "back":
                self._click()
                if world.previous_state in (GameState.MENU, GameState.PAUSE_MENU, GameState.PLAY):
                    self.state = world.previous_state
                else:
                    self.state = GameState.MENU
        elif state is GameState.SOUND_MENU:
            button = _button_at(x, y, SOUND_BUTTONS)
            if button == "on":
                self._click()
                self._set_music(100)
            elif button == "off":
                self._click()
                self._set_music(0)
            self.state = world.previous_state
        elif state is GameState.PLAY:
            world.fire_bullet()
        elif state is GameState.LEVEL_MENU:
            button = _button_at(x, y, LEVEL_BUTTONS)
            if button == "back":
                self._click()
                self.state = GameState.MENU
            elif button is not None:
                self._click()
                world.start_level(int(button[-1]))

    def handle_hover(self, x, y) -> None:
        """Remember which button the pointer is over, for highlighting."""
        self.hover = None
        state = self.state
        if state is GameState.LEVEL_MENU:
            self.hover = _button_at(x, y, LEVEL_BUTTONS)
        elif state in (GameState.MENU, GameState.PAUSE_MENU):
            if BUTTON_LEFT < x < BUTTON_LEFT + BUTTON_WIDTH:
                self.hover = _button_at(x, y, MAIN_BUTTONS)
            elif _inside(x, y, LEADERBOARD_BUTTON):
                self.hover = "leaderboard"
        elif state is GameState.SETTINGS:
            self.hover = _button_at(x, y, SETTINGS_BUTTONS)
        elif state is GameState.SOUND_MENU:
            self.hover = _button_at(x, y, SOUND_BUTTONS)
        elif state is GameState.HELP_MENU and _inside(x, y, HELP_BACK_BUTTON):
            self.hover = "back"

    def after_frame(self) -> None:
        """Per-frame rules: stage progress, winning and recording the score."""
        world = self.world
        if self.state is GameState.PLAY:
            world.update_stage()
            if world.score >= WIN_SCORE:
                self._sound(SOUND_WIN)
                self.state = GameState.WIN_GAME
        elif self.state in (GameState.GAMEOVER, GameState.WIN_GAME):
            if not world.score_recorded and self.player_name:
                leaderboard.record_score(self.leaderboard_path, self.player_name, world.score)
                world.score_recorded = True