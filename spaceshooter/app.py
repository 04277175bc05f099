"""Window, asset loading, drawing and the main loop of the game."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path

import pygame

from spaceshooter import game as g
from spaceshooter.canvas import Canvas
from spaceshooter.engine import TimerRegistry, to_screen_y
from spaceshooter.imaging import Image, frames_from_folder
from spaceshooter.leaderboard import read_entries
from spaceshooter.sound import SoundError, SoundPlayer
from spaceshooter.world import BLAST_FRAMES, SCREEN_HEIGHT, SCREEN_WIDTH, GameState, World

TITLE = "SPACE SHOOTER"
MUSIC = "beethoven1.wav"
STAR_SLICES = 20
GLOW = (100, 0, 0)
FPS = 60

_IMAGE_FILES = {
    "home": "homebg.jpg",
    "menu_bg": "spacebg1.1.jpg",
    "play_bg": "spacebg2.1.jpg",
    "gameover_bg": "spacebg3.1.jpg",
    "name_bg": "name.jpg",
    "help_bg": "space_help_scroll.jpg",
    "leaderboard_bg": "leaderboard.png",
    "win_bg": "win_game.png",
    "asteroid": "Asteroid-A-10-50.png",
    "enemy": "enemy_ship.png",
}

_HELP_LINES = [
    (170, 580, (0, 0, 255), "Objective:"),
    (180, 560, (0, 0, 0), "• Pilot your spaceship and shoot down"),
    (200, 545, (0, 0, 0), "  incoming asteroids."),
    (180, 525, (0, 0, 0), "• Each asteroid gives you +10 points"),
    (200, 510, (0, 0, 0), "  when destroyed."),
    (180, 490, (0, 0, 0), "• Reach 100 points to clear the level."),
    (170, 465, (0, 0, 255), "Controls:"),
    (180, 445, (0, 0, 0), "• A / Left Arrow     - Move Left"),
    (180, 425, (0, 0, 0), "• D / Right Arrow    - Move Right"),
    (180, 405, (0, 0, 0), "• SPACE or Click     - Shoot bullet"),
    (180, 385, (0, 0, 0), "• ESC                - Pause the game"),
    (180, 365, (0, 0, 0), "• M                  - Return to Menu"),
    (170, 340, (0, 0, 255), "Gameplay:"),
    (180, 320, (0, 0, 0), "• Asteroids fall from the top."),
    (180, 300, (0, 0, 0), "• Shoot them or dodge them."),
    (180, 280, (0, 0, 0), "• If an asteroid hits your ship,"),
    (200, 265, (0, 0, 0), "  it's game over."),
    (180, 245, (0, 0, 0), "• Speed increases every 100 points."),
    (180, 220, (0, 0, 0), "Press 'M' to return to the Main Menu."),
]


@dataclass
class Assets:
    """Every image the game draws, plus the folder holding its sounds."""

    images: dict[str, Image]
    ship_frames: list[Image]
    blast_frames: list[Image]
    sound_dir: Path = field(default=Path("."))

    @classmethod
    def load(cls, root) -> "Assets":
        """Load assets from ``root``/images and locate ``root``/sounds."""
        root = Path(root)
        images_dir = root / "images"
        images = {key: Image.from_file(images_dir / name) for key, name in _IMAGE_FILES.items()}
        ship = frames_from_folder(images_dir / "flyship")
        blasts = [
            Image.from_file(images_dir / "blasts" / f"tile{index}.png") for index in range(BLAST_FRAMES)
        ]
        return cls(images, ship, blasts, root / "sounds")


class Renderer:
    """Draws the current screen of a game onto a canvas."""

    def __init__(self, canvas: Canvas, assets: Assets):
        self.canvas = canvas
        self.assets = assets

    def _image(self, key: str, x=0, y=0) -> None:
        self.canvas.show_image(x, y, self.assets.images[key])

    def _button(self, bottom, label, label_x, glowing, left=g.BUTTON_LEFT, size=18) -> None:
        c = self.canvas
        c.set_color(*(GLOW if glowing else (0, 0, 0)))
        c.filled_rectangle(left, bottom, g.BUTTON_WIDTH, g.BUTTON_HEIGHT)
        c.set_color(250, 250, 250)
        c.text(label_x, bottom + 10, label, size)

    def draw(self, game: g.Game) -> None:
        c = self.canvas
        c.clear()
        state = game.state
        hover = game.hover
        if state is GameState.HOME:
            self._image("home")
            c.set_color(255, 255, 255)
            c.text_bold(250, 100, "Press SPACE to enter", 18)
        elif state in (GameState.MENU, GameState.PAUSE_MENU):
            self._image("menu_bg")
            self._draw_main(state, hover)
        elif state is GameState.ENTER_NAME:
            self._image("name_bg")
            start_x = 142 + 420 // 2 - len(game.player_name) * 12 // 2
            c.set_color(173, 216, 230)
            c.text_bold(start_x, 262 + 38, game.player_name, 24)
        elif state is GameState.PLAY:
            self._draw_play(game)
        elif state is GameState.HELP_MENU:
            self._image("help_bg")
            c.set_color(*(GLOW if hover == "back" else (173, 216, 230)))
            c.filled_rectangle(*g.HELP_BACK_BUTTON)
            c.set_color(0, 51, 150)
            c.text_bold(60, 620, "BACK")
            c.set_color(255, 0, 0)
            c.text_bold(210, 610, "Space Shooter – Help & Controls")
            for x, y, color, line in _HELP_LINES:
                c.set_color(*color)
                c.text(x, y, line, 12)
        elif state is GameState.SETTINGS:
            self._image("menu_bg")
            self._button(460, "SOUND", 340, hover == "sound")
            self._button(335, "BACK", 350, hover == "back")
        elif state is GameState.SOUND_MENU:
            self._image("menu_bg")
            self._button(460, "ON", 355, hover == "on")
            self._button(335, "OFF", 355, hover == "off")
        elif state is GameState.GAMEOVER:
            self._image("gameover_bg")
            c.set_color(255, 255, 255)
            c.text_bold(273, 520, "GAME OVER", 24)
            c.text(275, 460, f"Final Score: {game.world.score}", 24)
            c.text(100, 400, "Press 'R' to Restart or 'M' to return to Main Menu", 24)
        elif state is GameState.LEVEL_MENU:
            self._image("menu_bg")
            c.set_color(255, 0, 0)
            c.text(280, 650, "SELECT A LEVEL", 24)
            for name, bottom in g.LEVEL_BUTTONS.items():
                if name == "back":
                    self._button(bottom, "BACK", 350, hover == name)
                else:
                    self._button(bottom, f"LEVEL {name[-1]}", 345, hover == name)
        elif state is GameState.LEADERBOARD:
            self._image("leaderboard_bg")
            c.set_color(0, 255, 255)
            c.text_bold(140, 70, "PRESS 'B' TO RETURN TO MAIN MENU", 24)
            try:
                entries = read_entries(game.leaderboard_path)
            except FileNotFoundError:
                entries = []
            for row, entry in enumerate(entries):
                y = 495 - row * 38
                c.text(170, y, entry.name, 24)
                c.text(460, y, str(entry.score), 24)
        elif state is GameState.WIN_GAME:
            self._image("win_bg")
            c.set_color(0, 128, 128)
            c.text_bold(190, 190, "PRESS W TO RETURN TO MENU", 24)

    def _draw_main(self, state: GameState, hover) -> None:
        c = self.canvas
        if state is GameState.MENU:
            c.set_color(*(GLOW if hover == "leaderboard" else (0, 0, 0)))
            c.filled_rectangle(*g.LEADERBOARD_BUTTON)
            c.set_color(255, 255, 255)
            c.text_bold(57, 620, "LEADERBOARD")
            labels = {"play": ("PLAY", 350), "quit": ("QUIT", 350)}
        else:
            labels = {"play": ("CONTINUE", 325), "quit": ("RETURN", 340)}
        labels.update({"help": ("HELP", 350), "settings": ("SETTINGS", 330)})
        for name, bottom in g.MAIN_BUTTONS.items():
            label, label_x = labels[name]
            self._button(bottom, label, label_x, hover == name)

    def _draw_play(self, game: g.Game) -> None:
        c = self.canvas
        world = game.world
        self._image("play_bg")
        c.set_color(255, 255, 255)
        for x, y in world.stars:
            c.filled_circle(x, y, 2, STAR_SLICES)
        frame = world.ship.frame
        if frame is not None and (not world.recently_hit or (world.hit_timer // 5) % 2 == 0):
            c.show_image(world.ship.x, world.ship.y, frame, world.ship.ignore_color)
        c.set_color(255, 0, 0)
        for x, y in world.bullets:
            c.filled_rectangle(x, y, 4, 10)
        for x, y in world.asteroids:
            self._image("asteroid", x, y)
        if world.enemy_mode:
            for enemy in world.enemies:
                if not enemy.alive:
                    continue
                self._image("enemy", enemy.x, enemy.y)
                c.set_color(255, 255, 0)
                for bx, by in enemy.bullets:
                    c.filled_rectangle(bx, by, 4, 8)
        for index in range(world.life):
            c.set_color(0, 255, 0)
            c.filled_rectangle(660 - index * 20, 770, 15, 15)
            c.set_color(255, 255, 255)
            c.rectangle(660 - index * 20, 770, 15, 15)
        c.set_color(255, 255, 255)
        c.text_bold(10, 770, f"SCORE : {world.score}", 24)
        for blast in world.blasts:
            if blast.active and blast.frame < len(self.assets.blast_frames):
                c.show_image(blast.x, blast.y, self.assets.blast_frames[blast.frame])


def build_timers(game: g.Game) -> TimerRegistry:
    """The game's repeating updates, with their periods in milliseconds."""
    world = game.world

    def animate_ship() -> None:
        if world.state is GameState.PLAY:
            world.ship.animate()

    timers = TimerRegistry()
    timers.add(50, world.move_stars)
    timers.add(100, animate_ship)
    timers.add(20, world.move_bullets)
    timers.add(30, world.move_asteroids)
    timers.add(500, world.generate_asteroid)
    timers.add(500, world.generate_enemy)
    timers.add(30, world.move_enemies)
    timers.add(10, world.check_collisions)
    timers.add(100, world.update_blasts)
    timers.add(20, world.tick_hit_timer)
    return timers


class _Audio:
    """Sound effects and background music that degrade to silence on failure."""

    def __init__(self, sound_dir: Path):
        self.sound_dir = sound_dir
        self.player = SoundPlayer()
        self.music_channel = -1
        try:
            self.player.initialize()
            self.enabled = True
        except SoundError:
            self.enabled = False

    def play(self, name: str, loop=False) -> int:
        if not self.enabled:
            return -1
        try:
            return self.player.play(self.sound_dir / name, loop)
        except SoundError:
            return -1

    def music_volume(self, percent: int) -> None:
        if self.enabled:
            self.player.set_volume(self.music_channel, percent)


def _key_of(event) -> tuple[str, object] | None:
    if event.key == pygame.K_LEFT:
        return "special", g.KEY_LEFT
    if event.key == pygame.K_RIGHT:
        return "special", g.KEY_RIGHT
    if event.key == pygame.K_ESCAPE:
        return "key", g.KEY_ESCAPE
    if event.key == pygame.K_BACKSPACE:
        return "key", g.KEY_BACKSPACE
    if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
        return "key", "\r"
    if event.unicode and len(event.unicode) == 1 and ord(event.unicode) < 256:
        return "key", event.unicode
    return None


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="spaceshooter", description="Arcade space shooter.")
    parser.add_argument("--assets", default="assets", help="folder holding images/ and sounds/")
    parser.add_argument("--leaderboard", default="leaderboard.txt", help="high-score file")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(TITLE)
        assets = Assets.load(args.assets)
        audio = _Audio(assets.sound_dir)
        world = World(on_sound=audio.play)
        world.ship.set_frames(assets.ship_frames[:1])
        game = g.Game(world, args.leaderboard, on_music_volume=audio.music_volume)
        renderer = Renderer(Canvas(surface=screen), assets)
        timers = build_timers(game)
        audio.music_channel = audio.play(MUSIC, loop=True)
        clock = pygame.time.Clock()
        while not game.quit_requested:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.quit_requested = True
                elif event.type == pygame.KEYDOWN:
                    mapped = _key_of(event)
                    if mapped is not None:
                        kind, key = mapped
                        if kind == "special":
                            game.handle_special_key(key)
                        else:
                            game.handle_key(key)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    x, y = event.pos
                    game.handle_click(x, to_screen_y(y, SCREEN_HEIGHT))
                elif event.type == pygame.MOUSEMOTION:
                    x, y = event.pos
                    game.handle_hover(x, to_screen_y(y, SCREEN_HEIGHT))
            renderer.draw(game)
            game.after_frame()
            pygame.display.flip()
            timers.tick(pygame.time.get_ticks())
            clock.tick(FPS)
        audio.player.close()
    finally:
        pygame.quit()
    return 0