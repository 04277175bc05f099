"""Game world: the ship, asteroids, enemies, bullets, blasts and scoring."""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass, field
from typing import Callable

from spaceshooter.imaging import Sprite

SCREEN_WIDTH = 700
SCREEN_HEIGHT = 800
ASTEROID_SIZE = 64
ENEMY_SIZE = 64
SHIP_WIDTH = 80
SHIP_HEIGHT = 64
SHIP_START = (300, 50)
SHIP_STEP = 10
BULLET_SPEED = 5
ENEMY_BULLET_SPEED = 5
ENEMY_FIRE_PERCENT = 3
MAX_BULLETS = 1000
MAX_ASTEROIDS = 1000
MAX_ENEMIES = 2000
MAX_ENEMY_BULLETS = 50
BLAST_SLOTS = 100
BLAST_FRAMES = 24
STAR_COUNT = 100
START_LIFE = 4
HIT_COOLDOWN = 50
POINTS_PER_KILL = 10
ENEMY_MODE_SCORE = 100
WIN_SCORE = 1500
STAGE_THRESHOLDS = (200, 400, 600, 800, 1000)
LEVEL_SPEEDS = (5, 7, 9, 11, 13)
STAGE_SPEEDUP = 1.5
OFFSCREEN = -1000

SOUND_BULLET = "bulletsound.wav"
SOUND_EXPLOSION = "explosionsound.wav"
SOUND_GAMEOVER = "gameoversound.wav"


class GameState(enum.Enum):
    """Screens the game can be on."""

    MENU = enum.auto()
    PLAY = enum.auto()
    GAMEOVER = enum.auto()
    SETTINGS = enum.auto()
    SOUND_MENU = enum.auto()
    HELP_MENU = enum.auto()
    PAUSE_MENU = enum.auto()
    HOME = enum.auto()
    LEVEL_MENU = enum.auto()
    ENTER_NAME = enum.auto()
    LEADERBOARD = enum.auto()
    WIN_GAME = enum.auto()


@dataclass
class Enemy:
    """An enemy ship and the bullets it has fired."""

    x: float
    y: float
    alive: bool = True
    bullets: list[tuple[float, float]] = field(default_factory=list)


@dataclass
class Blast:
    """One slot of the explosion animation pool."""

    x: float = 0.0
    y: float = 0.0
    frame: int = 0
    active: bool = False


class World:
    """All moving objects of a game and the rules that advance them."""

    def __init__(self, rng=None, on_sound: Callable[[str], None] | None = None):
        self._rng = rng if rng is not None else random.Random()
        self.on_sound = on_sound
        self.ship = Sprite(x=SHIP_START[0], y=SHIP_START[1])
        self.bullets: list[tuple[float, float]] = []
        self.asteroids: list[tuple[float, float]] = []
        self.enemies: list[Enemy] = []
        self.blasts = [Blast() for _ in range(BLAST_SLOTS)]
        self.stars = [
            (self._rng.randrange(SCREEN_WIDTH), self._rng.randrange(SCREEN_HEIGHT))
            for _ in range(STAR_COUNT)
        ]
        self.state = GameState.HOME
        self.previous_state = GameState.MENU
        self.enemy_mode = False
        self.level = 1
        self.score = 0
        self.stage = 1
        self.speed = float(LEVEL_SPEEDS[0])
        self.life = START_LIFE
        self.recently_hit = False
        self.hit_timer = 0
        self.score_recorded = False

    def _play(self, sound: str) -> None:
        if self.on_sound is not None:
            self.on_sound(sound)

    @property
    def playing(self) -> bool:
        return self.state is GameState.PLAY

    def generate_asteroid(self) -> None:
        if not self.playing or self.enemy_mode:
            return
        if len(self.asteroids) < MAX_ASTEROIDS:
            x = self._rng.randrange(SCREEN_WIDTH - ASTEROID_SIZE)
            self.asteroids.append((x, SCREEN_HEIGHT))

    def move_asteroids(self) -> None:
        if not self.playing:
            return
        moved = ((x, y - self.speed) for x, y in self.asteroids)
        self.asteroids = [(x, y) for x, y in moved if y >= 0]

    def fire_bullet(self) -> None:
        if not self.playing:
            return
        self._play(SOUND_BULLET)
        if len(self.bullets) < MAX_BULLETS:
            self.bullets.append((self.ship.x + SHIP_WIDTH // 2, self.ship.y + SHIP_HEIGHT))

    def move_bullets(self) -> None:
        if not self.playing:
            return
        moved = ((x, y + BULLET_SPEED) for x, y in self.bullets)
        self.bullets = [(x, y) for x, y in moved if y <= SCREEN_HEIGHT]

    def generate_enemy(self) -> None:
        if not self.playing or not self.enemy_mode:
            return
        if len(self.enemies) < MAX_ENEMIES:
            x = self._rng.randrange(SCREEN_WIDTH - ENEMY_SIZE)
            self.enemies.append(Enemy(x, SCREEN_HEIGHT))

    def move_enemies(self) -> None:
        if not self.playing or not self.enemy_mode:
            return
        drop = ENEMY_BULLET_SPEED + self.speed
        for enemy in self.enemies:
            if not enemy.alive:
                continue
            enemy.y -= self.speed
            fires = self._rng.randrange(100) < ENEMY_FIRE_PERCENT
            if fires and len(enemy.bullets) < MAX_ENEMY_BULLETS:
                enemy.bullets.append((enemy.x + ENEMY_SIZE // 2, enemy.y + 5))
            moved = ((bx, by - drop) for bx, by in enemy.bullets)
            enemy.bullets = [(bx, by) for bx, by in moved if by >= 0]
            if enemy.y < 0:
                enemy.alive = False
                enemy.x = enemy.y = OFFSCREEN

    @staticmethod
    def _inside(px, py, left, bottom, size) -> bool:
        return left < px < left + size and bottom < py < bottom + size

    def _bullet_hits_asteroid(self, bx, by) -> bool:
        for index, (ax, ay) in enumerate(self.asteroids):
            if self._inside(bx, by, ax, ay, ASTEROID_SIZE):
                self.add_blast(ax, ay)
                del self.asteroids[index]
                self.score += POINTS_PER_KILL
                return True
        return False

    def _bullet_hits_enemy(self, bx, by) -> bool:
        for enemy in self.enemies:
            if enemy.alive and self._inside(bx, by, enemy.x, enemy.y, ENEMY_SIZE):
                self.add_blast(enemy.x, enemy.y)
                enemy.alive = False
                self.score += POINTS_PER_KILL
                return True
        return False

    def _spans_ship(self, left, width) -> bool:
        sx = self.ship.x
        right = left + width
        return sx < left < sx + SHIP_WIDTH or sx < right < sx + SHIP_WIDTH

    def _ship_collision(self) -> None:
        sx, sy = self.ship.x, self.ship.y
        top = sy + SHIP_HEIGHT
        for index, (ax, ay) in enumerate(self.asteroids):
            if self._spans_ship(ax, ASTEROID_SIZE) and ay < top:
                self.add_blast(ax, ay)
                del self.asteroids[index]
                self.apply_damage()
                return
        for enemy in self.enemies:
            if self._spans_ship(enemy.x, ENEMY_SIZE) and enemy.y < top:
                self.add_blast(enemy.x, enemy.y)
                enemy.alive = False
                enemy.x = enemy.y = OFFSCREEN
                self.apply_damage()
                return
        for enemy in self.enemies:
            if not enemy.alive:
                continue
            for index, (bx, by) in enumerate(enemy.bullets):
                if bx >= 0 and sx < bx < sx + SHIP_WIDTH and by >= 0 and sy < by < top:
                    del enemy.bullets[index]
                    self.add_blast(bx - 5, by)
                    self.apply_damage()
                    return

    def check_collisions(self) -> None:
        """Resolve bullet hits, then at most one hit on the ship."""
        if not self.playing:
            return
        survivors = []
        for bx, by in self.bullets:
            if self._bullet_hits_asteroid(bx, by) or self._bullet_hits_enemy(bx, by):
                continue
            survivors.append((bx, by))
        self.bullets = survivors
        if not self.recently_hit:
            self._ship_collision()

    def apply_damage(self) -> None:
        """Take one life unless the ship is still recovering from a hit."""
        if self.recently_hit:
            return
        self.life -= 1
        self.recently_hit = True
        self.hit_timer = HIT_COOLDOWN
        if self.life <= 0:
            self._play(SOUND_GAMEOVER)
            self.state = GameState.GAMEOVER

    def tick_hit_timer(self) -> None:
        if not self.recently_hit:
            return
        self.hit_timer -= 1
        if self.hit_timer <= 0:
            self.recently_hit = False
            self.hit_timer = 0

    def add_blast(self, x, y) -> None:
        """Start an explosion in the first free slot; do nothing if all are busy."""
        for blast in self.blasts:
            if not blast.active:
                blast.x, blast.y = x, y
                blast.frame = 0
                blast.active = True
                self._play(SOUND_EXPLOSION)
                return

    def update_blasts(self) -> None:
        for blast in self.blasts:
            if blast.active:
                blast.frame += 1
                if blast.frame >= BLAST_FRAMES:
                    blast.active = False
                    blast.frame = 0

    def update_stage(self) -> None:
        """Turn on enemies, and set the stage and speed from the score and level."""
        if self.score >= ENEMY_MODE_SCORE:
            self.enemy_mode = True
        stage = next(
            (number for number, limit in enumerate(STAGE_THRESHOLDS, start=1) if self.score < limit),
            None,
        )
        if stage is not None:
            self.stage = stage
        self.speed = LEVEL_SPEEDS[self.level - 1] + STAGE_SPEEDUP * (self.stage - 1)

    def move_stars(self) -> None:
        moved = []
        for x, y in self.stars:
            y -= 1
            if y < 0:
                y = SCREEN_HEIGHT
                x = self._rng.randrange(SCREEN_WIDTH)
            moved.append((x, y))
        self.stars = moved

    def move_ship(self, dx) -> None:
        """Move the ship sideways, refusing to leave the screen."""
        if dx < 0 and self.ship.x > 0 or dx > 0 and self.ship.x + SHIP_WIDTH < SCREEN_WIDTH:
            self.ship.set_position(self.ship.x + dx, self.ship.y)

    def start_level(self, level) -> None:
        if not 1 <= level <= len(LEVEL_SPEEDS):
            raise ValueError(f"level must be between 1 and {len(LEVEL_SPEEDS)}")
        self.level = level
        self.score = 0
        self.speed = float(LEVEL_SPEEDS[level - 1])
        self.stage = 1
        self.state = GameState.PLAY

    def reset(self) -> None:
        """Start a fresh game at level 1."""
        self.score = 0
        self.bullets = []
        self.asteroids = []
        self.ship.set_position(*SHIP_START)
        self.enemies = []
        self.enemy_mode = False
        self.stage = 1
        self.level = 1
        self.life = START_LIFE
        self.recently_hit = False
        self.hit_timer = 0
        for blast in self.blasts:
            blast.active = False
            blast.frame = 0
        self.state = GameState.PLAY
        self.score_recorded = False