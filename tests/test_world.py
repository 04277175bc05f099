import pytest

from spaceshooter import world as w
from spaceshooter.world import Enemy, GameState, World


class _FixedRandom:
    def __init__(self, value):
        self.value = value

    def randrange(self, n):
        return self.value % n


def _playing(rng=None, sounds=None):
    game = World(rng=rng, on_sound=None if sounds is None else sounds.append)
    game.state = GameState.PLAY
    return game


def test_initial_state():
    game = World()
    assert game.state is GameState.HOME
    assert game.previous_state is GameState.MENU
    assert (game.ship.x, game.ship.y) == w.SHIP_START
    assert len(game.stars) == w.STAR_COUNT
    assert all(0 <= x < w.SCREEN_WIDTH and 0 <= y < w.SCREEN_HEIGHT for x, y in game.stars)
    assert game.life == w.START_LIFE


def test_generate_asteroid_only_when_playing():
    game = World()
    game.generate_asteroid()
    assert game.asteroids == []
    game.state = GameState.PLAY
    game.generate_asteroid()
    assert len(game.asteroids) == 1
    x, y = game.asteroids[0]
    assert 0 <= x < w.SCREEN_WIDTH - w.ASTEROID_SIZE
    assert y == w.SCREEN_HEIGHT


def test_no_asteroids_in_enemy_mode():
    game = _playing()
    game.enemy_mode = True
    game.generate_asteroid()
    assert game.asteroids == []


def test_move_asteroids_drops_those_below_screen():
    game = _playing()
    game.asteroids = [(10, 3), (20, 500)]
    game.move_asteroids()
    assert game.asteroids == [(20, 500 - game.speed)]


def test_fire_bullet_from_ship_nose_with_sound():
    sounds = []
    game = _playing(sounds=sounds)
    game.fire_bullet()
    assert game.bullets == [(game.ship.x + 40, game.ship.y + 64)]
    assert sounds == [w.SOUND_BULLET]


def test_fire_bullet_ignored_outside_play():
    game = World()
    game.fire_bullet()
    assert game.bullets == []


def test_move_bullets_removes_past_top():
    game = _playing()
    game.bullets = [(5, w.SCREEN_HEIGHT), (6, 100)]
    game.move_bullets()
    assert game.bullets == [(6, 100 + w.BULLET_SPEED)]


def test_bullet_destroys_asteroid():
    sounds = []
    game = _playing(sounds=sounds)
    game.asteroids = [(100, 400)]
    game.bullets = [(120, 420)]
    game.check_collisions()
    assert game.asteroids == []
    assert game.bullets == []
    assert game.score == w.POINTS_PER_KILL
    assert (game.blasts[0].x, game.blasts[0].y, game.blasts[0].active) == (100, 400, True)
    assert sounds == [w.SOUND_EXPLOSION]


def test_bullet_on_edge_does_not_hit():
    game = _playing()
    game.asteroids = [(100, 400)]
    game.bullets = [(100, 420)]
    game.check_collisions()
    assert game.asteroids == [(100, 400)]
    assert game.score == 0


def test_bullet_destroys_enemy():
    game = _playing()
    game.enemies = [Enemy(200, 500)]
    game.bullets = [(210, 510)]
    game.check_collisions()
    assert game.enemies[0].alive is False
    assert game.bullets == []
    assert game.score == w.POINTS_PER_KILL


def test_asteroid_hits_ship():
    game = _playing()
    game.asteroids = [(game.ship.x + 10, game.ship.y + 10)]
    game.check_collisions()
    assert game.asteroids == []
    assert game.life == w.START_LIFE - 1
    assert game.recently_hit
    assert game.hit_timer == w.HIT_COOLDOWN


def test_no_ship_hit_while_recovering():
    game = _playing()
    game.recently_hit = True
    game.asteroids = [(game.ship.x + 10, game.ship.y + 10)]
    game.check_collisions()
    assert game.life == w.START_LIFE
    assert len(game.asteroids) == 1


def test_enemy_rams_ship():
    game = _playing()
    enemy = Enemy(game.ship.x + 10, game.ship.y + 10)
    game.enemies = [enemy]
    game.check_collisions()
    assert enemy.alive is False
    assert (enemy.x, enemy.y) == (w.OFFSCREEN, w.OFFSCREEN)
    assert game.life == w.START_LIFE - 1


def test_enemy_bullet_hits_ship():
    game = _playing()
    enemy = Enemy(600, 700, bullets=[(game.ship.x + 20, game.ship.y + 20)])
    game.enemies = [enemy]
    game.check_collisions()
    assert enemy.bullets == []
    assert game.life == w.START_LIFE - 1
    assert game.blasts[0].x == game.ship.x + 15


def test_damage_until_game_over():
    sounds = []
    game = _playing(sounds=sounds)
    for _ in range(w.START_LIFE):
        game.apply_damage()
        game.apply_damage()
        game.recently_hit = False
    assert game.life == 0
    assert game.state is GameState.GAMEOVER
    assert sounds == [w.SOUND_GAMEOVER]


def test_hit_timer_expires():
    game = _playing()
    game.apply_damage()
    for _ in range(w.HIT_COOLDOWN - 1):
        game.tick_hit_timer()
    assert game.recently_hit
    game.tick_hit_timer()
    assert not game.recently_hit
    assert game.hit_timer == 0


def test_blast_pool_is_bounded():
    game = World()
    for _ in range(w.BLAST_SLOTS + 5):
        game.add_blast(1, 2)
    assert sum(blast.active for blast in game.blasts) == w.BLAST_SLOTS


def test_blast_ends_after_all_frames():
    game = World()
    game.add_blast(1, 2)
    for _ in range(w.BLAST_FRAMES - 1):
        game.update_blasts()
    assert game.blasts[0].active
    game.update_blasts()
    assert not game.blasts[0].active
    assert game.blasts[0].frame == 0


def test_update_stage_from_score_and_level():
    game = World()
    game.update_stage()
    assert (game.stage, game.speed, game.enemy_mode) == (1, w.LEVEL_SPEEDS[0], False)
    game.level = 2
    game.score = w.STAGE_THRESHOLDS[0]
    game.update_stage()
    assert game.stage == 2
    assert game.speed == w.LEVEL_SPEEDS[1] + w.STAGE_SPEEDUP
    assert game.enemy_mode


def test_update_stage_keeps_stage_past_last_threshold():
    game = World()
    game.score = w.STAGE_THRESHOLDS[3]
    game.update_stage()
    game.score = w.STAGE_THRESHOLDS[-1]
    game.update_stage()
    assert game.stage == len(w.STAGE_THRESHOLDS)


def test_generate_enemy_requires_enemy_mode():
    game = _playing(rng=_FixedRandom(7))
    game.generate_enemy()
    assert game.enemies == []
    game.enemy_mode = True
    game.generate_enemy()
    assert [(e.x, e.y, e.alive) for e in game.enemies] == [(7, w.SCREEN_HEIGHT, True)]


def test_move_enemies_fires_when_roll_is_low():
    game = _playing(rng=_FixedRandom(0))
    game.enemy_mode = True
    game.enemies = [Enemy(100, 600)]
    game.move_enemies()
    enemy = game.enemies[0]
    assert enemy.y == 600 - game.speed
    drop = w.ENEMY_BULLET_SPEED + game.speed
    assert enemy.bullets == [(100 + 32, enemy.y + 5 - drop)]


def test_move_enemies_no_fire_and_leaving_screen():
    game = _playing(rng=_FixedRandom(50))
    game.enemy_mode = True
    game.enemies = [Enemy(100, 2)]
    game.move_enemies()
    enemy = game.enemies[0]
    assert enemy.bullets == []
    assert enemy.alive is False
    assert enemy.x == w.OFFSCREEN


def test_move_stars_wraps_to_top():
    game = World(rng=_FixedRandom(42))
    game.stars = [(10, 0), (20, 30)]
    game.move_stars()
    assert game.stars == [(42, w.SCREEN_HEIGHT), (20, 29)]


def test_move_ship_respects_edges():
    game = World()
    game.ship.set_position(0, 50)
    game.move_ship(-w.SHIP_STEP)
    assert game.ship.x == 0
    game.ship.set_position(w.SCREEN_WIDTH - w.SHIP_WIDTH, 50)
    game.move_ship(w.SHIP_STEP)
    assert game.ship.x == w.SCREEN_WIDTH - w.SHIP_WIDTH
    game.move_ship(-w.SHIP_STEP)
    assert game.ship.x == w.SCREEN_WIDTH - w.SHIP_WIDTH - w.SHIP_STEP


@pytest.mark.parametrize("level", [1, 3, 5])
def test_start_level(level):
    game = World()
    game.score = 40
    game.start_level(level)
    assert game.state is GameState.PLAY
    assert game.score == 0
    assert game.speed == w.LEVEL_SPEEDS[level - 1]


@pytest.mark.parametrize("level", [0, 6])
def test_start_level_rejects_unknown(level):
    with pytest.raises(ValueError):
        World().start_level(level)


def test_reset_restores_fresh_game():
    game = _playing()
    game.score = 300
    game.life = 1
    game.level = 4
    game.enemy_mode = True
    game.bullets = [(1, 2)]
    game.enemies = [Enemy(1, 2)]
    game.ship.set_position(0, 0)
    game.add_blast(3, 4)
    game.score_recorded = True
    game.state = GameState.GAMEOVER
    game.reset()
    assert game.state is GameState.PLAY
    assert (game.score, game.life, game.level, game.stage) == (0, w.START_LIFE, 1, 1)
    assert game.bullets == [] and game.enemies == []
    assert (game.ship.x, game.ship.y) == w.SHIP_START
    assert not any(blast.active for blast in game.blasts)
    assert game.score_recorded is False
    assert game.enemy_mode is False