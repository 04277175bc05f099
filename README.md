# spaceshooter

spaceshooter is a vertical-scrolling arcade shooter built on pygame. Your ship
moves along the bottom of the screen and you shoot asteroids as they fall.
At 100 points new asteroids stop appearing. Enemy ships come down in their
place and fire back. You win at 1500 points.

## Installing

```
pip install .
```

This also installs pygame, numpy and pillow.

## Playing

```
spaceshooter [--assets DIR] [--leaderboard FILE]
```

- `--assets` is the folder that holds `images/` and `sounds/`. The default is
  `assets`.
- `--leaderboard` is the high-score file. The default is `leaderboard.txt`.

The package does not include images or sounds. You must provide them under
the assets folder:

- `images/`: `homebg.jpg`, `spacebg1.1.jpg`, `spacebg2.1.jpg`,
  `spacebg3.1.jpg`, `name.jpg`, `space_help_scroll.jpg`, `leaderboard.png`,
  `win_game.png`, `Asteroid-A-10-50.png` and `enemy_ship.png`. Also a
  `flyship/` folder that holds the ship frames, and `blasts/tile0.png` through
  `blasts/tile23.png`.
- `sounds/`: `beethoven1.wav`, `bulletsound.wav`, `explosionsound.wav`,
  `gameoversound.wav`, `gamewinsound.wav` and `clicksound.wav`.

If a sound cannot be played, the game runs silently.

On the start screen, press SPACE, then type your name (up to 13 characters).
Press Enter to go to the main menu. From the main menu you can:

- choose one of five levels,
- read the help page,
- change the music volume in the settings,
- view the leaderboard.

### Controls

| Key                  | Action                                   |
|----------------------|------------------------------------------|
| A / Left arrow       | Move left                                |
| D / Right arrow      | Move right                               |
| SPACE / left click   | Fire                                     |
| P                    | Pause menu                               |
| B                    | Back to menu (from play or leaderboard)  |
| R                    | Restart (from play or game over)         |
| M                    | Main menu (from game over or help)       |
| W                    | Main menu (from the win screen)          |
| ESC                  | Quit                                     |

You start with four lives. After a hit, you cannot be hit again for a short
time. The game gets faster at 200, 400, 600, 800 and 1000 points, and higher
levels start faster.

### Leaderboard

When a game ends, won or lost, your name and score go into the leaderboard
file. Each line of the file is a `name: score` entry. Entries are sorted by
score, highest first, and the file keeps only the top ten. You can use the
same functions from your own code:

```python
from spaceshooter.leaderboard import record_score, read_entries

record_score("leaderboard.txt", "Ada", 1200)
for entry in read_entries("leaderboard.txt", 10):
    print(entry.name, entry.score)
```

## Demo window

```
spaceshooter-demo [--assets DIR]
```

This opens a wide window. It shows `images/spacebg.jpg` with three buttons
(RESTART, NEXT LEVEL, MENU) on top and loops `sounds/beethoven1.wav`. The
buttons are only drawn and do nothing when clicked.

## Using the pieces

- `spaceshooter.imaging`: `Image` and `Sprite`. Both support loading,
  resizing, scaling, mirroring and wrapping. `Sprite` also gives
  pixel-accurate collision masks. `frames_from_sheet` and `frames_from_folder`
  load animation frames.
- `spaceshooter.canvas`: `Canvas`, drawing primitives on a pygame surface with
  the origin at the bottom-left corner.
- `spaceshooter.sound`: `SoundPlayer`, playback and volume control per channel.
- `spaceshooter.engine`: `TimerRegistry` (repeating timers driven by clock
  ticks), `KeyState` and `to_screen_y`.
- `spaceshooter.world`: `World`, the game simulation without any drawing.
- `spaceshooter.game`: `Game`, which handles input, screen changes and
  leaderboard updates.
- `spaceshooter.app`: `Assets`, `Renderer`, `build_timers` and the `main`
  loop.

## Tests

```
pip install .[test]
pytest
```