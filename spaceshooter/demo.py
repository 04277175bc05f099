"""A minimal window showing a background and three option buttons."""

from __future__ import annotations

import argparse
from pathlib import Path

import pygame

from spaceshooter.canvas import Canvas
from spaceshooter.imaging import Image
from spaceshooter.sound import SoundError, SoundPlayer

WIDTH = 2000
HEIGHT = 800
TITLE = "demooo"

_OPTIONS = ((635, 770, "RESTART"), (435, 760, "NEXT LEVEL"), (235, 780, "MENU"))


def draw_options(canvas: Canvas) -> None:
    """Draw the restart, next-level and menu buttons."""
    for bottom, label_x, label in _OPTIONS:
        canvas.set_color(90, 90, 90)
        canvas.filled_rectangle(675, bottom, 250, 30)
        canvas.set_color(250, 250, 250)
        canvas.text(label_x, bottom + 15, label)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="spaceshooter-demo")
    parser.add_argument("--assets", default="assets", help="folder holding images/ and sounds/")
    args = parser.parse_args(argv)
    root = Path(args.assets)

    pygame.init()
    try:
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(TITLE)
        canvas = Canvas(surface=screen)
        try:
            background = Image.from_file(root / "images" / "spacebg.jpg")
        except OSError as exc:
            print(exc)
            background = None
        player = SoundPlayer()
        try:
            player.play(root / "sounds" / "beethoven1.wav", loop=True)
        except SoundError as exc:
            print(exc)
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
            canvas.clear()
            if background is not None:
                canvas.show_image(0, 0, background)
            draw_options(canvas)
            pygame.display.flip()
            clock.tick(60)
        player.close()
    finally:
        pygame.quit()
    return 0