"""Immediate-mode 2D drawing on a surface whose origin is the bottom-left corner."""

from __future__ import annotations

import math
from typing import Callable

import numpy as np
import pygame

from spaceshooter.imaging import Image

DEFAULT_SLICES = 100
DEFAULT_TEXT_SIZE = 13
_BOLD_OFFSETS = (-1, 0, 1)


def clip_region(x, y, width, height, screen_width, screen_height):
    """Visible part of a ``width`` x ``height`` block placed at (x, y).

    Returns ``(start_x, start_y, draw_x, draw_y, draw_width, draw_height)``:
    the offset into the block and the on-screen rectangle, or ``None`` when
    nothing of the block is on screen.
    """
    start_x = start_y = 0
    draw_x, draw_y = x, y
    draw_width, draw_height = width, height
    if x < 0:
        start_x = -x
        draw_x = 0
        draw_width -= start_x
    if y < 0:
        start_y = -y
        draw_y = 0
        draw_height -= start_y
    if draw_x + draw_width > screen_width:
        draw_width = screen_width - draw_x
    if draw_y + draw_height > screen_height:
        draw_height = screen_height - draw_y
    if draw_width <= 0 or draw_height <= 0:
        return None
    return start_x, start_y, draw_x, draw_y, draw_width, draw_height


def ellipse_points(x, y, a, b, slices=DEFAULT_SLICES):
    """Outline points of an ellipse centred at (x, y) with radii ``a`` and ``b``.

    The list starts at (x + a, y) and follows the angle in ``slices`` steps
    until it passes a full turn.
    """
    if slices <= 0:
        raise ValueError("slices must be positive")
    step = 2 * math.pi / slices
    points = [(x + a, y)]
    t = 0.0
    while t <= 2 * math.pi:
        points.append((x + a * math.cos(t), y + b * math.sin(t)))
        t += step
    return points


def masked_pixels(image: Image, ignore_color):
    """A copy of the image's pixels with every ``ignore_color`` pixel zeroed."""
    data = image.data.copy()
    if ignore_color is None:
        return data
    r, g, b = (ignore_color >> 16) & 0xFF, (ignore_color >> 8) & 0xFF, ignore_color & 0xFF
    red = data[:, :, 0]
    green = data[:, :, 1] if image.channels > 1 else np.zeros_like(red)
    blue = data[:, :, 2] if image.channels > 2 else np.zeros_like(red)
    hit = (red == r) & (green == g) & (blue == b)
    data[hit] = 0
    return data


def _to_rgba(pixels: np.ndarray) -> np.ndarray:
    height, width, channels = pixels.shape
    opaque = np.full((height, width, 1), 255, dtype=np.uint8)
    if channels == 1:
        return np.concatenate([pixels, pixels, pixels, opaque], axis=2)
    if channels == 2:
        gray = pixels[:, :, :1]
        return np.concatenate([gray, gray, gray, pixels[:, :, 1:2]], axis=2)
    if channels == 3:
        return np.concatenate([pixels, opaque], axis=2)
    return pixels


class Canvas:
    """Drawing state (colour, line width) over a pygame surface.

    Coordinates grow rightwards and upwards from the bottom-left corner.
    """

    def __init__(self, width: int = 500, height: int = 500, surface: pygame.Surface | None = None):
        self.surface = surface if surface is not None else pygame.Surface((width, height))
        self.color: tuple[int, int, int, int] = (255, 255, 255, 255)
        self.line_width = 1.0
        self._fonts: dict[int, pygame.font.Font] = {}
        self.clear()

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def set_color(self, r, g, b) -> None:
        self.color = (int(r), int(g), int(b), 255)

    def set_transparent_color(self, r, g, b, a) -> None:
        """Set a colour with opacity ``a`` between 0.0 and 1.0."""
        alpha = max(0, min(255, int(round(a * 255))))
        self.color = (int(r), int(g), int(b), alpha)

    def set_line_width(self, width=1.0) -> None:
        self.line_width = width

    def clear(self) -> None:
        self.surface.fill((0, 0, 0))

    def _screen(self, x, y) -> tuple[float, float]:
        return x, self.height - y

    def _pen(self) -> int:
        return max(1, int(round(self.line_width)))

    def _paint(self, draw: Callable[[pygame.Surface, tuple], None]) -> None:
        if self.color[3] >= 255:
            draw(self.surface, self.color[:3])
            return
        overlay = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
        draw(overlay, self.color)
        self.surface.blit(overlay, (0, 0))

    def point(self, x, y, size=0) -> None:
        """Plot (x, y), plus a ``2*size`` square around it when ``size`` > 0."""
        px, py = int(x), int(y)
        rects = [pygame.Rect(px, self.height - 1 - py, 1, 1)]
        if size > 0:
            left, bottom = int(x - size), int(y - size)
            side = int(2 * size)
            rects.append(pygame.Rect(left, self.height - bottom - side, side, side))
        self._paint(lambda surf, color: [pygame.draw.rect(surf, color, rect) for rect in rects])

    def line(self, x1, y1, x2, y2) -> None:
        start, end = self._screen(x1, y1), self._screen(x2, y2)
        width = self._pen()
        self._paint(lambda surf, color: pygame.draw.line(surf, color, start, end, width))

    def polygon(self, xs, ys) -> None:
        """Closed outline through the points; fewer than three draws nothing."""
        points = [self._screen(x, y) for x, y in zip(xs, ys)]
        if len(points) < 3:
            return
        width = self._pen()
        self._paint(lambda surf, color: pygame.draw.lines(surf, color, True, points, width))

    def filled_polygon(self, xs, ys) -> None:
        points = [self._screen(x, y) for x, y in zip(xs, ys)]
        if len(points) < 3:
            return
        self._paint(lambda surf, color: pygame.draw.polygon(surf, color, points))

    def rectangle(self, left, bottom, dx, dy) -> None:
        right, top = left + dx, bottom + dy
        self.line(left, bottom, right, bottom)
        self.line(right, bottom, right, top)
        self.line(right, top, left, top)
        self.line(left, top, left, bottom)

    def filled_rectangle(self, left, bottom, dx, dy) -> None:
        right, top = left + dx, bottom + dy
        self.filled_polygon([left, right, right, left], [bottom, bottom, top, top])

    def _outline(self, points) -> None:
        for (xa, ya), (xb, yb) in zip(points, points[1:]):
            self.line(xa, ya, xb, yb)

    def _fill(self, points) -> None:
        vertices = points[:-1]
        self.filled_polygon([p[0] for p in vertices], [p[1] for p in vertices])

    def circle(self, x, y, r, slices=DEFAULT_SLICES) -> None:
        self._outline(ellipse_points(x, y, r, r, slices))

    def filled_circle(self, x, y, r, slices=DEFAULT_SLICES) -> None:
        self._fill(ellipse_points(x, y, r, r, slices))

    def ellipse(self, x, y, a, b, slices=DEFAULT_SLICES) -> None:
        self._outline(ellipse_points(x, y, a, b, slices))

    def filled_ellipse(self, x, y, a, b, slices=DEFAULT_SLICES) -> None:
        self._fill(ellipse_points(x, y, a, b, slices))

    def _font(self, size: int) -> pygame.font.Font:
        if not pygame.font.get_init():
            pygame.font.init()
        font = self._fonts.get(size)
        if font is None:
            font = self._fonts[size] = pygame.font.Font(None, size)
        return font

    def text(self, x, y, text, size=DEFAULT_TEXT_SIZE) -> None:
        """Draw ``text`` with its baseline starting at (x, y)."""
        if not text:
            return
        font = self._font(int(size))
        rendered = font.render(text, True, self.color[:3])
        if self.color[3] < 255:
            rendered.set_alpha(self.color[3])
        self.surface.blit(rendered, (x, self.height - y - font.get_ascent()))

    def text_bold(self, x, y, text, size=DEFAULT_TEXT_SIZE) -> None:
        """Draw ``text`` thickened by repeating it around (x, y)."""
        for dx in _BOLD_OFFSETS:
            for dy in _BOLD_OFFSETS:
                self.text(x + dx, y + dy, text, size)

    def show_image(self, x, y, image: Image, ignore_color=None) -> None:
        """Draw ``image`` with its bottom-left corner at (x, y), clipped to the surface."""
        region = clip_region(int(x), int(y), image.width, image.height, self.width, self.height)
        if region is None:
            return
        start_x, start_y, draw_x, draw_y, draw_width, draw_height = region
        pixels = masked_pixels(image, ignore_color)
        pixels = pixels[start_y:start_y + draw_height, start_x:start_x + draw_width]
        rgba = np.ascontiguousarray(_to_rgba(pixels)[::-1])
        tile = pygame.image.frombuffer(rgba.tobytes(), (draw_width, draw_height), "RGBA").copy()
        self.surface.blit(tile, (draw_x, self.height - draw_y - draw_height))

    def pixel_color(self, x, y) -> tuple[int, int, int]:
        """The RGB colour of the pixel at (x, y)."""
        px, py = int(x), int(y)
        if not (0 <= px < self.width and 0 <= py < self.height):
            raise ValueError(f"pixel ({px}, {py}) is outside the surface")
        color = self.surface.get_at((px, self.height - 1 - py))
        return color.r, color.g, color.b