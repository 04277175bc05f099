"""Raster images, animated sprites and pixel-accurate collision masks.

Image rows are stored bottom row first, so row index ``y`` matches the
screen's upward y axis.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from PIL import Image as PILImage

MAX_FOLDER_FRAMES = 1024

_MODE_CHANNELS = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}


class Mirror(enum.Enum):
    """Axis along which an image or sprite is mirrored."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def _rgb_of(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


@dataclass
class Image:
    """Pixel data of shape (height, width, channels), bottom row first."""

    data: np.ndarray

    def __post_init__(self) -> None:
        pixels = np.asarray(self.data, dtype=np.uint8)
        if pixels.ndim == 2:
            pixels = pixels[:, :, np.newaxis]
        if pixels.ndim != 3 or not 1 <= pixels.shape[2] <= 4:
            raise ValueError("image data must have shape (height, width, 1..4)")
        self.data = np.ascontiguousarray(pixels)

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def channels(self) -> int:
        return self.data.shape[2]

    @classmethod
    def from_file(cls, path) -> "Image":
        """Load an image file, keeping its own channel count."""
        try:
            with PILImage.open(path) as pil:
                pil.load()
                mode = pil.mode
                if mode == "1" or mode == "F" or mode.startswith("I"):
                    pil = pil.convert("L")
                elif mode not in _MODE_CHANNELS:
                    has_alpha = "A" in mode or "transparency" in pil.info
                    pil = pil.convert("RGBA" if has_alpha else "RGB")
                pixels = np.array(pil, dtype=np.uint8)
        except (OSError, ValueError) as exc:
            raise OSError(f"failed to load image: {path}") from exc
        return cls(pixels[::-1])

    def copy(self) -> "Image":
        return Image(self.data.copy())

    def wrap(self, dx: int) -> None:
        """Shift the image circularly by ``dx`` pixels (positive is right)."""
        self.data = np.ascontiguousarray(np.roll(self.data, dx % self.width, axis=1))

    def resize(self, width: int, height: int) -> None:
        """Resample the image to ``width`` x ``height`` pixels."""
        if width <= 0 or height <= 0:
            raise ValueError("image size must be positive")
        planes = []
        for channel in range(self.channels):
            plane = PILImage.fromarray(np.ascontiguousarray(self.data[:, :, channel]))
            resized = plane.resize((width, height), PILImage.Resampling.BICUBIC)
            planes.append(np.asarray(resized, dtype=np.uint8))
        self.data = np.ascontiguousarray(np.stack(planes, axis=2))

    def scale(self, factor: float) -> None:
        """Scale both sides by ``factor``; a non-positive factor does nothing."""
        if factor <= 0:
            return
        self.resize(int(self.width * factor), int(self.height * factor))

    def mirror(self, state: Mirror) -> None:
        if state is Mirror.HORIZONTAL:
            self.data = np.ascontiguousarray(self.data[:, ::-1])
        elif state is Mirror.VERTICAL:
            self.data = np.ascontiguousarray(self.data[::-1])


def collision_mask(image: Image, ignore_color: int | None) -> np.ndarray:
    """Boolean (height, width) mask of the solid pixels of ``image``.

    Fully transparent pixels and pixels of ``ignore_color`` (0xRRGGBB)
    are not solid.
    """
    data = image.data.astype(np.int32)
    channels = image.channels
    red = data[:, :, 0]
    green = data[:, :, 1] if channels > 1 else np.zeros_like(red)
    blue = data[:, :, 2] if channels > 2 else np.zeros_like(red)

    hollow = np.zeros(red.shape, dtype=bool)
    if channels == 4:
        hollow |= data[:, :, 3] == 0
    if ignore_color is not None:
        r, g, b = _rgb_of(ignore_color)
        hollow |= (red == r) & (green == g) & (blue == b)
    return ~hollow


@dataclass
class Sprite:
    """A positioned, animated set of frames with a collision mask."""

    x: int = 0
    y: int = 0
    ignore_color: int | None = None
    frames: list[Image] = field(default_factory=list)
    current_frame: int = 0
    scale: float = 1.0
    flip_horizontal: bool = False
    flip_vertical: bool = False
    mask: np.ndarray | None = None

    @property
    def frame(self) -> Image | None:
        return self.frames[self.current_frame] if self.frames else None

    def set_frames(self, frames) -> None:
        """Replace the frames with copies, applying the sprite's scale and flips."""
        self.frames = [frame.copy() for frame in frames]
        self.current_frame = 0
        self.mask = None
        for frame in self.frames:
            frame.scale(self.scale)
            if self.flip_horizontal:
                frame.mirror(Mirror.HORIZONTAL)
            if self.flip_vertical:
                frame.mirror(Mirror.VERTICAL)
        self.update_collision_mask()

    def set_position(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def animate(self) -> None:
        """Advance to the next frame, wrapping around."""
        if len(self.frames) <= 1:
            return
        self.current_frame = (self.current_frame + 1) % len(self.frames)
        self.update_collision_mask()

    def scale_by(self, factor: float) -> None:
        if factor <= 0:
            return
        self.scale *= factor
        for frame in self.frames:
            frame.scale(factor)
        self.update_collision_mask()

    def resize(self, width: int, height: int) -> None:
        for frame in self.frames:
            frame.resize(width, height)
        self.update_collision_mask()

    def mirror(self, state: Mirror) -> None:
        if state is Mirror.HORIZONTAL:
            self.flip_horizontal = not self.flip_horizontal
        elif state is Mirror.VERTICAL:
            self.flip_vertical = not self.flip_vertical
        for frame in self.frames:
            frame.mirror(state)
        self.update_collision_mask()

    def update_collision_mask(self) -> None:
        frame = self.frame
        if frame is None:
            return
        self.mask = collision_mask(frame, self.ignore_color)

    def collides_with(self, other: "Sprite") -> bool:
        """True if the sprites overlap on at least one solid pixel."""
        mine, theirs = self.frame, other.frame
        if mine is None or theirs is None:
            return False
        start_x = max(self.x, other.x)
        end_x = min(self.x + mine.width, other.x + theirs.width)
        start_y = max(self.y, other.y)
        end_y = min(self.y + mine.height, other.y + theirs.height)
        if start_x >= end_x or start_y >= end_y:
            return False
        if self.mask is None or other.mask is None:
            return True
        region_a = self.mask[start_y - self.y:end_y - self.y, start_x - self.x:end_x - self.x]
        region_b = other.mask[start_y - other.y:end_y - other.y, start_x - other.x:end_x - other.x]
        return bool(np.any(region_a & region_b))


def frames_from_sheet(path, rows: int, cols: int) -> list[Image]:
    """Cut a sprite sheet into ``rows * cols`` frames, row by row."""
    if rows <= 0 or cols <= 0:
        raise ValueError("rows and cols must be positive")
    sheet = Image.from_file(path)
    frame_width = sheet.width // cols
    frame_height = sheet.height // rows
    frames = []
    for index in range(rows * cols):
        row, col = divmod(index, cols)
        block = sheet.data[
            row * frame_height:(row + 1) * frame_height,
            col * frame_width:(col + 1) * frame_width,
        ]
        frames.append(Image(block.copy()))
    return frames


def frames_from_folder(folder) -> list[Image]:
    """Load every file in ``folder`` as a frame, in name order."""
    folder = Path(folder)
    with os.scandir(folder) as entries:
        names = sorted(entry.name for entry in entries if not entry.is_dir())
    return [Image.from_file(folder / name) for name in names[:MAX_FOLDER_FRAMES]]