"""Repeating timers, pressed-key tracking and coordinate helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

MAX_TIMERS = 10
NORMAL_KEY_COUNT = 256
SPECIAL_KEY_COUNT = 109


class TimerLimitError(RuntimeError):
    """Raised when no more timers can be registered."""


@dataclass
class _Timer:
    delay: float
    callback: Callable[[], None]
    due: float
    paused: bool = False


class TimerRegistry:
    """A fixed-size set of repeating timers driven by explicit clock ticks."""

    def __init__(self, start_ms: float = 0, limit: int = MAX_TIMERS):
        self.limit = limit
        self._now = start_ms
        self._timers: list[_Timer] = []

    def __len__(self) -> int:
        return len(self._timers)

    def add(self, msec: float, callback: Callable[[], None]) -> int:
        """Register ``callback`` to run every ``msec`` milliseconds; return its index."""
        if msec < 0:
            raise ValueError("timer delay must not be negative")
        if len(self._timers) >= self.limit:
            raise TimerLimitError("maximum number of timers reached")
        self._timers.append(_Timer(msec, callback, self._now + msec))
        return len(self._timers) - 1

    def _find(self, index: int) -> _Timer | None:
        if 0 <= index < len(self._timers):
            return self._timers[index]
        return None

    def pause(self, index: int) -> None:
        """Pause a timer; unknown indices are ignored."""
        timer = self._find(index)
        if timer is not None:
            timer.paused = True

    def resume(self, index: int) -> None:
        """Resume a timer; unknown indices are ignored."""
        timer = self._find(index)
        if timer is not None:
            timer.paused = False

    def tick(self, now_ms: float) -> list[int]:
        """Run every due timer once and return the indices whose callbacks ran.

        A due timer is rescheduled one delay after ``now_ms`` whether or not
        it is paused.
        """
        self._now = now_ms
        fired = []
        for index, timer in list(enumerate(self._timers)):
            if timer.due > now_ms:
                continue
            if not timer.paused:
                timer.callback()
                fired.append(index)
            timer.due = now_ms + timer.delay
        return fired


class KeyState:
    """Tracks which keys of a fixed key range are held down."""

    def __init__(self, size: int = NORMAL_KEY_COUNT):
        self.size = size
        self._pressed: set[int] = set()

    def _code(self, key) -> int:
        code = ord(key) if isinstance(key, str) else int(key)
        if not 0 <= code < self.size:
            raise ValueError(f"key code {code} out of range 0..{self.size - 1}")
        return code

    def press(self, key) -> None:
        self._pressed.add(self._code(key))

    def release(self, key) -> None:
        self._pressed.discard(self._code(key))

    def is_pressed(self, key) -> bool:
        return self._code(key) in self._pressed


def to_screen_y(y: int, screen_height: int) -> int:
    """Flip a window y coordinate (top origin) to drawing space (bottom origin)."""
    return screen_height - y