"""Sound effects and music on a fixed set of mixer channels."""

from __future__ import annotations

import pygame

MAX_VOLUME = 128
CHANNEL_COUNT = 8
_FREQUENCY = 44100
_SAMPLE_SIZE = -16
_STEREO = 2
_BUFFER = 2048


class SoundError(RuntimeError):
    """Raised when audio cannot be started, loaded or played."""


def percent_to_volume(percent) -> int:
    """Convert a percentage to the mixer's 0..128 scale, truncating toward zero."""
    scaled = int(percent) * MAX_VOLUME
    quotient = abs(scaled) // 100
    return quotient if scaled >= 0 else -quotient


def adjust_volume(current, delta_percent) -> int:
    """``current`` moved by ``delta_percent`` percent, kept within 0..128."""
    return max(0, min(MAX_VOLUME, current + percent_to_volume(delta_percent)))


class SoundPlayer:
    """Plays sounds on the first free channel and tracks each channel's volume."""

    def __init__(self, mixer=None, channels: int = CHANNEL_COUNT):
        self._mixer = mixer if mixer is not None else pygame.mixer
        self.channel_count = channels
        self._volumes = [MAX_VOLUME] * channels
        self._sounds: dict[int, object] = {}

    def __enter__(self) -> "SoundPlayer":
        self.initialize()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def initialize(self) -> None:
        """Open the audio device once; later calls do nothing."""
        if self._mixer.get_init():
            return
        try:
            self._mixer.init(frequency=_FREQUENCY, size=_SAMPLE_SIZE, channels=_STEREO, buffer=_BUFFER)
        except pygame.error as exc:
            raise SoundError(f"audio could not be initialised: {exc}") from exc
        self._mixer.set_num_channels(self.channel_count)

    def _free_channel(self) -> int | None:
        for index in range(self.channel_count):
            if not self._mixer.Channel(index).get_busy():
                self._sounds.pop(index, None)
                return index
        return None

    def play(self, path, loop=False, volume=100) -> int:
        """Play a sound file, looping forever if ``loop``; return its channel."""
        self.initialize()
        try:
            sound = self._mixer.Sound(str(path))
        except (pygame.error, OSError) as exc:
            raise SoundError(f"failed to load sound: {path}") from exc
        channel = self._free_channel()
        if channel is None:
            raise SoundError("no free channel to play sound")
        self._mixer.Channel(channel).play(sound, loops=-1 if loop else 0)
        self._sounds[channel] = sound
        self.set_volume(channel, volume)
        return channel

    def _apply(self, channel: int, volume: int) -> None:
        volume = max(0, min(MAX_VOLUME, volume))
        self._volumes[channel] = volume
        self._mixer.Channel(channel).set_volume(volume / MAX_VOLUME)

    def set_volume(self, channel, percent) -> None:
        """Set a channel's volume in percent; negative channels are ignored."""
        if channel < 0:
            return
        self._apply(channel, percent_to_volume(percent))

    def increase_volume(self, channel, percent) -> None:
        if channel < 0:
            return
        self._apply(channel, min(MAX_VOLUME, self._volumes[channel] + percent_to_volume(percent)))

    def decrease_volume(self, channel, percent) -> None:
        if channel < 0:
            return
        self._apply(channel, max(0, self._volumes[channel] - percent_to_volume(percent)))

    def pause(self, channel) -> None:
        """Pause one channel, or every channel when ``channel`` is negative."""
        if channel < 0:
            self._mixer.pause()
        else:
            self._mixer.Channel(channel).pause()

    def resume(self, channel) -> None:
        """Resume one channel, or every channel when ``channel`` is negative."""
        if channel < 0:
            self._mixer.unpause()
        else:
            self._mixer.Channel(channel).unpause()

    def stop(self, channel) -> None:
        """Stop a channel and release its sound."""
        if channel < 0:
            self.stop_all()
            return
        self._mixer.Channel(channel).stop()
        self._sounds.pop(channel, None)

    def stop_all(self) -> None:
        self._mixer.stop()
        self._sounds.clear()

    def close(self) -> None:
        """Stop everything and close the audio device."""
        if not self._mixer.get_init():
            self._sounds.clear()
            return
        self.stop_all()
        self._mixer.quit()