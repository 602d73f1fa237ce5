"""Software mixer for 16-bit mono sounds and the players built on it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence

CHANNEL_COUNT = 8
SOUND_NORMAL = 0
SOUND_LOOP = 1

_MASK32 = 0xFFFFFFFF


def _int32(v: int) -> int:
    v &= _MASK32
    return v - (1 << 32) if v & 0x80000000 else v


@dataclass
class Sound:
    """A block of signed 16-bit samples."""

    samples: list[int] = field(default_factory=list)


@dataclass
class _Channel:
    handle: Any = None
    flags: int | None = None  # None marks an inactive channel
    sound: Sound | None = None
    pos: int = 0
    soundpos: int = 0
    stride: int = 1 << 32
    volumes: int = 0


class Mixer:
    """Mixes up to eight playing sounds into a mono sample stream."""

    def __init__(self) -> None:
        self._channels = [_Channel() for _ in range(CHANNEL_COUNT)]
        self._base_frame = 0

    def now(self) -> int:
        """The frame number at which the next mix starts."""
        return self._base_frame

    def _find_channel(self, handle: Any) -> _Channel | None:
        return next((ch for ch in self._channels if ch.handle == handle), None)

    def add(self, sound: Sound, time: int, handle: Any = None, loop: bool = False) -> Any:
        """Start sound at frame time; return handle, or None if no channel is free."""
        ch = next((c for c in self._channels if c.flags is None), None)
        if ch is None:
            return None
        ch.sound = sound
        ch.pos = time & _MASK32
        ch.soundpos = 0
        ch.stride = 1 << 32
        ch.volumes = 0x10001000
        ch.handle = handle
        ch.flags = SOUND_LOOP if loop else SOUND_NORMAL
        return handle

    def stop(self, handle: Any) -> None:
        ch = self._find_channel(handle)
        if ch is not None:
            ch.flags = None

    def is_playing(self, handle: Any) -> bool:
        return self._find_channel(handle) is not None

    def set_volume(self, handle: Any, volume: float) -> None:
        ch = self._find_channel(handle)
        if ch is None:
            return
        v = int(volume * 0x1000) & _MASK32
        ch.volumes = ((v << 16) + v) & _MASK32

    def mix(self, frame_count: int) -> list[int]:
        """Mix the next frame_count samples and return them."""
        out = [0] * frame_count
        now = self._base_frame & _MASK32
        for ch in self._channels:
            if ch.flags is not None and not self._add_channel(out, now, ch):
                ch.flags = None
                ch.handle = None
        self._base_frame = _int32(self._base_frame + frame_count)
        return out

    @staticmethod
    def _add_channel(out: list[int], now: int, ch: _Channel) -> bool:
        samples = ch.sound.samples if ch.sound is not None else []
        if not samples:
            return False
        start = max(_int32(ch.pos - now), 0)
        scaler = ch.volumes & 0x1FFF
        soundlen = len(samples)
        for cur in range(start, len(out)):
            samp = out[cur] + ((samples[ch.soundpos >> 32] * scaler) >> 12)
            out[cur] = max(-32768, min(32767, samp))
            ch.soundpos += ch.stride
            if (ch.soundpos >> 32) >= soundlen:
                if ch.flags & SOUND_LOOP:
                    ch.soundpos = 0
                else:
                    return False
        return True


class SoundPlayer(ABC):
    """Something that can start, query and stop sounds by number."""

    @abstractmethod
    def play(self, sound: int, handle: Any = None, loops: int = 0) -> None: ...

    @abstractmethod
    def is_playing(self, handle: Any) -> bool: ...

    @abstractmethod
    def stop(self, handle: Any) -> None: ...


class MixerSoundPlayer(SoundPlayer):
    """Plays numbered sounds from a sound bank through a mixer."""

    def __init__(self, sounds: Sequence[Sound], mixer: Mixer) -> None:
        self.sounds = sounds
        self.mixer = mixer

    def play(self, sound: int, handle: Any = None, loops: int = 0) -> None:
        self.mixer.add(self.sounds[sound], self.mixer.now(), handle, bool(loops))

    def is_playing(self, handle: Any) -> bool:
        return self.mixer.is_playing(handle)

    def stop(self, handle: Any) -> None:
        self.mixer.stop(handle)


class NullSoundPlayer(SoundPlayer):
    """A player that stays silent."""

    def play(self, sound: int, handle: Any = None, loops: int = 0) -> None:
        return None

    def is_playing(self, handle: Any) -> bool:
        return False

    def stop(self, handle: Any) -> None:
        return None