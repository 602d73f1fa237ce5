"""Palette-indexed bitmaps, rectangles and sprite sets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import MutableSequence


@dataclass(frozen=True)
class Rect:
    """Half-open rectangle [x1, x2) x [y1, y2)."""

    x1: int = 0
    y1: int = 0
    x2: int = 0
    y2: int = 0

    def inside(self, x: int, y: int) -> bool:
        return self.x1 <= x < self.x2 and self.y1 <= y < self.y2

    def intersect(self, other: Rect) -> Rect:
        return Rect(
            max(self.x1, other.x1),
            max(self.y1, other.y1),
            min(self.x2, other.x2),
            min(self.y2, other.y2),
        )

    def width(self) -> int:
        return self.x2 - self.x1

    def height(self) -> int:
        return self.y2 - self.y1


class Bitmap:
    """An 8-bit palette-indexed image with a clipping rectangle."""

    def __init__(self, w: int, h: int, pitch: int | None = None) -> None:
        if pitch is None:
            pitch = w
        if w < 0 or h < 0 or pitch < w:
            raise ValueError("invalid bitmap dimensions")
        self.w = w
        self.h = h
        self.pitch = pitch
        self.pixels = bytearray(pitch * h)
        self.clip_rect = Rect(0, 0, w, h)

    def get_pixel(self, x: int, y: int) -> int:
        return self.pixels[y * self.pitch + x]

    def put_pixel(self, x: int, y: int, value: int) -> None:
        """Write a pixel without clipping."""
        self.pixels[y * self.pitch + x] = value & 0xFF

    def set_pixel(self, x: int, y: int, value: int) -> None:
        """Write a pixel if it lies inside the clipping rectangle."""
        if self.clip_rect.inside(x, y):
            self.pixels[y * self.pitch + x] = value & 0xFF

    def copy(self) -> Bitmap:
        other = Bitmap(self.w, self.h, self.pitch)
        other.pixels[:] = self.pixels
        return other


@dataclass(frozen=True)
class Sprite:
    """A view of one frame inside a larger pixel buffer."""

    mem: MutableSequence[int]
    offset: int
    width: int
    height: int
    pitch: int

    def at(self, x: int, y: int) -> int:
        return self.mem[self.offset + y * self.pitch + x]


@dataclass
class SpriteSet:
    """Equally sized frames stored one after another."""

    data: bytearray = field(default_factory=bytearray)
    width: int = 0
    height: int = 0
    sprite_size: int = 0
    count: int = 0

    def allocate(self, width: int, height: int, count: int) -> None:
        self.width = width
        self.height = height
        self.sprite_size = width * height
        self.count = count
        self.data = bytearray(self.sprite_size * count)

    def _check(self, frame: int) -> None:
        if not 0 <= frame < self.count:
            raise IndexError(f"sprite frame {frame} out of range")

    def sprite(self, frame: int) -> Sprite:
        self._check(frame)
        return Sprite(self.data, frame * self.sprite_size, self.width, self.height, self.width)

    def sprite_data(self, frame: int) -> memoryview:
        """Live view of one frame's pixels."""
        self._check(frame)
        start = frame * self.sprite_size
        return memoryview(self.data)[start:start + self.sprite_size]