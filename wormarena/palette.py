"""256-entry 6-bit palettes and their effects."""

from __future__ import annotations

from dataclasses import dataclass, field

from .reader import ByteReader

WORM_COLOUR_INDEXES = (0x58, 0x78)


@dataclass
class Color:
    r: int = 0
    g: int = 0
    b: int = 0

    def copy(self) -> Color:
        return Color(self.r, self.g, self.b)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def fade_value(v: int, amount: int) -> int:
    """Scale a 6-bit component by amount/32, never below zero."""
    if v >= 64:
        raise ValueError("palette component out of range")
    return max((v * amount) >> 5, 0)


def light_up_value(v: int, amount: int) -> int:
    """Blend a 6-bit component towards white by amount/32."""
    return min((v * (32 - amount) + amount * 63) >> 5, 63)


def _default_entries() -> list[Color]:
    return [Color() for _ in range(256)]


@dataclass
class Palette:
    """A palette of 256 colours with 6-bit components."""

    entries: list[Color] = field(default_factory=_default_entries)

    def __post_init__(self) -> None:
        if len(self.entries) != 256:
            raise ValueError("a palette has exactly 256 entries")

    def activate(self) -> list[Color]:
        """Return the palette expanded to 8-bit components."""
        return [Color((e.r << 2) & 0xFF, (e.g << 2) & 0xFF, (e.b << 2) & 0xFF) for e in self.entries]

    def fade(self, amount: int) -> None:
        if amount >= 32:
            return
        for e in self.entries:
            e.r = fade_value(e.r, amount)
            e.g = fade_value(e.g, amount)
            e.b = fade_value(e.b, amount)

    def light_up(self, amount: int) -> None:
        for e in self.entries:
            e.r = light_up_value(e.r, amount)
            e.g = light_up_value(e.g, amount)
            e.b = light_up_value(e.b, amount)

    def rotate_from(self, source: Palette, start: int, end: int, dist: int) -> None:
        """Copy entries start..end of source, rotated by dist places."""
        count = end - start + 1
        dist %= count
        for i in range(count):
            self.entries[start + i] = source.entries[start + (i + count - dist) % count].copy()

    def read(self, reader: ByteReader) -> None:
        for i in range(256):
            r, g, b = reader.read(3)
            self.entries[i] = Color(r & 63, g & 63, b & 63)

    def scale_add(self, dest: int, rgb: tuple[int, int, int], scale: int, add: int) -> None:
        values = [_trunc_div(add + c * scale, 64) for c in rgb]
        if any(not 0 <= v < 64 for v in values):
            raise ValueError("scaled colour out of range")
        self.entries[dest] = Color(*values)

    def set_worm_colours_span(self, base: int, rgb: tuple[int, int, int]) -> None:
        self.scale_add(base - 2, rgb, 38, 0)
        self.scale_add(base - 1, rgb, 50, 0)
        self.scale_add(base, rgb, 64, 0)
        self.scale_add(base + 1, rgb, 47, 1008)
        self.scale_add(base + 2, rgb, 28, 2205)

    def set_worm_colour(self, index: int, colour_index: int, rgb: tuple[int, int, int]) -> None:
        """Set up the colour ramps of worm index from its colour and RGB."""
        self.set_worm_colours_span(colour_index, rgb)
        base = WORM_COLOUR_INDEXES[index]
        for j in range(6):
            self.entries[base + j] = self.entries[colour_index + (j % 3) - 1].copy()
        for j in range(3):
            self.entries[129 + index * 4 + j] = self.entries[colour_index + j].copy()

    def copy(self) -> Palette:
        return Palette([e.copy() for e in self.entries])

    def clear(self) -> None:
        self.entries = _default_entries()