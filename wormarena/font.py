"""Bitmap font drawing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from .bitmap import Bitmap
from .draw import _clip, draw_rounded_box

GLYPH_WIDTH = 7
GLYPH_HEIGHT = 8
GLYPH_COUNT = 250


@dataclass
class Glyph:
    """A 7x8 character image and its advance width."""

    data: bytearray = field(default_factory=lambda: bytearray(GLYPH_WIDTH * GLYPH_HEIGHT))
    width: int = 0


class TextDims(NamedTuple):
    width: int
    height: int


def _as_bytes(text: str | bytes | bytearray) -> bytes:
    if isinstance(text, str):
        return text.encode("latin-1", errors="replace")
    return bytes(text)


class Font:
    """A set of glyphs; character code c uses glyph c - 2, code 0 breaks the line."""

    def __init__(self, chars: list[Glyph] | None = None) -> None:
        self.chars = chars if chars is not None else [Glyph() for _ in range(GLYPH_COUNT)]

    def draw_char(self, scr: Bitmap, ch: int, x: int, y: int, color: int, size: int = 1) -> None:
        """Draw glyph ch, magnified size times; glyphs 0 and 1 never draw."""
        if not 2 <= ch < 252 or ch >= len(self.chars):
            return
        mem = self.chars[ch].data
        c = _clip(scr.clip_rect, x, y, GLYPH_WIDTH, GLYPH_HEIGHT, GLYPH_WIDTH)
        if c is None:
            return
        for cy in range(c.height):
            start = c.offset + cy * GLYPH_WIDTH
            row = mem[start:start + c.width]
            for i in range(size):
                py = c.y + cy * size + i
                for cx, v in enumerate(row):
                    if v:
                        for k in range(size):
                            scr.set_pixel(c.x + cx * size + k, py, color)

    def draw_text(self, scr: Bitmap, text: str | bytes, x: int, y: int, color: int, size: int = 1) -> None:
        org_x = x
        for c in _as_bytes(text):
            if c == 0:
                x = org_x
                y += 8 * size
            elif 2 <= c < 252:
                c -= 2
                self.draw_char(scr, c, x, y, color, size)
                x += self.chars[c].width * size

    def get_dims(self, text: str | bytes) -> TextDims:
        """Width of the widest line and total height of the text."""
        width = 0
        max_width = 0
        max_height = 8
        for c in _as_bytes(text):
            if 2 <= c < 252:
                width += self.chars[c - 2].width
            elif c == 0:
                max_width = max(max_width, width)
                width = 0
                max_height += 8
        return TextDims(max(max_width, width), max_height)

    def draw_centered_text(self, scr: Bitmap, text: str | bytes, x: int, y: int, color: int, size: int = 1) -> None:
        length = self.get_dims(text).width * size
        self.draw_text(scr, text, x - length // 2, y, color, size)

    def draw_shadowed_text(self, scr: Bitmap, text: str | bytes, x: int, y: int, color: int) -> None:
        """Draw text over a darker copy offset by one pixel."""
        self.draw_text(scr, text, x + 1, y + 1, color // 2)
        self.draw_text(scr, text, x, y, color)

    def draw_framed_text(self, scr: Bitmap, text: str | bytes, x: int, y: int, color: int) -> None:
        """Draw text on a black rounded box."""
        draw_rounded_box(scr, x, y, 0, 7, self.get_dims(text).width)
        self.draw_text(scr, text, x + 2, y + 1, color)