"""Drawing primitives for palette-indexed bitmaps."""

from __future__ import annotations

import math
from collections import Counter
from typing import Callable, Iterator, NamedTuple, Sequence

from .bitmap import Bitmap, Rect, Sprite
from .material import Material
from .palette import Color

RandFn = Callable[[int], int]


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _c_mod(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


class _Clipped(NamedTuple):
    x: int
    y: int
    width: int
    height: int
    offset: int


def _clip(clip: Rect, x: int, y: int, width: int, height: int, pitch: int, offset: int = 0) -> _Clipped | None:
    """Clip an image placed at (x, y) to clip; None if nothing is left."""
    top = y - clip.y1
    if top < 0:
        offset += -top * pitch
        height += top
        y = clip.y1
    bottom = y + height - clip.y2
    if bottom > 0:
        height -= bottom
    left = x - clip.x1
    if left < 0:
        offset -= left
        width += left
        x = clip.x1
    right = x + width - clip.x2
    if right > 0:
        width -= right
    if width <= 0 or height <= 0:
        return None
    return _Clipped(x, y, width, height, offset)


def _blit(
    scr: Bitmap,
    mem: Sequence[int],
    offset: int,
    pitch: int,
    x: int,
    y: int,
    width: int,
    height: int,
    op: Callable[[int, int, int, int], int | None],
) -> None:
    """Apply op(src, dest, local_x, local_y) over the clipped image area."""
    c = _clip(scr.clip_rect, x, y, width, height, pitch, offset)
    if c is None:
        return
    pixels = scr.pixels
    for ly in range(c.height):
        src = c.offset + ly * pitch
        dst = (c.y + ly) * scr.pitch + c.x
        for lx in range(c.width):
            v = op(mem[src + lx], pixels[dst + lx], lx, ly)
            if v is not None:
                pixels[dst + lx] = v & 0xFF


def fill_rect(scr: Bitmap, x: int, y: int, w: int, h: int, color: int) -> None:
    """Fill a rectangle, clipped to the bitmap's clipping rectangle."""
    clip = scr.clip_rect
    x2 = min(x + w, clip.x2)
    y2 = min(y + h, clip.y2)
    x = max(x, clip.x1)
    y = max(y, clip.y1)
    if x2 <= x:
        return
    run = bytes([color & 0xFF]) * (x2 - x)
    for row in range(y, y2):
        start = row * scr.pitch + x
        scr.pixels[start:start + len(run)] = run


def fill(scr: Bitmap, color: int) -> None:
    """Set every pixel of the bitmap to color."""
    scr.pixels[:] = bytes([color & 0xFF]) * len(scr.pixels)


def draw_bar(scr: Bitmap, x: int, y: int, width: int, color: int, height: int = 2) -> None:
    """Fill an unclipped bar; raises IndexError if it leaves the buffer."""
    if width <= 0:
        return
    run = bytes([color & 0xFF]) * width
    for row in range(y, y + height):
        start = row * scr.pitch + x
        if start < 0 or start + width > len(scr.pixels):
            raise IndexError("bar outside bitmap")
        scr.pixels[start:start + width] = run


def vline(scr: Bitmap, x: int, y1: int, y2: int, color: int) -> None:
    """Draw the vertical line x, [y1, y2), clipped."""
    clip = scr.clip_rect
    if x < clip.x1 or x >= clip.x2:
        return
    for yy in range(max(y1, clip.y1), min(y2, clip.y2)):
        scr.put_pixel(x, yy, color)


def draw_rounded_box(scr: Bitmap, x: int, y: int, color: int, height: int, width: int) -> None:
    fill_rect(scr, x, y + 1, width + 3, height - 2, color)
    fill_rect(scr, x + 1, y, width + 1, 1, color)
    fill_rect(scr, x + 1, y + height - 1, width + 1, 1, color)


def draw_rounded_line_box(scr: Bitmap, x: int, y: int, color: int, width: int, height: int) -> None:
    fill_rect(scr, x + 1, y, width - 2, 1, color)
    fill_rect(scr, x + 1, y + height - 1, width - 2, 1, color)
    fill_rect(scr, x, y + 1, 1, height - 2, color)
    fill_rect(scr, x + width - 1, y + 1, 1, height - 2, color)


def _box_perimeter(x: int, y: int, width: int, height: int) -> Iterator[tuple[int, int]]:
    for y1 in range(y, y + height):
        yield x, y1
    y1 = y + height - 1
    for x1 in range(x + 1, x + width - 1):
        yield x1, y1
    x1 = x + width - 1
    for y1 in range(y + height - 1, y - 1, -1):
        yield x1, y1
    for x1 in range(x + width - 2, x, -1):
        yield x1, y


def draw_dashed_line_box(
    scr: Bitmap, x: int, y: int, color: int, color2: int,
    num: int, den: int, width: int, height: int, phase: int,
) -> None:
    """Dashed box outline; the first num/den of the perimeter uses color2."""
    perim = 2 * (width + height) - 2
    color2lim = _trunc_div(num * perim, den)
    for p, (px, py) in enumerate(_box_perimeter(x, y, width, height)):
        if scr.clip_rect.inside(px, py) and _c_mod(p + phase, 4) < 2:
            scr.put_pixel(px, py, color if p >= color2lim else color2)


def blit_image_no_key_colour(
    scr: Bitmap, mem: Sequence[int], x: int, y: int, width: int, height: int, pitch: int | None = None,
) -> None:
    """Copy an image including its zero pixels."""
    if pitch is None:
        pitch = width
    c = _clip(scr.clip_rect, x, y, width, height, pitch)
    if c is None:
        return
    for ly in range(c.height):
        src = c.offset + ly * pitch
        dst = (c.y + ly) * scr.pitch + c.x
        scr.pixels[dst:dst + c.width] = bytes(mem[src:src + c.width])


def blit_image(scr: Bitmap, sprite: Sprite, x: int, y: int) -> None:
    """Copy a sprite, treating pixel value 0 as transparent."""
    _blit(scr, sprite.mem, sprite.offset, sprite.pitch, x, y, sprite.width, sprite.height,
          lambda c, d, lx, ly: c if c else None)


def blit_image_trans(scr: Bitmap, sprite: Sprite, x: int, y: int, phase: int) -> None:
    """Copy a sprite through a checkerboard mask selected by phase."""
    _blit(scr, sprite.mem, sprite.offset, sprite.pitch, x, y, sprite.width, sprite.height,
          lambda c, d, lx, ly: c if c and ((lx ^ ly ^ phase) & 1) else None)


def blit_image_r(scr: Bitmap, mem: Sequence[int], x: int, y: int, width: int, height: int) -> None:
    """Copy an image only over destination pixels 160 to 167."""
    _blit(scr, mem, 0, width, x, y, width, height,
          lambda c, d, lx, ly: c if c and ((d - 160) & 0xFF) < 8 else None)


def blit_fire_cone(scr: Bitmap, fc: int, mem: Sequence[int], x: int, y: int) -> None:
    """Draw a 16x16 fire cone frame with intensity level fc."""
    if fc == 0:
        op = lambda c, d, lx, ly: c - 5 if c > 116 else None  # noqa: E731
    elif fc == 1:
        op = lambda c, d, lx, ly: c - 3 if c > 114 else None  # noqa: E731
    elif fc == 2:
        op = lambda c, d, lx, ly: c - 1 if c > 112 else None  # noqa: E731
    else:
        op = lambda c, d, lx, ly: c if c else None  # noqa: E731
    _blit(scr, mem, 0, 16, x, y, 16, 16, op)


def blit_shadow_image(
    materials: Sequence[Material], scr: Bitmap, mem: Sequence[int], x: int, y: int, width: int, height: int,
) -> None:
    """Darken shadow-receiving pixels under the image's non-zero pixels."""
    _blit(scr, mem, 0, width, x, y, width, height,
          lambda c, d, lx, ly: d + 4 if c and materials[d].see_shadow() else None)


def line_points(from_x: int, from_y: int, to_x: int, to_y: int) -> Iterator[tuple[int, int]]:
    """Points of a line, excluding the start and including the end."""
    cx, cy = from_x, from_y
    dx = to_x - from_x
    dy = to_y - from_y
    sx, sy = _sign(dx), _sign(dy)
    dx, dy = abs(dx), abs(dy)
    if dx > dy:
        c = -(dx >> 1)
        while cx != to_x:
            c += dy
            cx += sx
            if c > 0:
                cy += sy
                c -= dx
            yield cx, cy
    else:
        c = -(dy >> 1)
        while cy != to_y:
            c += dx
            cy += sy
            if c > 0:
                cx += sx
                c -= dy
            yield cx, cy


def draw_ninjarope(
    scr: Bitmap, from_x: int, from_y: int, to_x: int, to_y: int, colour_begin: int, colour_end: int,
) -> None:
    """Draw a rope whose colour cycles through [colour_begin, colour_end)."""
    color = colour_begin
    for cx, cy in line_points(from_x, from_y, to_x, to_y):
        color += 1
        if color == colour_end:
            color = colour_begin
        scr.set_pixel(cx, cy, color)


def draw_laser_sight(scr: Bitmap, rand: RandFn, from_x: int, from_y: int, to_x: int, to_y: int) -> None:
    """Draw a sparse, flickering laser line; rand(n) returns 0..n-1."""
    for cx, cy in line_points(from_x, from_y, to_x, to_y):
        if rand(5) == 0 and scr.clip_rect.inside(cx, cy):
            scr.put_pixel(cx, cy, rand(2) + 83)


def draw_shadow_line(
    materials: Sequence[Material], scr: Bitmap, from_x: int, from_y: int, to_x: int, to_y: int,
) -> None:
    for cx, cy in line_points(from_x, from_y, to_x, to_y):
        if scr.clip_rect.inside(cx, cy):
            pix = scr.get_pixel(cx, cy)
            if materials[pix].see_shadow():
                scr.put_pixel(cx, cy, pix + 4)


def draw_line(scr: Bitmap, from_x: int, from_y: int, to_x: int, to_y: int, color: int) -> None:
    for cx, cy in line_points(from_x, from_y, to_x, to_y):
        scr.set_pixel(cx, cy, color)


def draw_graph(
    scr: Bitmap, data: Sequence[float], height: int, start_x: int, start_y: int,
    color: int, neg_color: int, balanced: bool,
) -> None:
    """Draw one column per value and a framing box around the graph."""
    base_y = start_y + (height // 2 if balanced else height)
    for x, v in enumerate(data, start_x):
        y1 = base_y - int(math.floor(v + 0.5))
        y2 = base_y
        if y1 > y2:
            y1, y2 = y2, y1
        vline(scr, x, y1, y2, color if v >= 0 else neg_color)
    draw_rounded_line_box(scr, start_x, start_y, 7, len(data), height)


class Heatmap:
    """A coarse grid counting events over a larger area."""

    def __init__(self, width: int, height: int, org_width: int, org_height: int) -> None:
        self.width = width
        self.height = height
        self.org_width = org_width
        self.org_height = org_height
        self.map = [0] * (width * height)

    def _cell(self, x: int, y: int) -> tuple[int, int]:
        x = _trunc_div(x * self.width, self.org_width)
        y = _trunc_div(y * self.height, self.org_height)
        return min(max(x, 0), self.width - 1), min(max(y, 0), self.height - 1)

    def inc(self, x: int, y: int, v: int = 1) -> None:
        x, y = self._cell(x, y)
        self.map[y * self.width + x] += v

    def inc_area(self, x: int, y: int, v: int = 1) -> None:
        """Add v to a weighted 5x5 area around the cell of (x, y)."""
        x, y = self._cell(x, y)
        for y1 in range(-2, 3):
            for x1 in range(-2, 3):
                cx, cy = x + x1, y + y1
                if 0 <= cx < self.width and 0 <= cy < self.height:
                    weight = 16 - (x1 * y1) * (x1 * y1)
                    self.map[cy * self.width + cx] += v * weight


def draw_heatmap(scr: Bitmap, x: int, y: int, hm: Heatmap) -> None:
    """Draw a heatmap with colours 104..119 equalised by value frequency."""
    counts = Counter(v for v in hm.map if v != 0)
    total = sum(counts.values())
    mapping = {0: 0}
    cum = 0
    max_idx = 119 - 104 + 1
    for value in sorted(counts):
        mapping[value] = 104 + cum * max_idx // total
        cum += counts[value]
    _blit(scr, hm.map, 0, hm.width, x, y, hm.width, hm.height,
          lambda c, d, lx, ly: mapping.get(c, 0))


def scale_draw(
    src: Sequence[int], w: int, h: int, src_pitch: int, mag: int, pal32: Sequence[int],
) -> list[list[int]]:
    """Expand palette pixels to 32-bit colours, magnified mag times.

    With mag above 1 only whole groups of four source pixels are drawn;
    the rest of each output row stays 0.
    """
    if mag < 1:
        return []
    if mag == 1:
        return [[pal32[src[y * src_pitch + x]] for x in range(w)] for y in range(h)]
    rows: list[list[int]] = []
    drawn = (w // 4) * 4
    for y in range(h):
        row = [0] * (w * mag)
        for x in range(drawn):
            row[x * mag:(x + 1) * mag] = [pal32[src[y * src_pitch + x]]] * mag
        rows.extend(list(row) for _ in range(mag))
    return rows


def scale2x(src: Sequence[int], width: int, height: int) -> bytearray:
    """Scale2x an 8-bit image; pixels outside the image count as 0."""
    if width < 2 or height < 2:
        raise ValueError("scale2x needs an image of at least 2x2")

    def at(px: int, py: int) -> int:
        if 0 <= px < width and 0 <= py < height:
            return src[py * width + px]
        return 0

    out_w = width * 2
    out = bytearray(out_w * height * 2)
    for y in range(height):
        for x in range(width):
            b, d, e, f, hh = at(x, y - 1), at(x - 1, y), at(x, y), at(x + 1, y), at(x, y + 1)
            if b != hh and f != d:
                r1 = b if d == b else e
                r2 = f if b == f else e
                r4 = hh if f == hh else e
                r3 = d if hh == d else e
            else:
                r1 = r2 = r3 = r4 = e
            top = (2 * y) * out_w + 2 * x
            out[top] = r1 & 0xFF
            out[top + 1] = r2 & 0xFF
            out[top + out_w] = r3 & 0xFF
            out[top + out_w + 1] = r4 & 0xFF
    return out


def prepare_palette_bgra(colors: Sequence[Color]) -> list[int]:
    """Pack 8-bit colours into 0x00RRGGBB integers."""
    return [(c.r << 16) | (c.g << 8) | c.b for c in colors]


def fit_screen(back_w: int, back_h: int, scr_w: int, scr_h: int) -> tuple[int, int, int]:
    """Largest whole magnification that fits, and the centring offsets."""
    if scr_w <= 0 or scr_h <= 0:
        raise ValueError("screen size must be positive")
    mag = 1
    while scr_w * mag <= back_w and scr_h * mag <= back_h:
        mag += 1
    mag -= 1
    scr_w *= mag
    scr_h *= mag
    return mag, _trunc_div(back_w, 2) - _trunc_div(scr_w, 2), _trunc_div(back_h, 2) - _trunc_div(scr_h, 2)