"""Drawing onto level maps, keeping pixels and materials in step."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

from .bitmap import Rect, SpriteSet
from .draw import _clip
from .material import Material

RandFn = Callable[[int], int]
_MapOp = Callable[[int, Material, int, int], Optional[int]]


class _MapLike(Protocol):
    width: int
    height: int
    data: bytearray
    materials: list


@dataclass
class Texture:
    """How a dirt effect draws: mask frame, texture frames and mode."""

    n_draw_back: bool = False
    m_frame: int = 0
    s_frame: int = 0
    r_frame: int = 1


def _map_blit(
    materials: Sequence[Material],
    level: _MapLike,
    mem: Sequence[int],
    x: int,
    y: int,
    width: int,
    height: int,
    pitch: int,
    clip: Rect,
    op: _MapOp,
) -> None:
    """Apply op(src, dest_material, map_x, map_y) over the clipped area."""
    c = _clip(clip, x, y, width, height, pitch)
    if c is None:
        return
    data = level.data
    mats = level.materials
    for ly in range(c.height):
        src = c.offset + ly * pitch
        dst = (c.y + ly) * level.width + c.x
        for lx in range(c.width):
            n = op(mem[src + lx], mats[dst + lx], c.x + lx, c.y + ly)
            if n is not None:
                n &= 0xFF
                data[dst + lx] = n
                mats[dst + lx] = materials[n]


def _level_rect(level: _MapLike) -> Rect:
    return Rect(0, 0, level.width, level.height)


def blit_image_on_map(
    materials: Sequence[Material], level: _MapLike, mem: Sequence[int], x: int, y: int, width: int, height: int,
) -> None:
    """Draw an image onto the map; pixels over solid ground are shifted by 3."""

    def op(c: int, m: Material, mx: int, my: int) -> int | None:
        if not c:
            return None
        return c if m.dirt_back() else c + 3

    _map_blit(materials, level, mem, x, y, width, height, width, _level_rect(level), op)


def blit_stone(materials: Sequence[Material], level: _MapLike, p1: bool, mem: Sequence[int], x: int, y: int) -> None:
    """Draw a 16x16 stone onto the map."""
    if p1:
        def op(c: int, m: Material, mx: int, my: int) -> int | None:
            return c if (c and m.dirt_back()) else c + 3
    else:
        def op(c: int, m: Material, mx: int, my: int) -> int | None:
            return c if c else None

    _map_blit(materials, level, mem, x, y, 16, 16, 16, _level_rect(level), op)


def draw_dirt_effect(
    textures: Sequence[Texture],
    sprites: SpriteSet,
    materials: Sequence[Material],
    rand: RandFn,
    level: _MapLike,
    dirt_effect: int,
    x: int,
    y: int,
) -> None:
    """Apply a 16x16 dirt effect (add or remove dirt) centred by its mask."""
    if not 0 <= dirt_effect < 9:
        raise ValueError(f"dirt effect {dirt_effect} out of range")
    tex = textures[dirt_effect]
    t_frame = sprites.sprite_data(tex.s_frame + rand(tex.r_frame))
    m_frame = sprites.sprite_data(tex.m_frame)

    def tile(mx: int, my: int) -> int:
        return t_frame[((my & 15) << 4) + (mx & 15)]

    if tex.n_draw_back:
        def op(c: int, m: Material, mx: int, my: int) -> int | None:
            if c == 6:
                return tile(mx, my) if m.any_dirt() else None
            if c == 1:
                if m.dirt2():
                    return 2
                if m.dirt():
                    return 1
            return None
    else:
        def op(c: int, m: Material, mx: int, my: int) -> int | None:
            if not m.background():
                return None
            if c in (10, 6):
                return tile(mx, my)
            if c == 2:
                return 2
            if c == 1:
                return 1
            return None

    clip = Rect(0, 0, level.width, level.height - 1)
    _map_blit(materials, level, m_frame, x, y, 16, 16, 16, clip, op)


def correct_shadow(materials: Sequence[Material], level: _MapLike, rect: Rect) -> None:
    """Add or remove shadows inside rect after the map has changed."""
    rect = rect.intersect(Rect(0, 3, level.width - 3, level.height))
    data = level.data
    mats = level.materials
    w = level.width

    def put(idx: int, value: int) -> None:
        value &= 0xFF
        data[idx] = value
        mats[idx] = materials[value]

    for x in range(rect.x1, rect.x2):
        for y in range(rect.y1, rect.y2):
            idx = x + y * w
            pix = data[idx]
            caster = mats[(x + 3) + (y - 3) * w]
            if mats[idx].see_shadow() and caster.dirt_rock():
                put(idx, pix + 4)
            elif 164 <= pix <= 167 and not caster.dirt_rock():
                put(idx, pix - 4)