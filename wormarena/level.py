"""The playing field: palette pixels with their materials."""

from __future__ import annotations

from typing import Callable, Sequence

from .bitmap import Bitmap, Rect, SpriteSet
from .mapblit import blit_stone
from .material import Material
from .palette import Palette
from .reader import ByteReader

RandFn = Callable[[int], int]

LEVEL_WIDTH = 504
LEVEL_HEIGHT = 350
_MASK32 = 0xFFFFFFFF


def _free(m: Material) -> bool:
    return m.background() or m.any_dirt()


class Level:
    """A level map; material_table maps each palette index to its material."""

    def __init__(self, material_table: Sequence[Material]) -> None:
        self.material_table = material_table
        self.width = 0
        self.height = 0
        self.data = bytearray()
        self.materials: list[Material] = []
        self.origpal = Palette()
        self.old_random_level = False
        self.old_level_file = ""
        self.zero_material = material_table[0]

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        n = width * height
        self.data = bytearray(self.data[:n]) + bytearray(max(0, n - len(self.data)))
        self.materials = self.materials[:n] + [Material()] * max(0, n - len(self.materials))

    def pixel(self, x: int, y: int) -> int:
        return self.data[x + y * self.width]

    def set_pixel(self, x: int, y: int, value: int) -> None:
        value &= 0xFF
        idx = x + y * self.width
        self.data[idx] = value
        self.materials[idx] = self.material_table[value]

    def mat(self, x: int, y: int) -> Material:
        return self.materials[x + y * self.width]

    def checked_pixel_wrap(self, x: int, y: int) -> int:
        idx = (x + y * self.width) & _MASK32
        return self.data[idx] if idx < len(self.data) else 0

    def checked_mat_wrap(self, x: int, y: int) -> Material:
        idx = (x + y * self.width) & _MASK32
        return self.materials[idx] if idx < len(self.materials) else self.zero_material

    def inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def rect(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def load(self, reader: ByteReader, exe_palette: Palette, load_powerlevel_palette: bool) -> bool:
        """Read a level file; a POWERLEVEL palette is used if allowed and present."""
        self.resize(LEVEL_WIDTH, LEVEL_HEIGHT)
        self.data = bytearray(reader.read(self.width * self.height))
        reset_palette = True

        if load_powerlevel_palette:
            tag = reader.try_read(10)
            if tag == b"POWERLEVEL":
                pal = Palette()
                pal.read(reader)
                self.origpal = pal.copy()
                reset_palette = False

        self.materials = [self.material_table[v] for v in self.data]

        if reset_palette:
            self.origpal = exe_palette.copy()
        return True

    def generate_dirt_pattern(self, rand: RandFn, sprites: SpriteSet) -> None:
        """Fill the level with random dirt texture and scattered stones."""
        self.resize(LEVEL_WIDTH, LEVEL_HEIGHT)
        width, height = self.width, self.height

        self.set_pixel(0, 0, rand(7) + 12)
        for y in range(1, height):
            self.set_pixel(0, y, ((rand(7) + 12) + self.pixel(0, y - 1)) >> 1)
        for x in range(1, width):
            self.set_pixel(x, 0, ((rand(7) + 12) + self.pixel(x - 1, 0)) >> 1)
        for y in range(1, height):
            for x in range(1, width):
                self.set_pixel(x, y, (self.pixel(x - 1, y) + self.pixel(x, y - 1) + rand(8) + 12) // 3)

        for _ in range(rand(100)):
            ox = rand(width) - 8
            oy = rand(height) - 8
            image = sprites.sprite_data(rand(4) + 69)
            for cy in range(16):
                my = cy + oy
                if my >= height:
                    break
                if my < 0:
                    continue
                for cx in range(16):
                    mx = cx + ox
                    if mx >= width:
                        break
                    if mx < 0:
                        continue
                    src = image[(cy << 4) + cx]
                    if src > 0:
                        pix = self.pixel(mx, my)
                        if 176 < pix < 180:
                            self.set_pixel(mx, my, (src + pix) // 2)
                        else:
                            self.set_pixel(mx, my, src)

        for _ in range(rand(15)):
            ox = rand(width) - 8
            oy = rand(height) - 8
            which = rand(4) + 56
            blit_stone(self.material_table, self, False, sprites.sprite_data(which), ox, oy)

    def make_shadow(self) -> None:
        """Cast shadows down-left of solid ground and mark the bottom row."""
        for x in range(self.width - 3):
            for y in range(3, self.height):
                if self.mat(x, y).see_shadow() and self.mat(x + 3, y - 3).dirt_rock():
                    self.set_pixel(x, y, self.pixel(x, y) + 4)

                if 12 <= self.pixel(x, y) <= 18 and self.mat(x + 3, y - 3).rock():
                    self.set_pixel(x, y, self.pixel(x, y) - 2)
                    if self.pixel(x, y) < 12:
                        self.set_pixel(x, y, 12)

        for x in range(self.width):
            if self.mat(x, self.height - 1).background():
                self.set_pixel(x, self.height - 1, 13)

    def select_spawn(self, rand: RandFn, w: int, h: int) -> tuple[int, int] | None:
        """Pick a random free w x h area resting on ground, or None."""
        width = self.width
        vruns = [0] * (width - w + 1)
        vdists = [0] * (width - w + 1)
        mats = self.materials
        found = 0
        selected: tuple[int, int] | None = None

        for y in range(self.height):
            hrun = 0
            filled = 0
            row = y * width
            for x in range(width):
                if _free(mats[row + x]):
                    hrun += 1
                else:
                    hrun = 0
                    filled += 1

                cx = x - (w - 1)
                if cx < 0:
                    continue

                if hrun >= w:
                    if vdists[cx] > 0:
                        vruns[cx] = 0
                        vdists[cx] = 0
                    vruns[cx] += 1
                else:
                    if vruns[cx] >= h and vdists[cx] <= 8 and filled > w // 4:
                        found += 1
                        if rand(found) < 1:
                            selected = (cx, y - h)
                    vdists[cx] += 1

                filled -= not _free(mats[row + cx])

        return selected if found > 0 else None

    def draw_miniature(self, dest: Bitmap, map_x: int, map_y: int, step: int) -> None:
        """Draw the level scaled down by step into dest at (map_x, map_y)."""
        my = step // 2
        map_end_y = map_y + (self.height + step // 2) // step
        map_end_x = map_x + (self.width + step // 2) // step
        for y in range(map_y, map_end_y):
            mx = step // 2
            for x in range(map_x, map_end_x):
                dest.put_pixel(x, y, self.checked_pixel_wrap(mx, my))
                mx += step
            my += step


def is_no_rock(level: Level, size: int, x: int, y: int) -> bool:
    """Whether the (size+1)-square at (x, y) holds no rock."""
    rect = Rect(x, y, x + size + 1, y + size + 1).intersect(level.rect())
    for yy in range(rect.y1, rect.y2):
        for xx in range(rect.x1, rect.x2):
            if level.mat(xx, yy).rock():
                return False
    return True