"""The bitmap and palettes a game view is drawn with."""

from __future__ import annotations

from .bitmap import Bitmap, Rect
from .draw import fill
from .palette import Palette


class Renderer:
    """Owns a render target bitmap with its working and original palettes."""

    def __init__(self, x: int = 320, y: int = 200) -> None:
        self.pal = Palette()
        self.origpal = Palette()
        self.fade_value = 0
        self.render_res_x = x
        self.render_res_y = y
        self.bmp = Bitmap(x, y)

    def set_render_resolution(self, x: int, y: int) -> None:
        """Change the render resolution, reallocating the bitmap if needed."""
        self.render_res_x = x
        self.render_res_y = y
        if self.bmp.w != x or self.bmp.h != y or self.bmp.pitch != x:
            self.bmp = Bitmap(x, y)
        else:
            self.bmp.clip_rect = Rect(0, 0, x, y)

    def load_palette(self, palette: Palette) -> None:
        """Use palette as the original and the working palette."""
        self.origpal = palette.copy()
        self.pal = self.origpal.copy()

    def clear(self) -> None:
        fill(self.bmp, 0)