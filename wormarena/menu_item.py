"""A single line of a menu."""

from __future__ import annotations

from dataclasses import dataclass

from .bitmap import Bitmap
from .draw import draw_rounded_box
from .font import Font

SELECTED_COLOUR = 168


@dataclass(eq=False)
class MenuItem:
    """A menu entry with a label and an optional value shown beside it."""

    color: int
    dis_colour: int
    string: str
    id: int = -1
    has_value: bool = False
    value: str = ""
    visible: bool = True
    selectable: bool = True

    @staticmethod
    def space() -> MenuItem:
        """An empty, unselectable spacer line."""
        item = MenuItem(0, 0, "")
        item.selectable = False
        return item

    def draw(
        self,
        font: Font,
        scr: Bitmap,
        x: int,
        y: int,
        selected: bool,
        disabled: bool,
        centered: bool,
        value_offset_x: int,
    ) -> None:
        wid = font.get_dims(self.string).width
        value_wid = font.get_dims(self.value).width
        if centered:
            x -= wid >> 1
        value_x = x + value_offset_x - (value_wid >> 1)

        if selected:
            draw_rounded_box(scr, x, y, 0, 7, wid)
            if self.has_value:
                draw_rounded_box(scr, value_x, y, 0, 7, value_wid)
        else:
            font.draw_text(scr, self.string, x + 3, y + 2, 0)
            if self.has_value:
                font.draw_text(scr, self.value, value_x + 3, y + 2, 0)

        if disabled:
            colour = self.dis_colour
        elif selected:
            colour = SELECTED_COLOUR
        else:
            colour = self.color

        font.draw_text(scr, self.string, x + 2, y + 1, colour)
        if self.has_value:
            font.draw_text(scr, self.value, value_x + 2, y + 1, colour)