"""Scrollable menus of items with keyboard search."""

from __future__ import annotations

from typing import Callable, Iterable

from .behaviors import ItemBehavior
from .bitmap import Bitmap
from .draw import fill_rect
from .font import Font
from .menu_item import MenuItem

SEARCH_TIMEOUT_MS = 1500
_MASK64 = 0xFFFFFFFFFFFFFFFF
_ASCII_UPPER = str.maketrans("abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ")

ItemOverlay = Callable[[Bitmap, MenuItem, int, int, bool, bool], None]


def _upper(s: str) -> str:
    return s.translate(_ASCII_UPPER)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


class Menu:
    """A list of items of which a window of height lines is shown."""

    def __init__(
        self,
        x: int = 0,
        y: int = 0,
        centered: bool = False,
        item_overlay: ItemOverlay | None = None,
        update_hook: Callable[[], None] | None = None,
    ) -> None:
        self.item_height = 8
        self.centered = centered
        self._selection = 0
        self.value_offset_x = 0
        self.x = x
        self.y = y
        self.height = 15
        self.top_item = 0
        self.bottom_item = 0
        self.visible_item_count = 0
        self.search_time = 0
        self.search_prefix = ""
        self.items: list[MenuItem] = []
        self.item_overlay = item_overlay
        self.update_hook = update_hook

    def get_item_behavior(self, item: MenuItem) -> ItemBehavior:
        return ItemBehavior()

    def draw_item_overlay(self, scr: Bitmap, item: MenuItem, x: int, y: int, selected: bool, disabled: bool) -> None:
        if self.item_overlay is not None:
            self.item_overlay(scr, item, x, y, selected, disabled)

    def on_update(self) -> None:
        if self.update_hook is not None:
            self.update_hook()

    def on_left_right(self, direction: int) -> bool:
        s = self.selected()
        if s is None:
            return False
        return self.get_item_behavior(s).on_left_right(self, s, direction)

    def on_enter(self) -> int:
        s = self.selected()
        if s is None:
            return 0
        return self.get_item_behavior(s).on_enter(self, s)

    def on_keys(self, keys: Iterable[str], now: int, contains: bool = False) -> None:
        """Jump to items matching typed characters; tab finds the next match."""
        for key in keys:
            is_tab = key == "\t"
            if not (is_tab or 32 <= ord(key) <= 127):
                continue
            if not is_tab and ((now - self.search_time) & _MASK64) > SEARCH_TIMEOUT_MS:
                self.search_prefix = ""

            while True:
                was_empty = not self.search_prefix
                new_prefix = self.search_prefix if is_tab else self.search_prefix + key
                self.search_time = now
                wanted = _upper(new_prefix)
                found = False
                count = len(self.items)

                for offs in range(1 if is_tab else 0, count):
                    i = (self._selection + offs) % count
                    item = self.items[i]
                    if item.visible and len(item.string) >= len(new_prefix):
                        text = _upper(item.string)
                        hit = wanted in text if contains else text.startswith(wanted)
                        if hit:
                            found = True
                            self.move_to(i)
                            break

                if found:
                    self.search_prefix = new_prefix
                    break
                self.search_prefix = ""
                if was_empty:
                    break

    def update_items(self) -> None:
        for item in self.items:
            self.get_item_behavior(item).on_update(self, item)
        self.on_update()

    def draw(
        self, font: Font, scr: Bitmap, disabled: bool, x: int = -1, show_disabled_selection: bool = False,
    ) -> None:
        items_left = self.height
        cur_y = self.y
        if x < 0:
            x = self.x

        c = self.item_from_visible_index(self.top_item)
        while items_left > 0 and c < len(self.items):
            item = self.items[c]
            if item.visible:
                items_left -= 1
                selected = c == self._selection and (not disabled or show_disabled_selection)
                item.draw(font, scr, x, cur_y, selected, disabled, self.centered, self.value_offset_x)
                self.draw_item_overlay(scr, item, x, cur_y, selected, disabled)
                cur_y += self.item_height
            c += 1

        if self.visible_item_count > self.height:
            y = self.y
            menu_height = self.height * self.item_height + 1
            font.draw_char(scr, 22, x - 6, y + 2, 0)
            font.draw_char(scr, 22, x - 7, y + 1, 50)
            font.draw_char(scr, 23, x - 6, y + menu_height - 7, 0)
            font.draw_char(scr, 23, x - 7, y + menu_height - 8, 50)

            bar_height = menu_height - 17
            tab_height = _trunc_div(self.height * bar_height, self.visible_item_count)
            tab_height = max(min(tab_height, bar_height), 0)
            tab_y = y + _trunc_div(self.top_item * bar_height, self.visible_item_count)

            fill_rect(scr, x - 7, tab_y + 9, 7, tab_height, 0)
            fill_rect(scr, x - 8, tab_y + 8, 7, tab_height, 7)

    def place(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def is_selection_valid(self) -> bool:
        return 0 <= self._selection < len(self.items)

    def move_to_first_visible(self) -> None:
        self.move_to(self.first_visible_from(0))

    def movement(self, direction: int) -> None:
        """Move to the next or previous selectable item, wrapping around."""
        n = len(self.items)
        sel = self._selection
        if direction < 0:
            order = list(range(sel - 1, -1, -1)) + list(range(n - 1, sel, -1))
        elif direction > 0:
            order = list(range(sel + 1, n)) + list(range(0, sel))
        else:
            return
        for i in order:
            if self.items[i].visible and self.items[i].selectable:
                self.move_to(i)
                return

    def movement_page(self, direction: int) -> None:
        sel = self.visible_item_index(self._selection)
        offset = direction * (self.height // 2)
        sel += offset
        self.set_top(self.top_item + offset)
        sel = max(sel, 0)
        sel = min(sel, self.visible_item_count - 1)
        self.move_to(self.item_from_visible_index(sel))

    def add_item(self, item: MenuItem, pos: int | None = None) -> int:
        """Add item (at pos if given); returns the item count before adding."""
        idx = len(self.items)
        if pos is None:
            self.items.append(item)
        else:
            self.items.insert(pos, item)
        if item.visible:
            self.visible_item_count += 1
        return idx

    def clear(self) -> None:
        self.items.clear()
        self.visible_item_count = 0
        self.set_top(0)

    def item_position(self, item: MenuItem) -> tuple[int, int] | None:
        """Screen position of item, or None if it is not in view."""
        index = next((i for i, it in enumerate(self.items) if it is item), None)
        if index is None or not self.is_in_view(index):
            return None
        vis = self.visible_item_index(index)
        return self.x, self.y + (vis - self.top_item) * self.item_height

    def visible_item_index(self, item: int) -> int:
        return sum(1 for i, it in enumerate(self.items) if it.visible and i < item)

    def item_from_visible_index(self, idx: int) -> int:
        for i, it in enumerate(self.items):
            if not it.visible:
                continue
            if idx == 0:
                return i
            idx -= 1
        return len(self.items)

    def set_height(self, height: int) -> None:
        self.height = height
        self.set_top(self.top_item)

    def selection(self) -> int:
        return self._selection

    def selected(self) -> MenuItem | None:
        return self.items[self._selection] if self.is_selection_valid() else None

    def selected_id(self) -> int:
        s = self.selected()
        return s.id if s is not None else -1

    def index_from_id(self, item_id: int) -> int:
        return next((i for i, it in enumerate(self.items) if it.id == item_id), -1)

    def item_from_id(self, item_id: int) -> MenuItem | None:
        return next((it for it in self.items if it.id == item_id), None)

    def set_visibility(self, item_id: int, state: bool) -> None:
        item = self.index_from_id(item_id)
        if item < 0:
            raise KeyError(item_id)
        current = self.items[item].visible
        if current and not state:
            self.visible_item_count -= 1
        elif not current and state:
            self.visible_item_count += 1

        real_top = self.item_from_visible_index(self.top_item)
        self.items[item].visible = state
        self.set_top(self.visible_item_index(real_top))
        self.ensure_in_view(self._selection)

    def first_visible_from(self, item: int) -> int:
        if item < 0:
            return len(self.items)
        for i in range(item, len(self.items)):
            if self.items[i].visible and self.items[i].selectable:
                return i
        return len(self.items)

    def last_visible_from(self, item: int) -> int:
        for i in range(min(item, len(self.items)) - 1, -1, -1):
            if self.items[i].visible and self.items[i].selectable:
                return i + 1
        return 0

    def move_to(self, new_selection: int) -> None:
        new_selection = max(new_selection, 0)
        new_selection = min(new_selection, len(self.items) - 1)
        self._selection = self.first_visible_from(new_selection)
        self.ensure_in_view(self._selection)

    def move_to_id(self, item_id: int) -> None:
        self.move_to(self.index_from_id(item_id))

    def is_in_view(self, item: int) -> bool:
        vis = self.visible_item_index(item)
        return self.top_item <= vis < self.bottom_item

    def ensure_in_view(self, item: int) -> None:
        if item < 0 or item >= len(self.items) or not self.items[item].visible:
            return
        vis = self.visible_item_index(item)
        if vis < self.top_item:
            self.set_top(vis)
        elif vis >= self.bottom_item:
            self.set_bottom(vis + 1)

    def set_bottom(self, new_bottom: int) -> None:
        self.set_top(new_bottom - self.height)

    def set_top(self, new_top: int) -> None:
        new_top = min(new_top, self.visible_item_count - self.height)
        new_top = max(new_top, 0)
        self.top_item = new_top
        self.bottom_item = min(self.top_item + self.height, self.visible_item_count)

    def scroll(self, amount: int) -> None:
        self.set_top(self.top_item + amount)