"""How menu items react to left/right, enter and refreshes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from .menu_item import MenuItem
from .mixer import NullSoundPlayer, SoundPlayer

if TYPE_CHECKING:
    from .menu import Menu

SOUND_MOVE_DOWN = 25
SOUND_MOVE_UP = 26
SOUND_SELECT = 27

_MASK32 = 0xFFFFFFFF

InputInteger = Callable[[int, int, int, int, int, int], Optional[int]]
EnterAction = Callable[["Menu", MenuItem], int]
UpdateAction = Callable[["Menu", MenuItem], None]


class ItemBehavior:
    """Default behaviour: runs the optional actions it was given, otherwise does nothing."""

    def __init__(
        self,
        enter_action: EnterAction | None = None,
        update_action: UpdateAction | None = None,
        handles_left_right: bool = True,
    ) -> None:
        self.enter_action = enter_action
        self.update_action = update_action
        self.handles_left_right = handles_left_right

    def on_left_right(self, menu: Menu, item: MenuItem, direction: int) -> bool:
        return self.handles_left_right

    def on_enter(self, menu: Menu, item: MenuItem) -> int:
        if self.enter_action is not None:
            return self.enter_action(menu, item)
        return -1

    def on_update(self, menu: Menu, item: MenuItem) -> None:
        if self.update_action is not None:
            self.update_action(menu, item)


class _BoundBehavior(ItemBehavior):
    """A behaviour editing the attribute attr of target."""

    def __init__(self, target: Any, attr: str, sounds: SoundPlayer | None) -> None:
        super().__init__()
        self.target = target
        self.attr = attr
        self.sounds = sounds if sounds is not None else NullSoundPlayer()

    @property
    def value(self) -> Any:
        return getattr(self.target, self.attr)

    @value.setter
    def value(self, new: Any) -> None:
        setattr(self.target, self.attr, new)

    def _direction_sound(self, direction: int) -> None:
        self.sounds.play(SOUND_MOVE_DOWN if direction > 0 else SOUND_MOVE_UP)


class BooleanSwitchBehavior(_BoundBehavior):
    """Toggles a boolean attribute."""

    def __init__(
        self,
        target: Any,
        attr: str,
        labels: Sequence[str] = ("OFF", "ON"),
        setter: Callable[[bool], None] | None = None,
        sounds: SoundPlayer | None = None,
    ) -> None:
        super().__init__(target, attr, sounds)
        self.labels = labels
        self.setter = setter

    def _set(self, new: bool) -> None:
        if self.setter is not None:
            self.setter(new)
        else:
            self.value = new

    def on_left_right(self, menu: Menu, item: MenuItem, direction: int) -> bool:
        self._direction_sound(direction)
        self._set(not self.value)
        self.on_update(menu, item)
        return False

    def on_enter(self, menu: Menu, item: MenuItem) -> int:
        self.sounds.play(SOUND_SELECT)
        self._set(not self.value)
        self.on_update(menu, item)
        return -1

    def on_update(self, menu: Menu, item: MenuItem) -> None:
        item.value = self.labels[int(bool(self.value))]
        item.has_value = True


class EnumBehavior(_BoundBehavior):
    """Cycles an unsigned attribute through minimum..maximum."""

    def __init__(
        self,
        target: Any,
        attr: str,
        minimum: int,
        maximum: int,
        broken_left_right: bool = False,
        sounds: SoundPlayer | None = None,
    ) -> None:
        super().__init__(target, attr, sounds)
        self.min_value = minimum
        self.max_value = maximum
        self.broken_left_right = broken_left_right

    def on_left_right(self, menu: Menu, item: MenuItem, direction: int) -> bool:
        if self.broken_left_right:
            return False
        self._direction_sound(direction)
        self.change(menu, item, direction)
        return False

    def on_enter(self, menu: Menu, item: MenuItem) -> int:
        self.sounds.play(SOUND_SELECT)
        self.change(menu, item, 1)
        return -1

    def change(self, menu: Menu, item: MenuItem, direction: int) -> None:
        """Step the value by direction, wrapping around the range."""
        span = (self.max_value - self.min_value + 1) & _MASK32
        if span == 0:
            raise ValueError("empty enumeration range")
        v = self.value
        new = (((v + direction + span - self.min_value) & _MASK32) % span + self.min_value) & _MASK32
        if new != v:
            self.value = new
            menu.update_items()

    def on_update(self, menu: Menu, item: MenuItem) -> None:
        item.value = str(self.value)
        item.has_value = True


class ArrayEnumBehavior(EnumBehavior):
    """An enumeration shown through a list of labels."""

    def __init__(
        self,
        target: Any,
        attr: str,
        labels: Sequence[str],
        broken_enter: bool = False,
        sounds: SoundPlayer | None = None,
    ) -> None:
        super().__init__(target, attr, 0, len(labels) - 1, broken_enter, sounds)
        self.labels = labels

    def on_update(self, menu: Menu, item: MenuItem) -> None:
        item.value = self.labels[self.value]
        item.has_value = True


class IntegerBehavior(_BoundBehavior):
    """Adjusts an integer attribute by steps, or by typed entry."""

    def __init__(
        self,
        target: Any,
        attr: str,
        minimum: int,
        maximum: int,
        step: int = 1,
        percentage: bool = False,
        sounds: SoundPlayer | None = None,
        cycle_counter: Callable[[], int] | None = None,
        input_integer: InputInteger | None = None,
    ) -> None:
        super().__init__(target, attr, sounds)
        self.min_value = minimum
        self.max_value = maximum
        self.step = step
        self.scroll_interval = 5
        self.percentage = percentage
        self.allow_entry = True
        self.cycle_counter = cycle_counter
        self.input_integer = input_integer

    def on_left_right(self, menu: Menu, item: MenuItem, direction: int) -> bool:
        cycles = self.cycle_counter() if self.cycle_counter is not None else 0
        if cycles % self.scroll_interval != 0:
            return True
        v = self.value
        new = v
        if (direction < 0 and new > self.min_value) or (direction > 0 and new < self.max_value):
            new += direction * self.step
        if new != v:
            self.value = new
            self.on_update(menu, item)
        return True

    def on_enter(self, menu: Menu, item: MenuItem) -> int:
        self.sounds.play(SOUND_SELECT)
        if not self.allow_entry:
            return -1
        pos = menu.item_position(item)
        if pos is not None:
            x, y = pos
            x += menu.value_offset_x
            digits = len(str(self.max_value)) if self.max_value > 0 else 1
            if self.input_integer is not None:
                new = self.input_integer(self.value, self.min_value, self.max_value, digits, x + 2, y)
                if new is not None:
                    self.value = new
            self.on_update(menu, item)
        return -1

    def on_update(self, menu: Menu, item: MenuItem) -> None:
        item.value = str(self.value)
        item.has_value = True
        if self.percentage:
            item.value += "%"