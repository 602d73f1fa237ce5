from wormarena.bitmap import Bitmap
from wormarena.draw import fill
from wormarena.font import Font, Glyph
from wormarena.menu_item import MenuItem


def _font():
    return Font([Glyph(bytearray([1] * 56), 7) for _ in range(250)])


def _bitmap():
    bmp = Bitmap(60, 40)
    fill(bmp, 5)
    return bmp


def test_space_is_unselectable_and_empty():
    item = MenuItem.space()
    assert item.selectable is False
    assert item.string == ""
    assert item.visible is True


def test_defaults():
    item = MenuItem(10, 7, "PLAY")
    assert item.id == -1
    assert item.has_value is False
    assert item.selectable is True


def test_unselected_draws_text_and_shadow():
    bmp = _bitmap()
    MenuItem(50, 7, "A").draw(_font(), bmp, 10, 10, False, False, False, 0)
    assert bmp.get_pixel(12, 11) == 50
    assert bmp.get_pixel(19, 18) == 0
    assert bmp.get_pixel(10, 10) == 5


def test_selected_draws_box_and_highlight():
    bmp = _bitmap()
    MenuItem(50, 7, "A").draw(_font(), bmp, 10, 10, True, False, False, 0)
    assert bmp.get_pixel(12, 11) == 168
    assert bmp.get_pixel(10, 11) == 0


def test_disabled_uses_disabled_colour():
    bmp = _bitmap()
    MenuItem(50, 9, "A").draw(_font(), bmp, 10, 10, True, True, False, 0)
    assert bmp.get_pixel(12, 11) == 9


def test_centered_shifts_left_by_half_width():
    bmp = _bitmap()
    MenuItem(50, 7, "A").draw(_font(), bmp, 20, 10, False, False, True, 0)
    assert bmp.get_pixel(20 - 3 + 2, 11) == 50
    assert bmp.get_pixel(20 - 3 + 1, 11) == 5


def test_value_drawn_at_offset():
    bmp = _bitmap()
    item = MenuItem(50, 7, "A")
    item.has_value = True
    item.value = "B"
    item.draw(_font(), bmp, 0, 10, False, False, False, 30)
    assert bmp.get_pixel(30 - 3 + 2, 11) == 50