import pytest

from wormarena.palette import (
    WORM_COLOUR_INDEXES,
    Color,
    Palette,
    fade_value,
    light_up_value,
)
from wormarena.reader import ByteReader, ReadError


def _ramp():
    return Palette([Color(i % 64, (i * 3) % 64, (i * 7) % 64) for i in range(256)])


def test_fade_value_limits():
    assert fade_value(40, 32) == 40
    assert fade_value(40, 0) == 0
    assert fade_value(40, -5) == 0


def test_fade_value_rejects_out_of_range():
    with pytest.raises(ValueError):
        fade_value(64, 10)


def test_light_up_value_limits():
    assert light_up_value(17, 0) == 17
    assert light_up_value(17, 32) == 63
    assert light_up_value(63, 40) == 63


def test_fade_full_amount_is_noop():
    pal = _ramp()
    before = pal.copy()
    pal.fade(32)
    assert pal == before


def test_fade_zero_blacks_out():
    pal = _ramp()
    pal.fade(0)
    assert pal == Palette()


def test_light_up_full_is_white():
    pal = _ramp()
    pal.light_up(32)
    assert all(e == Color(63, 63, 63) for e in pal.entries)


def test_activate_shifts_components():
    pal = Palette()
    pal.entries[5] = Color(63, 1, 0)
    assert pal.activate()[5] == Color(252, 4, 0)


def test_rotate_from_by_one():
    src = _ramp()
    dest = src.copy()
    dest.rotate_from(src, 10, 13, 1)
    assert [dest.entries[i].r for i in range(10, 14)] == [13, 10, 11, 12]
    assert dest.entries[9] == src.entries[9]
    assert dest.entries[14] == src.entries[14]


def test_rotate_by_full_count_is_identity():
    src = _ramp()
    dest = Palette()
    dest.rotate_from(src, 20, 29, 10)
    assert dest.entries[20:30] == src.entries[20:30]


def test_rotate_copies_entries():
    src = _ramp()
    dest = Palette()
    dest.rotate_from(src, 0, 3, 2)
    dest.entries[0].r = 0
    dest.entries[0].g = 0
    assert src.entries[2] == _ramp().entries[2]


def test_read_masks_to_six_bits():
    pal = Palette()
    pal.read(ByteReader(bytes([0xFF]) * 768))
    assert all(e == Color(63, 63, 63) for e in pal.entries)


def test_read_short_data_raises():
    with pytest.raises(ReadError):
        Palette().read(ByteReader(bytes(10)))


def test_scale_add_full_scale_keeps_colour():
    pal = Palette()
    pal.scale_add(3, (10, 20, 30), 64, 0)
    assert pal.entries[3] == Color(10, 20, 30)


def test_scale_add_overflow_raises():
    with pytest.raises(ValueError):
        Palette().scale_add(0, (63, 63, 63), 64, 64 * 64)


def test_worm_colours_span_centre_is_exact():
    pal = Palette()
    pal.set_worm_colours_span(100, (50, 40, 30))
    assert pal.entries[100] == Color(50, 40, 30)
    assert pal.entries[99].r <= pal.entries[100].r
    assert pal.entries[98].r <= pal.entries[99].r


def test_set_worm_colour_copies_ramps():
    pal = Palette()
    pal.set_worm_colour(1, 100, (40, 30, 20))
    base = WORM_COLOUR_INDEXES[1]
    for j in range(6):
        assert pal.entries[base + j] == pal.entries[100 + (j % 3) - 1]
    for j in range(3):
        assert pal.entries[129 + 4 + j] == pal.entries[100 + j]


def test_copy_and_clear():
    pal = _ramp()
    dup = pal.copy()
    pal.clear()
    assert pal == Palette()
    assert dup == _ramp()


def test_wrong_entry_count_rejected():
    with pytest.raises(ValueError):
        Palette([Color()] * 10)