import pytest

from wormarena.bitmap import Bitmap, SpriteSet
from wormarena.draw import (
    Heatmap,
    blit_fire_cone,
    blit_image,
    blit_image_no_key_colour,
    blit_image_r,
    blit_image_trans,
    blit_shadow_image,
    draw_bar,
    draw_dashed_line_box,
    draw_graph,
    draw_heatmap,
    draw_laser_sight,
    draw_line,
    draw_ninjarope,
    draw_rounded_box,
    draw_rounded_line_box,
    draw_shadow_line,
    fill,
    fill_rect,
    fit_screen,
    line_points,
    prepare_palette_bgra,
    scale2x,
    scale_draw,
    vline,
)
from wormarena.material import Material, MaterialFlag
from wormarena.palette import Color


def _set_pixels(bmp):
    return {(x, y) for y in range(bmp.h) for x in range(bmp.w) if bmp.get_pixel(x, y)}


def _sprite(w, h, values):
    ss = SpriteSet()
    ss.allocate(w, h, 1)
    ss.sprite_data(0)[:] = bytes(values)
    return ss.sprite(0)


def test_fill_sets_every_pixel():
    bmp = Bitmap(5, 4)
    fill(bmp, 9)
    assert set(bmp.pixels) == {9}


def test_fill_rect_is_clipped():
    bmp = Bitmap(10, 10)
    fill_rect(bmp, -3, -3, 5, 5, 7)
    assert _set_pixels(bmp) == {(x, y) for x in range(-3 + 5) for y in range(-3 + 5)}


def test_draw_bar_default_height_and_bounds():
    bmp = Bitmap(6, 6)
    draw_bar(bmp, 1, 2, 3, 4)
    assert _set_pixels(bmp) == {(x, y) for x in range(1, 4) for y in (2, 3)}
    with pytest.raises(IndexError):
        draw_bar(bmp, 4, 5, 3, 4, 2)


def test_vline_clips_vertically():
    bmp = Bitmap(4, 4)
    vline(bmp, 2, -5, 10, 3)
    assert _set_pixels(bmp) == {(2, y) for y in range(4)}
    vline(bmp, 4, 0, 4, 3)
    assert len(_set_pixels(bmp)) == bmp.h


def test_rounded_box_leaves_corners():
    bmp = Bitmap(20, 20)
    draw_rounded_box(bmp, 2, 2, 5, 7, 4)
    assert bmp.get_pixel(2, 2) == 0
    assert bmp.get_pixel(3, 2) == 5
    assert bmp.get_pixel(2, 3) == 5


def test_rounded_line_box_is_hollow():
    bmp = Bitmap(20, 20)
    draw_rounded_line_box(bmp, 1, 1, 6, 5, 5)
    assert bmp.get_pixel(3, 3) == 0
    assert bmp.get_pixel(1, 1) == 0
    assert bmp.get_pixel(2, 1) == 6
    assert bmp.get_pixel(1, 2) == 6


def test_dashed_box_only_on_perimeter():
    bmp = Bitmap(20, 20)
    draw_dashed_line_box(bmp, 2, 2, 8, 9, 1, 2, 6, 5, 0)
    drawn = _set_pixels(bmp)
    assert drawn
    for x, y in drawn:
        assert x in (2, 7) or y in (2, 6)
    assert {bmp.get_pixel(x, y) for x, y in drawn} <= {8, 9}


def test_blit_image_skips_zero_and_clips():
    spr = _sprite(3, 3, [0, 1, 2, 3, 4, 5, 6, 7, 8])
    bmp = Bitmap(5, 5)
    fill(bmp, 50)
    blit_image(bmp, spr, -1, 0)
    for y in range(3):
        assert bmp.get_pixel(0, y) == spr.at(1, y)
        assert bmp.get_pixel(1, y) == spr.at(2, y)
        assert bmp.get_pixel(2, y) == 50
    blit_image(bmp, spr, 2, 2)
    assert bmp.get_pixel(2, 2) == 50


def test_blit_image_no_key_colour_copies_zero():
    bmp = Bitmap(4, 4)
    fill(bmp, 50)
    blit_image_no_key_colour(bmp, [0, 3, 0, 4], 1, 1, 2, 2)
    assert bmp.get_pixel(1, 1) == 0
    assert bmp.get_pixel(2, 1) == 3
    assert bmp.get_pixel(2, 2) == 4
    assert bmp.get_pixel(0, 0) == 50


def test_blit_image_trans_checkerboard():
    spr = _sprite(4, 4, [5] * 16)
    even = Bitmap(4, 4)
    odd = Bitmap(4, 4)
    blit_image_trans(even, spr, 0, 0, 0)
    blit_image_trans(odd, spr, 0, 0, 1)
    assert _set_pixels(even) == {(x, y) for x in range(4) for y in range(4) if (x ^ y) & 1}
    assert _set_pixels(even).isdisjoint(_set_pixels(odd))
    assert len(_set_pixels(even) | _set_pixels(odd)) == 16


def test_blit_image_r_only_over_range():
    bmp = Bitmap(4, 1)
    bmp.pixels[:] = bytes([159, 160, 167, 168])
    blit_image_r(bmp, [9, 9, 9, 9], 0, 0, 4, 1)
    assert list(bmp.pixels) == [159, 9, 9, 168]


def test_blit_fire_cone_thresholds():
    mem = [0] * 256
    mem[0] = 117
    mem[1] = 116
    bmp = Bitmap(16, 16)
    fill(bmp, 50)
    blit_fire_cone(bmp, 0, mem, 0, 0)
    assert bmp.get_pixel(0, 0) == 117 - 5
    assert bmp.get_pixel(1, 0) == 50
    other = Bitmap(16, 16)
    blit_fire_cone(other, 3, mem, 0, 0)
    assert other.get_pixel(1, 0) == 116


def test_blit_shadow_image_uses_materials():
    materials = [Material(MaterialFlag.SEE_SHADOW) if i == 10 else Material() for i in range(256)]
    bmp = Bitmap(2, 1)
    bmp.pixels[:] = bytes([10, 11])
    blit_shadow_image(materials, bmp, [1, 1], 0, 0, 2, 1)
    assert list(bmp.pixels) == [10 + 4, 11]


def test_line_points_properties():
    pts = list(line_points(0, 0, 5, 2))
    assert pts[-1] == (5, 2)
    assert (0, 0) not in pts
    assert len(pts) == 5
    prev = (0, 0)
    for p in pts:
        assert max(abs(p[0] - prev[0]), abs(p[1] - prev[1])) == 1
        prev = p
    assert list(line_points(3, 3, 3, 3)) == []
    assert list(line_points(0, 0, 0, -3)) == [(0, -1), (0, -2), (0, -3)]


def test_draw_line_matches_points():
    bmp = Bitmap(10, 10)
    draw_line(bmp, 1, 1, 8, 4, 6)
    assert _set_pixels(bmp) == set(line_points(1, 1, 8, 4))


def test_draw_ninjarope_cycles_colours():
    bmp = Bitmap(12, 1)
    draw_ninjarope(bmp, 0, 0, 10, 0, 100, 104)
    assert bmp.get_pixel(1, 0) == 100 + 1
    assert all(100 <= bmp.get_pixel(x, 0) < 104 for x in range(1, 11))
    assert bmp.get_pixel(0, 0) == 0


def test_draw_laser_sight_with_fixed_rand():
    bmp = Bitmap(8, 1)
    draw_laser_sight(bmp, lambda n: 0, 0, 0, 5, 0)
    assert [bmp.get_pixel(x, 0) for x in range(1, 6)] == [83] * 5
    quiet = Bitmap(8, 1)
    draw_laser_sight(quiet, lambda n: 1, 0, 0, 5, 0)
    assert _set_pixels(quiet) == set()


def test_draw_shadow_line():
    materials = [Material(MaterialFlag.SEE_SHADOW) if i == 20 else Material() for i in range(256)]
    bmp = Bitmap(5, 1)
    bmp.pixels[:] = bytes([20, 20, 21, 20, 20])
    draw_shadow_line(materials, bmp, 0, 0, 4, 0)
    assert list(bmp.pixels) == [20, 24, 21, 24, 24]


def test_draw_graph_columns_and_frame():
    bmp = Bitmap(20, 20)
    draw_graph(bmp, [3.0, -2.0], 10, 2, 2, 5, 6, False)
    base = 2 + 10
    assert bmp.get_pixel(2, base - 1) == 5
    assert bmp.get_pixel(3, base) == 6
    assert bmp.get_pixel(3, base + 1) == 6
    assert bmp.get_pixel(2, 3) == 7


def test_heatmap_inc_clamps():
    hm = Heatmap(4, 4, 40, 40)
    hm.inc(15, 25)
    hm.inc(-100, 1000, 3)
    assert hm.map[2 * 4 + 1] == 1
    assert hm.map[3 * 4 + 0] == 3
    assert sum(hm.map) == 4


def test_heatmap_inc_area_weights():
    hm = Heatmap(5, 5, 50, 50)
    hm.inc_area(20, 20)
    assert hm.map[2 * 5 + 2] == 16
    assert hm.map[0] == 0
    for y in range(5):
        for x in range(5):
            assert hm.map[y * 5 + x] == hm.map[x * 5 + y]


def test_draw_heatmap_maps_into_colour_range():
    hm = Heatmap(2, 2, 2, 2)
    hm.map[:] = [0, 1, 1, 5]
    bmp = Bitmap(2, 2)
    draw_heatmap(bmp, 0, 0, hm)
    assert bmp.get_pixel(0, 0) == 0
    assert bmp.get_pixel(1, 0) == bmp.get_pixel(0, 1) == 104
    assert 104 < bmp.get_pixel(1, 1) <= 119


def test_scale_draw_magnification():
    pal32 = [i * 10 for i in range(256)]
    src = [0, 1, 2, 3]
    assert scale_draw(src, 4, 1, 4, 1, pal32) == [[0, 10, 20, 30]]
    rows = scale_draw(src, 4, 1, 4, 2, pal32)
    assert rows == [[0, 0, 10, 10, 20, 20, 30, 30]] * 2
    assert scale_draw(src, 4, 1, 4, 0, pal32) == []


def test_scale2x_uniform_and_border():
    out = scale2x([5] * 9, 3, 3)
    assert len(out) == 6 * 6
    assert out[0] == 0
    assert all(out[y * 6 + x] == 5 for y in (2, 3) for x in (2, 3))
    with pytest.raises(ValueError):
        scale2x([1], 1, 1)


def test_prepare_palette_bgra():
    assert prepare_palette_bgra([Color(1, 2, 3), Color()]) == [(1 << 16) | (2 << 8) | 3, 0]


def test_fit_screen():
    assert fit_screen(640, 400, 320, 200) == (2, 0, 0)
    mag, ox, oy = fit_screen(1000, 700, 320, 200)
    assert 320 * mag <= 1000 < 320 * (mag + 1) or 200 * (mag + 1) > 700
    assert ox == 1000 // 2 - 320 * mag // 2
    assert oy == 700 // 2 - 200 * mag // 2
    with pytest.raises(ValueError):
        fit_screen(10, 10, 0, 5)