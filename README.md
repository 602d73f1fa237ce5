# wormarena

Engine pieces for a two-player worm arena game, in pure Python with no
third-party dependencies. Graphics work on 8-bit palette indices and positions
on 16.16 fixed-point integers, so results are the same from run to run.

## Modules

- `wormarena.fixedmath`: `itof` and `ftoi` for 16.16 fixed point, the integer
  square root `isqrt32`, `vector_length`, `distance_to`, and `cos_sin_table()`,
  which returns 128 `(x, y)` direction vectors in fixed point.
- `wormarena.material`: `MaterialFlag` and the frozen `Material`, with tests
  such as `dirt()`, `rock()`, `background()`, `see_shadow()`, `dirt_rock()`,
  `any_dirt()`, `dirt_back()` and `worm()`.
- `wormarena.reader`: `ByteReader` over a block of bytes (`get`, `read`,
  `try_read`, `seek`, `tell`, `skip`); reading or seeking past the end raises
  `ReadError`.
- `wormarena.keys`: `dos_key_for_scancode` and `scancode_for_dos_key` map
  between scancode names such as `"ESCAPE"` and DOS key numbers (unknown names
  give 89); `dos_key_for_event`, `joy_button_to_ex_key`, `is_extended_key`.
- `wormarena.bitmap`: `Rect` (half-open), `Bitmap` (8-bit pixels with a
  clipping rectangle), `Sprite` and `SpriteSet`.
- `wormarena.palette`: `Color` and the 256-entry 6-bit `Palette` with
  `fade`, `light_up`, `rotate_from`, `read`, `activate` (expands to 8-bit
  components) and the worm colour ramps `set_worm_colours_span` /
  `set_worm_colour`.
- `wormarena.mixer`: `Sound`, an 8-channel `Mixer` of signed 16-bit mono
  samples with looping and per-channel volume, and the players
  `MixerSoundPlayer` and `NullSoundPlayer`.
- `wormarena.draw`: `fill_rect`, `fill`, `draw_bar`, `vline`, rounded and
  dashed boxes, transparent, checkered, masked and fire-cone blits,
  `line_points` and the line drawers built on it (`draw_line`,
  `draw_ninjarope`, `draw_laser_sight`, `draw_shadow_line`), `draw_graph`,
  `Heatmap` with `draw_heatmap`, `scale_draw`, `scale2x`,
  `prepare_palette_bgra` and `fit_screen`.
- `wormarena.renderer`: `Renderer`, holding a `Bitmap` and a working and an
  original `Palette`.
- `wormarena.mapblit`: drawing onto a level while keeping its materials in
  step: `blit_image_on_map`, `blit_stone`, `draw_dirt_effect` (with `Texture`)
  and `correct_shadow`.
- `wormarena.level`: `Level` (504x350 when loaded or generated) with `load`
  (including an optional embedded `POWERLEVEL` palette),
  `generate_dirt_pattern`, `make_shadow`, `select_spawn`, `draw_miniature`,
  and the helper `is_no_rock`.
- `wormarena.font`: `Glyph` and `Font` for 7x8 bitmap text; `get_dims` returns
  the width and height of a text, and there are centred, shadowed and framed
  variants of `draw_text`.
- `wormarena.menu_item`, `wormarena.behaviors`, `wormarena.menu`: `MenuItem`,
  the item behaviours `ItemBehavior`, `BooleanSwitchBehavior`, `EnumBehavior`,
  `ArrayEnumBehavior` and `IntegerBehavior`, which edit an attribute of an
  object you give them, and the scrolling `Menu` with wrap-around movement,
  paging, hidden items and type-to-search through `on_keys`.

Functions that need randomness take a callable `rand(n)` returning an integer
in `0..n-1`.

## Installing

```
pip install .
```

## Examples

```python
from wormarena.bitmap import Bitmap
from wormarena.draw import fill_rect, draw_line
from wormarena.fixedmath import itof, ftoi, vector_length

scr = Bitmap(320, 200)
fill_rect(scr, 10, 10, 50, 20, 7)
draw_line(scr, 0, 0, 100, 40, 168)

assert ftoi(itof(12)) == 12
assert vector_length(3, 4) == 5
```

```python
from wormarena.mixer import Mixer, Sound

mixer = Mixer()
mixer.add(Sound([1000] * 4), mixer.now(), "hit")
assert mixer.mix(8) == [1000] * 4 + [0] * 4
assert not mixer.is_playing("hit")
```

```python
from wormarena.menu import Menu
from wormarena.menu_item import MenuItem

menu = Menu()
menu.add_item(MenuItem(48, 7, "NEW GAME", id=1))
menu.add_item(MenuItem(48, 7, "SETTINGS", id=2))
menu.move_to_first_visible()
menu.movement(1)
assert menu.selected_id() == 2
menu.on_keys(["n"], now=0)
assert menu.selected_id() == 1
```

## What it does not do

The package holds the building blocks only. It has no game loop, worms,
weapons, bonuses or game modes, no full random level generator beyond
`Level.generate_dirt_pattern`, no loading of game data or settings files, and
no window, keyboard or audio device output: bitmaps, palettes and mixed
samples are returned as plain Python data for you to display or play. There is
no command to run.

## Running the tests

```
pip install .[test]
pytest
```