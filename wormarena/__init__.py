"""Engine pieces for a worm arena game: fixed-point math, palette graphics, levels, sound mixing and menus."""

__version__ = "0.1.0"