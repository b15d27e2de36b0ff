"""Core data handling for a retro 2D game engine: INI files, data packs, trig tables, palettes, input, players, haptics and mods."""

__version__ = "1.3.2"

__all__ = [
    "controls",
    "haptics",
    "ini",
    "mods",
    "palette",
    "player",
    "reader",
    "trig",
]