"""Tile constants for generated levels.

Integer values are part of the wire contract with renderers and clients, do not
renumber them.
"""
from enum import IntEnum


class Tile(IntEnum):
    EMPTY = 0
    WALL = 1
    FLOOR = 2
    SPAWN = 3  # logical marker only, spawns are returned as coordinates
    KEY_SPAWN = 4
    DOOR = 5
    EXIT = 6


WALL = Tile.WALL
FLOOR = Tile.FLOOR
DOOR = Tile.DOOR

# Single-character glyphs used by the ASCII renderer and CLI
GLYPHS = {
    Tile.EMPTY: " ",
    Tile.WALL: "#",
    Tile.FLOOR: ".",
    Tile.SPAWN: "S",
    Tile.KEY_SPAWN: "k",
    Tile.DOOR: "D",
    Tile.EXIT: "E",
}


def tile_to_glyph(tile: int) -> str:
    try:
        return GLYPHS[Tile(tile)]
    except ValueError:
        return "?"


__all__ = ["Tile", "WALL", "FLOOR", "DOOR", "GLYPHS", "tile_to_glyph"]
