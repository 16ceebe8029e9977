"""Grid helpers shared by the carving algorithms, repairer and planner.

Grids are lists of rows, addressed ``grid[y][x]`` with the origin top-left.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, NamedTuple, Sequence

from .tiles import FLOOR, WALL, Tile, tile_to_glyph

Grid = List[List[Tile]]

ORTHOGONAL = ((1, 0), (-1, 0), (0, 1), (0, -1))


class Point(NamedTuple):
    x: int
    y: int

    def manhattan(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def to_dict(self):
        return {"x": self.x, "y": self.y}


def new_grid(width: int, height: int, fill: Tile = WALL) -> Grid:
    return [[fill for _ in range(width)] for _ in range(height)]


def copy_grid(grid: Sequence[Sequence[Tile]]) -> Grid:
    return [list(row) for row in grid]


def dimensions(grid: Sequence[Sequence[Tile]]):
    height = len(grid)
    return (len(grid[0]) if height else 0), height


def orthogonal_neighbors(x: int, y: int, width: int, height: int) -> Iterator[Point]:
    for dx, dy in ORTHOGONAL:
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height:
            yield Point(nx, ny)


def enforce_boundary_walls(grid: Grid) -> Grid:
    """Overwrite the outer ring with walls. Idempotent, returns the same grid."""
    width, height = dimensions(grid)
    for x in range(width):
        grid[0][x] = WALL
        grid[height - 1][x] = WALL
    for y in range(height):
        grid[y][0] = WALL
        grid[y][width - 1] = WALL
    return grid


def floor_tiles(grid: Sequence[Sequence[Tile]]) -> List[Point]:
    """All floor coordinates in scan order (row by row)."""
    return [Point(x, y) for y, row in enumerate(grid) for x, t in enumerate(row) if t == FLOOR]


def count_tiles(grid: Sequence[Sequence[Tile]], tile: Tile) -> int:
    return sum(1 for row in grid for t in row if t == tile)


def render_ascii(grid: Sequence[Sequence[int]], overlays: Iterable = ()) -> str:
    """Render a grid to text; ``overlays`` is an iterable of (points, glyph)."""
    rows = [[tile_to_glyph(t) for t in row] for row in grid]
    for points, glyph in overlays:
        for p in points:
            rows[p[1]][p[0]] = glyph
    return "\n".join("".join(r) for r in rows)


__all__ = [
    "Grid",
    "Point",
    "ORTHOGONAL",
    "new_grid",
    "copy_grid",
    "dimensions",
    "orthogonal_neighbors",
    "enforce_boundary_walls",
    "floor_tiles",
    "count_tiles",
    "render_ascii",
]
