"""Carving strategies.

Every strategy has the signature ``(width, height, options, rng) -> Carved``
and only ever writes WALL or FLOOR. None of them is required to leave a wall
frame or a connected floor; boundary enforcement and connectivity repair run
afterwards in the pipeline.

Strategies:
    * recursive backtracking: depth-first spanning tree on the odd lattice,
      then rectangular rooms stamped on top.
    * cellular automata: random fill at ``density`` followed by ``iterations``
      synchronous smoothing passes.
    * binary tree: one pass over the odd lattice, each cell opens north or west.
    * perlin caves: three octaves of value noise over a trigonometric hash.
      The ``density`` share of cells with the highest noise become walls
      before three smoothing passes, so density is an exact fill ratio.
"""
from __future__ import annotations

import math
from typing import Callable, Dict, List, NamedTuple

from .config import Algorithm, GenerationOptions
from .grid import Grid, Point, new_grid
from .rng import RandomSource
from .rooms import Room, inject_rooms
from .tiles import FLOOR, WALL

# Lattice steps for the depth-first carve: north, east, south, west
_LATTICE_STEPS = ((0, -2), (2, 0), (0, 2), (-2, 0))

SMOOTHING_WALL_THRESHOLD = 5
CAVE_SMOOTHING_PASSES = 3

# (frequency, weight) octaves for the cave noise
NOISE_OCTAVES = ((0.1, 1.0), (0.05, 0.5), (0.2, 0.25))
_NOISE_WEIGHT = sum(w for _, w in NOISE_OCTAVES)
# Large seeds would swamp the sample offsets in the sin() argument
NOISE_SEED_MODULUS = 1 << 16
NOISE_OCTAVE_SEED_STEP = 1013


class Carved(NamedTuple):
    grid: Grid
    rooms: List[Room]


def carve_recursive_backtracking(width: int, height: int, options: GenerationOptions, rng: RandomSource) -> Carved:
    grid = new_grid(width, height, WALL)
    visited = [[False] * width for _ in range(height)]
    start = Point(1, 1)
    grid[start.y][start.x] = FLOOR
    visited[start.y][start.x] = True
    stack = [start]
    while stack:
        cx, cy = stack[-1]
        neighbors = []
        for dx, dy in _LATTICE_STEPS:
            nx, ny = cx + dx, cy + dy
            if 0 < nx < width - 1 and 0 < ny < height - 1 and not visited[ny][nx]:
                neighbors.append(Point(nx, ny))
        if not neighbors:
            stack.pop()
            continue
        nxt = rng.choice(neighbors)
        grid[(cy + nxt.y) // 2][(cx + nxt.x) // 2] = FLOOR
        grid[nxt.y][nxt.x] = FLOOR
        visited[nxt.y][nxt.x] = True
        stack.append(nxt)
    rooms = inject_rooms(grid, rng, options.min_room_size, options.max_room_size, options.room_count)
    return Carved(grid, rooms)


def carve_cellular_automata(width: int, height: int, options: GenerationOptions, rng: RandomSource) -> Carved:
    density = options.resolved_density()
    grid = [[WALL if rng.next() < density else FLOOR for _ in range(width)] for _ in range(height)]
    for _ in range(options.iterations):
        grid = smooth(grid)
    return Carved(grid, [])


def carve_binary_tree(width: int, height: int, options: GenerationOptions, rng: RandomSource) -> Carved:
    grid = new_grid(width, height, WALL)
    for y in range(1, height - 1, 2):
        for x in range(1, width - 1, 2):
            grid[y][x] = FLOOR
            directions = []
            if y > 1:
                directions.append((0, -1))
            if x > 1:
                directions.append((-1, 0))
            if directions:
                dx, dy = rng.choice(directions)
                grid[y + dy][x + dx] = FLOOR
    return Carved(grid, [])


def carve_perlin_caves(width: int, height: int, options: GenerationOptions, rng: RandomSource) -> Carved:
    # Noise is a pure function of (x, y, seed); the rng stream is left untouched.
    field = noise_field(width, height, rng.seed % NOISE_SEED_MODULUS)
    grid = threshold_by_rank(field, options.resolved_density())
    for _ in range(CAVE_SMOOTHING_PASSES):
        grid = smooth(grid)
    return Carved(grid, [])


def hash_noise(u: float, v: float, seed: int) -> float:
    """Reproducible pseudo-noise in [0, 1) for a sample point."""
    n = math.sin(u * 12.9898 + v * 78.233 + seed) * 43758.5453
    return n - math.floor(n)


def _fade(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def value_noise(u: float, v: float, seed: int) -> float:
    """Hash values at the integer lattice corners around (u, v), blended smoothly.

    Equals ``hash_noise`` exactly on lattice points, so nearby samples are
    correlated and thresholding yields blobs rather than speckle.
    """
    x0 = math.floor(u)
    y0 = math.floor(v)
    tx = _fade(u - x0)
    ty = _fade(v - y0)
    top = _lerp(hash_noise(x0, y0, seed), hash_noise(x0 + 1, y0, seed), tx)
    bottom = _lerp(hash_noise(x0, y0 + 1, seed), hash_noise(x0 + 1, y0 + 1, seed), tx)
    return _lerp(top, bottom, ty)


def noise_field(width: int, height: int, seed: int) -> List[List[float]]:
    """Weighted octave sum per cell, normalised to [0, 1)."""
    field = []
    for y in range(height):
        row = []
        for x in range(width):
            total = 0.0
            for octave, (freq, weight) in enumerate(NOISE_OCTAVES):
                # offset the seed so octaves do not share lattice values
                total += value_noise(x * freq, y * freq, seed + octave * NOISE_OCTAVE_SEED_STEP) * weight
            row.append(total / _NOISE_WEIGHT)
        field.append(row)
    return field


def threshold_by_rank(field: List[List[float]], density: float) -> Grid:
    """Wall the ``round(density * cells)`` cells with the highest values.

    Equal values keep scan order, so the wall count is exact for any field.
    """
    height = len(field)
    width = len(field[0])
    walls = round(density * width * height)
    ranked = sorted(range(width * height), key=lambda i: field[i // width][i % width], reverse=True)
    grid = new_grid(width, height, FLOOR)
    for i in ranked[:walls]:
        grid[i // width][i % width] = WALL
    return grid


def count_wall_neighbors(grid: Grid, x: int, y: int) -> int:
    height = len(grid)
    width = len(grid[0])
    count = 0
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if not (0 <= nx < width and 0 <= ny < height):
                count += 1  # out of bounds counts as wall
            elif grid[ny][nx] == WALL:
                count += 1
    return count


def smooth(grid: Grid) -> Grid:
    """One synchronous majority pass; reads ``grid`` and returns a new grid."""
    height = len(grid)
    width = len(grid[0])
    out = new_grid(width, height, FLOOR)
    for y in range(height):
        for x in range(width):
            if count_wall_neighbors(grid, x, y) >= SMOOTHING_WALL_THRESHOLD:
                out[y][x] = WALL
    return out


Strategy = Callable[[int, int, GenerationOptions, RandomSource], Carved]

STRATEGIES: Dict[Algorithm, Strategy] = {
    Algorithm.RECURSIVE_BACKTRACKING: carve_recursive_backtracking,
    Algorithm.CELLULAR_AUTOMATA: carve_cellular_automata,
    Algorithm.BINARY_TREE: carve_binary_tree,
    Algorithm.PERLIN_CAVES: carve_perlin_caves,
}


def carve(options: GenerationOptions, rng: RandomSource) -> Carved:
    return STRATEGIES[options.algorithm](options.width, options.height, options, rng)


__all__ = [
    "Carved",
    "STRATEGIES",
    "carve",
    "carve_recursive_backtracking",
    "carve_cellular_automata",
    "carve_binary_tree",
    "carve_perlin_caves",
    "hash_noise",
    "value_noise",
    "noise_field",
    "threshold_by_rank",
    "count_wall_neighbors",
    "smooth",
]
