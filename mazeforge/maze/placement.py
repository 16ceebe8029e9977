"""Placement of gameplay points on a finished, connected grid.

Order matters because every step consumes the random stream and later steps
avoid earlier picks:

1. spawn points, spread at least ``MIN_SPAWN_DISTANCE`` apart (Manhattan);
2. key spawns on unused floor;
3. door positions on walls touching floor;
4. the exit, the floor cell whose nearest spawn is farthest away.

Nothing here raises. When candidates run out the lists come back shorter than
requested and the ``Placement`` counters say why.
"""
from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence, Set

from .grid import Grid, Point, dimensions, orthogonal_neighbors
from .rng import RandomSource
from .tiles import DOOR, FLOOR, WALL

MIN_SPAWN_DISTANCE = 5
MAX_ATTEMPTS = 100


class Placement(NamedTuple):
    spawn_points: List[Point]
    key_spawns: List[Point]
    door_positions: List[Point]
    exit_position: Point
    spawns_relaxed: int
    doors_fallback: bool


def generate_spawn_points(
    floor: Sequence[Point],
    rng: RandomSource,
    count: int,
    min_distance: int = MIN_SPAWN_DISTANCE,
    max_attempts: int = MAX_ATTEMPTS,
):
    """Return (spawns, relaxed) where ``relaxed`` spawns ignored the spacing rule.

    Relaxed spawns are always appended after the spaced ones.
    """
    spawns: List[Point] = []
    used: Set[Point] = set()
    if not floor:
        return spawns, 0
    for _ in range(count):
        for _attempt in range(max_attempts):
            tile = rng.choice(floor)
            if tile in used:
                continue
            if any(tile.manhattan(s) < min_distance for s in spawns):
                continue
            spawns.append(tile)
            used.add(tile)
            break
    relaxed = 0
    target = min(count, len(floor))
    if len(spawns) < target:
        unused = [t for t in floor if t not in used]
        while len(spawns) < target and unused:
            spawns.append(unused.pop(rng.randint_below(len(unused))))
            relaxed += 1
    return spawns, relaxed


def generate_key_spawns(
    floor: Sequence[Point],
    spawns: Sequence[Point],
    rng: RandomSource,
    count: int,
    max_attempts: int = MAX_ATTEMPTS,
) -> List[Point]:
    keys: List[Point] = []
    used = set(spawns)
    if not floor:
        return keys
    for _ in range(count):
        for _attempt in range(max_attempts):
            tile = rng.choice(floor)
            if tile not in used:
                keys.append(tile)
                used.add(tile)
                break
    return keys


def door_candidates(grid: Grid) -> List[Point]:
    """Interior walls with at least one orthogonal floor neighbour, scan order."""
    width, height = dimensions(grid)
    out = []
    for y in range(1, height - 1):
        for x in range(1, width - 1):
            if grid[y][x] != WALL:
                continue
            if any(grid[n.y][n.x] == FLOOR for n in orthogonal_neighbors(x, y, width, height)):
                out.append(Point(x, y))
    return out


def generate_door_positions(grid: Grid, rng: RandomSource, count: int):
    """Return (doors, used_fallback).

    If there are fewer floor-adjacent walls than requested, any other interior
    wall becomes a candidate too. Doors are drawn without replacement.
    """
    pool = door_candidates(grid)
    fallback = False
    if len(pool) < count:
        fallback = True
        width, height = dimensions(grid)
        seen = set(pool)
        for y in range(1, height - 1):
            for x in range(1, width - 1):
                if grid[y][x] == WALL and (x, y) not in seen:
                    pool.append(Point(x, y))
    doors: List[Point] = []
    while len(doors) < count and pool:
        doors.append(pool.pop(rng.randint_below(len(pool))))
    return doors, fallback


def choose_exit(floor: Sequence[Point], spawns: Sequence[Point]) -> Optional[Point]:
    """Max-min pick: the floor cell farthest from its *nearest* spawn.

    Ties keep the earliest cell in scan order. With no spawns, or when every
    floor cell is a spawn, the first floor cell is returned.
    """
    if not floor:
        return None
    best = floor[0]
    if not spawns:
        return best
    best_d = 0
    for tile in floor:
        d = min(tile.manhattan(s) for s in spawns)
        if d > best_d:
            best_d = d
            best = tile
    return best


def bake_doors(grid: Grid, doors: Sequence[Point]) -> None:
    for d in doors:
        grid[d.y][d.x] = DOOR


def plan_placements(
    grid: Grid,
    floor: Sequence[Point],
    rng: RandomSource,
    spawn_count: int = 4,
    key_count: int = 6,
    door_count: int = 3,
) -> Placement:
    """Pick all gameplay points and bake doors into ``grid`` (in place)."""
    spawns, relaxed = generate_spawn_points(floor, rng, spawn_count)
    keys = generate_key_spawns(floor, spawns, rng, key_count)
    doors, fallback = generate_door_positions(grid, rng, door_count)
    exit_pos = choose_exit(floor, spawns)
    bake_doors(grid, doors)
    return Placement(spawns, keys, doors, exit_pos, relaxed, fallback)


__all__ = [
    "MIN_SPAWN_DISTANCE",
    "MAX_ATTEMPTS",
    "Placement",
    "generate_spawn_points",
    "generate_key_spawns",
    "door_candidates",
    "generate_door_positions",
    "choose_exit",
    "bake_doors",
    "plan_placements",
]
