"""Connectivity repair for carved grids.

Flood fill enumerates 4-connected floor regions. The largest region is the
base; every other region bigger than ``noise_threshold`` cells is joined to
the base with an L-shaped tunnel between the closest pair of cells (Manhattan
distance, exhaustive scan). Regions at or below the threshold are noise.

Noise pockets are walled off by default so that every remaining floor cell is
mutually reachable. With ``keep_pockets=True`` they are left as unreachable
floor, matching what the browser game client expects.

The closest-pair scan is O(|base| * |region|); fine for level sized grids.
"""
from __future__ import annotations

from typing import List, NamedTuple, Optional, Set, Tuple

from .grid import ORTHOGONAL, Grid, Point, dimensions
from .tiles import FLOOR, WALL

NOISE_REGION_THRESHOLD = 10


class RepairReport(NamedTuple):
    regions_found: int
    regions_connected: int
    noise_regions: int
    tunnel_cells: int
    pocket_cells_removed: int
    base: Optional[Set[Point]]


def flood_fill(grid: Grid, start: Tuple[int, int], visited: Optional[List[List[bool]]] = None) -> List[Point]:
    """Collect the floor region containing ``start`` (iterative, stack based)."""
    width, height = dimensions(grid)
    if visited is None:
        visited = [[False] * width for _ in range(height)]
    region: List[Point] = []
    stack = [start]
    while stack:
        x, y = stack.pop()
        if not (0 <= x < width and 0 <= y < height) or visited[y][x] or grid[y][x] != FLOOR:
            continue
        visited[y][x] = True
        region.append(Point(x, y))
        for dx, dy in ORTHOGONAL:
            stack.append((x + dx, y + dy))
    return region


def find_regions(grid: Grid) -> List[List[Point]]:
    """All floor regions, in scan order of their first cell."""
    width, height = dimensions(grid)
    visited = [[False] * width for _ in range(height)]
    regions = []
    for y in range(height):
        for x in range(width):
            if grid[y][x] == FLOOR and not visited[y][x]:
                regions.append(flood_fill(grid, (x, y), visited))
    return regions


def closest_pair(a: List[Point], b: List[Point]) -> Optional[Tuple[Point, Point]]:
    best = None
    best_d = None
    for p in a:
        for q in b:
            d = abs(p.x - q.x) + abs(p.y - q.y)
            if best_d is None or d < best_d:
                best_d = d
                best = (p, q)
                if d <= 2:  # distinct regions are never closer than 2
                    return best
    return best


def carve_l_path(grid: Grid, start: Point, end: Point) -> int:
    """Carve horizontally to end.x then vertically to end.y; returns cells opened."""
    opened = 0
    x, y = start
    while True:
        if grid[y][x] != FLOOR:
            grid[y][x] = FLOOR
            opened += 1
        if x != end.x:
            x += 1 if x < end.x else -1
        elif y != end.y:
            y += 1 if y < end.y else -1
        else:
            break
    return opened


def ensure_connectivity(
    grid: Grid,
    noise_threshold: int = NOISE_REGION_THRESHOLD,
    keep_pockets: bool = False,
) -> RepairReport:
    """Join all significant floor regions into one component, in place."""
    regions = find_regions(grid)
    if not regions:
        return RepairReport(0, 0, 0, 0, 0, None)
    base_index = max(range(len(regions)), key=lambda i: (len(regions[i]), -i))
    base = regions[base_index]
    connected = 0
    noise = 0
    tunnel_cells = 0
    for i, region in enumerate(regions):
        if i == base_index:
            continue
        if len(region) <= noise_threshold:
            noise += 1
            continue
        pair = closest_pair(base, region)
        if pair:
            tunnel_cells += carve_l_path(grid, pair[0], pair[1])
            connected += 1
    # Tunnels may have merged noise pockets into the main component, so the
    # final component is recomputed instead of trusting the region lists.
    main = set(flood_fill(grid, base[0]))
    removed = 0
    if not keep_pockets:
        width, height = dimensions(grid)
        for y in range(height):
            for x in range(width):
                if grid[y][x] == FLOOR and (x, y) not in main:
                    grid[y][x] = WALL
                    removed += 1
    return RepairReport(len(regions), connected, noise, tunnel_cells, removed, main)


__all__ = [
    "NOISE_REGION_THRESHOLD",
    "RepairReport",
    "flood_fill",
    "find_regions",
    "closest_pair",
    "carve_l_path",
    "ensure_connectivity",
]
