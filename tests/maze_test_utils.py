from collections import deque

from mazeforge.maze import FLOOR, WALL

# Keep glyphs duplicated lightly for test independence.
GLYPH_TILES = {"#": WALL, ".": FLOOR}


def make_grid(rows):
    """Build a mutable grid from strings of '#' (wall) and '.' (floor)."""
    return [[GLYPH_TILES[c] for c in row] for row in rows]


def floor_cells(layout):
    return [(x, y) for y, row in enumerate(layout) for x, t in enumerate(row) if t == FLOOR]


def bfs_reachable(layout, start, passable=(FLOOR,)):
    """Return set of (x,y) tiles reachable from start over ``passable`` tiles."""
    if start is None:
        return set()
    h = len(layout)
    w = len(layout[0])
    sx, sy = start
    if not (0 <= sx < w and 0 <= sy < h) or layout[sy][sx] not in passable:
        return set()
    q = deque([(sx, sy)])
    vis = {(sx, sy)}
    while q:
        x, y = q.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if 0 <= nx < w and 0 <= ny < h and (nx, ny) not in vis:
                if layout[ny][nx] in passable:
                    vis.add((nx, ny))
                    q.append((nx, ny))
    return vis


def assert_floor_connected(layout):
    cells = floor_cells(layout)
    assert cells, "layout has no floor"
    reach = bfs_reachable(layout, cells[0])
    missing = [c for c in cells if c not in reach]
    assert not missing, f"unreachable floor cells: {missing[:5]} (showing up to 5)"


def border_is_wall(layout):
    h = len(layout)
    w = len(layout[0])
    for x in range(w):
        if layout[0][x] != WALL or layout[h - 1][x] != WALL:
            return False
    for y in range(h):
        if layout[y][0] != WALL or layout[y][w - 1] != WALL:
            return False
    return True


def orthogonal_tiles(layout, x, y):
    h = len(layout)
    w = len(layout[0])
    out = []
    for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
        nx, ny = x + dx, y + dy
        if 0 <= nx < w and 0 <= ny < h:
            out.append(layout[ny][nx])
    return out
