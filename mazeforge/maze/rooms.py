from dataclasses import dataclass
from typing import List

from .grid import Grid, dimensions
from .rng import RandomSource
from .tiles import FLOOR


@dataclass(frozen=True)
class Room:
    x: int
    y: int
    w: int
    h: int

    def cells(self):
        for iy in range(self.y, self.y + self.h):
            for ix in range(self.x, self.x + self.w):
                yield ix, iy

    def to_dict(self):
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


def inject_rooms(grid: Grid, rng: RandomSource, min_size: int, max_size: int, count: int) -> List[Room]:
    """Carve ``count`` rectangular rooms into an existing maze.

    Sizes are drawn from [min_size, max_size] and clamped to the interior so
    small grids never index outside the frame. Rooms may overlap each other.
    Each room gets at most one connector into the surrounding maze; rooms with
    no candidate stay disconnected until connectivity repair runs.
    """
    width, height = dimensions(grid)
    rooms: List[Room] = []
    span = max_size - min_size + 1
    for _ in range(count):
        rw = min(min_size + rng.randint_below(span), width - 2)
        rh = min(min_size + rng.randint_below(span), height - 2)
        rx = 1 + rng.randint_below(max(1, width - rw - 2))
        ry = 1 + rng.randint_below(max(1, height - rh - 2))
        room = Room(rx, ry, rw, rh)
        for ix, iy in room.cells():
            grid[iy][ix] = FLOOR
        connect_room(grid, room, rng)
        rooms.append(room)
    return rooms


def connect_room(grid: Grid, room: Room, rng: RandomSource) -> bool:
    """Open one wall cell between the room and floor two steps outside it."""
    width, height = dimensions(grid)
    connections = []
    for x in range(room.x, room.x + room.w):
        # top edge
        if room.y > 1 and grid[room.y - 2][x] == FLOOR:
            connections.append((x, room.y - 1))
        # bottom edge
        if room.y + room.h < height - 1 and grid[room.y + room.h + 1][x] == FLOOR:
            connections.append((x, room.y + room.h))
    for y in range(room.y, room.y + room.h):
        if room.x > 1 and grid[y][room.x - 2] == FLOOR:
            connections.append((room.x - 1, y))
        if room.x + room.w < width - 1 and grid[y][room.x + room.w + 1] == FLOOR:
            connections.append((room.x + room.w, y))
    if not connections:
        return False
    cx, cy = rng.choice(connections)
    grid[cy][cx] = FLOOR
    return True


__all__ = ["Room", "inject_rooms", "connect_room"]
