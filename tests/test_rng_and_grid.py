from mazeforge.maze import FLOOR, WALL, Tile
from mazeforge.maze.grid import (
    Point,
    count_tiles,
    enforce_boundary_walls,
    floor_tiles,
    new_grid,
    orthogonal_neighbors,
    render_ascii,
)
from mazeforge.maze.rng import RandomSource
from mazeforge.maze.tiles import tile_to_glyph


def test_same_seed_same_stream():
    a = RandomSource(42)
    b = RandomSource(42)
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]


def test_stream_values_in_unit_interval():
    rng = RandomSource(0)
    for _ in range(1000):
        v = rng.next()
        assert 0.0 <= v < 1.0


def test_randint_below_and_choice():
    rng = RandomSource(5)
    assert rng.randint_below(0) == 0
    assert rng.randint_below(-3) == 0
    for _ in range(200):
        assert 0 <= rng.randint_below(7) < 7
    assert rng.choice(["only"]) == "only"


def test_tile_values_are_stable():
    assert [int(t) for t in Tile] == [0, 1, 2, 3, 4, 5, 6]
    assert tile_to_glyph(Tile.WALL) == "#"
    assert tile_to_glyph(Tile.DOOR) == "D"
    assert tile_to_glyph(99) == "?"


def test_enforce_boundary_walls_idempotent():
    grid = new_grid(6, 4, FLOOR)
    enforce_boundary_walls(grid)
    snapshot = [row[:] for row in grid]
    assert enforce_boundary_walls(grid) is grid
    assert grid == snapshot
    assert count_tiles(grid, WALL) == 2 * 6 + 2 * 2
    assert floor_tiles(grid) == [Point(x, y) for y in (1, 2) for x in range(1, 5)]


def test_orthogonal_neighbors_clip_to_grid():
    assert set(orthogonal_neighbors(0, 0, 3, 3)) == {Point(1, 0), Point(0, 1)}
    assert len(list(orthogonal_neighbors(1, 1, 3, 3))) == 4


def test_render_ascii_overlays():
    grid = new_grid(3, 3, WALL)
    grid[1][1] = FLOOR
    text = render_ascii(grid, [([Point(1, 1)], "S")])
    assert text.splitlines() == ["###", "#S#", "###"]
    assert render_ascii(grid) == "###\n#.#\n###"
