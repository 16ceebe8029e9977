"""Pipeline orchestration for maze generation.

``generate`` runs the phases in a fixed order and returns one immutable
``MazeResult``:

    validate -> carve -> boundary walls -> connectivity repair -> placement -> door bake

The only non-deterministic inputs (default seed and the id timestamp) are read
in ``_resolve_seed`` and ``_timestamp_ms``; everything else is a pure function
of the options and the seed.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..logging_utils import get_logger
from .algorithms import carve
from .config import Algorithm, GenerationOptions
from .connectivity import ensure_connectivity
from .errors import InfeasibleLevelError
from .grid import Point, copy_grid, enforce_boundary_walls, floor_tiles, render_ascii
from .metrics import init_metrics
from .placement import plan_placements
from .rng import RandomSource
from .rooms import Room
from .tiles import Tile

_log = get_logger("maze")

Layout = Tuple[Tuple[Tile, ...], ...]


@dataclass(frozen=True)
class MazeResult:
    id: str
    width: int
    height: int
    layout: Layout
    spawn_points: Tuple[Point, ...]
    key_spawns: Tuple[Point, ...]
    door_positions: Tuple[Point, ...]
    exit_position: Point
    theme: str
    seed: int
    algorithm: Algorithm
    rooms: Tuple[Room, ...] = ()
    metrics: Dict[str, Any] = field(default_factory=dict, compare=False)

    def mutable_layout(self) -> List[List[Tile]]:
        """Fresh list-of-lists copy for callers that need to edit tiles."""
        return copy_grid(self.layout)

    def tile(self, x: int, y: int) -> Tile:
        return self.layout[y][x]

    def to_ascii(self, show_points: bool = True) -> str:
        overlays = []
        if show_points:
            overlays = [(self.key_spawns, "k"), (self.spawn_points, "S"), ([self.exit_position], "E")]
        return render_ascii(self.layout, overlays)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready payload using the field names game clients expect."""
        return {
            "id": self.id,
            "width": self.width,
            "height": self.height,
            "layout": [[int(t) for t in row] for row in self.layout],
            "spawnPoints": [p.to_dict() for p in self.spawn_points],
            "keySpawns": [p.to_dict() for p in self.key_spawns],
            "doorPositions": [p.to_dict() for p in self.door_positions],
            "exitPosition": self.exit_position.to_dict(),
            "theme": self.theme,
            "seed": self.seed,
            "algorithm": self.algorithm.value,
            "rooms": [r.to_dict() for r in self.rooms],
        }


def _resolve_seed(seed: Optional[int]) -> int:
    # 0 is a valid deterministic seed; only None falls back to the clock
    if seed is None:
        return _timestamp_ms()
    return seed


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def generate(options: GenerationOptions) -> MazeResult:
    """Generate a complete level.

    Raises ``ConfigurationError`` before any carving when options are out of
    bounds and ``InfeasibleLevelError`` when no floor survives carving.
    """
    options.validate()
    start = time.perf_counter()
    phase_times: Dict[str, int] = {}

    def _phase(label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        phase_times[label] = int((time.perf_counter() - ps) * 1000)
        return r

    seed = _resolve_seed(options.seed)
    rng = RandomSource(seed)
    log = _log.bind(seed=seed, algorithm=options.algorithm.value)
    metrics: Dict[str, Any] = init_metrics()

    carved = _phase("carve", carve, options, rng)
    grid = carved.grid
    _phase("boundary", enforce_boundary_walls, grid)
    report = _phase("connectivity", ensure_connectivity, grid, keep_pockets=options.keep_isolated_pockets)
    metrics.update(
        regions_found=report.regions_found,
        regions_connected=report.regions_connected,
        noise_regions=report.noise_regions,
        tunnel_cells=report.tunnel_cells,
        pocket_cells_removed=report.pocket_cells_removed,
        rooms=len(carved.rooms),
    )
    if report.base is None:
        log.warn(event="maze_infeasible", width=options.width, height=options.height)
        raise InfeasibleLevelError(
            f"no floor cells left after carving ({options.algorithm.value}, "
            f"{options.width}x{options.height}, seed={seed})"
        )
    # With isolated pockets kept, only the main component is eligible for placement
    floor = [p for p in floor_tiles(grid) if p in report.base]
    metrics["floor_tiles"] = len(floor)

    placement = _phase(
        "placement",
        plan_placements,
        grid,
        floor,
        rng,
        spawn_count=options.spawn_count,
        key_count=options.key_count,
        door_count=options.door_count,
    )
    metrics["spawns_relaxed"] = placement.spawns_relaxed
    metrics["keys_short"] = options.key_count - len(placement.key_spawns)
    metrics["doors_short"] = options.door_count - len(placement.door_positions)
    metrics["doors_fallback"] = placement.doors_fallback
    metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
    metrics["phase_ms"] = phase_times

    result = MazeResult(
        id=f"maze_{seed}_{_timestamp_ms()}",
        width=options.width,
        height=options.height,
        layout=tuple(tuple(row) for row in grid),
        spawn_points=tuple(placement.spawn_points),
        key_spawns=tuple(placement.key_spawns),
        door_positions=tuple(placement.door_positions),
        exit_position=placement.exit_position,
        theme=options.theme,
        seed=seed,
        algorithm=options.algorithm,
        rooms=tuple(carved.rooms),
        metrics=metrics,
    )

    degraded = (
        len(result.spawn_points) < options.spawn_count
        or metrics["spawns_relaxed"]
        or metrics["keys_short"]
        or metrics["doors_short"]
    )
    if degraded:
        log.warn(
            event="maze_placement_degraded",
            spawns=len(result.spawn_points),
            spawns_relaxed=metrics["spawns_relaxed"],
            keys_short=metrics["keys_short"],
            doors_short=metrics["doors_short"],
        )
    log.info(
        event="maze_generated",
        size=f"{options.width}x{options.height}",
        floor=len(floor),
        spawns=len(result.spawn_points),
        keys=len(result.key_spawns),
        doors=len(result.door_positions),
        runtime_ms=metrics["runtime_ms"],
    )
    logging.getLogger(__name__).debug(
        "maze seed=%s regions=%s connected=%s noise=%s tunnel_cells=%s phase_ms=%s",
        seed,
        report.regions_found,
        report.regions_connected,
        report.noise_regions,
        report.tunnel_cells,
        phase_times,
    )
    return result


__all__ = ["MazeResult", "generate"]
