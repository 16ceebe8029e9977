"""Generation options and their validation.

``GenerationOptions`` mirrors the knobs exposed to callers. Algorithm specific
fields left as ``None`` resolve to per-algorithm defaults when generation runs
(see ``resolved_density``).
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigurationError


class Algorithm(str, Enum):
    RECURSIVE_BACKTRACKING = "recursive_backtracking"
    CELLULAR_AUTOMATA = "cellular_automata"
    BINARY_TREE = "binary_tree"
    PERLIN_CAVES = "perlin_caves"

    @classmethod
    def parse(cls, value: Any) -> "Algorithm":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            key = _ALGORITHM_ALIASES.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        raise ConfigurationError(f"unknown algorithm: {value!r}", field="algorithm")


_ALGORITHM_ALIASES = {
    "noise_caves": "perlin_caves",
    "backtracking": "recursive_backtracking",
    "ca": "cellular_automata",
}

MIN_DIMENSION = 5
# Hard engine cap; the HTTP layer applies a lower, configurable one
MAX_DIMENSION = 1024

DEFAULT_WIDTH = 32
DEFAULT_HEIGHT = 21
DEFAULT_DENSITY = {
    Algorithm.CELLULAR_AUTOMATA: 0.45,
    Algorithm.PERLIN_CAVES: 0.4,
}


@dataclass
class GenerationOptions:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    algorithm: Algorithm = Algorithm.RECURSIVE_BACKTRACKING
    seed: Optional[int] = None
    density: Optional[float] = None
    iterations: int = 5
    min_room_size: int = 3
    max_room_size: int = 7
    room_count: int = 3
    # Placement targets (upper bounds, see placement.py)
    spawn_count: int = 4
    key_count: int = 6
    door_count: int = 3
    theme: str = "default"
    keep_isolated_pockets: bool = False

    def __post_init__(self):
        self.algorithm = Algorithm.parse(self.algorithm)

    def resolved_density(self) -> float:
        if self.density is not None:
            return float(self.density)
        return DEFAULT_DENSITY.get(self.algorithm, 0.45)

    def validate(self) -> "GenerationOptions":
        """Raise ``ConfigurationError`` for the first out-of-bounds field.

        Returns ``self`` so callers can chain ``options.validate()``.
        """
        for name in ("width", "height"):
            value = _require_int(self, name)
            if value < MIN_DIMENSION:
                raise ConfigurationError(f"{name} must be >= {MIN_DIMENSION} (got {value})", field=name)
            if value > MAX_DIMENSION:
                raise ConfigurationError(f"{name} must be <= {MAX_DIMENSION} (got {value})", field=name)
        if self.seed is not None:
            _require_int(self, "seed")
        if self.density is not None:
            if isinstance(self.density, bool) or not isinstance(self.density, (int, float)):
                raise ConfigurationError("density must be a number", field="density")
            if not 0.0 <= float(self.density) <= 1.0:
                raise ConfigurationError(f"density must be between 0 and 1 (got {self.density})", field="density")
        for name in ("iterations", "room_count", "spawn_count", "key_count", "door_count"):
            if _require_int(self, name) < 0:
                raise ConfigurationError(f"{name} must be >= 0", field=name)
        lo = _require_int(self, "min_room_size")
        hi = _require_int(self, "max_room_size")
        if lo < 1:
            raise ConfigurationError("min_room_size must be >= 1", field="min_room_size")
        if hi < lo:
            raise ConfigurationError(
                f"max_room_size ({hi}) must be >= min_room_size ({lo})", field="max_room_size"
            )
        if not isinstance(self.theme, str):
            raise ConfigurationError("theme must be a string", field="theme")
        return self


def _require_int(opts: GenerationOptions, name: str) -> int:
    value = getattr(opts, name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer (got {value!r})", field=name)
    return value


# camelCase keys sent by the game client
_CAMEL_KEYS = {
    "minRoomSize": "min_room_size",
    "maxRoomSize": "max_room_size",
    "roomCount": "room_count",
    "spawnCount": "spawn_count",
    "keyCount": "key_count",
    "doorCount": "door_count",
    "keepIsolatedPockets": "keep_isolated_pockets",
}
OPTION_FIELDS = frozenset(f.name for f in fields(GenerationOptions))


def options_from_mapping(data: Mapping[str, Any], defaults: Optional[Mapping[str, Any]] = None) -> GenerationOptions:
    """Build options from a loosely typed mapping (JSON body, CLI namespace).

    Accepts both snake_case and camelCase keys. Unknown keys raise
    ``ConfigurationError`` rather than being silently dropped.
    """
    merged: Dict[str, Any] = dict(defaults or {})
    unknown = []
    for key, value in data.items():
        name = _CAMEL_KEYS.get(key, key)
        if name not in OPTION_FIELDS:
            unknown.append(key)
            continue
        if value is not None:
            merged[name] = value
    if unknown:
        raise ConfigurationError(f"Unknown keys: {', '.join(sorted(unknown))}")
    return GenerationOptions(**merged)


__all__ = [
    "Algorithm",
    "GenerationOptions",
    "MIN_DIMENSION",
    "MAX_DIMENSION",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "OPTION_FIELDS",
    "options_from_mapping",
]
