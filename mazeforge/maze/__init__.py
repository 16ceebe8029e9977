"""Public maze package interface.

Typical use::

    from mazeforge.maze import Algorithm, GenerationOptions, generate

    result = generate(GenerationOptions(width=32, height=21, algorithm=Algorithm.BINARY_TREE, seed=42))
"""

from .config import Algorithm, GenerationOptions, options_from_mapping  # noqa: F401
from .errors import ConfigurationError, InfeasibleLevelError, MazeError  # noqa: F401
from .grid import Point  # noqa: F401
from .pipeline import MazeResult, generate  # noqa: F401
from .rooms import Room  # noqa: F401
from .tiles import DOOR, FLOOR, WALL, Tile  # noqa: F401

__all__ = [
    "Algorithm",
    "GenerationOptions",
    "options_from_mapping",
    "MazeError",
    "ConfigurationError",
    "InfeasibleLevelError",
    "Point",
    "MazeResult",
    "generate",
    "Room",
    "Tile",
    "WALL",
    "FLOOR",
    "DOOR",
]
