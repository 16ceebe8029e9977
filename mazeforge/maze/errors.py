"""Exceptions raised by the maze generation engine.

Only two conditions abort a generation call:

* ``ConfigurationError``: options outside their documented bounds. Raised by
  validation before any carving happens.
* ``InfeasibleLevelError``: the carved grid has no floor left, so nothing can
  be placed.

Running short of spawn/key/door candidates is not an error; the planner simply
returns shorter lists.
"""
from __future__ import annotations

from typing import Optional


class MazeError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(MazeError, ValueError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InfeasibleLevelError(MazeError, RuntimeError):
    pass


__all__ = ["MazeError", "ConfigurationError", "InfeasibleLevelError"]
