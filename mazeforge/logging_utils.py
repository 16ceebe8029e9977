"""Minimal structured logging helper.

Every line carries ``level`` and ``ts`` followed by the caller's fields, either
as ``key=value`` pairs or, with JSON mode on, as one compact JSON object, so
generation events can be grepped or shipped to a collector unchanged.

Usage:
    from mazeforge.logging_utils import get_logger
    log = get_logger("maze").bind(seed=42)
    log.info(event="maze_generated", algorithm="binary_tree")

Environment:
    MAZEFORGE_LOG_LEVEL  debug|info|warn|error (default info)
    MAZEFORGE_LOG_JSON   1/true/yes/on to emit JSON lines

Fields whose value is None are dropped. Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("MAZEFORGE_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("MAZEFORGE_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def set_level(level: str) -> None:
    """Change the process-wide threshold (e.g. ``"error"`` to keep stdout clean)."""
    global CURRENT_LEVEL
    CURRENT_LEVEL = LEVELS[level.lower()]


def set_json_mode(enabled: bool) -> None:
    global JSON_MODE
    JSON_MODE = bool(enabled)


def _kv_value(v) -> str:
    if isinstance(v, (bool, int, float)):
        return str(v)
    # spaces would split the pair when parsed back
    return str(v).replace(" ", "_")


def _format(level: str, fields: dict) -> str:
    head = {"level": level, "ts": int(time.time())}
    body = {k: v for k, v in fields.items() if v is not None}
    if JSON_MODE:
        return json.dumps({**body, **head}, separators=(",", ":"), default=str)
    return " ".join(f"{k}={_kv_value(v)}" for k, v in {**head, **body}.items())


class _Logger:
    def __init__(self, name: str | None = None, context: dict | None = None):
        self.name = name or "mazeforge"
        self.context = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Child logger that adds ``fields`` to every line it emits."""
        return _Logger(self.name, {**self.context, **fields})

    def enabled(self, lvl: str) -> bool:
        return LEVELS[lvl] >= CURRENT_LEVEL

    def _log(self, lvl: str, **fields):
        if not self.enabled(lvl):
            return
        record = {"logger": self.name, **self.context, **fields}
        stream = sys.stderr if lvl == "error" else sys.stdout
        print(_format(lvl, record), file=stream)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("mazeforge")
