"""
project: mazeforge
module: maze_api.py
License: MIT

Maze generation HTTP routes.

Endpoints:
    GET  /health                  liveness probe
    POST /api/maze/generate       generate from a JSON options body
    POST /api/maze/ascii          same body, text/plain ASCII map
    GET  /api/maze/<seed>         default-size level for a seed (cached)

Option keys may be snake_case or the game client's camelCase. Configuration
errors map to 400, infeasible levels to 422.
"""

import hashlib
import threading
from datetime import datetime, timezone

from flask import Blueprint, Response, current_app, jsonify, request

from mazeforge.logging_utils import get_logger
from mazeforge.maze import (
    ConfigurationError,
    GenerationOptions,
    InfeasibleLevelError,
    generate,
    options_from_mapping,
)

bp_maze = Blueprint("maze", __name__)

_log = get_logger("maze_api")

MAX_SEED = 9223372036854775807


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative int."""
    if payload_seed is None:
        return None
    if isinstance(payload_seed, bool):
        raise ConfigurationError("seed must be an integer or string", field="seed")
    if isinstance(payload_seed, int):
        return payload_seed % MAX_SEED
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return None
        if s.isdigit():
            return int(s) % MAX_SEED
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % MAX_SEED
    raise ConfigurationError("seed must be an integer or string", field="seed")


def _defaults():
    cfg = current_app.config
    return {
        "width": cfg["MAZE_DEFAULT_WIDTH"],
        "height": cfg["MAZE_DEFAULT_HEIGHT"],
        "algorithm": cfg["MAZE_DEFAULT_ALGORITHM"],
    }


def _options_from_request() -> GenerationOptions:
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("Invalid JSON object")
    data = dict(data)
    if "seed" in data:
        data["seed"] = _coerce_seed(data["seed"])
    return _check_size(options_from_mapping(data, _defaults()))


def _check_size(options: GenerationOptions) -> GenerationOptions:
    """Reject levels larger than ``MAZE_MAX_DIMENSION`` on either axis."""
    cap = current_app.config["MAZE_MAX_DIMENSION"]
    for name in ("width", "height"):
        value = getattr(options, name)
        if isinstance(value, int) and value > cap:
            raise ConfigurationError(f"{name} must be <= {cap} (got {value})", field=name)
    return options


# Simple in-process cache (seed, width, height, algorithm) -> MazeResult. The
# lock guards against threaded servers interleaving inserts.
_maze_cache = {}
_maze_cache_lock = threading.Lock()


def get_cached_maze(options: GenerationOptions):
    if current_app.config.get("MAZE_DISABLE_CACHE") or options.seed is None:
        return generate(options)
    key = (options.seed, options.width, options.height, options.algorithm)
    with _maze_cache_lock:
        result = _maze_cache.get(key)
    if result is not None:
        return result
    result = generate(options)
    cap = current_app.config.get("MAZE_CACHE_SIZE", 8)
    with _maze_cache_lock:
        _maze_cache[key] = result
        while len(_maze_cache) > cap:
            _maze_cache.pop(next(iter(_maze_cache)))
    return result


def clear_cache():
    with _maze_cache_lock:
        _maze_cache.clear()


@bp_maze.errorhandler(ConfigurationError)
def _configuration_error(e):
    return jsonify({"error": str(e), "field": e.field}), 400


@bp_maze.errorhandler(InfeasibleLevelError)
def _infeasible(e):
    _log.warn(event="maze_request_infeasible", detail=str(e))
    return jsonify({"error": str(e)}), 422


@bp_maze.route("/health")
def health():
    return jsonify({"status": "ok", "ts": datetime.now(timezone.utc).isoformat()})


@bp_maze.route("/api/maze/generate", methods=["POST"])
def generate_maze():
    """Generate a level.

    Body JSON (all optional): width, height, algorithm, seed, density,
    iterations, minRoomSize, maxRoomSize, roomCount, spawnCount, keyCount,
    doorCount, theme.

    Response: MazeResult payload (see ``MazeResult.to_dict``).
    """
    options = _options_from_request()
    result = generate(options)
    return jsonify(result.to_dict())


@bp_maze.route("/api/maze/ascii", methods=["POST"])
def generate_ascii():
    options = _options_from_request()
    result = generate(options)
    return Response(result.to_ascii() + "\n", mimetype="text/plain")


@bp_maze.route("/api/maze/<seed>")
def maze_for_seed(seed):
    options = _check_size(options_from_mapping({"seed": _coerce_seed(seed)}, _defaults()))
    result = get_cached_maze(options)
    return jsonify(result.to_dict())
