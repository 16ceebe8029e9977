"""
project: mazeforge
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (optionally loaded from a
``.env`` file) with defaults matching the game's standard 32x21 level. Pass
``overrides`` to ``create_app`` to replace any value, e.g. in tests.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so MAZE_* settings can be supplied without exporting
# shell variables during development.
load_dotenv()


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-integer %s=%r", name, os.getenv(name))
        return default


def create_app(overrides: dict | None = None) -> Flask:
    """Return a configured Flask app with the maze API registered."""
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only installs still serve requests; only file logging needs it
        pass

    app.config.update(
        MAZE_DEFAULT_WIDTH=_env_int("MAZE_DEFAULT_WIDTH", 32),
        MAZE_DEFAULT_HEIGHT=_env_int("MAZE_DEFAULT_HEIGHT", 21),
        MAZE_MAX_DIMENSION=_env_int("MAZE_MAX_DIMENSION", 200),
        MAZE_DEFAULT_ALGORITHM=os.getenv("MAZE_DEFAULT_ALGORITHM", "recursive_backtracking"),
        MAZE_CACHE_SIZE=_env_int("MAZE_CACHE_SIZE", 8),
        MAZE_DISABLE_CACHE=os.getenv("MAZE_DISABLE_CACHE", "0") in ("1", "true", "yes"),
    )
    if overrides:
        app.config.update(overrides)

    from mazeforge.routes.maze_api import bp_maze

    app.register_blueprint(bp_maze)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal_error", "error_id": error_id}), 500

    return app
