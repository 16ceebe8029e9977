import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mazeforge import create_app, logging_utils  # noqa: E402
from mazeforge.routes.maze_api import clear_cache  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app(
        {
            "TESTING": True,
            "MAZE_DEFAULT_WIDTH": 32,
            "MAZE_DEFAULT_HEIGHT": 21,
            "MAZE_DEFAULT_ALGORITHM": "recursive_backtracking",
            "MAZE_MAX_DIMENSION": 200,
            "MAZE_DISABLE_CACHE": False,
        }
    )
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


# ---------------- Additional autouse cleanup ----------------
@pytest.fixture(autouse=True)
def _clear_maze_cache():
    """Cached levels must not leak between tests that count cache entries."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture(autouse=True)
def _restore_log_settings():
    level = logging_utils.CURRENT_LEVEL
    json_mode = logging_utils.JSON_MODE
    yield
    logging_utils.CURRENT_LEVEL = level
    logging_utils.JSON_MODE = json_mode
