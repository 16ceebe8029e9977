import logging

from mazeforge import create_app
from mazeforge.server import _configure_logging


def test_configure_logging_writes_rotating_file(tmp_path):
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        # Run twice to ensure idempotence (handler replace path)
        _configure_logging(str(tmp_path))
        log_path = _configure_logging(str(tmp_path))
        assert len(root.handlers) == 2
        logging.getLogger("mazeforge.test").info("hello from the test")
        for h in root.handlers:
            h.flush()
        assert log_path == str(tmp_path / "app.log")
        assert "hello from the test" in (tmp_path / "app.log").read_text()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)


def test_create_app_reads_environment(monkeypatch):
    monkeypatch.setenv("MAZE_DEFAULT_WIDTH", "40")
    monkeypatch.setenv("MAZE_DEFAULT_ALGORITHM", "binary_tree")
    monkeypatch.setenv("MAZE_DISABLE_CACHE", "1")
    app = create_app()
    assert app.config["MAZE_DEFAULT_WIDTH"] == 40
    assert app.config["MAZE_DEFAULT_HEIGHT"] == 21
    assert app.config["MAZE_DEFAULT_ALGORITHM"] == "binary_tree"
    assert app.config["MAZE_DISABLE_CACHE"] is True


def test_create_app_ignores_bad_integers(monkeypatch):
    monkeypatch.setenv("MAZE_CACHE_SIZE", "lots")
    app = create_app()
    assert app.config["MAZE_CACHE_SIZE"] == 8


def test_overrides_win(monkeypatch):
    monkeypatch.setenv("MAZE_DEFAULT_HEIGHT", "50")
    app = create_app({"MAZE_DEFAULT_HEIGHT": 13, "TESTING": True})
    assert app.config["MAZE_DEFAULT_HEIGHT"] == 13
    client = app.test_client()
    data = client.post("/api/maze/generate", json={"seed": 1, "width": 9}).get_json()
    assert data["height"] == 13 and data["width"] == 9
