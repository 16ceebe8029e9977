import importlib
import json
import signal
import sys

import pytest

# Import run.py as a module and exercise parse_args + main with a patched
# start_server so no socket is ever opened.


@pytest.fixture()
def run_module(monkeypatch):
    # Ensure a clean import each time (run.py reads VERSION once)
    if "run" in sys.modules:
        del sys.modules["run"]
    mod = importlib.import_module("run")
    return mod


@pytest.fixture()
def fake_server(monkeypatch):
    calls = {}

    def fake_start_server(host, port, debug):  # signature match
        calls["called"] = True
        calls["host"] = host
        calls["port"] = port
        calls["debug"] = debug

    import mazeforge.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    previous = signal.getsignal(signal.SIGINT)
    yield calls
    signal.signal(signal.SIGINT, previous)


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    captured = capsys.readouterr().out
    assert ver in captured
    assert "mazeforge" in captured


def test_version_file_is_read(run_module):
    assert run_module.__version__ == "0.4.0"


def test_default_command_is_server(run_module):
    ns = run_module.parse_args([])
    assert ns.command == "server"


def test_server_main_invokes_start_server(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    exit_code = run_module.main(["server"])
    assert exit_code == 0
    assert fake_server.get("called") is True
    assert fake_server.get("host") == "127.0.0.1"
    assert fake_server.get("port") == 5555
    assert fake_server.get("debug") is False


def test_server_flags_override_env(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    run_module.main(["server", "--port", "6006", "--host", "localhost", "--debug"])
    assert fake_server["port"] == 6006
    assert fake_server["host"] == "localhost"
    assert fake_server["debug"] is True


def test_env_file_argument(monkeypatch, tmp_path, run_module, fake_server):
    env_file = tmp_path / ".env"
    env_file.write_text("HOST=10.1.2.3\nPORT=6001\n")
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    run_module.main(["--env-file", str(env_file), "server"])
    assert fake_server["host"] == "10.1.2.3"
    assert fake_server["port"] == 6001


def test_generate_ascii(run_module, capsys):
    code = run_module.main(["generate", "--width", "15", "--height", "9", "--seed", "3", "--algorithm", "binary_tree"])
    assert code == 0
    out = capsys.readouterr().out
    assert "#" * 15 in out
    assert "seed=3" in out


def test_generate_json(run_module, capsys):
    code = run_module.main(["generate", "--width", "13", "--height", "11", "--seed", "9", "--json"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["width"] == 13 and data["height"] == 11
    assert data["seed"] == 9


def test_generate_bad_options_exit_code(run_module, capsys):
    code = run_module.main(["generate", "--width", "4"])
    assert code == 2
    assert "width" in capsys.readouterr().err


def test_generate_infeasible_exit_code(run_module, capsys):
    code = run_module.main(
        ["generate", "--width", "12", "--height", "12", "--algorithm", "cellular_automata", "--density", "1.0", "--seed", "3"]
    )
    assert code == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_generate_ignores_non_integer_env_defaults(monkeypatch, run_module, capsys):
    monkeypatch.setenv("MAZE_DEFAULT_WIDTH", "wide")
    monkeypatch.delenv("MAZE_DEFAULT_HEIGHT", raising=False)
    code = run_module.main(["generate", "--seed", "1", "--json"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert (data["width"], data["height"]) == (32, 21)
