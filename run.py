"""mazeforge CLI entry point.

Provides subcommands for running the HTTP maze server and for generating a
single level to stdout. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - environment dependent
    _COLOR_ENABLED = False


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.4.0"


__version__ = _load_version()

ALGORITHM_CHOICES = ["recursive_backtracking", "cellular_automata", "binary_tree", "perlin_caves", "noise_caves"]


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    mazeforge level generator

    Serve procedurally generated maze levels over HTTP, or generate a single
    level and print it. Configuration can be provided via CLI flags or
    environment variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                    Bind address for the web server (default: 0.0.0.0)
          PORT                    Port for the web server (default: 3001)
          MAZE_DEFAULT_WIDTH      Default level width (default: 32)
          MAZE_DEFAULT_HEIGHT     Default level height (default: 21)
          MAZE_DEFAULT_ALGORITHM  Default algorithm (default: recursive_backtracking)
          MAZE_MAX_DIMENSION      Largest width or height the server accepts (default: 200)
          MAZEFORGE_LOG_LEVEL     debug|info|warn|error (default: info)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a 40x25 cave level for seed 7
          python run.py generate --width 40 --height 25 --algorithm cellular_automata --seed 7

          # Same level as JSON (layout + spawn/key/door/exit coordinates)
          python run.py generate --seed 7 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="mazeforge",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"mazeforge {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP maze server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask maze generation server",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 3001)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode with verbose error pages")
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one level and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a single level and print an ASCII map (or JSON with --json).",
    )
    gen_parser.add_argument("--width", type=int, default=None, help="Level width in tiles (>= 5)")
    gen_parser.add_argument("--height", type=int, default=None, help="Level height in tiles (>= 5)")
    gen_parser.add_argument("--algorithm", choices=ALGORITHM_CHOICES, default=None)
    gen_parser.add_argument("--seed", type=int, default=None, help="Integer seed (default: time based)")
    gen_parser.add_argument("--density", type=float, default=None, help="Wall fill ratio for caves (0..1)")
    gen_parser.add_argument("--iterations", type=int, default=None, help="Cellular automata smoothing passes")
    gen_parser.add_argument("--rooms", dest="room_count", type=int, default=None, help="Rooms injected by backtracking")
    gen_parser.add_argument("--doors", dest="door_count", type=int, default=None, help="Requested door count")
    gen_parser.add_argument("--json", dest="as_json", action="store_true", help="Print the level as JSON")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def _generate_command(args: argparse.Namespace) -> int:
    from mazeforge import _env_int, logging_utils
    from mazeforge.maze import ConfigurationError, InfeasibleLevelError, generate, options_from_mapping

    if args.as_json:
        # keep stdout parseable
        logging_utils.set_level("error")
    defaults = {
        "width": _env_int("MAZE_DEFAULT_WIDTH", 32),
        "height": _env_int("MAZE_DEFAULT_HEIGHT", 21),
        "algorithm": os.getenv("MAZE_DEFAULT_ALGORITHM", "recursive_backtracking"),
    }
    requested = {
        "width": args.width,
        "height": args.height,
        "algorithm": args.algorithm,
        "seed": args.seed,
        "density": args.density,
        "iterations": args.iterations,
        "room_count": args.room_count,
        "door_count": args.door_count,
    }
    try:
        result = generate(options_from_mapping(requested, defaults))
    except (ConfigurationError, InfeasibleLevelError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    if args.as_json:
        print(json.dumps(result.to_dict()))
    else:
        print(result.to_ascii())
        print(
            f"seed={result.seed} spawns={len(result.spawn_points)} keys={len(result.key_spawns)} "
            f"doors={len(result.door_positions)} exit=({result.exit_position.x},{result.exit_position.y})"
        )
    return 0


def _paint(text, colour: str) -> str:
    return f"{colour}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else str(text)


def _banner(host: str, port: int, debug: bool) -> str:
    rule = _paint("-" * 36, Fore.MAGENTA)
    rows = [("Host", host), ("Port", port), ("Debug", "on" if debug else "off"), ("Version", __version__)]
    body = [f"  {_paint(k + ':', Fore.YELLOW):<12} {_paint(v, Fore.GREEN)}" for k, v in rows]
    return "\n".join([rule, "  " + _paint("mazeforge server", Fore.CYAN + Style.BRIGHT), rule, *body, rule, ""])


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate_command(args)

    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "3001"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from mazeforge.logging_utils import log
    from mazeforge.server import start_server

    print(_banner(host, port, debug))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
