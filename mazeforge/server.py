"""
project: mazeforge
module: server.py
License: MIT

Server bootstrap: build the Flask app, route stdlib logging to
``<instance>/app.log`` and the console, then serve.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from mazeforge import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3


def start_server(host="0.0.0.0", port=3001, debug: bool = False):  # pragma: no cover (runtime only)
    """Run the development server until interrupted.

    ``debug=True`` turns on Flask's debugger and reloader.
    """
    app = create_app()
    log_path = _configure_logging(app.instance_path, level=logging.DEBUG if debug else logging.INFO)
    logging.getLogger(__name__).info("Serving mazes on %s:%s (log file %s)", host, port, log_path)
    app.run(host=host, port=port, debug=debug)


def _configure_logging(log_dir: str, level: int = logging.INFO) -> str:
    """Send root logging to a rotating ``app.log`` in ``log_dir`` plus stderr.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output. Returns the log file path.
    """
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "app.log")

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [
        RotatingFileHandler(log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS),
        logging.StreamHandler(),
    ]

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(level)
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)
        root.addHandler(h)
    return log_path
