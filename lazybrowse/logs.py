"""Opt-in debug logging.

The browser owns the terminal while running, so records only ever go to a
file chosen with ``--log-file`` or ``LAZYBROWSE_LOG``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_ENV_VAR = "LAZYBROWSE_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_path(cli_value: str | None) -> Path | None:
    """Pick the log file from the CLI flag, then the environment."""
    raw = cli_value if cli_value else os.environ.get(LOG_ENV_VAR, "").strip()
    if not raw:
        return None
    return Path(raw).expanduser()


def configure_logging(log_path: Path | None, level: int = logging.DEBUG) -> logging.Handler | None:
    """Attach a file handler to the package logger when ``log_path`` is set."""
    package_logger = logging.getLogger("lazybrowse")
    if log_path is None:
        package_logger.addHandler(logging.NullHandler())
        return None
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    # Keep records away from a root stderr handler while the TUI is active.
    package_logger.propagate = False
    return handler
