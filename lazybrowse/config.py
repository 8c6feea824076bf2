"""Persistent JSON config for browser preferences.

Stores selection wrapping, preview length, listing and colour preferences.
Malformed or missing config falls back to defaults key by key.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .inspector import PREVIEW_MAX_LINES
from .syntax import DEFAULT_STYLE

APP_NAME = "lazybrowse"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "LAZYBROWSE_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


@dataclass(frozen=True)
class BrowserConfig:
    wrap_selection: bool = False
    preview_lines: int = PREVIEW_MAX_LINES
    show_hidden: bool = True
    sort_entries: bool = True
    style: str = DEFAULT_STYLE
    theme: str = "default"


def config_path() -> Path:
    """Return the config file location, honouring ``LAZYBROWSE_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(config_path().read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _load_positive_int(data: dict[str, object], key: str, default: int) -> int:
    """Accept only real positive integers; booleans are rejected."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _load_name(data: dict[str, object], key: str, default: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def load_browser_config() -> BrowserConfig:
    """Build a ``BrowserConfig`` from disk, validating each key on its own."""
    data = load_config()
    defaults = BrowserConfig()
    return BrowserConfig(
        wrap_selection=_load_bool(data, "wrap_selection", defaults.wrap_selection),
        preview_lines=_load_positive_int(data, "preview_lines", defaults.preview_lines),
        show_hidden=_load_bool(data, "show_hidden", defaults.show_hidden),
        sort_entries=_load_bool(data, "sort_entries", defaults.sort_entries),
        style=_load_name(data, "style", defaults.style),
        theme=_load_name(data, "theme", defaults.theme),
    )


__all__ = [
    "BrowserConfig",
    "CONFIG_ENV_VAR",
    "CONFIG_PATH",
    "config_path",
    "load_browser_config",
    "load_config",
]
