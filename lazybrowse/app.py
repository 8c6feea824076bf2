"""Runtime composition layer for lazybrowse.

Builds the initial navigation state from config, binds the terminal and
starts the event loop.
"""

from __future__ import annotations

import os
import sys
from functools import partial
from pathlib import Path

from .config import BrowserConfig
from .lister import list_directory
from .loop import PreviewSettings, run_main_loop
from .navigation import NavigationState
from .terminal import TerminalController
from .ui_theme import resolve_theme


def build_initial_state(path: Path, config: BrowserConfig) -> NavigationState:
    """List ``path`` with the configured lister options; raises ``ListError``."""
    lister = partial(
        list_directory,
        show_hidden=config.show_hidden,
        sort_entries=config.sort_entries,
    )
    return NavigationState.open(
        path,
        wrap_selection=config.wrap_selection,
        lister=lister,
    )


def run_browser(path: Path, config: BrowserConfig, no_color: bool = False) -> NavigationState:
    """Browse from ``path`` until the user quits; returns the final state.

    ``ListError`` (unlistable start path), ``termios.error`` (stdin is not a
    terminal), ``TerminalSessionError`` and ``OSError`` propagate to the caller.
    """
    state = build_initial_state(path, config)
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    colorless = no_color or not os.isatty(stdout_fd)
    settings = PreviewSettings(
        max_lines=config.preview_lines,
        style=config.style,
        no_color=colorless,
    )
    run_main_loop(
        state,
        terminal,
        stdin_fd,
        settings,
        resolve_theme(config.theme, no_color=colorless),
    )
    return state
