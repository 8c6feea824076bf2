"""Main interactive event loop for the terminal UI.

Each iteration sizes the viewport, paints one frame, blocks for exactly one
key and applies the mapped command. The whole loop runs inside the terminal
controller's ``raw_mode`` so teardown happens on quit and on errors alike.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from .commands import command_for_key
from .input import read_key
from .navigation import NavigationState, dispatch
from .render import (
    RenderContext,
    build_side_pane,
    clamp_left_width,
    compute_left_width,
    list_pane_rows,
    render_frame,
)
from .terminal import TerminalController, TerminalSessionError
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreviewSettings:
    """How the side pane previews the selected file."""

    max_lines: int
    style: str
    no_color: bool = False


def build_render_context(
    state: NavigationState,
    term: os.terminal_size,
    theme: UITheme,
    settings: PreviewSettings,
    side_pane: Callable[..., list[str]] = build_side_pane,
) -> RenderContext:
    """Snapshot ``state`` into a render context for one frame."""
    left_width = clamp_left_width(term.columns, compute_left_width(term.columns))
    side_lines = side_pane(
        state.selected_entry,
        max_lines=settings.max_lines,
        style=settings.style,
        theme=theme,
        no_color=settings.no_color,
    )
    return RenderContext(
        current_path=state.current_path,
        entries=state.entries,
        selected_index=state.selected_index,
        scroll_offset=state.scroll_offset,
        viewport_height=state.viewport_height,
        width=term.columns,
        left_width=left_width,
        side_lines=side_lines,
        status_message=state.status_message,
        theme=theme,
    )


def run_main_loop(
    state: NavigationState,
    terminal: TerminalController,
    stdin_fd: int,
    settings: PreviewSettings,
    theme: UITheme = DEFAULT_THEME,
    *,
    get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size,
    read_key_fn: Callable[[int], str] = read_key,
    render_fn: Callable[[RenderContext, int], None] = render_frame,
    side_pane: Callable[..., list[str]] = build_side_pane,
) -> None:
    """Run the browser until a quit command or a terminal I/O failure.

    Raises ``TerminalSessionError`` when stdin reaches end of file; ``OSError``
    from reads or writes propagates. The terminal is restored in every case.
    """
    with terminal.raw_mode():
        logger.info("session started in %s", state.current_path)
        while True:
            term = get_terminal_size((80, 24))
            state.set_viewport_height(list_pane_rows(term.lines))
            render_fn(
                build_render_context(state, term, theme, settings, side_pane),
                terminal.stdout_fd,
            )

            key = read_key_fn(stdin_fd)
            if key == "":
                raise TerminalSessionError("terminal input closed")
            if dispatch(state, command_for_key(key)):
                break
    logger.info("session ended in %s", state.current_path)


__all__ = [
    "PreviewSettings",
    "build_render_context",
    "run_main_loop",
]
