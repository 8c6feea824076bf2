"""Frame composition for the split list/preview terminal view.

Builds one full ANSI frame from a ``RenderContext`` and writes it in a single
call. Nothing here mutates navigation state.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .ansi import clip_ansi_line, display_width, fit_ansi_line
from .inspector import MetadataSummary, PreviewResult, metadata, metadata_lines, preview
from .lister import Entry
from .syntax import colorize_source
from .ui_theme import DEFAULT_THEME, UITheme

STATUS_HINT = "│ ↑↓ move  ⏎ open  ⌫ up  q quit"
DIRECTORY_PREVIEW_MESSAGE = "<directory: no preview>"
EMPTY_DIRECTORY_MESSAGE = "<empty directory>"


@dataclass
class RenderContext:
    current_path: Path
    entries: list[Entry]
    selected_index: int
    scroll_offset: int
    viewport_height: int
    width: int
    left_width: int
    side_lines: list[str] = field(default_factory=list)
    status_message: str = ""
    theme: UITheme = DEFAULT_THEME


def compute_left_width(total_width: int) -> int:
    if total_width <= 60:
        return max(16, total_width // 2)
    return max(20, min(40, total_width // 3))


def clamp_left_width(total_width: int, desired_left: int) -> int:
    max_possible = max(1, total_width - 2)
    min_left = max(12, min(20, total_width - 12))
    max_left = max(min_left, total_width - 12)
    max_left = min(max_left, max_possible)
    min_left = min(min_left, max_left)
    return max(min_left, min(desired_left, max_left))


def list_pane_rows(terminal_lines: int) -> int:
    """Return entry rows available above the status row."""
    return max(1, terminal_lines - 1)


def selected_with_ansi(text: str, theme: UITheme = DEFAULT_THEME) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    reverse, reset = theme.reverse, theme.reset
    return reverse + text.replace(reset, reset + reverse) + reset


def format_entry(entry: Entry, theme: UITheme) -> str:
    """Format one list row; directories get a marker and trailing slash."""
    reset = theme.reset
    if entry.is_dir:
        return f"{theme.list_marker}▸ {reset}{theme.list_dir}{entry.name}/{reset}"
    return f"  {theme.list_file}{entry.name}{reset}"


def build_status_line(left_text: str, width: int, right_text: str = STATUS_HINT) -> str:
    """Left-align ``left_text`` and right-align ``right_text`` in display columns."""
    usable = max(1, width - 1)
    right_cols = display_width(right_text)
    if usable <= right_cols:
        return clip_ansi_line(left_text, usable)
    left = clip_ansi_line(left_text, max(0, usable - right_cols - 1))
    gap = " " * (usable - display_width(left) - right_cols)
    return f"{left}{gap}{right_text}"


def status_left_text(current_path: Path, selected_index: int, entry_count: int) -> str:
    if entry_count == 0:
        return f"{current_path} (empty)"
    return f"{current_path} ({selected_index + 1}/{entry_count})"


def build_side_pane(
    entry: Entry | None,
    *,
    max_lines: int,
    style: str,
    theme: UITheme,
    no_color: bool = False,
    preview_fn: Callable[..., PreviewResult] = preview,
    metadata_fn: Callable[[Path], MetadataSummary] = metadata,
) -> list[str]:
    """Return metadata and preview rows for the selected entry.

    Directories and empty listings never reach the inspector.
    """
    if entry is None:
        return []
    if entry.is_dir:
        return [
            f"{theme.meta_label}{entry.full_path}{theme.reset}",
            f"{theme.placeholder}{DIRECTORY_PREVIEW_MESSAGE}{theme.reset}",
        ]

    summary = metadata_fn(entry.full_path)
    meta = metadata_lines(summary)
    rows = [f"{theme.meta_label}{meta[0]}{theme.reset}"]
    rows.extend(meta[1:])
    rows.append(f"{theme.divider}{'─' * 200}{theme.reset}")

    result = preview_fn(entry.full_path, max_lines)
    if result.error is not None:
        rows.append(f"{theme.placeholder}{result.error}{theme.reset}")
        return rows
    if no_color or not result.lines:
        rows.extend(result.lines)
    else:
        rows.extend(colorize_source(result.text, entry.full_path, style).split("\n"))
    if result.truncated:
        rows.append(f"{theme.placeholder}…{theme.reset}")
    return rows


def build_frame(context: RenderContext) -> str:
    """Compose a full frame: list pane, divider, side pane, status row."""
    theme = context.theme
    width = max(2, context.width)
    left_width = max(1, min(context.left_width, width - 1))
    right_width = max(0, width - left_width - 1)
    rows = max(1, context.viewport_height)

    visible = context.entries[context.scroll_offset : context.scroll_offset + rows]
    out: list[str] = ["\033[H\033[J"]
    for row in range(rows):
        if visible and row < len(visible):
            cell = fit_ansi_line(format_entry(visible[row], theme), left_width)
            if context.scroll_offset + row == context.selected_index:
                cell = selected_with_ansi(cell, theme)
        elif not context.entries and row == 0:
            cell = fit_ansi_line(f"{theme.placeholder}{EMPTY_DIRECTORY_MESSAGE}{theme.reset}", left_width)
        else:
            cell = " " * left_width
        out.append(cell)
        out.append(f"{theme.divider}│{theme.reset}")
        side = context.side_lines[row] if row < len(context.side_lines) else ""
        out.append(fit_ansi_line(side, right_width))
        out.append("\r\n")

    if context.status_message:
        status = build_status_line(context.status_message, width)
        out.append(f"{theme.reverse}{theme.status_error}{status}{theme.reset}")
    else:
        left = status_left_text(context.current_path, context.selected_index, len(context.entries))
        out.append(f"{theme.reverse}{build_status_line(left, width)}{theme.reset}")
    return "".join(out)


def render_frame(context: RenderContext, stdout_fd: int | None = None) -> None:
    fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    os.write(fd, build_frame(context).encode("utf-8", errors="replace"))


__all__ = [
    "DIRECTORY_PREVIEW_MESSAGE",
    "EMPTY_DIRECTORY_MESSAGE",
    "RenderContext",
    "build_frame",
    "build_side_pane",
    "build_status_line",
    "clamp_left_width",
    "compute_left_width",
    "format_entry",
    "list_pane_rows",
    "render_frame",
    "selected_with_ansi",
]
