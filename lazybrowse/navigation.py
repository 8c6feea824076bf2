"""Navigation state machine for the directory browser.

``NavigationState`` owns the current directory, its entry list, the selection
cursor and the list scroll window. Every transition either applies fully or
leaves the state untouched, and the selected row always stays inside the
visible window.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .commands import Command
from .lister import Entry, ListError, list_directory

logger = logging.getLogger(__name__)

Lister = Callable[[Path], list[Entry]]


def canonical_path(path: Path) -> Path:
    """Return an absolute, symlink-resolved form of ``path``."""
    try:
        return Path(path).resolve()
    except (OSError, RuntimeError):
        return Path(path).absolute()


@dataclass
class NavigationState:
    current_path: Path
    entries: list[Entry]
    selected_index: int = 0
    scroll_offset: int = 0
    viewport_height: int = 1
    wrap_selection: bool = False
    status_message: str = ""
    finished: bool = False
    lister: Lister = field(default=list_directory, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.viewport_height = max(1, int(self.viewport_height))

    @classmethod
    def open(
        cls,
        path: Path,
        *,
        viewport_height: int = 1,
        wrap_selection: bool = False,
        lister: Lister = list_directory,
    ) -> NavigationState:
        """List ``path`` and build the initial state; raises ``ListError``."""
        root = canonical_path(path)
        entries = list(lister(root))
        logger.info("browsing %s (%d entries)", root, len(entries))
        return cls(
            current_path=root,
            entries=entries,
            viewport_height=viewport_height,
            wrap_selection=wrap_selection,
            lister=lister,
        )

    @property
    def selected_entry(self) -> Entry | None:
        if not self.entries:
            return None
        return self.entries[self.selected_index]

    def _follow_selection(self) -> None:
        if self.selected_index < self.scroll_offset:
            self.scroll_offset = self.selected_index
        elif self.selected_index >= self.scroll_offset + self.viewport_height:
            self.scroll_offset = self.selected_index - self.viewport_height + 1

    def move_down(self) -> bool:
        """Advance the selection one row; returns whether it moved."""
        if not self.entries:
            return False
        last = len(self.entries) - 1
        if self.wrap_selection:
            target = (self.selected_index + 1) % len(self.entries)
        else:
            target = min(self.selected_index + 1, last)
        if target == self.selected_index:
            return False
        self.selected_index = target
        self._follow_selection()
        return True

    def move_up(self) -> bool:
        """Move the selection back one row; returns whether it moved."""
        if not self.entries:
            return False
        if self.wrap_selection:
            target = len(self.entries) - 1 if self.selected_index == 0 else self.selected_index - 1
        else:
            target = max(self.selected_index - 1, 0)
        if target == self.selected_index:
            return False
        self.selected_index = target
        self._follow_selection()
        return True

    def _change_directory(self, target: Path) -> None:
        # Listing first keeps the old state intact when it raises.
        entries = list(self.lister(target))
        self.current_path = target
        self.entries = entries
        self.selected_index = 0
        self.scroll_offset = 0
        logger.info("changed directory to %s (%d entries)", target, len(entries))

    def enter(self) -> bool:
        """Descend into the selected directory.

        Files are ignored. Raises ``ListError`` without touching the state when
        the directory cannot be listed.
        """
        entry = self.selected_entry
        if entry is None or not entry.is_dir:
            return False
        self._change_directory(canonical_path(entry.full_path))
        return True

    def ascend(self) -> bool:
        """Move to the parent directory; no-op at a filesystem root."""
        current = canonical_path(self.current_path)
        parent = current.parent
        if parent == current:
            return False
        self._change_directory(parent)
        return True

    def set_viewport_height(self, rows: int) -> bool:
        """Resize the list window and re-clamp the scroll offset.

        The window is pulled back so it never starts past the last full page.
        """
        rows = max(1, int(rows))
        previous = (self.viewport_height, self.scroll_offset)
        self.viewport_height = rows
        max_offset = max(0, len(self.entries) - rows)
        self.scroll_offset = max(0, min(self.scroll_offset, max_offset))
        self._follow_selection()
        return previous != (self.viewport_height, self.scroll_offset)


def dispatch(state: NavigationState, command: Command) -> bool:
    """Apply ``command`` to ``state`` and return whether the loop should stop.

    Listing failures are kept on ``state.status_message`` until the next
    command arrives.
    """
    if state.finished:
        return True
    state.status_message = ""
    if command is Command.QUIT:
        state.finished = True
        return True
    try:
        if command is Command.MOVE_UP:
            state.move_up()
        elif command is Command.MOVE_DOWN:
            state.move_down()
        elif command is Command.ENTER:
            state.enter()
        elif command is Command.ASCEND:
            state.ascend()
    except ListError as exc:
        state.status_message = str(exc)
    return False


__all__ = [
    "Lister",
    "NavigationState",
    "canonical_path",
    "dispatch",
]
