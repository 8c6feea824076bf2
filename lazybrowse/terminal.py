"""Terminal control helpers for the browser session.

Owns the raw-mode lifecycle and alternate-screen switching. ``raw_mode`` is
the only way the loop enters TUI mode, so teardown runs on every exit path.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

logger = logging.getLogger(__name__)

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
LEAVE_TUI_SEQUENCE = b"\x1b[?25h\x1b[?1049l"


class TerminalSessionError(RuntimeError):
    """Raised when the terminal stops delivering input mid-session."""


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state; raises ``termios.error`` when stdin is not a tty."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._tui_active = False

    @property
    def tui_active(self) -> bool:
        return self._tui_active

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self._tui_active = True
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)
        logger.debug("terminal entered raw alternate-screen mode")

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen and restore tty state.

        The saved tty attributes are restored even when writing the escape
        sequence fails.
        """
        try:
            os.write(self.stdout_fd, LEAVE_TUI_SEQUENCE)
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
            self._tui_active = False
            logger.debug("terminal restored")

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()


__all__ = [
    "ENTER_TUI_SEQUENCE",
    "LEAVE_TUI_SEQUENCE",
    "TerminalController",
    "TerminalSessionError",
]
