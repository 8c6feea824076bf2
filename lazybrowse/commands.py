"""Navigation commands and the fixed key map that produces them."""

from __future__ import annotations

from enum import Enum


class Command(Enum):
    """Closed set of actions the event loop can apply to navigation state."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    ENTER = "enter"
    ASCEND = "ascend"
    QUIT = "quit"
    NOOP = "noop"


KEY_COMMANDS: dict[str, Command] = {
    "q": Command.QUIT,
    "UP": Command.MOVE_UP,
    "DOWN": Command.MOVE_DOWN,
    "ENTER": Command.ENTER,
    "BACKSPACE": Command.ASCEND,
}


def command_for_key(key: str) -> Command:
    """Map one decoded key token to a command; unknown keys become ``NOOP``."""
    return KEY_COMMANDS.get(key, Command.NOOP)


__all__ = [
    "Command",
    "KEY_COMMANDS",
    "command_for_key",
]
