"""Key-to-command mapping tests."""

from __future__ import annotations

import unittest

from lazybrowse.commands import Command, command_for_key


class CommandForKeyTests(unittest.TestCase):
    def test_fixed_bindings(self) -> None:
        self.assertIs(command_for_key("q"), Command.QUIT)
        self.assertIs(command_for_key("UP"), Command.MOVE_UP)
        self.assertIs(command_for_key("DOWN"), Command.MOVE_DOWN)
        self.assertIs(command_for_key("ENTER"), Command.ENTER)
        self.assertIs(command_for_key("BACKSPACE"), Command.ASCEND)

    def test_unrecognized_keys_are_noops(self) -> None:
        for key in ("Q", "x", "LEFT", "RIGHT", "ESC", "TAB", "CTRL_C", " "):
            self.assertIs(command_for_key(key), Command.NOOP, key)


if __name__ == "__main__":
    unittest.main()
