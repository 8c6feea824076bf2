"""CLI argument, config merging and exit-status tests.

Verifies how ``lazybrowse.cli.main`` resolves the start path and options,
and that startup and terminal failures turn into non-zero exits.
"""

from __future__ import annotations

import tempfile
import termios
import unittest
from pathlib import Path
from unittest import mock

from lazybrowse import cli
from lazybrowse.config import BrowserConfig
from lazybrowse.lister import ListError
from lazybrowse.terminal import TerminalSessionError


class CliMainTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("lazybrowse.cli.load_browser_config", return_value=BrowserConfig())
        patcher.start()
        self.addCleanup(patcher.stop)
        logging_patcher = mock.patch("lazybrowse.cli.configure_logging")
        logging_patcher.start()
        self.addCleanup(logging_patcher.stop)

    def test_defaults_to_current_directory(self) -> None:
        with mock.patch("lazybrowse.cli.run_browser") as run_browser:
            cli.main([])

        path, config = run_browser.call_args.args
        self.assertEqual(path, Path("."))
        self.assertEqual(config, BrowserConfig())
        self.assertFalse(run_browser.call_args.kwargs["no_color"])

    def test_options_override_config(self) -> None:
        with mock.patch("lazybrowse.cli.run_browser") as run_browser:
            cli.main(
                [
                    "/tmp",
                    "--wrap-selection",
                    "--no-show-hidden",
                    "--preview-lines",
                    "7",
                    "--style",
                    "default",
                    "--theme",
                    "ocean",
                    "--no-color",
                ]
            )

        path, config = run_browser.call_args.args
        self.assertEqual(path, Path("/tmp"))
        self.assertEqual(
            config,
            BrowserConfig(
                wrap_selection=True,
                preview_lines=7,
                show_hidden=False,
                sort_entries=True,
                style="default",
                theme="ocean",
            ),
        )
        self.assertTrue(run_browser.call_args.kwargs["no_color"])

    def test_invalid_preview_lines_is_rejected(self) -> None:
        with mock.patch("lazybrowse.cli.run_browser") as run_browser, mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["--preview-lines", "0"])

        self.assertEqual(ctx.exception.code, 2)
        run_browser.assert_not_called()

    def test_unlistable_start_path_exits_non_zero(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(missing)])

        self.assertIn("missing", str(ctx.exception.code))

    def test_non_tty_stdin_exits_non_zero(self) -> None:
        with mock.patch("lazybrowse.cli.run_browser", side_effect=termios.error(25, "Inappropriate ioctl")):
            with self.assertRaises(SystemExit) as ctx:
                cli.main([])

        self.assertEqual(ctx.exception.code, "lazybrowse: stdin is not a terminal")

    def test_terminal_session_errors_exit_non_zero(self) -> None:
        for error in (TerminalSessionError("terminal input closed"), OSError(5, "Input/output error")):
            with mock.patch("lazybrowse.cli.run_browser", side_effect=error):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main([])
            self.assertTrue(str(ctx.exception.code).startswith("lazybrowse: terminal error:"))

    def test_list_error_message_is_reported(self) -> None:
        error = ListError(Path("/nope"), "No such file or directory")
        with mock.patch("lazybrowse.cli.run_browser", side_effect=error):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["/nope"])

        self.assertEqual(ctx.exception.code, "lazybrowse: cannot open /nope: No such file or directory")


class RunBrowserTests(unittest.TestCase):
    def test_run_browser_lists_start_path_before_touching_terminal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "b.txt").write_text("", encoding="utf-8")
            (root / ".hidden").write_text("", encoding="utf-8")
            (root / "a").mkdir()

            with mock.patch("lazybrowse.app.TerminalController") as controller_cls, mock.patch(
                "lazybrowse.app.run_main_loop"
            ) as loop_mock, mock.patch("lazybrowse.app.sys") as sys_mock, mock.patch(
                "lazybrowse.app.os.isatty", return_value=True
            ):
                sys_mock.stdin.fileno.return_value = 10
                sys_mock.stdout.fileno.return_value = 11
                from lazybrowse.app import run_browser

                state = run_browser(root, BrowserConfig(show_hidden=False, wrap_selection=True))

        controller_cls.assert_called_once_with(10, 11)
        loop_mock.assert_called_once()
        self.assertEqual([entry.name for entry in state.entries], ["a", "b.txt"])
        self.assertTrue(state.wrap_selection)
        self.assertEqual(state.current_path, root.resolve())
        settings = loop_mock.call_args.args[3]
        self.assertEqual(settings.max_lines, 20)
        self.assertFalse(settings.no_color)

    def test_run_browser_disables_colour_when_stdout_is_not_a_tty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazybrowse.app.TerminalController"), mock.patch(
                "lazybrowse.app.run_main_loop"
            ) as loop_mock, mock.patch("lazybrowse.app.sys"), mock.patch(
                "lazybrowse.app.os.isatty", return_value=False
            ):
                from lazybrowse.app import run_browser

                run_browser(Path(tmp), BrowserConfig())

        settings = loop_mock.call_args.args[3]
        theme = loop_mock.call_args.args[4]
        self.assertTrue(settings.no_color)
        self.assertEqual(theme.name, "plain")


if __name__ == "__main__":
    unittest.main()
