"""Command-line front door for lazybrowse.

Parses CLI options, merges them over the persisted config, and dispatches
into the interactive browser. Startup and terminal failures become a
non-zero exit with a one-line message.
"""

from __future__ import annotations

import argparse
import logging
import termios
from dataclasses import replace
from pathlib import Path

from .app import run_browser
from .config import BrowserConfig, load_browser_config
from .lister import ListError
from .logs import configure_logging, resolve_log_path
from .terminal import TerminalSessionError
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazybrowse",
        description="Browse directories in the terminal with a file preview pane.",
    )
    parser.add_argument("path", nargs="?", default=".", help="Directory to start in. Defaults to '.'.")
    parser.add_argument(
        "--wrap-selection",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Wrap the selection around at the list ends instead of stopping.",
    )
    parser.add_argument(
        "--show-hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="List dot-files.",
    )
    parser.add_argument(
        "--preview-lines",
        type=_positive_int,
        default=None,
        help="Number of lines shown in the file preview.",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for previews.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file.")
    return parser


def merge_config(config: BrowserConfig, args: argparse.Namespace) -> BrowserConfig:
    """Overlay explicitly given CLI options on the loaded config."""
    overrides: dict[str, object] = {}
    if args.wrap_selection is not None:
        overrides["wrap_selection"] = args.wrap_selection
    if args.show_hidden is not None:
        overrides["show_hidden"] = args.show_hidden
    if args.preview_lines is not None:
        overrides["preview_lines"] = args.preview_lines
    if args.style:
        overrides["style"] = args.style
    if args.theme:
        overrides["theme"] = args.theme
    return replace(config, **overrides) if overrides else config


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the browser.

    Returns normally on a clean quit. Raises ``SystemExit`` with a message when
    the start directory cannot be listed or the terminal session fails.
    """
    args = build_parser().parse_args(argv)
    configure_logging(resolve_log_path(args.log_file))
    config = merge_config(load_browser_config(), args)
    path = Path(args.path)

    try:
        run_browser(path, config, no_color=args.no_color)
    except ListError as exc:
        raise SystemExit(f"lazybrowse: {exc}") from exc
    except termios.error as exc:
        raise SystemExit("lazybrowse: stdin is not a terminal") from exc
    except (TerminalSessionError, OSError) as exc:
        logger.exception("terminal session failed")
        raise SystemExit(f"lazybrowse: terminal error: {exc}") from exc


if __name__ == "__main__":
    main()
