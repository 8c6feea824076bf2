"""Text decoding, sanitization, and Pygments colouring for previews.

Neutralizes terminal control bytes so previewed files cannot move the cursor
or ring the bell, then optionally colours the text for the preview pane.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"
TEXT_ENCODINGS: tuple[str, ...] = ("utf-8", "utf-8-sig", "latin-1")

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}


def decode_text(raw: bytes) -> str:
    """Decode bytes trying UTF-8, UTF-8 with BOM, then latin-1."""
    for encoding in TEXT_ENCODINGS:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    return raw.decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, otherwise the default style."""
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Colour ``source`` with the lexer matching ``path``'s filename.

    Unknown file types use the plain text lexer. Leading and trailing blank lines
    are kept so rows line up with the uncoloured text; the trailing newline
    Pygments appends is dropped when the input had none.
    """
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    rendered = highlight(source, lexer, _formatter_for_style(normalize_style(style)))
    if not source.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered
