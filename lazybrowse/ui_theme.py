"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes for the list pane, metadata and status row.
Syntax highlighting style for previews remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    divider: str
    reverse: str
    reset: str
    list_marker: str
    list_dir: str
    list_file: str
    meta_label: str
    placeholder: str
    status_error: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    list_marker="\033[38;5;44m",
    list_dir="\033[1;32m",
    list_file="\033[38;5;252m",
    meta_label="\033[1;38;5;81m",
    placeholder="\033[2;38;5;250m",
    status_error="\033[1;31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    list_marker="\033[38;5;39m",
    list_dir="\033[1;38;5;45m",
    list_file="\033[38;5;252m",
    meta_label="\033[1;38;5;45m",
    placeholder="\033[2;38;5;110m",
    status_error="\033[1;38;5;203m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="\033[7m",
    reset="\033[0m",
    list_marker="",
    list_dir="",
    list_file="",
    meta_label="",
    placeholder="",
    status_error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
