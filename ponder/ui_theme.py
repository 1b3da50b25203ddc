"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the tree rows and the content view. The plain
theme is used whenever color output is disabled.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    tree_marker: str
    tree_dir: str
    tree_file_default: str
    tree_size: str
    tree_warning: str
    tree_selected: str
    content_header: str
    content_language: str
    content_line_number: str
    status_error: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_file_default="\033[38;5;252m",
    tree_size="\033[38;5;109m",
    tree_warning="\033[38;5;214m",
    tree_selected="\033[7m",
    content_header="\033[1;38;5;81m",
    content_language="\033[38;5;229m",
    content_line_number="\033[2;38;5;250m",
    status_error="\033[1;31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    tree_marker="\033[38;5;39m",
    tree_dir="\033[1;38;5;45m",
    tree_file_default="\033[38;5;252m",
    tree_size="\033[38;5;73m",
    tree_warning="\033[38;5;215m",
    tree_selected="\033[7m",
    content_header="\033[1;38;5;45m",
    content_language="\033[38;5;117m",
    content_line_number="\033[2;38;5;110m",
    status_error="\033[1;38;5;203m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    tree_marker="",
    tree_dir="",
    tree_file_default="",
    tree_size="",
    tree_warning="",
    tree_selected="",
    content_header="",
    content_language="",
    content_line_number="",
    status_error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    candidate = str(name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "resolve_theme",
]
