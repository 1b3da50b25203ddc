"""Formatting helpers for tree rows and workspace labels."""

from __future__ import annotations

from ..source_pane.text import sanitize_terminal_text
from ..ui_theme import DEFAULT_THEME, UITheme
from .types import TreeRow

WORKSPACE_PATH_DISPLAY_MAX = 40
WORKSPACE_PATH_DISPLAY_TAIL = 38


def format_file_size(size_bytes: int) -> str:
    """Return a human-readable size such as ``512 B`` or ``1.5 KB``."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    if size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"


def display_workspace_path(path: str | None) -> str:
    """Shorten long workspace paths to an ellipsis plus their tail."""
    if not path:
        return "No workspace selected"
    if len(path) > WORKSPACE_PATH_DISPLAY_MAX:
        return "…" + path[-WORKSPACE_PATH_DISPLAY_TAIL:]
    return path


def highlight_substring(text: str, query: str) -> str:
    """Highlight first case-insensitive substring match in ``text``.

    The span is measured on ``text`` itself, since casefolding may change
    length (``ß`` folds to ``ss``).
    """
    if not query:
        return text
    folded_query = query.casefold()
    for start in range(len(text)):
        folded = ""
        for end in range(start + 1, len(text) + 1):
            folded += text[end - 1].casefold()
            if folded == folded_query:
                return text[:start] + "\033[7;1m" + text[start:end] + "\033[27;22m" + text[end:]
            if not folded_query.startswith(folded):
                break
    return text


def format_tree_row(
    row: TreeRow,
    search_query: str = "",
    show_size_labels: bool = True,
    theme: UITheme | None = None,
) -> str:
    """Render one tree row as ANSI-styled display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    marker_color = active_theme.tree_marker
    # Plain output carries no highlight escapes.
    query = search_query if active_theme.reset else ""
    name = highlight_substring(sanitize_terminal_text(row.node.name), query)
    selected = f"{active_theme.tree_selected}>{reset} " if row.is_selected else ""

    if row.is_dir:
        indent = "  " * (row.depth - 1)
        marker = "▾ " if row.is_expanded else "▸ "
        return f"{indent}{selected}{marker_color}{marker}{reset}{active_theme.tree_dir}{name}/{reset}"

    # Align file names under the parent directory arrow column.
    indent = "  " * (row.depth - 1)
    size_label = ""
    if show_size_labels and row.node.size_bytes is not None:
        warning = f"{active_theme.tree_warning}⚠ {reset}" if row.node.is_too_large else ""
        size_label = f" {warning}{active_theme.tree_size}[{format_file_size(row.node.size_bytes)}]{reset}"
    elif row.node.is_too_large:
        size_label = f" {active_theme.tree_warning}⚠{reset}"
    return f"{indent}{selected}  {active_theme.tree_file_default}{name}{reset}{size_label}"


__all__ = [
    "format_file_size",
    "display_workspace_path",
    "highlight_substring",
    "format_tree_row",
]
