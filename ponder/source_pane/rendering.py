"""Content-view rendering: file header plus numbered source lines."""

from __future__ import annotations

from ..ui_theme import DEFAULT_THEME, UITheme
from .content import FormattedContent, file_name_for_path
from .text import sanitize_terminal_text


def format_content_header(path: str, content: FormattedContent, theme: UITheme | None = None) -> str:
    """Render ``name  language  N lines`` header row."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    name = sanitize_terminal_text(file_name_for_path(path))
    count = content.line_count
    noun = "line" if count == 1 else "lines"
    return (
        f"{active_theme.content_header}{name}{reset}"
        f"  {active_theme.content_language}{content.language}{reset}"
        f"  {count} {noun}"
    )


def render_numbered_lines(content: FormattedContent, theme: UITheme | None = None) -> list[str]:
    """Render each line prefixed by a right-aligned 1-based line number."""
    active_theme = theme or DEFAULT_THEME
    width = content.line_number_width
    number_color = active_theme.content_line_number
    reset = active_theme.reset
    rows: list[str] = []
    for index, line in enumerate(content.lines, start=1):
        text = sanitize_terminal_text(line)
        rows.append(f"{number_color}{index:>{width}}{reset} {text}")
    return rows


def render_content_view(path: str, content: FormattedContent, theme: UITheme | None = None) -> str:
    """Render the full content view for ``path`` as newline-joined text."""
    rows = [format_content_header(path, content, theme)]
    rows.extend(render_numbered_lines(content, theme))
    return "\n".join(rows) + "\n"


def render_file_error(path: str | None, message: str, theme: UITheme | None = None) -> str:
    """Render the file-error view shown in place of file content."""
    active_theme = theme or DEFAULT_THEME
    rows: list[str] = []
    if path:
        rows.append(f"{active_theme.content_header}{sanitize_terminal_text(file_name_for_path(path))}{active_theme.reset}")
    rows.append(f"{active_theme.status_error}Failed to read file{active_theme.reset}")
    rows.append(sanitize_terminal_text(message))
    return "\n".join(rows) + "\n"


__all__ = [
    "format_content_header",
    "render_numbered_lines",
    "render_content_view",
    "render_file_error",
]
