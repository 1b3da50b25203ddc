"""File content formatting, decoding and content-view rendering."""

from __future__ import annotations

from .content import (
    LANGUAGE_BY_EXTENSION,
    PLAINTEXT_LANGUAGE,
    FormattedContent,
    file_extension,
    file_name_for_path,
    format_content,
    language_for_path,
)
from .rendering import format_content_header, render_content_view, render_file_error, render_numbered_lines
from .text import decode_text, sanitize_terminal_text

__all__ = [
    "LANGUAGE_BY_EXTENSION",
    "PLAINTEXT_LANGUAGE",
    "FormattedContent",
    "file_extension",
    "file_name_for_path",
    "format_content",
    "language_for_path",
    "format_content_header",
    "render_content_view",
    "render_file_error",
    "render_numbered_lines",
    "decode_text",
    "sanitize_terminal_text",
]
