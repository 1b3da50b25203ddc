"""Numbered-line content model and extension-based language labels."""

from __future__ import annotations

from dataclasses import dataclass

PLAINTEXT_LANGUAGE = "plaintext"

LANGUAGE_BY_EXTENSION: dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "html": "html",
    "htm": "html",
    "css": "css",
    "scss": "scss",
    "less": "less",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "toml": "toml",
    "xml": "xml",
    "rs": "rust",
    "py": "python",
    "rb": "ruby",
    "go": "go",
    "sh": "shell",
    "bash": "shell",
    "zsh": "shell",
    "md": "markdown",
    "mdx": "markdown",
    "gitignore": "gitignore",
    "env": "dotenv",
}


@dataclass(frozen=True)
class FormattedContent:
    """File text split into display lines plus its language label."""

    lines: tuple[str, ...]
    language: str

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def line_number_width(self) -> int:
        return len(str(len(self.lines)))


def file_name_for_path(path: str) -> str:
    """Return the last ``/``-separated segment of ``path``."""
    return path.rsplit("/", 1)[-1] or path


def file_extension(path: str) -> str:
    """Return the lowercased text after the last ``.`` of the file name."""
    name = file_name_for_path(path)
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def language_for_path(path: str) -> str:
    """Map a file path to a display language label by extension."""
    return LANGUAGE_BY_EXTENSION.get(file_extension(path), PLAINTEXT_LANGUAGE)


def format_content(path: str, raw_text: str) -> FormattedContent:
    """Split ``raw_text`` on ``\\n`` and attach the language for ``path``.

    The split is deliberately naive: text ending in a newline yields a final
    empty line, and empty text yields a single empty line.
    """
    return FormattedContent(
        lines=tuple(raw_text.split("\n")),
        language=language_for_path(path),
    )


__all__ = [
    "PLAINTEXT_LANGUAGE",
    "LANGUAGE_BY_EXTENSION",
    "FormattedContent",
    "file_name_for_path",
    "file_extension",
    "language_for_path",
    "format_content",
]
