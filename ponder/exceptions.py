"""Error conditions raised by the workspace collaborators."""

from __future__ import annotations


class PonderError(Exception):
    """Base exception for ponder errors."""


class TreeUnavailableError(PonderError):
    """Raised when a workspace tree cannot be listed."""

    def __init__(self, root: str, message: str) -> None:
        self.root = root
        self.message = message
        super().__init__(message)


class FileUnreadableError(PonderError):
    """Raised when a workspace file cannot be shown as text."""

    def __init__(self, rel_path: str, message: str) -> None:
        self.rel_path = rel_path
        self.message = message
        super().__init__(message)


__all__ = [
    "PonderError",
    "TreeUnavailableError",
    "FileUnreadableError",
]
