"""Filesystem scanning and file reading for workspace trees.

``list_tree`` builds the complete immutable tree for a workspace root.
``read_text_file`` loads one root-relative file as text after validating that
it stays inside the root, is not binary and fits the read budget.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ..exceptions import FileUnreadableError, TreeUnavailableError
from ..source_pane.text import decode_text
from .types import NodeKind, TreeNode

logger = logging.getLogger(__name__)

MAX_DEPTH = 10
MAX_NODES = 50_000
LARGE_FILE_THRESHOLD = 2 * 1024 * 1024
DEFAULT_MAX_READ_BYTES = 200 * 1024
BINARY_CHECK_BYTES = 8192
ALWAYS_IGNORED_DIRS = frozenset(
    {
        ".git",
        "node_modules",
        "dist",
        "build",
        "target",
        ".next",
        ".turbo",
        ".cache",
    }
)
ALLOWED_HIDDEN_DIRS = frozenset({".github", ".vscode"})
ALWAYS_IGNORED_FILES = frozenset({".DS_Store"})


@dataclass(frozen=True)
class DirectoryChild:
    """One scanned directory child that survived the ignore rules."""

    name: str
    path: Path
    is_dir: bool
    file_size: int | None


def safe_file_size(path: Path) -> int | None:
    """Return file size or ``None`` on stat failure."""
    try:
        return int(path.stat().st_size)
    except OSError:
        return None


def to_relative_posix_path(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` using ``/`` separators."""
    try:
        relative = path.relative_to(root)
    except ValueError:
        relative = path
    return relative.as_posix() if str(relative) != "." else ""


def _symlink_stays_inside(entry: os.DirEntry, root: Path) -> bool:
    """Return whether a symlinked file resolves to a file under ``root``."""
    try:
        target = Path(entry.path).resolve(strict=True)
    except (OSError, RuntimeError):
        return False
    return target.is_file() and target.is_relative_to(root)


def should_ignore_entry(entry: os.DirEntry, root: Path) -> bool:
    """Apply workspace ignore rules to one scandir entry."""
    name = entry.name
    try:
        if entry.is_symlink():
            if entry.is_dir(follow_symlinks=True):
                return True
            return not _symlink_stays_inside(entry, root)
        is_dir = entry.is_dir(follow_symlinks=False)
    except OSError:
        return True

    if is_dir:
        if name in ALWAYS_IGNORED_DIRS:
            return True
        if name.startswith("."):
            return name not in ALLOWED_HIDDEN_DIRS
        return False
    return name in ALWAYS_IGNORED_FILES


def list_directory_children(directory: Path, root: Path) -> list[DirectoryChild]:
    """List children of ``directory`` with directories first, then by name.

    Raises ``OSError`` when the directory cannot be scanned.
    """
    children: list[DirectoryChild] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if should_ignore_entry(entry, root):
                continue
            child_path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            children.append(
                DirectoryChild(
                    name=entry.name,
                    path=child_path,
                    is_dir=is_dir,
                    file_size=None if is_dir else safe_file_size(child_path),
                )
            )
    children.sort(key=lambda item: (not item.is_dir, item.name.lower()))
    return children


def is_binary_file(path: Path, check_bytes: int = BINARY_CHECK_BYTES) -> bool:
    """Return whether the first ``check_bytes`` of ``path`` contain a NUL byte."""
    with path.open("rb") as handle:
        return b"\x00" in handle.read(check_bytes)


def list_tree(root: str | os.PathLike[str]) -> TreeNode:
    """Build the full workspace tree rooted at ``root``.

    Raises ``TreeUnavailableError`` when the root is missing, is not a
    directory or cannot be scanned. Unreadable subdirectories are listed
    without children. Collection stops once ``MAX_NODES`` entries are seen.
    """
    root_text = os.fspath(root)
    root_path = Path(root_text)
    if not root_path.exists():
        raise TreeUnavailableError(root_text, f"Root path does not exist: {root_text}")
    if not root_path.is_dir():
        raise TreeUnavailableError(root_text, f"Root path is not a directory: {root_text}")
    try:
        resolved_root = root_path.resolve(strict=True)
    except OSError as exc:
        raise TreeUnavailableError(root_text, f"Failed to canonicalize root: {exc}") from exc

    node_count = 0

    def build_children(directory: Path, depth: int) -> tuple[TreeNode, ...]:
        nonlocal node_count
        try:
            children = list_directory_children(directory, resolved_root)
        except OSError as exc:
            if directory == resolved_root:
                raise TreeUnavailableError(root_text, f"Failed to read root directory: {exc}") from exc
            logger.debug("skipping unreadable directory %s: %s", directory, exc)
            return ()

        nodes: list[TreeNode] = []
        for child in children:
            if node_count >= MAX_NODES:
                break
            node_count += 1
            rel_path = to_relative_posix_path(child.path, resolved_root)
            if child.is_dir:
                grandchildren = build_children(child.path, depth + 1) if depth < MAX_DEPTH else ()
                nodes.append(TreeNode.directory(child.name, rel_path, grandchildren))
                continue
            size = child.file_size
            nodes.append(
                TreeNode.file(
                    child.name,
                    rel_path,
                    size_bytes=size,
                    is_too_large=size is not None and size > LARGE_FILE_THRESHOLD,
                )
            )
        return tuple(nodes)

    children = build_children(resolved_root, 1)
    if node_count >= MAX_NODES:
        logger.warning("tree for %s truncated at %d nodes", resolved_root, MAX_NODES)
    root_name = resolved_root.name or str(resolved_root)
    return TreeNode(name=root_name, path="", kind=NodeKind.DIRECTORY, children=children)


def _validate_path_within_root(path: Path, root: Path, rel_path: str) -> Path:
    try:
        canonical_root = root.resolve(strict=True)
    except OSError as exc:
        raise FileUnreadableError(rel_path, f"Failed to canonicalize root: {exc}") from exc
    try:
        canonical_path = path.resolve(strict=True)
    except OSError as exc:
        raise FileUnreadableError(rel_path, f"Failed to canonicalize path: {exc}") from exc
    if not canonical_path.is_relative_to(canonical_root):
        raise FileUnreadableError(rel_path, "Path traversal detected: path is outside workspace root")
    return canonical_path


def read_text_file(
    root: str | os.PathLike[str],
    rel_path: str,
    max_bytes: int | None = None,
) -> str:
    """Read the root-relative ``rel_path`` as text.

    Raises ``FileUnreadableError`` for paths outside the root, non-files,
    files larger than ``max_bytes`` (default ``DEFAULT_MAX_READ_BYTES``),
    binary content and I/O failures.
    """
    limit = DEFAULT_MAX_READ_BYTES if max_bytes is None else max_bytes
    root_path = Path(root)
    target = _validate_path_within_root(root_path.joinpath(*rel_path.split("/")), root_path, rel_path)

    if not target.is_file():
        raise FileUnreadableError(rel_path, f"Not a file: {rel_path}")
    try:
        size = target.stat().st_size
    except OSError as exc:
        raise FileUnreadableError(rel_path, f"Failed to read file metadata: {exc}") from exc
    if size > limit:
        raise FileUnreadableError(rel_path, f"File too large: {size} bytes (max: {limit} bytes)")

    try:
        if is_binary_file(target):
            raise FileUnreadableError(rel_path, "Cannot display binary file")
        raw = target.read_bytes()
    except OSError as exc:
        raise FileUnreadableError(rel_path, f"Failed to read file: {exc}") from exc
    return decode_text(raw)


__all__ = [
    "MAX_DEPTH",
    "MAX_NODES",
    "LARGE_FILE_THRESHOLD",
    "DEFAULT_MAX_READ_BYTES",
    "DirectoryChild",
    "safe_file_size",
    "to_relative_posix_path",
    "should_ignore_entry",
    "list_directory_children",
    "is_binary_file",
    "list_tree",
    "read_text_file",
]
