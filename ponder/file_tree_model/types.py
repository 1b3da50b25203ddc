"""Domain datatypes for workspace file tree nodes."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "dir"


@dataclass(frozen=True)
class TreeNode:
    """One immutable file or directory in a listed workspace.

    ``path`` is workspace-root-relative with ``/`` separators; the root node
    uses ``""``. ``children`` is only meaningful for directories, while
    ``size_bytes`` and ``is_too_large`` are only meaningful for files.
    """

    name: str
    path: str
    kind: NodeKind
    children: tuple["TreeNode", ...] = ()
    size_bytes: int | None = None
    is_too_large: bool = False

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @classmethod
    def directory(cls, name: str, path: str, children: tuple["TreeNode", ...] = ()) -> "TreeNode":
        return cls(name=name, path=path, kind=NodeKind.DIRECTORY, children=tuple(children))

    @classmethod
    def file(
        cls,
        name: str,
        path: str,
        size_bytes: int | None = None,
        is_too_large: bool = False,
    ) -> "TreeNode":
        return cls(
            name=name,
            path=path,
            kind=NodeKind.FILE,
            size_bytes=size_bytes,
            is_too_large=is_too_large,
        )


def iter_tree(node: TreeNode) -> Iterator[TreeNode]:
    """Yield ``node`` and all of its descendants in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if current.is_dir:
            stack.extend(reversed(current.children))


def find_node(root: TreeNode, path: str) -> TreeNode | None:
    """Return the node with ``path`` under ``root``, or ``None``."""
    for node in iter_tree(root):
        if node.path == path:
            return node
    return None


__all__ = [
    "NodeKind",
    "TreeNode",
    "iter_tree",
    "find_node",
]
