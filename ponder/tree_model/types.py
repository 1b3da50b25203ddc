"""Tree row datatypes used by navigation and rendering."""

from __future__ import annotations

from dataclasses import dataclass

from ..file_tree_model.types import TreeNode


@dataclass(frozen=True)
class TreeRow:
    """One rendered row in the tree pane.

    ``depth`` is 1 for direct children of the root. ``is_expanded`` is always
    ``False`` for files.
    """

    node: TreeNode
    depth: int
    is_expanded: bool = False
    is_selected: bool = False

    @property
    def path(self) -> str:
        return self.node.path

    @property
    def is_dir(self) -> bool:
        return self.node.is_dir


__all__ = ["TreeRow"]
