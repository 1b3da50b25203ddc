"""Visible-row projection of a tree under a filter and expansion set."""

from __future__ import annotations

from collections.abc import Container

from ..file_tree_model.types import TreeNode
from .filtering import matching_paths, visible_children
from .types import TreeRow


def build_visible_rows(
    tree: TreeNode,
    filter_text: str,
    expanded: Container[str],
    selected_path: str | None = None,
) -> list[TreeRow]:
    """Flatten ``tree`` into pre-order rows starting at the root's children.

    A directory's children are emitted only when its path is in ``expanded``;
    at every level children are narrowed with ``visible_children``. The root
    itself is never a row, but its own expansion is not required.
    """
    matched = matching_paths(tree, filter_text) if filter_text else None
    rows: list[TreeRow] = []

    def walk(directory: TreeNode, depth: int) -> None:
        """Depth-first traversal adding visible children for expanded directories."""
        for child in visible_children(directory, filter_text, matched):
            is_open = child.is_dir and child.path in expanded
            rows.append(
                TreeRow(
                    node=child,
                    depth=depth,
                    is_expanded=is_open,
                    is_selected=selected_path is not None and child.path == selected_path,
                )
            )
            if is_open:
                walk(child, depth + 1)

    if tree.is_dir:
        walk(tree, 1)
    return rows


__all__ = [
    "build_visible_rows",
]
