"""Name-filter matching over immutable workspace trees.

Matching is a case-insensitive substring test against a node's own name.
Directories also match when any descendant matches, so ancestors of every
hit stay visible. The tree itself is never pruned or cloned: callers ask for
the visible children of one directory at a time.
"""

from __future__ import annotations

from collections.abc import Set

from ..file_tree_model.types import TreeNode


def _fold(text: str) -> str:
    return text.casefold()


def name_matches_filter(name: str, filter_text: str) -> bool:
    """Return whether ``filter_text`` occurs in ``name`` ignoring case."""
    return _fold(filter_text) in _fold(name)


def node_matches_filter(node: TreeNode, filter_text: str) -> bool:
    """Return whether ``node`` or any of its descendants matches ``filter_text``.

    An empty filter matches everything.
    """
    if not filter_text:
        return True
    folded_query = _fold(filter_text)

    def matches(current: TreeNode) -> bool:
        if folded_query in _fold(current.name):
            return True
        return current.is_dir and any(matches(child) for child in current.children)

    return matches(node)


def matching_paths(tree: TreeNode, filter_text: str) -> frozenset[str]:
    """Return paths of every node for which ``node_matches_filter`` holds.

    Computed in one post-order pass, so it is the cheap way to answer many
    match questions about the same tree and filter.
    """
    folded_query = _fold(filter_text)
    matched: set[str] = set()

    def walk(node: TreeNode) -> bool:
        subtree_match = folded_query in _fold(node.name)
        if node.is_dir:
            for child in node.children:
                if walk(child):
                    subtree_match = True
        if subtree_match:
            matched.add(node.path)
        return subtree_match

    walk(tree)
    return frozenset(matched)


def visible_children(
    node: TreeNode,
    filter_text: str,
    matched: Set[str] | None = None,
) -> tuple[TreeNode, ...]:
    """Return children of ``node`` that survive ``filter_text``, in original order.

    With an empty filter the children are returned unchanged. ``matched`` may
    be a precomputed ``matching_paths`` result for the same filter.
    """
    if not node.is_dir:
        return ()
    if not filter_text:
        return node.children
    if matched is not None:
        return tuple(child for child in node.children if child.path in matched)
    return tuple(child for child in node.children if node_matches_filter(child, filter_text))


def paths_to_expand(tree: TreeNode, filter_text: str) -> set[str]:
    """Return directory paths that must be open to reveal every filter match.

    A directory is included exactly when at least one of its children matches
    (directly or through a descendant). The root path is included whenever
    anything matches. Directories that only match by their own name are not
    included. An empty filter yields an empty set.
    """
    if not filter_text:
        return set()
    matched = matching_paths(tree, filter_text)
    paths: set[str] = set()

    def walk(node: TreeNode) -> None:
        for child in node.children:
            if child.path not in matched:
                continue
            paths.add(node.path)
            if child.is_dir:
                walk(child)

    if tree.is_dir:
        walk(tree)
    return paths


__all__ = [
    "name_matches_filter",
    "node_matches_filter",
    "matching_paths",
    "visible_children",
    "paths_to_expand",
]
