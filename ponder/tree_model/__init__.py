"""Tree filtering, expansion state, row projection and row formatting.

Defines ``TreeRow`` plus the name-filter engine that decides which nodes
survive a query and which directories must open to reveal them.
"""

from __future__ import annotations

from .expansion import ExpansionState
from .filtering import (
    matching_paths,
    name_matches_filter,
    node_matches_filter,
    paths_to_expand,
    visible_children,
)
from .rendering import display_workspace_path, format_file_size, format_tree_row, highlight_substring
from .rows import build_visible_rows
from .types import TreeRow

__all__ = [
    "ExpansionState",
    "TreeRow",
    "matching_paths",
    "name_matches_filter",
    "node_matches_filter",
    "paths_to_expand",
    "visible_children",
    "build_visible_rows",
    "display_workspace_path",
    "format_file_size",
    "format_tree_row",
    "highlight_substring",
]
