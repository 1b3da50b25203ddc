"""Domain model for workspace file/directory trees.

This package contains non-UI tree primitives:
- the immutable ``TreeNode`` datatype with nested children
- filesystem listing of a whole workspace root
- validated, size-limited text reads of workspace files
"""

from __future__ import annotations

from .types import NodeKind, TreeNode, find_node, iter_tree
from .fs import (
    DEFAULT_MAX_READ_BYTES,
    LARGE_FILE_THRESHOLD,
    MAX_DEPTH,
    MAX_NODES,
    DirectoryChild,
    is_binary_file,
    list_directory_children,
    list_tree,
    read_text_file,
    safe_file_size,
    should_ignore_entry,
    to_relative_posix_path,
)

__all__ = [
    "NodeKind",
    "TreeNode",
    "find_node",
    "iter_tree",
    "DEFAULT_MAX_READ_BYTES",
    "LARGE_FILE_THRESHOLD",
    "MAX_DEPTH",
    "MAX_NODES",
    "DirectoryChild",
    "is_binary_file",
    "list_directory_children",
    "list_tree",
    "read_text_file",
    "safe_file_size",
    "should_ignore_entry",
    "to_relative_posix_path",
]
