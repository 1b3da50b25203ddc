"""Tests for visible-row projection and tree-row formatting."""

from __future__ import annotations

import re
import unittest

from ponder.file_tree_model import TreeNode
from ponder.tree_model import (
    TreeRow,
    build_visible_rows,
    display_workspace_path,
    format_file_size,
    format_tree_row,
    highlight_substring,
    paths_to_expand,
)
from ponder.ui_theme import PLAIN_THEME

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def _tree() -> TreeNode:
    return TreeNode.directory(
        "root",
        "",
        (
            TreeNode.directory(
                "src",
                "src",
                (
                    TreeNode.directory("util", "src/util", (TreeNode.file("io.py", "src/util/io.py"),)),
                    TreeNode.file("main.py", "src/main.py", size_bytes=2048),
                ),
            ),
            TreeNode.directory("docs", "docs", (TreeNode.file("guide.md", "docs/guide.md"),)),
            TreeNode.file("setup.cfg", "setup.cfg", size_bytes=12),
        ),
    )


def _summary(rows: list[TreeRow]) -> list[tuple[str, int, bool, bool]]:
    return [(row.path, row.depth, row.is_expanded, row.is_selected) for row in rows]


class BuildVisibleRowsTests(unittest.TestCase):
    def test_collapsed_tree_shows_only_root_children_at_depth_one(self) -> None:
        rows = build_visible_rows(_tree(), "", set())
        self.assertEqual(
            _summary(rows),
            [("src", 1, False, False), ("docs", 1, False, False), ("setup.cfg", 1, False, False)],
        )

    def test_expanded_directories_are_walked_in_pre_order(self) -> None:
        rows = build_visible_rows(_tree(), "", {"src", "src/util"}, selected_path="src/main.py")
        self.assertEqual(
            _summary(rows),
            [
                ("src", 1, True, False),
                ("src/util", 2, True, False),
                ("src/util/io.py", 3, False, False),
                ("src/main.py", 2, False, True),
                ("docs", 1, False, False),
                ("setup.cfg", 1, False, False),
            ],
        )

    def test_expanded_child_under_collapsed_parent_stays_hidden(self) -> None:
        rows = build_visible_rows(_tree(), "", {"src/util"})
        paths = [row.path for row in rows]
        self.assertNotIn("src/util/io.py", paths)
        self.assertEqual(paths.index("docs"), 1)

    def test_filter_narrows_each_level_and_auto_expansion_reveals_matches(self) -> None:
        tree = _tree()
        expanded = paths_to_expand(tree, "io")
        rows = build_visible_rows(tree, "io", expanded)
        self.assertEqual(
            _summary(rows),
            [("src", 1, True, False), ("src/util", 2, True, False), ("src/util/io.py", 3, False, False)],
        )

    def test_filter_without_expansion_only_shows_top_level_matches(self) -> None:
        rows = build_visible_rows(_tree(), "guide", set())
        self.assertEqual(_summary(rows), [("docs", 1, False, False)])

    def test_stale_expanded_paths_are_ignored(self) -> None:
        rows = build_visible_rows(_tree(), "", {"missing", "src/missing"})
        self.assertEqual(len(rows), 3)

    def test_file_rows_are_never_expanded(self) -> None:
        rows = build_visible_rows(_tree(), "", {"setup.cfg"})
        self.assertFalse(rows[-1].is_expanded)


class TreeRowFormattingTests(unittest.TestCase):
    def test_directory_rows_show_open_and_closed_markers(self) -> None:
        node = TreeNode.directory("src", "src")
        closed = format_tree_row(TreeRow(node, 1), theme=PLAIN_THEME)
        opened = format_tree_row(TreeRow(node, 2, is_expanded=True), theme=PLAIN_THEME)
        self.assertEqual(closed, "▸ src/")
        self.assertEqual(opened, "  ▾ src/")

    def test_file_rows_show_size_labels_and_large_file_warning(self) -> None:
        small = TreeNode.file("a.py", "a.py", size_bytes=512)
        large = TreeNode.file("big.log", "big.log", size_bytes=3 * 1024 * 1024, is_too_large=True)
        self.assertEqual(format_tree_row(TreeRow(small, 1), theme=PLAIN_THEME), "  a.py [512 B]")
        self.assertEqual(format_tree_row(TreeRow(large, 1), theme=PLAIN_THEME), "  big.log ⚠ [3.0 MB]")
        self.assertEqual(
            format_tree_row(TreeRow(small, 1), show_size_labels=False, theme=PLAIN_THEME),
            "  a.py",
        )

    def test_selected_row_has_marker(self) -> None:
        node = TreeNode.file("a.py", "a.py")
        self.assertEqual(format_tree_row(TreeRow(node, 1, is_selected=True), theme=PLAIN_THEME), "> " + "  a.py")

    def test_colored_row_highlights_query_without_changing_text(self) -> None:
        node = TreeNode.file("Readme.md", "Readme.md", size_bytes=10)
        rendered = format_tree_row(TreeRow(node, 1), search_query="read")
        self.assertIn("\033[7;1mRead\033[27;22m", rendered)
        self.assertEqual(ANSI_ESCAPE_RE.sub("", rendered), "  Readme.md [10 B]")

    def test_highlight_substring_leaves_non_matching_text(self) -> None:
        self.assertEqual(highlight_substring("abc", "z"), "abc")
        self.assertEqual(highlight_substring("abc", ""), "abc")

    def test_highlight_span_follows_original_text_when_casefold_changes_length(self) -> None:
        self.assertEqual(
            highlight_substring("Maße.txt", "E.T"),
            "Maß\033[7;1me.t\033[27;22mxt",
        )
        self.assertEqual(
            highlight_substring("Straße.md", "SS"),
            "Stra\033[7;1mß\033[27;22me.md",
        )

    def test_format_file_size_units(self) -> None:
        self.assertEqual(format_file_size(0), "0 B")
        self.assertEqual(format_file_size(1023), "1023 B")
        self.assertEqual(format_file_size(1536), "1.5 KB")
        self.assertEqual(format_file_size(5 * 1024 * 1024), "5.0 MB")
        self.assertEqual(format_file_size(2 * 1024 * 1024 * 1024), "2.0 GB")

    def test_display_workspace_path_shortens_long_paths(self) -> None:
        self.assertEqual(display_workspace_path(None), "No workspace selected")
        self.assertEqual(display_workspace_path("/short"), "/short")
        long_path = "/home/someone/projects/" + "x" * 40
        shown = display_workspace_path(long_path)
        self.assertEqual(shown, "…" + long_path[-38:])
        self.assertEqual(len(shown), 39)


if __name__ == "__main__":
    unittest.main()
