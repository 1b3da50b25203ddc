"""Tests for the path-keyed expansion set."""

from __future__ import annotations

import unittest

from ponder.tree_model import ExpansionState


class ExpansionStateTests(unittest.TestCase):
    def test_toggle_is_its_own_inverse(self) -> None:
        state = ExpansionState({"a", "b"})
        for path in ("a", "c", ""):
            before = frozenset(state)
            state.toggle(path)
            self.assertNotEqual(frozenset(state), before)
            state.toggle(path)
            self.assertEqual(frozenset(state), before)

    def test_toggle_reports_new_membership(self) -> None:
        state = ExpansionState()
        self.assertTrue(state.toggle("src"))
        self.assertIn("src", state)
        self.assertFalse(state.toggle("src"))
        self.assertNotIn("src", state)

    def test_merge_auto_expand_is_monotonic(self) -> None:
        state = ExpansionState({"keep", "user"})
        for paths in ([], ["keep"], ["x", "y"], {"", "user/deep"}):
            before = frozenset(state)
            state.merge_auto_expand(paths)
            self.assertTrue(before <= frozenset(state))
            self.assertTrue(set(paths) <= frozenset(state))

    def test_merged_path_can_still_be_collapsed_by_toggle(self) -> None:
        state = ExpansionState()
        state.merge_auto_expand({"src"})
        state.toggle("src")
        self.assertFalse(state.is_expanded("src"))

    def test_reset_clears_everything(self) -> None:
        state = ExpansionState({"a", "b"})
        state.reset()
        self.assertEqual(len(state), 0)
        self.assertEqual(frozenset(state), frozenset())

    def test_stale_paths_are_plain_members(self) -> None:
        state = ExpansionState()
        state.merge_auto_expand({"gone/away"})
        self.assertEqual(sorted(state), ["gone/away"])


if __name__ == "__main__":
    unittest.main()
