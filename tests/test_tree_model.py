"""Tests for expansion state, selection bookkeeping and row projection.

Covers tree/flat projection, the search overlay filters and how a rebuild
re-resolves the selection.
"""

from __future__ import annotations

import unittest

from yamlist.document import ROOT_PATH, parse_text
from yamlist.tree_model import (
    TreeState,
    ViewMode,
    build_flat_rows,
    build_tree_rows,
    compute_visible_rows,
    project_rows,
)

NESTED = "a:\n  b: 1\n  c: 2\nd: 3\n"


def _paths(rows) -> list[str]:
    return [row.path_string() for row in rows]


class TreeStateExpansionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.document = parse_text(NESTED)
        self.state = TreeState(self.document.root)

    def test_root_is_always_expanded_and_never_stored(self) -> None:
        self.assertTrue(self.state.is_expanded(ROOT_PATH))
        self.assertTrue(self.state.toggle_expanded(ROOT_PATH))
        self.state.set_expanded(ROOT_PATH, False)
        self.assertTrue(self.state.is_expanded(ROOT_PATH))
        self.assertEqual(self.state.expanded, set())

    def test_expand_all_then_collapse_all_empties_the_set(self) -> None:
        self.state.expand_all()
        self.assertEqual(self.state.expanded, {"a"})

        self.state.collapse_all()
        self.assertEqual(self.state.expanded, set())

    def test_toggle_twice_restores_expansion(self) -> None:
        path = self.document.find_by_path("a").path
        self.assertTrue(self.state.toggle_expanded(path))
        self.assertFalse(self.state.toggle_expanded(path))
        self.assertFalse(self.state.is_expanded(path))

    def test_expand_to_node_opens_every_ancestor(self) -> None:
        document = parse_text("x:\n  y:\n    z: 1\n")
        state = TreeState(document.root)
        state.expand_to_node(document.find_by_path("x.y.z"))
        self.assertEqual(state.expanded, {"x", "x.y"})


class TreeStateSelectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.document = parse_text(NESTED)
        self.state = TreeState(self.document.root)
        self.state.expand_all()
        compute_visible_rows(self.document, self.state, ViewMode.TREE)

    def test_move_selection_is_bounded(self) -> None:
        self.assertFalse(self.state.move_selection(-1))
        self.assertEqual(self.state.selected_index, 0)

        self.assertTrue(self.state.move_selection(100))
        self.assertEqual(self.state.selected_index, 4)
        self.assertIs(self.state.selected_node, self.document.find_by_path("d"))
        self.assertFalse(self.state.move_selection(1))

    def test_rebuild_keeps_selected_node_when_still_visible(self) -> None:
        self.state.select_node(self.document.find_by_path("d"))
        self.state.set_expanded(self.document.find_by_path("a").path, False)
        compute_visible_rows(self.document, self.state, ViewMode.TREE)

        self.assertEqual(self.state.selected_index, 2)
        self.assertIs(self.state.selected_node, self.document.find_by_path("d"))

    def test_rebuild_clamps_when_selected_node_disappears(self) -> None:
        self.state.select_node(self.document.find_by_path("a.c"))
        self.state.set_expanded(self.document.find_by_path("a").path, False)
        compute_visible_rows(self.document, self.state, ViewMode.TREE)

        self.assertEqual(self.state.selected_index, 2)
        self.assertIs(self.state.selected_node, self.document.find_by_path("d"))

    def test_select_by_path_matches_structurally(self) -> None:
        path = self.document.find_by_path("a.b").path
        self.assertTrue(self.state.select_by_path(path))
        self.assertEqual(self.state.selected_row().path_string(), "a.b")
        self.assertFalse(self.state.select_by_path(path.append_key("missing")))

    def test_ensure_selected_visible_scrolls_minimally(self) -> None:
        self.state.select_index(4)
        self.state.ensure_selected_visible(2)
        self.assertEqual(self.state.scroll_offset, 3)

        self.state.select_index(1)
        self.state.ensure_selected_visible(2)
        self.assertEqual(self.state.scroll_offset, 1)

    def test_center_selected_clamps_to_content(self) -> None:
        self.state.select_index(4)
        self.state.center_selected(3)
        self.assertEqual(self.state.scroll_offset, 2)

        self.state.select_index(0)
        self.state.center_selected(3)
        self.assertEqual(self.state.scroll_offset, 0)


class TreeProjectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.document = parse_text(NESTED)
        self.state = TreeState(self.document.root)
        self.state.expand_all()

    def test_expanded_tree_lists_every_node_in_preorder(self) -> None:
        rows = build_tree_rows(self.document.root, self.state.is_expanded)

        self.assertEqual(_paths(rows), ["(root)", "a", "a.b", "a.c", "d"])
        self.assertEqual([row.depth for row in rows], [0, 1, 2, 2, 1])
        self.assertEqual([row.index for row in rows], list(range(5)))
        self.assertEqual(rows[1].child_count, 2)

    def test_collapsing_a_map_removes_only_its_descendants(self) -> None:
        before = build_tree_rows(self.document.root, self.state.is_expanded)
        self.state.toggle_expanded(self.document.find_by_path("a").path)
        after = build_tree_rows(self.document.root, self.state.is_expanded)

        self.assertEqual(len(before) - len(after), 2)
        self.assertEqual(_paths(after), ["(root)", "a", "d"])
        self.assertFalse(after[1].is_expanded)

    def test_toggling_twice_restores_rows(self) -> None:
        before = _paths(build_tree_rows(self.document.root, self.state.is_expanded))
        path = self.document.find_by_path("a").path
        self.state.toggle_expanded(path)
        self.state.toggle_expanded(path)

        self.assertEqual(_paths(build_tree_rows(self.document.root, self.state.is_expanded)), before)

    def test_empty_container_row_is_expandable_without_children(self) -> None:
        document = parse_text("empty: {}\n")
        state = TreeState(document.root)
        state.set_expanded(document.find_by_path("empty").path, True)
        rows = build_tree_rows(document.root, state.is_expanded)

        self.assertEqual(_paths(rows), ["(root)", "empty"])
        self.assertTrue(rows[1].is_expandable)
        self.assertFalse(rows[1].has_children)


class FlatProjectionTests(unittest.TestCase):
    def test_flat_rows_skip_root_and_sit_at_depth_zero(self) -> None:
        document = parse_text(NESTED)
        rows = build_flat_rows(document.index)

        self.assertEqual(_paths(rows), ["a", "a.b", "a.c", "d"])
        self.assertTrue(all(row.depth == 0 for row in rows))

    def test_flat_rows_ignore_expansion(self) -> None:
        document = parse_text(NESTED)
        rows = project_rows(document, lambda path: False, ViewMode.FLAT)
        self.assertEqual(len(rows), document.node_count() - 1)


class SearchOverlayProjectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.document = parse_text(NESTED)
        self.state = TreeState(self.document.root)

    def test_tree_overlay_shows_matches_and_forced_open_ancestors(self) -> None:
        match = self.document.find_by_path("a.b")
        rows = project_rows(self.document, self.state.is_expanded, ViewMode.TREE, "b", [match])

        self.assertEqual(_paths(rows), ["(root)", "a", "a.b"])
        self.assertTrue(rows[1].is_expanded)
        self.assertEqual([row.is_search_match for row in rows], [False, False, True])

    def test_matching_ancestor_still_reveals_matching_descendants(self) -> None:
        document = parse_text("b:\n  bb: 1\n  x: 2\n")
        matches = [document.find_by_path("b"), document.find_by_path("b.bb")]
        rows = project_rows(document, lambda path: False, ViewMode.TREE, "b", matches)

        self.assertEqual(_paths(rows), ["(root)", "b", "b.bb"])

    def test_flat_overlay_keeps_matches_only(self) -> None:
        match = self.document.find_by_path("a.c")
        rows = project_rows(self.document, self.state.is_expanded, ViewMode.FLAT, "c", [match])

        self.assertEqual(_paths(rows), ["a.c"])
        self.assertEqual(rows[0].index, 0)
        self.assertTrue(rows[0].is_search_match)

    def test_query_without_matches_dims_every_row(self) -> None:
        self.state.expand_all()
        plain = project_rows(self.document, self.state.is_expanded, ViewMode.TREE)
        dimmed = project_rows(self.document, self.state.is_expanded, ViewMode.TREE, "zzz", [])

        self.assertEqual(_paths(dimmed), _paths(plain))
        self.assertTrue(all(row.is_dimmed for row in dimmed))
        self.assertFalse(any(row.is_dimmed for row in plain))


if __name__ == "__main__":
    unittest.main()
