"""Tests for key-token dispatch in normal and search modes."""

from __future__ import annotations

import unittest
from unittest import mock

from yamlist.document import parse_text
from yamlist.runtime.keys import KeyComboBinding, KeyComboRegistry, KeyHandler
from yamlist.runtime.session import ViewerSession
from yamlist.tree_model import InputMode, ViewMode

NESTED = "a:\n  b: 1\n  c: 2\nd: 3\n"


class KeyComboRegistryTests(unittest.TestCase):
    def test_every_combo_of_a_binding_dispatches_to_its_handler(self) -> None:
        handler = mock.Mock()
        registry = KeyComboRegistry().register_bindings(KeyComboBinding(("j", "DOWN"), handler))

        self.assertTrue(registry.dispatch("j"))
        self.assertTrue(registry.dispatch("DOWN"))
        self.assertFalse(registry.dispatch("x"))
        self.assertEqual(handler.call_count, 2)


class NormalModeKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = ViewerSession(parse_text(NESTED))
        self.on_toggle_preview = mock.Mock()
        self.handler = KeyHandler(self.session, on_toggle_preview=self.on_toggle_preview)

    def _selected(self) -> str:
        return self.session.selected_node().path.display_string()

    def test_quit_keys(self) -> None:
        self.assertEqual(self.handler.handle("q"), (True, True))
        self.assertEqual(self.handler.handle("CTRL_C"), (True, True))

    def test_vertical_navigation_keys(self) -> None:
        self.handler.handle("j")
        self.handler.handle("DOWN")
        self.assertEqual(self._selected(), "a.b")
        self.handler.handle("k")
        self.assertEqual(self._selected(), "a")
        self.handler.handle("G")
        self.assertEqual(self._selected(), "d")
        self.handler.handle("g")
        self.assertEqual(self._selected(), "(root)")

    def test_fold_keys(self) -> None:
        self.handler.handle("j")
        self.handler.handle("h")
        self.assertEqual(len(self.session.rows), 3)
        self.handler.handle("l")
        self.assertEqual(len(self.session.rows), 5)
        self.handler.handle("ENTER")
        self.assertEqual(len(self.session.rows), 3)
        self.handler.handle("Z")
        self.assertEqual(len(self.session.rows), 5)
        self.handler.handle("z")
        self.assertEqual(len(self.session.rows), 3)

    def test_tab_switches_view_mode(self) -> None:
        self.handler.handle("TAB")
        self.assertIs(self.session.view_mode, ViewMode.FLAT)

    def test_preview_toggle_reports_new_visibility(self) -> None:
        self.assertEqual(self.handler.handle("p"), (False, True))
        self.assertFalse(self.session.show_preview)
        self.on_toggle_preview.assert_called_once_with(False)

    def test_unknown_and_empty_keys_are_unhandled(self) -> None:
        self.assertEqual(self.handler.handle("x"), (False, False))
        self.assertEqual(self.handler.handle(""), (False, False))


class SearchModeKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = ViewerSession(parse_text(NESTED))
        self.handler = KeyHandler(self.session)
        self.handler.handle("/")

    def test_slash_enters_search_mode(self) -> None:
        self.assertIs(self.session.mode, InputMode.SEARCH)

    def test_printable_keys_extend_the_query(self) -> None:
        for key in "q/c":
            self.assertEqual(self.handler.handle(key), (False, True))
        self.assertEqual(self.session.search.query, "q/c")

    def test_enter_accepts_and_escape_dismisses(self) -> None:
        self.handler.handle("c")
        self.handler.handle("ENTER")
        self.assertIs(self.session.mode, InputMode.NORMAL)
        self.assertTrue(self.session.search.overlay_active)

        self.handler.handle("ESC")
        self.assertFalse(self.session.search.overlay_active)
        self.assertEqual(len(self.session.rows), 5)

    def test_backspace_and_ctrl_u_edit_query(self) -> None:
        self.handler.handle("b")
        self.handler.handle("c")
        self.handler.handle("BACKSPACE")
        self.assertEqual(self.session.search.query, "b")
        self.handler.handle("CTRL_U")
        self.assertEqual(self.session.search.query, "")

    def test_ctrl_c_quits_from_search(self) -> None:
        self.assertEqual(self.handler.handle("CTRL_C"), (True, True))

    def test_non_printable_tokens_are_ignored(self) -> None:
        self.assertEqual(self.handler.handle("PAGE_DOWN"), (False, False))
        self.assertEqual(self.handler.handle("\x07"), (False, False))


if __name__ == "__main__":
    unittest.main()
