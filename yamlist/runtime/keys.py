"""Key dispatch for normal and search modes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..tree_model import InputMode
from .session import ViewerSession


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], object]


class KeyComboRegistry:
    """Small key-dispatch table; unknown keys report as unhandled."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], object]] = {}

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            for combo in binding.combos:
                self._handlers[combo] = binding.handler
        return self

    def dispatch(self, key: str) -> bool:
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True


QUIT_KEYS = frozenset({"q", "CTRL_C"})


class KeyHandler:
    """Route decoded key tokens to ``ViewerSession`` operations."""

    def __init__(
        self,
        session: ViewerSession,
        on_toggle_preview: Callable[[bool], None] | None = None,
    ) -> None:
        self.session = session
        self.on_toggle_preview = on_toggle_preview
        self.normal = KeyComboRegistry().register_bindings(
            KeyComboBinding(("j", "DOWN"), session.move_down),
            KeyComboBinding(("k", "UP"), session.move_up),
            KeyComboBinding(("h", "LEFT"), session.collapse_selected),
            KeyComboBinding(("l", "RIGHT"), session.expand_selected),
            KeyComboBinding(("ENTER", " "), session.toggle_selected),
            KeyComboBinding(("z",), session.collapse_all),
            KeyComboBinding(("Z",), session.expand_all),
            KeyComboBinding(("CTRL_D", "PAGE_DOWN"), session.page_down),
            KeyComboBinding(("CTRL_U", "PAGE_UP"), session.page_up),
            KeyComboBinding(("g", "HOME"), session.go_to_top),
            KeyComboBinding(("G", "END"), session.go_to_bottom),
            KeyComboBinding(("n",), session.next_match),
            KeyComboBinding(("N",), session.prev_match),
            KeyComboBinding(("/",), session.begin_search),
            KeyComboBinding(("TAB",), session.toggle_view_mode),
            KeyComboBinding(("p",), self._toggle_preview),
            KeyComboBinding(("ESC",), session.dismiss_search),
        )
        self.search = KeyComboRegistry().register_bindings(
            KeyComboBinding(("ESC",), session.dismiss_search),
            KeyComboBinding(("ENTER",), session.accept_search),
            KeyComboBinding(("CTRL_N", "DOWN"), session.preview_next_match),
            KeyComboBinding(("CTRL_P", "UP"), session.preview_prev_match),
            KeyComboBinding(("BACKSPACE",), session.search_backspace),
            KeyComboBinding(("CTRL_U",), session.search_clear),
        )

    def _toggle_preview(self) -> None:
        shown = self.session.toggle_preview()
        if self.on_toggle_preview is not None:
            self.on_toggle_preview(shown)

    def handle(self, key: str) -> tuple[bool, bool]:
        """Handle one key; return ``(should_quit, handled)``."""
        if not key:
            return False, False
        if self.session.mode is InputMode.SEARCH:
            if key == "CTRL_C":
                return True, True
            if self.search.dispatch(key):
                return False, True
            if len(key) == 1 and key.isprintable():
                self.session.search_append(key)
                return False, True
            return False, False
        if key in QUIT_KEYS:
            return True, True
        return False, self.normal.dispatch(key)
