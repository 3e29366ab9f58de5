"""Single-threaded viewer session state machine.

``ViewerSession`` owns the document, tree state, search engine and optional
cursor-sync channel and exposes every user-facing operation. Each operation
runs to completion and leaves ``state.visible_rows`` rebuilt and the selection
valid. Selection changes are forwarded to the sync peer unless they came from
the peer.
"""

from __future__ import annotations

import logging

from ..document import Document, Node
from ..errors import CursorSyncError
from ..search import SearchEngine
from ..sync import CursorSyncClient
from ..tree_model import InputMode, TreeState, ViewMode, VisibleRow, compute_visible_rows

logger = logging.getLogger(__name__)

DEFAULT_VIEW_HEIGHT = 20


class ViewerSession:
    """Per-run browsing state and the operations bound to keys."""

    def __init__(
        self,
        document: Document,
        sync: CursorSyncClient | None = None,
        expand_all: bool = True,
        show_preview: bool = True,
    ) -> None:
        self.document = document
        self.sync = sync
        self.state = TreeState(document.root)
        self.search = SearchEngine(document.index)
        self.mode = InputMode.NORMAL
        self.view_mode = ViewMode.TREE
        self.show_preview = show_preview
        self.view_height = DEFAULT_VIEW_HEIGHT
        self.status_message = ""
        self._flat_substitution: tuple[Node, Node | None] | None = None
        if expand_all:
            self.state.expand_all()
        self.rebuild()

    def rebuild(self) -> list[VisibleRow]:
        if self.search.overlay_active:
            return compute_visible_rows(
                self.document,
                self.state,
                self.view_mode,
                self.search.query,
                self.search.matched_nodes(),
            )
        return compute_visible_rows(self.document, self.state, self.view_mode)

    @property
    def rows(self) -> list[VisibleRow]:
        return self.state.visible_rows

    def selected_row(self) -> VisibleRow | None:
        return self.state.selected_row()

    def selected_node(self) -> Node | None:
        row = self.state.selected_row()
        return row.node if row is not None else None

    def set_view_height(self, view_height: int) -> None:
        self.view_height = max(1, view_height)
        self.state.ensure_selected_visible(self.view_height)

    def page_size(self) -> int:
        return max(1, self.view_height - 2)

    def notify_line_change(self) -> bool:
        """Forward the selected node's line to the sync peer; return whether it was sent."""
        if self.sync is None:
            return False
        node = self.selected_node()
        if node is None or node.line_number <= 0:
            return False
        try:
            return self.sync.send_cursor(node.line_number)
        except CursorSyncError as exc:
            logger.debug("cursor sync send failed: %s", exc)
            return False

    def follow_peer_line(self, line: int) -> bool:
        """Select the node at or before a peer-reported source line without echoing it."""
        node = self.document.node_at_line(line)
        if node is None or node is self.selected_node():
            return False
        if not self.state.select_node(node):
            if self.view_mode is ViewMode.TREE:
                self.state.expand_to_node(node)
                self.rebuild()
            if not self.state.select_node(node):
                return False
        self.state.center_selected(self.view_height)
        return True

    def poll_sync(self) -> bool:
        """Apply the latest queued peer cursor line, if any."""
        if self.sync is None:
            return False
        line = self.sync.latest_cursor_update()
        if line is None:
            return False
        return self.follow_peer_line(line)

    def move_selection(self, delta: int) -> bool:
        moved = self.state.move_selection(delta)
        self.state.ensure_selected_visible(self.view_height)
        if moved:
            self.notify_line_change()
        return moved

    def move_down(self) -> bool:
        return self.move_selection(1)

    def move_up(self) -> bool:
        return self.move_selection(-1)

    def page_down(self) -> bool:
        return self.move_selection(self.page_size())

    def page_up(self) -> bool:
        return self.move_selection(-self.page_size())

    def go_to_top(self) -> bool:
        moved = self.state.select_index(0)
        self.state.scroll_offset = 0
        if moved:
            self.notify_line_change()
        return moved

    def go_to_bottom(self) -> bool:
        moved = self.state.select_index(len(self.state.visible_rows) - 1)
        self.state.ensure_selected_visible(self.view_height)
        if moved:
            self.notify_line_change()
        return moved

    def _select_and_notify(self, node: Node | None) -> bool:
        if not self.state.select_node(node):
            return False
        self.state.ensure_selected_visible(self.view_height)
        self.notify_line_change()
        return True

    def move_to_parent(self) -> bool:
        row = self.state.selected_row()
        if row is None:
            return False
        return self._select_and_notify(row.node.parent)

    def move_to_first_child(self) -> bool:
        row = self.state.selected_row()
        if row is None or not row.has_children or not row.is_expanded:
            return False
        return self._select_and_notify(row.node.children[0])

    def expand_selected(self) -> bool:
        """Expand the selected node, or step into its first child when already open."""
        if self.view_mode is ViewMode.FLAT:
            return False
        row = self.state.selected_row()
        if row is None or not row.is_expandable:
            return False
        if row.is_expanded:
            return self.move_to_first_child()
        self.state.set_expanded(row.path, True)
        self.rebuild()
        return True

    def collapse_selected(self) -> bool:
        """Collapse the selected node, or step to its parent when already closed."""
        if self.view_mode is ViewMode.FLAT:
            return False
        row = self.state.selected_row()
        if row is None:
            return False
        if row.is_expandable and row.is_expanded and not row.path.is_root:
            self.state.set_expanded(row.path, False)
            self.rebuild()
            return True
        return self.move_to_parent()

    def toggle_selected(self) -> bool:
        if self.view_mode is ViewMode.FLAT:
            return False
        row = self.state.selected_row()
        if row is None or not row.is_expandable or row.path.is_root:
            return False
        self.state.toggle_expanded(row.path)
        self.rebuild()
        self.state.ensure_selected_visible(self.view_height)
        return True

    def expand_all(self) -> None:
        self.state.expand_all()
        self.rebuild()
        self.state.ensure_selected_visible(self.view_height)

    def collapse_all(self) -> None:
        """Collapse everything, keeping the selection or moving it to its nearest visible ancestor."""
        previous = self.state.selected_node
        self.state.collapse_all()
        self.rebuild()
        if previous is not None and not self.state.select_by_path(previous.path):
            for ancestor in previous.ancestors():
                if self.state.select_by_path(ancestor.path):
                    break
        self.state.ensure_selected_visible(self.view_height)

    def toggle_view_mode(self) -> None:
        """Switch between tree and flat mode, restoring the selection by path.

        A tree selection with no flat row (the root) is substituted on the way
        into flat mode and restored on the way back if the flat selection was
        left where it landed.
        """
        node = self.selected_node()
        if self._flat_substitution is not None and node is self._flat_substitution[1]:
            node = self._flat_substitution[0]
        self._flat_substitution = None
        self.view_mode = ViewMode.FLAT if self.view_mode is ViewMode.TREE else ViewMode.TREE
        self.rebuild()
        if node is not None and not self.state.select_by_path(node.path):
            if self.view_mode is ViewMode.TREE and not self.search.overlay_active:
                self.state.expand_to_node(node)
                self.rebuild()
            if not self.state.select_by_path(node.path):
                self.state.select_index(0)
                if self.view_mode is ViewMode.FLAT:
                    self._flat_substitution = (node, self.selected_node())
        self.state.ensure_selected_visible(self.view_height)
        self.notify_line_change()

    def toggle_preview(self) -> bool:
        self.show_preview = not self.show_preview
        return self.show_preview

    def jump_to_node(self, node: Node | None, center: bool = False) -> bool:
        """Reveal ``node`` (expanding ancestors in tree mode) and select it."""
        if node is None:
            return False
        if self.view_mode is ViewMode.TREE:
            self.state.expand_to_node(node)
            self.rebuild()
        if not self.state.select_node(node):
            return False
        if center:
            self.state.center_selected(self.view_height)
        else:
            self.state.ensure_selected_visible(self.view_height)
        self.notify_line_change()
        return True

    def jump_to_path(self, display_string: str) -> bool:
        node = self.document.find_by_path(display_string)
        if node is None:
            self.status_message = f"path not found: {display_string}"
            return False
        return self.jump_to_node(node, center=True)

    def begin_search(self) -> None:
        self.mode = InputMode.SEARCH
        self.search.begin()
        self.rebuild()

    def set_search_query(self, query: str) -> None:
        self.search.set_query(query)
        self.rebuild()
        self._preview_current_match()

    def search_append(self, text: str) -> None:
        self.set_search_query(self.search.query + text)

    def search_backspace(self) -> None:
        if self.search.query:
            self.set_search_query(self.search.query[:-1])

    def search_clear(self) -> None:
        self.set_search_query("")

    def _preview_current_match(self) -> None:
        entry = self.search.current_match()
        if entry is None:
            return
        if self.view_mode is ViewMode.TREE:
            self.state.expand_to_node(entry.node)
            self.rebuild()
        if self.state.select_node(entry.node):
            self.state.ensure_selected_visible(self.view_height)

    def accept_search(self) -> None:
        self.mode = InputMode.NORMAL
        entry = self.search.accept()
        self.rebuild()
        if entry is not None:
            self.jump_to_node(entry.node)

    def dismiss_search(self) -> None:
        self.mode = InputMode.NORMAL
        self.search.dismiss()
        self.rebuild()
        self.state.ensure_selected_visible(self.view_height)

    def next_match(self) -> bool:
        entry = self.search.next_match()
        return entry is not None and self.jump_to_node(entry.node, center=True)

    def prev_match(self) -> bool:
        entry = self.search.prev_match()
        return entry is not None and self.jump_to_node(entry.node, center=True)

    def preview_next_match(self) -> bool:
        if self.search.next_match() is None:
            return False
        self._preview_current_match()
        return True

    def preview_prev_match(self) -> bool:
        if self.search.prev_match() is None:
            return False
        self._preview_current_match()
        return True
