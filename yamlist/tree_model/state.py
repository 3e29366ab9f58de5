"""Expansion and selection state for one browsing session.

Expansion is tracked by path display string; the root is always expanded and
never stored. Selection is an index into the current visible rows mirrored by
``selected_node`` so a rebuild can re-resolve it by identity or path.
"""

from __future__ import annotations

from ..document import Node, NodePath
from .types import VisibleRow


class TreeState:
    """Mutable session state: expanded paths, selection, scroll offset, rows."""

    def __init__(self, root: Node) -> None:
        self.root = root
        self.expanded: set[str] = set()
        self.selected_index = 0
        self.selected_node: Node | None = root
        self.scroll_offset = 0
        self.visible_rows: list[VisibleRow] = []

    def is_expanded(self, path: NodePath | None) -> bool:
        if path is None or path.is_root:
            return True
        return path.display_string() in self.expanded

    def set_expanded(self, path: NodePath | None, expanded: bool) -> None:
        if path is None or path.is_root:
            return
        key = path.display_string()
        if expanded:
            self.expanded.add(key)
        else:
            self.expanded.discard(key)

    def toggle_expanded(self, path: NodePath | None) -> bool:
        """Flip expansion of ``path`` and return the resulting state."""
        if path is None or path.is_root:
            return True
        key = path.display_string()
        if key in self.expanded:
            self.expanded.discard(key)
            return False
        self.expanded.add(key)
        return True

    def expand_all(self) -> None:
        """Mark every expandable node that has children as expanded."""
        for node in self.root.walk():
            if node.is_expandable() and node.has_children():
                self.set_expanded(node.path, True)

    def collapse_all(self) -> None:
        self.expanded = set()

    def expand_to_node(self, node: Node | None) -> None:
        """Expand every ancestor of ``node`` so it is reachable in tree mode."""
        if node is None:
            return
        for ancestor in node.ancestors():
            self.set_expanded(ancestor.path, True)

    def replace_rows(self, rows: list[VisibleRow]) -> None:
        """Install freshly projected rows and re-resolve the selection.

        The previously selected node keeps the selection when it is still
        projected; otherwise the index is clamped and the node resynced from it.
        """
        previous = self.selected_node
        self.visible_rows = rows
        if previous is not None:
            for position, row in enumerate(rows):
                if row.node is previous:
                    self.selected_index = position
                    return
        self.clamp_selection()

    def clamp_selection(self) -> None:
        if self.selected_index >= len(self.visible_rows):
            self.selected_index = len(self.visible_rows) - 1
        if self.selected_index < 0:
            self.selected_index = 0
        if self.visible_rows:
            self.selected_node = self.visible_rows[self.selected_index].node

    def move_selection(self, delta: int) -> bool:
        """Move selection by ``delta`` rows; return whether the index changed."""
        if not self.visible_rows:
            return False
        new_index = max(0, min(self.selected_index + delta, len(self.visible_rows) - 1))
        if new_index == self.selected_index:
            return False
        self._select_at(new_index)
        return True

    def select_index(self, position: int) -> bool:
        """Select row ``position`` (clamped); return whether the index changed."""
        if not self.visible_rows:
            return False
        return self.move_selection(position - self.selected_index)

    def select_node(self, node: Node | None) -> bool:
        if node is None:
            return False
        for position, row in enumerate(self.visible_rows):
            if row.node is node:
                self._select_at(position)
                return True
        return False

    def select_by_path(self, path: NodePath | None) -> bool:
        if path is None:
            return False
        for position, row in enumerate(self.visible_rows):
            if row.node.path == path:
                self._select_at(position)
                return True
        return False

    def selected_row(self) -> VisibleRow | None:
        if 0 <= self.selected_index < len(self.visible_rows):
            return self.visible_rows[self.selected_index]
        return None

    def _select_at(self, position: int) -> None:
        self.selected_index = position
        self.selected_node = self.visible_rows[position].node

    def ensure_selected_visible(self, view_height: int) -> None:
        """Scroll the minimum amount needed to keep the selection on screen."""
        if not self.visible_rows:
            self.scroll_offset = 0
            return
        view_height = max(1, view_height)
        if self.selected_index < self.scroll_offset:
            self.scroll_offset = self.selected_index
        elif self.selected_index >= self.scroll_offset + view_height:
            self.scroll_offset = self.selected_index - view_height + 1
        self.scroll_offset = max(0, min(self.scroll_offset, max(0, len(self.visible_rows) - view_height)))

    def center_selected(self, view_height: int) -> None:
        if not self.visible_rows:
            self.scroll_offset = 0
            return
        view_height = max(1, view_height)
        max_offset = max(0, len(self.visible_rows) - view_height)
        self.scroll_offset = max(0, min(self.selected_index - view_height // 2, max_offset))
