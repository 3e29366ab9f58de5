"""Incremental key search over a document index.

Matching is a case-insensitive substring test against each node's own key,
never its full path or scalar value. The match cursor wraps in both
directions.
"""

from __future__ import annotations

from ..document import DocumentIndex, IndexEntry, Node


class SearchEngine:
    """Query, ordered matches, a cyclic cursor and the active-overlay flag."""

    def __init__(self, index: DocumentIndex) -> None:
        self.index = index
        self._folded_keys: list[str] = [entry.node.key.casefold() for entry in index]
        self.query = ""
        self.matches: list[IndexEntry] = []
        self.cursor = 0
        self.active = False

    @property
    def overlay_active(self) -> bool:
        """Whether rows should currently be filtered or dimmed."""
        return self.active and bool(self.query)

    def match_count(self) -> int:
        return len(self.matches)

    def matched_nodes(self) -> list[Node]:
        return [entry.node for entry in self.matches]

    def set_query(self, query: str) -> None:
        """Replace the query and recompute matches; an empty query deactivates search."""
        self.query = query
        if not query:
            self.matches = []
            self.cursor = 0
            self.active = False
            return
        needle = query.casefold()
        self.matches = [
            entry
            for entry, folded in zip(self.index, self._folded_keys)
            if folded and needle in folded
        ]
        self.active = True
        self._clamp_cursor()

    def begin(self) -> None:
        """Enter editing; an already active query is kept for editing."""
        if not self.active:
            self.query = ""
            self.matches = []
            self.cursor = 0

    def accept(self) -> IndexEntry | None:
        """Confirm the query; the overlay survives only when something matched."""
        self.active = bool(self.matches)
        if not self.active:
            self.query = ""
            self.cursor = 0
        return self.current_match()

    def dismiss(self) -> None:
        self.query = ""
        self.matches = []
        self.cursor = 0
        self.active = False

    def current_match(self) -> IndexEntry | None:
        if not self.matches:
            return None
        self._clamp_cursor()
        return self.matches[self.cursor]

    def next_match(self) -> IndexEntry | None:
        if not self.matches:
            return None
        self.cursor = (self.cursor + 1) % len(self.matches)
        return self.matches[self.cursor]

    def prev_match(self) -> IndexEntry | None:
        if not self.matches:
            return None
        self.cursor = (self.cursor - 1) % len(self.matches)
        return self.matches[self.cursor]

    def status_label(self) -> str:
        """Return ``[i/n]`` for the current match, or ``[0/0]`` when none."""
        if not self.matches:
            return "[0/0]"
        return f"[{self.cursor + 1}/{len(self.matches)}]"

    def _clamp_cursor(self) -> None:
        if self.cursor < 0 or self.cursor >= len(self.matches):
            self.cursor = 0
