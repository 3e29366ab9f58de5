"""Flattened pre-order index over every node of a document.

Display strings are computed once at build time so search and path lookups
never re-render paths on the input hot path.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .node import Node
from .path import NodePath


@dataclass(frozen=True)
class IndexEntry:
    """One flattened node with its precomputed display path."""

    path: NodePath
    display_string: str
    node: Node

    @classmethod
    def for_node(cls, node: Node) -> IndexEntry:
        return cls(path=node.path, display_string=node.path.display_string(), node=node)


class DocumentIndex:
    """Ordered, read-only sequence of ``IndexEntry`` values."""

    def __init__(self, entries: list[IndexEntry] | None = None) -> None:
        self._entries: list[IndexEntry] = list(entries or [])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self._entries)

    def entry_at(self, position: int) -> IndexEntry | None:
        if position < 0 or position >= len(self._entries):
            return None
        return self._entries[position]

    def entries(self) -> list[IndexEntry]:
        return list(self._entries)

    def display_strings(self) -> list[str]:
        return [entry.display_string for entry in self._entries]

    def find_by_path(self, display_string: str) -> IndexEntry | None:
        """Linear lookup by display string; first match in pre-order wins."""
        for entry in self._entries:
            if entry.display_string == display_string:
                return entry
        return None


def build_index(root: Node) -> DocumentIndex:
    """Flatten ``root`` and all descendants in pre-order, root first."""
    entries: list[IndexEntry] = []

    def walk(node: Node) -> None:
        entries.append(IndexEntry.for_node(node))
        for child in node.children:
            walk(child)

    walk(root)
    return DocumentIndex(entries)
