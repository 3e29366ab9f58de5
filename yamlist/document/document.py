"""Loaded document: node tree, flattened index and raw source lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .index import DocumentIndex, build_index
from .node import Node


@dataclass
class Document:
    """One parsed YAML document ready for browsing.

    ``index`` is derived from ``root`` once in ``from_root`` and never rebuilt.
    """

    root: Node
    index: DocumentIndex
    file_path: Path | None = None
    source_lines: list[str] = field(default_factory=list, repr=False)

    @classmethod
    def from_root(
        cls,
        root: Node,
        file_path: Path | None = None,
        source_lines: list[str] | None = None,
    ) -> Document:
        return cls(
            root=root,
            index=build_index(root),
            file_path=file_path,
            source_lines=list(source_lines or []),
        )

    def node_count(self) -> int:
        return len(self.index)

    def find_by_path(self, display_string: str) -> Node | None:
        entry = self.index.find_by_path(display_string)
        return entry.node if entry is not None else None

    def node_at_line(self, line: int) -> Node | None:
        """Return the node starting closest at or before ``line``.

        Ties go to the node visited last in pre-order, i.e. the deepest one.
        Nodes without a known line are ignored.
        """
        if line <= 0:
            return None
        best: Node | None = None
        for entry in self.index:
            node_line = entry.node.line_number
            if node_line <= 0 or node_line > line:
                continue
            if best is None or node_line >= best.line_number:
                best = entry.node
        return best

    def source_excerpt(self, node: Node) -> list[str]:
        """Return the raw source lines spanned by ``node`` (empty when unknown)."""
        if node.line_number <= 0 or not self.source_lines:
            return []
        end_line = max(node.line_number, node.end_line_number)
        return self.source_lines[node.line_number - 1 : end_line]
