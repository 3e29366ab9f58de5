"""Row and mode datatypes shared by tree-state, projection and rendering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..document import Node, NodeKind, NodePath


class ViewMode(Enum):
    TREE = "tree"
    FLAT = "flat"


class InputMode(Enum):
    NORMAL = "normal"
    SEARCH = "search"


@dataclass(frozen=True)
class VisibleRow:
    """One projected row; regenerated on every rebuild, never patched."""

    node: Node
    depth: int
    index: int
    is_expanded: bool = False
    is_expandable: bool = False
    has_children: bool = False
    child_count: int = 0
    is_dimmed: bool = False
    is_search_match: bool = False

    @classmethod
    def for_node(cls, node: Node, index: int, is_expanded: bool, depth: int | None = None) -> VisibleRow:
        return cls(
            node=node,
            depth=node.depth if depth is None else depth,
            index=index,
            is_expanded=is_expanded,
            is_expandable=node.is_expandable(),
            has_children=node.has_children(),
            child_count=node.child_count(),
        )

    @property
    def path(self) -> NodePath:
        return self.node.path

    @property
    def kind(self) -> NodeKind:
        return self.node.kind

    def display_key(self) -> str:
        return self.node.display_key()

    def path_string(self) -> str:
        return self.node.path.display_string()
