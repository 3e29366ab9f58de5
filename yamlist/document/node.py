"""Document node tree datatypes.

``Node`` is a tagged variant over scalar, map and list kinds. Children are
owned by their parent; the parent link is a weak back-reference used only for
upward walks (ancestor expansion, move-to-parent).
"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from .path import ROOT_DISPLAY, ROOT_PATH, NodePath


class NodeKind(Enum):
    SCALAR = "scalar"
    MAP = "map"
    LIST = "list"


class ScalarType(Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    NULL = "null"
    TIMESTAMP = "timestamp"


@dataclass(eq=False)
class Node:
    """One value in the document: a scalar, a map or a list."""

    kind: NodeKind
    key: str = ""
    scalar_value: str = ""
    scalar_type: ScalarType = ScalarType.STRING
    index: int = -1
    depth: int = 0
    path: NodePath = ROOT_PATH
    line_number: int = 0
    end_line_number: int = 0
    children: list[Node] = field(default_factory=list, repr=False)
    _parent_ref: weakref.ReferenceType[Node] | None = field(default=None, repr=False)

    @classmethod
    def root(cls, kind: NodeKind = NodeKind.MAP, line_number: int = 0) -> Node:
        """Create a parentless node at depth 0 with the empty path."""
        return cls(kind=kind, line_number=line_number)

    def add_child(
        self,
        kind: NodeKind,
        *,
        key: str | None = None,
        index: int = -1,
        scalar_value: str = "",
        scalar_type: ScalarType = ScalarType.STRING,
        line_number: int = 0,
    ) -> Node:
        """Append and return a child whose depth, path and parent derive from ``self``.

        Map children pass ``key``; list items pass a non-negative ``index``.
        """
        if self.kind is NodeKind.SCALAR:
            raise ValueError("scalar nodes cannot have children")
        if key is not None:
            child_path = self.path.append_key(key)
            index = -1
        elif index >= 0:
            child_path = self.path.append_index(index)
        else:
            raise ValueError("child needs either a key or a non-negative index")
        child = Node(
            kind=kind,
            key=key or "",
            scalar_value=scalar_value,
            scalar_type=scalar_type,
            index=index,
            depth=self.depth + 1,
            path=child_path,
            line_number=line_number,
            _parent_ref=weakref.ref(self),
        )
        self.children.append(child)
        return child

    @property
    def parent(self) -> Node | None:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def ancestors(self) -> Iterator[Node]:
        """Yield parent, grandparent, ... up to and including the root."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def is_expandable(self) -> bool:
        return self.kind in {NodeKind.MAP, NodeKind.LIST}

    def has_children(self) -> bool:
        return bool(self.children)

    def child_count(self) -> int:
        return len(self.children)

    def display_key(self) -> str:
        """Return the key, a bracketed list index, or the root marker."""
        if self.path.is_root:
            return ROOT_DISPLAY
        return str(self.path.segments[-1])

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))
