"""Structural paths identifying nodes inside a parsed document.

A ``NodePath`` is an immutable tuple of key/index segments. Appending always
returns a new path, so descendants can safely share their ancestors' paths.
"""

from __future__ import annotations

from dataclasses import dataclass

ROOT_DISPLAY = "(root)"
EMPTY_KEY_DISPLAY = '""'


@dataclass(frozen=True)
class PathSegment:
    """One path step: a map key (``index == -1``) or a list index."""

    key: str = ""
    index: int = -1

    @property
    def is_index(self) -> bool:
        return self.index >= 0

    def __str__(self) -> str:
        if self.is_index:
            return f"[{self.index}]"
        return self.key or EMPTY_KEY_DISPLAY


@dataclass(frozen=True)
class NodePath:
    """Immutable sequence of segments from the document root."""

    segments: tuple[PathSegment, ...] = ()

    def append(self, segment: PathSegment) -> NodePath:
        """Return a new path with ``segment`` appended."""
        return NodePath(self.segments + (segment,))

    def append_key(self, key: str) -> NodePath:
        return self.append(PathSegment(key=key))

    def append_index(self, index: int) -> NodePath:
        if index < 0:
            raise ValueError(f"list index must be non-negative, got {index}")
        return self.append(PathSegment(index=index))

    def parent(self) -> NodePath:
        """Return the path without its last segment; the root is its own parent."""
        if not self.segments:
            return self
        return NodePath(self.segments[:-1])

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    def is_ancestor_of(self, other: NodePath | None) -> bool:
        """Return whether this path is a proper prefix of ``other``."""
        if other is None or len(self.segments) >= len(other.segments):
            return False
        return other.segments[: len(self.segments)] == self.segments

    def display_string(self) -> str:
        """Render dot/bracket notation, e.g. ``metadata.labels[0].name``."""
        if not self.segments:
            return ROOT_DISPLAY
        parts: list[str] = []
        for position, segment in enumerate(self.segments):
            if segment.is_index:
                parts.append(f"[{segment.index}]")
                continue
            if position > 0:
                parts.append(".")
            parts.append(str(segment))
        return "".join(parts)

    def __str__(self) -> str:
        return self.display_string()


ROOT_PATH = NodePath()
