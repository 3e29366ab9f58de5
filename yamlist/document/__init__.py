"""Document model: nodes, structural paths, the flattened index and parsing.

Trees are built once per loaded file and are read-only afterwards.
"""

from __future__ import annotations

from .document import Document
from .index import DocumentIndex, IndexEntry, build_index
from .node import Node, NodeKind, ScalarType
from .parse import parse_file, parse_text, read_text
from .path import ROOT_DISPLAY, ROOT_PATH, NodePath, PathSegment

__all__ = [
    "Document",
    "DocumentIndex",
    "IndexEntry",
    "Node",
    "NodeKind",
    "NodePath",
    "PathSegment",
    "ROOT_DISPLAY",
    "ROOT_PATH",
    "ScalarType",
    "build_index",
    "parse_file",
    "parse_text",
    "read_text",
]
