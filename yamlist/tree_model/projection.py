"""Visible-row projection for tree and flat modes plus the search overlay."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import replace

from ..document import Document, DocumentIndex, Node, NodePath
from .state import TreeState
from .types import ViewMode, VisibleRow


def build_tree_rows(root: Node, is_expanded: Callable[[NodePath], bool]) -> list[VisibleRow]:
    """Pre-order rows; children appear only under expanded nodes that have any."""
    rows: list[VisibleRow] = []

    def walk(node: Node) -> None:
        expanded = is_expanded(node.path)
        rows.append(VisibleRow.for_node(node, len(rows), expanded))
        if expanded and node.has_children():
            for child in node.children:
                walk(child)

    walk(root)
    return rows


def build_flat_rows(index: DocumentIndex) -> list[VisibleRow]:
    """One depth-0 row per index entry, root excluded."""
    rows: list[VisibleRow] = []
    for entry in index:
        if entry.path.is_root:
            continue
        rows.append(VisibleRow.for_node(entry.node, len(rows), False, depth=0))
    return rows


def filter_tree_rows_for_matches(root: Node, matches: Iterable[Node]) -> list[VisibleRow]:
    """Build filtered tree rows for matched nodes and their ancestors.

    Ancestors of a match are forced open; descendants of a match are only
    shown when they match themselves.
    """
    matched_ids: set[int] = set()
    forced_expanded: set[int] = {id(root)}
    for node in matches:
        matched_ids.add(id(node))
        for ancestor in node.ancestors():
            forced_expanded.add(id(ancestor))
    visible_ids = matched_ids | forced_expanded
    rows: list[VisibleRow] = []

    def walk(node: Node) -> None:
        expanded = id(node) in forced_expanded
        row = VisibleRow.for_node(node, len(rows), expanded)
        rows.append(replace(row, is_search_match=id(node) in matched_ids))
        if not expanded:
            return
        for child in node.children:
            if id(child) in visible_ids:
                walk(child)

    walk(root)
    return rows


def filter_flat_rows_for_matches(rows: list[VisibleRow], matches: Iterable[Node]) -> list[VisibleRow]:
    matched_ids = {id(node) for node in matches}
    filtered: list[VisibleRow] = []
    for row in rows:
        if id(row.node) in matched_ids:
            filtered.append(replace(row, index=len(filtered), is_search_match=True))
    return filtered


def dim_rows(rows: list[VisibleRow]) -> list[VisibleRow]:
    return [replace(row, is_dimmed=True) for row in rows]


def project_rows(
    document: Document,
    is_expanded: Callable[[NodePath], bool],
    view_mode: ViewMode,
    query: str = "",
    matches: Iterable[Node] = (),
) -> list[VisibleRow]:
    """Project the document into rows for ``view_mode`` with the search overlay applied.

    An empty ``query`` means no overlay. A query with no matches dims every
    row; otherwise rows are filtered down to the matches (plus their
    ancestors in tree mode).
    """
    match_list = list(matches)
    if query and match_list:
        if view_mode is ViewMode.TREE:
            return filter_tree_rows_for_matches(document.root, match_list)
        return filter_flat_rows_for_matches(build_flat_rows(document.index), match_list)

    if view_mode is ViewMode.TREE:
        rows = build_tree_rows(document.root, is_expanded)
    else:
        rows = build_flat_rows(document.index)
    if query:
        return dim_rows(rows)
    return rows


def compute_visible_rows(
    document: Document,
    state: TreeState,
    view_mode: ViewMode,
    query: str = "",
    matches: Iterable[Node] = (),
) -> list[VisibleRow]:
    """Rebuild ``state.visible_rows`` and re-resolve the selection against them."""
    rows = project_rows(document, state.is_expanded, view_mode, query, matches)
    state.replace_rows(rows)
    return rows
