"""Tree state and visible-row projection.

Rows are rebuilt from the document plus ``TreeState`` after every mutation.
"""

from __future__ import annotations

from .projection import (
    build_flat_rows,
    build_tree_rows,
    compute_visible_rows,
    dim_rows,
    filter_flat_rows_for_matches,
    filter_tree_rows_for_matches,
    project_rows,
)
from .state import TreeState
from .types import InputMode, ViewMode, VisibleRow

__all__ = [
    "InputMode",
    "TreeState",
    "ViewMode",
    "VisibleRow",
    "build_flat_rows",
    "build_tree_rows",
    "compute_visible_rows",
    "dim_rows",
    "filter_flat_rows_for_matches",
    "filter_tree_rows_for_matches",
    "project_rows",
]
