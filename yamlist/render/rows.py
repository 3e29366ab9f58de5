"""Row formatting for the tree pane: icons, keys, scalar values, counts."""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import style
from ..document import NodeKind, ScalarType
from ..tree_model import VisibleRow
from ..ui_theme import UITheme

INDENT_WIDTH = 2
MAX_INLINE_VALUE_CHARS = 50
SELECTION_ACCENT = "▌"


@dataclass(frozen=True)
class IconSet:
    """Expand markers and per-kind type icons."""

    expanded: str
    collapsed: str
    leaf: str
    map: str
    list: str
    string: str
    number: str
    bool: str
    null: str
    timestamp: str

    def expand_icon(self, is_expanded: bool, is_expandable: bool) -> str:
        if not is_expandable:
            return self.leaf
        return self.expanded if is_expanded else self.collapsed

    def type_icon(self, kind: NodeKind, scalar_type: ScalarType) -> str:
        if kind is NodeKind.MAP:
            return self.map
        if kind is NodeKind.LIST:
            return self.list
        if scalar_type in {ScalarType.INT, ScalarType.FLOAT}:
            return self.number
        if scalar_type is ScalarType.BOOL:
            return self.bool
        if scalar_type is ScalarType.NULL:
            return self.null
        if scalar_type is ScalarType.TIMESTAMP:
            return self.timestamp
        return self.string


NERD_FONT_ICONS = IconSet(
    expanded="▾",
    collapsed="▸",
    leaf=" ",
    map="\uf0e8",
    list="\uf03a",
    string="\uf031",
    number="\U000f03a0",
    bool="\U000f0a19",
    null="\U000f07e2",
    timestamp="\uf017",
)

ASCII_ICONS = IconSet(
    expanded="v",
    collapsed=">",
    leaf=" ",
    map="{}",
    list="[]",
    string='"',
    number="#",
    bool="?",
    null="~",
    timestamp="@",
)


def icons_for(use_icons: bool) -> IconSet:
    return NERD_FONT_ICONS if use_icons else ASCII_ICONS


def format_scalar_value(value: str, scalar_type: ScalarType, max_chars: int = MAX_INLINE_VALUE_CHARS) -> str:
    """Render a scalar for one-line display.

    Nulls print as ``null``, multi-line strings as a line-count summary, and
    long values are cut to ``max_chars`` with a trailing ``...``.
    """
    if scalar_type is ScalarType.NULL:
        return "null"
    display = value
    if "\n" in display:
        lines = display.rstrip("\n").split("\n")
        display = f"[{len(lines)} lines]" if len(lines) > 1 else lines[0]
    if len(display) > max_chars:
        display = display[: max(0, max_chars - 3)] + "..."
    return display.replace("\n", "\\n").replace("\t", "\\t")


def format_row(
    row: VisibleRow,
    theme: UITheme,
    icons: IconSet,
    flat: bool = False,
    selected: bool = False,
) -> str:
    """Return one tree-pane row without width fitting.

    Selected rows come back unstyled so the caller can paint the whole line.
    """
    node = row.node
    dimmed = row.is_dimmed and not selected

    def paint(text: str, sgr: str) -> str:
        if selected:
            return text
        return style(text, theme.dimmed if dimmed else sgr, theme.reset)

    parts: list[str] = []
    if flat:
        parts.append(paint(row.path_string(), theme.key))
    else:
        parts.append(" " + " " * (row.depth * INDENT_WIDTH))
        parts.append(paint(icons.expand_icon(row.is_expanded, row.is_expandable), theme.expand_icon))
        parts.append(" ")
        parts.append(paint(icons.type_icon(node.kind, node.scalar_type), theme.type_icon))
        parts.append(" ")
        parts.append(paint(row.display_key(), theme.key))

    if node.kind is NodeKind.SCALAR:
        parts.append(": ")
        parts.append(paint(format_scalar_value(node.scalar_value, node.scalar_type), theme.value_style(node.scalar_type)))
    elif not flat and row.has_children:
        parts.append(paint(f" ({row.child_count})", theme.child_count))

    if row.is_search_match and not selected:
        parts.append(" " + style("*", theme.match_marker, theme.reset))

    content = "".join(parts)
    if selected and not flat and content:
        content = SELECTION_ACCENT + content[1:]
    return content
