"""Frame composition for the tree pane, preview pane, search bar and status bar.

``render_frame`` reads session state and returns exactly ``height`` screen
lines, each fitted to ``width`` columns. Rendering never mutates the session.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import fit_ansi_line, style, truncate_middle
from ..document import Document
from ..runtime.session import ViewerSession
from ..tree_model import InputMode, ViewMode
from ..ui_theme import DEFAULT_THEME, UITheme
from .preview import DEFAULT_PREVIEW_STYLE, render_preview
from .rows import ASCII_ICONS, NERD_FONT_ICONS, IconSet, format_row, format_scalar_value, icons_for

STATUS_BAR_HEIGHT = 1
SEARCH_BAR_HEIGHT = 1
MIN_PREVIEW_TERMINAL_WIDTH = 60
TREE_WIDTH_PERCENT = 55
SEPARATOR = " │ "
HELP_HINT = "j/k:nav h/l:fold /:search n/N:match tab:flat p:preview q:quit"


@dataclass(frozen=True)
class RenderOptions:
    theme: UITheme = DEFAULT_THEME
    icons: IconSet = NERD_FONT_ICONS
    max_preview_lines: int = 200
    preview_style: str = DEFAULT_PREVIEW_STYLE
    colorize: bool = True


@dataclass(frozen=True)
class FrameLayout:
    width: int
    height: int
    content_height: int
    tree_width: int
    preview_width: int
    show_search_bar: bool


def search_bar_visible(session: ViewerSession) -> bool:
    return session.mode is InputMode.SEARCH or session.search.overlay_active


def compute_layout(session: ViewerSession, width: int, height: int) -> FrameLayout:
    """Split the screen; the preview pane only appears on wide enough terminals."""
    width = max(1, width)
    height = max(1, height)
    show_search_bar = search_bar_visible(session)
    content_height = height - STATUS_BAR_HEIGHT - (SEARCH_BAR_HEIGHT if show_search_bar else 0)
    content_height = max(1, content_height)
    if session.show_preview and width >= MIN_PREVIEW_TERMINAL_WIDTH:
        tree_width = width * TREE_WIDTH_PERCENT // 100
        preview_width = width - tree_width - len(SEPARATOR)
    else:
        tree_width = width
        preview_width = 0
    return FrameLayout(width, height, content_height, tree_width, preview_width, show_search_bar)


def render_tree_pane(session: ViewerSession, layout: FrameLayout, options: RenderOptions) -> list[str]:
    theme = options.theme
    flat = session.view_mode is ViewMode.FLAT
    state = session.state
    start = state.scroll_offset
    rows = state.visible_rows[start : start + layout.content_height]
    lines: list[str] = []
    for offset, row in enumerate(rows):
        selected = start + offset == state.selected_index
        text = format_row(row, theme, options.icons, flat=flat, selected=selected)
        fitted = fit_ansi_line(text, layout.tree_width)
        if selected and theme.selected_row:
            fitted = f"{theme.selected_row}{fitted}{theme.reset}"
        lines.append(fitted)
    while len(lines) < layout.content_height:
        lines.append(" " * layout.tree_width)
    return lines


def render_preview_pane(session: ViewerSession, layout: FrameLayout, options: RenderOptions) -> list[str]:
    preview = render_preview(
        session.document,
        session.selected_node(),
        options.theme,
        options.max_preview_lines,
        options.preview_style,
        options.colorize,
    )
    lines = [fit_ansi_line(line, layout.preview_width) for line in preview[: layout.content_height]]
    while len(lines) < layout.content_height:
        lines.append(" " * layout.preview_width)
    return lines


def render_search_bar(session: ViewerSession, width: int, theme: UITheme) -> str:
    search = session.search
    cursor = "_" if session.mode is InputMode.SEARCH else ""
    prompt = style("/", theme.search_prompt, theme.reset)
    query = style(search.query + cursor, theme.search_query, theme.reset)
    if search.query and not search.matches:
        count = style(" no matches", theme.match_count, theme.reset)
    elif search.query:
        count = style(f" {search.status_label()}", theme.match_count, theme.reset)
    else:
        count = ""
    return fit_ansi_line(prompt + query + count, width)


def render_status_bar(session: ViewerSession, width: int, theme: UITheme) -> str:
    if session.mode is InputMode.SEARCH:
        mode_label = "SEARCH"
    elif session.view_mode is ViewMode.FLAT:
        mode_label = "FLAT"
    else:
        mode_label = "TREE"
    mode = style(f" {mode_label} ", theme.status_mode, theme.reset)
    help_text = HELP_HINT if width >= len(HELP_HINT) + 30 else ""
    available = max(0, width - len(mode_label) - 2 - len(help_text) - 3)
    if session.status_message:
        info = style(" " + truncate_middle(session.status_message, available), theme.error, theme.reset)
    else:
        node = session.selected_node()
        path = node.path.display_string() if node is not None else ""
        info = style(" " + truncate_middle(path, available), theme.status_bar, theme.reset)
    left = mode + info
    line = fit_ansi_line(left, max(0, width - len(help_text)))
    if help_text:
        line += style(help_text, theme.status_info, theme.reset)
    return fit_ansi_line(line, width)


def render_frame(
    session: ViewerSession,
    width: int,
    height: int,
    options: RenderOptions | None = None,
) -> list[str]:
    """Compose one full screen of lines for the current session state."""
    options = options or RenderOptions()
    layout = compute_layout(session, width, height)
    tree_lines = render_tree_pane(session, layout, options)
    if layout.preview_width > 0:
        preview_lines = render_preview_pane(session, layout, options)
        separator = style(SEPARATOR, options.theme.divider, options.theme.reset)
        body = [tree + separator + preview for tree, preview in zip(tree_lines, preview_lines)]
    else:
        body = tree_lines
    lines = list(body)
    if layout.show_search_bar:
        lines.append(render_search_bar(session, layout.width, options.theme))
    lines.append(render_status_bar(session, layout.width, options.theme))
    return lines[: layout.height]


def render_plain_listing(document: Document) -> list[str]:
    """Return ``path: value`` lines for every non-root node in document order."""
    out: list[str] = []
    for entry in document.index:
        if entry.path.is_root:
            continue
        node = entry.node
        if node.is_expandable():
            out.append(entry.display_string)
        else:
            out.append(f"{entry.display_string}: {format_scalar_value(node.scalar_value, node.scalar_type)}")
    return out


__all__ = [
    "ASCII_ICONS",
    "FrameLayout",
    "IconSet",
    "NERD_FONT_ICONS",
    "RenderOptions",
    "compute_layout",
    "format_row",
    "format_scalar_value",
    "icons_for",
    "render_frame",
    "render_plain_listing",
    "render_preview",
]
