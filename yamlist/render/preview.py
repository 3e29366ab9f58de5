"""Preview pane content for the selected node.

The pane shows the node's path and type summary, then the YAML source lines
the node spans, highlighted with Pygments. When no source excerpt is known
the node's children are summarized instead.
"""

from __future__ import annotations

import logging

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import YamlLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..ansi import style
from ..document import Document, Node, NodeKind, ScalarType
from ..ui_theme import UITheme
from .rows import format_scalar_value

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_STYLE = "monokai"
PREVIEW_VALUE_CHARS = 40

_CONTROL_CHARS = {code: f"\\x{code:02x}" for code in (*range(0, 9), 11, 12, *range(14, 32), 127)}
_FORMATTERS: dict[str, TerminalFormatter] = {}
_LEXER = YamlLexer()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes so preview text cannot move the cursor."""
    return source.translate(_CONTROL_CHARS)


def normalize_style(name: str | None) -> str:
    if not name:
        return DEFAULT_PREVIEW_STYLE
    try:
        get_style_by_name(name)
    except ClassNotFound:
        return DEFAULT_PREVIEW_STYLE
    return name


def _formatter_for_style(name: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(name)
    if formatter is None:
        formatter = TerminalFormatter(style=name)
        _FORMATTERS[name] = formatter
    return formatter


def highlight_yaml(source: str, style_name: str = DEFAULT_PREVIEW_STYLE) -> list[str]:
    """Highlight YAML source into terminal lines; plain lines if highlighting fails."""
    source = sanitize_terminal_text(source)
    try:
        rendered = highlight(source, _LEXER, _formatter_for_style(normalize_style(style_name)))
    except Exception as exc:
        logger.debug("preview highlighting failed: %s", exc)
        return source.splitlines()
    return rendered.rstrip("\n").split("\n")


def type_info(node: Node) -> str:
    if node.kind is NodeKind.MAP:
        return f"map ({node.child_count()} keys)"
    if node.kind is NodeKind.LIST:
        return f"list ({node.child_count()} items)"
    info = f"scalar ({node.scalar_type.value})"
    line_count = node.scalar_value.rstrip("\n").count("\n") + 1
    if node.scalar_type is ScalarType.STRING and line_count > 1:
        info += f" · {line_count} lines"
    return info


def _summary_value(node: Node, theme: UITheme) -> str:
    if node.kind is not NodeKind.SCALAR:
        return style(type_info(node), theme.child_count, theme.reset)
    value = format_scalar_value(node.scalar_value, node.scalar_type, PREVIEW_VALUE_CHARS)
    return style(value, theme.value_style(node.scalar_type), theme.reset)


def summarize_node(node: Node, theme: UITheme, max_lines: int) -> list[str]:
    """Describe ``node`` without source text: children for containers, value for scalars."""
    if node.kind is NodeKind.SCALAR:
        if node.scalar_type is ScalarType.NULL:
            return [style("null", theme.null_value, theme.reset)]
        lines = sanitize_terminal_text(node.scalar_value).split("\n")
        shown = [style(line, theme.value_style(node.scalar_type), theme.reset) for line in lines[:max_lines]]
        if len(lines) > max_lines:
            shown.append(style(f"... ({len(lines) - max_lines} more lines)", theme.child_count, theme.reset))
        return shown

    noun = "keys" if node.kind is NodeKind.MAP else "items"
    out: list[str] = []
    for child in node.children[:max_lines]:
        if node.kind is NodeKind.MAP:
            label = style(child.key, theme.key, theme.reset) + ": "
        else:
            label = style(f"[{child.index}] ", theme.child_count, theme.reset)
        out.append(label + _summary_value(child, theme))
    if node.child_count() > max_lines:
        out.append(style(f"... ({node.child_count() - max_lines} more {noun})", theme.child_count, theme.reset))
    return out


def render_preview(
    document: Document,
    node: Node | None,
    theme: UITheme,
    max_lines: int,
    style_name: str = DEFAULT_PREVIEW_STYLE,
    colorize: bool = True,
) -> list[str]:
    """Return unclipped preview lines for ``node``."""
    if node is None:
        return [style("(no selection)", theme.null_value, theme.reset)]

    lines = [
        style(node.path.display_string(), theme.preview_path, theme.reset),
        style(type_info(node), theme.preview_info, theme.reset),
        "",
    ]
    max_lines = max(1, max_lines)
    excerpt = document.source_excerpt(node)
    if not excerpt:
        return lines + summarize_node(node, theme, max_lines)

    clipped = excerpt[:max_lines]
    if colorize:
        lines.extend(highlight_yaml("\n".join(clipped), style_name))
    else:
        lines.extend(sanitize_terminal_text(line) for line in clipped)
    if len(excerpt) > max_lines:
        lines.append(style(f"... ({len(excerpt) - max_lines} more lines)", theme.child_count, theme.reset))
    return lines
