"""Runtime composition layer for yamlist.

Builds the session, key handler and render options from a loaded document,
then runs the interactive loop or prints a plain listing.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

from ..config import DEFAULT_MAX_PREVIEW_LINES, save_show_preview
from ..document import Document
from ..render import RenderOptions, icons_for, render_plain_listing
from ..render.preview import DEFAULT_PREVIEW_STYLE
from ..sync import CursorSyncClient
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .keys import KeyHandler
from .loop import RuntimeLoopTiming, run_main_loop
from .session import ViewerSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewerOptions:
    theme: str | None = None
    no_color: bool = False
    use_icons: bool = True
    max_preview_lines: int = DEFAULT_MAX_PREVIEW_LINES
    preview_style: str = DEFAULT_PREVIEW_STYLE
    show_preview: bool = True
    initial_path: str | None = None
    nopager: bool = False


def build_session(
    document: Document,
    options: ViewerOptions,
    sync: CursorSyncClient | None = None,
) -> ViewerSession:
    session = ViewerSession(document, sync=sync, show_preview=options.show_preview)
    if options.initial_path:
        session.jump_to_path(options.initial_path)
    return session


def build_render_options(options: ViewerOptions) -> RenderOptions:
    return RenderOptions(
        theme=resolve_theme(options.theme, no_color=options.no_color),
        icons=icons_for(options.use_icons),
        max_preview_lines=options.max_preview_lines,
        preview_style=options.preview_style,
        colorize=not options.no_color,
    )


def run_viewer(
    document: Document,
    options: ViewerOptions,
    sync: CursorSyncClient | None = None,
) -> None:
    """Browse ``document`` interactively, or print it when no TTY is available."""
    if options.nopager or not sys.stdin.isatty() or not sys.stdout.isatty():
        for line in render_plain_listing(document):
            sys.stdout.write(line + "\n")
        return

    session = build_session(document, options, sync)
    if sync is not None:
        sync.start_reader()
    key_handler = KeyHandler(session, on_toggle_preview=save_show_preview)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    logger.debug("starting viewer: %d nodes", document.node_count())
    try:
        run_main_loop(
            session,
            terminal,
            stdin_fd,
            key_handler,
            build_render_options(options),
            RuntimeLoopTiming(),
        )
    finally:
        if sync is not None:
            sync.close()
