"""Main interactive event loop for the terminal UI.

Each iteration syncs the viewport with the terminal size, renders when the
session is dirty, then blocks briefly for one key. Idle iterations drain the
cursor-sync mailbox.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..input import read_key
from ..render import RenderOptions, compute_layout, render_frame
from ..terminal import TerminalController
from .keys import KeyHandler
from .session import ViewerSession


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    input_timeout_ms: int = 120


def sync_viewport(session: ViewerSession, columns: int, lines: int) -> bool:
    """Update the session's view height from the terminal; return whether scroll changed."""
    layout = compute_layout(session, columns, lines)
    previous = (session.view_height, session.state.scroll_offset)
    session.set_view_height(layout.content_height)
    return previous != (session.view_height, session.state.scroll_offset)


def run_main_loop(
    session: ViewerSession,
    terminal: TerminalController,
    stdin_fd: int,
    key_handler: KeyHandler,
    options: RenderOptions,
    timing: RuntimeLoopTiming | None = None,
) -> None:
    """Run the interactive loop until a quit key is pressed."""
    timing = timing or RuntimeLoopTiming()
    dirty = True
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while True:
            size = terminal.size()
            if size != last_size:
                last_size = size
                dirty = True
            columns, lines = size
            if sync_viewport(session, columns, lines):
                dirty = True

            if dirty:
                terminal.write_frame(render_frame(session, columns, lines, options))
                dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=timing.input_timeout_ms)
            except KeyboardInterrupt:
                continue
            if key == "":
                if session.poll_sync():
                    dirty = True
                continue

            if session.status_message:
                session.status_message = ""
            should_quit, _handled = key_handler.handle(key)
            if should_quit:
                break
            dirty = True
