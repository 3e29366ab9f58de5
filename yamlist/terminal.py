"""Terminal control for the interactive viewer.

Owns the raw-mode lifecycle, alternate-screen switching and full-frame output.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty
from collections.abc import Iterator

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"
FALLBACK_SIZE = (80, 24)


class TerminalController:
    """Switch the tty in and out of full-screen mode and paint frames."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SCREEN)

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, LEAVE_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, lines)``, each at least 1."""
        columns, lines = shutil.get_terminal_size(FALLBACK_SIZE)
        return max(1, columns), max(1, lines)

    def write_frame(self, lines: list[str]) -> None:
        """Repaint from the home position, clearing each line tail and the rest of the screen."""
        body = "\r\n".join(f"{line}\x1b[0m\x1b[K" for line in lines)
        os.write(self.stdout_fd, f"\x1b[H{body}\x1b[J".encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Full-screen raw mode for the duration of the block, restored on any exit."""
        self.enable_tui_mode()
        try:
            yield
        finally:
            self.disable_tui_mode()
