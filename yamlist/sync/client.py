"""Best-effort cursor sync with an editor peer over a Unix socket.

Messages are newline-delimited JSON objects ``{"op": "cursor", "line": N}``.
Sends never block: they are throttled, and a message the peer cannot take
right now is dropped. Inbound lines are decoded by a daemon reader thread
into a small drop-on-full mailbox.
"""

from __future__ import annotations

import json
import logging
import socket
import threading
import time
from collections.abc import Callable
from pathlib import Path
from queue import Empty, Full, Queue

from ..errors import CursorSyncError

logger = logging.getLogger(__name__)

MIN_SEND_INTERVAL_SECONDS = 0.05
MAILBOX_SIZE = 10
CURSOR_OP = "cursor"


def encode_cursor_message(line: int) -> bytes:
    return (json.dumps({"op": CURSOR_OP, "line": line}, separators=(",", ":")) + "\n").encode("utf-8")


def decode_cursor_line(raw: bytes | str) -> int | None:
    """Return the line of a ``cursor`` message, or ``None`` for anything else."""
    try:
        message = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(message, dict) or message.get("op") != CURSOR_OP:
        return None
    line = message.get("line")
    if isinstance(line, bool) or not isinstance(line, int):
        return None
    return line


class CursorSyncClient:
    """One connected peer channel; every operation is a no-op once closed."""

    def __init__(
        self,
        sock: socket.socket,
        clock: Callable[[], float] = time.monotonic,
        min_interval: float = MIN_SEND_INTERVAL_SECONDS,
    ) -> None:
        self._sock = sock
        self._clock = clock
        self._min_interval = min_interval
        self._lock = threading.Lock()
        self._closed = False
        self._last_send: float | None = None
        self._unsent = b""
        self._reader: threading.Thread | None = None
        self.mailbox: Queue[int] = Queue(maxsize=MAILBOX_SIZE)

    @classmethod
    def connect(cls, socket_path: str | Path, **kwargs) -> CursorSyncClient:
        """Connect to ``socket_path``; raises ``CursorSyncError`` when unreachable."""
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(str(socket_path))
        except OSError as exc:
            sock.close()
            raise CursorSyncError(f"cannot connect to {socket_path}: {exc.strerror or exc}") from exc
        logger.debug("cursor sync connected to %s", socket_path)
        return cls(sock, **kwargs)

    def is_connected(self) -> bool:
        with self._lock:
            return not self._closed

    def send_cursor(self, line: int) -> bool:
        """Send a cursor update; return whether a message was transmitted.

        Returns ``False`` when closed, inside the throttle window, or when the
        peer is not draining its socket. Raises ``CursorSyncError`` when the
        socket write fails.
        """
        with self._lock:
            if self._closed:
                return False
            now = self._clock()
            if self._last_send is not None and now - self._last_send < self._min_interval:
                return False
            try:
                sent = self._write_nowait(encode_cursor_message(line))
            except OSError as exc:
                raise CursorSyncError(f"cursor send failed: {exc.strerror or exc}") from exc
            if not sent:
                logger.debug("sync peer is not reading; dropped cursor line %d", line)
                return False
            self._last_send = now
        return True

    def _write_nowait(self, data: bytes) -> bool:
        """Write without blocking; a partially written message is finished before the next one."""
        try:
            if self._unsent:
                written = self._sock.send(self._unsent, socket.MSG_DONTWAIT)
                self._unsent = self._unsent[written:]
                if self._unsent:
                    return False
            written = self._sock.send(data, socket.MSG_DONTWAIT)
        except BlockingIOError:
            return False
        self._unsent = data[written:]
        return True

    def start_reader(self) -> None:
        if self._reader is not None:
            return
        self._reader = threading.Thread(
            target=self._read_loop,
            name="yamlist-cursor-sync",
            daemon=True,
        )
        self._reader.start()

    def _read_loop(self) -> None:
        try:
            stream = self._sock.makefile("rb")
        except OSError:
            return
        try:
            while True:
                try:
                    raw = stream.readline()
                except (OSError, ValueError):
                    break
                if not raw:
                    break
                line = decode_cursor_line(raw)
                if line is None:
                    logger.debug("ignoring sync message %r", raw[:80])
                    continue
                try:
                    self.mailbox.put_nowait(line)
                except Full:
                    pass
        finally:
            try:
                stream.close()
            except OSError:
                pass
        logger.debug("cursor sync reader stopped")

    def drain_cursor_updates(self) -> list[int]:
        """Return every pending inbound line without blocking."""
        lines: list[int] = []
        while True:
            try:
                lines.append(self.mailbox.get_nowait())
            except Empty:
                return lines

    def latest_cursor_update(self) -> int | None:
        lines = self.drain_cursor_updates()
        return lines[-1] if lines else None

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                self._sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            self._sock.close()
        reader = self._reader
        if reader is not None and reader is not threading.current_thread():
            reader.join(timeout=0.5)
