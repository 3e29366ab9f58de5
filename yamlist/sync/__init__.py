"""Cursor sync channel to an external editor."""

from __future__ import annotations

from .client import (
    MAILBOX_SIZE,
    MIN_SEND_INTERVAL_SECONDS,
    CursorSyncClient,
    decode_cursor_line,
    encode_cursor_message,
)

__all__ = [
    "CursorSyncClient",
    "MAILBOX_SIZE",
    "MIN_SEND_INTERVAL_SECONDS",
    "decode_cursor_line",
    "encode_cursor_message",
]
