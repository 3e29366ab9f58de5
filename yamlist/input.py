"""Raw stdin decoding into key tokens.

Control bytes and escape sequences become names such as ``UP``, ``CTRL_D``
or ``ESC``; any other input is returned as the decoded character. A byte read
while probing an escape sequence that turns out not to belong to it is kept
for the next call.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

# ``ESC [ <digit> ~`` forms.
_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
}


def _wait_readable(fd: int, timeout_ms: int) -> bool:
    readable, _, _ = select.select([fd], [], [], max(0, timeout_ms) / 1000.0)
    return bool(readable)


def _next_byte(fd: int, timeout_ms: int | None) -> bytes:
    """Read one byte, or ``b""`` on timeout or EOF; ``None`` blocks."""
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    if timeout_ms is not None and not _wait_readable(fd, timeout_ms):
        return b""
    return os.read(fd, 1)


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_text(fd: int, lead: bytes) -> str:
    """Complete the UTF-8 character started by ``lead``."""
    data = lead
    while len(data) < _utf8_length(lead[0]):
        part = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if not part:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def _decode_escape(fd: int) -> str:
    """Decode what follows an ESC byte; a lone ESC stays ``ESC``."""
    introducer = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if not introducer:
        return "ESC"
    if introducer not in (b"[", b"O"):
        _PENDING_BYTES.append(introducer)
        return "ESC"

    code = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if code in _CSI_FINAL_KEYS:
        return _CSI_FINAL_KEYS[code]
    if code in _CSI_TILDE_KEYS and _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS) == b"~":
        return _CSI_TILDE_KEYS[code]
    return "ESC"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when ``timeout_ms`` elapses first."""
    first = _next_byte(fd, timeout_ms)
    if not first:
        return ""
    if first in _CONTROL_KEYS:
        return _CONTROL_KEYS[first]
    if first == b"\x1b":
        return _decode_escape(fd)
    return _decode_text(fd, first)
