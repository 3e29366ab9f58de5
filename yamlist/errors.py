"""Exception hierarchy shared across yamlist modules."""

from __future__ import annotations


class YamlistError(Exception):
    """Base class for all errors raised by yamlist."""


class DocumentLoadError(YamlistError):
    """Source file could not be read."""


class DocumentParseError(YamlistError):
    """Source text is not a well-formed YAML document.

    ``line`` and ``column`` are 1-based when the parser reported a position.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        message = super().__str__()
        if self.line is None:
            return message
        if self.column is None:
            return f"{message} (line {self.line})"
        return f"{message} (line {self.line}, column {self.column})"


class CursorSyncError(YamlistError):
    """Cursor position could not be delivered to the sync peer."""
