"""Key search over the document index."""

from __future__ import annotations

from .engine import SearchEngine

__all__ = ["SearchEngine"]
