"""Public runtime entry points.

Groups the viewer session, key dispatch and the interactive loop. Heavy
modules are imported lazily to avoid package-import cycles.
"""

from __future__ import annotations

from .session import ViewerSession


def run_viewer(*args, **kwargs):
    """Lazily import the viewer entrypoint to keep package imports lightweight."""
    from .app import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import the loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = [
    "ViewerSession",
    "run_main_loop",
    "run_viewer",
]
