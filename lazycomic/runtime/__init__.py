"""Public runtime orchestration entry points.

This package groups the interactive viewer bootstrap (`run_viewer`) and the
terminal-facing collaborators the viewer renders through.
"""

from __future__ import annotations


def run_viewer(*args, **kwargs):
    """Lazily import viewer entrypoint to avoid terminal setup on import."""
    from .app import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


__all__ = ["run_viewer"]
