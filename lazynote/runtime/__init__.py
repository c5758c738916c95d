"""Runtime orchestration: state, selection, mutations, and the event loop.

Entry points are imported lazily so ``lazynote.runtime.state`` and friends
can be used without pulling in terminal handling.
"""

from __future__ import annotations


def run_app(*args, **kwargs):
    """Lazily import the app runner to avoid heavy bootstrap on import."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


def build_initial_state(*args, **kwargs):
    from .app import build_initial_state as _build_initial_state

    return _build_initial_state(*args, **kwargs)


__all__ = ["run_app", "build_initial_state"]
