"""Main interactive event loop for the terminal UI.

Processes one key at a time to completion, redrawing only when state is
dirty. Feature logic lives in the injected callbacks.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from ..render import DEFAULT_THEME, UITheme, content_rows, render_frame, write_frame
from .state import AppState
from .terminal import TerminalController

POLL_TIMEOUT_MS = 200


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    handle_key: Callable[[str], bool]
    on_resize: Callable[[int, int], None]


def keep_tree_selection_visible(state: AppState, visible_rows: int) -> None:
    """Scroll the sidebar window so the cursor row stays on screen."""
    prev_tree_start = state.tree_start
    if state.selected_idx is None:
        state.tree_start = 0
    elif state.selected_idx < state.tree_start:
        state.tree_start = state.selected_idx
    elif state.selected_idx >= state.tree_start + visible_rows:
        state.tree_start = state.selected_idx - visible_rows + 1
    state.tree_start = max(0, min(state.tree_start, max(0, len(state.tree_entries) - visible_rows)))
    if state.tree_start != prev_tree_start:
        state.dirty = True


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: RuntimeLoopCallbacks,
    theme: UITheme = DEFAULT_THEME,
) -> None:
    """Run until a key handler requests quit.

    Each iteration handles resize bookkeeping, status expiry, optional
    rendering, and one key read with a short timeout.
    """
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                callbacks.on_resize(term.columns, term.lines)
                state.dirty = True

            state.expire_status(time.monotonic())
            keep_tree_selection_visible(state, content_rows(term.lines))

            if state.dirty:
                write_frame(render_frame(state, term.columns, term.lines, theme))
                state.dirty = False

            key = read_key(stdin_fd, timeout_ms=POLL_TIMEOUT_MS)
            if not key:
                continue
            if callbacks.handle_key(key):
                break
