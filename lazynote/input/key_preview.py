"""Preview-pane scrolling for keys the tree does not claim."""

from __future__ import annotations

from ..runtime.state import AppState

PAGE_DOWN_KEYS = frozenset({"PAGE_DOWN", " ", "f"})
PAGE_UP_KEYS = frozenset({"PAGE_UP", "b"})
HALF_DOWN_KEYS = frozenset({"d", "CTRL_D"})
HALF_UP_KEYS = frozenset({"u", "CTRL_U"})
TOP_KEYS = frozenset({"g", "HOME"})
BOTTOM_KEYS = frozenset({"G", "END"})


def handle_preview_scroll_key(state: AppState, key: str) -> bool:
    """Scroll the preview for paging keys; return whether ``key`` was one."""
    rows = max(1, state.preview_rows)
    max_start = max(0, len(state.preview_lines) - rows)

    if key in PAGE_DOWN_KEYS:
        target = state.preview_start + rows
    elif key in PAGE_UP_KEYS:
        target = state.preview_start - rows
    elif key in HALF_DOWN_KEYS:
        target = state.preview_start + max(1, rows // 2)
    elif key in HALF_UP_KEYS:
        target = state.preview_start - max(1, rows // 2)
    elif key in TOP_KEYS:
        target = 0
    elif key in BOTTOM_KEYS:
        target = max_start
    else:
        return False

    state.preview_start = max(0, min(target, max_start))
    return True
