"""Renaming-mode keyboard handling (free-text folder name prompt)."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..runtime.state import RENAME_CHAR_LIMIT, AppState


@dataclass(frozen=True)
class RenameKeyContext:
    state: AppState
    commit_rename: Callable[[Path, str], object]
    refresh_preview: Callable[..., None]


def handle_rename_key(key: str, context: RenameKeyContext) -> bool:
    """Edit, confirm, or cancel the rename prompt. Never requests quit.

    Confirming with empty text leaves renaming mode without touching the
    filesystem, the same as cancelling.
    """
    state = context.state

    if key in {"ESC", "CTRL_C"}:
        state.end_renaming()
        return False

    if key == "ENTER":
        text = state.rename_text
        target = state.rename_target
        if text and target is not None:
            context.commit_rename(target, text)
        state.end_renaming()
        context.refresh_preview()
        return False

    if key == "BACKSPACE":
        if state.rename_text:
            state.rename_text = state.rename_text[:-1]
            state.dirty = True
        return False

    if key == "CTRL_U":
        state.rename_text = ""
        state.dirty = True
        return False

    if len(key) == 1 and key.isprintable() and len(state.rename_text) < RENAME_CHAR_LIMIT:
        state.rename_text += key
        state.dirty = True
    return False
