"""Normal-mode keyboard handling."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..runtime.selection import TreeSelection
from ..runtime.state import AppState
from .key_registry import KeyComboBinding, KeyComboRegistry


@dataclass(frozen=True)
class NormalKeyContext:
    """State and bound operations required for normal-mode key handling."""

    state: AppState
    selection: TreeSelection
    refresh_preview: Callable[..., None]
    create_note: Callable[[], object]
    create_folder: Callable[[], object]
    archive_selected: Callable[[], object]
    toggle_sidebar: Callable[[], None]
    launch_editor_for_path: Callable[[Path], str | None]
    scroll_preview: Callable[[str], bool]


def open_in_editor(context: NormalKeyContext, path: Path) -> None:
    """Suspend the UI around the editor, then rebuild tree and preview.

    The rebuild runs whether the editor succeeded, failed, or could not
    be started.
    """
    state = context.state
    state.suspended = True
    try:
        error = context.launch_editor_for_path(path)
    finally:
        state.suspended = False
    context.selection.rebuild(target=path)
    context.refresh_preview(force=True)
    if error is not None:
        state.show_status(error)
    state.dirty = True


def handle_normal_key(key: str, context: NormalKeyContext) -> bool:
    """Handle one normal-mode key and return ``True`` when app should quit."""
    state = context.state
    selection = context.selection

    def move_action(delta: int) -> bool:
        selection.move_cursor(delta)
        return False

    def expand_action() -> bool:
        selection.expand_selected()
        return False

    def collapse_action() -> bool:
        selection.collapse_parent_and_select()
        return False

    def open_selected_action() -> bool:
        """Rename a selected folder; open a selected note in the editor."""
        entry = state.selected_entry()
        if entry is None:
            return False
        if entry.is_dir:
            state.begin_renaming(entry.path, entry.title)
        else:
            open_in_editor(context, entry.path)
        return False

    def create_note_action() -> bool:
        context.create_note()
        return False

    def create_folder_action() -> bool:
        context.create_folder()
        return False

    def archive_action() -> bool:
        context.archive_selected()
        return False

    def toggle_sidebar_action() -> bool:
        context.toggle_sidebar()
        return False

    def quit_action() -> bool:
        return True

    bindings = KeyComboRegistry(
        KeyComboBinding(("q", "CTRL_C"), quit_action),
        KeyComboBinding(("TAB",), toggle_sidebar_action),
        KeyComboBinding(("UP", "k"), lambda: move_action(-1)),
        KeyComboBinding(("DOWN", "j"), lambda: move_action(1)),
        KeyComboBinding(("RIGHT", "l"), expand_action),
        KeyComboBinding(("LEFT", "h"), collapse_action),
        KeyComboBinding(("ENTER",), open_selected_action),
        KeyComboBinding(("n",), create_note_action),
        KeyComboBinding(("N",), create_folder_action),
        KeyComboBinding(("BACKSPACE",), archive_action),
    )

    handled = bindings.dispatch(key)
    if handled is None:
        if context.scroll_preview(key):
            state.dirty = True
        return False
    if handled:
        return True
    context.refresh_preview()
    return False
