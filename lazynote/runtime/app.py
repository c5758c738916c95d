"""Runtime composition for the interactive note browser.

Builds the initial state from settings, binds mutations and the editor to
the key handlers, and hands control to the main loop.
"""

from __future__ import annotations

import logging
import shutil
import sys

from ..editor import launch_editor
from ..input import NormalKeyContext, RenameKeyContext, handle_key, handle_preview_scroll_key
from ..note_tree import ExpansionSet, build_note_entries, clamp_index
from ..preview import rebuild_preview_lines, refresh_preview
from ..render import content_rows, preview_width
from .config import NoteSettings, resolve_editor_command, save_show_sidebar
from .loop import RuntimeLoopCallbacks, run_main_loop
from .mutations import archive_entry, create_folder, create_note, rename_entry
from .selection import TreeSelection
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_initial_state(settings: NoteSettings) -> tuple[AppState, TreeSelection]:
    """Create state rooted at the notes directory with an initial snapshot.

    Raises ``TreeBuildError`` when the notes directory cannot be listed.
    """
    root = settings.notes_dir.resolve()
    archive_dir = settings.archive_dir.resolve()
    state = AppState(
        root=root,
        archive_dir=archive_dir,
        expansion=ExpansionSet(),
        sidebar_visible=settings.show_sidebar,
        sidebar_width=settings.sidebar_width,
    )
    state.tree_entries = build_note_entries(root, state.expansion, archive_dir)
    state.selected_idx = clamp_index(0, len(state.tree_entries))
    return state, TreeSelection(state)


def run_app(
    settings: NoteSettings,
    state: AppState,
    selection: TreeSelection,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Run the interactive session until the user quits."""
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    editor_command = resolve_editor_command(settings.editor)
    logger.info("session started at %s with editor %s", state.root, editor_command[0])

    def refresh(force: bool = False) -> None:
        refresh_preview(state, settings.style, force=force)

    def on_resize(columns: int, lines: int) -> None:
        state.preview_rows = content_rows(lines)
        state.preview_width = preview_width(columns, state.sidebar_visible, state.sidebar_width)
        rebuild_preview_lines(state)

    def toggle_sidebar() -> None:
        state.sidebar_visible = not state.sidebar_visible
        save_show_sidebar(state.sidebar_visible)
        term = shutil.get_terminal_size((80, 24))
        on_resize(term.columns, term.lines)

    normal = NormalKeyContext(
        state=state,
        selection=selection,
        refresh_preview=refresh,
        create_note=lambda: create_note(selection),
        create_folder=lambda: create_folder(selection),
        archive_selected=lambda: archive_entry(selection),
        toggle_sidebar=toggle_sidebar,
        launch_editor_for_path=lambda path: launch_editor(
            path,
            editor_command,
            terminal.disable_tui_mode,
            terminal.enable_tui_mode,
        ),
        scroll_preview=lambda key: handle_preview_scroll_key(state, key),
    )
    rename = RenameKeyContext(
        state=state,
        commit_rename=lambda target, text: rename_entry(selection, target, text),
        refresh_preview=refresh,
    )

    refresh(force=True)
    run_main_loop(
        state,
        terminal,
        stdin_fd,
        RuntimeLoopCallbacks(
            handle_key=lambda key: handle_key(key, normal, rename),
            on_resize=on_resize,
        ),
    )
    logger.info("session ended")
