"""Cursor movement, expand/collapse, and rebuild re-anchoring.

``TreeSelection`` is the only writer of ``state.tree_entries`` and
``state.selected_idx``. Every rebuild replaces the snapshot wholesale and
then re-anchors the cursor on a target path when it is still listed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..errors import TreeBuildError
from ..note_tree import (
    ExpansionSet,
    TreeEntry,
    build_note_entries,
    clamp_index,
    index_of_path,
    parent_directory_index,
)
from .state import AppState

logger = logging.getLogger(__name__)

TreeBuilder = Callable[[Path, ExpansionSet, Path], list[TreeEntry]]


class TreeSelection:
    """Navigation and selection operations over one ``AppState``."""

    def __init__(self, state: AppState, builder: TreeBuilder = build_note_entries) -> None:
        self.state = state
        self._builder = builder

    def rebuild(self, target: Path | None = None) -> bool:
        """Rebuild the snapshot and re-anchor the cursor.

        ``target`` defaults to the currently selected path. When it is no
        longer listed the previous index is clamped into the new snapshot.
        Returns ``False`` when the root could not be listed, in which case
        the previous snapshot is kept.
        """
        state = self.state
        previous_idx = state.selected_idx
        if target is None:
            target = state.selected_path()
        try:
            entries = self._builder(state.root, state.expansion, state.archive_dir)
        except TreeBuildError as exc:
            logger.error("tree rebuild failed: %s", exc)
            state.show_status(str(exc))
            return False

        state.tree_entries = entries
        anchored = index_of_path(entries, target) if target is not None else None
        state.selected_idx = anchored if anchored is not None else clamp_index(previous_idx, len(entries))
        state.dirty = True
        return True

    def move_cursor(self, delta: int) -> bool:
        """Move one row up or down; stays put at either end."""
        state = self.state
        if state.selected_idx is None:
            return False
        new_idx = state.selected_idx + delta
        if not (0 <= new_idx < len(state.tree_entries)):
            return False
        state.selected_idx = new_idx
        state.dirty = True
        return True

    def toggle_expand(self, path: Path, value: bool) -> None:
        self.state.expansion.set(path, value)
        self.rebuild()

    def expand_selected(self) -> bool:
        entry = self.state.selected_entry()
        if entry is None or not entry.is_dir:
            return False
        self.toggle_expand(entry.path, True)
        return True

    def collapse_parent_and_select(self) -> bool:
        """Collapse the selected directory, or a note's nearest ancestor.

        For a note the cursor moves onto the collapsed ancestor. A top-level
        note has no ancestor entry and nothing happens.
        """
        state = self.state
        entry = state.selected_entry()
        if entry is None:
            return False
        if entry.is_dir:
            self.toggle_expand(entry.path, False)
            return True
        assert state.selected_idx is not None
        parent_idx = parent_directory_index(state.tree_entries, state.selected_idx)
        if parent_idx is None:
            return False
        parent = state.tree_entries[parent_idx]
        state.expansion.collapse(parent.path)
        self.rebuild(target=parent.path)
        return True

    def current_directory(self) -> Path:
        """Return the directory new notes and folders go into.

        That is the selected directory, else the nearest preceding directory
        shallower than the selected note, else the notes root.
        """
        state = self.state
        entry = state.selected_entry()
        if entry is None:
            return state.root
        if entry.is_dir:
            return entry.path
        assert state.selected_idx is not None
        parent_idx = parent_directory_index(state.tree_entries, state.selected_idx)
        if parent_idx is None:
            return state.root
        return state.tree_entries[parent_idx].path
