"""Mutable runtime state shared by input handlers, mutations, and rendering."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from ..note_tree import ExpansionSet, TreeEntry

MODE_NORMAL = "normal"
MODE_RENAMING = "renaming"
STATUS_MESSAGE_SECONDS = 4.0
RENAME_CHAR_LIMIT = 50


@dataclass
class AppState:
    root: Path
    archive_dir: Path
    expansion: ExpansionSet
    tree_entries: list[TreeEntry] = field(default_factory=list)
    selected_idx: int | None = None
    mode: str = MODE_NORMAL
    rename_text: str = ""
    rename_target: Path | None = None
    sidebar_visible: bool = True
    sidebar_width: int = 30
    tree_start: int = 0
    preview_path: Path | None = None
    rendered: str = ""
    preview_lines: list[str] = field(default_factory=list)
    preview_start: int = 0
    preview_rows: int = 20
    preview_width: int = 80
    status_message: str = ""
    status_message_until: float = 0.0
    suspended: bool = False
    dirty: bool = True

    def selected_entry(self) -> TreeEntry | None:
        if self.selected_idx is None or not (0 <= self.selected_idx < len(self.tree_entries)):
            return None
        return self.tree_entries[self.selected_idx]

    def selected_path(self) -> Path | None:
        entry = self.selected_entry()
        return entry.path if entry is not None else None

    def show_status(self, message: str, seconds: float = STATUS_MESSAGE_SECONDS) -> None:
        self.status_message = message
        self.status_message_until = time.monotonic() + seconds
        self.dirty = True

    def expire_status(self, now: float) -> None:
        if self.status_message and now >= self.status_message_until:
            self.status_message = ""
            self.status_message_until = 0.0
            self.dirty = True

    def begin_renaming(self, target: Path, seed: str) -> None:
        """Switch to renaming mode for ``target`` with ``seed`` prefilled."""
        self.mode = MODE_RENAMING
        self.rename_target = target
        self.rename_text = seed[:RENAME_CHAR_LIMIT]
        self.dirty = True

    def end_renaming(self) -> None:
        self.mode = MODE_NORMAL
        self.rename_target = None
        self.rename_text = ""
        self.dirty = True

    @property
    def renaming(self) -> bool:
        return self.mode == MODE_RENAMING
