"""Note-tree model: entry types, expansion state, titles, and building.

The builder is a pure function of filesystem state plus an ``ExpansionSet``.
"""

from __future__ import annotations

from .build import build_note_entries, is_archive_path
from .expansion import ExpansionSet
from .navigation import clamp_index, index_of_path, parent_directory_index
from .title import resolve_title
from .types import ARCHIVE_DIR_NAME, NOTE_EXTENSION, DirectoryEntry, NoteEntry, TreeEntry, is_note_name

__all__ = [
    "ARCHIVE_DIR_NAME",
    "NOTE_EXTENSION",
    "DirectoryEntry",
    "NoteEntry",
    "TreeEntry",
    "ExpansionSet",
    "build_note_entries",
    "clamp_index",
    "index_of_path",
    "is_archive_path",
    "is_note_name",
    "parent_directory_index",
    "resolve_title",
]
