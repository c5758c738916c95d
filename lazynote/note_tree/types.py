"""Tree entry datatypes used across note-tree and runtime modules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

NOTE_EXTENSION = ".md"
ARCHIVE_DIR_NAME = "archive"


@dataclass(frozen=True)
class DirectoryEntry:
    """One folder row in the flattened note tree."""

    path: Path
    title: str
    depth: int
    expanded: bool = False

    @property
    def is_dir(self) -> bool:
        return True


@dataclass(frozen=True)
class NoteEntry:
    """One markdown note row with its cached raw content."""

    path: Path
    title: str
    depth: int
    content: str = ""

    @property
    def is_dir(self) -> bool:
        return False


TreeEntry = Union[DirectoryEntry, NoteEntry]


def is_note_name(name: str) -> bool:
    """Return whether ``name`` carries the note extension."""
    return name.endswith(NOTE_EXTENSION)
