"""Flattened note-tree construction honoring the expansion set."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..errors import FilesystemError, TreeBuildError
from .expansion import ExpansionSet
from .fs import list_directory_children, read_text
from .title import resolve_title
from .types import ARCHIVE_DIR_NAME, DirectoryEntry, NoteEntry, TreeEntry, is_note_name

logger = logging.getLogger(__name__)


def _safe_resolve(path: Path) -> Path:
    try:
        return path.resolve()
    except (OSError, RuntimeError):
        return path


def is_archive_path(path: Path, archive_dir: Path) -> bool:
    """Return whether ``path`` is the archive directory by location or by name."""
    if path.name == ARCHIVE_DIR_NAME:
        return True
    return _safe_resolve(path) == archive_dir


def build_note_entries(
    root: Path,
    expansion: ExpansionSet,
    archive_dir: Path,
    *,
    read_note: Callable[[Path], str] = read_text,
) -> list[TreeEntry]:
    """Build the pre-order flattened view of ``root``.

    Directories are descended into only when expanded. The archive directory
    and non-note files never appear. Raises ``TreeBuildError`` when ``root``
    itself cannot be listed; nested listing and note read failures are
    logged and skipped.
    """
    archive_dir = _safe_resolve(archive_dir)
    entries: list[TreeEntry] = []

    def walk(directory: Path, depth: int, ancestors: frozenset[Path]) -> None:
        """Depth-first traversal adding visible children for expanded directories."""
        try:
            children = list_directory_children(directory)
        except FilesystemError as exc:
            if depth == 0:
                raise TreeBuildError(root, exc) from exc
            logger.warning("skipping unreadable directory %s: %s", directory, exc)
            return

        for child in children:
            if is_archive_path(child.path, archive_dir):
                continue
            if child.is_dir:
                expanded = expansion.is_expanded(child.path)
                entries.append(DirectoryEntry(child.path, child.name, depth, expanded))
                if not expanded:
                    continue
                resolved = _safe_resolve(child.path)
                if resolved in ancestors:
                    logger.warning("not descending into directory cycle at %s", child.path)
                    continue
                walk(child.path, depth + 1, ancestors | {resolved})
            elif is_note_name(child.name):
                try:
                    content = read_note(child.path)
                except FilesystemError as exc:
                    logger.warning("cannot read note %s: %s", child.path, exc)
                    content = ""
                entries.append(NoteEntry(child.path, resolve_title(content, child.name), depth, content))

    walk(root, 0, frozenset({_safe_resolve(root)}))
    return entries
