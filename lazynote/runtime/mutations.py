"""Create, rename, and archive operations on the notes tree.

Each operation performs its filesystem calls, rebuilds the tree, and
re-anchors the cursor. A failed call stops the operation where it is; earlier
steps are not rolled back. Failures are logged and shown as a status message.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ..errors import FilesystemError
from ..note_tree import NOTE_EXTENSION
from ..note_tree.fs import make_directory, path_exists, rename_path, write_new_text
from .selection import TreeSelection
from .state import AppState

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

NEW_FOLDER_NAME = "New Folder"
NOTE_TEMPLATE = "# New Note\n\nCreated: {created}\n"
FILENAME_STAMP_FORMAT = "%Y-%m-%d-%H%M%S"
CREATED_STAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _report(state: AppState, action: str, exc: FilesystemError) -> None:
    logger.warning("%s failed: %s", action, exc)
    state.show_status(f"{action} failed: {exc}")


def _reveal_directory(state: AppState, directory: Path) -> None:
    """Expand ``directory`` so an item created inside it is listed."""
    if directory != state.root:
        state.expansion.expand(directory)


def note_filename(stamp: datetime) -> str:
    return f"note-{stamp.strftime(FILENAME_STAMP_FORMAT)}{NOTE_EXTENSION}"


def note_template(stamp: datetime) -> str:
    return NOTE_TEMPLATE.format(created=stamp.strftime(CREATED_STAMP_FORMAT))


def archive_name(stamp: datetime, original: Path) -> str:
    return f"{stamp.strftime(FILENAME_STAMP_FORMAT)}-{original.name}"


def unique_folder_path(directory: Path, base_name: str = NEW_FOLDER_NAME) -> Path:
    """Return ``base_name``, or the first free ``"<base_name> N"`` for N >= 1."""
    candidate = directory / base_name
    counter = 1
    while path_exists(candidate):
        candidate = directory / f"{base_name} {counter}"
        counter += 1
    return candidate


def entry_name_problem(name: str) -> str | None:
    """Return why ``name`` cannot be used as a file or folder name, if it can't."""
    if not name.strip():
        return "name cannot be empty"
    if name in {".", ".."}:
        return f"invalid name: {name}"
    separators = {os.sep} | ({os.altsep} if os.altsep else set())
    if any(sep in name for sep in separators) or "\x00" in name:
        return f"invalid name: {name}"
    return None


def create_note(selection: TreeSelection, now: Clock = datetime.now) -> Path | None:
    """Write a templated note into the current directory and select it."""
    state = selection.state
    directory = selection.current_directory()
    stamp = now()
    path = directory / note_filename(stamp)
    try:
        write_new_text(path, note_template(stamp))
    except FilesystemError as exc:
        _report(state, "create note", exc)
        return None
    logger.info("created note %s", path)
    _reveal_directory(state, directory)
    selection.rebuild(target=path)
    return path


def create_folder(selection: TreeSelection) -> Path | None:
    """Create a uniquely named folder, select it, and start renaming it."""
    state = selection.state
    directory = selection.current_directory()
    path = unique_folder_path(directory)
    try:
        make_directory(path)
    except FilesystemError as exc:
        _report(state, "create folder", exc)
        return None
    logger.info("created folder %s", path)
    _reveal_directory(state, directory)
    selection.rebuild(target=path)
    state.begin_renaming(path, path.name)
    return path


def rename_entry(selection: TreeSelection, target: Path, new_name: str) -> Path | None:
    """Rename ``target`` within its parent directory and select it."""
    state = selection.state
    problem = entry_name_problem(new_name)
    if problem is not None:
        state.show_status(problem)
        return None
    new_path = target.parent / new_name
    if new_path == target:
        return target
    try:
        rename_path(target, new_path)
    except FilesystemError as exc:
        _report(state, "rename", exc)
        return None
    logger.info("renamed %s to %s", target, new_path)
    state.expansion.move(target, new_path)
    selection.rebuild(target=new_path)
    return new_path


def archive_entry(selection: TreeSelection, now: Clock = datetime.now) -> Path | None:
    """Move the selected entry into the archive under a timestamped name."""
    state = selection.state
    entry = state.selected_entry()
    if entry is None:
        return None
    try:
        make_directory(state.archive_dir, parents=True, exist_ok=True)
    except FilesystemError as exc:
        _report(state, "archive", exc)
        return None
    archived = state.archive_dir / archive_name(now(), entry.path)
    try:
        rename_path(entry.path, archived)
    except FilesystemError as exc:
        _report(state, "archive", exc)
        return None
    state.expansion.discard(entry.path)
    logger.info("archived %s to %s", entry.path, archived)
    selection.rebuild(target=entry.path)
    return archived
