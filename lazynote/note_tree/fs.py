"""Filesystem accessor used by the tree builder and mutation operations.

Every call either succeeds or raises ``FilesystemError``; a target that
vanished raises the ``NoteNotFoundError`` subclass.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..errors import FilesystemError, NoteNotFoundError


@dataclass(frozen=True)
class DirectoryChild:
    """One directory-child record as seen by a single listing."""

    name: str
    path: Path
    is_dir: bool


def _wrap(operation: str, path: Path, exc: OSError) -> FilesystemError:
    if isinstance(exc, FileNotFoundError):
        return NoteNotFoundError(operation, path, exc)
    return FilesystemError(operation, path, exc)


def list_directory_children(directory: Path) -> list[DirectoryChild]:
    """List immediate children of ``directory`` sorted by name.

    Symlinks to directories count as directories. A child whose type cannot
    be determined is reported as a plain file.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                children.append(DirectoryChild(name=child.name, path=directory / child.name, is_dir=is_dir))
    except OSError as exc:
        raise _wrap("list", directory, exc) from exc

    children.sort(key=lambda item: item.name)
    return children


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    try:
        for encoding in ("utf-8", "utf-8-sig", "latin-1"):
            try:
                return path.read_text(encoding=encoding)
            except UnicodeDecodeError:
                continue
        return path.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        raise _wrap("read", path, exc) from exc


def write_new_text(path: Path, text: str) -> None:
    """Create ``path`` with ``text``; fails when the file already exists."""
    try:
        with path.open("x", encoding="utf-8") as handle:
            handle.write(text)
    except OSError as exc:
        raise _wrap("write", path, exc) from exc


def make_directory(path: Path, *, parents: bool = False, exist_ok: bool = False) -> None:
    try:
        path.mkdir(parents=parents, exist_ok=exist_ok)
    except OSError as exc:
        raise _wrap("mkdir", path, exc) from exc


def rename_path(source: Path, target: Path) -> None:
    """Move ``source`` to ``target``; never replaces an existing target."""
    if path_exists(target):
        raise FilesystemError("rename", source, FileExistsError(17, "target already exists", str(target)))
    try:
        os.rename(source, target)
    except OSError as exc:
        raise _wrap("rename", source, exc) from exc


def path_exists(path: Path) -> bool:
    """Return whether anything (including a dangling symlink) sits at ``path``."""
    return os.path.lexists(path)
