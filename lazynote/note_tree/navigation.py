"""Tree-entry index helpers shared by selection and key handling."""

from __future__ import annotations

from pathlib import Path

from .types import TreeEntry


def parent_directory_index(entries: list[TreeEntry], from_idx: int) -> int | None:
    """Return nearest ancestor directory index above ``from_idx``."""
    if not (0 <= from_idx < len(entries)):
        return None
    current_depth = entries[from_idx].depth
    idx = from_idx - 1
    while idx >= 0:
        candidate = entries[idx]
        if candidate.is_dir and candidate.depth < current_depth:
            return idx
        idx -= 1
    return None


def index_of_path(entries: list[TreeEntry], path: Path) -> int | None:
    for idx, entry in enumerate(entries):
        if entry.path == path:
            return idx
    return None


def clamp_index(previous: int | None, count: int) -> int | None:
    """Clamp a cursor into ``[0, count)``, or ``None`` for an empty snapshot."""
    if count <= 0:
        return None
    if previous is None:
        return 0
    return max(0, min(previous, count - 1))
