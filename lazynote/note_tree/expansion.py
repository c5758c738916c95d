"""Per-directory expanded/collapsed flags kept across tree rebuilds."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path


class ExpansionSet:
    """Mapping of directory path to expanded flag.

    Paths that were never set read as collapsed.
    """

    def __init__(self, initial: Mapping[Path, bool] | None = None) -> None:
        self._flags: dict[Path, bool] = dict(initial or {})

    def is_expanded(self, path: Path) -> bool:
        return self._flags.get(path, False)

    def set(self, path: Path, expanded: bool) -> None:
        self._flags[path] = bool(expanded)

    def expand(self, path: Path) -> None:
        self.set(path, True)

    def collapse(self, path: Path) -> None:
        self.set(path, False)

    def move(self, old: Path, new: Path) -> None:
        """Re-key ``old`` and every path below it onto the ``new`` prefix."""
        moved: dict[Path, bool] = {}
        for path in list(self._flags):
            if path == old:
                moved[new] = self._flags.pop(path)
                continue
            try:
                relative = path.relative_to(old)
            except ValueError:
                continue
            moved[new / relative] = self._flags.pop(path)
        self._flags.update(moved)

    def discard(self, path: Path) -> None:
        """Forget ``path`` and every path below it."""
        for candidate in list(self._flags):
            if candidate.is_relative_to(path):
                del self._flags[candidate]

    def __contains__(self, path: object) -> bool:
        return path in self._flags

    def __iter__(self) -> Iterator[Path]:
        return iter(self._flags)

    def __len__(self) -> int:
        return len(self._flags)

    def __repr__(self) -> str:
        return f"ExpansionSet({self._flags!r})"
