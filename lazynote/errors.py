"""Exception types shared by the note tree, mutations, and startup code.

In-session failures are caught at the operation boundary and turned into
status messages; only ``ConfigError`` and ``TreeBuildError`` at startup end
the process.
"""

from __future__ import annotations

from pathlib import Path


class LazyNoteError(Exception):
    """Base class for all lazynote errors."""


class ConfigError(LazyNoteError):
    """Configuration could not be loaded, created, or applied."""


class FilesystemError(LazyNoteError):
    """One filesystem call failed.

    ``operation`` names the call (``list``, ``read``, ``write``, ``mkdir``,
    ``rename``) and ``path`` the target it acted on.
    """

    def __init__(self, operation: str, path: Path, cause: OSError | None = None) -> None:
        self.operation = operation
        self.path = path
        self.cause = cause
        detail = f": {cause.strerror or cause}" if cause is not None else ""
        super().__init__(f"cannot {operation} {path}{detail}")


class NoteNotFoundError(FilesystemError):
    """Target path vanished between listing and acting on it."""


class TreeBuildError(LazyNoteError):
    """The notes root itself could not be listed."""

    def __init__(self, root: Path, cause: FilesystemError) -> None:
        self.root = root
        self.cause = cause
        super().__init__(f"cannot list notes directory {root}: {cause}")
