"""Display-title extraction for note entries."""

from __future__ import annotations

from .types import NOTE_EXTENSION

HEADING_MARKER = "# "


def extract_heading(content: str) -> str:
    """Return the text after the first ``# `` line, or ``""`` when absent."""
    for line in content.split("\n"):
        if line.startswith(HEADING_MARKER):
            return line[len(HEADING_MARKER):]
    return ""


def filename_stem(filename: str) -> str:
    """Strip the note extension from ``filename`` when present."""
    if filename.endswith(NOTE_EXTENSION):
        return filename[: -len(NOTE_EXTENSION)]
    return filename


def resolve_title(content: str, filename: str) -> str:
    """Return the first level-1 heading verbatim, else the filename stem.

    An empty heading (a bare ``# ``) also falls back to the filename.
    """
    heading = extract_heading(content)
    if heading:
        return heading
    return filename_stem(filename)
