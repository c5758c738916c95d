"""ANSI palette for the note browser chrome.

Markdown colors come from the Pygments style; this palette only covers the
header, sidebar, rename prompt, and status rows.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    header: str
    highlight: str
    tree_dir: str
    tree_note: str
    tree_branch: str
    divider: str
    status: str
    status_error: str
    prompt_border: str
    empty_hint: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header="\033[1;38;2;255;247;219;48;2;157;140;255m",
    highlight="\033[38;2;157;140;255m",
    tree_dir="\033[1;34m",
    tree_note="\033[38;5;252m",
    tree_branch="\033[2;38;5;245m",
    divider="\033[2m",
    status="\033[38;2;98;98;98m",
    status_error="\033[38;5;203m",
    prompt_border="\033[38;2;157;140;255m",
    empty_hint="\033[2;38;5;250m",
)
