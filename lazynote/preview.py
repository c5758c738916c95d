"""Markdown preview rendering and refresh for the selected entry.

Notes are highlighted with Pygments' markdown lexer; any rendering failure
falls back to the raw text. Terminal control bytes are neutralized first so a
note can never move the cursor or ring the bell.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import MarkdownLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .errors import FilesystemError
from .note_tree import TreeEntry, is_archive_path, is_note_name
from .note_tree.fs import list_directory_children, read_text
from .render.ansi import build_screen_lines, sanitize_label, sanitize_terminal_text
from .runtime.state import AppState

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_LEXER = MarkdownLexer()


def _formatter_for_style(style: str) -> Terminal256Formatter:
    """Return cached formatter, substituting the default for unknown styles."""
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    try:
        get_style_by_name(style)
        resolved = style
    except ClassNotFound:
        logger.warning("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        resolved = DEFAULT_STYLE
    formatter = Terminal256Formatter(style=resolved)
    _FORMATTERS[style] = formatter
    return formatter


def render_markdown(source: str, style: str = DEFAULT_STYLE) -> str:
    """Return ANSI-highlighted markdown, or the sanitized raw text on failure."""
    safe_source = sanitize_terminal_text(source)
    try:
        return highlight(safe_source, _LEXER, _formatter_for_style(style))
    except Exception as exc:
        logger.warning("markdown rendering failed, showing raw text: %s", exc)
        return safe_source


def render_directory(entry: TreeEntry, archive_dir: Path) -> str:
    """Plain summary of a folder's visible children."""
    lines = [f"\033[1m{sanitize_label(entry.title)}/\033[0m", ""]
    try:
        children = list_directory_children(entry.path)
    except FilesystemError as exc:
        logger.warning("cannot list %s for preview: %s", entry.path, exc)
        return "\n".join(lines + ["(unreadable)"])
    folders = [c.name for c in children if c.is_dir and not is_archive_path(c.path, archive_dir)]
    notes = [c.name for c in children if not c.is_dir and is_note_name(c.name)]
    if not folders and not notes:
        lines.append("(empty folder)")
    lines.extend(f"▶ {sanitize_label(name)}" for name in folders)
    lines.extend(f"  {sanitize_label(name)}" for name in notes)
    return "\n".join(lines)


def preview_text_for_entry(entry: TreeEntry, archive_dir: Path, style: str = DEFAULT_STYLE) -> str:
    """Render preview text for a note or directory entry.

    Notes are re-read so edits made outside the tree show up; when the read
    fails the content cached at build time is used.
    """
    if entry.is_dir:
        return render_directory(entry, archive_dir)
    try:
        content = read_text(entry.path)
    except FilesystemError as exc:
        logger.warning("cannot read %s for preview: %s", entry.path, exc)
        content = entry.content
    return render_markdown(content, style)


def refresh_preview(state: AppState, style: str = DEFAULT_STYLE, force: bool = False) -> None:
    """Re-render the preview when the selection changed or ``force`` is set.

    Scroll position resets to the top whenever the previewed path changes.
    """
    entry = state.selected_entry()
    path = entry.path if entry is not None else None
    if not force and path == state.preview_path:
        return
    if path != state.preview_path:
        state.preview_start = 0
    state.preview_path = path
    state.rendered = preview_text_for_entry(entry, state.archive_dir, style) if entry is not None else ""
    rebuild_preview_lines(state)


def rebuild_preview_lines(state: AppState) -> None:
    """Re-wrap rendered preview text to the current preview width."""
    state.preview_lines = build_screen_lines(state.rendered, state.preview_width)
    max_start = max(0, len(state.preview_lines) - state.preview_rows)
    state.preview_start = max(0, min(state.preview_start, max_start))
    state.dirty = True
