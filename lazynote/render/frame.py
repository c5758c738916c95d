"""Compose full terminal frames from runtime state.

``render_frame`` is a pure function from state and terminal size to a list of
display rows; ``write_frame`` is the only part that touches stdout.
"""

from __future__ import annotations

import os
import sys

from ..note_tree import TreeEntry
from ..runtime.state import AppState
from .ansi import fit_ansi_line, sanitize_label
from .theme import DEFAULT_THEME, UITheme

APP_TITLE = "note"
HEADER_ROWS = 1
FOOTER_ROWS = 2
DIVIDER = " │ "
EMPTY_TREE_HINT = "No notes found. Press 'n' to create one."
RENAME_PROMPT = "Enter folder name:"
RENAME_HELP = "Enter to confirm • Esc to cancel"
NORMAL_HELP = (
    "↑/k,↓/j: up/down • h/l: expand • enter: edit • n: new note • N: new folder • "
    "backspace: archive • tab: show sidebar • q: quit"
)


def content_rows(height: int) -> int:
    """Rows available between the header and the two footer rows."""
    return max(1, height - HEADER_ROWS - FOOTER_ROWS)


def preview_width(width: int, sidebar_visible: bool, sidebar_width: int) -> int:
    if not sidebar_visible:
        return max(1, width)
    return max(1, width - sidebar_width - len(DIVIDER))


def _tree_icon(entries: list[TreeEntry], idx: int) -> str:
    entry = entries[idx]
    if entry.is_dir:
        return "▼ " if entry.expanded else "▶ "
    has_following_sibling = idx + 1 < len(entries) and entries[idx + 1].depth >= entry.depth
    return "├─ " if has_following_sibling else "└─ "


def format_tree_row(
    entries: list[TreeEntry],
    idx: int,
    selected: bool = False,
    theme: UITheme = DEFAULT_THEME,
) -> str:
    """Render one sidebar row with indentation and a fold or branch icon."""
    entry = entries[idx]
    indent = "  " * entry.depth
    icon = _tree_icon(entries, idx)
    title = sanitize_label(entry.title)
    if selected:
        return f"{theme.highlight}{indent}{icon}{title}{theme.reset}"
    if entry.is_dir:
        return f"{indent}{theme.tree_dir}{icon}{title}{theme.reset}"
    return f"{indent}{theme.tree_branch}{icon}{theme.reset}{theme.tree_note}{title}{theme.reset}"


def sidebar_lines(state: AppState, rows: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    entries = state.tree_entries
    out: list[str] = []
    for idx in range(state.tree_start, min(len(entries), state.tree_start + rows)):
        out.append(format_tree_row(entries, idx, idx == state.selected_idx, theme))
    while len(out) < rows:
        out.append("")
    return out


def preview_view_lines(state: AppState, rows: int) -> list[str]:
    visible = state.preview_lines[state.preview_start : state.preview_start + rows]
    return visible + [""] * (rows - len(visible))


def status_text(state: AppState) -> str:
    """Status row: selected title and visible entry count, or a pending message."""
    if state.status_message:
        return sanitize_label(state.status_message)
    text = f"{len(state.tree_entries)} notes"
    entry = state.selected_entry()
    if entry is not None:
        text = f"{sanitize_label(entry.title)} • {text}"
    return text


def help_text(state: AppState) -> str:
    return RENAME_HELP if state.renaming else NORMAL_HELP


def _rename_prompt_lines(state: AppState, width: int, rows: int, theme: UITheme) -> list[str]:
    inner = max(1, min(width - 4, 56))
    border = theme.prompt_border
    reset = theme.reset
    field = f"> {sanitize_label(state.rename_text)}█"
    body = [
        f"{border}╭{'─' * (inner + 2)}╮{reset}",
        f"{border}│{reset} {fit_ansi_line(RENAME_PROMPT, inner)} {border}│{reset}",
        f"{border}│{reset} {fit_ansi_line('', inner)} {border}│{reset}",
        f"{border}│{reset} {fit_ansi_line(field, inner)} {border}│{reset}",
        f"{border}╰{'─' * (inner + 2)}╯{reset}",
    ]
    lines = [""] + body
    return (lines + [""] * rows)[:rows]


def render_frame(state: AppState, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Return exactly ``height`` rows, each filling ``width`` columns."""
    width = max(1, width)
    rows = content_rows(height)
    header = f"{theme.header} {APP_TITLE} {theme.reset}"
    frame: list[str] = [fit_ansi_line(header, width)]

    if state.renaming:
        body = _rename_prompt_lines(state, width, rows, theme)
        frame.extend(fit_ansi_line(line, width) for line in body)
    elif not state.tree_entries:
        hint = f"{theme.empty_hint}{EMPTY_TREE_HINT}{theme.reset}"
        frame.extend(fit_ansi_line(hint if row == 1 else "", width) for row in range(rows))
    elif state.sidebar_visible:
        side_width = min(state.sidebar_width, max(1, width - len(DIVIDER) - 1))
        right_width = max(1, width - side_width - len(DIVIDER))
        left = sidebar_lines(state, rows, theme)
        right = preview_view_lines(state, rows)
        divider = f"{theme.divider}{DIVIDER}{theme.reset}"
        for left_line, right_line in zip(left, right):
            frame.append(
                fit_ansi_line(left_line, side_width) + divider + fit_ansi_line(right_line, right_width)
            )
    else:
        frame.extend(fit_ansi_line(line, width) for line in preview_view_lines(state, rows))

    status_color = theme.status_error if state.status_message else theme.status
    frame.append(fit_ansi_line(f"{status_color}{status_text(state)}{theme.reset}", width))
    frame.append(fit_ansi_line(f"{theme.status}{help_text(state)}{theme.reset}", width))
    return frame[:height] if height > 0 else []


def write_frame(lines: list[str]) -> None:
    """Paint a frame from the top-left corner of the alternate screen."""
    out = ["\033[H"]
    for idx, line in enumerate(lines):
        out.append(line)
        out.append("\033[K")
        if idx + 1 < len(lines):
            out.append("\r\n")
    data = "".join(out).encode("utf-8", errors="replace")
    fd = sys.stdout.fileno()
    while data:
        written = os.write(fd, data)
        data = data[written:]
