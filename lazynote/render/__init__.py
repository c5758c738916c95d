"""Rendering for the sidebar/preview terminal view.

Frame composition is side-effect free; only ``write_frame`` writes output.
"""

from __future__ import annotations

from .ansi import (
    build_screen_lines,
    clip_ansi_line,
    display_width,
    fit_ansi_line,
    sanitize_label,
    sanitize_terminal_text,
    wrap_ansi_line,
)
from .frame import (
    content_rows,
    format_tree_row,
    help_text,
    preview_width,
    render_frame,
    sidebar_lines,
    status_text,
    write_frame,
)
from .theme import DEFAULT_THEME, UITheme

__all__ = [
    "DEFAULT_THEME",
    "UITheme",
    "build_screen_lines",
    "clip_ansi_line",
    "content_rows",
    "display_width",
    "fit_ansi_line",
    "format_tree_row",
    "help_text",
    "preview_width",
    "render_frame",
    "sanitize_label",
    "sanitize_terminal_text",
    "sidebar_lines",
    "status_text",
    "wrap_ansi_line",
    "write_frame",
]
