"""Editor launch helper for opening a note outside the TUI.

Runs the configured editor while temporarily leaving raw/alternate-screen
mode. Returns an error message string instead of raising for UI-friendly
handling; the editor's exit status is ignored.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


def launch_editor(
    target: Path,
    command: Sequence[str],
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> str | None:
    """Block until ``command target`` exits, restoring TUI mode either way."""
    if not command:
        return "Cannot edit: no editor configured."

    disable_tui_mode()
    try:
        completed = subprocess.run([*command, str(target)], check=False)
    except OSError as exc:
        logger.warning("failed to launch editor %s: %s", command[0], exc)
        return f"Failed to launch editor: {exc}"
    finally:
        enable_tui_mode()
    if completed.returncode != 0:
        logger.info("editor %s exited with status %d", command[0], completed.returncode)
    return None
