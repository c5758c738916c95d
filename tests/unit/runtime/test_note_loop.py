"""Tests for the main loop's resize, redraw, and quit handling."""

from __future__ import annotations

import os
import unittest
from contextlib import contextmanager
from pathlib import Path
from unittest import mock

from lazynote.note_tree import ExpansionSet, NoteEntry
from lazynote.runtime.loop import RuntimeLoopCallbacks, keep_tree_selection_visible, run_main_loop
from lazynote.runtime.state import AppState


def _make_state(count: int = 3) -> AppState:
    root = Path("/notes")
    state = AppState(root=root, archive_dir=root / "archive", expansion=ExpansionSet())
    state.tree_entries = [NoteEntry(root / f"n{idx}.md", f"n{idx}", 0) for idx in range(count)]
    state.selected_idx = 0
    return state


class _FakeTerminal:
    def __init__(self) -> None:
        self.raw_mode_entered = 0

    @contextmanager
    def raw_mode(self):
        self.raw_mode_entered += 1
        yield


class KeepSelectionVisibleTests(unittest.TestCase):
    def test_scrolls_down_to_cursor(self) -> None:
        state = _make_state(10)
        state.selected_idx = 7

        keep_tree_selection_visible(state, visible_rows=4)

        self.assertEqual(state.tree_start, 4)

    def test_scrolls_up_to_cursor(self) -> None:
        state = _make_state(10)
        state.tree_start = 5
        state.selected_idx = 2

        keep_tree_selection_visible(state, visible_rows=4)

        self.assertEqual(state.tree_start, 2)

    def test_empty_selection_resets_window(self) -> None:
        state = _make_state(0)
        state.selected_idx = None
        state.tree_start = 3

        keep_tree_selection_visible(state, visible_rows=4)

        self.assertEqual(state.tree_start, 0)


class RunMainLoopTests(unittest.TestCase):
    def test_resizes_redraws_and_quits(self) -> None:
        state = _make_state()
        terminal = _FakeTerminal()
        handled: list[str] = []
        resizes: list[tuple[int, int]] = []
        frames: list[list[str]] = []

        def handle_key(key: str) -> bool:
            handled.append(key)
            if key == "j":
                state.selected_idx = 1
                state.dirty = True
            return key == "q"

        callbacks = RuntimeLoopCallbacks(
            handle_key=handle_key,
            on_resize=lambda columns, lines: resizes.append((columns, lines)),
        )
        with (
            mock.patch("lazynote.runtime.loop.read_key", side_effect=["", "j", "q"]),
            mock.patch("lazynote.runtime.loop.write_frame", side_effect=frames.append),
            mock.patch(
                "lazynote.runtime.loop.shutil.get_terminal_size",
                return_value=os.terminal_size((60, 12)),
            ),
        ):
            run_main_loop(state, terminal, stdin_fd=0, callbacks=callbacks)

        self.assertEqual(terminal.raw_mode_entered, 1)
        self.assertEqual(resizes, [(60, 12)])
        self.assertEqual(handled, ["j", "q"])
        self.assertEqual(len(frames), 2)
        self.assertTrue(all(len(frame) == 12 for frame in frames))
        self.assertFalse(state.dirty)


if __name__ == "__main__":
    unittest.main()
