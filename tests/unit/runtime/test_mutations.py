"""Tests for note/folder creation, renaming, and archiving.

Each operation touches a real temporary notes tree, then checks both the
filesystem and the rebuilt snapshot plus cursor.
"""

from __future__ import annotations

import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest import mock

from lazynote.errors import FilesystemError
from lazynote.note_tree import ExpansionSet
from lazynote.runtime import mutations
from lazynote.runtime.mutations import (
    archive_entry,
    create_folder,
    create_note,
    entry_name_problem,
    rename_entry,
    unique_folder_path,
)
from lazynote.runtime.selection import TreeSelection
from lazynote.runtime.state import AppState

FIXED = datetime(2024, 5, 6, 7, 8, 9)


def _clock() -> datetime:
    return FIXED


def _write(path: Path, text: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class _TreeTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.archive = self.root / "archive"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _selection(self, expanded: tuple[Path, ...] = ()) -> TreeSelection:
        state = AppState(
            root=self.root,
            archive_dir=self.archive,
            expansion=ExpansionSet({path: True for path in expanded}),
        )
        selection = TreeSelection(state)
        selection.rebuild()
        return selection


class CreateNoteTests(_TreeTestCase):
    def test_creates_templated_note_at_root_and_selects_it(self) -> None:
        selection = self._selection()

        path = create_note(selection, now=_clock)

        self.assertEqual(path, self.root / "note-2024-05-06-070809.md")
        self.assertEqual(path.read_text(encoding="utf-8"), "# New Note\n\nCreated: 2024-05-06 07:08:09\n")
        entry = selection.state.selected_entry()
        self.assertEqual(entry.path, path)
        self.assertEqual(entry.title, "New Note")

    def test_creates_inside_selected_directory_and_expands_it(self) -> None:
        (self.root / "projects").mkdir()
        selection = self._selection()

        path = create_note(selection, now=_clock)

        self.assertEqual(path.parent, self.root / "projects")
        state = selection.state
        self.assertTrue(state.expansion.is_expanded(self.root / "projects"))
        self.assertEqual(state.selected_path(), path)
        self.assertEqual(state.selected_entry().depth, 1)

    def test_existing_file_is_not_overwritten(self) -> None:
        existing = self.root / "note-2024-05-06-070809.md"
        _write(existing, "keep me")
        selection = self._selection()

        self.assertIsNone(create_note(selection, now=_clock))

        self.assertEqual(existing.read_text(encoding="utf-8"), "keep me")
        self.assertIn("create note failed", selection.state.status_message)


class CreateFolderTests(_TreeTestCase):
    def test_unique_folder_path_counts_from_one(self) -> None:
        self.assertEqual(unique_folder_path(self.root), self.root / "New Folder")
        (self.root / "New Folder").mkdir()
        self.assertEqual(unique_folder_path(self.root), self.root / "New Folder 1")
        (self.root / "New Folder 1").mkdir()
        self.assertEqual(unique_folder_path(self.root), self.root / "New Folder 2")

    def test_creates_folder_selects_it_and_starts_renaming(self) -> None:
        _write(self.root / "a.md")
        (self.root / "New Folder").mkdir()
        selection = self._selection()
        state = selection.state
        state.selected_idx = 1

        path = create_folder(selection)

        self.assertEqual(path, self.root / "New Folder 1")
        self.assertTrue(path.is_dir())
        self.assertEqual(state.selected_path(), path)
        self.assertTrue(state.renaming)
        self.assertEqual(state.rename_target, path)
        self.assertEqual(state.rename_text, "New Folder 1")


class RenameEntryTests(_TreeTestCase):
    def test_rename_directory_moves_expansion_and_selects_it(self) -> None:
        _write(self.root / "old" / "inner.md")
        selection = self._selection(expanded=(self.root / "old",))

        new_path = rename_entry(selection, self.root / "old", "Renamed")

        self.assertEqual(new_path, self.root / "Renamed")
        self.assertTrue((self.root / "Renamed" / "inner.md").exists())
        self.assertFalse((self.root / "old").exists())
        state = selection.state
        self.assertTrue(state.expansion.is_expanded(new_path))
        self.assertEqual(state.selected_path(), new_path)
        self.assertEqual([entry.path.name for entry in state.tree_entries], ["Renamed", "inner.md"])

    def test_rename_to_existing_name_fails_without_changes(self) -> None:
        (self.root / "a").mkdir()
        (self.root / "b").mkdir()
        selection = self._selection()

        self.assertIsNone(rename_entry(selection, self.root / "a", "b"))

        self.assertTrue((self.root / "a").is_dir())
        self.assertIn("rename failed", selection.state.status_message)

    def test_rename_to_same_name_is_noop(self) -> None:
        (self.root / "a").mkdir()
        selection = self._selection()

        self.assertEqual(rename_entry(selection, self.root / "a", "a"), self.root / "a")
        self.assertEqual(selection.state.status_message, "")

    def test_invalid_names_are_rejected(self) -> None:
        (self.root / "a").mkdir()
        selection = self._selection()

        for name in ("", "   ", ".", "..", "x/y", "nul\x00"):
            with self.subTest(name=name):
                self.assertIsNotNone(entry_name_problem(name))
                self.assertIsNone(rename_entry(selection, self.root / "a", name))
        self.assertTrue((self.root / "a").is_dir())


class ArchiveEntryTests(_TreeTestCase):
    def test_archive_moves_note_with_timestamp_prefix(self) -> None:
        _write(self.root / "a.md", "# A")
        _write(self.root / "b.md", "# B")
        selection = self._selection()

        archived = archive_entry(selection, now=_clock)

        self.assertEqual(archived, self.archive / "2024-05-06-070809-a.md")
        self.assertEqual(archived.read_text(encoding="utf-8"), "# A")
        self.assertFalse((self.root / "a.md").exists())
        state = selection.state
        self.assertEqual([entry.path.name for entry in state.tree_entries], ["b.md"])
        self.assertEqual(state.selected_idx, 0)

    def test_archiving_last_row_clamps_cursor(self) -> None:
        _write(self.root / "a.md")
        _write(self.root / "b.md")
        selection = self._selection()
        selection.state.selected_idx = 1

        archive_entry(selection, now=_clock)

        self.assertEqual(selection.state.selected_path(), self.root / "a.md")

    def test_archiving_only_entry_empties_selection(self) -> None:
        (self.root / "dir").mkdir()
        selection = self._selection()

        archived = archive_entry(selection, now=_clock)

        self.assertTrue(archived.is_dir())
        self.assertEqual(selection.state.tree_entries, [])
        self.assertIsNone(selection.state.selected_idx)

    def test_archive_without_selection_does_nothing(self) -> None:
        selection = self._selection()

        self.assertIsNone(archive_entry(selection, now=_clock))
        self.assertFalse(self.archive.exists())

    def test_archived_folder_expansion_does_not_carry_over(self) -> None:
        selection = self._selection()
        state = selection.state
        folder = create_folder(selection)
        state.end_renaming()
        (folder / "inner").mkdir()
        state.expansion.expand(folder / "inner")
        self.assertTrue(selection.expand_selected())

        archive_entry(selection, now=_clock)
        recreated = create_folder(selection)

        self.assertEqual(recreated, folder)
        self.assertFalse(state.selected_entry().expanded)
        self.assertNotIn(folder, state.expansion)
        self.assertNotIn(folder / "inner", state.expansion)

    def test_failed_move_leaves_tree_unchanged(self) -> None:
        _write(self.root / "a.md")
        selection = self._selection()
        before = list(selection.state.tree_entries)
        error = FilesystemError("rename", self.root / "a.md", PermissionError(13, "Permission denied"))

        with mock.patch.object(mutations, "rename_path", side_effect=error):
            self.assertIsNone(archive_entry(selection, now=_clock))

        self.assertEqual(selection.state.tree_entries, before)
        self.assertTrue((self.root / "a.md").exists())
        self.assertIn("archive failed", selection.state.status_message)


if __name__ == "__main__":
    unittest.main()
