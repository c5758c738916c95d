"""Tests for flattened note-tree construction.

Covers pre-order layout, expansion handling, archive exclusion, filtering of
non-note files, and how listing and read failures are surfaced.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazynote.errors import FilesystemError, TreeBuildError
from lazynote.note_tree import ExpansionSet, build_note_entries
from lazynote.note_tree import build as build_module


def _write(path: Path, text: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _layout(entries, root: Path) -> list[tuple[str, int, bool]]:
    return [(entry.path.relative_to(root).as_posix(), entry.depth, entry.is_dir) for entry in entries]


class BuildNoteEntriesTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.archive = self.root / "archive"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def assertWellFormed(self, entries) -> None:
        """Every expanded directory is followed by a contiguous deeper block."""
        for idx, entry in enumerate(entries):
            if idx == 0:
                self.assertEqual(entry.depth, 0)
            else:
                self.assertLessEqual(entry.depth, entries[idx - 1].depth + 1)
            if idx + 1 < len(entries) and entries[idx + 1].depth > entry.depth:
                self.assertTrue(entry.is_dir and entry.expanded)

    def test_collapsed_directories_hide_children(self) -> None:
        _write(self.root / "a.md", "# Alpha\n")
        _write(self.root / "projects" / "b.md", "body")

        entries = build_note_entries(self.root, ExpansionSet(), self.archive)

        self.assertEqual(_layout(entries, self.root), [("a.md", 0, False), ("projects", 0, True)])
        self.assertEqual(entries[0].title, "Alpha")
        self.assertEqual(entries[0].content, "# Alpha\n")
        self.assertEqual(entries[1].title, "projects")
        self.assertFalse(entries[1].expanded)

    def test_expanded_directories_list_children_in_preorder(self) -> None:
        _write(self.root / "projects" / "b.md", "body")
        _write(self.root / "projects" / "deep" / "c.md", "# C\n")
        _write(self.root / "z.md")
        expansion = ExpansionSet({self.root / "projects": True, self.root / "projects" / "deep": True})

        entries = build_note_entries(self.root, expansion, self.archive)

        self.assertEqual(
            _layout(entries, self.root),
            [
                ("projects", 0, True),
                ("projects/b.md", 1, False),
                ("projects/deep", 1, True),
                ("projects/deep/c.md", 2, False),
                ("z.md", 0, False),
            ],
        )
        self.assertWellFormed(entries)

    def test_expanded_child_of_collapsed_parent_stays_hidden(self) -> None:
        _write(self.root / "outer" / "inner" / "n.md")
        expansion = ExpansionSet({self.root / "outer" / "inner": True})

        entries = build_note_entries(self.root, expansion, self.archive)

        self.assertEqual(_layout(entries, self.root), [("outer", 0, True)])

    def test_children_are_sorted_by_name(self) -> None:
        for name in ("b.md", "A.md", "a.md", "c"):
            if name == "c":
                (self.root / name).mkdir()
            else:
                _write(self.root / name)

        entries = build_note_entries(self.root, ExpansionSet(), self.archive)

        self.assertEqual([entry.path.name for entry in entries], ["A.md", "a.md", "b.md", "c"])

    def test_build_is_deterministic(self) -> None:
        _write(self.root / "one.md", "# One")
        _write(self.root / "dir" / "two.md", "# Two")
        expansion = ExpansionSet({self.root / "dir": True})

        first = build_note_entries(self.root, expansion, self.archive)
        second = build_note_entries(self.root, expansion, self.archive)

        self.assertEqual(first, second)

    def test_archive_directory_is_never_listed(self) -> None:
        _write(self.root / "archive" / "old.md")
        _write(self.root / "projects" / "archive" / "older.md")
        _write(self.root / "projects" / "keep.md")
        expansion = ExpansionSet(
            {
                self.root / "archive": True,
                self.root / "projects": True,
                self.root / "projects" / "archive": True,
            }
        )

        entries = build_note_entries(self.root, expansion, self.archive)

        self.assertEqual(_layout(entries, self.root), [("projects", 0, True), ("projects/keep.md", 1, False)])

    def test_configured_archive_with_other_name_is_excluded(self) -> None:
        _write(self.root / "stash" / "old.md")
        _write(self.root / "live.md")

        entries = build_note_entries(self.root, ExpansionSet(), self.root / "stash")

        self.assertEqual(_layout(entries, self.root), [("live.md", 0, False)])

    def test_non_note_files_are_hidden(self) -> None:
        _write(self.root / "image.png")
        _write(self.root / "todo.txt")
        _write(self.root / "keep.md")

        entries = build_note_entries(self.root, ExpansionSet(), self.archive)

        self.assertEqual(_layout(entries, self.root), [("keep.md", 0, False)])

    def test_empty_root_yields_empty_snapshot(self) -> None:
        self.assertEqual(build_note_entries(self.root, ExpansionSet(), self.archive), [])

    def test_unreadable_note_is_listed_with_filename_title(self) -> None:
        _write(self.root / "broken.md", "# Hidden Title")
        _write(self.root / "fine.md", "# Fine")

        def read_note(path: Path) -> str:
            if path.name == "broken.md":
                raise FilesystemError("read", path, PermissionError(13, "Permission denied"))
            return path.read_text(encoding="utf-8")

        entries = build_note_entries(self.root, ExpansionSet(), self.archive, read_note=read_note)

        self.assertEqual([entry.title for entry in entries], ["broken", "Fine"])
        self.assertEqual(entries[0].content, "")

    def test_missing_root_raises_tree_build_error(self) -> None:
        missing = self.root / "missing"

        with self.assertRaises(TreeBuildError) as ctx:
            build_note_entries(missing, ExpansionSet(), self.archive)

        self.assertEqual(ctx.exception.root, missing)
        self.assertIn("cannot list notes directory", str(ctx.exception))

    def test_unlistable_nested_directory_is_skipped(self) -> None:
        _write(self.root / "locked" / "secret.md")
        _write(self.root / "open" / "visible.md")
        expansion = ExpansionSet({self.root / "locked": True, self.root / "open": True})
        real_list = build_module.list_directory_children

        def fake_list(directory: Path):
            if directory.name == "locked":
                raise FilesystemError("list", directory, PermissionError(13, "Permission denied"))
            return real_list(directory)

        with mock.patch.object(build_module, "list_directory_children", side_effect=fake_list):
            entries = build_note_entries(self.root, expansion, self.archive)

        self.assertEqual(
            _layout(entries, self.root),
            [("locked", 0, True), ("open", 0, True), ("open/visible.md", 1, False)],
        )

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks unavailable")
    def test_symlink_cycle_is_not_followed_forever(self) -> None:
        (self.root / "loop").mkdir()
        os.symlink(self.root / "loop", self.root / "loop" / "again")
        expansion = ExpansionSet({self.root / "loop": True, self.root / "loop" / "again": True})

        entries = build_note_entries(self.root, expansion, self.archive)

        self.assertEqual(_layout(entries, self.root), [("loop", 0, True), ("loop/again", 1, True)])


if __name__ == "__main__":
    unittest.main()
