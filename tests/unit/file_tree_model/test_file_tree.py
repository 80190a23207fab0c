"""Tests for the incremental file tree: rescans, expansion and selection."""

from __future__ import annotations

import shutil
import tempfile
import unittest
from pathlib import Path

from sidetree.file_tree_model import FileTree
from sidetree.runtime.config import Config


def _paths(tree: FileTree) -> list[str]:
    return [line.path.relative_to(tree.root_path).as_posix() for line in tree.lines]


class FileTreeTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "a" / "nested").mkdir(parents=True)
        (self.root / "a" / "nested" / "deep.txt").write_text("deep\n", encoding="utf-8")
        (self.root / "a" / "file1").write_text("1\n", encoding="utf-8")
        (self.root / "b").mkdir()
        (self.root / "z.txt").write_text("z\n", encoding="utf-8")
        (self.root / ".hidden").write_text("h\n", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def make_tree(self, *expanded: str) -> FileTree:
        tree = FileTree(self.root, [self.root / path for path in expanded])
        tree.update()
        return tree


class FileTreeLayoutTests(FileTreeTestCase):
    def test_root_children_directories_first(self) -> None:
        tree = self.make_tree()

        self.assertEqual(_paths(tree), ["a", "b", "z.txt"])
        self.assertEqual([line.depth for line in tree.lines], [0, 0, 0])
        self.assertEqual(tree.lines[0].label, "▸ a")
        self.assertEqual(tree.lines[2].label, "  z.txt")
        self.assertIn(self.root, tree.expanded_paths)

    def test_expanded_directory_lists_children_one_level_deeper(self) -> None:
        tree = self.make_tree("a")

        self.assertEqual(_paths(tree), ["a", "a/nested", "a/file1", "b", "z.txt"])
        self.assertEqual([line.depth for line in tree.lines], [0, 1, 1, 0, 0])
        self.assertEqual(tree.lines[0].label, "▾ a")

    def test_show_hidden_option(self) -> None:
        tree = self.make_tree()
        tree.update(Config(show_hidden=True))

        self.assertEqual(_paths(tree), ["a", "b", ".hidden", "z.txt"])

    def test_collapsed_directories_are_not_read(self) -> None:
        tree = self.make_tree()

        self.assertIsNone(tree.find(self.root / "a" / "nested"))
        self.assertEqual(len(tree), 5)

    def test_update_is_idempotent(self) -> None:
        tree = self.make_tree("a", "a/nested")
        tree.select_nth(3)
        before = list(tree.lines)

        tree.update()
        tree.update()

        self.assertEqual(tree.lines, before)
        self.assertEqual(tree.selected_idx, 3)


class FileTreeExpansionTests(FileTreeTestCase):
    def test_expand_and_collapse_only_touch_the_set(self) -> None:
        tree = self.make_tree()
        before = list(tree.lines)

        tree.expand(self.root / "a")
        self.assertEqual(tree.lines, before)
        tree.update()
        self.assertEqual(len(tree.lines), 5)

        tree.toggle_expanded(self.root / "a")
        tree.update()
        self.assertEqual(tree.lines, before)

    def test_collapse_keeps_nested_expansion_for_later(self) -> None:
        tree = self.make_tree("a", "a/nested")
        tree.collapse(self.root / "a")
        tree.update()
        self.assertEqual(_paths(tree), ["a", "b", "z.txt"])

        tree.expand(self.root / "a")
        tree.update()
        self.assertEqual(_paths(tree), ["a", "a/nested", "a/nested/deep.txt", "a/file1", "b", "z.txt"])

    def test_rescan_reuses_entries_and_keeps_nested_expansion(self) -> None:
        tree = self.make_tree("a", "a/nested")
        nested_id = tree.find(self.root / "a" / "nested").id
        deep_id = tree.find(self.root / "a" / "nested" / "deep.txt").id

        (self.root / "y.txt").write_text("y\n", encoding="utf-8")
        tree.update()

        self.assertEqual(tree.find(self.root / "a" / "nested").id, nested_id)
        self.assertEqual(tree.find(self.root / "a" / "nested" / "deep.txt").id, deep_id)
        self.assertTrue(tree.find(self.root / "a" / "nested").is_expanded())
        self.assertIn("y.txt", _paths(tree))
        self.assertIn("a/nested/deep.txt", _paths(tree))

    def test_vanished_paths_leave_the_arena(self) -> None:
        tree = self.make_tree("a", "a/nested")
        tree.select_path(self.root / "a" / "nested" / "deep.txt")

        shutil.rmtree(self.root / "a")
        tree.update()

        self.assertEqual(_paths(tree), ["b", "z.txt"])
        self.assertIsNone(tree.find(self.root / "a"))
        self.assertIsNone(tree.find(self.root / "a" / "nested" / "deep.txt"))
        self.assertEqual(tree.selected_idx, 1)

    def test_type_change_replaces_entry(self) -> None:
        tree = self.make_tree()
        old_id = tree.find(self.root / "z.txt").id

        (self.root / "z.txt").unlink()
        (self.root / "z.txt").mkdir()
        tree.update()

        entry = tree.find(self.root / "z.txt")
        self.assertTrue(entry.is_dir)
        self.assertNotEqual(entry.id, old_id)

    def test_expand_to_path_opens_ancestors_inside_root(self) -> None:
        tree = self.make_tree()
        deep = self.root / "a" / "nested" / "deep.txt"

        tree.expand_to_path(deep)
        tree.update()

        self.assertTrue(tree.select_path(deep))
        self.assertEqual(tree.selected_line().depth, 2)
        self.assertNotIn(self.root.parent, tree.expanded_paths)

    def test_change_root_keeps_expansion_set(self) -> None:
        tree = self.make_tree("a/nested")

        tree.change_root(None, self.root / "a")

        self.assertEqual(tree.root_path, self.root / "a")
        self.assertEqual(_paths(tree), ["nested", "nested/deep.txt", "file1"])
        self.assertEqual(tree.selected_idx, 0)


class FileTreeSelectionTests(FileTreeTestCase):
    def test_selection_follows_path_across_expansion(self) -> None:
        tree = self.make_tree()
        self.assertTrue(tree.select_path(self.root / "z.txt"))
        self.assertEqual(tree.selected_idx, 2)

        tree.expand(self.root / "a")
        tree.update()

        self.assertEqual(tree.selected_line().path, self.root / "z.txt")
        self.assertEqual(tree.selected_idx, 4)

    def test_select_path_miss_leaves_selection(self) -> None:
        tree = self.make_tree()
        tree.select_nth(1)

        self.assertFalse(tree.select_path(self.root / "a" / "file1"))
        self.assertFalse(tree.select_path(self.root / ".hidden"))
        self.assertEqual(tree.selected_idx, 1)

    def test_select_next_and_prev_clamp(self) -> None:
        tree = self.make_tree()
        tree.select_prev()
        self.assertEqual(tree.selected_idx, 0)
        for _ in range(10):
            tree.select_next()
        self.assertEqual(tree.selected_idx, 2)
        self.assertFalse(tree.select_nth(3))
        self.assertEqual(tree.selected_idx, 2)

    def test_select_up_goes_to_parent_line(self) -> None:
        tree = self.make_tree("a", "a/nested", "b")
        (self.root / "b" / "sibling").mkdir()
        tree.update()
        tree.select_path(self.root / "a" / "nested" / "deep.txt")

        tree.select_up()
        self.assertEqual(tree.selected_line().path, self.root / "a" / "nested")
        tree.select_up()
        self.assertEqual(tree.selected_line().path, self.root / "a")
        tree.select_up()
        self.assertEqual(tree.selected_idx, 0)

    def test_entry_and_current_dir(self) -> None:
        tree = self.make_tree("a")
        tree.select_path(self.root / "a" / "file1")
        self.assertEqual(tree.entry().path, self.root / "a" / "file1")
        self.assertEqual(tree.current_dir(), self.root / "a")

        tree.select_path(self.root / "b")
        self.assertEqual(tree.current_dir(), self.root / "b")

    def test_empty_root_selects_root_entry(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            empty = Path(tmp).resolve()
            tree = FileTree(empty)
            tree.update()

            self.assertEqual(tree.lines, [])
            self.assertIsNone(tree.selected_line())
            self.assertEqual(tree.entry().path, empty)
            self.assertEqual(tree.current_dir(), empty)

    def test_root_cannot_be_collapsed(self) -> None:
        tree = self.make_tree()

        tree.toggle_expanded(self.root)
        tree.collapse(self.root)
        tree.update()

        self.assertIn(self.root, tree.expanded_paths)
        self.assertEqual(tree.root.expanded, self.root in tree.expanded_paths)
        self.assertEqual(_paths(tree), ["a", "b", "z.txt"])


if __name__ == "__main__":
    unittest.main()
