from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from copyforllm.entries import LocalFileEntry
from copyforllm.progress import BuildCancelled, CancellableProgress
from copyforllm.tree import ancestor_paths, render_tree
from helpers import BrokenDirEntry, RootWithBrokenDir, entries, make_tree

FILES = {
    "D/x/y.txt": "y",
    "D/z/w.txt": "w",
    "D/q.txt": "q",
    "E/e.txt": "e",
    "top.txt": "t",
}


class AncestorPathTests(unittest.TestCase):
    def test_collects_every_prefix(self) -> None:
        self.assertEqual(ancestor_paths(["a/b/c.txt", "d.txt"]), {"a", "a/b"})
        self.assertEqual(ancestor_paths([]), set())


class TreeRendererTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = make_tree(Path(self._tmp.name) / "proj", FILES)
        self.root_entry = LocalFileEntry(self.root)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def render(self, *rels: str) -> str:
        return render_tree(entries(self.root, *rels), self.root_entry)

    def test_single_deep_file_shows_only_its_ancestors(self) -> None:
        self.assertEqual(
            self.render("D/x/y.txt"),
            ".\n"
            "└── D/\n"
            "    └── x/\n"
            "        └── y.txt\n",
        )

    def test_selected_directory_shows_all_descendants(self) -> None:
        self.assertEqual(
            self.render("D"),
            ".\n"
            "└── D/\n"
            "    ├── x/\n"
            "    │   └── y.txt\n"
            "    ├── z/\n"
            "    │   └── w.txt\n"
            "    └── q.txt\n",
        )

    def test_directories_sort_before_files_and_last_visible_sibling_closes(self) -> None:
        self.assertEqual(
            self.render("top.txt", "E/e.txt", "D/q.txt"),
            ".\n"
            "├── D/\n"
            "│   └── q.txt\n"
            "├── E/\n"
            "│   └── e.txt\n"
            "└── top.txt\n",
        )

    def test_selecting_the_root_shows_everything(self) -> None:
        rendered = render_tree([self.root_entry], self.root_entry)
        for name in ("D/", "x/", "y.txt", "z/", "w.txt", "q.txt", "E/", "e.txt", "top.txt"):
            self.assertIn(name, rendered)

    def test_entries_outside_the_root_are_dropped(self) -> None:
        outside = LocalFileEntry(Path(self._tmp.name) / "elsewhere.txt")
        self.assertEqual(render_tree([outside], self.root_entry), ".\n")

    def test_unlistable_selected_directory_renders_without_children(self) -> None:
        root = RootWithBrokenDir(self.root, "D")
        selection = [BrokenDirEntry(self.root / "D"), LocalFileEntry(self.root / "top.txt")]
        self.assertEqual(
            render_tree(selection, root),
            ".\n"
            "├── D/\n"
            "└── top.txt\n",
        )

    def test_unlistable_root_renders_only_the_dot(self) -> None:
        self.assertEqual(render_tree(entries(self.root, "top.txt"), BrokenDirEntry(self.root)), ".\n")

    def test_cancellation_is_checked_before_listing(self) -> None:
        progress = CancellableProgress()
        progress.cancel()
        with self.assertRaises(BuildCancelled):
            render_tree(entries(self.root, "D"), self.root_entry, progress)


if __name__ == "__main__":
    unittest.main()
