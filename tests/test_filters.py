from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from copyforllm.entries import LocalFileEntry
from copyforllm.filters import (
    ExtraExtensionRule,
    FileFilter,
    FilterConfiguration,
    FilterMode,
    filter_files,
)
from copyforllm.ignore import IgnoreRuleSet
from helpers import entries, make_tree

FILES = {
    "src/Main.kt": "fun main() {}",
    "src/Util.cs": "class Util {}",
    "docs/guide.md": "# Guide",
    "logs/app.log": "started",
    "notes.txt": "todo",
}


class FilterPolicyTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = make_tree(Path(self._tmp.name) / "proj", FILES)
        self.files = entries(self.root, *sorted(FILES))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def names(self, config: FilterConfiguration):
        return [e.name for e in filter_files(self.files, config)]

    def test_default_exclude_mode_with_no_patterns_keeps_everything(self) -> None:
        self.assertEqual(self.names(FilterConfiguration()), [e.name for e in self.files])

    def test_exclude_mode_drops_matching_names(self) -> None:
        config = FilterConfiguration(exclude_patterns=("*.log", "md"))
        self.assertEqual(self.names(config), ["notes.txt", "Main.kt", "Util.cs"])

    def test_include_mode_keeps_only_allowlisted_names(self) -> None:
        config = FilterConfiguration(mode=FilterMode.INCLUDE, include_patterns=("kt", ".cs"))
        self.assertEqual(sorted(self.names(config)), ["Main.kt", "Util.cs"])

    def test_include_mode_also_applies_exclude_list(self) -> None:
        config = FilterConfiguration(
            mode=FilterMode.INCLUDE,
            include_patterns=("kt", "cs"),
            exclude_patterns=("Util.*",),
        )
        self.assertEqual(self.names(config), ["Main.kt"])

    def test_empty_include_list_means_include_all_then_exclude(self) -> None:
        config = FilterConfiguration(mode=FilterMode.INCLUDE, exclude_patterns=("*.log",))
        kept = self.names(config)
        self.assertNotIn("app.log", kept)
        self.assertEqual(len(kept), len(FILES) - 1)

    def test_extra_extension_overrides_include_match(self) -> None:
        config = FilterConfiguration(
            mode=FilterMode.INCLUDE,
            include_patterns=("*.log", "txt"),
            extra_excluded_extensions=frozenset({"log"}),
        )
        self.assertEqual(self.names(config), ["notes.txt"])

    def test_ignore_rules_override_primary_pass(self) -> None:
        config = FilterConfiguration(ignore_rules=IgnoreRuleSet.load("docs/\n"))
        self.assertNotIn("guide.md", self.names(config))

    def test_extra_layers_never_rescue(self) -> None:
        config = FilterConfiguration(
            mode=FilterMode.INCLUDE,
            include_patterns=("kt",),
            extra_excluded_extensions=frozenset({"cs"}),
            ignore_rules=IgnoreRuleSet.load("nothing-matches-this\n"),
        )
        self.assertEqual(self.names(config), ["Main.kt"])

    def test_order_is_preserved(self) -> None:
        reversed_files = list(reversed(self.files))
        kept = filter_files(reversed_files, FilterConfiguration(exclude_patterns=("log",)))
        self.assertEqual(kept, [e for e in reversed_files if e.name != "app.log"])

    def test_directories_and_missing_files_are_dropped(self) -> None:
        mixed = [LocalFileEntry(self.root / "src"), LocalFileEntry(self.root / "gone.txt")] + self.files
        self.assertEqual(filter_files(mixed, FilterConfiguration()), self.files)

    def test_reasons_are_reported(self) -> None:
        file_filter = FileFilter(FilterConfiguration(extra_excluded_extensions=frozenset({"log"})))
        ok, reason = file_filter.should_include(LocalFileEntry(self.root / "logs" / "app.log"))
        self.assertFalse(ok)
        self.assertIn(".log", reason)


class ExtraExtensionRuleTests(unittest.TestCase):
    def test_suffix_match_is_case_insensitive(self) -> None:
        rule = ExtraExtensionRule({"log", "tar.gz"})
        self.assertFalse(rule.check(LocalFileEntry("/p/APP.LOG"))[0])
        self.assertFalse(rule.check(LocalFileEntry("/p/backup.tar.gz"))[0])
        self.assertTrue(rule.check(LocalFileEntry("/p/catalog"))[0])
        self.assertTrue(rule.check(LocalFileEntry("/p/log.txt"))[0])


if __name__ == "__main__":
    unittest.main()
