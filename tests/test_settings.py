from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from copyforllm import settings
from copyforllm.entries import LocalFileEntry
from copyforllm.filters import FilterMode
from copyforllm.ignore import IgnoreDialect
from helpers import make_tree


class ParseExtensionsTests(unittest.TestCase):
    def test_legacy_comma_string(self) -> None:
        self.assertEqual(settings.parse_extensions("java, .log , TXT"), ["java", "log", "txt"])
        self.assertEqual(settings.parse_extensions(" , ,"), [])
        self.assertEqual(settings.parse_extensions(""), [])


class SettingsPersistenceTests(unittest.TestCase):
    def test_round_trip_through_config_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "copy-for-llm.json"
            with mock.patch("copyforllm.settings.CONFIG_PATH", config_path):
                stored = settings.Settings(
                    mode=FilterMode.INCLUDE,
                    include_patterns=["cs", ".kt"],
                    exclude_patterns=["*.md"],
                    excluded_extensions="log, tmp",
                    ignore_dialect=IgnoreDialect.GITIGNORE,
                )
                self.assertTrue(settings.save_settings(stored))
                self.assertEqual(settings.load_settings(), stored)

    def test_missing_or_malformed_file_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "settings.json"
            self.assertEqual(settings.load_settings(path), settings.Settings())
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(settings.load_settings(path), settings.Settings())
            path.write_text("[1, 2]", encoding="utf-8")
            self.assertEqual(settings.load_settings(path), settings.Settings())

    def test_unknown_values_fall_back_per_key(self) -> None:
        loaded = settings.Settings.from_dict({
            "mode": "sideways",
            "include_patterns": ["  py ", "", 3],
            "exclude_patterns": "not-a-list",
        })
        self.assertEqual(loaded.mode, FilterMode.EXCLUDE)
        self.assertEqual(loaded.include_patterns, ["py", "3"])
        self.assertEqual(loaded.exclude_patterns, [])
        self.assertEqual(loaded.ignore_dialect, IgnoreDialect.PATTERNS)


class SnapshotTests(unittest.TestCase):
    def test_snapshot_is_normalized_and_includes_ignore_rules(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = make_tree(Path(tmp) / "proj", {".gitignore": "*.tmp\n"})
            stored = settings.Settings(
                include_patterns=[" kt ", ""],
                excluded_extensions=".LOG, java",
            )
            config = stored.snapshot(LocalFileEntry(root))
            self.assertEqual(config.include_patterns, ("kt",))
            self.assertEqual(config.extra_excluded_extensions, frozenset({"log", "java"}))
            self.assertEqual(len(config.ignore_rules), 1)
            self.assertFalse(config.is_include_mode)


if __name__ == "__main__":
    unittest.main()
