"""
Ignore-file rules read from a marker file (``.gitignore`` by default) at the
project root.

Two dialects are supported. PATTERNS compiles each line with the simple glob
translator and searches for it anywhere in the absolute path. GITIGNORE hands
the file to gitignore_parser for real gitignore semantics.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Pattern

import gitignore_parser

from .entries import FileEntry, LocalFileEntry
from .globs import glob_to_regex

DEFAULT_IGNORE_FILE = ".gitignore"


class IgnoreDialect(Enum):
    """How ignore-file lines are interpreted."""
    NONE = "none"            # No ignore layer
    PATTERNS = "patterns"    # Glob lines, substring search in full path (DEFAULT)
    GITIGNORE = "gitignore"  # Full gitignore semantics


class IgnoreRuleSet:
    """Compiled ignore rules. An empty set matches nothing."""

    def __init__(
        self,
        rules: Iterable[Pattern[str]] = (),
        matcher: Optional[Callable[[str], bool]] = None,
    ):
        self.rules: List[Pattern[str]] = list(rules)
        self.matcher = matcher

    @classmethod
    def load(cls, content: Optional[str]) -> IgnoreRuleSet:
        """Parse ignore-file content. None yields an empty rule set."""
        if content is None:
            return cls()
        rules = []
        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            rules.append(re.compile(glob_to_regex(line)))
        return cls(rules)

    @classmethod
    def from_gitignore(cls, ignore_file: Path, base_dir: Path) -> IgnoreRuleSet:
        """Use gitignore_parser to evaluate paths with gitignore semantics."""
        parsed = gitignore_parser.parse_gitignore(ignore_file, base_dir=base_dir)

        def matcher(full_path: str) -> bool:
            try:
                return bool(parsed(full_path))
            except ValueError:
                # Paths outside base_dir are never ignored
                return False

        return cls(matcher=matcher)

    def __len__(self) -> int:
        return len(self.rules) + (1 if self.matcher else 0)

    def __bool__(self) -> bool:
        return len(self) > 0

    def matches(self, full_path: str) -> bool:
        """True if any rule is found anywhere in ``full_path``."""
        if self.matcher is not None and self.matcher(full_path):
            return True
        return any(rule.search(full_path) for rule in self.rules)


def load_ignore_rules(
    project_root: Optional[FileEntry],
    dialect: IgnoreDialect = IgnoreDialect.PATTERNS,
    file_name: str = DEFAULT_IGNORE_FILE,
) -> IgnoreRuleSet:
    """Load the project's ignore file. Absence is never an error."""
    if project_root is None or dialect == IgnoreDialect.NONE:
        return IgnoreRuleSet()

    marker = next(
        (c for c in _safe_children(project_root) if c.name == file_name and not c.is_directory),
        None,
    )
    if marker is None:
        logging.debug(f"No {file_name} found in {project_root.path}")
        return IgnoreRuleSet()

    if dialect == IgnoreDialect.GITIGNORE:
        if not isinstance(marker, LocalFileEntry) or not isinstance(project_root, LocalFileEntry):
            logging.warning(f"gitignore dialect needs a local project; ignoring {file_name}")
            return IgnoreRuleSet()
        try:
            return IgnoreRuleSet.from_gitignore(marker.fs_path, project_root.fs_path)
        except Exception as e:
            logging.warning(f"Could not parse {file_name}: {e}")
            return IgnoreRuleSet()

    try:
        content = marker.read_text()
    except OSError as e:
        logging.warning(f"Could not read {marker.path}: {e}")
        return IgnoreRuleSet()

    rules = IgnoreRuleSet.load(content)
    logging.info(f"Loaded {len(rules)} ignore rules from {marker.path}")
    return rules


def _safe_children(entry: FileEntry) -> List[FileEntry]:
    try:
        return entry.children()
    except OSError as e:
        logging.warning(f"Could not list {entry.path}: {e}")
        return []
