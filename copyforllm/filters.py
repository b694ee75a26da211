"""
Include/exclude filtering of collected files.

A primary name-based test (INCLUDE or EXCLUDE mode) is followed by two layers
that always apply: extra excluded extensions and ignore-file rules. The extra
layers can reject a file that passed the primary test but never rescue one
that failed it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, List, Sequence, Tuple

from .entries import FileEntry
from .globs import compile_patterns, matches_any
from .ignore import IgnoreRuleSet


# =============================================================================
# CONFIGURATION
# =============================================================================

class FilterMode(Enum):
    """Which pattern list is the primary test."""
    INCLUDE = "include"  # Allowlist, then exclude list narrows
    EXCLUDE = "exclude"  # Denylist (DEFAULT)


@dataclass(frozen=True)
class FilterConfiguration:
    """Immutable snapshot of filtering settings for one invocation."""
    mode: FilterMode = FilterMode.EXCLUDE
    include_patterns: Tuple[str, ...] = ()
    exclude_patterns: Tuple[str, ...] = ()
    extra_excluded_extensions: FrozenSet[str] = frozenset()
    ignore_rules: IgnoreRuleSet = field(default_factory=IgnoreRuleSet, compare=False)

    @property
    def is_include_mode(self) -> bool:
        return self.mode == FilterMode.INCLUDE


# =============================================================================
# FILTER RULES (Strategy Pattern)
# =============================================================================

class FilterRule(ABC):
    """Abstract base for file filter rules."""

    @abstractmethod
    def check(self, entry: FileEntry) -> Tuple[bool, str]:
        """Check if entry passes this rule. Returns (passes, reason)."""
        pass


class PrimaryPatternRule(FilterRule):
    """INCLUDE/EXCLUDE mode test against the file name."""

    def __init__(self, config: FilterConfiguration):
        self.include_mode = config.is_include_mode
        self.include = compile_patterns(config.include_patterns)
        self.exclude = compile_patterns(config.exclude_patterns)
        # An empty allowlist means "everything", then the exclude list narrows it
        self.include_all = self.include_mode and not self.include

    def check(self, entry: FileEntry) -> Tuple[bool, str]:
        name = entry.name
        if matches_any(name, self.exclude):
            return False, f"Matches exclude pattern: {name}"
        if self.include_mode and not self.include_all:
            if not matches_any(name, self.include):
                return False, f"No include pattern matched: {name}"
        return True, ""


class ExtraExtensionRule(FilterRule):
    """Reject user-excluded extensions."""

    def __init__(self, extensions: Iterable[str]):
        self.suffixes = tuple(f".{ext}" for ext in sorted(extensions) if ext)

    def check(self, entry: FileEntry) -> Tuple[bool, str]:
        name = entry.name.lower()
        for suffix in self.suffixes:
            if name.endswith(suffix):
                return False, f"Excluded extension: {suffix}"
        return True, ""


class IgnoreFileRule(FilterRule):
    """Reject paths matched by the project's ignore file."""

    def __init__(self, rules: IgnoreRuleSet):
        self.rules = rules

    def check(self, entry: FileEntry) -> Tuple[bool, str]:
        if self.rules and self.rules.matches(entry.path):
            return False, "Matched ignore file"
        return True, ""


# =============================================================================
# FILE FILTER COMPOSITE
# =============================================================================

class FileFilter:
    """Composite filter applying the primary rule, then the extra layers."""

    def __init__(self, config: FilterConfiguration):
        self.config = config
        self.rules: List[FilterRule] = [
            PrimaryPatternRule(config),
            ExtraExtensionRule(config.extra_excluded_extensions),
            IgnoreFileRule(config.ignore_rules),
        ]

    def should_include(self, entry: FileEntry) -> Tuple[bool, str]:
        """Check if file should be included."""
        if entry.is_directory or not entry.is_valid:
            return False, "Not a valid file"
        for rule in self.rules:
            passes, reason = rule.check(entry)
            if not passes:
                return False, reason
        return True, "Passed all filters"


def filter_files(files: Sequence[FileEntry], config: FilterConfiguration) -> List[FileEntry]:
    """Order-preserving filter of ``files`` under ``config``."""
    file_filter = FileFilter(config)
    kept = []
    for entry in files:
        ok, reason = file_filter.should_include(entry)
        if ok:
            kept.append(entry)
        else:
            logging.debug(f"Excluded {entry.path}: {reason}")
    logging.info(f"Filter ({config.mode.name}): kept {len(kept)} of {len(files)} files")
    return kept
