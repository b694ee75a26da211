"""
ASCII tree of the selected paths, rooted at the project directory.

Only selected entries, their ancestors, and everything inside a selected
directory are drawn. Siblings are ordered directories first, then by name.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

from .entries import FileEntry, relative_path, sort_key
from .progress import NullProgress, ProgressSink

# Tree display glyphs
GLYPH_CHILD = "├── "
GLYPH_LAST = "└── "
GLYPH_PIPE = "│   "
GLYPH_SPACE = "    "


def ancestor_paths(paths: Iterable[str]) -> Set[str]:
    """Every non-empty ``/``-prefix of every path."""
    ancestors: Set[str] = set()
    for path in paths:
        current = path
        while "/" in current:
            current = current.rsplit("/", 1)[0]
            if current:
                ancestors.add(current)
    return ancestors


class TreeRenderer:
    """Renders the visible part of the project tree."""

    def __init__(self, project_root: FileEntry, progress: Optional[ProgressSink] = None):
        self.root = project_root
        self.progress = progress or NullProgress()
        self.selected: Set[str] = set()
        self.ancestors: Set[str] = set()

    def render(self, selection: Iterable[FileEntry]) -> str:
        self.selected = set()
        for entry in selection:
            rel = relative_path(entry, self.root)
            if rel is None:
                logging.debug(f"{entry.path} is outside the project; left out of the tree")
                continue
            self.selected.add(rel)
        self.ancestors = ancestor_paths(self.selected)

        lines = ["."]
        self._render_dir(self.root, "", "" in self.selected, lines)
        return "\n".join(lines) + "\n"

    def _is_visible(self, rel: str, inside_selected: bool) -> bool:
        return inside_selected or rel in self.selected or rel in self.ancestors

    def _render_dir(
        self,
        directory: FileEntry,
        indent: str,
        inside_selected: bool,
        lines: List[str],
    ) -> None:
        self.progress.check_cancelled()

        try:
            children = sorted(directory.children(), key=sort_key)
        except OSError as e:
            logging.warning(f"Could not read children of {directory.path} for tree view: {e}")
            children = []

        visible = []
        for child in children:
            rel = relative_path(child, self.root)
            if rel is not None and self._is_visible(rel, inside_selected):
                visible.append((child, rel))

        for index, (child, rel) in enumerate(visible):
            is_last = index == len(visible) - 1
            prefix = GLYPH_LAST if is_last else GLYPH_CHILD
            if child.is_directory:
                lines.append(f"{indent}{prefix}{child.name}/")
                child_indent = indent + (GLYPH_SPACE if is_last else GLYPH_PIPE)
                self._render_dir(
                    child, child_indent, inside_selected or rel in self.selected, lines
                )
            else:
                lines.append(f"{indent}{prefix}{child.name}")


def render_tree(
    selection: Iterable[FileEntry],
    project_root: FileEntry,
    progress: Optional[ProgressSink] = None,
) -> str:
    return TreeRenderer(project_root, progress).render(selection)
