"""
Collect candidate files from a selection.

Sources are tried in order: the explicit selection, then the files open in
the editor, then the whole project root. Directories are expanded into their
files; heavy folders are pruned during descent.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .entries import FileEntry, LocalFileEntry, should_descend_into


# =============================================================================
# SELECTION RESOLUTION
# =============================================================================

def resolve_entry(item: Any) -> Optional[FileEntry]:
    """Resolve a host selection object to a FileEntry, or None."""
    if item is None:
        return None
    if isinstance(item, FileEntry):
        return item
    if isinstance(item, (str, os.PathLike)):
        return LocalFileEntry(item)

    nested = getattr(item, "file_entry", None)
    if isinstance(nested, FileEntry):
        return nested

    path = getattr(item, "path", None)
    if isinstance(path, (str, os.PathLike)):
        return LocalFileEntry(path)

    logging.warning(f"Could not resolve a file for selection item of type {type(item).__name__}")
    return None


def resolve_selection(items: Optional[Iterable[Any]]) -> List[FileEntry]:
    """Resolve and deduplicate a selection, keeping first-seen order."""
    resolved: Dict[FileEntry, None] = {}
    for item in items or ():
        entry = resolve_entry(item)
        if entry is not None:
            resolved.setdefault(entry, None)
    return list(resolved)


# =============================================================================
# EXPANSION
# =============================================================================

def expand(entries: Iterable[FileEntry]) -> List[FileEntry]:
    """Expand directories recursively into a deduplicated list of files."""
    out: Dict[FileEntry, None] = {}
    for entry in entries:
        if not entry.is_valid:
            continue
        if entry.is_directory:
            _walk(entry, out)
        else:
            out.setdefault(entry, None)
    return list(out)


def _walk(directory: FileEntry, out: Dict[FileEntry, None]) -> None:
    try:
        children = directory.children()
    except OSError as e:
        logging.warning(f"Could not read directory {directory.path}: {e}")
        return

    for child in children:
        if not child.is_valid:
            continue
        if child.is_directory:
            if should_descend_into(child):
                _walk(child, out)
            else:
                logging.debug(f"Skipping heavy folder {child.path}")
        else:
            out.setdefault(child, None)


def collect(
    ui_selection: Optional[Sequence[Any]],
    open_editor_files: Optional[Sequence[Any]],
    project_root: Optional[FileEntry],
) -> List[FileEntry]:
    """Gather files from the selection, the open editors, or the project root."""
    selection = resolve_selection(ui_selection)
    if selection:
        return expand(selection)

    editors = resolve_selection(open_editor_files)
    if editors:
        return expand(editors)

    if project_root is not None and project_root.is_valid:
        return expand([project_root])

    return []
