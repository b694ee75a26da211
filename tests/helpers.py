"""Shared fixtures: temporary project trees and failing entries."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Union

from copyforllm.entries import FileEntry, LocalFileEntry


def make_tree(root: Path, files: Dict[str, Union[str, bytes]]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``.

    A path ending in ``/`` creates an empty directory.
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        if rel.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


def entries(root: Path, *rels: str) -> List[FileEntry]:
    return [LocalFileEntry(root / rel) for rel in rels]


class UnreadableEntry(LocalFileEntry):
    """Local file whose content cannot be loaded."""

    def read_text(self) -> str:
        raise OSError("permission denied")


class BrokenDirEntry(LocalFileEntry):
    """Local directory whose listing fails."""

    def children(self) -> List[FileEntry]:
        raise OSError("cannot list directory")


class RootWithBrokenDir(LocalFileEntry):
    """Local directory whose child named ``broken`` cannot be listed."""

    def __init__(self, path: Path, broken: str):
        super().__init__(path)
        self.broken = broken

    def children(self) -> List[FileEntry]:
        return [
            BrokenDirEntry(child.path) if child.name == self.broken else child
            for child in super().children()
        ]
