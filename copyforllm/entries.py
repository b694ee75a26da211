"""
File entries: the read-only view of the filesystem the pipeline works on.

The builder, tree renderer and collector only depend on the FileEntry
contract, so tests (or another host) can supply their own entries.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import FrozenSet, List, Optional, Union

# =============================================================================
# CONSTANTS
# =============================================================================

# Heavy folders never descended into while expanding a selection.
HEAVY_DIRS: FrozenSet[str] = frozenset({
    ".git", ".idea", "node_modules", "dist", "build",
    "out", "bin", "target", ".gradle",
})

BINARY_EXTENSIONS: FrozenSet[str] = frozenset({
    # Images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff", ".tif",
    ".psd",
    # Archives
    ".zip", ".tar", ".gz", ".tgz", ".rar", ".7z", ".bz2", ".xz", ".jar", ".war",
    ".ear",
    # Compiled
    ".pyc", ".pyo", ".pyd", ".so", ".o", ".a", ".lib", ".dylib", ".dll", ".exe",
    ".class", ".wasm", ".bin",
    # Fonts
    ".woff", ".woff2", ".ttf", ".eot", ".otf",
    # Media
    ".mp3", ".mp4", ".avi", ".mov", ".wmv", ".flv", ".webm", ".wav", ".ogg",
    ".flac",
    # Documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    # Databases
    ".db", ".sqlite", ".sqlite3",
})

SNIFF_BYTES = 8192


# =============================================================================
# FILE ENTRY CONTRACT
# =============================================================================

class FileEntry(ABC):
    """A file or directory, referenced by absolute ``/``-separated path."""

    @property
    @abstractmethod
    def path(self) -> str:
        pass

    @property
    def name(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @property
    @abstractmethod
    def is_directory(self) -> bool:
        pass

    @property
    @abstractmethod
    def is_valid(self) -> bool:
        """Whether the entry still exists and is accessible."""
        pass

    @property
    @abstractmethod
    def byte_length(self) -> int:
        pass

    @property
    @abstractmethod
    def is_binary(self) -> bool:
        pass

    @abstractmethod
    def children(self) -> List[FileEntry]:
        """List directory children. Raises OSError if unreadable."""
        pass

    @abstractmethod
    def read_text(self) -> str:
        """Load the file as text. Raises OSError on failure."""
        pass

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileEntry):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class LocalFileEntry(FileEntry):
    """FileEntry backed by the local filesystem."""

    def __init__(self, path: Union[str, os.PathLike]):
        self._path = Path(os.path.abspath(path))

    @property
    def fs_path(self) -> Path:
        return self._path

    @property
    def path(self) -> str:
        return self._path.as_posix()

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def is_directory(self) -> bool:
        return self._path.is_dir()

    @property
    def is_valid(self) -> bool:
        return self._path.exists() and os.access(self._path, os.R_OK)

    @property
    def byte_length(self) -> int:
        try:
            return self._path.stat().st_size
        except OSError:
            return 0

    @property
    def is_binary(self) -> bool:
        if self._path.suffix.lower() in BINARY_EXTENSIONS:
            return True
        try:
            with open(self._path, "rb") as f:
                return b"\x00" in f.read(SNIFF_BYTES)
        except OSError as e:
            logging.debug(f"Cannot sniff {self._path} for binary content: {e}")
            return False

    def children(self) -> List[FileEntry]:
        """Sorted children. Symlinked files are kept; symlinked directories are not followed."""
        return [
            LocalFileEntry(p)
            for p in sorted(self._path.iterdir(), key=lambda p: p.name)
            if not (p.is_symlink() and p.is_dir())
        ]

    def read_text(self) -> str:
        return self._path.read_text(encoding="utf-8", errors="ignore")


# =============================================================================
# HELPERS
# =============================================================================

def relative_path(entry: FileEntry, root: FileEntry) -> Optional[str]:
    """Path of ``entry`` relative to ``root`` with ``/`` separators.

    Returns "" for the root itself and None when ``entry`` is outside it.
    """
    root_path = root.path.rstrip("/")
    path = entry.path.rstrip("/")
    if path == root_path:
        return ""
    prefix = root_path + "/"
    if not path.startswith(prefix):
        return None
    return path[len(prefix):]


def should_descend_into(entry: FileEntry) -> bool:
    """False for heavy folders (``.git``, ``node_modules``, build output...)."""
    if not entry.is_directory:
        return True
    return entry.name.lower() not in HEAVY_DIRS


def sort_key(entry: FileEntry):
    """Directories first, then by name."""
    return (not entry.is_directory, entry.name)
