"""
copy-for-llm: copy selected project files to the clipboard for LLM prompts.

Architecture:
    Selection → Collect → Filter (patterns × ignore file) →
    Build (tree + file blocks) → Clipboard
"""

from __future__ import annotations

__version__ = "1.0.0"


def get_version() -> str:
    """Get version from package metadata or fallback to hardcoded."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("copy-for-llm")
    except PackageNotFoundError:
        return __version__


from .builder import BuildResult, ContentBuilder, build_content  # noqa: E402
from .collector import collect  # noqa: E402
from .entries import FileEntry, LocalFileEntry  # noqa: E402
from .filters import FilterConfiguration, FilterMode, filter_files  # noqa: E402
from .progress import BuildCancelled, CancellableProgress, ProgressSink  # noqa: E402

__all__ = [
    "BuildCancelled",
    "BuildResult",
    "CancellableProgress",
    "ContentBuilder",
    "FileEntry",
    "FilterConfiguration",
    "FilterMode",
    "LocalFileEntry",
    "ProgressSink",
    "build_content",
    "collect",
    "filter_files",
    "get_version",
]
