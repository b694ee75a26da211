"""Line-comment tokens per language, used to prefix file headers."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Dict, Optional

from .entries import FileEntry

COMMENT_TOKENS: Dict[str, str] = {
    # C family, JVM, JS, systems languages
    ".c": "//", ".h": "//", ".cpp": "//", ".cc": "//", ".cxx": "//", ".hpp": "//",
    ".cs": "//", ".fs": "//", ".java": "//", ".kt": "//", ".kts": "//",
    ".scala": "//", ".groovy": "//", ".gradle": "//", ".dart": "//",
    ".js": "//", ".mjs": "//", ".cjs": "//", ".jsx": "//",
    ".ts": "//", ".mts": "//", ".cts": "//", ".tsx": "//",
    ".go": "//", ".rs": "//", ".swift": "//", ".m": "//", ".mm": "//",
    ".php": "//", ".zig": "//", ".v": "//", ".proto": "//",
    ".scss": "//", ".less": "//", ".sass": "//", ".jsonc": "//",
    # Hash comments
    ".py": "#", ".pyi": "#", ".pyx": "#", ".rb": "#", ".pl": "#", ".pm": "#",
    ".sh": "#", ".bash": "#", ".zsh": "#", ".fish": "#", ".ps1": "#", ".psm1": "#",
    ".r": "#", ".jl": "#", ".nim": "#", ".ex": "#", ".exs": "#", ".cr": "#",
    ".yaml": "#", ".yml": "#", ".toml": "#", ".cfg": "#", ".conf": "#",
    ".tf": "#", ".tfvars": "#", ".env": "#", ".dockerfile": "#",
    ".cmake": "#", ".mk": "#", ".graphql": "#", ".gql": "#", ".properties": "#",
    # Double dash
    ".sql": "--", ".lua": "--", ".hs": "--", ".elm": "--", ".ada": "--",
    # Semicolon
    ".clj": ";", ".cljs": ";", ".lisp": ";", ".el": ";", ".scm": ";",
    ".ini": ";", ".asm": ";", ".s": ";",
    # Percent
    ".tex": "%", ".erl": "%", ".hrl": "%", ".matlab": "%",
    # Apostrophe
    ".vb": "'", ".bas": "'",
}

NAME_TOKENS: Dict[str, str] = {
    "Dockerfile": "#",
    "Makefile": "#",
    "CMakeLists.txt": "#",
    "Gemfile": "#",
    "Rakefile": "#",
    "Jenkinsfile": "//",
}


def comment_token_for(entry: FileEntry) -> Optional[str]:
    """Line-comment token for the entry's language, or None if unknown."""
    name = entry.name
    if name in NAME_TOKENS:
        return NAME_TOKENS[name]
    suffix = PurePosixPath(name).suffix.lower()
    return COMMENT_TOKENS.get(suffix)
