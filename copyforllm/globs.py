"""
Glob pattern compilation for include/exclude lists.

Patterns come from user settings and are matched against a file *name*
(never the full path). Bare text without wildcards is shorthand for an
extension: ``cs`` means ``*.cs`` and ``.kt`` means ``*.kt``.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Pattern

# Characters the glob translator escapes explicitly. Everything that is not a
# wildcard is escaped anyway, so any input string compiles.
LITERAL_SPECIALS = frozenset(".+()|^$@%\\")

# Never matches anything, including the empty string.
_MATCH_NOTHING = re.compile(r"(?!)")


def is_globby(pattern: str) -> bool:
    """True if the pattern already contains a ``*`` or ``?`` wildcard."""
    return "*" in pattern or "?" in pattern


def expand_shorthand(pattern: str) -> str:
    """Rewrite bare extension shorthand into a glob (``cs`` -> ``*.cs``)."""
    if is_globby(pattern):
        return pattern
    if pattern.startswith("."):
        return f"*{pattern}"
    return f"*.{pattern}"


def glob_to_regex(glob: str) -> str:
    """Translate a simple glob (``*`` and ``?`` only) into regex source."""
    parts = []
    for ch in glob:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        elif ch in LITERAL_SPECIALS:
            parts.append("\\" + ch)
        else:
            parts.append(re.escape(ch))
    return "".join(parts)


def compile_pattern(pattern: str) -> Pattern[str]:
    """Compile a settings pattern into a case-insensitive whole-name matcher."""
    if not pattern.strip():
        return _MATCH_NOTHING
    return re.compile(glob_to_regex(expand_shorthand(pattern)), re.IGNORECASE)


def compile_patterns(patterns: Iterable[str]) -> List[Pattern[str]]:
    return [compile_pattern(p) for p in patterns]


def matches(name: str, matcher: Pattern[str]) -> bool:
    return matcher.fullmatch(name) is not None


def matches_any(name: str, matchers: Iterable[Pattern[str]]) -> bool:
    return any(matches(name, m) for m in matchers)
