"""
Persistent settings.

Settings live in a JSON file under ``~/.config``. They are loaded once per
invocation and turned into an immutable FilterConfiguration snapshot; the
pipeline never reads settings directly. A missing or malformed file falls
back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .entries import FileEntry
from .filters import FilterConfiguration, FilterMode
from .ignore import DEFAULT_IGNORE_FILE, IgnoreDialect, load_ignore_rules

CONFIG_PATH = Path.home() / ".config" / "copy-for-llm.json"


def normalize_patterns(patterns: Optional[Iterable[Any]]) -> List[str]:
    """Strip entries and drop blanks."""
    return [str(p).strip() for p in (patterns or []) if str(p).strip()]


def parse_extensions(value: str) -> List[str]:
    """Returns ``["java", "log", "txt"]`` for ``"java, .log , txt"``."""
    out = []
    for part in (value or "").split(","):
        ext = part.strip()
        if ext.startswith("."):
            ext = ext[1:]
        ext = ext.lower()
        if ext:
            out.append(ext)
    return out


@dataclass
class Settings:
    """User-editable settings, mutable between load and save."""
    mode: FilterMode = FilterMode.EXCLUDE
    include_patterns: List[str] = field(default_factory=list)
    exclude_patterns: List[str] = field(default_factory=list)
    excluded_extensions: str = ""
    ignore_dialect: IgnoreDialect = IgnoreDialect.PATTERNS
    ignore_file: str = DEFAULT_IGNORE_FILE

    def is_include_mode(self) -> bool:
        return self.mode == FilterMode.INCLUDE

    def excluded_extensions_list(self) -> List[str]:
        return parse_extensions(self.excluded_extensions)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["mode"] = self.mode.value
        data["ignore_dialect"] = self.ignore_dialect.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Settings:
        defaults = cls()
        return cls(
            mode=_enum_value(FilterMode, data.get("mode"), defaults.mode),
            include_patterns=normalize_patterns(_as_list(data.get("include_patterns"))),
            exclude_patterns=normalize_patterns(_as_list(data.get("exclude_patterns"))),
            excluded_extensions=str(data.get("excluded_extensions") or ""),
            ignore_dialect=_enum_value(IgnoreDialect, data.get("ignore_dialect"), defaults.ignore_dialect),
            ignore_file=str(data.get("ignore_file") or defaults.ignore_file),
        )

    def snapshot(self, project_root: Optional[FileEntry]) -> FilterConfiguration:
        """Freeze these settings, plus the project's ignore rules, for one build."""
        return FilterConfiguration(
            mode=self.mode,
            include_patterns=tuple(normalize_patterns(self.include_patterns)),
            exclude_patterns=tuple(normalize_patterns(self.exclude_patterns)),
            extra_excluded_extensions=frozenset(self.excluded_extensions_list()),
            ignore_rules=load_ignore_rules(project_root, self.ignore_dialect, self.ignore_file),
        )


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _enum_value(enum_cls, value: Any, default):
    if value is None:
        return default
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        return default


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load persisted settings, or defaults when missing or malformed."""
    path = path or CONFIG_PATH
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Settings()
    except (OSError, ValueError) as e:
        logging.warning(f"Could not load settings from {path}: {e}")
        return Settings()
    if not isinstance(data, dict):
        logging.warning(f"Ignoring settings in {path}: not a JSON object")
        return Settings()
    return Settings.from_dict(data)


def save_settings(settings: Settings, path: Optional[Path] = None) -> bool:
    """Persist settings as pretty-printed JSON. Returns False on failure."""
    path = path or CONFIG_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(settings.to_dict(), indent=2) + "\n", encoding="utf-8")
        return True
    except OSError as e:
        logging.warning(f"Could not save settings to {path}: {e}")
        return False
