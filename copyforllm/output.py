"""Writes a finished build to the clipboard, stdout, or a file."""

from __future__ import annotations

import sys
from enum import Enum, auto
from pathlib import Path
from typing import Optional

import pyperclip

from .builder import BuildResult


class OutputMode(Enum):
    """Output destination modes."""
    CLIPBOARD = auto()
    FILE = auto()
    STDOUT = auto()


def format_confirmation(result: BuildResult, mode: OutputMode = OutputMode.CLIPBOARD,
                        path: Optional[Path] = None) -> str:
    """Confirmation line: counts plus character length."""
    if mode == OutputMode.FILE:
        target = f"to {path}"
    elif mode == OutputMode.STDOUT:
        target = "to stdout"
    else:
        target = "to clipboard"
    return (
        f"Copied {result.file_count} files ({result.skipped_count} skipped, "
        f"{result.char_count:,} characters) {target}."
    )


class OutputWriter:
    """Handles output to various destinations."""

    @staticmethod
    def write(result: BuildResult, mode: OutputMode, path: Optional[Path] = None) -> bool:
        """Write content to configured destination."""
        if mode == OutputMode.FILE:
            ok = OutputWriter._write_file(result.content, path)
        elif mode == OutputMode.STDOUT:
            ok = OutputWriter._write_stdout(result.content)
        else:
            ok = OutputWriter._write_clipboard(result.content)
        if ok:
            print(f"✅ {format_confirmation(result, mode, path)}", file=sys.stderr)
        return ok

    @staticmethod
    def _write_file(content: str, path: Optional[Path]) -> bool:
        """Write to file."""
        if not path:
            return False
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            return True
        except OSError as e:
            print(f"❌ Error writing file: {e}", file=sys.stderr)
            return False

    @staticmethod
    def _write_stdout(content: str) -> bool:
        """Write to stdout."""
        try:
            print(content)
            return True
        except OSError as e:
            print(f"❌ Error writing to stdout: {e}", file=sys.stderr)
            return False

    @staticmethod
    def _write_clipboard(content: str) -> bool:
        """Copy to clipboard."""
        try:
            pyperclip.copy(content)
            return True
        except pyperclip.PyperclipException as e:
            print(f"❌ Clipboard error: {e}", file=sys.stderr)
            return False
