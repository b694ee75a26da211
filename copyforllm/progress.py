"""
Progress reporting and cooperative cancellation.

The content pipeline polls a ProgressSink before every directory listing and
every file. A cancelled sink makes ``check_cancelled`` raise BuildCancelled,
which unwinds the whole build without producing a result.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional


class BuildCancelled(Exception):
    """Raised when the user cancels a build. Not an error."""


class ProgressSink(ABC):
    """Receives fractional progress and answers cancellation polls."""

    @abstractmethod
    def report(self, fraction: Optional[float], text: str) -> None:
        """Report progress. ``fraction`` is None when only the text changes."""
        pass

    @abstractmethod
    def is_cancelled(self) -> bool:
        pass

    def check_cancelled(self) -> None:
        if self.is_cancelled():
            raise BuildCancelled()


class NullProgress(ProgressSink):
    """Sink that ignores reports and is never cancelled."""

    def report(self, fraction: Optional[float], text: str) -> None:
        pass

    def is_cancelled(self) -> bool:
        return False


class CancellableProgress(ProgressSink):
    """Thread-safe sink backed by an Event, shared between UI and worker."""

    def __init__(self, on_report: Optional[Callable[[float, str], None]] = None):
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._on_report = on_report
        self.fraction = 0.0
        self.text = ""

    def report(self, fraction: Optional[float], text: str) -> None:
        with self._lock:
            if fraction is not None:
                self.fraction = max(0.0, min(1.0, fraction))
            if text != self.text:
                logging.debug(f"[{self.fraction:5.1%}] {text}")
            self.text = text
            current = self.fraction
        if self._on_report:
            self._on_report(current, text)

    def cancel(self) -> None:
        logging.info("Cancellation requested")
        self._cancelled.set()

    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()
