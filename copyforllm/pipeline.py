"""
End-to-end copy pipeline: collect -> filter -> build.

``run_copy`` never raises. Every way the pipeline can end is reported as an
Outcome so the caller only has to decide what to show and whether to write
the content out.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, List, Optional, Sequence

from .builder import BuildResult, ContentBuilder
from .collector import collect
from .entries import FileEntry
from .filters import FilterConfiguration, filter_files
from .progress import BuildCancelled, NullProgress, ProgressSink


class OutcomeStatus(Enum):
    """How a copy invocation ended."""
    SUCCESS = auto()
    NO_PROJECT = auto()       # No project root could be resolved
    NO_FILES = auto()         # Nothing selected, no editors, empty project
    FILTERED_EMPTY = auto()   # Candidates existed but filtering removed all
    CANCELLED = auto()        # User cancelled; silent
    FAILED = auto()           # Unexpected error


@dataclass
class CopyRequest:
    """Inputs gathered from the host for one invocation."""
    project_root: Optional[FileEntry]
    config: FilterConfiguration
    selection: Sequence[Any] = field(default_factory=list)
    open_files: Sequence[Any] = field(default_factory=list)
    project_name: Optional[str] = None


@dataclass
class Outcome:
    status: OutcomeStatus
    message: str = ""
    result: Optional[BuildResult] = None
    duration: float = 0.0

    @property
    def should_write(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS and self.result is not None


def run_copy(request: CopyRequest, progress: Optional[ProgressSink] = None) -> Outcome:
    """Run the pipeline for ``request``. Safe to call from a worker thread."""
    progress = progress or NullProgress()
    start = time.time()
    try:
        outcome = _run(request, progress)
    except BuildCancelled:
        logging.info("Copy cancelled")
        outcome = Outcome(OutcomeStatus.CANCELLED)
    except Exception as e:
        logging.exception("Copy for LLM failed")
        outcome = Outcome(OutcomeStatus.FAILED, f"Error copying content: {str(e) or 'Unknown error'}")
    outcome.duration = time.time() - start
    logging.info(f"Pipeline finished: {outcome.status.name} in {outcome.duration:.3f}s")
    return outcome


def _run(request: CopyRequest, progress: ProgressSink) -> Outcome:
    if request.project_root is None or not request.project_root.is_valid:
        return Outcome(OutcomeStatus.NO_PROJECT, "No project found.")

    candidates: List[FileEntry] = collect(request.selection, request.open_files, request.project_root)
    logging.info(f"Collected {len(candidates)} candidate files")
    if not candidates:
        return Outcome(
            OutcomeStatus.NO_FILES,
            "No files found. Select files or directories, or pass open files with --open.",
        )

    progress.check_cancelled()
    filtered = filter_files(candidates, request.config)
    if not filtered:
        return Outcome(
            OutcomeStatus.FILTERED_EMPTY,
            f"After {request.config.mode.name} filtering there are no files to copy.",
        )

    builder = ContentBuilder(request.project_root, progress, project_name=request.project_name)
    result = builder.build(filtered)
    if not result.ok:
        return Outcome(OutcomeStatus.NO_PROJECT, result.error or "", result)

    return Outcome(OutcomeStatus.SUCCESS, result=result)
