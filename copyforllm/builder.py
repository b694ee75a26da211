"""
Content builder: the tree view plus every selected file's content.

Output layout::

    Selected structure within project '<name>':
    .
    └── src/
        └── a.txt

    ---

    # File: src/a.txt

    <content>

Each file block is introduced by its language's line-comment token. Empty and
binary files are announced but not inlined, and read failures are recorded in
place so the rest of the output is still produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .comments import comment_token_for
from .entries import FileEntry, relative_path, sort_key
from .progress import BuildCancelled, NullProgress, ProgressSink
from .tree import TreeRenderer

DEFAULT_COMMENT_TOKEN = "#"
NO_SELECTION_TEXT = "No files selected."
NO_PROJECT_TEXT = "Error: Could not determine project base directory."

CommentLookup = Callable[[FileEntry], Optional[str]]


@dataclass(frozen=True)
class BuildResult:
    """Result of one build, handed to the clipboard writer."""
    content: str
    file_count: int
    skipped_count: int
    error: Optional[str] = None

    @property
    def char_count(self) -> int:
        return len(self.content)

    @property
    def ok(self) -> bool:
        return self.error is None


class ContentBuilder:
    """Builds the clipboard text for a selection inside one project."""

    def __init__(
        self,
        project_root: Optional[FileEntry],
        progress: Optional[ProgressSink] = None,
        comment_lookup: CommentLookup = comment_token_for,
        project_name: Optional[str] = None,
    ):
        self.project_root = project_root
        self.progress = progress or NullProgress()
        self.comment_lookup = comment_lookup
        self.project_name = project_name
        self.total_files = 0
        self.processed_files = 0
        self.file_count = 0
        self.skipped_count = 0

    def build(self, selection: Sequence[FileEntry]) -> BuildResult:
        """Build the output. Raises BuildCancelled if the sink is cancelled."""
        if not selection:
            return BuildResult(NO_SELECTION_TEXT, 0, 0)

        self.progress.report(0.0, "Determining project structure...")
        root = self.project_root
        if root is None:
            logging.warning("Could not determine project base directory.")
            return BuildResult(NO_PROJECT_TEXT, 0, 0, error=NO_PROJECT_TEXT)
        logging.info(f"Using project base directory for paths: {root.path}")

        self.file_count = 0
        self.skipped_count = 0
        ordered = sorted(selection, key=sort_key)

        self.progress.report(0.1, "Calculating total files...")
        self.total_files = self._estimate_total_files(ordered)
        logging.info(f"Estimated total files to process: {self.total_files}")

        self.progress.report(None, "Building tree structure...")
        tree = TreeRenderer(root, self.progress).render(ordered)
        self.progress.report(0.2, "Processing file contents...")

        self.processed_files = 0
        blocks: List[str] = []
        for entry in ordered:
            self._process_entry(entry, root, blocks)

        self.progress.report(1.0, "Finalizing...")
        name = self.project_name or root.name
        header = f"Selected structure within project '{name}':\n"
        content = f"{header}{tree.rstrip()}\n\n---\n\n{''.join(blocks)}"
        return BuildResult(content.strip(), self.file_count, self.skipped_count)

    # -------------------------------------------------------------------------
    # Progress
    # -------------------------------------------------------------------------

    def _estimate_total_files(self, entries: Sequence[FileEntry]) -> int:
        count = 0
        for entry in entries:
            self.progress.check_cancelled()
            if entry.is_directory:
                try:
                    count += self._estimate_total_files(entry.children())
                except OSError as e:
                    logging.warning(f"Could not estimate children for {entry.path}: {e}")
            else:
                count += 1
        return count

    def _update_progress(self, details: str) -> None:
        self.processed_files += 1
        self.progress.check_cancelled()
        fraction = None
        if self.total_files > 0:
            fraction = min(1.0, 0.2 + 0.8 * self.processed_files / self.total_files)
        self.progress.report(fraction, details)

    # -------------------------------------------------------------------------
    # Content walk
    # -------------------------------------------------------------------------

    def _process_entry(self, entry: FileEntry, root: FileEntry, out: List[str]) -> None:
        self.progress.check_cancelled()

        if not entry.is_directory:
            self._handle_file(entry, root, out)
            return

        try:
            children = sorted(entry.children(), key=sort_key)
        except OSError as e:
            logging.warning(f"Could not process children of {entry.path} for content: {e}")
            return
        for child in children:
            self._process_entry(child, root, out)

    def _handle_file(self, entry: FileEntry, root: FileEntry, out: List[str]) -> None:
        self._update_progress(f"Processing: {entry.name}")

        path_from_root = relative_path(entry, root) or entry.name
        token = self._comment_prefix(entry)
        out.append(f"\n{token} File: {path_from_root}\n")

        if entry.byte_length == 0:
            skip_reason = "empty"
        elif entry.is_binary:
            skip_reason = "binary"
        else:
            skip_reason = None

        if skip_reason is not None:
            out.append(f"{token} ({skip_reason} file, content skipped)\n")
            out.append("\n\n")
            self.skipped_count += 1
            return

        try:
            text = entry.read_text()
        except BuildCancelled:
            raise
        except OSError as e:
            logging.warning(f"Could not read file content: {entry.path}: {e}")
            out.append(f"\n{token} Error reading file: {e}\n\n\n")
            self.skipped_count += 1
            return
        except Exception as e:
            logging.exception(f"Error processing file content: {entry.path}")
            out.append(f"\n{token} Error processing file: {e}\n\n\n")
            self.skipped_count += 1
            return

        out.append(f"\n{text}\n\n\n")
        self.file_count += 1

    def _comment_prefix(self, entry: FileEntry) -> str:
        """Line comment token for the entry, ``#`` when unknown."""
        try:
            token = self.comment_lookup(entry)
        except Exception as e:
            logging.warning(f"Could not determine comment token for {entry.name}: {e}")
            return DEFAULT_COMMENT_TOKEN
        if not token or not token.strip():
            return DEFAULT_COMMENT_TOKEN
        return token


def build_content(
    selection: Sequence[FileEntry],
    project_root: Optional[FileEntry],
    progress: Optional[ProgressSink] = None,
    comment_lookup: CommentLookup = comment_token_for,
    project_name: Optional[str] = None,
) -> BuildResult:
    """Build the clipboard text for ``selection``; see ContentBuilder."""
    builder = ContentBuilder(project_root, progress, comment_lookup, project_name)
    return builder.build(selection)
