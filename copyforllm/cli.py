"""
Command-line front end.

Resolves the selection and project root, snapshots settings, runs the
pipeline on a worker thread, and writes the result from the main thread.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import List, Optional

from . import get_version
from .entries import LocalFileEntry
from .filters import FilterMode
from .ignore import IgnoreDialect
from .output import OutputMode, OutputWriter
from .pipeline import CopyRequest, Outcome, OutcomeStatus, run_copy
from .progress import CancellableProgress
from .settings import Settings, load_settings, normalize_patterns, save_settings

POLL_SECONDS = 0.1


# =============================================================================
# CLI PARSER
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="copy-for-llm",
        description="Copy selected files, with a tree view, to the clipboard for LLM prompts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  copy-for-llm src/ README.md           # Copy a directory and a file
  copy-for-llm                          # Copy the whole project (minus heavy folders)
  copy-for-llm --mode include --include py --include "*.md"
  copy-for-llm --exclude-extensions "log, .tmp" --stdout
        """,
    )

    sel = parser.add_argument_group("Selection")
    sel.add_argument("paths", nargs="*", type=Path, help="Files or directories to copy")
    sel.add_argument("--root", type=Path, default=Path("."), help="Project root directory (default: current)")
    sel.add_argument("--open", dest="open_files", action="append", type=Path, metavar="FILE",
                     help="Open editor file, used when no paths are given")
    sel.add_argument("--name", dest="project_name", help="Project name for the header (default: root folder name)")

    filt = parser.add_argument_group("Filtering")
    filt.add_argument("--mode", choices=[m.value for m in FilterMode], help="Primary filter mode")
    filt.add_argument("--include", action="append", metavar="PATTERN",
                      help="Include pattern (e.g. cs, .kt, *.md); replaces stored list")
    filt.add_argument("--exclude", action="append", metavar="PATTERN",
                      help="Exclude pattern; replaces stored list")
    filt.add_argument("--exclude-extensions", metavar="LIST",
                      help='Comma-separated extensions always excluded (e.g. "java, .log")')

    ign = parser.add_argument_group("Ignore File")
    ign.add_argument("--ignore-dialect", choices=[d.value for d in IgnoreDialect],
                     help="How to read the ignore file (default: patterns)")
    ign.add_argument("--ignore-file", metavar="NAME", help="Ignore file name at the project root (default: .gitignore)")

    out = parser.add_argument_group("Output")
    out.add_argument("-o", "--output", type=Path, metavar="FILE", help="Write to file")
    out.add_argument("--stdout", action="store_true", help="Print to stdout")
    out.add_argument("--no-clipboard", action="store_true", help="Don't copy to clipboard")

    cfg = parser.add_argument_group("Settings")
    cfg.add_argument("--no-settings", action="store_true", help="Ignore stored settings")
    cfg.add_argument("--save-settings", action="store_true", help="Store the effective filter settings")

    meta = parser.add_argument_group("Information")
    meta.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    meta.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")

    return parser


# =============================================================================
# CONFIGURATION
# =============================================================================

def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Overlay command-line options on stored settings."""
    if args.mode:
        settings.mode = FilterMode(args.mode)
    if args.include is not None:
        settings.include_patterns = normalize_patterns(args.include)
    if args.exclude is not None:
        settings.exclude_patterns = normalize_patterns(args.exclude)
    if args.exclude_extensions is not None:
        settings.excluded_extensions = args.exclude_extensions
    if args.ignore_dialect:
        settings.ignore_dialect = IgnoreDialect(args.ignore_dialect)
    if args.ignore_file:
        settings.ignore_file = args.ignore_file
    return settings


def output_mode(args: argparse.Namespace) -> OutputMode:
    if args.output:
        return OutputMode.FILE
    if args.stdout or args.no_clipboard:
        return OutputMode.STDOUT
    return OutputMode.CLIPBOARD


def resolve_root(root: Path) -> Optional[LocalFileEntry]:
    root = Path(os.path.abspath(root))
    if not root.is_dir():
        logging.warning(f"Project root is not a directory: {root}")
        return None
    return LocalFileEntry(root)


# =============================================================================
# EXECUTION
# =============================================================================

def wait_for(future: Future, progress: CancellableProgress) -> Outcome:
    """Wait for the worker. Every Ctrl-C cancels the build and keeps waiting."""
    while True:
        try:
            while not future.done():
                wait([future], timeout=POLL_SECONDS)
            return future.result()
        except KeyboardInterrupt:
            progress.cancel()


def run_in_background(request: CopyRequest, progress: CancellableProgress) -> Outcome:
    """Run the pipeline on a worker thread; Ctrl-C cancels it."""
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="copy-for-llm") as pool:
        return wait_for(pool.submit(run_copy, request, progress), progress)


def report(outcome: Outcome, args: argparse.Namespace) -> int:
    """Show the outcome and write the content. Returns the exit code."""
    status = outcome.status
    if outcome.should_write:
        ok = OutputWriter.write(outcome.result, output_mode(args), args.output)
        return 0 if ok else 1
    if status == OutcomeStatus.CANCELLED:
        return 130
    if status == OutcomeStatus.FAILED:
        print(f"❌ {outcome.message}", file=sys.stderr)
        return 1
    print(f"⚠️ {outcome.message}", file=sys.stderr)
    return 1 if status == OutcomeStatus.NO_PROJECT else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)

    settings = Settings() if args.no_settings else load_settings()
    settings = apply_overrides(settings, args)
    if args.save_settings and save_settings(settings):
        print("✅ Settings saved", file=sys.stderr)

    project_root = resolve_root(args.root)
    request = CopyRequest(
        project_root=project_root,
        config=settings.snapshot(project_root),
        selection=list(args.paths),
        open_files=list(args.open_files or []),
        project_name=args.project_name,
    )

    outcome = run_in_background(request, CancellableProgress())
    return report(outcome, args)


if __name__ == "__main__":
    sys.exit(main())
