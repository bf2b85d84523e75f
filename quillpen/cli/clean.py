"""``quillpen clean`` -- delete everything in ``writing/drafts/``."""

from __future__ import annotations

import argparse
import sys

from quillpen.cli.common import display_path
from quillpen.config.loader import get_project_root
from quillpen.config.settings import Settings
from quillpen.config.workspace import WorkspacePaths
from quillpen.services.writing.cleanup import delete_files, list_draft_files
from quillpen.utils.errors import QuillpenError

PREVIEW_LIMIT = 10


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``clean`` subcommand."""
    parser = subparsers.add_parser("clean", help="Delete all files in writing/drafts/")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")


def _confirm(prompt: str) -> bool:
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute ``quillpen clean``; return the process exit code."""
    try:
        paths = WorkspacePaths(get_project_root())
    except QuillpenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    drafts = paths.relative(paths.drafts_dir)
    if not paths.drafts_dir.is_dir():
        print(f"No drafts directory at {drafts}")
        return 0

    files = list_draft_files(paths.drafts_dir)
    if not files:
        print(f"No files in {drafts}")
        return 0

    print(f"Files in {drafts}:")
    for path in files[:PREVIEW_LIMIT]:
        print(f"  {display_path(paths, path)}")
    if len(files) > PREVIEW_LIMIT:
        print(f"  ... and {len(files) - PREVIEW_LIMIT} more")

    if not args.yes and not _confirm(f"\nDelete {len(files)} file(s)? [y/N] "):
        print("Cancelled.")
        return 0

    result = delete_files(files)
    print(f"Deleted {len(result.deleted)} file(s)")
    if result.failed:
        print(f"Failed to delete {result.failed} file(s):", file=sys.stderr)
        for path, error in result.errors.items():
            print(f"  {path}: {error}", file=sys.stderr)
        return 1
    return 0
