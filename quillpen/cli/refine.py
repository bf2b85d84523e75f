"""``quillpen refine`` -- write an improved copy of a draft.

Usage::

    quillpen refine                      # newest draft in writing/drafts/
    quillpen refine writing/drafts/post.md "Tighten the intro"

Feedback from ``quillpen review`` (``<draft>-review.md``) is applied when
present.  The draft itself is never modified.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from quillpen.cli.common import build_verified_llm, display_path
from quillpen.config.loader import get_project_root
from quillpen.config.settings import Settings
from quillpen.config.workspace import WorkspacePaths
from quillpen.models.writing import RefineResult
from quillpen.utils.errors import QuillpenError, WritingError


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``refine`` subcommand."""
    parser = subparsers.add_parser("refine", help="Write an improved copy of a draft")
    parser.add_argument(
        "draft", nargs="?", default=None, help="Draft to refine (default: newest draft)"
    )
    parser.add_argument("instruction", nargs="?", default=None, help="What to change")
    parser.add_argument("-o", "--output", default=None, help="Output path")
    parser.add_argument(
        "-i", "--instruct", default=None, help="Custom instruction (overrides the positional one)"
    )


async def _run_refine(
    settings: Settings, paths: WorkspacePaths, draft_path: Path, args: argparse.Namespace
) -> RefineResult:
    from quillpen.services.writing.writing_service import WritingService

    llm = await build_verified_llm(settings, paths.root)
    return await WritingService(llm, paths).refine(
        draft_path,
        instruction=args.instruct or args.instruction,
        output_path=Path(args.output).resolve() if args.output else None,
    )


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute ``quillpen refine``; return the process exit code."""
    from quillpen.services.writing.writing_service import latest_draft

    try:
        paths = WorkspacePaths(get_project_root())
        if args.draft:
            draft_path = Path(args.draft).resolve()
        else:
            newest = latest_draft(paths.drafts_dir)
            if newest is None:
                raise WritingError(f"No drafts found in {paths.relative(paths.drafts_dir)}")
            draft_path = newest
            print(f"Refining {display_path(paths, draft_path)}")

        result = asyncio.run(_run_refine(settings, paths, draft_path, args))
    except QuillpenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if result.used_review:
        print("Applied review feedback.")
    print(f"Refined draft written to {display_path(paths, result.output_path)}")
    print(
        f"Words: {result.original_word_count} -> {result.refined_word_count} "
        f"({result.word_delta:+d})"
    )
    return 0
