"""``quillpen review`` -- editorial feedback on a draft, without rewriting it."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from quillpen.cli.common import build_verified_llm, display_path
from quillpen.config.loader import get_project_root
from quillpen.config.settings import Settings
from quillpen.config.workspace import WorkspacePaths
from quillpen.models.writing import ReviewResult
from quillpen.utils.errors import QuillpenError


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``review`` subcommand."""
    parser = subparsers.add_parser("review", help="Get editorial feedback on a draft")
    parser.add_argument("file", help="Draft to review")
    parser.add_argument(
        "-o", "--output", default=None, help="Output path (default: <draft>-review.md)"
    )


async def _run_review(
    settings: Settings, paths: WorkspacePaths, draft_path: Path, output: str | None
) -> ReviewResult:
    from quillpen.services.writing.writing_service import WritingService

    llm = await build_verified_llm(settings, paths.root)
    return await WritingService(llm, paths).review(
        draft_path, output_path=Path(output).resolve() if output else None
    )


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute ``quillpen review``; return the process exit code."""
    try:
        paths = WorkspacePaths(get_project_root())
        draft_path = Path(args.file).resolve()
        result = asyncio.run(_run_review(settings, paths, draft_path, args.output))
    except QuillpenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Review written to {display_path(paths, result.output_path)}")
    print(f"\nNext: quillpen refine {display_path(paths, draft_path)}")
    return 0
