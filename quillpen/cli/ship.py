"""``quillpen ship`` -- prepare a draft for publication.

A draft whose ``format`` is ``blog`` gets promotional posts for LinkedIn and
Twitter written next to it.  Any other format is finalised for that platform
in place.
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
from quillpen.models.writing import ShipMode, ShipResult
from quillpen.utils.errors import QuillpenError


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``ship`` subcommand."""
    parser = subparsers.add_parser("ship", help="Finalize a draft or write promotional posts")
    parser.add_argument("file", help="Draft to ship")
    parser.add_argument("-i", "--instruct", default=None, help="Custom instruction")


async def _run_ship(
    settings: Settings, paths: WorkspacePaths, draft_path: Path, instruction: str | None
) -> ShipResult:
    from quillpen.services.writing.writing_service import WritingService

    llm = await build_verified_llm(settings, paths.root)
    return await WritingService(llm, paths).ship(draft_path, instruction=instruction)


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute ``quillpen ship``; return the process exit code.

    Exits 1 when nothing could be produced: a failed finalisation, or a blog
    draft for which every promotional post failed.
    """
    try:
        paths = WorkspacePaths(get_project_root())
        result = asyncio.run(_run_ship(settings, paths, Path(args.file).resolve(), args.instruct))
    except QuillpenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if result.mode is ShipMode.FINALIZE:
        print(f"Finalized for {result.format.value}: {display_path(paths, result.source_path)}")
        return 0

    for post in result.posts:
        if post.output_path is not None:
            print(f"  {post.platform.value:<9} {display_path(paths, post.output_path)}")
        else:
            print(f"  {post.platform.value:<9} failed: {post.error}")
    print(f"\nPromotional posts: {result.succeeded} written, {result.failed} failed")
    return 0 if result.succeeded else 1
