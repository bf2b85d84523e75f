"""``quillpen draft`` -- turn notes into a structured draft.

Usage::

    quillpen draft writing/raw/idea.md
    quillpen draft notes.md --format linkedin -i "Keep it under 200 words"
    pbpaste | quillpen draft --stdin
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
from quillpen.models.ingestion import Platform
from quillpen.models.writing import DraftResult
from quillpen.utils.errors import QuillpenError


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``draft`` subcommand."""
    parser = subparsers.add_parser("draft", help="Turn notes into a structured draft")
    parser.add_argument("file", nargs="?", default=None, help="Notes file")
    parser.add_argument("--stdin", action="store_true", help="Read notes from standard input")
    parser.add_argument("-o", "--output", default=None, help="Output path")
    parser.add_argument(
        "-f",
        "--format",
        choices=Platform.values(),
        default=Platform.BLOG.value,
        help="Target format (default: blog)",
    )
    parser.add_argument("-i", "--instruct", default=None, help="Custom instruction")


async def _run_draft(
    settings: Settings,
    paths: WorkspacePaths,
    notes: str,
    args: argparse.Namespace,
    source_path: Path | None,
) -> DraftResult:
    from quillpen.services.writing.writing_service import WritingService

    llm = await build_verified_llm(settings, paths.root)
    return await WritingService(llm, paths).draft(
        notes,
        fmt=args.format,
        source_path=source_path,
        instruction=args.instruct,
        output_path=Path(args.output).resolve() if args.output else None,
    )


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute ``quillpen draft``; return the process exit code."""
    if args.stdin == bool(args.file):
        print("Error: Provide a notes file or --stdin (not both)", file=sys.stderr)
        return 1

    source_path: Path | None = None
    if args.stdin:
        notes = sys.stdin.read()
    else:
        source_path = Path(args.file).resolve()
        if not source_path.is_file():
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            return 1
        notes = source_path.read_text(encoding="utf-8")

    try:
        paths = WorkspacePaths(get_project_root())
        result = asyncio.run(_run_draft(settings, paths, notes, args, source_path))
    except QuillpenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    output = display_path(paths, result.output_path)
    print(f"Draft written to {output} ({result.word_count} words)")
    print(f"\nNext: quillpen review {output}")
    return 0
