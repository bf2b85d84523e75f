"""``quillpen ingest`` -- move raw markdown into the writing corpus.

Usage::

    quillpen ingest --platform blog
    quillpen ingest ~/exports/medium --platform blog --published

Every ``*.md`` file under the directory (default ``writing/import/``) that
has no ``title`` in its frontmatter is sent to the configured LLM for
metadata extraction, written to ``writing/drafts/`` (or
``writing/content/<platform>/`` with ``--published``) as
``<date>_<slug>.md``, and removed from the source directory.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from quillpen.cli.common import build_verified_llm
from quillpen.config.loader import get_project_root
from quillpen.config.settings import Settings
from quillpen.config.workspace import WorkspacePaths
from quillpen.models.ingestion import IngestionSummary, OutcomeKind, Platform
from quillpen.utils.errors import QuillpenError


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``ingest`` subcommand."""
    parser = subparsers.add_parser(
        "ingest",
        help="Ingest raw markdown files with LLM-extracted metadata",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Directory to ingest (default: writing/import/)",
    )
    parser.add_argument(
        "--platform",
        required=True,
        help=f"Target platform ({', '.join(Platform.values())})",
    )
    parser.add_argument(
        "--published",
        action="store_true",
        help="File into writing/content/<platform>/ instead of writing/drafts/",
    )


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _print_outcomes(summary: IngestionSummary) -> None:
    for outcome in summary.outcomes:
        name = outcome.source_path.name
        if outcome.kind is OutcomeKind.INGESTED and outcome.output_path is not None:
            print(f"  ingested  {name} -> {outcome.output_path.name}")
        elif outcome.kind is OutcomeKind.SKIPPED:
            print(f"  skipped   {name} ({outcome.reason})")
        else:
            print(f"  failed    {name}")
            print(f"            {outcome.error}")


def _print_summary(
    summary: IngestionSummary,
    paths: WorkspacePaths,
    platform: Platform,
    published: bool,
) -> None:
    print("\nSummary")
    print(f"  Ingested: {summary.ingested}")
    print(f"  Skipped:  {summary.skipped}")
    print(f"  Failed:   {summary.failed}")

    if summary.ingested > 0:
        destination = paths.relative(summary.destination_dir)
        if published:
            print(f"\nFiles are ready for analysis in {destination}")
        else:
            content = paths.relative(paths.content_dir(platform))
            print(f"\nNext: review files in {destination}, then publish to {content}")


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------


async def _run_ingestion(
    settings: Settings,
    source_dir: Path,
    destination_dir: Path,
    platform: Platform,
    root: Path,
) -> IngestionSummary:
    # Service imports are deferred so ``quillpen init`` stays fast.
    from quillpen.services.ingestion.ingestion_service import IngestionService
    from quillpen.services.ingestion.metadata_extractor import MetadataExtractor
    from quillpen.services.prompts import load_prompt

    prompt_template = load_prompt("ingest", root=root)
    # Bad credentials would fail every file the same way; stop before touching any.
    llm = await build_verified_llm(settings, root)

    service = IngestionService(extractor=MetadataExtractor(llm, prompt_template))
    return await service.ingest_directory(source_dir, destination_dir, platform)


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute ``quillpen ingest``; return the process exit code."""
    try:
        platform = Platform(args.platform)
    except ValueError:
        print(f"Error: Invalid platform: {args.platform}", file=sys.stderr)
        print(f"Valid options: {', '.join(Platform.values())}", file=sys.stderr)
        return 1

    try:
        root = get_project_root()
        paths = WorkspacePaths(root)
        source_dir = Path(args.directory).resolve() if args.directory else paths.import_dir
        if not source_dir.is_dir():
            print(f"Error: Directory not found: {source_dir}", file=sys.stderr)
            return 1
        destination_dir = paths.ingest_destination(platform, args.published)

        summary = asyncio.run(
            _run_ingestion(settings, source_dir, destination_dir, platform, root)
        )
    except QuillpenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if summary.total == 0:
        print("No markdown files found in directory.")
        return 0

    print(f"Ingested {summary.total} file(s) into {paths.relative(destination_dir)}\n")
    _print_outcomes(summary)
    _print_summary(summary, paths, platform, args.published)
    return 0
