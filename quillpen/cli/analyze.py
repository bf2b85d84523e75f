"""``quillpen analyze`` -- derive ``writing/_style_guide.md`` from published content."""

from __future__ import annotations

import argparse
import asyncio
import sys

from quillpen.cli.common import build_verified_llm, display_path
from quillpen.config.loader import get_project_root
from quillpen.config.settings import Settings
from quillpen.config.workspace import WorkspacePaths
from quillpen.models.writing import StyleAnalysis
from quillpen.utils.errors import QuillpenError


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``analyze`` subcommand."""
    subparsers.add_parser("analyze", help="Generate a style guide from published content")


async def _run_analysis(settings: Settings, paths: WorkspacePaths) -> StyleAnalysis | None:
    from quillpen.services.writing.style_analyzer import StyleAnalyzer, collect_samples

    # No samples means no model call, so skip building a provider.
    if not collect_samples(paths):
        return None
    llm = await build_verified_llm(settings, paths.root)
    return await StyleAnalyzer(llm, paths).analyze()


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute ``quillpen analyze``; return the process exit code."""
    try:
        paths = WorkspacePaths(get_project_root())
        analysis = asyncio.run(_run_analysis(settings, paths))
    except QuillpenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if analysis is None:
        print("No published content found in writing/content/.")
        print("Add some with: quillpen ingest <dir> --platform <platform> --published")
        return 0

    platforms = ", ".join(p.value for p in analysis.platforms)
    print(f"Analyzed {analysis.sample_count} sample(s) from {platforms}")
    print(f"Style guide written to {display_path(paths, analysis.output_path)}")
    return 0
