"""quillpen command-line entry point.

Usage::

    quillpen init --author "Jane Writer"
    quillpen ingest --platform blog
    quillpen --log-level DEBUG ingest ./exports --platform substack --published
    quillpen draft writing/raw/idea.md --format linkedin
    quillpen review writing/drafts/idea.md
    quillpen refine
    quillpen ship writing/drafts/idea.md

Also runnable as ``python -m quillpen.cli``.  Structured logs go to stderr;
command output goes to stdout.
"""

from __future__ import annotations

import argparse
import sys

from quillpen import __version__
from quillpen.cli import analyze as analyze_command
from quillpen.cli import clean as clean_command
from quillpen.cli import draft as draft_command
from quillpen.cli import ingest as ingest_command
from quillpen.cli import init as init_command
from quillpen.cli import refine as refine_command
from quillpen.cli import review as review_command
from quillpen.cli import ship as ship_command
from quillpen.config.settings import Settings
from quillpen.utils.logging import configure_logging, get_logger

_COMMANDS = {
    "init": init_command.run,
    "ingest": ingest_command.run,
    "draft": draft_command.run,
    "review": review_command.run,
    "refine": refine_command.run,
    "ship": ship_command.run,
    "analyze": analyze_command.run,
    "clean": clean_command.run,
}


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level argparse parser with one subparser per command."""
    parser = argparse.ArgumentParser(
        prog="quillpen",
        description="Writing assistant: ingest, organise and publish your writing.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level for stderr output (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--json-logs",
        dest="json_logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")
    init_command.add_parser(subparsers)
    ingest_command.add_parser(subparsers)
    draft_command.add_parser(subparsers)
    review_command.add_parser(subparsers)
    refine_command.add_parser(subparsers)
    ship_command.add_parser(subparsers)
    analyze_command.add_parser(subparsers)
    clean_command.add_parser(subparsers)
    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    # Load process configuration from environment variables and .env file.
    settings = Settings()
    configure_logging(
        log_level=args.log_level or settings.log_level,
        json_output=args.json_logs,
        app_env=settings.app_env,
    )
    logger = get_logger(__name__)
    logger.debug("command_started", command=args.command)

    try:
        return _COMMANDS[args.command](args, settings)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as exc:  # noqa: BLE001
        logger.exception("command_failed", command=args.command)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
