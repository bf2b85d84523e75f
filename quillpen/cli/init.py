"""``quillpen init`` -- create a workspace in the current directory."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import get_args

from quillpen.config.settings import Settings
from quillpen.config.workspace import init_workspace
from quillpen.models.workspace import (
    DEFAULT_API_KEY_ENVS,
    DEFAULT_MODELS,
    LLMConfig,
    LLMProviderName,
    WorkspaceConfig,
)
from quillpen.utils.errors import QuillpenError


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``init`` subcommand."""
    parser = subparsers.add_parser("init", help="Initialize a quillpen workspace here")
    parser.add_argument("--author", default="", help="Your name, recorded in config.yaml")
    parser.add_argument(
        "--provider",
        choices=list(get_args(LLMProviderName)),
        default="anthropic",
        help="LLM provider (default: anthropic)",
    )
    parser.add_argument("--model", default=None, help="Model name (default depends on provider)")
    parser.add_argument(
        "--api-key-env",
        dest="api_key_env",
        default=None,
        help="Environment variable holding the API key",
    )


def _build_config(args: argparse.Namespace) -> WorkspaceConfig:
    provider = args.provider
    return WorkspaceConfig(
        author=args.author,
        llm=LLMConfig(
            provider=provider,
            model=args.model or DEFAULT_MODELS[provider],
            api_key_env=(
                args.api_key_env
                if args.api_key_env is not None
                else DEFAULT_API_KEY_ENVS[provider]
            ),
        ),
    )


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute ``quillpen init``; return the process exit code."""
    config = _build_config(args)
    try:
        result = init_workspace(Path.cwd(), config)
    except (QuillpenError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if result.already_initialized:
        print(f"Already in a quillpen workspace ({result.root}).")
        print("  Run commands from here or delete .quillpen/ to reinitialize.")
        return 0

    print("Creating workspace...")
    for entry in result.created:
        print(f"  {entry}")

    print("\nWorkspace initialized!\n")
    print("Next steps:")
    print("  1. Add existing writing: drop files in writing/import/, then run")
    print("     quillpen ingest --platform blog")
    print("  2. Or import from a specific directory:")
    print("     quillpen ingest ./my-posts --platform blog")
    print("  3. Review drafts in writing/drafts/, then move them to writing/content/<platform>/")

    key_env = config.llm.api_key_env
    if key_env and config.llm.provider not in settings.get_available_llm_providers():
        print(f"\nRemember to set {key_env} in your environment.")
    return 0
