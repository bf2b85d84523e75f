"""Helpers shared by the commands that call the LLM."""

from __future__ import annotations

from pathlib import Path

from quillpen.config.loader import load_workspace_config
from quillpen.config.settings import Settings
from quillpen.config.workspace import WorkspacePaths
from quillpen.interfaces.llm_provider import ILLMProvider
from quillpen.utils.errors import ConfigurationError


async def build_verified_llm(settings: Settings, root: Path) -> ILLMProvider:
    """Build the workspace's provider and confirm it accepts our credentials.

    Raises:
        ConfigurationError: If the config is invalid, the key is missing, or
            the provider rejects the credentials.
    """
    # Deferred so commands that never call a model do not load an SDK.
    from quillpen.providers.llm.factory import build_llm_provider

    llm = build_llm_provider(settings, load_workspace_config(root))
    if not await llm.validate_credentials():
        raise ConfigurationError(
            f"Could not verify credentials for model {llm.get_model_name()}",
            provider_name=llm.get_provider_name(),
        )
    return llm


def display_path(paths: WorkspacePaths, path: Path) -> str:
    """Render a file path relative to the workspace root when it is inside it."""
    try:
        return path.resolve().relative_to(paths.root.resolve()).as_posix()
    except ValueError:
        return str(path)
