"""Workspace configuration models.

Mirrors ``.quillpen/config.yaml``::

    author: Jane Writer
    llm:
      provider: anthropic
      model: claude-sonnet-4-20250514
      api_key_env: ANTHROPIC_API_KEY

Secrets never live in this file; ``api_key_env`` names the environment
variable that holds the key.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LLMProviderName = Literal["anthropic", "openai", "ollama"]

DEFAULT_MODELS: dict[str, str] = {
    "anthropic": "claude-sonnet-4-20250514",
    "openai": "gpt-4o-mini",
    "ollama": "llama3.1",
}

DEFAULT_API_KEY_ENVS: dict[str, str] = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "ollama": "",
}


class LLMConfig(BaseModel):
    """Which completion backend to use and where its key comes from."""

    model_config = ConfigDict(frozen=True)

    provider: LLMProviderName = "anthropic"
    model: str = DEFAULT_MODELS["anthropic"]
    api_key_env: str = DEFAULT_API_KEY_ENVS["anthropic"]


class WorkspaceConfig(BaseModel):
    """Per-workspace settings persisted in ``.quillpen/config.yaml``."""

    model_config = ConfigDict(frozen=True)

    author: str = ""
    llm: LLMConfig = Field(default_factory=LLMConfig)
