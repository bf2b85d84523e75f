"""Construct the configured LLM provider.

Provider choice comes from the workspace's ``llm.provider``.  The model is
``QUILLPEN_MODEL`` when set, otherwise ``llm.model``; friendly aliases such as
``sonnet`` or ``haiku-3.5`` resolve to full Anthropic identifiers.  The API
key is read from the environment variable named by ``llm.api_key_env`` and
falls back to the provider's own :class:`Settings` field.

SDK imports are deferred into the branches so that only the selected
provider's client library is loaded.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

import structlog

from quillpen.config.settings import Settings
from quillpen.interfaces.llm_provider import ILLMProvider
from quillpen.models.workspace import DEFAULT_API_KEY_ENVS, WorkspaceConfig
from quillpen.utils.errors import ConfigurationError

logger = structlog.get_logger(logger_name=__name__)

ANTHROPIC_MODEL_ALIASES: dict[str, str] = {
    # Claude 4
    "claude-sonnet-4": "claude-sonnet-4-20250514",
    "claude-opus-4": "claude-opus-4-20250514",
    "sonnet-4": "claude-sonnet-4-20250514",
    "opus-4": "claude-opus-4-20250514",
    # Claude 3.5
    "claude-sonnet-3.5": "claude-3-5-sonnet-20241022",
    "claude-haiku-3.5": "claude-3-5-haiku-20241022",
    "sonnet-3.5": "claude-3-5-sonnet-20241022",
    "haiku-3.5": "claude-3-5-haiku-20241022",
    # Claude 3
    "claude-opus-3": "claude-3-opus-20240229",
    "claude-haiku-3": "claude-3-haiku-20240307",
    "opus-3": "claude-3-opus-20240229",
    "haiku-3": "claude-3-haiku-20240307",
    # Latest of each family
    "sonnet": "claude-sonnet-4-20250514",
    "opus": "claude-opus-4-20250514",
    "haiku": "claude-3-5-haiku-20241022",
}


def resolve_model(settings: Settings, config: WorkspaceConfig) -> str:
    """Return the effective model identifier for *config*'s provider."""
    model = (settings.quillpen_model or config.llm.model).strip()
    if config.llm.provider == "anthropic":
        return ANTHROPIC_MODEL_ALIASES.get(model.lower(), model)
    return model


def resolve_api_key(
    settings: Settings,
    config: WorkspaceConfig,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the API key for *config*'s provider, or ``""`` when none is set."""
    env = os.environ if environ is None else environ
    key_env = config.llm.api_key_env or DEFAULT_API_KEY_ENVS[config.llm.provider]
    if key_env and env.get(key_env, "").strip():
        return env[key_env].strip()
    if config.llm.provider == "anthropic":
        return settings.anthropic_api_key
    if config.llm.provider == "openai":
        return settings.openai_api_key
    return ""


def build_llm_provider(
    settings: Settings,
    config: WorkspaceConfig,
    environ: Mapping[str, str] | None = None,
) -> ILLMProvider:
    """Build the provider selected by the workspace config.

    Raises
    ------
    ConfigurationError
        If a keyed provider (Anthropic, OpenAI) has no API key.
    """
    provider_name = config.llm.provider
    model = resolve_model(settings, config)

    if provider_name == "ollama":
        from quillpen.providers.llm.ollama_provider import OllamaLLMProvider

        provider: ILLMProvider = OllamaLLMProvider(settings=settings, model=model)
    else:
        api_key = resolve_api_key(settings, config, environ)
        if not api_key:
            key_env = config.llm.api_key_env or DEFAULT_API_KEY_ENVS[provider_name]
            raise ConfigurationError(
                f"API key not found. Set the {key_env} environment variable.",
                provider_name=provider_name,
            )
        if provider_name == "anthropic":
            from quillpen.providers.llm.anthropic_provider import AnthropicLLMProvider

            provider = AnthropicLLMProvider(settings=settings, model=model, api_key=api_key)
        else:
            from quillpen.providers.llm.openai_provider import OpenAILLMProvider

            provider = OpenAILLMProvider(settings=settings, model=model, api_key=api_key)

    logger.debug(
        "llm_provider_selected",
        provider=provider.get_provider_name(),
        model=provider.get_model_name(),
    )
    return provider
