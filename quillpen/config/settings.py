"""Application settings loaded from environment variables via pydantic-settings.

Settings are read from two sources, in priority order:

  1. **Environment variables** -- e.g. ``ANTHROPIC_API_KEY=sk-ant-...``
  2. **.env file** -- ``key=value`` lines in the working directory

Field ``anthropic_api_key`` maps to env var ``ANTHROPIC_API_KEY`` and so on.
Defaults apply when neither source sets a value.

Per-workspace choices (author, which provider and model) live in
``.quillpen/config.yaml`` instead; see :mod:`quillpen.config.loader`.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """quillpen process settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # === LLM Providers ===
    # Empty string = "not configured".  A workspace's ``llm.api_key_env``
    # takes precedence over these when that variable is set.
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoint (TogetherAI, Groq, ...)
    ollama_base_url: str = "http://localhost:11434"
    # Overrides ``llm.model`` from the workspace config; aliases allowed.
    quillpen_model: str = ""
    # Seconds before an OpenAI-compatible completion is abandoned.
    llm_timeout: float = 60.0

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_llm_providers(self) -> list[str]:
        """Return LLM provider names that have credentials or a URL configured."""
        providers: list[str] = []
        if self.anthropic_api_key:
            providers.append("anthropic")
        if self.openai_api_key:
            providers.append("openai")
        if self.ollama_base_url:
            providers.append("ollama")
        return providers
