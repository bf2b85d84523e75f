"""Custom exception hierarchy for quillpen.

All application exceptions inherit from :class:`QuillpenError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "anthropic", "openai", "ollama") caused the failure.

The hierarchy is organized by concern:

    QuillpenError  (base -- catch-all for any quillpen error)
    +-- ConfigurationError        (workspace / env / missing config)
    |   +-- WorkspaceNotFoundError (no .quillpen/ above the cwd)
    +-- PromptNotFoundError       (no user or bundled prompt template)
    +-- LLMError                  (any completion call failure)
    |   +-- RateLimitError        (provider rate-limit exceeded)
    +-- ProviderUnavailableError  (model server down / unreachable)
    +-- IngestionError            (run-level ingestion precondition)
    +-- WritingError              (draft / refine / review / ship precondition)

Run-level errors (configuration, prompts, ingestion preconditions) are fatal
to a command.  Completion errors raised while processing a single file are
absorbed by the ingestion orchestrator and recorded as that file's outcome.
"""

from __future__ import annotations


class QuillpenError(Exception):
    """Base exception for all quillpen errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  ``__str__`` prefixes the provider name in brackets for log
    output, e.g. ``[anthropic] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Configuration / workspace errors
# ---------------------------------------------------------------------------

class ConfigurationError(QuillpenError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class WorkspaceNotFoundError(ConfigurationError):
    """Raised when no ``.quillpen/`` directory exists above the current path."""

    def __init__(
        self,
        message: str = "Not in a quillpen workspace. Run `quillpen init` first.",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PromptNotFoundError(QuillpenError):
    """Raised when a prompt template exists in neither the workspace nor the package."""

    def __init__(
        self,
        message: str = "Prompt template not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------

class LLMError(QuillpenError):
    """Raised when a completion call fails or returns no usable text."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RateLimitError(LLMError):
    """Raised when a provider rejects a completion because of rate limits."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderUnavailableError(QuillpenError):
    """Raised when the model server cannot be reached at all."""

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Ingestion errors
# ---------------------------------------------------------------------------

class IngestionError(QuillpenError):
    """Raised when an ingestion run cannot start (bad platform, missing directory)."""

    def __init__(
        self,
        message: str = "Ingestion run failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Writing command errors
# ---------------------------------------------------------------------------

class WritingError(QuillpenError):
    """Raised when a writing command has nothing to work on (missing draft, empty notes)."""

    def __init__(
        self,
        message: str = "Writing command failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
