"""Utility modules for quillpen.

Available utility modules (all re-exported here for convenience):

- **errors** -- Domain-specific exception hierarchy rooted at QuillpenError;
  run-level failures and per-file completion failures get their own
  subclasses so callers can handle them at the right level.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **text** -- Word counting and filename slugs.
"""

# -- Domain exception hierarchy --------------------------------------------
from quillpen.utils.errors import (
    ConfigurationError,
    IngestionError,
    LLMError,
    PromptNotFoundError,
    ProviderUnavailableError,
    QuillpenError,
    RateLimitError,
    WorkspaceNotFoundError,
)

# -- Structured logging setup ----------------------------------------------
from quillpen.utils.logging import configure_logging, get_logger

# -- Text helpers ----------------------------------------------------------
from quillpen.utils.text import count_words, slugify

__all__ = [
    "ConfigurationError",
    "IngestionError",
    "LLMError",
    "PromptNotFoundError",
    "ProviderUnavailableError",
    "QuillpenError",
    "RateLimitError",
    "WorkspaceNotFoundError",
    "configure_logging",
    "count_words",
    "get_logger",
    "slugify",
]
