"""Abstract base class for LLM completion providers.

Defines the contract for any large-language-model backend quillpen uses
to transform text.  Implementations wrap the Anthropic API, an
OpenAI-compatible API, or a local Ollama server.  Every call-site depends
only on this interface, so tests inject a mock and never touch the network.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations: AnthropicLLMProvider, OpenAILLMProvider, OllamaLLMProvider
# Located in: quillpen/providers/llm/
class ILLMProvider(ABC):
    """Contract for text-completion services used by quillpen commands."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 4096,
    ) -> str:
        """Generate a text completion from the model.

        Parameters
        ----------
        system_prompt:
            The system/instruction message that sets the model's behaviour.
        user_prompt:
            The user-facing prompt containing the actual request or data.
        temperature:
            Sampling temperature (0.0 = deterministic, 1.0 = creative).
        max_tokens:
            Upper bound on the number of tokens in the response.

        Returns
        -------
        str
            The model's text response.

        Raises
        ------
        quillpen.utils.errors.LLMError
            If the API call fails or returns no text.
        quillpen.utils.errors.RateLimitError
            If the provider rejected the request because of rate limits.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this LLM provider.

        Example return values: ``"anthropic"``, ``"openai-compatible"``.
        """

    @abstractmethod
    def get_model_name(self) -> str:
        """Return the model identifier completions are requested from."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured.

        Implementations should verify that credentials are present without
        making an inference call.
        """

    @abstractmethod
    async def validate_credentials(self) -> bool:
        """Perform a lightweight API call to confirm credentials are valid.

        Returns
        -------
        bool
            ``True`` if the provider accepted the credentials; ``False``
            otherwise.  Unlike :meth:`is_available`, this method actively
            contacts the remote service.
        """
