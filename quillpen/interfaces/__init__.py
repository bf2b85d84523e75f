"""Public interface definitions for external service providers.

The model backend is accessed exclusively through
:class:`~quillpen.interfaces.llm_provider.ILLMProvider`.
"""

from quillpen.interfaces.llm_provider import ILLMProvider

__all__ = ["ILLMProvider"]
