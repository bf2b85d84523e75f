"""LLM provider adapters.

Three concrete implementations of ILLMProvider (quillpen/interfaces/llm_provider.py):
    - AnthropicLLMProvider -- Claude via the Messages API
    - OpenAILLMProvider    -- gpt-4o-mini (also any OpenAI-compatible API)
    - OllamaLLMProvider    -- local models via an Ollama server

Commands obtain one through :func:`quillpen.providers.llm.factory.build_llm_provider`,
which reads the workspace config and environment settings.  The adapters are
not re-exported here, so importing the factory loads no SDK until a provider
is actually built.
"""
