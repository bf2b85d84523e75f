"""Concrete adapters for external services (currently LLM backends)."""
