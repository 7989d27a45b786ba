"""
Hosted LLM access for HireFlow.

Every component that prompts a model goes through the `LLMProvider`
interface defined in `providers`, so the Gemini and OpenAI backends and
the offline placeholder are interchangeable.
"""

from .providers import (  # noqa: F401
    GeminiProvider,
    LLMProvider,
    LLMProviderError,
    OpenAIProvider,
    PlaceholderProvider,
    get_default_provider,
)
