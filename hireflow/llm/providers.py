"""
LLM provider abstractions.

This module defines the common interface HireFlow uses to talk to a
hosted large language model.  Both the résumé parser and the screening
agents only ever need "prompt in, text out", so providers expose a
single :meth:`LLMProvider.generate` method.  Concrete implementations
are provided for Gemini (Google Generative AI) and OpenAI.  A
placeholder implementation is used when no API keys are configured; it
never touches the network and callers detect it through
``is_placeholder`` to switch to their heuristic code paths.

The default Gemini model is ``gemini‑1.5‑flash``.  To use a different
model set ``GEMINI_MODEL`` (or ``OPENAI_MODEL`` for OpenAI), or the
``llm.model`` configuration key.
"""

from __future__ import annotations

import os
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class LLMProviderError(RuntimeError):
    """Raised when a hosted model call fails or returns nothing usable."""


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    is_placeholder = False
    name = "llm"

    @abstractmethod
    def generate(self, prompt: str, temperature: Optional[float] = None) -> str:
        """Send ``prompt`` to the model and return its text answer.

        Args:
            prompt: Complete prompt text.
            temperature: Sampling temperature, or ``None`` for the
                provider default.

        Returns:
            The model's answer as plain text.

        Raises:
            LLMProviderError: If the call fails.
        """
        raise NotImplementedError


class PlaceholderProvider(LLMProvider):
    """Fallback provider that does not call any external API."""

    is_placeholder = True
    name = "placeholder"

    def generate(self, prompt: str, temperature: Optional[float] = None) -> str:
        return ""


class OpenAIProvider(LLMProvider):
    """Provider that uses the OpenAI chat completions API."""

    name = "openai"

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        try:
            from openai import OpenAI  # type: ignore
        except ImportError as exc:
            raise RuntimeError(
                "openai package is required for OpenAIProvider. Install it via pip."
            ) from exc
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL
        if not self.api_key:
            raise ValueError("OPENAI_API_KEY not provided")
        self.client = OpenAI(api_key=self.api_key)

    def generate(self, prompt: str, temperature: Optional[float] = None) -> str:
        logger.debug("Sending prompt to OpenAI (%s): %s", self.model, prompt[:200])
        kwargs = {}
        if temperature is not None:
            kwargs["temperature"] = temperature
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                **kwargs,
            )
            content = response.choices[0].message.content
        except Exception as exc:  # noqa: BLE001
            logger.exception("OpenAI API call failed: %s", exc)
            raise LLMProviderError(f"OpenAI API call failed: {exc}") from exc
        if not content:
            raise LLMProviderError("OpenAI returned an empty response")
        return content


class GeminiProvider(LLMProvider):
    """Provider that uses Google Generative AI (Gemini) via google‑generativeai."""

    name = "gemini"

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        try:
            import google.generativeai as genai  # type: ignore
        except ImportError as exc:
            raise RuntimeError(
                "google-generativeai package is required for GeminiProvider. Install it via pip."
            ) from exc
        self.genai = genai
        # API key resolution: explicit argument > env variables
        self.api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        self.model_name = model or os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY/GOOGLE_API_KEY not provided")
        self.genai.configure(api_key=self.api_key)
        try:
            self.model = self.genai.GenerativeModel(self.model_name)
        except Exception as exc:
            raise RuntimeError(f"Failed to load Gemini model {self.model_name}: {exc}")

    def generate(self, prompt: str, temperature: Optional[float] = None) -> str:
        logger.debug("Sending prompt to Gemini (%s): %s", self.model_name, prompt[:200])
        generation_config = {"temperature": temperature} if temperature is not None else None
        try:
            response = self.model.generate_content(prompt, generation_config=generation_config)
            content = response.text
        except Exception as exc:  # noqa: BLE001
            logger.exception("Gemini API call failed: %s", exc)
            raise LLMProviderError(f"Gemini API call failed: {exc}") from exc
        if not content:
            raise LLMProviderError("Gemini returned an empty response")
        return content


def _build(name: str, model: Optional[str]) -> LLMProvider:
    if name == "gemini":
        return GeminiProvider(os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"), model)
    if name == "openai":
        return OpenAIProvider(os.getenv("OPENAI_API_KEY"), model)
    return PlaceholderProvider()


def get_default_provider(config: Optional[Dict[str, object]] = None) -> LLMProvider:
    """Return an LLMProvider instance based on configuration and API keys.

    The resolution order is:

    1. The ``LLM_PROVIDER`` environment variable, else the ``llm.provider``
       configuration key, set to ``"gemini"``, ``"openai"`` or
       ``"placeholder"`` selects that provider.  If the selected provider
       cannot be initialised (e.g. missing API key or package), a
       warning is logged and the automatic detection logic is used.
    2. If ``GEMINI_API_KEY`` or ``GOOGLE_API_KEY`` is present, return
       :class:`GeminiProvider`.
    3. If ``OPENAI_API_KEY`` is present, return :class:`OpenAIProvider`.
    4. Otherwise, return :class:`PlaceholderProvider`.

    Args:
        config: Optional configuration mapping as returned by
            :func:`hireflow.config.load_config`.

    Returns:
        An instance of :class:`LLMProvider`.
    """
    llm_config = (config or {}).get("llm") or {}
    model = llm_config.get("model")
    preferred = os.getenv("LLM_PROVIDER") or llm_config.get("provider") or "auto"
    pref = str(preferred).lower()
    if pref == "placeholder":
        logger.info("LLM provider set to placeholder; agents will use heuristics")
        return PlaceholderProvider()
    if pref in ("gemini", "openai"):
        try:
            return _build(pref, model)
        except Exception as exc:  # noqa: BLE001
            logger.warning("LLM provider %s requested but failed to initialise: %s", pref, exc)
    elif pref != "auto":
        logger.warning("Unknown LLM provider '%s'; falling back to automatic detection", preferred)

    if os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"):
        try:
            return _build("gemini", model)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to initialise GeminiProvider: %s", exc)
    if os.getenv("OPENAI_API_KEY"):
        try:
            return _build("openai", model)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to initialise OpenAIProvider: %s", exc)
    logger.info("No LLM API keys found; using placeholder provider")
    return PlaceholderProvider()
