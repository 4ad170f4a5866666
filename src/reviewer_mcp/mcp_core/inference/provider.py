# provider.py
"""
LLM Provider API - chat access via LiteLLM

Two backends are supported:
- OpenAI (hosted, needs OPENAI_API_KEY)
- Ollama (local server, no key)

Both expose `await provider.chat(system_prompt, user_prompt) -> str` and wrap
any transport or API failure in ProviderError tagged with the provider name.

Usage:
    from reviewer_mcp.mcp_core.inference import call_ai

    text = await call_ai("You are a reviewer.", "Review this diff: ...")
"""

from __future__ import annotations

import os
import threading
from abc import ABC, abstractmethod
from typing import Any

import litellm
import structlog

from ..errors import ConfigError, ProviderError

log = structlog.get_logger("reviewer.inference")

DEFAULT_MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.7
NO_RESPONSE = "No response generated"

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama2"


def _extract_content(response: Any) -> str:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return NO_RESPONSE
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if isinstance(content, str) and content:
        return content
    return NO_RESPONSE


class LLMProvider(ABC):
    """Abstract base class for chat providers."""

    name: str = "LLM"

    def __init__(self, model: str) -> None:
        self.model = model

    @abstractmethod
    def _completion_kwargs(self) -> dict[str, Any]:
        """Provider-specific litellm arguments (model string, auth, limits)."""

    async def chat(self, system_prompt: str, user_prompt: str) -> str:
        """Send one system + user exchange and return the reply text."""
        log.info(
            "inference.request",
            provider=self.name,
            model=self.model,
            prompt_length=len(system_prompt),
            query_length=len(user_prompt),
        )
        try:
            response = await litellm.acompletion(
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **self._completion_kwargs(),
            )
        except Exception as e:
            log.warning("inference.error", provider=self.name, model=self.model, error=str(e))
            raise ProviderError(self.name, e) from e

        content = _extract_content(response)
        log.info("inference.success", provider=self.name, model=self.model, length=len(content))
        return content


class OpenAIProvider(LLMProvider):
    name = "OpenAI"

    def __init__(self, api_key: str, model: str | None = None) -> None:
        if not api_key:
            raise ConfigError("OpenAI API key is required")
        super().__init__(model or DEFAULT_OPENAI_MODEL)
        self.api_key = api_key

    def _completion_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": f"openai/{self.model}",
            "api_key": self.api_key,
        }
        # o3 models reject max_tokens/temperature
        if self.model.startswith("o3"):
            kwargs["max_completion_tokens"] = DEFAULT_MAX_TOKENS
        else:
            kwargs["max_tokens"] = DEFAULT_MAX_TOKENS
            kwargs["temperature"] = DEFAULT_TEMPERATURE
        return kwargs


class OllamaProvider(LLMProvider):
    name = "Ollama"

    def __init__(self, base_url: str | None = None, model: str | None = None) -> None:
        super().__init__(model or DEFAULT_OLLAMA_MODEL)
        self.base_url = (base_url or DEFAULT_OLLAMA_BASE_URL).rstrip("/")

    def _completion_kwargs(self) -> dict[str, Any]:
        return {
            "model": f"ollama_chat/{self.model}",
            "api_base": self.base_url,
            "stream": False,
        }


def create_provider(
    provider: str,
    model: str | None = None,
    api_key: str | None = None,
    base_url: str | None = None,
) -> LLMProvider:
    """Build a provider from explicit settings."""
    if provider == "openai":
        if not api_key:
            raise ConfigError("OpenAI provider requires an API key")
        return OpenAIProvider(api_key, model)
    if provider == "ollama":
        return OllamaProvider(base_url, model)
    raise ConfigError(f"Unknown AI provider: {provider}")


_provider: LLMProvider | None = None
_provider_lock = threading.Lock()


def get_llm_provider() -> LLMProvider:
    """Get the process-wide provider, built from project config on first use."""
    global _provider

    if _provider is not None:
        return _provider

    from reviewer_mcp.config.settings import load_project_config

    with _provider_lock:
        if _provider is None:
            config = load_project_config()
            is_ollama = config.ai_provider == "ollama"
            _provider = create_provider(
                config.ai_provider,
                model=config.ollama_model if is_ollama else config.openai_model,
                api_key=os.environ.get("OPENAI_API_KEY"),
                base_url=config.ollama_base_url,
            )
            log.info("inference.provider_ready", provider=_provider.name, model=_provider.model)
    return _provider


def reset_provider() -> None:
    """Drop the cached provider (used by tests and config reloads)."""
    global _provider
    with _provider_lock:
        _provider = None


async def call_ai(system_prompt: str, user_prompt: str) -> str:
    provider = get_llm_provider()
    return await provider.chat(system_prompt, user_prompt)


__all__ = [
    "LLMProvider",
    "OpenAIProvider",
    "OllamaProvider",
    "create_provider",
    "get_llm_provider",
    "reset_provider",
    "call_ai",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "NO_RESPONSE",
]
