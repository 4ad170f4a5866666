"""
inference - LLM chat providers.

Usage:
    from reviewer_mcp.mcp_core.inference import get_llm_provider, call_ai
"""

from .provider import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    NO_RESPONSE,
    LLMProvider,
    OllamaProvider,
    OpenAIProvider,
    call_ai,
    create_provider,
    get_llm_provider,
    reset_provider,
)

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
