"""
mcp_core/errors.py
Exception types shared by the tools.

Three failure kinds reach a tool caller:
- launch/transport failures never raise; they become an ExecutionOutcome
- safety rejections never raise; they are normal responses
- everything below raises and is rendered as an MCP error result
"""

from __future__ import annotations


class ReviewerError(Exception):
    """Base class for reviewer-mcp errors."""


class ToolInputError(ReviewerError):
    """A tool argument is missing, unknown or out of range."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"Invalid '{field}': {message}")


class ProviderError(ReviewerError):
    """An LLM provider call failed (transport or API error)."""

    def __init__(self, provider: str, original: BaseException | str) -> None:
        self.provider = provider
        detail = str(original) or "Unknown error"
        super().__init__(f"{provider} API call failed: {detail}")


class ConfigError(ReviewerError):
    """Configuration is unreadable, invalid, or missing a required secret."""


__all__ = ["ReviewerError", "ToolInputError", "ProviderError", "ConfigError"]
