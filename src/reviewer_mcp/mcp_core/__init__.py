# mcp_core - Shared library for the reviewer-mcp tools
"""
Shared building blocks used by every tool module.

Modules:
- execution: ProcessRunner (bounded shell execution)
- formatting: summary/full report rendering
- results: ToolResponse helpers
- errors: exception types
- inference: LLM chat providers
- memory: session key-value store

Usage:
    from reviewer_mcp.mcp_core.execution import ProcessRunner
    from reviewer_mcp.mcp_core.formatting import format_exec_result
"""

from .errors import ConfigError, ProviderError, ReviewerError, ToolInputError
from .execution import ExecutionOutcome, ProcessRunner
from .formatting import format_exec_result
from .results import ToolResponse, error_result, safety_result, success_result

__all__ = [
    "ConfigError",
    "ProviderError",
    "ReviewerError",
    "ToolInputError",
    "ExecutionOutcome",
    "ProcessRunner",
    "format_exec_result",
    "ToolResponse",
    "error_result",
    "safety_result",
    "success_result",
]
