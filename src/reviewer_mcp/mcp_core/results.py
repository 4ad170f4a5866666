"""
mcp_core/results.py
Tool response values.

Every tool implementation returns a ToolResponse. The server layer turns
`is_error=True` into an MCP error result; everything else is plain text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class ToolResponse:
    text: str
    is_error: bool = False


def success_result(text: str) -> ToolResponse:
    return ToolResponse(text=text)


def error_result(action: str, error: BaseException | str) -> ToolResponse:
    """`Error <action>: <message>` flagged as an error."""
    message = str(error) or "Unknown error"
    return ToolResponse(text=f"Error {action}: {message}", is_error=True)


def safety_result(title: str, message: str, suggestions: Sequence[str] = ()) -> ToolResponse:
    """A declined action.

    Not an error: the request was well-formed and the policy chose not to
    run it, so the caller gets remediation hints instead.
    """
    text = f"⚠️ SAFETY: {title} - {message}"
    if suggestions:
        text += f" | Try: {'; '.join(suggestions)}"
    return ToolResponse(text=text)


__all__ = ["ToolResponse", "success_result", "error_result", "safety_result"]
