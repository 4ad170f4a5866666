"""
tools/base.py
Composition helpers shared by the tool modules.

- ExecTool: builder -> ProcessRunner -> formatter
- AITool: prompt builder -> LLM provider

A tool is a builder value plus one of these runners; there is no tool class
hierarchy.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Generic, Protocol, TypeVar

import structlog
from mcp.server.fastmcp.exceptions import ToolError

from ..config.settings import load_project_config
from ..mcp_core.errors import ReviewerError, ToolInputError
from ..mcp_core.execution import ICommandBuilder, IProcessRunner, ProcessRunner
from ..mcp_core.formatting import format_exec_result
from ..mcp_core.inference import call_ai
from ..mcp_core.results import ToolResponse, error_result, success_result

log = structlog.get_logger("reviewer.tools")

ArgsT = TypeVar("ArgsT")


def default_runner() -> ProcessRunner:
    """A runner using the configured command timeout."""
    return ProcessRunner(timeout=load_project_config().command_timeout)


class ExecTool(Generic[ArgsT]):
    """Run whatever command `builder` produces and format the outcome."""

    def __init__(self, builder: ICommandBuilder, runner: IProcessRunner | None = None) -> None:
        self.builder = builder
        self._runner = runner

    @property
    def runner(self) -> IProcessRunner:
        return self._runner or default_runner()

    async def execute(self, args: ArgsT) -> ToolResponse:
        action = self.builder.action_name
        try:
            command = self.builder.build_command(args)
        except ToolInputError:
            raise
        except ReviewerError as e:
            return error_result(action, e)

        outcome = await self.runner.run(command)
        force_full = self.builder.wants_full_report(args)
        return success_result(format_exec_result(outcome, action, force_full=force_full))


class PromptBuilder(Protocol[ArgsT]):
    action_name: str

    def system_prompt(self, args: ArgsT) -> str: ...

    def user_prompt(self, args: ArgsT) -> str: ...


ChatFn = Callable[[str, str], Awaitable[str]]


class AITool(Generic[ArgsT]):
    """Send the builder's prompts to the LLM and return its reply."""

    def __init__(self, builder: PromptBuilder[Any], chat: ChatFn | None = None) -> None:
        self.builder = builder
        self._chat = chat

    async def execute(self, args: ArgsT) -> ToolResponse:
        chat = self._chat or call_ai
        try:
            reply = await chat(self.builder.system_prompt(args), self.builder.user_prompt(args))
        except ToolInputError:
            raise
        except ReviewerError as e:
            log.warning("tool.ai_failed", action=self.builder.action_name, error=str(e))
            return error_result(self.builder.action_name, e)
        return success_result(reply)


async def respond(call: Awaitable[ToolResponse]) -> str:
    """Await a tool call and map it onto the MCP result shape.

    Input errors and error responses raise ToolError so the client receives
    an `isError` result; everything else is returned as text.
    """
    try:
        response = await call
    except ToolInputError as e:
        raise ToolError(str(e)) from e
    if response.is_error:
        raise ToolError(response.text)
    return response.text


__all__ = ["ExecTool", "AITool", "PromptBuilder", "default_runner", "respond"]
