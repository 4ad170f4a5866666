# tools/tester.py
"""
Test Runner

Runs the project's test command.

- With a file pattern: `<testCommand> <pattern>` for a focused run
- Without one: the configured coverage command, and the report always carries
  the full output, since the caller asked for the whole picture

Usage:
    from reviewer_mcp.tools.tester import run_tests, TestRunnerOptions
    response = await run_tests(TestRunnerOptions(pattern="tests/unit"))
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import Any, Callable

from ..config.models import ProjectConfig
from ..config.settings import load_project_config
from ..mcp_core.results import ToolResponse
from .base import ExecTool, respond


@dataclass(frozen=True, slots=True)
class TestRunnerOptions:
    __test__ = False

    pattern: str | None = None


@dataclass(frozen=True, slots=True)
class TestCommandBuilder:
    __test__ = False

    config_loader: Callable[[], ProjectConfig] = field(default=load_project_config)
    action_name: str = "Test"

    def build_command(self, args: TestRunnerOptions) -> str:
        config = self.config_loader()
        if not args.pattern:
            return config.coverage_command
        return f"{config.test_command} {shlex.quote(args.pattern)}"

    def wants_full_report(self, args: TestRunnerOptions) -> bool:
        return not args.pattern


_tool: ExecTool[TestRunnerOptions] = ExecTool(TestCommandBuilder())


async def run_tests(args: TestRunnerOptions) -> ToolResponse:
    return await _tool.execute(args)


def register_tester_tools(mcp: Any) -> None:
    """Register the test runner with the MCP server."""

    @mcp.tool(name="run_tests")
    async def run_tests_tool(pattern: str | None = None) -> str:
        """
        Run the project's tests.

        Args:
            pattern: Test file pattern to run. Omit it to run the full suite
                with coverage and get the complete report.

        Returns:
            One-line summary on success, full output on failure or coverage runs
        """
        return await respond(run_tests(TestRunnerOptions(pattern=pattern)))


__all__ = ["TestRunnerOptions", "TestCommandBuilder", "run_tests", "register_tester_tools"]
