# tools/linter.py
"""
Linter

Runs the configured lint command, optionally with `--fix` and an explicit
file list: `<lintCommand> [--fix] [files...]`.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import Any, Callable

from ..config.models import ProjectConfig
from ..config.settings import load_project_config
from ..mcp_core.results import ToolResponse
from .base import ExecTool, respond

FIX_FLAG = "--fix"


@dataclass(frozen=True, slots=True)
class LinterOptions:
    fix: bool = False
    files: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class LintCommandBuilder:
    config_loader: Callable[[], ProjectConfig] = field(default=load_project_config)
    action_name: str = "Lint"

    def build_command(self, args: LinterOptions) -> str:
        command = self.config_loader().lint_command
        parts = [command]
        # Don't double up when the configured command already fixes
        if args.fix and FIX_FLAG not in command:
            parts.append(FIX_FLAG)
        parts.extend(shlex.quote(path) for path in args.files)
        return " ".join(parts)

    def wants_full_report(self, args: LinterOptions) -> bool:
        return False


_tool: ExecTool[LinterOptions] = ExecTool(LintCommandBuilder())


async def run_linter(args: LinterOptions) -> ToolResponse:
    return await _tool.execute(args)


def register_linter_tools(mcp: Any) -> None:
    """Register the linter with the MCP server."""

    @mcp.tool(name="run_linter")
    async def run_linter_tool(fix: bool = False, files: list[str] | None = None) -> str:
        """
        Run the project's linter.

        Args:
            fix: Attempt to fix issues automatically
            files: Specific files to lint (defaults to the configured scope)

        Returns:
            One-line summary on success, full output on failure
        """
        return await respond(run_linter(LinterOptions(fix=fix, files=tuple(files or ()))))


__all__ = ["LinterOptions", "LintCommandBuilder", "run_linter", "register_linter_tools", "FIX_FLAG"]
