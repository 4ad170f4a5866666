# reviewer_mcp/server.py
"""
Reviewer MCP Server

Registers every tool module on one FastMCP instance and serves it over stdio.

Tool categories:
- Review: generate_spec, review_spec, review_code (LLM-backed)
- Tester: run_tests
- Linter: run_linter
- Notify: notify (speech, pauses music)
- Music: music (safety-gated Spotify control)
- Memory: memory (session notes)

This module is imported by the CLI (`reviewer-mcp serve`) or can be run
directly with `python -m reviewer_mcp.server`.
"""

from __future__ import annotations

from typing import Any, Callable

import structlog
from mcp.server.fastmcp import FastMCP

from . import __version__
from .config.settings import load_project_config
from .mcp_core.errors import ReviewerError
from .rich_utils import tool_failed, tool_registered
from .tools import (
    register_linter_tools,
    register_memory_tools,
    register_music_tools,
    register_notify_tools,
    register_review_tools,
    register_tester_tools,
)

log = structlog.get_logger("reviewer.server")

SERVER_NAME = "reviewer-mcp"

# (category, register function, number of tools it adds)
TOOL_MODULES: list[tuple[str, Callable[[Any], None], int]] = [
    ("Review", register_review_tools, 3),
    ("Tester", register_tester_tools, 1),
    ("Linter", register_linter_tools, 1),
    ("Notify", register_notify_tools, 1),
    ("Music", register_music_tools, 1),
    ("Memory", register_memory_tools, 1),
]


# =============================================================================
# Tool Registration
# =============================================================================


def _register_tools(server: FastMCP, module_name: str, register_func: Callable[[Any], None], count: int) -> bool:
    """Helper to register tools with error handling."""
    try:
        register_func(server)
    except Exception as e:
        log.error("server.register_failed", module=module_name, error=str(e))
        tool_failed(module_name, str(e))
        return False
    tool_registered(module_name, count)
    return True


def _register_status(server: FastMCP) -> None:
    @server.tool(name="reviewer_status")
    async def reviewer_status() -> str:
        """Check server status, active AI provider and available tools."""
        try:
            config = load_project_config()
        except ReviewerError as e:
            return f"🔍 reviewer-mcp {__version__}\n\nConfiguration error: {e}"

        model = config.openai_model if config.ai_provider == "openai" else config.ollama_model
        return f"""🔍 reviewer-mcp {__version__}

AI provider: {config.ai_provider} ({model})
Test command: {config.test_command}
Lint command: {config.lint_command}
Safe volume: {config.music.safe_volume}% (max step {config.music.volume_increment}%)

Available Categories:
- Review: generate_spec, review_spec, review_code
- Tester: run_tests
- Linter: run_linter
- Notify: notify
- Music: music
- Memory: memory
"""


def build_server(name: str = SERVER_NAME) -> FastMCP:
    server = FastMCP(name)
    for module_name, register_func, count in TOOL_MODULES:
        _register_tools(server, module_name, register_func, count)
    _register_status(server)
    return server


mcp = build_server()


if __name__ == "__main__":
    from .rich_utils import banner, console

    console.print(banner("Reviewer MCP Server", "Specs, reviews, tests, lint, notifications and safe music"))
    mcp.run()
