"""test_server.py - Tool registration, MCP dispatch and the CLI."""

import logging
import sys

import pytest
from mcp.server.fastmcp.exceptions import ToolError
from typer.testing import CliRunner

from reviewer_mcp.cli import app
from reviewer_mcp.log_config import LiteLLMNoiseFilter, configure_logging, resolve_log_level
from reviewer_mcp.server import _register_tools, build_server

EXPECTED_TOOLS = {
    "generate_spec",
    "review_spec",
    "review_code",
    "run_tests",
    "run_linter",
    "notify",
    "music",
    "memory",
    "reviewer_status",
}


def text_of(result):
    # Newer mcp releases return (content, structured_output)
    if isinstance(result, tuple):
        result = result[0]
    return "".join(block.text for block in result)


@pytest.fixture
def server():
    return build_server("reviewer-test")


class TestRegistration:
    @pytest.mark.asyncio
    async def test_all_tools_registered(self, server):
        tools = await server.list_tools()

        assert {tool.name for tool in tools} == EXPECTED_TOOLS

    @pytest.mark.asyncio
    async def test_music_schema_lists_actions(self, server):
        tools = {tool.name: tool for tool in await server.list_tools()}

        action = tools["music"].inputSchema["properties"]["action"]
        assert "volume" in str(action)

    def test_failing_module_does_not_abort(self, server):
        def broken(mcp):
            raise RuntimeError("import went wrong")

        assert not _register_tools(server, "Broken", broken, 1)


class TestDispatch:
    @pytest.mark.asyncio
    async def test_memory_round_trip(self, server):
        await server.call_tool("memory", {"action": "set", "key": "k", "value": "v"})

        result = await server.call_tool("memory", {"action": "get", "key": "k"})

        assert text_of(result) == "✅ Memory: 'k' = 'v'"

    @pytest.mark.asyncio
    async def test_input_error_is_tool_error(self, server):
        with pytest.raises(ToolError, match="key"):
            await server.call_tool("memory", {"action": "get"})

    @pytest.mark.asyncio
    async def test_status(self, server):
        result = await server.call_tool("reviewer_status", {})

        text = text_of(result)
        assert "AI provider: openai (o1-preview)" in text
        assert "Safe volume: 70% (max step 20%)" in text

    @pytest.mark.asyncio
    async def test_notify_falls_back_off_macos(self, server):
        if sys.platform == "darwin":
            pytest.skip("speaks aloud on macOS")

        result = await server.call_tool("notify", {"message": "done", "type": "info"})

        assert text_of(result).startswith("Success: Notify")


class TestCli:
    def test_config_command(self):
        result = CliRunner().invoke(app, ["config"])

        assert result.exit_code == 0

    def test_config_command_reports_bad_file(self, tmp_path):
        (tmp_path / ".reviewer.json").write_text("{nope")

        result = CliRunner().invoke(app, ["config"])

        assert result.exit_code == 1


class TestLogging:
    def test_level_resolution(self, monkeypatch):
        assert resolve_log_level("debug") == "DEBUG"
        monkeypatch.setenv("REVIEWER_LOG_LEVEL", "warning")
        assert resolve_log_level() == "WARNING"

    def test_configure_logging_uses_stderr(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging("ERROR")

            assert root.level == logging.ERROR
            assert len(root.handlers) == 1
            assert root.handlers[0].stream is sys.stderr
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)

    def test_litellm_noise_filtered(self):
        noise = logging.LogRecord("LiteLLM", logging.INFO, __file__, 1, "request", None, None)
        warning = logging.LogRecord("LiteLLM", logging.WARNING, __file__, 1, "slow", None, None)

        assert not LiteLLMNoiseFilter().filter(noise)
        assert LiteLLMNoiseFilter().filter(warning)
