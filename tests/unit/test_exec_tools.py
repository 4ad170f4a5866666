"""test_exec_tools.py - run_tests and run_linter command building and reporting."""

import pytest
from fakes import FakeRunner, failed, ok

from reviewer_mcp.config.models import ProjectConfig
from reviewer_mcp.mcp_core.errors import ConfigError, ToolInputError
from reviewer_mcp.mcp_core.execution import ICommandBuilder
from reviewer_mcp.tools.base import ExecTool
from reviewer_mcp.tools.linter import LintCommandBuilder, LinterOptions
from reviewer_mcp.tools.tester import TestCommandBuilder, TestRunnerOptions


def config(**overrides):
    return lambda: ProjectConfig(**overrides)


class TestTestCommandBuilder:
    def test_pattern_appends_to_test_command(self):
        builder = TestCommandBuilder(config_loader=config(test_command="pytest -q"))

        assert builder.build_command(TestRunnerOptions(pattern="tests/unit")) == "pytest -q tests/unit"
        assert not builder.wants_full_report(TestRunnerOptions(pattern="tests/unit"))

    def test_pattern_is_shell_quoted(self):
        builder = TestCommandBuilder(config_loader=config())

        command = builder.build_command(TestRunnerOptions(pattern="a b; rm -rf /"))

        assert command == "npm test 'a b; rm -rf /'"

    def test_no_pattern_runs_coverage_with_full_report(self):
        builder = TestCommandBuilder(config_loader=config())

        assert builder.build_command(TestRunnerOptions()) == "npm run test:coverage"
        assert builder.wants_full_report(TestRunnerOptions())

    def test_satisfies_builder_protocol(self):
        assert isinstance(TestCommandBuilder(), ICommandBuilder)


class TestLintCommandBuilder:
    def test_plain(self):
        builder = LintCommandBuilder(config_loader=config())

        assert builder.build_command(LinterOptions()) == "npm run lint"

    def test_fix_and_files(self):
        builder = LintCommandBuilder(config_loader=config(lint_command="ruff check"))

        command = builder.build_command(LinterOptions(fix=True, files=("src/a.py", "my file.py")))

        assert command == "ruff check --fix src/a.py 'my file.py'"

    def test_fix_not_duplicated(self):
        builder = LintCommandBuilder(config_loader=config(lint_command="eslint --fix ."))

        assert builder.build_command(LinterOptions(fix=True)) == "eslint --fix ."


class TestExecTool:
    @pytest.mark.asyncio
    async def test_focused_run_success_is_summary(self):
        runner = FakeRunner({"npm test unit": ok("5 passing\n(12ms)\n")})
        tool = ExecTool(TestCommandBuilder(config_loader=config()), runner=runner)

        response = await tool.execute(TestRunnerOptions(pattern="unit"))

        assert runner.commands == ["npm test unit"]
        assert response.text == "Success: Test | 5 passing"
        assert not response.is_error

    @pytest.mark.asyncio
    async def test_coverage_success_is_full(self):
        runner = FakeRunner({"npm run test:coverage": ok("All files | 91%\nlines 88%\n")})
        tool = ExecTool(TestCommandBuilder(config_loader=config()), runner=runner)

        response = await tool.execute(TestRunnerOptions())

        assert response.text == "Success: Test\n\nAll files | 91%\nlines 88%"

    @pytest.mark.asyncio
    async def test_failure_is_full_report_not_error(self):
        runner = FakeRunner({"npm run lint": failed("src/a.ts:1 error\nsrc/b.ts:2 error", exit_code=1)})
        tool = ExecTool(LintCommandBuilder(config_loader=config()), runner=runner)

        response = await tool.execute(LinterOptions())

        assert response.text == "Failed (exit 1): Lint\n\nsrc/a.ts:1 error\nsrc/b.ts:2 error"
        assert not response.is_error

    @pytest.mark.asyncio
    async def test_config_error_becomes_error_result(self):
        def broken():
            raise ConfigError("Cannot parse .reviewer.json")

        runner = FakeRunner()
        tool = ExecTool(LintCommandBuilder(config_loader=broken), runner=runner)

        response = await tool.execute(LinterOptions())

        assert response.is_error
        assert response.text == "Error Lint: Cannot parse .reviewer.json"
        assert runner.commands == []

    @pytest.mark.asyncio
    async def test_input_error_propagates(self):
        class RejectingBuilder:
            action_name = "Test"

            def build_command(self, args):
                raise ToolInputError("pattern", "bad")

            def wants_full_report(self, args):
                return False

        tool = ExecTool(RejectingBuilder(), runner=FakeRunner())

        with pytest.raises(ToolInputError):
            await tool.execute(TestRunnerOptions())
