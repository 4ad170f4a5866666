"""test_notify.py - Spoken notifications and music coordination."""

import pytest
from fakes import FakeRunner, failed, ok, spotify_state

from reviewer_mcp.mcp_core.errors import ToolInputError
from reviewer_mcp.tools.music import scripts
from reviewer_mcp.tools.notify import (
    CONSOLE_FALLBACK,
    NotificationOptions,
    NotifyCommandBuilder,
    NotifyTool,
)


class TestNotifyCommandBuilder:
    def test_plain_info(self):
        builder = NotifyCommandBuilder(platform="darwin")

        assert builder.build_command(NotificationOptions(message="Build done")) == "say 'Build done'"

    def test_prefix_voice_and_rate(self):
        builder = NotifyCommandBuilder(platform="darwin")

        command = builder.build_command(
            NotificationOptions(message="Deploy now?", type="question", voice="Samantha", rate=200)
        )

        assert command == "say -v Samantha -r 200 'Question: Deploy now?'"

    @pytest.mark.parametrize(
        "kind, spoken",
        [
            ("alert", "Alert! Tests failed"),
            ("confirmation", "Please confirm: Tests failed"),
            ("info", "Tests failed"),
        ],
    )
    def test_type_prefixes(self, kind, spoken):
        builder = NotifyCommandBuilder(platform="darwin")

        command = builder.build_command(NotificationOptions(message="Tests failed", type=kind))

        assert command == f"say '{spoken}'"

    def test_message_is_shell_quoted(self):
        builder = NotifyCommandBuilder(platform="darwin")

        command = builder.build_command(NotificationOptions(message="it's $(rm -rf /)"))

        assert command == "say 'it'\"'\"'s $(rm -rf /)'"

    def test_non_macos_falls_back_to_console(self):
        builder = NotifyCommandBuilder(platform="linux")

        assert builder.build_command(NotificationOptions(message="hi", type="alert")) == CONSOLE_FALLBACK

    def test_empty_message_rejected(self):
        with pytest.raises(ToolInputError) as exc:
            NotifyCommandBuilder(platform="darwin").build_command(NotificationOptions(message="  "))

        assert exc.value.field == "message"

    def test_bad_rate_rejected(self):
        with pytest.raises(ToolInputError, match="rate"):
            NotifyCommandBuilder(platform="darwin").build_command(NotificationOptions(message="x", rate=0))


class TestNotifyTool:
    @pytest.mark.asyncio
    async def test_pauses_music_around_speech(self, no_sleep):
        runner = FakeRunner(spotify_state(playing=True))
        tool = NotifyTool(runner=runner, platform="darwin", sleep=no_sleep)

        response = await tool.execute(NotificationOptions(message="Review ready"))

        assert runner.commands == [
            scripts.IS_SPOTIFY_RUNNING,
            scripts.PLAYER_STATE,
            scripts.PAUSE,
            "say 'Review ready'",
            scripts.PLAY,
        ]
        assert response.text == "Success: Notify"

    @pytest.mark.asyncio
    async def test_no_music_no_resume(self, no_sleep):
        runner = FakeRunner(spotify_state(running=False))
        tool = NotifyTool(runner=runner, platform="darwin", sleep=no_sleep)

        await tool.execute(NotificationOptions(message="Review ready"))

        assert runner.commands == [scripts.IS_SPOTIFY_RUNNING, "say 'Review ready'"]

    @pytest.mark.asyncio
    async def test_speech_failure_still_resumes(self, no_sleep):
        runner = FakeRunner({**spotify_state(playing=True), "say 'hi'": failed("say: no voice")})
        tool = NotifyTool(runner=runner, platform="darwin", sleep=no_sleep)

        response = await tool.execute(NotificationOptions(message="hi"))

        assert response.text == "Failed (exit 1): Notify\n\nsay: no voice"
        assert runner.commands[-1] == scripts.PLAY

    @pytest.mark.asyncio
    async def test_console_fallback_succeeds(self):
        runner = FakeRunner(
            {CONSOLE_FALLBACK: ok("Notification displayed in console (audio not available on this platform)\n")}
        )
        tool = NotifyTool(runner=runner, platform="linux")

        response = await tool.execute(NotificationOptions(message="hi", type="alert"))

        assert runner.commands == [CONSOLE_FALLBACK]
        assert response.text == (
            "Success: Notify | Notification displayed in console (audio not available on this platform)"
        )
        assert not response.is_error

    @pytest.mark.asyncio
    async def test_broken_project_config_still_notifies(self, tmp_path):
        (tmp_path / ".reviewer.json").write_text("{not json")
        tool = NotifyTool(platform="linux")

        response = await tool.execute(NotificationOptions(message="hi"))

        assert response.text.startswith("Success: Notify")
        assert not response.is_error
