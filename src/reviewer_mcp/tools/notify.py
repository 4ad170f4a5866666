# tools/notify.py
"""
Spoken Notifications

macOS: `say [-v voice] [-r rate] '<prefix><message>'`, with Spotify paused for
the duration and resumed afterwards.

Elsewhere there is no speech backend, so the message goes to the server log
and a no-op `echo` stands in for the command. The tool still succeeds; a
notification must never fail the caller.
"""

from __future__ import annotations

import asyncio
import shlex
import sys
from dataclasses import dataclass
from typing import Any, Literal, get_args

import structlog

from ..mcp_core.errors import ReviewerError, ToolInputError
from ..mcp_core.execution import IProcessRunner, ProcessRunner
from ..mcp_core.formatting import format_exec_result
from ..mcp_core.results import ToolResponse, success_result
from .base import default_runner, respond
from .music.safety import PlaybackPauser, SleepFn

log = structlog.get_logger("reviewer.notify")

NotificationType = Literal["question", "alert", "confirmation", "info"]
NOTIFICATION_TYPES: tuple[str, ...] = get_args(NotificationType)

MESSAGE_PREFIXES: dict[str, str] = {
    "question": "Question: ",
    "alert": "Alert! ",
    "confirmation": "Please confirm: ",
    "info": "",
}

CONSOLE_FALLBACK = "echo 'Notification displayed in console (audio not available on this platform)'"


@dataclass(frozen=True, slots=True)
class NotificationOptions:
    message: str
    type: str = "info"
    voice: str | None = None
    rate: int | None = None


@dataclass(frozen=True, slots=True)
class NotifyCommandBuilder:
    platform: str = sys.platform
    action_name: str = "Notify"

    def validate(self, args: NotificationOptions) -> None:
        if not args.message or not args.message.strip():
            raise ToolInputError("message", "Message is required")
        if args.type not in NOTIFICATION_TYPES:
            raise ToolInputError("type", f"Unknown notification type: {args.type}")
        if args.rate is not None and args.rate <= 0:
            raise ToolInputError("rate", "Rate must be a positive number of words per minute")

    def build_command(self, args: NotificationOptions) -> str:
        self.validate(args)

        if self.platform != "darwin":
            log.warning("notify.console", notification=f"[{args.type.upper()}] {args.message}")
            return CONSOLE_FALLBACK

        parts = ["say"]
        if args.voice:
            parts.extend(["-v", shlex.quote(args.voice)])
        if args.rate:
            parts.extend(["-r", str(args.rate)])
        parts.append(shlex.quote(MESSAGE_PREFIXES[args.type] + args.message))
        return " ".join(parts)

    def wants_full_report(self, args: NotificationOptions) -> bool:
        return False


class NotifyTool:
    def __init__(
        self,
        runner: IProcessRunner | None = None,
        platform: str | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._runner = runner
        self.builder = NotifyCommandBuilder(platform=platform or sys.platform)
        self.sleep = sleep

    @property
    def runner(self) -> IProcessRunner:
        if self._runner is not None:
            return self._runner
        try:
            return default_runner()
        except ReviewerError as e:
            log.warning("notify.config_unavailable", error=str(e))
            return ProcessRunner()

    async def execute(self, args: NotificationOptions) -> ToolResponse:
        command = self.builder.build_command(args)
        force_full = self.builder.wants_full_report(args)
        runner = self.runner

        if self.builder.platform != "darwin":
            outcome = await runner.run(command)
            return success_result(format_exec_result(outcome, self.builder.action_name, force_full))

        # Speech and music share the speakers
        async with PlaybackPauser(runner, sleep=self.sleep).paused():
            outcome = await runner.run(command)
        return success_result(format_exec_result(outcome, self.builder.action_name, force_full))


_tool = NotifyTool()


async def notify(args: NotificationOptions) -> ToolResponse:
    return await _tool.execute(args)


def register_notify_tools(mcp: Any) -> None:
    """Register the notification tool with the MCP server."""

    @mcp.tool(name="notify")
    async def notify_tool(
        message: str,
        type: NotificationType = "info",
        voice: str | None = None,
        rate: int | None = None,
    ) -> str:
        """
        Speak a notification aloud (macOS) or log it (other platforms).

        Args:
            message: Text to announce
            type: question, alert, confirmation or info (adds a spoken prefix)
            voice: macOS voice name (see `say -v ?`)
            rate: Speech rate in words per minute

        Returns:
            Short status line
        """
        options = NotificationOptions(message=message, type=type, voice=voice, rate=rate)
        return await respond(notify(options))


__all__ = [
    "NotificationOptions",
    "NotifyCommandBuilder",
    "NotifyTool",
    "NOTIFICATION_TYPES",
    "MESSAGE_PREFIXES",
    "CONSOLE_FALLBACK",
    "notify",
    "register_notify_tools",
]
