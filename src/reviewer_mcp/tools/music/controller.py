# tools/music/controller.py
"""
Music Control (Spotify on macOS)

Request flow:
1. Validate the arguments (action, mood, volume) - no process is spawned for
   a bad request
2. Check the platform
3. Read a fresh SafetySnapshot and run the SafetyController guards
4. Launch Spotify if `play` finds it closed, then wait for it to warm up
5. Run the AppleScript command and report

Usage:
    from reviewer_mcp.tools.music import music, MusicOptions
    response = await music(MusicOptions(action="play", mood="focus"))
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping, get_args

import structlog

from ...config.models import Playlist, ProjectConfig
from ...config.settings import load_project_config
from ...mcp_core.errors import ReviewerError, ToolInputError
from ...mcp_core.execution import IProcessRunner
from ...mcp_core.formatting import format_exec_result
from ...mcp_core.results import ToolResponse, error_result, success_result
from ..base import default_runner, respond
from . import scripts
from .playlists import build_playlist_catalog
from .safety import DeviceStateReader, SafetyController, SleepFn, VolumePolicy

log = structlog.get_logger("reviewer.music")

MusicAction = Literal["play", "pause", "playpause", "next", "previous", "volume", "mute", "info"]
ACTIONS: tuple[str, ...] = get_args(MusicAction)

ACTION_NAME = "Music Control"
SPOTIFY_WARMUP_DELAY = 3.0

_SIMPLE_ACTIONS: dict[str, str] = {
    "pause": scripts.PAUSE,
    "playpause": scripts.PLAYPAUSE,
    "next": scripts.NEXT_TRACK,
    "previous": scripts.PREVIOUS_TRACK,
    "mute": scripts.MUTE,
    "info": scripts.NOW_PLAYING,
}


@dataclass(frozen=True, slots=True)
class MusicOptions:
    action: str
    uri: str | None = None
    volume: int | None = None
    mood: str | None = None


def clamp_volume(level: int) -> int:
    return max(0, min(100, level))


@dataclass(frozen=True, slots=True)
class MusicCommandBuilder:
    """Maps a validated MusicOptions onto one osascript command."""

    catalog: Mapping[str, Playlist]
    action_name: str = ACTION_NAME

    def validate(self, args: MusicOptions) -> None:
        if args.action not in ACTIONS:
            raise ToolInputError("action", f"Unknown action: {args.action}. Expected one of: {', '.join(ACTIONS)}")
        if args.mood is not None and args.mood not in self.catalog:
            raise ToolInputError(
                "mood",
                f"Unknown mood: {args.mood}. Available moods: {', '.join(sorted(self.catalog))}",
            )
        if args.action == "volume" and args.volume is None:
            raise ToolInputError("volume", "Volume level required for volume action")

    def build_command(self, args: MusicOptions) -> str:
        self.validate(args)

        if args.action == "play":
            if args.mood:
                return scripts.play_track(self.catalog[args.mood].uri)
            # Plain search terms can't be played through AppleScript
            if args.uri and args.uri.startswith("spotify:"):
                return scripts.play_track(args.uri)
            return scripts.PLAY

        if args.action == "volume":
            return scripts.set_volume(clamp_volume(args.volume))

        return _SIMPLE_ACTIONS[args.action]

    def wants_full_report(self, args: MusicOptions) -> bool:
        return False


class MusicTool:
    """Safety-gated Spotify control."""

    def __init__(
        self,
        runner: IProcessRunner | None = None,
        config_loader: Callable[[], ProjectConfig] = load_project_config,
        platform: str | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._runner = runner
        self.config_loader = config_loader
        self.platform = platform or sys.platform
        self.sleep = sleep
        self._config: ProjectConfig | None = None
        self._builder: MusicCommandBuilder | None = None
        self._controller: SafetyController | None = None

    @property
    def runner(self) -> IProcessRunner:
        return self._runner or default_runner()

    def _setup(self) -> tuple[MusicCommandBuilder, SafetyController]:
        # Rebuilt whenever the loader hands back a different config object
        config = self.config_loader()
        if config is not self._config or self._builder is None or self._controller is None:
            music_config = config.music
            self._builder = MusicCommandBuilder(build_playlist_catalog(music_config))
            self._controller = SafetyController(VolumePolicy.from_config(music_config))
            self._config = config
        return self._builder, self._controller

    async def execute(self, args: MusicOptions) -> ToolResponse:
        try:
            builder, controller = self._setup()
        except ReviewerError as e:
            return error_result(ACTION_NAME, e)

        builder.validate(args)
        requested = clamp_volume(args.volume) if args.volume is not None else None

        if self.platform != "darwin":
            return error_result(ACTION_NAME, "Music control is only available on macOS")

        runner = self.runner
        snapshot = await DeviceStateReader(runner).snapshot(include_volume=args.action == "volume")
        log.info(
            "music.snapshot",
            action=args.action,
            muted=snapshot.is_muted,
            running=snapshot.is_running,
            playing=snapshot.is_playing,
            volume=snapshot.current_volume,
        )

        rejection = controller.check(
            args.action,
            snapshot,
            uri=args.uri,
            mood=args.mood,
            volume=requested,
        )
        if rejection is not None:
            return rejection

        if args.action == "play" and not snapshot.is_running:
            log.info("music.launching_spotify")
            await runner.run(scripts.ACTIVATE)
            await self.sleep(SPOTIFY_WARMUP_DELAY)

        outcome = await runner.run(builder.build_command(args))
        force_full = builder.wants_full_report(args)
        if outcome.exit_code != 0:
            return success_result(format_exec_result(outcome, ACTION_NAME, force_full))

        if args.action == "play" and args.mood:
            playlist = builder.catalog[args.mood]
            return success_result(f"Playing {playlist.name} playlist for {args.mood} mood")
        if args.action == "volume":
            return success_result(f"Volume set to {requested}% (hearing protection active)")
        if args.action == "info" and "Now playing:" in outcome.stdout:
            return success_result(outcome.stdout.strip())
        return success_result(format_exec_result(outcome, ACTION_NAME, force_full))


_tool = MusicTool()


async def music(args: MusicOptions) -> ToolResponse:
    return await _tool.execute(args)


def register_music_tools(mcp: Any) -> None:
    """Register music control with the MCP server."""

    @mcp.tool(name="music")
    async def music_tool(
        action: MusicAction,
        uri: str | None = None,
        volume: int | None = None,
        mood: str | None = None,
    ) -> str:
        """
        Control Spotify playback with hearing and interruption safety checks.

        Args:
            action: play, pause, playpause, next, previous, volume, mute or info
            uri: Spotify URI to play (e.g. spotify:track:...)
            volume: Target volume 0-100 for the volume action
            mood: Mood playlist to play (focus, relax, energize, chill, work, or configured)

        Returns:
            Result text, or a SAFETY message with suggestions when an action is declined
        """
        return await respond(music(MusicOptions(action=action, uri=uri, volume=volume, mood=mood)))


__all__ = [
    "ACTIONS",
    "MusicAction",
    "MusicOptions",
    "MusicCommandBuilder",
    "MusicTool",
    "clamp_volume",
    "music",
    "register_music_tools",
    "SPOTIFY_WARMUP_DELAY",
]
