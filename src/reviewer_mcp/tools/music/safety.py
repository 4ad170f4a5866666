# tools/music/safety.py
"""
Playback Safety Controller

Gates every music action on the live state of the audio device. Nothing is
cached between calls: each request reads a fresh SafetySnapshot, decides,
and only then lets the command run.

Guards, in evaluation order:
1. System output muted     -> only `info` is allowed
2. Spotify not running     -> only `play` is allowed (it launches Spotify)
3. Already playing         -> bare `play` and mood `play` are refused;
                              a specific track URI is allowed
4. Volume increases        -> refused above the safe ceiling (when starting
                              at or below it) or when the jump exceeds the
                              max single step; a safer level is suggested

A refusal is a normal tool response with remediation hints, not an error.

This module also hosts PlaybackPauser, which pauses music around a spoken
notification because both share the same output device.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Literal

import structlog

from ...config.models import MusicConfig
from ...mcp_core.execution import IProcessRunner
from ...mcp_core.results import ToolResponse, safety_result
from . import scripts

log = structlog.get_logger("reviewer.safety")

FALLBACK_VOLUME = 50
NOTIFICATION_SETTLE_DELAY = 1.5

SleepFn = Callable[[float], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class SafetySnapshot:
    """Point-in-time read of the audio device and Spotify."""

    is_muted: bool
    is_running: bool
    is_playing: bool
    current_volume: int | None = None


@dataclass(frozen=True, slots=True)
class VolumePolicy:
    safe_ceiling: int = 70
    max_step_increase: int = 20

    @classmethod
    def from_config(cls, music: MusicConfig) -> "VolumePolicy":
        return cls(safe_ceiling=music.safe_volume, max_step_increase=music.volume_increment)


@dataclass(frozen=True, slots=True)
class VolumeDecision:
    allowed: bool
    reason: Literal["ok", "ceiling", "step"] = "ok"
    suggested: int | None = None


def evaluate_volume_request(requested: int, current: int, policy: VolumePolicy) -> VolumeDecision:
    """Decide a volume change from (requested, current, policy) alone.

    Decreases and no-ops always pass. For increases the ceiling guard is
    checked first and the step guard only if the ceiling guard did not fire.
    """
    if requested <= current:
        return VolumeDecision(allowed=True)

    if requested > policy.safe_ceiling and current <= policy.safe_ceiling:
        return VolumeDecision(allowed=False, reason="ceiling", suggested=policy.safe_ceiling)

    if requested - current > policy.max_step_increase:
        suggested = min(current + policy.max_step_increase, requested)
        return VolumeDecision(allowed=False, reason="step", suggested=suggested)

    return VolumeDecision(allowed=True)


class DeviceStateReader:
    """Reads device state through the process runner.

    Each query degrades to a harmless default when osascript fails:
    not muted, not running, not playing, volume 50.
    """

    def __init__(self, runner: IProcessRunner) -> None:
        self.runner = runner

    async def _query(self, command: str) -> str | None:
        outcome = await self.runner.run(command)
        if outcome.exit_code != 0:
            log.warning("safety.query_failed", command=command, stderr=outcome.stderr.strip())
            return None
        return outcome.stdout.strip()

    async def is_muted(self) -> bool:
        return await self._query(scripts.IS_MUTED) == "true"

    async def is_running(self) -> bool:
        return await self._query(scripts.IS_SPOTIFY_RUNNING) == "true"

    async def is_playing(self) -> bool:
        return await self._query(scripts.PLAYER_STATE) == "playing"

    async def current_volume(self) -> int:
        raw = await self._query(scripts.SPOTIFY_VOLUME)
        try:
            return int(raw) if raw is not None else FALLBACK_VOLUME
        except ValueError:
            log.warning("safety.volume_unparsable", raw=raw)
            return FALLBACK_VOLUME

    async def snapshot(self, include_volume: bool = False) -> SafetySnapshot:
        # Spotify-directed queries would launch the app, so they only run
        # once we know it is already up
        muted = await self.is_muted()
        running = await self.is_running()
        playing = await self.is_playing() if running else False
        volume = await self.current_volume() if running and include_volume else None
        return SafetySnapshot(
            is_muted=muted,
            is_running=running,
            is_playing=playing,
            current_volume=volume,
        )


class SafetyController:
    """Applies the playback guards to one request."""

    def __init__(self, policy: VolumePolicy) -> None:
        self.policy = policy

    def check(
        self,
        action: str,
        snapshot: SafetySnapshot,
        *,
        uri: str | None = None,
        mood: str | None = None,
        volume: int | None = None,
    ) -> ToolResponse | None:
        """Return a safety rejection, or None when the action may run."""
        if snapshot.is_muted and action != "info":
            return self._reject(
                "🔇 System Audio Muted",
                "System is muted",
                ["unmute first", "use info action"],
            )

        if not snapshot.is_running and action != "play":
            return self._reject(
                "Spotify Not Running",
                "Spotify is not running, nothing to control",
                ["start Spotify first", "use play to launch it"],
            )

        if action == "play" and snapshot.is_playing and (uri is None or mood is not None):
            return self._reject(
                "🎵 Already Playing",
                f"Cannot switch to {mood} playlist" if mood else "Cannot interrupt playback",
                [
                    "pause first",
                    "specify track/artist",
                    f"pause then play mood {mood}" if mood else "use next/previous",
                ],
            )

        if action == "volume" and volume is not None:
            current = snapshot.current_volume if snapshot.current_volume is not None else FALLBACK_VOLUME
            decision = evaluate_volume_request(volume, current, self.policy)
            if decision.reason == "ceiling":
                return self._reject(
                    "Volume Too High",
                    f"{volume}% exceeds safe level ({self.policy.safe_ceiling}%). Current: {current}%",
                    [
                        f"try {decision.suggested}%",
                        f"increase by {self.policy.max_step_increase}% max",
                        "use multiple steps",
                    ],
                )
            if decision.reason == "step":
                return self._reject(
                    "Volume Jump Too Large",
                    f"+{volume - current}% increase ({current}% → {volume}%)",
                    [f"try {decision.suggested}% first", "increase gradually", "protect hearing"],
                )

        return None

    @staticmethod
    def _reject(title: str, message: str, suggestions: list[str]) -> ToolResponse:
        log.info("safety.rejected", title=title, detail=message)
        return safety_result(title, message, suggestions)


class PlaybackPauser:
    """Pause Spotify while something else uses the speakers.

    Best effort: a failed pause or resume is logged and otherwise ignored.
    """

    def __init__(
        self,
        runner: IProcessRunner,
        settle_delay: float = NOTIFICATION_SETTLE_DELAY,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self.runner = runner
        self.settle_delay = settle_delay
        self.sleep = sleep

    async def _run_quietly(self, command: str, event: str) -> bool:
        outcome = await self.runner.run(command)
        if outcome.exit_code != 0:
            log.warning(event, exit_code=outcome.exit_code, stderr=outcome.stderr.strip())
            return False
        return True

    @asynccontextmanager
    async def paused(self) -> AsyncIterator[bool]:
        """Yield True when playback was paused and will be resumed on exit."""
        reader = DeviceStateReader(self.runner)
        was_playing = await reader.is_running() and await reader.is_playing()
        if was_playing:
            was_playing = await self._run_quietly(scripts.PAUSE, "notify.pause_failed")
            if was_playing:
                log.info("notify.music_paused")
        try:
            yield was_playing
        finally:
            if was_playing:
                await self.sleep(self.settle_delay)
                if await self._run_quietly(scripts.PLAY, "notify.resume_failed"):
                    log.info("notify.music_resumed")


__all__ = [
    "SafetySnapshot",
    "VolumePolicy",
    "VolumeDecision",
    "evaluate_volume_request",
    "DeviceStateReader",
    "SafetyController",
    "PlaybackPauser",
    "FALLBACK_VOLUME",
    "NOTIFICATION_SETTLE_DELAY",
]
