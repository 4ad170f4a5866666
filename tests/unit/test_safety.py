"""test_safety.py - Playback safety guards, device probing and pause/resume."""

import pytest
from fakes import FakeRunner, failed, ok, spotify_state

from reviewer_mcp.config.models import MusicConfig
from reviewer_mcp.tools.music import scripts
from reviewer_mcp.tools.music.safety import (
    FALLBACK_VOLUME,
    NOTIFICATION_SETTLE_DELAY,
    DeviceStateReader,
    PlaybackPauser,
    SafetyController,
    SafetySnapshot,
    VolumePolicy,
    evaluate_volume_request,
)

POLICY = VolumePolicy(safe_ceiling=70, max_step_increase=20)


def snapshot(muted=False, running=True, playing=False, volume=None):
    return SafetySnapshot(is_muted=muted, is_running=running, is_playing=playing, current_volume=volume)


class TestVolumePolicy:
    def test_above_ceiling_suggests_ceiling(self):
        decision = evaluate_volume_request(95, 50, POLICY)

        assert not decision.allowed
        assert decision.reason == "ceiling"
        assert decision.suggested == 70

    def test_large_step_suggests_current_plus_step(self):
        decision = evaluate_volume_request(40, 10, POLICY)

        assert not decision.allowed
        assert decision.reason == "step"
        assert decision.suggested == 30

    def test_small_increase_within_ceiling_allowed(self):
        assert evaluate_volume_request(68, 50, POLICY).allowed

    def test_decrease_always_allowed(self):
        assert evaluate_volume_request(10, 90, POLICY).allowed

    def test_same_level_allowed(self):
        assert evaluate_volume_request(50, 50, POLICY).allowed

    def test_ceiling_guard_wins_over_step_guard(self):
        decision = evaluate_volume_request(100, 10, POLICY)

        assert decision.reason == "ceiling"
        assert decision.suggested == 70

    def test_already_above_ceiling_only_step_applies(self):
        assert evaluate_volume_request(85, 75, POLICY).allowed

        decision = evaluate_volume_request(100, 75, POLICY)
        assert decision.reason == "step"
        assert decision.suggested == 95

    def test_from_config(self):
        policy = VolumePolicy.from_config(MusicConfig(safe_volume=60, volume_increment=10))

        assert policy == VolumePolicy(safe_ceiling=60, max_step_increase=10)


class TestSafetyController:
    @pytest.fixture
    def controller(self):
        return SafetyController(POLICY)

    def test_muted_blocks_everything_but_info(self, controller):
        rejection = controller.check("play", snapshot(muted=True))

        assert rejection.text.startswith("⚠️ SAFETY: 🔇 System Audio Muted - System is muted")
        assert "unmute first" in rejection.text
        assert not rejection.is_error
        assert controller.check("info", snapshot(muted=True)) is None

    def test_not_running_only_play_allowed(self, controller):
        rejection = controller.check("pause", snapshot(running=False))

        assert "Spotify Not Running" in rejection.text
        assert controller.check("play", snapshot(running=False)) is None

    def test_bare_play_does_not_interrupt(self, controller):
        rejection = controller.check("play", snapshot(playing=True))

        assert "🎵 Already Playing - Cannot interrupt playback" in rejection.text
        assert "pause first" in rejection.text

    def test_mood_play_does_not_interrupt(self, controller):
        rejection = controller.check("play", snapshot(playing=True), mood="focus")

        assert "Cannot switch to focus playlist" in rejection.text
        assert "pause then play mood focus" in rejection.text

    def test_explicit_track_may_interrupt(self, controller):
        assert controller.check("play", snapshot(playing=True), uri="spotify:track:123") is None

    def test_volume_too_high(self, controller):
        rejection = controller.check("volume", snapshot(volume=50), volume=95)

        assert "Volume Too High - 95% exceeds safe level (70%). Current: 50%" in rejection.text
        assert "try 70%" in rejection.text

    def test_volume_jump_too_large(self, controller):
        rejection = controller.check("volume", snapshot(volume=10), volume=40)

        assert "Volume Jump Too Large - +30% increase (10% → 40%)" in rejection.text
        assert "try 30% first" in rejection.text

    def test_volume_ok(self, controller):
        assert controller.check("volume", snapshot(volume=50), volume=68) is None

    def test_unknown_current_volume_uses_fallback(self, controller):
        rejection = controller.check("volume", snapshot(volume=None), volume=80)

        assert f"Current: {FALLBACK_VOLUME}%" in rejection.text


class TestDeviceStateReader:
    @pytest.mark.asyncio
    async def test_snapshot_reads_state(self):
        runner = FakeRunner(spotify_state(muted=False, running=True, playing=True, volume=42))

        result = await DeviceStateReader(runner).snapshot(include_volume=True)

        assert result == snapshot(muted=False, running=True, playing=True, volume=42)

    @pytest.mark.asyncio
    async def test_spotify_not_queried_when_closed(self):
        runner = FakeRunner(spotify_state(running=False))

        result = await DeviceStateReader(runner).snapshot(include_volume=True)

        assert not result.is_playing
        assert result.current_volume is None
        assert runner.commands == [scripts.IS_MUTED, scripts.IS_SPOTIFY_RUNNING]

    @pytest.mark.asyncio
    async def test_failed_queries_fall_back(self):
        runner = FakeRunner(
            {
                scripts.IS_MUTED: failed("osascript: no permission"),
                scripts.IS_SPOTIFY_RUNNING: ok("true"),
                scripts.PLAYER_STATE: failed(),
                scripts.SPOTIFY_VOLUME: ok("missing value"),
            }
        )

        result = await DeviceStateReader(runner).snapshot(include_volume=True)

        assert result == snapshot(muted=False, running=True, playing=False, volume=FALLBACK_VOLUME)


class TestPlaybackPauser:
    @pytest.mark.asyncio
    async def test_pauses_and_resumes_when_playing(self, no_sleep):
        runner = FakeRunner(spotify_state(playing=True))

        async with PlaybackPauser(runner, sleep=no_sleep).paused() as was_playing:
            assert was_playing
            runner.commands.append("say hi")

        assert runner.commands == [
            scripts.IS_SPOTIFY_RUNNING,
            scripts.PLAYER_STATE,
            scripts.PAUSE,
            "say hi",
            scripts.PLAY,
        ]
        assert no_sleep.delays == [NOTIFICATION_SETTLE_DELAY]

    @pytest.mark.asyncio
    async def test_leaves_stopped_player_alone(self, no_sleep):
        runner = FakeRunner(spotify_state(playing=False))

        async with PlaybackPauser(runner, sleep=no_sleep).paused() as was_playing:
            assert not was_playing

        assert scripts.PAUSE not in runner.commands
        assert scripts.PLAY not in runner.commands
        assert no_sleep.delays == []

    @pytest.mark.asyncio
    async def test_failed_pause_skips_resume(self, no_sleep):
        runner = FakeRunner({**spotify_state(playing=True), scripts.PAUSE: failed()})

        async with PlaybackPauser(runner, sleep=no_sleep).paused() as was_playing:
            assert not was_playing

        assert scripts.PLAY not in runner.commands

    @pytest.mark.asyncio
    async def test_resumes_even_when_body_raises(self, no_sleep):
        runner = FakeRunner(spotify_state(playing=True))

        with pytest.raises(RuntimeError):
            async with PlaybackPauser(runner, sleep=no_sleep).paused():
                raise RuntimeError("speech failed")

        assert runner.commands[-1] == scripts.PLAY
