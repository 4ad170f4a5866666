"""
Pytest configuration and shared fixtures.

Every test runs in a fresh tmp cwd with the process-wide caches (config,
LLM provider, memory store) reset and config env vars cleared.
"""

from __future__ import annotations

import pytest
from fakes import FakeRunner

from reviewer_mcp.config.settings import reset_config_cache
from reviewer_mcp.mcp_core.inference import reset_provider
from reviewer_mcp.mcp_core.memory import reset_memory_store

CONFIG_ENV_VARS = (
    "AI_PROVIDER",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OLLAMA_BASE_URL",
    "OLLAMA_MODEL",
    "MUSIC_SAFE_VOLUME",
    "MUSIC_VOLUME_INCREMENT",
    "REVIEWER_COMMAND_TIMEOUT",
    "REVIEWER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolate(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    reset_provider()
    reset_memory_store()
    yield tmp_path
    reset_config_cache()
    reset_provider()
    reset_memory_store()


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def no_sleep():
    """Sleep stand-in that records requested delays."""
    delays: list[float] = []

    async def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep
