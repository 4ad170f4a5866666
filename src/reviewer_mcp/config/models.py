# config/models.py
"""
Project configuration schema.

Field names are snake_case in Python and camelCase in `.reviewer.json`.
Environment-driven defaults are read when a model is built, which happens
once per process because the loader caches the result.
"""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


def _env(name: str, default: object) -> object:
    return os.environ.get(name) or default


class Playlist(BaseModel):
    """A mood preset: Spotify URI (or search term) plus display name."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    uri: str
    name: str
    description: str | None = None


class MusicConfig(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        validate_default=True,
    )

    playlists: dict[str, Playlist] = Field(default_factory=dict)
    safe_volume: int = Field(
        default_factory=lambda: _env("MUSIC_SAFE_VOLUME", 70),
        alias="safeVolume",
        ge=0,
        le=100,
    )
    volume_increment: int = Field(
        default_factory=lambda: _env("MUSIC_VOLUME_INCREMENT", 20),
        alias="volumeIncrement",
        ge=0,
        le=100,
    )


class ProjectConfig(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        validate_default=True,
    )

    test_command: str = Field("npm test", alias="testCommand")
    coverage_command: str = Field("npm run test:coverage", alias="coverageCommand")
    lint_command: str = Field("npm run lint", alias="lintCommand")
    build_command: str = Field("npm run build", alias="buildCommand")
    command_timeout: float = Field(
        default_factory=lambda: _env("REVIEWER_COMMAND_TIMEOUT", 300),
        alias="commandTimeout",
        gt=0,
    )

    ai_provider: Literal["openai", "ollama"] = Field(
        default_factory=lambda: _env("AI_PROVIDER", "openai"),
        alias="aiProvider",
    )
    openai_model: str = Field(
        default_factory=lambda: _env("OPENAI_MODEL", "o1-preview"),
        alias="openaiModel",
    )
    ollama_base_url: str = Field(
        default_factory=lambda: _env("OLLAMA_BASE_URL", "http://localhost:11434"),
        alias="ollamaBaseUrl",
    )
    ollama_model: str = Field(
        default_factory=lambda: _env("OLLAMA_MODEL", "llama2"),
        alias="ollamaModel",
    )

    music: MusicConfig = Field(default_factory=MusicConfig)


__all__ = ["Playlist", "MusicConfig", "ProjectConfig"]
