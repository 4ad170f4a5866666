# config/settings.py
"""
Project Settings - `.reviewer.json` loader

Reads the per-project configuration file from the working directory and
overlays it on built-in defaults:
- `.reviewer.json` (preferred)
- `.reviewer.yaml` / `.reviewer.yml`

A missing file means "defaults only". An unreadable or invalid file raises
ConfigError so the caller sees what is wrong instead of silently running the
default commands.

The merged config is cached for the process lifetime. Concurrent first loads
are serialized with double-checked locking; loading is idempotent anyway.

Usage:
    from reviewer_mcp.config.settings import load_project_config
    config = load_project_config()
    config.test_command  # "npm test" unless overridden
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from ..mcp_core.errors import ConfigError
from .models import ProjectConfig

log = structlog.get_logger("reviewer.config")

CONFIG_FILENAMES: tuple[str, ...] = (".reviewer.json", ".reviewer.yaml", ".reviewer.yml")

_cached_config: ProjectConfig | None = None
_config_lock = threading.Lock()


def find_config_file(project_root: Path | None = None) -> Path | None:
    """Return the first existing config file in `project_root` (default: cwd)."""
    root = project_root or Path.cwd()
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path.name}: {e}") from e

    try:
        if path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            data = yaml.safe_load(content) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse {path.name}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain an object at the top level")
    return data


def build_project_config(user_config: dict[str, Any] | None = None) -> ProjectConfig:
    """Merge a user config mapping over the defaults."""
    try:
        return ProjectConfig.model_validate(user_config or {})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_project_config(project_root: Path | None = None) -> ProjectConfig:
    """Load (once) and return the effective project configuration."""
    global _cached_config

    if _cached_config is not None:
        return _cached_config

    with _config_lock:
        if _cached_config is None:
            path = find_config_file(project_root)
            user_config = _read_config_file(path) if path else {}
            _cached_config = build_project_config(user_config)
            log.info(
                "config.loaded",
                source=str(path) if path else "defaults",
                ai_provider=_cached_config.ai_provider,
            )
    return _cached_config


def reset_config_cache() -> None:
    """Forget the cached config; the next load re-reads the file."""
    global _cached_config
    with _config_lock:
        _cached_config = None


def get_openai_key() -> str:
    api_key = os.environ.get("OPENAI_API_KEY")
    if not api_key:
        raise ConfigError("OPENAI_API_KEY environment variable is not set")
    return api_key


__all__ = [
    "CONFIG_FILENAMES",
    "find_config_file",
    "build_project_config",
    "load_project_config",
    "reset_config_cache",
    "get_openai_key",
]
