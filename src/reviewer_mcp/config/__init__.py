"""
config - Project configuration.

Modules:
- models.py: pydantic schema (ProjectConfig, MusicConfig, Playlist)
- settings.py: cached loader for `.reviewer.json` / `.reviewer.yaml`
"""

from .models import MusicConfig, Playlist, ProjectConfig
from .settings import (
    CONFIG_FILENAMES,
    build_project_config,
    find_config_file,
    get_openai_key,
    load_project_config,
    reset_config_cache,
)

__all__ = [
    "MusicConfig",
    "Playlist",
    "ProjectConfig",
    "CONFIG_FILENAMES",
    "build_project_config",
    "find_config_file",
    "get_openai_key",
    "load_project_config",
    "reset_config_cache",
]
