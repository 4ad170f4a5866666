"""
music - Safety-gated Spotify control.

Modules:
- scripts.py: osascript command lines
- playlists.py: mood -> playlist catalog
- safety.py: SafetySnapshot, VolumePolicy, SafetyController, PlaybackPauser
- controller.py: MusicCommandBuilder, MusicTool, tool registration
"""

from .controller import (
    ACTIONS,
    MusicCommandBuilder,
    MusicOptions,
    MusicTool,
    music,
    register_music_tools,
)
from .playlists import DEFAULT_PLAYLISTS, build_playlist_catalog
from .safety import (
    DeviceStateReader,
    PlaybackPauser,
    SafetyController,
    SafetySnapshot,
    VolumeDecision,
    VolumePolicy,
    evaluate_volume_request,
)

__all__ = [
    "ACTIONS",
    "MusicCommandBuilder",
    "MusicOptions",
    "MusicTool",
    "music",
    "register_music_tools",
    "DEFAULT_PLAYLISTS",
    "build_playlist_catalog",
    "DeviceStateReader",
    "PlaybackPauser",
    "SafetyController",
    "SafetySnapshot",
    "VolumeDecision",
    "VolumePolicy",
    "evaluate_volume_request",
]
