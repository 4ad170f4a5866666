# tools/music/playlists.py
"""
Mood -> playlist catalog.

Built-in moods can be overridden, and new ones added, through the `music.playlists`
section of `.reviewer.json`:

    {"music": {"playlists": {"focus": {"uri": "spotify:playlist:...", "name": "My Focus"}}}}
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ...config.models import MusicConfig, Playlist

DEFAULT_PLAYLISTS: Mapping[str, Playlist] = MappingProxyType(
    {
        "focus": Playlist(uri="spotify:playlist:37i9dQZF1DWZeKCadgRdKQ", name="Deep Focus"),
        "relax": Playlist(uri="spotify:playlist:37i9dQZF1DWU0ScTcjJBdj", name="Relax & Unwind"),
        "energize": Playlist(uri="spotify:playlist:37i9dQZF1DX3rxVfibe1L0", name="Mood Booster"),
        "chill": Playlist(uri="spotify:playlist:37i9dQZF1DX4WYpdgoIcn6", name="Chill Hits"),
        "work": Playlist(uri="spotify:playlist:37i9dQZF1DWZk0frd3wbHL", name="Productive Morning"),
    }
)


def build_playlist_catalog(music: MusicConfig | None = None) -> Mapping[str, Playlist]:
    """Defaults overlaid with configured playlists, frozen."""
    merged = dict(DEFAULT_PLAYLISTS)
    if music is not None:
        merged.update(music.playlists)
    return MappingProxyType(merged)


__all__ = ["DEFAULT_PLAYLISTS", "build_playlist_catalog"]
