# tools/music/scripts.py
"""
AppleScript command lines for Spotify and system audio.

Every helper returns a complete shell command (`osascript -e '<script>'`)
ready for ProcessRunner.run().
"""

from __future__ import annotations

import shlex

SPOTIFY_APP = "Spotify"


def osascript(script: str) -> str:
    return f"osascript -e {shlex.quote(script)}"


def applescript_string(value: str) -> str:
    """Quote `value` as an AppleScript string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def tell_spotify(statement: str) -> str:
    return osascript(f'tell application "{SPOTIFY_APP}" to {statement}')


# State queries
IS_MUTED = osascript("output muted of (get volume settings)")
IS_SPOTIFY_RUNNING = osascript(
    f'tell application "System Events" to (name of processes) contains "{SPOTIFY_APP}"'
)
PLAYER_STATE = tell_spotify("player state as string")
SPOTIFY_VOLUME = tell_spotify("sound volume")

# Playback control
ACTIVATE = tell_spotify("activate")
PLAY = tell_spotify("play")
PAUSE = tell_spotify("pause")
PLAYPAUSE = tell_spotify("playpause")
NEXT_TRACK = tell_spotify("next track")
PREVIOUS_TRACK = tell_spotify("previous track")
MUTE = tell_spotify("set sound volume to 0")

NOW_PLAYING = osascript(
    f"""tell application "{SPOTIFY_APP}"
  if player state is playing then
    set trackName to name of current track
    set artistName to artist of current track
    set albumName to album of current track
    return "Now playing: " & trackName & " by " & artistName & " from " & albumName
  else
    return "Spotify is not playing"
  end if
end tell"""
)


def play_track(uri: str) -> str:
    return tell_spotify(f"play track {applescript_string(uri)}")


def set_volume(level: int) -> str:
    return tell_spotify(f"set sound volume to {level}")


__all__ = [
    "SPOTIFY_APP",
    "osascript",
    "applescript_string",
    "tell_spotify",
    "IS_MUTED",
    "IS_SPOTIFY_RUNNING",
    "PLAYER_STATE",
    "SPOTIFY_VOLUME",
    "ACTIVATE",
    "PLAY",
    "PAUSE",
    "PLAYPAUSE",
    "NEXT_TRACK",
    "PREVIOUS_TRACK",
    "MUTE",
    "NOW_PLAYING",
    "play_track",
    "set_volume",
]
