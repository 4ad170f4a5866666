"""
tools - MCP tool implementations.

Modules:
- base.py: ExecTool / AITool composition helpers
- tester.py: run_tests
- linter.py: run_linter
- notify.py: notify (speech, pauses music)
- review.py: generate_spec, review_spec, review_code
- memory.py: memory
- music/: safety-gated Spotify control

Each module exposes `register_<name>_tools(mcp)`.
"""

from .linter import register_linter_tools
from .memory import register_memory_tools
from .music import register_music_tools
from .notify import register_notify_tools
from .review import register_review_tools
from .tester import register_tester_tools

__all__ = [
    "register_linter_tools",
    "register_memory_tools",
    "register_music_tools",
    "register_notify_tools",
    "register_review_tools",
    "register_tester_tools",
]
