# reviewer_mcp/rich_utils.py
"""
Rich Terminal Output Utilities

Startup banner, registration status lines and the configuration table.
All output goes to stderr; stdout carries the MCP JSON-RPC stream.
"""

from __future__ import annotations

from rich.box import ROUNDED
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config.models import ProjectConfig

console = Console(stderr=True)


def banner(
    title: str,
    role: str,
    emoji: str = "🔍",
    border_style: str = "green",
    title_style: str = "bold green",
) -> Panel:
    """
    Generate a styled server startup banner.

    Args:
        title: Server name/title
        role: Description of the server's role
        emoji: Emoji icon for the banner

    Returns:
        Panel renderable
    """
    content = Text()
    content.append(f"{emoji}  ", "cyan")
    content.append(title, title_style)
    content.append("\n\n", "")
    content.append(role, "dim")

    return Panel(
        content,
        title=f"[{title_style}]{title}[/]",
        subtitle="System Ready",
        border_style=border_style,
        box=ROUNDED,
        padding=(1, 2),
    )


def section(title: str, style: str = "rule.line") -> None:
    console.rule(title, style=style)


def tool_registered(module: str, count: int) -> None:
    console.print(f"[green]✓[/] [bold]{module}[/] tools registered ({count} tools)")


def tool_failed(module: str, error: str) -> None:
    console.print(f"[red]✗[/] [bold]{module}[/] tools failed: {error}")


def config_table(config: ProjectConfig) -> Table:
    """Effective configuration as a two-column table (camelCase keys)."""
    table = Table(title="reviewer-mcp configuration", box=ROUNDED, style="cyan")
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value")

    data = config.model_dump(by_alias=True, exclude={"music"})
    for key, value in data.items():
        table.add_row(key, str(value))

    music = config.music
    table.add_row("music.safeVolume", f"{music.safe_volume}%")
    table.add_row("music.volumeIncrement", f"{music.volume_increment}%")
    for mood, playlist in sorted(music.playlists.items()):
        table.add_row(f"music.playlists.{mood}", f"{playlist.name} ({playlist.uri})")
    return table


__all__ = ["console", "banner", "section", "tool_registered", "tool_failed", "config_table"]
