"""
cli.py - reviewer-mcp command line

Usage:
    reviewer-mcp serve                      # stdio (MCP clients)
    reviewer-mcp serve --transport sse      # local debugging
    reviewer-mcp config                     # show effective configuration

stdout belongs to the MCP transport; the banner, tables and logs go to stderr.
"""

from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel

from .log_config import configure_logging
from .mcp_core.errors import ConfigError
from .rich_utils import banner, config_table, console, section

app = typer.Typer(
    name="reviewer-mcp",
    help="MCP tool server for spec generation, code review, tests, linting, notifications and music",
    add_completion=False,
)


class TransportMode(str, Enum):
    stdio = "stdio"
    sse = "sse"


@app.command("serve", help="Start the reviewer MCP server")
def serve(
    transport: TransportMode = typer.Option(
        TransportMode.stdio,
        "--transport",
        "-t",
        help="Communication transport mode",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (default: $REVIEWER_LOG_LEVEL or INFO)",
    ),
) -> None:
    configure_logging(level=log_level)
    console.print(banner("Reviewer MCP Server", "Specs, reviews, tests, lint, notifications and safe music"))
    section("Initializing Tools...")

    # Importing the server registers the tools
    from .server import mcp

    try:
        mcp.run(transport=transport.value)
    except KeyboardInterrupt:
        sys.exit(0)


@app.command("config", help="Show the effective configuration")
def show_config(
    project_root: Optional[Path] = typer.Option(
        None,
        "--project-root",
        "-p",
        help="Directory containing .reviewer.json (default: current directory)",
    ),
) -> None:
    from .config.settings import load_project_config

    try:
        config = load_project_config(project_root)
    except ConfigError as e:
        console.print(Panel(f"[bold red]Configuration Error:[/bold red] {e}", style="red"))
        raise typer.Exit(code=1)
    console.print(config_table(config))


def main() -> None:
    """Entry point for `python -m reviewer_mcp`."""
    app()


__all__ = ["app", "main", "serve", "show_config"]
