"""
log_config.py - Global logging configuration

Logs go to stderr, tool results go to stdout.

The MCP stdio transport owns stdout for JSON-RPC frames, so every log line
(ours and third-party) is routed to stderr:
- stdlib root logger gets a single stderr StreamHandler
- structlog renders plain text through that handler

Usage:
    from reviewer_mcp.log_config import configure_logging
    configure_logging(level="INFO")
    log = structlog.get_logger("reviewer.execution")
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

DEFAULT_LOG_LEVEL = "INFO"


class LiteLLMNoiseFilter(logging.Filter):
    """Drop litellm's per-request chatter below WARNING."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.lower().startswith("litellm") and record.levelno < logging.WARNING:
            return False
        return True


def resolve_log_level(level: str | None = None) -> str:
    """Pick the effective level: explicit argument, then REVIEWER_LOG_LEVEL, then INFO."""
    chosen = level or os.environ.get("REVIEWER_LOG_LEVEL") or DEFAULT_LOG_LEVEL
    return chosen.upper()


def configure_logging(level: str | None = None) -> None:
    """Configure global logging to send all logs to stderr.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Falls back to
            REVIEWER_LOG_LEVEL, then INFO.
    """
    log_level = getattr(logging, resolve_log_level(level), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.handlers = []

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.addFilter(LiteLLMNoiseFilter())
    stderr_handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(log_level)

    # No colors: ANSI codes on stderr confuse some MCP hosts' log panes
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


__all__ = ["configure_logging", "resolve_log_level", "DEFAULT_LOG_LEVEL"]
