"""
mcp_core/formatting.py
Render command outcomes as bounded, human-readable reports.

Two policies:
- summary: status tag plus the first line of the relevant stream, used for
  successful runs
- full: status tag plus the whole error-preferring stream, ANSI-stripped and
  capped at 100 KiB (head and tail kept), used for failures and for runs where
  the caller asked for the full report

Every function here is pure; the same input always renders the same text.
"""

from __future__ import annotations

import re

from .execution import ExecutionOutcome

# ESC followed by a single-char sequence, or a CSI sequence
ANSI_REGEX = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

MAX_OUTPUT_SIZE = 100 * 1024
MAX_LINE_LENGTH = 80


def strip_ansi(text: str) -> str:
    return ANSI_REGEX.sub("", text)


def truncate_output(text: str, max_size: int = MAX_OUTPUT_SIZE) -> str:
    """Keep the head and tail of oversized output with a marker in between.

    The first and last `max_size // 2` characters survive; the marker records
    how many were dropped.
    """
    if len(text) <= max_size:
        return text

    half = max_size // 2
    dropped = len(text) - max_size
    return f"{text[:half]}\n\n[... truncated {dropped} bytes ...]\n\n{text[len(text) - half:]}"


def truncate_line(line: str, max_length: int = MAX_LINE_LENGTH) -> str:
    if len(line) <= max_length:
        return line
    return line[: max_length - 3] + "..."


def first_line(text: str) -> str:
    stripped = text.strip()
    return stripped.split("\n", 1)[0] if stripped else ""


def status_tag(exit_code: int) -> str:
    return "Success" if exit_code == 0 else f"Failed (exit {exit_code})"


def format_summary(outcome: ExecutionOutcome, action_name: str) -> str:
    """Summary policy: `<tag>: <action> | <first line>`.

    The first line comes from stdout on success and stderr on failure.
    """
    parts = [f"{status_tag(outcome.exit_code)}: {action_name}"]
    stream = outcome.stdout if outcome.exit_code == 0 else outcome.stderr
    line = first_line(stream)
    if line:
        parts.append(truncate_line(line))
    return " | ".join(parts)


def format_full(outcome: ExecutionOutcome, action_name: str) -> str:
    """Full policy: status line, blank line, then the whole stream.

    stderr wins when it has content, otherwise stdout is shown.
    """
    header = f"{status_tag(outcome.exit_code)}: {action_name}"
    body = outcome.stderr.strip() or outcome.stdout.strip()
    body = truncate_output(strip_ansi(body))
    if not body:
        return header
    return f"{header}\n\n{body}"


def format_exec_result(
    outcome: ExecutionOutcome,
    action_name: str,
    force_full: bool = False,
) -> str:
    """Pick the policy: summary for a clean success, full otherwise."""
    if outcome.exit_code == 0 and not force_full:
        return format_summary(outcome, action_name)
    return format_full(outcome, action_name)


__all__ = [
    "ANSI_REGEX",
    "MAX_OUTPUT_SIZE",
    "MAX_LINE_LENGTH",
    "strip_ansi",
    "truncate_output",
    "truncate_line",
    "first_line",
    "status_tag",
    "format_summary",
    "format_full",
    "format_exec_result",
]
