"""
execution/protocols.py
Protocol definitions for the execution layer.

Tools depend on these shapes rather than on concrete classes, so tests can
hand in a scripted runner and builders stay plain values.
"""

from __future__ import annotations

import os
from typing import Any, Protocol, runtime_checkable

from .executor import ExecutionOutcome


@runtime_checkable
class IProcessRunner(Protocol):
    """Anything that can run a command string and report its outcome."""

    async def run(
        self,
        command: str,
        cwd: str | os.PathLike[str] | None = None,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> ExecutionOutcome: ...


@runtime_checkable
class ICommandBuilder(Protocol):
    """Turns typed tool arguments into one executable command line."""

    action_name: str

    def build_command(self, args: Any) -> str: ...

    def wants_full_report(self, args: Any) -> bool: ...


__all__ = ["IProcessRunner", "ICommandBuilder"]
