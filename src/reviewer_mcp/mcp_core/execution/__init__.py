"""
execution - Command execution module.

Modules:
- executor.py: ProcessRunner and ExecutionOutcome
- protocols.py: IProcessRunner, ICommandBuilder protocols

Usage:
    from reviewer_mcp.mcp_core.execution import ProcessRunner

    outcome = await ProcessRunner().run("npm test")
"""

from .executor import (
    CANCELLED_EXIT_CODE,
    DEFAULT_TIMEOUT,
    LAUNCH_FAILURE_EXIT_CODE,
    MAX_CAPTURE_BYTES,
    TIMEOUT_EXIT_CODE,
    ExecutionOutcome,
    ProcessRunner,
)
from .protocols import ICommandBuilder, IProcessRunner

__all__ = [
    # Protocols
    "ICommandBuilder",
    "IProcessRunner",
    # Executor
    "ExecutionOutcome",
    "ProcessRunner",
    "MAX_CAPTURE_BYTES",
    "DEFAULT_TIMEOUT",
    "LAUNCH_FAILURE_EXIT_CODE",
    "TIMEOUT_EXIT_CODE",
    "CANCELLED_EXIT_CODE",
]
