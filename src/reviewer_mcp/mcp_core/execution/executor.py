"""
execution/executor.py
Shell command execution with bounded capture and a wall-clock timeout.

ProcessRunner.run() never raises for anything the command does: nonzero exit,
launch failure, timeout and cancellation all come back as an ExecutionOutcome.

Usage:
    from reviewer_mcp.mcp_core.execution import ProcessRunner

    runner = ProcessRunner(timeout=120)
    outcome = await runner.run("npm test", cwd="/path/to/project")
    if outcome.exit_code != 0:
        print(outcome.stderr)
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import signal
import sys
from dataclasses import dataclass, field

import structlog

log = structlog.get_logger("reviewer.execution")

MAX_CAPTURE_BYTES = 10 * 1024 * 1024
DEFAULT_TIMEOUT = 300.0

LAUNCH_FAILURE_EXIT_CODE = 1
TIMEOUT_EXIT_CODE = 124
CANCELLED_EXIT_CODE = 130

_READ_CHUNK = 64 * 1024
_REAP_TIMEOUT = 5.0


@dataclass(frozen=True, slots=True)
class ExecutionOutcome:
    """Result of one command invocation."""

    stdout: str
    stderr: str
    exit_code: int
    timed_out: bool = False
    truncated: bool = False

    @property
    def success(self) -> bool:
        return self.exit_code == 0


@dataclass(slots=True)
class _CappedBuffer:
    """Keeps the first `limit` bytes of a stream and counts the rest."""

    limit: int
    chunks: list[bytes] = field(default_factory=list)
    size: int = 0
    overflowed: bool = False

    def feed(self, data: bytes) -> None:
        room = self.limit - self.size
        if room > 0:
            kept = data[:room]
            self.chunks.append(kept)
            self.size += len(kept)
        if len(data) > max(room, 0):
            self.overflowed = True

    def text(self) -> str:
        return b"".join(self.chunks).decode("utf-8", errors="replace")


async def _drain(stream: asyncio.StreamReader | None, buffer: _CappedBuffer) -> None:
    # Keep reading past the cap so the child never blocks on a full pipe
    if stream is None:
        return
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            break
        buffer.feed(chunk)


class ProcessRunner:
    """Runs shell command strings and captures their outcome.

    Args:
        timeout: Default wall-clock limit in seconds for each command.
        max_capture_bytes: Per-stream capture cap; output beyond it is discarded.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_capture_bytes: int = MAX_CAPTURE_BYTES,
    ) -> None:
        self.timeout = timeout
        self.max_capture_bytes = max_capture_bytes

    async def run(
        self,
        command: str,
        cwd: str | os.PathLike[str] | None = None,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> ExecutionOutcome:
        """Run a command through the shell.

        Args:
            command: Full command line, interpreted by the system shell.
            cwd: Working directory (defaults to the server's cwd).
            env: Environment for the child (defaults to the server's environment).
            timeout: Override for the runner's default timeout.

        Returns:
            ExecutionOutcome with stdout, stderr and exit code.
        """
        limit = timeout if timeout is not None else self.timeout
        log.info("execution.running", command=command, cwd=str(cwd) if cwd else None)

        try:
            process = await asyncio.create_subprocess_shell(
                command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=env,
                start_new_session=sys.platform != "win32",
            )
        except (OSError, ValueError) as e:
            log.warning("execution.launch_failed", command=command, error=str(e))
            return ExecutionOutcome(
                stdout="",
                stderr=f"Failed to launch command: {e}",
                exit_code=LAUNCH_FAILURE_EXIT_CODE,
            )

        out_buf = _CappedBuffer(self.max_capture_bytes)
        err_buf = _CappedBuffer(self.max_capture_bytes)

        async def _collect() -> int:
            await asyncio.gather(
                _drain(process.stdout, out_buf),
                _drain(process.stderr, err_buf),
            )
            return await process.wait()

        try:
            exit_code = await asyncio.wait_for(_collect(), timeout=limit)
        except asyncio.TimeoutError:
            await self._terminate(process)
            log.warning("execution.timeout", command=command, timeout=limit)
            return self._outcome(
                out_buf,
                err_buf,
                TIMEOUT_EXIT_CODE,
                note=f"Command timed out after {limit:g}s",
                timed_out=True,
            )
        except asyncio.CancelledError:
            await self._terminate(process)
            log.warning("execution.cancelled", command=command)
            return self._outcome(out_buf, err_buf, CANCELLED_EXIT_CODE, note="Command cancelled")

        outcome = self._outcome(out_buf, err_buf, exit_code)
        log.info(
            "execution.complete",
            command=command,
            exit_code=exit_code,
            truncated=outcome.truncated,
        )
        return outcome

    @staticmethod
    def _outcome(
        out_buf: _CappedBuffer,
        err_buf: _CappedBuffer,
        exit_code: int,
        note: str = "",
        timed_out: bool = False,
    ) -> ExecutionOutcome:
        stderr = err_buf.text()
        if note:
            stderr = f"{stderr.rstrip()}\n{note}" if stderr.strip() else note
        return ExecutionOutcome(
            stdout=out_buf.text(),
            stderr=stderr,
            exit_code=exit_code,
            timed_out=timed_out,
            truncated=out_buf.overflowed or err_buf.overflowed,
        )

    @staticmethod
    async def _terminate(process: asyncio.subprocess.Process) -> None:
        """Kill the command's whole process group and reap it."""
        if process.returncode is not None:
            return
        try:
            if sys.platform != "win32":
                os.killpg(process.pid, signal.SIGKILL)
            else:
                process.kill()
        except ProcessLookupError:
            pass
        except OSError as e:
            log.warning("execution.kill_failed", pid=process.pid, error=str(e))
            with contextlib.suppress(ProcessLookupError):
                process.kill()
        try:
            await asyncio.wait_for(process.wait(), timeout=_REAP_TIMEOUT)
        except asyncio.TimeoutError:
            log.warning("execution.reap_timeout", pid=process.pid)


__all__ = [
    "ExecutionOutcome",
    "ProcessRunner",
    "MAX_CAPTURE_BYTES",
    "DEFAULT_TIMEOUT",
    "LAUNCH_FAILURE_EXIT_CODE",
    "TIMEOUT_EXIT_CODE",
    "CANCELLED_EXIT_CODE",
]
