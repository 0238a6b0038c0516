"""LocalProcessRunner, running one command to completion on the host.

Each call owns its subprocess and pipes; nothing is pooled or reused. The
timeout is a race between process exit and the timer: if the timer wins,
the process is killed and any output collected so far is discarded. A
cancelled caller also kills the process before the cancellation propagates.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from typing import Protocol

from agentwire.runtime.errors import CliSpawnError, CliTimeoutError
from agentwire.runtime.process.models import ExecutionRequest, ProcessResult

logger = logging.getLogger(__name__)


class ProcessRunner(Protocol):
    """Runs a command and returns its buffered output."""

    async def execute(self, request: ExecutionRequest) -> ProcessResult: ...


class LocalProcessRunner:
    """Host-local subprocess executor built on ``asyncio`` subprocesses."""

    async def execute(self, request: ExecutionRequest) -> ProcessResult:
        """Run *request* and wait for it to exit.

        Raises
        ------
        CliSpawnError
            If the process cannot be started.
        CliTimeoutError
            If the process outlives ``request.timeout``; it is killed first.
        """
        logger.debug("Spawning %s", request.command[0] if request.command else "<empty>")
        env = {**os.environ, **request.env} if request.env else None
        started = time.monotonic()

        try:
            proc = await asyncio.create_subprocess_exec(
                *request.command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
                cwd=request.cwd,
            )
        except (OSError, ValueError) as exc:
            raise CliSpawnError(str(exc)) from exc

        stdin_bytes = request.stdin.encode() if request.stdin is not None else b""
        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(input=stdin_bytes),
                timeout=request.timeout,
            )
        except TimeoutError:
            await _kill(proc)
            logger.warning("Process %s killed after %ss", request.command[0], request.timeout)
            raise CliTimeoutError(request.timeout) from None
        except asyncio.CancelledError:
            await _kill(proc)
            logger.debug("Process %s killed on cancellation", request.command[0])
            raise

        return ProcessResult(
            exit_code=proc.returncode or 0,
            stdout=stdout.decode(errors="replace") if stdout else "",
            stderr=stderr.decode(errors="replace") if stderr else "",
            duration=time.monotonic() - started,
        )


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        proc.kill()
    await proc.wait()
