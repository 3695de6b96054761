"""Supervisor de procesos de desarrollo (dev server + watcher de estilos).

Rules:
- Every process runs concurrently and inherits the terminal.
- The first process to exit decides the exit code; the others are terminated.
- Ctrl-C terminates everything and returns 130.
"""

from __future__ import annotations

import asyncio
import signal
from typing import Sequence

from loguru import logger

from core.domain.models import CommandSpec
from core.errors import ToolNotFoundError, exit_status

INTERRUPTED_EXIT_CODE = 130


async def _spawn(spec: CommandSpec) -> asyncio.subprocess.Process:
    logger.info("[{}] $ {}", spec.name, spec.display())
    try:
        return await asyncio.create_subprocess_exec(*spec.argv, cwd=str(spec.cwd))
    except FileNotFoundError as exc:
        raise ToolNotFoundError(spec.argv[0]) from exc


async def _terminate(proc: asyncio.subprocess.Process, *, grace_seconds: float) -> None:
    if proc.returncode is not None:
        return
    try:
        proc.send_signal(signal.SIGTERM)
    except ProcessLookupError:
        return
    try:
        await asyncio.wait_for(proc.wait(), timeout=grace_seconds)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()


async def supervise(specs: Sequence[CommandSpec], *, grace_seconds: float = 5.0) -> int:
    """Run `specs` together until one exits; return that exit code."""

    procs: list[asyncio.subprocess.Process] = []
    try:
        for spec in specs:
            procs.append(await _spawn(spec))

        waiters = {asyncio.ensure_future(proc.wait()): spec for proc, spec in zip(procs, specs)}
        done, pending = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()

        first = next(iter(done))
        code = exit_status(first.result())
        logger.info("[{}] exited with status {}; stopping the rest", waiters[first].name, code)
        return code
    finally:
        for proc in procs:
            await _terminate(proc, grace_seconds=grace_seconds)


def run_dev_processes(specs: Sequence[CommandSpec], *, grace_seconds: float = 5.0) -> int:
    try:
        return asyncio.run(supervise(specs, grace_seconds=grace_seconds))
    except KeyboardInterrupt:
        return INTERRUPTED_EXIT_CODE
