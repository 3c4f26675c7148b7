"""Bounded execution helpers shared by the concrete probes."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Sequence

from src.domain.entities.probe import Fact, Failed, ProbeOutcome, TimedOut
from src.shared import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str


async def run_command(argv: Sequence[str], timeout: float) -> ProbeOutcome[CommandResult]:
    """Run ``argv`` without a shell, killing it if it outlives ``timeout``.

    A non-zero exit code is still a ``Fact``; callers decide what it means.
    """

    program = argv[0]
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        logger.warning("probe.command.missing", command=program)
        return Failed(f"{program} not available")
    except OSError as exc:
        logger.warning("probe.command.spawn_failed", command=program, error=str(exc))
        return Failed(f"{program} could not be started: {exc}")

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("probe.command.timeout", command=program, timeout=timeout)
        _kill(process)
        await process.wait()
        return TimedOut(timeout)
    except asyncio.CancelledError:
        _kill(process)
        raise

    return Fact(
        CommandResult(
            returncode=process.returncode if process.returncode is not None else -1,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace").strip(),
        )
    )


def _kill(process: asyncio.subprocess.Process) -> None:
    try:
        process.kill()
    except ProcessLookupError:
        pass
