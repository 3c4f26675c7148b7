"""Process presence probe backed by ``pgrep`` and ``ps``."""

from __future__ import annotations

from time import perf_counter
from typing import List, Sequence, Tuple

from src.domain.entities.probe import Fact, Failed, ProbeOutcome, ProcessInfo

from .command import run_command

# Below this remaining budget the per-process details are skipped.
_MIN_DETAIL_BUDGET = 0.2


class ProcessProbe:
    """Count processes whose command line matches a pattern.

    Ages and command lines are fetched for at most ``detail_limit``
    processes; failing to fetch them does not fail the probe.
    """

    def __init__(self, *, detail_limit: int = 5) -> None:
        self._detail_limit = detail_limit

    async def query(self, pattern: str, timeout: float) -> ProbeOutcome[ProcessInfo]:
        start = perf_counter()
        outcome = await run_command(["pgrep", "-f", pattern], timeout)
        if not isinstance(outcome, Fact):
            return outcome

        result = outcome.value
        if result.returncode == 1:
            return Fact(ProcessInfo(count=0))
        if result.returncode != 0:
            return Failed(f"pgrep exited with {result.returncode}: {result.stderr}")

        pids = parse_pids(result.stdout)
        if not pids:
            return Fact(ProcessInfo(count=0))

        remaining = timeout - (perf_counter() - start)
        ages: Tuple[int, ...] = ()
        commands: Tuple[str, ...] = ()
        if remaining > _MIN_DETAIL_BUDGET and self._detail_limit > 0:
            ages, commands = await self._details(pids[: self._detail_limit], remaining)

        return Fact(
            ProcessInfo(count=len(pids), pids=tuple(pids), ages=ages, commands=commands)
        )

    async def _details(
        self, pids: Sequence[int], timeout: float
    ) -> Tuple[Tuple[int, ...], Tuple[str, ...]]:
        outcome = await run_command(
            ["ps", "-o", "pid=,etimes=,args=", "-p", ",".join(str(pid) for pid in pids)],
            timeout,
        )
        if not isinstance(outcome, Fact):
            return (), ()

        by_pid = parse_ps_rows(outcome.value.stdout)
        # Processes may exit between pgrep and ps; keep pid order and skip those.
        ages = tuple(by_pid[pid][0] for pid in pids if pid in by_pid)
        commands = tuple(by_pid[pid][1] for pid in pids if pid in by_pid)
        return ages, commands


def parse_pids(output: str) -> List[int]:
    return [int(line) for line in output.split() if line.strip().isdigit()]


def parse_ps_rows(output: str) -> dict:
    """Map pid -> (elapsed seconds, command) from ``ps -o pid=,etimes=,args=``."""
    rows = {}
    for line in output.splitlines():
        parts = line.split(None, 2)
        if len(parts) < 2 or not (parts[0].isdigit() and parts[1].isdigit()):
            continue
        rows[int(parts[0])] = (int(parts[1]), parts[2] if len(parts) > 2 else "")
    return rows
