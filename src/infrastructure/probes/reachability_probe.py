"""Host reachability probe backed by a single ICMP ``ping``."""

from __future__ import annotations

import math

from src.domain.entities.probe import Fact, Failed, ProbeOutcome, Reachability

from .command import run_command


class ReachabilityProbe:
    async def query(self, host: str, timeout: float) -> ProbeOutcome[Reachability]:
        # ping waits whole seconds; half a second is kept for process startup.
        wait = str(max(1, math.floor(timeout - 0.5)))
        outcome = await run_command(["ping", "-c", "1", "-W", wait, host], timeout)
        if not isinstance(outcome, Fact):
            return outcome

        result = outcome.value
        if result.returncode in (0, 1):
            return Fact(Reachability(host=host, reachable=result.returncode == 0))
        return Failed(f"ping exited with {result.returncode}: {result.stderr}")
