"""Mount point probe backed by ``mountpoint -q``."""

from __future__ import annotations

from src.domain.entities.probe import Fact, MountInfo, ProbeOutcome

from .command import run_command


class MountProbe:
    async def query(self, path: str, timeout: float) -> ProbeOutcome[MountInfo]:
        outcome = await run_command(["mountpoint", "-q", path], timeout)
        if not isinstance(outcome, Fact):
            return outcome
        # Any non-zero exit (not a mount point, missing path) means not mounted.
        return Fact(MountInfo(path=path, mounted=outcome.value.returncode == 0))
