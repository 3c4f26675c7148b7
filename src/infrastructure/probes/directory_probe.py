"""Subdirectory listing probe backed by ``find -maxdepth 1``."""

from __future__ import annotations

import os

from src.domain.entities.probe import DirectoryListing, Fact, Failed, ProbeOutcome

from .command import run_command
from .file_count_probe import root_missing, walk_failure


class DirectoryListProbe:
    async def query(self, path: str, timeout: float) -> ProbeOutcome[DirectoryListing]:
        argv = [
            "find", os.path.normpath(path),
            "-mindepth", "1",
            "-maxdepth", "1",
            "-type", "d",
            "-printf", "%f\\n",
        ]
        outcome = await run_command(argv, timeout)
        if not isinstance(outcome, Fact):
            return outcome

        result = outcome.value
        reason = walk_failure(result)
        if reason:
            return Failed(reason)
        if root_missing(result, path):
            return Fact(DirectoryListing(root_exists=False))

        names = sorted(name for name in result.stdout.splitlines() if name)
        return Fact(DirectoryListing(names=tuple(names)))
