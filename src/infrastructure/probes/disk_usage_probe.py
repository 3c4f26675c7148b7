"""Disk usage probe backed by ``df -P -k``."""

from __future__ import annotations

import re
from typing import Optional

from src.domain.entities.probe import DiskUsage, Fact, Failed, ProbeOutcome

from .command import run_command

# POSIX df row: <filesystem> <total> <used> <available> <capacity>% <mount>
_DF_ROW = re.compile(r"\s(\d+)\s+(\d+)\s+(\d+)\s+\d+%\s")


def parse_df(output: str) -> Optional[DiskUsage]:
    """Usage the way ``df`` reports it: used / (used + available).

    Sizes are in 1024-byte blocks. Returns ``None`` when no data row is found.
    """

    for line in output.splitlines()[1:]:
        match = _DF_ROW.search(f"{line} ")
        if not match:
            continue
        total, used, available = (int(group) * 1024 for group in match.groups())
        usable = used + available
        percent = (used / usable * 100) if usable else 0.0
        return DiskUsage(
            used_percent=round(percent, 1),
            available_bytes=available,
            total_bytes=total,
        )
    return None


class DiskUsageProbe:
    async def query(self, path: str, timeout: float) -> ProbeOutcome[DiskUsage]:
        outcome = await run_command(["df", "-P", "-k", path], timeout)
        if not isinstance(outcome, Fact):
            return outcome

        result = outcome.value
        if result.returncode != 0:
            return Failed(f"df exited with {result.returncode}: {result.stderr}")
        usage = parse_df(result.stdout)
        if usage is None:
            return Failed(f"unexpected df output for {path}")
        return Fact(usage)
