"""Scheduled job probe backed by ``crontab -l``."""

from __future__ import annotations

from typing import Optional

from src.domain.entities.probe import Fact, Failed, ProbeOutcome, ScheduleInfo

from .command import run_command


def find_schedule(crontab: str, job_name: str) -> Optional[str]:
    """Return the five schedule fields of the first active line naming ``job_name``."""
    for line in crontab.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or job_name not in stripped:
            continue
        fields = stripped.split()
        if stripped.startswith("@"):
            return fields[0]
        return " ".join(fields[:5])
    return None


class ScheduleProbe:
    async def query(self, job_name: str, timeout: float) -> ProbeOutcome[ScheduleInfo]:
        outcome = await run_command(["crontab", "-l"], timeout)
        if not isinstance(outcome, Fact):
            return outcome

        result = outcome.value
        if result.returncode != 0:
            if "no crontab" in result.stderr.lower():
                return Fact(ScheduleInfo(configured=False))
            return Failed(f"crontab exited with {result.returncode}: {result.stderr}")

        schedule = find_schedule(result.stdout, job_name)
        return Fact(ScheduleInfo(configured=schedule is not None, schedule=schedule))
