"""Log tail probe backed by ``tail -n``."""

from __future__ import annotations

from src.domain.entities.probe import Fact, Failed, ProbeOutcome, TextTail

from .command import run_command


class LogTailProbe:
    async def query(self, path: str, lines: int, timeout: float) -> ProbeOutcome[TextTail]:
        outcome = await run_command(["tail", "-n", str(lines), path], timeout)
        if not isinstance(outcome, Fact):
            return outcome

        result = outcome.value
        if result.returncode != 0:
            if "No such file or directory" in result.stderr:
                return Fact(TextTail(found=False))
            return Failed(f"tail exited with {result.returncode}: {result.stderr}")

        return Fact(TextTail(lines=tuple(line for line in result.stdout.splitlines() if line)))
