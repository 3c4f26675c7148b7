"""Domain abstraction for subsystem collectors."""

from __future__ import annotations

from typing import Protocol

from src.domain.entities.status import SubsystemKind, SubsystemStatus


class ISubsystemCollector(Protocol):
    """Produces the status of one subsystem.

    ``collect`` always returns; failures are reported through the returned
    status rather than raised.
    """

    kind: SubsystemKind

    async def collect(self) -> SubsystemStatus:
        ...
