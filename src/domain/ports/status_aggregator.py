"""Domain service abstraction for the unified status aggregator."""

from __future__ import annotations

from typing import Optional, Protocol

from src.domain.entities.status import StatusSnapshot, SubsystemKind, SubsystemStatus


class IStatusAggregator(Protocol):
    """Interface for retrieving the unified fleet status."""

    async def get_unified_status(
        self, deadline: Optional[float] = None
    ) -> StatusSnapshot:
        """Collect every subsystem within ``deadline`` seconds and evaluate health."""
        ...

    async def get_subsystem_status(
        self, kind: SubsystemKind, deadline: Optional[float] = None
    ) -> SubsystemStatus:
        """Collect a single subsystem within ``deadline`` seconds."""
        ...
