"""Use cases exposing the unified fleet status."""

from __future__ import annotations

from typing import Optional

from src.application.dtos.status_dto import (
    LegacyStatusDTO,
    StatusSnapshotDTO,
    SubsystemStatusDTO,
)
from src.domain.entities.status import SubsystemKind
from src.domain.ports.status_aggregator import IStatusAggregator


class GetUnifiedStatusUseCase:
    """Use case responsible for returning the unified status snapshot."""

    def __init__(self, status_aggregator: IStatusAggregator) -> None:
        self._status_aggregator = status_aggregator

    async def execute(self, deadline: Optional[float] = None) -> StatusSnapshotDTO:
        snapshot = await self._status_aggregator.get_unified_status(deadline)
        return StatusSnapshotDTO.from_domain(snapshot)


class GetSubsystemStatusUseCase:
    """Use case returning the status of a single subsystem.

    Raises:
        UnknownSubsystemError: If ``name`` is not a monitored subsystem.
    """

    def __init__(self, status_aggregator: IStatusAggregator) -> None:
        self._status_aggregator = status_aggregator

    async def execute(
        self, name: str, deadline: Optional[float] = None
    ) -> SubsystemStatusDTO:
        kind = SubsystemKind.parse(name)
        status = await self._status_aggregator.get_subsystem_status(kind, deadline)
        return SubsystemStatusDTO.from_domain(status)


class GetLegacyStatusUseCase:
    """Use case mapping the snapshot onto the flat legacy status shape."""

    def __init__(self, status_aggregator: IStatusAggregator) -> None:
        self._status_aggregator = status_aggregator

    async def execute(self) -> LegacyStatusDTO:
        snapshot = await self._status_aggregator.get_unified_status()
        return LegacyStatusDTO.from_domain(snapshot)
