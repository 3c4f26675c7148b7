"""Use cases exposing the read-only recording catalog."""

from __future__ import annotations

from typing import Optional

from src.application.dtos.catalog_dto import (
    CamerasDTO,
    DailyRecordingsDTO,
    LogsDTO,
    NasDetailsDTO,
    RecentSamplesDTO,
)
from src.domain.ports.recording_catalog import IRecordingCatalog
from src.domain.services.catalog_parser import normalize_date, validate_camera_id


class GetRecentSamplesUseCase:
    def __init__(self, recording_catalog: IRecordingCatalog) -> None:
        self._recording_catalog = recording_catalog

    async def execute(self, limit: Optional[int] = None) -> RecentSamplesDTO:
        samples = await self._recording_catalog.recent_samples(limit)
        return RecentSamplesDTO.from_domain(samples)


class ListCamerasUseCase:
    """Use case listing cameras with their latest recordings.

    ``search`` keeps cameras whose id contains it, case-insensitively.
    """

    def __init__(self, recording_catalog: IRecordingCatalog) -> None:
        self._recording_catalog = recording_catalog

    async def execute(self, search: Optional[str] = None) -> CamerasDTO:
        cameras = await self._recording_catalog.cameras(search)
        return CamerasDTO.from_domain(cameras)


class GetCameraRecordingsUseCase:
    """Use case returning one camera's recordings for a day.

    Raises:
        InvalidQueryError: If the camera id, date or limit is unusable.
    """

    def __init__(self, recording_catalog: IRecordingCatalog) -> None:
        self._recording_catalog = recording_catalog

    async def execute(
        self, camera_id: str, date: Optional[str] = None, limit: int = 100
    ) -> DailyRecordingsDTO:
        camera_id = validate_camera_id(camera_id)
        day = normalize_date(date)
        recordings = await self._recording_catalog.recordings_by_date(camera_id, day, limit)
        return DailyRecordingsDTO.from_domain(camera_id, day, recordings)


class GetRecentLogsUseCase:
    def __init__(self, recording_catalog: IRecordingCatalog) -> None:
        self._recording_catalog = recording_catalog

    async def execute(self, lines: int = 10) -> LogsDTO:
        return LogsDTO.from_domain(await self._recording_catalog.recent_logs(lines))


class GetNasDetailsUseCase:
    def __init__(self, recording_catalog: IRecordingCatalog) -> None:
        self._recording_catalog = recording_catalog

    async def execute(self) -> NasDetailsDTO:
        return NasDetailsDTO.from_domain(await self._recording_catalog.nas_details())
