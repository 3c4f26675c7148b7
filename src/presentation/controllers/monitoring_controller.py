"""
Monitoring Router - Presentation Layer

This module defines the FastAPI router for the unified status endpoints
and the read-only recording catalog views of the dashboard.
"""

from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.application.dtos.catalog_dto import (
    CamerasDTO,
    DailyRecordingsDTO,
    LogsDTO,
    NasDetailsDTO,
    RecentSamplesDTO,
)
from src.application.dtos.health_dto import ModuleHealthDTO
from src.application.dtos.status_dto import (
    LegacyStatusDTO,
    StatusSnapshotDTO,
    SubsystemStatusDTO,
)
from src.application.use_cases.catalog_use_cases import (
    GetCameraRecordingsUseCase,
    GetNasDetailsUseCase,
    GetRecentLogsUseCase,
    GetRecentSamplesUseCase,
    ListCamerasUseCase,
)
from src.application.use_cases.status_use_cases import (
    GetLegacyStatusUseCase,
    GetSubsystemStatusUseCase,
    GetUnifiedStatusUseCase,
)
from src.domain.entities.errors import (
    CatalogUnavailableError,
    InvalidQueryError,
    UnknownSubsystemError,
)
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/monitoring", tags=["Monitoring"])

_DEADLINE_QUERY = Query(
    None, gt=0, le=60, description="Override the global deadline, in seconds"
)


@router.get("/unified-status", response_model=StatusSnapshotDTO)
@inject
async def unified_status(
    deadline: Optional[float] = _DEADLINE_QUERY,
    get_unified_status_use_case: GetUnifiedStatusUseCase = Depends(
        Provide["get_unified_status_use_case"]
    ),
) -> StatusSnapshotDTO:
    """
    Return the unified status of every monitored subsystem.

    The response always contains all five subsystems; subsystems that
    could not be checked in time are reported as ``unknown``.
    """
    try:
        snapshot = await get_unified_status_use_case.execute(deadline)
        logger.debug(
            "monitoring.unified_status.success",
            severity=snapshot.overall.severity.value,
        )
        return snapshot
    except Exception as exc:  # pragma: no cover - defensive logging path
        logger.error("monitoring.unified_status.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve unified status",
        ) from exc


@router.get("/status", response_model=LegacyStatusDTO)
@inject
async def legacy_status(
    get_legacy_status_use_case: GetLegacyStatusUseCase = Depends(
        Provide["get_legacy_status_use_case"]
    ),
) -> LegacyStatusDTO:
    """Return the flat status used by the older dashboard pages."""
    try:
        return await get_legacy_status_use_case.execute()
    except Exception as exc:  # pragma: no cover - defensive logging path
        logger.error("monitoring.status.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve system status",
        ) from exc


@router.get("/systems/{name}", response_model=SubsystemStatusDTO)
@inject
async def subsystem_status(
    name: str,
    deadline: Optional[float] = _DEADLINE_QUERY,
    get_subsystem_status_use_case: GetSubsystemStatusUseCase = Depends(
        Provide["get_subsystem_status_use_case"]
    ),
) -> SubsystemStatusDTO:
    """Return the status of a single subsystem, e.g. ``transferService``."""
    try:
        return await get_subsystem_status_use_case.execute(name, deadline)
    except UnknownSubsystemError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


def _unavailable(event: str, exc: CatalogUnavailableError) -> HTTPException:
    logger.warning(event, error=exc.message)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message
    )


@router.get("/recent-samples", response_model=RecentSamplesDTO)
@inject
async def recent_samples(
    limit: Optional[int] = Query(None, ge=1, le=200, description="Maximum samples"),
    get_recent_samples_use_case: GetRecentSamplesUseCase = Depends(
        Provide["get_recent_samples_use_case"]
    ),
) -> RecentSamplesDTO:
    """Samples extracted within the last hour, newest first."""
    try:
        return await get_recent_samples_use_case.execute(limit)
    except CatalogUnavailableError as exc:
        raise _unavailable("monitoring.recent_samples.failure", exc) from exc


@router.get("/cameras", response_model=CamerasDTO)
@inject
async def cameras(
    search: Optional[str] = Query(None, max_length=64, description="Camera id filter"),
    list_cameras_use_case: ListCamerasUseCase = Depends(
        Provide["list_cameras_use_case"]
    ),
) -> CamerasDTO:
    """Cameras with their latest recordings, recording cameras first."""
    try:
        return await list_cameras_use_case.execute(search)
    except CatalogUnavailableError as exc:
        raise _unavailable("monitoring.cameras.failure", exc) from exc


@router.get("/camera/{camera_id}/recordings", response_model=DailyRecordingsDTO)
@inject
async def camera_recordings(
    camera_id: str,
    date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today (UTC)"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum recordings"),
    get_camera_recordings_use_case: GetCameraRecordingsUseCase = Depends(
        Provide["get_camera_recordings_use_case"]
    ),
) -> DailyRecordingsDTO:
    """Recordings of one camera for one day, newest first."""
    try:
        return await get_camera_recordings_use_case.execute(camera_id, date, limit)
    except InvalidQueryError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message
        ) from exc
    except CatalogUnavailableError as exc:
        raise _unavailable("monitoring.camera_recordings.failure", exc) from exc


@router.get("/logs", response_model=LogsDTO)
@inject
async def recent_logs(
    lines: int = Query(10, ge=1, le=500, description="Lines from the end of the log"),
    get_recent_logs_use_case: GetRecentLogsUseCase = Depends(
        Provide["get_recent_logs_use_case"]
    ),
) -> LogsDTO:
    """Last lines of the sample extractor log, classified by level."""
    try:
        return await get_recent_logs_use_case.execute(lines)
    except CatalogUnavailableError as exc:
        raise _unavailable("monitoring.logs.failure", exc) from exc


@router.get("/nas-details", response_model=NasDetailsDTO)
@inject
async def nas_details(
    get_nas_details_use_case: GetNasDetailsUseCase = Depends(
        Provide["get_nas_details_use_case"]
    ),
) -> NasDetailsDTO:
    """Per-drive mount state, usage and file counts, plus transfer activity."""
    try:
        return await get_nas_details_use_case.execute()
    except CatalogUnavailableError as exc:
        raise _unavailable("monitoring.nas_details.failure", exc) from exc


@router.get("/health", response_model=ModuleHealthDTO)
async def module_health() -> ModuleHealthDTO:
    """Liveness of the monitoring module."""
    return ModuleHealthDTO(module="monitoring", service="StatusAggregator")
