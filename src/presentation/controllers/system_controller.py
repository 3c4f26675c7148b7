"""Service level endpoints: liveness and application info."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Request, status

from src.application.dtos.health_dto import ApplicationInfoDTO, ServiceHealthDTO
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetServiceHealthUseCase,
)
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health", response_model=ServiceHealthDTO)
@inject
async def health(
    get_service_health_use_case: GetServiceHealthUseCase = Depends(
        Provide["get_service_health_use_case"]
    ),
) -> ServiceHealthDTO:
    """Liveness of the service process; never runs the probes."""
    return await get_service_health_use_case.execute()


@router.get("/info", response_model=ApplicationInfoDTO)
@inject
async def info(
    request: Request,
    get_application_info_use_case: GetApplicationInfoUseCase = Depends(
        Provide["get_application_info_use_case"]
    ),
) -> ApplicationInfoDTO:
    """Build metadata, uptime and the fleet severity of a fresh aggregation."""
    started_at = getattr(request.app.state, "started_at", None)
    try:
        app_info = await get_application_info_use_case.execute(started_at)
    except Exception as exc:  # pragma: no cover - defensive logging path
        logger.error("info.fetch.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to retrieve application info",
        ) from exc

    logger.debug("info.retrieved", severity=app_info.severity.value)
    return app_info
