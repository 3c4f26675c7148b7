"""Use cases for liveness and application info endpoints."""

from datetime import datetime, timezone
from typing import Iterable, Optional

from src.application.dtos.health_dto import ApplicationInfoDTO, ServiceHealthDTO
from src.application.models import SystemInfo
from src.domain.entities.health import ApplicationInfo
from src.domain.ports.status_aggregator import IStatusAggregator


class GetServiceHealthUseCase:
    """Use case reporting that the service itself is alive."""

    def __init__(self, service_name: str, modules: Iterable[str] = ()) -> None:
        self._service_name = service_name
        self._modules = list(modules)

    async def execute(self) -> ServiceHealthDTO:
        return ServiceHealthDTO(service=self._service_name, modules=self._modules)


class GetApplicationInfoUseCase:
    """Use case responsible for returning application info."""

    def __init__(
        self,
        status_aggregator: IStatusAggregator,
        system_info: SystemInfo,
    ) -> None:
        self._status_aggregator = status_aggregator
        self._info = system_info

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        snapshot = await self._status_aggregator.get_unified_status()

        now = datetime.now(timezone.utc)
        started = started_at or now
        uptime_seconds = max(0.0, (now - started).total_seconds())

        extras = {
            "environment": self._info.environment,
            "monitoring": {
                "data_dir": self._info.data_dir,
                "nas_host": self._info.nas_host,
                "mounts": list(self._info.mount_paths),
            },
        }

        info = ApplicationInfo(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started,
            uptime_seconds=uptime_seconds,
            severity=snapshot.overall.severity,
            summary=snapshot.overall.summary,
            extras=extras,
        )

        return ApplicationInfoDTO.from_domain(info)
