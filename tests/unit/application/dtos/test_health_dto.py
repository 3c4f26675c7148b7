from __future__ import annotations

from datetime import datetime, timezone

from src.application.dtos.health_dto import (
    ApplicationInfoDTO,
    ModuleHealthDTO,
    ServiceHealthDTO,
)
from src.domain.entities.health import ApplicationInfo
from src.domain.entities.status import HealthSeverity


def test_service_health_dto_defaults() -> None:
    dto = ServiceHealthDTO(service="fleet-status-monitor", modules=["/api/monitoring"])
    assert dto.model_dump() == {
        "status": "ok",
        "service": "fleet-status-monitor",
        "modules": ["/api/monitoring"],
    }


def test_module_health_dto() -> None:
    dto = ModuleHealthDTO(module="monitoring", service="StatusAggregator")
    assert dto.status == "ok"


def test_application_info_dto_from_domain() -> None:
    now = datetime.now(timezone.utc)
    info = ApplicationInfo(
        name="Fleet Status Monitor",
        description="desc",
        version="1.0",
        environment="development",
        git_commit="abc",
        build_time="2024-09-01",
        started_at=now,
        uptime_seconds=42.0,
        severity=HealthSeverity.WARNING,
        summary="System idle",
        extras={"foo": "bar"},
    )

    dto = ApplicationInfoDTO.from_domain(info)
    assert dto.name == "Fleet Status Monitor"
    assert dto.severity is HealthSeverity.WARNING
    assert dto.summary == "System idle"
    assert dto.extras == {"foo": "bar"}
