from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi import Request

from src.application.models import SystemInfo
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetServiceHealthUseCase,
)
from src.domain.entities.status import HealthSeverity, StatusSnapshot
from src.presentation.controllers.system_controller import health, info


@dataclass
class _StubAggregator:
    snapshot: StatusSnapshot

    async def get_unified_status(self, deadline=None) -> StatusSnapshot:
        return self.snapshot


@pytest.mark.asyncio
async def test_health_endpoint_returns_status():
    dto = await health(
        get_service_health_use_case=GetServiceHealthUseCase(
            "fleet-status-monitor", modules=["/api/monitoring"]
        )
    )
    assert dto.status == "ok"
    assert dto.service == "fleet-status-monitor"


@pytest.mark.asyncio
async def test_info_endpoint_returns_application_info(healthy_snapshot):
    system_info = SystemInfo(
        title="Fleet Status Monitor",
        description="desc",
        version="1.0",
        environment="dev",
        git_commit="abc",
        build_time="now",
        data_dir="/data",
        nas_host="nas",
    )
    info_use_case = GetApplicationInfoUseCase(_StubAggregator(healthy_snapshot), system_info)

    scope = {
        "type": "http",
        "method": "GET",
        "path": "/info",
        "headers": [],
        "query_string": b"",
        "server": ("test", 80),
        "app": SimpleNamespace(
            state=SimpleNamespace(started_at=datetime.now(timezone.utc))
        ),
    }
    request = Request(scope)

    dto = await info(request=request, get_application_info_use_case=info_use_case)
    assert dto.name == "Fleet Status Monitor"
    assert dto.severity is HealthSeverity.HEALTHY
