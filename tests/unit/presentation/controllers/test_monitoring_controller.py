from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest
from fastapi import HTTPException

from src.application.use_cases.catalog_use_cases import (
    GetCameraRecordingsUseCase,
    GetNasDetailsUseCase,
    GetRecentLogsUseCase,
    ListCamerasUseCase,
)
from src.application.use_cases.status_use_cases import (
    GetLegacyStatusUseCase,
    GetSubsystemStatusUseCase,
    GetUnifiedStatusUseCase,
)
from src.domain.entities.errors import CatalogUnavailableError
from src.domain.entities.status import (
    StatusSnapshot,
    SubsystemKind,
    SubsystemState,
    SubsystemStatus,
)
from src.presentation.controllers.monitoring_controller import (
    camera_recordings,
    cameras,
    legacy_status,
    module_health,
    nas_details,
    recent_logs,
    subsystem_status,
    unified_status,
)


@dataclass
class _StubAggregator:
    snapshot: StatusSnapshot

    async def get_unified_status(self, deadline: Optional[float] = None) -> StatusSnapshot:
        return self.snapshot

    async def get_subsystem_status(
        self, kind: SubsystemKind, deadline: Optional[float] = None
    ) -> SubsystemStatus:
        return self.snapshot.system(kind)


@pytest.mark.asyncio
async def test_unified_status_returns_snapshot(healthy_snapshot):
    dto = await unified_status(
        deadline=None,
        get_unified_status_use_case=GetUnifiedStatusUseCase(
            _StubAggregator(healthy_snapshot)
        ),
    )
    assert dto.overall.summary == "3 recording"
    assert len(dto.systems) == 5


@pytest.mark.asyncio
async def test_legacy_status_returns_flat_view(healthy_snapshot):
    dto = await legacy_status(
        get_legacy_status_use_case=GetLegacyStatusUseCase(_StubAggregator(healthy_snapshot))
    )
    assert dto.is_running is True
    assert dto.recording_count == 120


@pytest.mark.asyncio
async def test_subsystem_status_returns_single_system(healthy_snapshot):
    dto = await subsystem_status(
        name="storage",
        deadline=None,
        get_subsystem_status_use_case=GetSubsystemStatusUseCase(
            _StubAggregator(healthy_snapshot)
        ),
    )
    assert dto.kind is SubsystemKind.STORAGE
    assert dto.state is SubsystemState.RUNNING


@pytest.mark.asyncio
async def test_subsystem_status_unknown_name_is_404(healthy_snapshot):
    with pytest.raises(HTTPException) as exc_info:
        await subsystem_status(
            name="database",
            deadline=None,
            get_subsystem_status_use_case=GetSubsystemStatusUseCase(
                _StubAggregator(healthy_snapshot)
            ),
        )
    assert exc_info.value.status_code == 404
    assert "database" in exc_info.value.detail


@pytest.mark.asyncio
async def test_module_health():
    dto = await module_health()
    assert dto.module == "monitoring"
    assert dto.status == "ok"


class _UnavailableCatalog:
    async def cameras(self, search=None):
        raise CatalogUnavailableError("cameras", "timed out after 10s")


@pytest.mark.asyncio
async def test_cameras_lists_catalog(probes):
    dto = await cameras(search="cam", list_cameras_use_case=ListCamerasUseCase(probes.catalog()))
    assert dto.count == 2
    assert dto.cameras[0].camera_id == "CAM_01"


@pytest.mark.asyncio
async def test_cameras_unavailable_is_503():
    with pytest.raises(HTTPException) as exc_info:
        await cameras(
            search=None, list_cameras_use_case=ListCamerasUseCase(_UnavailableCatalog())
        )
    assert exc_info.value.status_code == 503
    assert exc_info.value.detail == "Unable to read cameras: timed out after 10s"


@pytest.mark.asyncio
async def test_camera_recordings_bad_date_is_400(probes):
    with pytest.raises(HTTPException) as exc_info:
        await camera_recordings(
            camera_id="CAM_01",
            date="01/03/2025",
            limit=10,
            get_camera_recordings_use_case=GetCameraRecordingsUseCase(probes.catalog()),
        )
    assert exc_info.value.status_code == 400
    assert "date" in exc_info.value.detail


@pytest.mark.asyncio
async def test_recent_logs_and_nas_details(probes):
    logs = await recent_logs(
        lines=2, get_recent_logs_use_case=GetRecentLogsUseCase(probes.catalog())
    )
    nas = await nas_details(get_nas_details_use_case=GetNasDetailsUseCase(probes.catalog()))

    assert [entry.type.value for entry in logs.logs] == ["success", "warning"]
    assert nas.total_files == 20
