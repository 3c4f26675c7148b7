from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.application.use_cases.catalog_use_cases import (
    GetCameraRecordingsUseCase,
    GetRecentLogsUseCase,
    GetRecentSamplesUseCase,
    ListCamerasUseCase,
)
from src.domain.entities.errors import InvalidQueryError


@pytest.mark.asyncio
async def test_recent_samples(probes) -> None:
    dto = await GetRecentSamplesUseCase(probes.catalog()).execute(limit=3)

    assert dto.count == 1
    assert dto.samples[0].sample_num == 3


@pytest.mark.asyncio
async def test_list_cameras(probes) -> None:
    dto = await ListCamerasUseCase(probes.catalog()).execute("07")

    assert [camera.camera_id for camera in dto.cameras] == ["CAM_07"]


@pytest.mark.asyncio
async def test_camera_recordings_normalizes_date(probes) -> None:
    dto = await GetCameraRecordingsUseCase(probes.catalog()).execute("CAM_01", "2025-03-01")

    assert (dto.camera_id, dto.date, dto.count) == ("CAM_01", "20250301", 2)


@pytest.mark.asyncio
async def test_camera_recordings_defaults_to_today(probes) -> None:
    dto = await GetCameraRecordingsUseCase(probes.catalog()).execute("CAM_01")

    assert dto.date == datetime.now(timezone.utc).strftime("%Y%m%d")
    assert probes.listings.calls[0][1] == f"**/CAM_01_{dto.date}_*.mp4"


@pytest.mark.asyncio
async def test_camera_recordings_rejects_path_like_ids(probes) -> None:
    with pytest.raises(InvalidQueryError, match="cameraId"):
        await GetCameraRecordingsUseCase(probes.catalog()).execute("CAM_01/../..")
    assert probes.listings.calls == []


@pytest.mark.asyncio
async def test_recent_logs_stamp_read_time(probes) -> None:
    before = datetime.now(timezone.utc)

    dto = await GetRecentLogsUseCase(probes.catalog()).execute(lines=2)

    assert len(dto.logs) == 2
    assert all(entry.timestamp >= before for entry in dto.logs)
