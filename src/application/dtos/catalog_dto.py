"""DTOs for the recording catalog views of the dashboard."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.entities.catalog import (
    CameraRecordings,
    DriveStatus,
    LogEntry,
    LogLevel,
    NasDetails,
    NasDrive,
    Recording,
    RecordingQuality,
    Sample,
)

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_file_size(size_bytes: Optional[int]) -> str:
    """Human readable size in 1024 steps with one decimal, e.g. ``1.5 MB``."""
    if not size_bytes or size_bytes < 0:
        return "0 B"
    exponent = min(int(math.log(size_bytes, 1024)), len(_SIZE_UNITS) - 1)
    value = round(size_bytes / 1024**exponent, 1)
    return f"{value:g} {_SIZE_UNITS[exponent]}"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SampleDTO(_CamelModel):
    camera_id: str
    session_id: str
    sample_num: int
    size: str = Field(description="Human readable file size")
    size_bytes: int
    filepath: str
    timestamp: datetime = Field(description="Modification time of the sample")

    @classmethod
    def from_domain(cls, sample: Sample) -> "SampleDTO":
        return cls(
            camera_id=sample.camera_id,
            session_id=sample.session_id,
            sample_num=sample.sample_number,
            size=format_file_size(sample.size_bytes),
            size_bytes=sample.size_bytes,
            filepath=sample.path,
            timestamp=sample.modified_at,
        )


class RecentSamplesDTO(_CamelModel):
    """Samples extracted within the recent-sample window, newest first."""

    count: int
    samples: List[SampleDTO]

    @classmethod
    def from_domain(cls, samples: Sequence[Sample]) -> "RecentSamplesDTO":
        return cls(count=len(samples), samples=[SampleDTO.from_domain(s) for s in samples])


class RecordingDTO(_CamelModel):
    filename: str
    filepath: str
    camera_id: str
    date: str = Field(description="Recording date, YYYYMMDD")
    time: str = Field(description="Recording start, HHMMSS (UTC)")
    size: str
    size_bytes: int
    timestamp: datetime
    hour: int
    minute: int
    quality: RecordingQuality = Field(description="Estimate from the file size")

    @classmethod
    def from_domain(cls, recording: Recording) -> "RecordingDTO":
        return cls(
            filename=recording.filename,
            filepath=recording.path,
            camera_id=recording.camera_id,
            date=recording.date,
            time=recording.time,
            size=format_file_size(recording.size_bytes),
            size_bytes=recording.size_bytes,
            timestamp=recording.modified_at,
            hour=recording.hour,
            minute=recording.minute,
            quality=recording.quality,
        )


class CameraRecordingsDTO(_CamelModel):
    camera_id: str
    is_recording: bool
    last_recordings: List[RecordingDTO] = Field(default_factory=list)
    sample_count: int = 0
    recordings_path: Optional[str] = None
    message: Optional[str] = Field(
        default=None, description="Listings that could not be read"
    )

    @classmethod
    def from_domain(cls, camera: CameraRecordings) -> "CameraRecordingsDTO":
        return cls(
            camera_id=camera.camera_id,
            is_recording=camera.is_recording,
            last_recordings=[RecordingDTO.from_domain(r) for r in camera.recordings],
            sample_count=camera.sample_count,
            recordings_path=camera.recordings_path,
            message=camera.message,
        )


class CamerasDTO(_CamelModel):
    """Camera directories, recording cameras first."""

    count: int
    cameras: List[CameraRecordingsDTO]

    @classmethod
    def from_domain(cls, cameras: Sequence[CameraRecordings]) -> "CamerasDTO":
        return cls(
            count=len(cameras),
            cameras=[CameraRecordingsDTO.from_domain(camera) for camera in cameras],
        )


class DailyRecordingsDTO(_CamelModel):
    """One camera's recordings for one day, newest first."""

    camera_id: str
    date: str
    count: int
    total_size_bytes: int
    recordings: List[RecordingDTO]

    @classmethod
    def from_domain(
        cls, camera_id: str, date: str, recordings: Sequence[Recording]
    ) -> "DailyRecordingsDTO":
        return cls(
            camera_id=camera_id,
            date=date,
            count=len(recordings),
            total_size_bytes=sum(r.size_bytes for r in recordings),
            recordings=[RecordingDTO.from_domain(r) for r in recordings],
        )


class LogEntryDTO(_CamelModel):
    message: str
    type: LogLevel
    timestamp: datetime = Field(description="When the line was read")


class LogsDTO(_CamelModel):
    logs: List[LogEntryDTO]

    @classmethod
    def from_domain(cls, entries: Sequence[LogEntry]) -> "LogsDTO":
        # Log lines carry no parsed time; stamp them with the read time.
        now = datetime.now(timezone.utc)
        return cls(
            logs=[
                LogEntryDTO(message=entry.message, type=entry.level, timestamp=now)
                for entry in entries
            ]
        )


class NasDriveDTO(_CamelModel):
    path: str
    name: str
    kind: str
    mounted: bool
    accessible: bool
    status: DriveStatus
    usage: Optional[float] = Field(default=None, description="Used percent")
    available_bytes: Optional[int] = None
    available: Optional[str] = Field(default=None, description="Human readable free space")
    file_count: int = Field(default=0, description="Recorded segments on the drive")
    message: Optional[str] = None

    @classmethod
    def from_domain(cls, drive: NasDrive) -> "NasDriveDTO":
        return cls(
            path=drive.path,
            name=drive.name,
            kind=drive.kind,
            mounted=drive.mounted,
            accessible=drive.accessible,
            status=drive.status,
            usage=drive.used_percent,
            available_bytes=drive.available_bytes,
            available=(
                format_file_size(drive.available_bytes)
                if drive.available_bytes is not None
                else None
            ),
            file_count=drive.file_count,
            message=drive.message,
        )


class TransfersDTO(_CamelModel):
    active: bool
    count: int


class NasServiceDTO(_CamelModel):
    running: bool
    cron: bool


class NasDetailsDTO(_CamelModel):
    """NAS drives with usage and file counts, plus the transfer service."""

    mounts: List[NasDriveDTO]
    total_files: int
    transfers: TransfersDTO
    service: NasServiceDTO

    @classmethod
    def from_domain(cls, details: NasDetails) -> "NasDetailsDTO":
        return cls(
            mounts=[NasDriveDTO.from_domain(drive) for drive in details.drives],
            total_files=details.total_files,
            transfers=TransfersDTO(
                active=details.active_transfers > 0, count=details.active_transfers
            ),
            service=NasServiceDTO(
                running=details.service_running, cron=details.cron_configured
            ),
        )
