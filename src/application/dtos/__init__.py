"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .catalog_dto import (
    CameraRecordingsDTO,
    CamerasDTO,
    DailyRecordingsDTO,
    LogsDTO,
    NasDetailsDTO,
    RecentSamplesDTO,
    RecordingDTO,
    SampleDTO,
)
from .health_dto import ApplicationInfoDTO, ModuleHealthDTO, ServiceHealthDTO
from .status_dto import (
    LegacyStatusDTO,
    OverallHealthDTO,
    StatusSnapshotDTO,
    SubsystemStatusDTO,
)

__all__ = [
    "ApplicationInfoDTO",
    "CameraRecordingsDTO",
    "CamerasDTO",
    "DailyRecordingsDTO",
    "LegacyStatusDTO",
    "LogsDTO",
    "ModuleHealthDTO",
    "NasDetailsDTO",
    "OverallHealthDTO",
    "RecentSamplesDTO",
    "RecordingDTO",
    "SampleDTO",
    "ServiceHealthDTO",
    "StatusSnapshotDTO",
    "SubsystemStatusDTO",
]
