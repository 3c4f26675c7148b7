"""
Use Cases Package - Application Layer

This package contains use cases that orchestrate the flow of data between
the status aggregator, the recording catalog and the presentation layer.
"""

from .catalog_use_cases import (
    GetCameraRecordingsUseCase,
    GetNasDetailsUseCase,
    GetRecentLogsUseCase,
    GetRecentSamplesUseCase,
    ListCamerasUseCase,
)
from .health_use_cases import GetApplicationInfoUseCase, GetServiceHealthUseCase
from .status_use_cases import (
    GetLegacyStatusUseCase,
    GetSubsystemStatusUseCase,
    GetUnifiedStatusUseCase,
)

__all__ = [
    "GetApplicationInfoUseCase",
    "GetCameraRecordingsUseCase",
    "GetLegacyStatusUseCase",
    "GetNasDetailsUseCase",
    "GetRecentLogsUseCase",
    "GetRecentSamplesUseCase",
    "GetServiceHealthUseCase",
    "GetSubsystemStatusUseCase",
    "GetUnifiedStatusUseCase",
    "ListCamerasUseCase",
]
