"""Domain ports package."""

from .collector import ISubsystemCollector
from .probes import (
    IDirectoryListProbe,
    IDiskUsageProbe,
    IFileCountProbe,
    IFileListProbe,
    ILogTailProbe,
    IMountProbe,
    IProcessProbe,
    IReachabilityProbe,
    IScheduleProbe,
)
from .recording_catalog import IRecordingCatalog
from .status_aggregator import IStatusAggregator

__all__ = [
    "IDirectoryListProbe",
    "IDiskUsageProbe",
    "IFileCountProbe",
    "IFileListProbe",
    "ILogTailProbe",
    "IMountProbe",
    "IProcessProbe",
    "IReachabilityProbe",
    "IRecordingCatalog",
    "IScheduleProbe",
    "IStatusAggregator",
    "ISubsystemCollector",
]
