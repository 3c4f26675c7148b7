"""
Domain Entities Package

This package contains the core domain entities and value objects.
"""

from .errors import (
    CatalogUnavailableError,
    DomainError,
    InvalidQueryError,
    SnapshotIntegrityError,
    UnknownSubsystemError,
)
from .health import ApplicationInfo
from .probe import (
    DirectoryListing,
    DiskUsage,
    Failed,
    Fact,
    FileCount,
    FileEntry,
    FileListing,
    MountInfo,
    ProbeOutcome,
    ProcessInfo,
    Reachability,
    ScheduleInfo,
    TextTail,
    TimedOut,
    failure_reason,
)
from .status import (
    HealthSeverity,
    MetricValue,
    OverallHealth,
    StatusSnapshot,
    SubsystemKind,
    SubsystemState,
    SubsystemStatus,
)

__all__ = [
    "ApplicationInfo",
    "CatalogUnavailableError",
    "DirectoryListing",
    "DiskUsage",
    "DomainError",
    "Fact",
    "Failed",
    "FileCount",
    "FileEntry",
    "FileListing",
    "HealthSeverity",
    "InvalidQueryError",
    "MetricValue",
    "MountInfo",
    "OverallHealth",
    "ProbeOutcome",
    "ProcessInfo",
    "Reachability",
    "ScheduleInfo",
    "SnapshotIntegrityError",
    "StatusSnapshot",
    "SubsystemKind",
    "SubsystemState",
    "SubsystemStatus",
    "TextTail",
    "TimedOut",
    "UnknownSubsystemError",
    "failure_reason",
]
