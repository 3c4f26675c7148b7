"""
Recording catalog entities.

Read-only views over the files the recorder, the sample extractor and the
NAS transfer leave behind: extracted samples, recorded segments per
camera, the extractor log and the NAS drives.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple

MEBIBYTE = 1024 * 1024


def _utc(epoch: float) -> datetime:
    return datetime.fromtimestamp(epoch, tz=timezone.utc)


@dataclass(frozen=True)
class Sample:
    """A short clip cut from a recording session by the sample extractor."""

    camera_id: str
    session_id: str
    sample_number: int
    path: str
    size_bytes: int
    modified: float

    @property
    def modified_at(self) -> datetime:
        return _utc(self.modified)


class RecordingQuality(str, Enum):
    """Rough quality estimate of a ~30 minute segment from its size."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def for_size(cls, size_bytes: int) -> "RecordingQuality":
        megabytes = size_bytes / MEBIBYTE
        if megabytes > 100:
            return cls.HIGH
        if megabytes > 50:
            return cls.MEDIUM
        return cls.LOW


@dataclass(frozen=True)
class Recording:
    """A recorded segment named ``<camera>_<YYYYMMDD>_<HHMMSS>Z.mp4``."""

    filename: str
    path: str
    camera_id: str
    date: str
    time: str
    size_bytes: int
    modified: float

    @property
    def modified_at(self) -> datetime:
        return _utc(self.modified)

    @property
    def hour(self) -> int:
        return int(self.time[:2])

    @property
    def minute(self) -> int:
        return int(self.time[2:4])

    @property
    def quality(self) -> RecordingQuality:
        return RecordingQuality.for_size(self.size_bytes)


@dataclass(frozen=True)
class CameraRecordings:
    """Latest recordings and sample count of one camera directory.

    ``recordings_path`` is ``None`` when the camera only has samples.
    ``message`` explains a listing that could not be read.
    """

    camera_id: str
    is_recording: bool
    recordings: Tuple[Recording, ...] = ()
    sample_count: int = 0
    recordings_path: Optional[str] = None
    message: Optional[str] = None


class LogLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class LogEntry:
    message: str
    level: LogLevel = LogLevel.INFO


class DriveStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"
    UNKNOWN = "unknown"
    NOT_MOUNTED = "not-mounted"


@dataclass(frozen=True)
class NasDrive:
    """One NAS mount point with its usage and recorded file count."""

    path: str
    name: str
    kind: str
    mounted: bool
    status: DriveStatus
    used_percent: Optional[float] = None
    available_bytes: Optional[int] = None
    file_count: int = 0
    message: Optional[str] = None

    @property
    def accessible(self) -> bool:
        return self.mounted


@dataclass(frozen=True)
class NasDetails:
    """NAS drives plus the transfer service around them."""

    drives: Tuple[NasDrive, ...]
    active_transfers: int = 0
    service_running: bool = False
    cron_configured: bool = False

    @property
    def total_files(self) -> int:
        return sum(drive.file_count for drive in self.drives)
