"""Pure parsing of recorder file names, extractor log lines and query dates."""

from __future__ import annotations

import posixpath
import re
from datetime import datetime, timezone
from typing import Optional

from src.domain.entities.catalog import (
    DriveStatus,
    LogEntry,
    LogLevel,
    Recording,
    Sample,
)
from src.domain.entities.errors import InvalidQueryError
from src.domain.entities.probe import FileEntry
from src.domain.services.health_evaluator import HealthThresholds

_RECORDING_NAME = re.compile(
    r"^(?P<camera>[A-Za-z0-9-]+(?:_[A-Za-z0-9-]+)*?)_(?P<date>\d{8})_(?P<time>\d{6})Z?\.mp4$"
)
_SAMPLE_SUFFIX = re.compile(r"_sample_(\d+)\.mp4$")
_CAMERA_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
_DATE = re.compile(r"^\d{8}$")

# First match wins.
_LOG_MARKERS = (
    ("SUCCESS", LogLevel.SUCCESS),
    ("ERROR", LogLevel.ERROR),
    ("WARN", LogLevel.WARNING),
)


def parse_sample(entry: FileEntry) -> Optional[Sample]:
    """``<session>_sample_<n>.mp4``, where the session starts with the camera id."""
    filename = posixpath.basename(entry.path)
    match = _SAMPLE_SUFFIX.search(filename)
    if not match:
        return None
    session_id = filename[: match.start()]
    # Sessions are named after the recording they were cut from.
    recording = _RECORDING_NAME.match(f"{session_id}.mp4")
    camera_id = recording.group("camera") if recording else session_id.split("_")[0]
    return Sample(
        camera_id=camera_id,
        session_id=session_id,
        sample_number=int(match.group(1)),
        path=entry.path,
        size_bytes=entry.size_bytes,
        modified=entry.modified,
    )


def parse_recording(entry: FileEntry) -> Optional[Recording]:
    filename = posixpath.basename(entry.path)
    match = _RECORDING_NAME.match(filename)
    if not match:
        return None
    return Recording(
        filename=filename,
        path=entry.path,
        camera_id=match.group("camera"),
        date=match.group("date"),
        time=match.group("time"),
        size_bytes=entry.size_bytes,
        modified=entry.modified,
    )


def classify_log_line(line: str) -> LogEntry:
    for marker, level in _LOG_MARKERS:
        if marker in line:
            return LogEntry(message=line, level=level)
    return LogEntry(message=line)


def looks_like_camera_id(name: str) -> bool:
    return bool(_CAMERA_ID.match(name))


def validate_camera_id(camera_id: str) -> str:
    """Camera ids name a directory under the data dir; reject anything else."""
    if not looks_like_camera_id(camera_id):
        raise InvalidQueryError(
            "cameraId", camera_id, "expected letters, digits, '_' or '-'"
        )
    return camera_id


def normalize_date(date: Optional[str], today: Optional[datetime] = None) -> str:
    """Return ``YYYYMMDD`` for ``YYYY-MM-DD``/``YYYYMMDD`` input, today (UTC) if empty."""
    if not date:
        return (today or datetime.now(timezone.utc)).strftime("%Y%m%d")

    compact = date.strip().replace("-", "")
    if not _DATE.match(compact):
        raise InvalidQueryError("date", date, "expected YYYY-MM-DD or YYYYMMDD")
    try:
        datetime.strptime(compact, "%Y%m%d")
    except ValueError as exc:
        raise InvalidQueryError("date", date, "not a calendar date") from exc
    return compact


def drive_status(used_percent: Optional[float], thresholds: HealthThresholds) -> DriveStatus:
    if used_percent is None:
        return DriveStatus.UNKNOWN
    if used_percent > thresholds.disk_critical_percent:
        return DriveStatus.CRITICAL
    if used_percent > thresholds.disk_warning_percent:
        return DriveStatus.WARNING
    return DriveStatus.GOOD


def mentions_camera(command: str, camera_id: str) -> bool:
    """Whether a recorder command line names ``camera_id`` as a whole token.

    ``CAM_1`` matches ``.../CAM_1/CAM_1_%Y%m%d.mp4`` but not ``CAM_12``.
    """
    pattern = rf"(?<![A-Za-z0-9]){re.escape(camera_id)}(?![A-Za-z0-9])"
    return re.search(pattern, command, re.IGNORECASE) is not None
