"""Domain service abstraction for the read-only recording catalog."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from src.domain.entities.catalog import (
    CameraRecordings,
    LogEntry,
    NasDetails,
    Recording,
    Sample,
)


class IRecordingCatalog(Protocol):
    """Interface for browsing recordings, samples, logs and NAS drives.

    Every call finishes within the configured deadline or raises
    ``CatalogUnavailableError``.
    """

    async def recent_samples(self, limit: Optional[int] = None) -> Sequence[Sample]:
        """Samples extracted within the recent-sample window, newest first."""
        ...

    async def cameras(self, search: Optional[str] = None) -> Sequence[CameraRecordings]:
        """Camera directories, recording ones first, then by camera id."""
        ...

    async def recordings_by_date(
        self, camera_id: str, date: Optional[str] = None, limit: int = 100
    ) -> Sequence[Recording]:
        """One camera's recordings for a day (``YYYY-MM-DD``, default today)."""
        ...

    async def recent_logs(self, lines: int = 10) -> Sequence[LogEntry]:
        ...

    async def nas_details(self) -> NasDetails:
        ...
