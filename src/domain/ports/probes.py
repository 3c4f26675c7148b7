"""
Probe ports.

Each probe answers a single question with its own per-call timeout and
resolves to ``Fact | TimedOut | Failed``. Implementations must never raise
and must never block past ``timeout``.
"""

from __future__ import annotations

from typing import Optional, Protocol

from src.domain.entities.probe import (
    DirectoryListing,
    DiskUsage,
    FileCount,
    FileListing,
    MountInfo,
    ProbeOutcome,
    ProcessInfo,
    Reachability,
    ScheduleInfo,
    TextTail,
)


class IProcessProbe(Protocol):
    """Processes whose full command line matches ``pattern``."""

    async def query(self, pattern: str, timeout: float) -> ProbeOutcome[ProcessInfo]:
        ...


class IMountProbe(Protocol):
    async def query(self, path: str, timeout: float) -> ProbeOutcome[MountInfo]:
        ...


class IDiskUsageProbe(Protocol):
    async def query(self, path: str, timeout: float) -> ProbeOutcome[DiskUsage]:
        ...


class IReachabilityProbe(Protocol):
    async def query(self, host: str, timeout: float) -> ProbeOutcome[Reachability]:
        ...


class IScheduleProbe(Protocol):
    """Whether a scheduled job containing ``job_name`` is configured."""

    async def query(self, job_name: str, timeout: float) -> ProbeOutcome[ScheduleInfo]:
        ...


class IFileCountProbe(Protocol):
    """Count files under ``path`` matching ``pattern``.

    ``min_age`` keeps files at least that many seconds old, ``max_age``
    keeps files modified within that many seconds.
    """

    async def query(
        self,
        path: str,
        pattern: str,
        timeout: float,
        *,
        min_age: Optional[float] = None,
        max_age: Optional[float] = None,
    ) -> ProbeOutcome[FileCount]:
        ...


class IFileListProbe(Protocol):
    """List files under ``path`` matching ``pattern``, newest first.

    At most ``limit`` entries are kept; ``max_age`` as for file counts.
    """

    async def query(
        self,
        path: str,
        pattern: str,
        timeout: float,
        *,
        max_age: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> ProbeOutcome[FileListing]:
        ...


class IDirectoryListProbe(Protocol):
    """Names of the immediate subdirectories of ``path``."""

    async def query(self, path: str, timeout: float) -> ProbeOutcome[DirectoryListing]:
        ...


class ILogTailProbe(Protocol):
    async def query(self, path: str, lines: int, timeout: float) -> ProbeOutcome[TextTail]:
        ...
