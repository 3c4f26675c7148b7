"""
Probe domain values.

A probe answers one question about the host (is a process running, is a
mount present, how full is a disk...) and resolves to exactly one of three
outcomes: a ``Fact`` carrying the answer, ``TimedOut`` when the per-call
budget elapsed, or ``Failed`` with a human readable reason. Probes never
raise; collectors branch on these values instead of catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Optional, Tuple, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Fact(Generic[T]):
    """Successful probe outcome."""

    value: T


@dataclass(frozen=True, slots=True)
class TimedOut:
    """Probe did not resolve within its budget."""

    timeout: float

    @property
    def reason(self) -> str:
        return f"timed out after {self.timeout:g}s"


@dataclass(frozen=True, slots=True)
class Failed:
    """Probe could not obtain its fact."""

    reason: str


ProbeOutcome = Union[Fact[T], TimedOut, Failed]


def failure_reason(outcome: ProbeOutcome) -> Optional[str]:
    """Return the failure text for a non-fact outcome, ``None`` for facts."""
    if isinstance(outcome, Fact):
        return None
    return outcome.reason


@dataclass(frozen=True, slots=True)
class ProcessInfo:
    """Processes matching a command-line pattern."""

    count: int
    pids: Tuple[int, ...] = ()
    ages: Tuple[int, ...] = ()
    commands: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class MountInfo:
    path: str
    mounted: bool


@dataclass(frozen=True, slots=True)
class DiskUsage:
    used_percent: float
    available_bytes: int
    total_bytes: int = 0


@dataclass(frozen=True, slots=True)
class Reachability:
    host: str
    reachable: bool


@dataclass(frozen=True, slots=True)
class ScheduleInfo:
    """Scheduled job (crontab) lookup result."""

    configured: bool
    schedule: Optional[str] = None


@dataclass(frozen=True, slots=True)
class FileCount:
    count: int
    pattern: str = field(default="")


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A regular file seen by a listing probe; ``modified`` is epoch seconds."""

    path: str
    size_bytes: int
    modified: float


@dataclass(frozen=True, slots=True)
class FileListing:
    """Newest-first files under a root, possibly truncated to a limit.

    ``root_exists`` is false when the root directory itself is missing.
    """

    entries: Tuple[FileEntry, ...] = ()
    root_exists: bool = True


@dataclass(frozen=True, slots=True)
class DirectoryListing:
    names: Tuple[str, ...] = ()
    root_exists: bool = True


@dataclass(frozen=True, slots=True)
class TextTail:
    """Last lines of a text file; ``found`` is false when it does not exist."""

    lines: Tuple[str, ...] = ()
    found: bool = True
