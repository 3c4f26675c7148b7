"""
Status domain entities.

Immutable value objects produced by one status aggregation: the per
subsystem status, the overall health verdict and the snapshot combining
them. None of them carries identity or state between requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from .errors import SnapshotIntegrityError, UnknownSubsystemError

MetricValue = Union[int, float, bool, str, None]


class SubsystemKind(str, Enum):
    """The fixed set of monitored subsystems. Values are the wire keys."""

    RECORDING = "recording"
    TRANSFER_SERVICE = "transferService"
    SAMPLE_EXTRACTOR = "sampleExtractor"
    STORAGE = "storage"
    NETWORK = "network"

    @classmethod
    def parse(cls, name: str) -> "SubsystemKind":
        """Resolve a kind from its wire key or enum name, case-insensitively."""
        lowered = name.strip().lower().replace("-", "_")
        for kind in cls:
            if lowered in (kind.value.lower(), kind.name.lower()):
                return kind
        raise UnknownSubsystemError(name)


class SubsystemState(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"
    IDLE = "idle"
    DEGRADED = "degraded"
    UNKNOWN = "unknown"

    @property
    def is_failure(self) -> bool:
        """True when the real state could not be determined."""
        return self in (SubsystemState.DEGRADED, SubsystemState.UNKNOWN)


class HealthSeverity(str, Enum):
    """Overall severity, ordered healthy < warning < error."""

    HEALTHY = "healthy"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def escalate(self, other: "HealthSeverity") -> "HealthSeverity":
        """Return the more severe of ``self`` and ``other``."""
        return other if other.rank > self.rank else self


_SEVERITY_RANK = {
    HealthSeverity.HEALTHY: 0,
    HealthSeverity.WARNING: 1,
    HealthSeverity.ERROR: 2,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class SubsystemStatus:
    """Status of a single subsystem for one aggregation cycle."""

    kind: SubsystemKind
    state: SubsystemState
    metrics: Mapping[str, MetricValue] = field(default_factory=dict)
    message: Optional[str] = None
    collected_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))
        if not self.state.is_failure:
            object.__setattr__(self, "message", None)

    def metric(self, name: str, default: MetricValue = None) -> MetricValue:
        return self.metrics.get(name, default)

    @classmethod
    def unknown(
        cls,
        kind: SubsystemKind,
        message: str,
        metrics: Optional[Mapping[str, MetricValue]] = None,
    ) -> "SubsystemStatus":
        return cls(
            kind=kind,
            state=SubsystemState.UNKNOWN,
            metrics=metrics or {},
            message=message,
        )

    @classmethod
    def degraded(
        cls,
        kind: SubsystemKind,
        message: str,
        metrics: Optional[Mapping[str, MetricValue]] = None,
    ) -> "SubsystemStatus":
        return cls(
            kind=kind,
            state=SubsystemState.DEGRADED,
            metrics=metrics or {},
            message=message,
        )


@dataclass(frozen=True, slots=True)
class OverallHealth:
    """Combined verdict over all subsystems."""

    severity: HealthSeverity
    issues: Tuple[str, ...] = ()
    summary: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "issues", tuple(self.issues))


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    """The only artifact handed to callers of the aggregator."""

    overall: OverallHealth
    systems: Mapping[SubsystemKind, SubsystemStatus]
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        missing = [kind.value for kind in SubsystemKind if kind not in self.systems]
        if missing:
            raise SnapshotIntegrityError(missing)
        ordered = {kind: self.systems[kind] for kind in SubsystemKind}
        object.__setattr__(self, "systems", MappingProxyType(ordered))

    def system(self, kind: SubsystemKind) -> SubsystemStatus:
        return self.systems[kind]
