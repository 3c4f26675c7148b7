"""DTOs for the unified status responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.entities.status import (
    HealthSeverity,
    OverallHealth,
    StatusSnapshot,
    SubsystemKind,
    SubsystemState,
    SubsystemStatus,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubsystemStatusDTO(_CamelModel):
    """Serializable representation of one subsystem status."""

    kind: SubsystemKind = Field(description="Subsystem identifier")
    state: SubsystemState = Field(description="Observed subsystem state")
    metrics: Dict[str, Any] = Field(
        default_factory=dict, description="Subsystem specific facts"
    )
    message: Optional[str] = Field(
        default=None, description="Why the state is degraded or unknown"
    )
    collected_at: datetime = Field(description="When the status was collected")

    @classmethod
    def from_domain(cls, status: SubsystemStatus) -> "SubsystemStatusDTO":
        return cls(
            kind=status.kind,
            state=status.state,
            metrics=dict(status.metrics),
            message=status.message,
            collected_at=status.collected_at,
        )


class OverallHealthDTO(_CamelModel):
    severity: HealthSeverity = Field(description="Most severe fired rule")
    issues: List[str] = Field(default_factory=list, description="Issues in rule order")
    summary: str = Field(description="What the host is currently doing")

    @classmethod
    def from_domain(cls, health: OverallHealth) -> "OverallHealthDTO":
        return cls(
            severity=health.severity,
            issues=list(health.issues),
            summary=health.summary,
        )


class StatusSnapshotDTO(_CamelModel):
    """DTO representing the unified status response payload."""

    timestamp: datetime = Field(description="When the snapshot was assembled")
    overall: OverallHealthDTO
    systems: Dict[str, SubsystemStatusDTO] = Field(
        description="One entry per subsystem, keyed by subsystem identifier"
    )

    @classmethod
    def from_domain(cls, snapshot: StatusSnapshot) -> "StatusSnapshotDTO":
        return cls(
            timestamp=snapshot.timestamp,
            overall=OverallHealthDTO.from_domain(snapshot.overall),
            systems={
                kind.value: SubsystemStatusDTO.from_domain(status)
                for kind, status in snapshot.systems.items()
            },
        )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "timestamp": "2025-03-01T12:00:00Z",
                "overall": {
                    "severity": "warning",
                    "issues": ["Transfer service stopped"],
                    "summary": "3 recording",
                },
                "systems": {
                    "recording": {
                        "kind": "recording",
                        "state": "running",
                        "metrics": {"activeRecordings": 3, "totalRecordings": 1200},
                        "message": None,
                        "collectedAt": "2025-03-01T12:00:00Z",
                    }
                },
            }
        },
    )


class LegacyStatusDTO(_CamelModel):
    """Flat status view kept for older dashboard pages."""

    is_running: bool
    pid: Optional[int] = None
    cron_configured: bool = False
    recording_count: int = 0
    sample_count: int = 0
    timestamp: datetime
    unified: StatusSnapshotDTO

    @classmethod
    def from_domain(cls, snapshot: StatusSnapshot) -> "LegacyStatusDTO":
        recording = snapshot.system(SubsystemKind.RECORDING)
        samples = snapshot.system(SubsystemKind.SAMPLE_EXTRACTOR)
        pid = recording.metric("pid")
        return cls(
            is_running=(_as_int(recording.metric("activeRecordings")) > 0),
            pid=pid if isinstance(pid, int) and not isinstance(pid, bool) else None,
            cron_configured=samples.metric("cronConfigured") is True,
            recording_count=_as_int(recording.metric("totalRecordings")),
            sample_count=_as_int(samples.metric("totalSamples")),
            timestamp=snapshot.timestamp,
            unified=StatusSnapshotDTO.from_domain(snapshot),
        )


def _as_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)
