from __future__ import annotations

from datetime import timezone

import pytest

from src.domain.entities.errors import SnapshotIntegrityError, UnknownSubsystemError
from src.domain.entities.status import (
    HealthSeverity,
    OverallHealth,
    StatusSnapshot,
    SubsystemKind,
    SubsystemState,
    SubsystemStatus,
)


def test_subsystem_status_defaults() -> None:
    status = SubsystemStatus(kind=SubsystemKind.NETWORK, state=SubsystemState.RUNNING)
    assert status.collected_at.tzinfo == timezone.utc
    assert dict(status.metrics) == {}
    assert status.message is None


def test_subsystem_status_metrics_are_read_only() -> None:
    metrics = {"reachable": True}
    status = SubsystemStatus(
        kind=SubsystemKind.NETWORK, state=SubsystemState.RUNNING, metrics=metrics
    )
    metrics["reachable"] = False

    assert status.metric("reachable") is True
    with pytest.raises(TypeError):
        status.metrics["reachable"] = False  # type: ignore[index]


def test_message_is_kept_only_for_failure_states() -> None:
    running = SubsystemStatus(
        kind=SubsystemKind.STORAGE, state=SubsystemState.RUNNING, message="ignored"
    )
    unknown = SubsystemStatus.unknown(SubsystemKind.STORAGE, "disk probe failed")
    degraded = SubsystemStatus.degraded(SubsystemKind.STORAGE, "mount probe failed")

    assert running.message is None
    assert unknown.state is SubsystemState.UNKNOWN
    assert unknown.message == "disk probe failed"
    assert degraded.state is SubsystemState.DEGRADED


def test_severity_escalation_never_downgrades() -> None:
    assert HealthSeverity.HEALTHY.escalate(HealthSeverity.WARNING) is HealthSeverity.WARNING
    assert HealthSeverity.ERROR.escalate(HealthSeverity.WARNING) is HealthSeverity.ERROR
    assert HealthSeverity.WARNING.escalate(HealthSeverity.HEALTHY) is HealthSeverity.WARNING


def test_snapshot_requires_every_subsystem(healthy_systems) -> None:
    partial = dict(healthy_systems)
    partial.pop(SubsystemKind.NETWORK)

    with pytest.raises(SnapshotIntegrityError) as exc_info:
        StatusSnapshot(overall=OverallHealth(HealthSeverity.HEALTHY), systems=partial)

    assert exc_info.value.details["missing"] == ["network"]


def test_snapshot_orders_systems_by_kind(healthy_systems) -> None:
    reversed_systems = dict(reversed(list(healthy_systems.items())))
    snapshot = StatusSnapshot(
        overall=OverallHealth(HealthSeverity.HEALTHY), systems=reversed_systems
    )

    assert list(snapshot.systems) == list(SubsystemKind)
    assert snapshot.timestamp.tzinfo == timezone.utc


@pytest.mark.parametrize(
    "name, expected",
    [
        ("transferService", SubsystemKind.TRANSFER_SERVICE),
        ("transfer_service", SubsystemKind.TRANSFER_SERVICE),
        ("Sample-Extractor", SubsystemKind.SAMPLE_EXTRACTOR),
        ("network", SubsystemKind.NETWORK),
    ],
)
def test_subsystem_kind_parse(name: str, expected: SubsystemKind) -> None:
    assert SubsystemKind.parse(name) is expected


def test_subsystem_kind_parse_rejects_unknown_names() -> None:
    with pytest.raises(UnknownSubsystemError):
        SubsystemKind.parse("database")
