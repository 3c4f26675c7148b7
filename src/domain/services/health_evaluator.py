"""Domain service deriving the overall health verdict from subsystem statuses.

Rules are evaluated in a fixed order so that the issue list is stable for a
given input; severity only ever escalates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional

from src.domain.entities.status import (
    HealthSeverity,
    MetricValue,
    OverallHealth,
    SubsystemKind,
    SubsystemState,
    SubsystemStatus,
)

IDLE_SUMMARY = "System idle"


@dataclass(frozen=True, slots=True)
class HealthThresholds:
    """Local disk usage limits, in percent."""

    disk_warning_percent: float = 75.0
    disk_critical_percent: float = 90.0


class _Verdict:
    def __init__(self) -> None:
        self.severity = HealthSeverity.HEALTHY
        self.issues: List[str] = []

    def flag(self, severity: HealthSeverity, issue: str) -> None:
        self.severity = self.severity.escalate(severity)
        self.issues.append(issue)


def _number(value: MetricValue) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value)
    except ValueError:
        return None


def _check_recording(status: SubsystemStatus, verdict: _Verdict) -> None:
    if status.state.is_failure:
        verdict.flag(HealthSeverity.ERROR, "Recording system error")
    elif (_number(status.metric("activeRecordings")) or 0) == 0:
        verdict.flag(HealthSeverity.WARNING, "No active recordings")


def _check_transfer(status: SubsystemStatus, verdict: _Verdict) -> None:
    if status.state.is_failure:
        verdict.flag(HealthSeverity.ERROR, "Transfer error")
    elif status.state is not SubsystemState.RUNNING:
        verdict.flag(HealthSeverity.WARNING, "Transfer service stopped")


def _check_storage(
    status: SubsystemStatus, thresholds: HealthThresholds, verdict: _Verdict
) -> None:
    usage = _number(status.metric("usagePercent"))
    if usage is None:
        return
    if usage > thresholds.disk_critical_percent:
        verdict.flag(HealthSeverity.ERROR, "Local disk critical")
    elif usage > thresholds.disk_warning_percent:
        verdict.flag(HealthSeverity.WARNING, "Local disk warning")


def _check_network(status: SubsystemStatus, verdict: _Verdict) -> None:
    reachable = status.metric("reachable") is True
    if status.state is not SubsystemState.RUNNING or not reachable:
        verdict.flag(HealthSeverity.WARNING, "Remote storage unreachable")


def build_summary(systems: Mapping[SubsystemKind, SubsystemStatus]) -> str:
    """Describe what the host is currently doing, or ``System idle``."""
    parts: List[str] = []

    active = int(_number(systems[SubsystemKind.RECORDING].metric("activeRecordings")) or 0)
    if active > 0:
        parts.append(f"{active} recording")

    if systems[SubsystemKind.TRANSFER_SERVICE].metric("transferring") is True:
        parts.append("transferring")

    if systems[SubsystemKind.SAMPLE_EXTRACTOR].state is SubsystemState.RUNNING:
        parts.append("sampling")

    return ", ".join(parts) if parts else IDLE_SUMMARY


def evaluate(
    systems: Mapping[SubsystemKind, SubsystemStatus],
    thresholds: HealthThresholds = HealthThresholds(),
) -> OverallHealth:
    """Evaluate the overall health of a complete set of subsystem statuses.

    Pure and deterministic: identical input always yields an equal
    ``OverallHealth``.
    """

    verdict = _Verdict()
    _check_recording(systems[SubsystemKind.RECORDING], verdict)
    _check_transfer(systems[SubsystemKind.TRANSFER_SERVICE], verdict)
    _check_storage(systems[SubsystemKind.STORAGE], thresholds, verdict)
    _check_network(systems[SubsystemKind.NETWORK], verdict)

    return OverallHealth(
        severity=verdict.severity,
        issues=tuple(verdict.issues),
        summary=build_summary(systems),
    )


def escalate_for_timeout(health: OverallHealth, issue: str) -> OverallHealth:
    """Force ``health`` to error and append the timeout ``issue``."""
    return OverallHealth(
        severity=health.severity.escalate(HealthSeverity.ERROR),
        issues=health.issues + (issue,),
        summary=health.summary,
    )
