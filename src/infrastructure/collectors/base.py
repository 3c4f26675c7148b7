"""Common behaviour for subsystem collectors."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from src.application.models.monitoring_config import MonitoringConfig, MountTarget
from src.domain.entities.probe import Fact, MountInfo, ProbeOutcome, failure_reason
from src.domain.entities.status import (
    MetricValue,
    SubsystemKind,
    SubsystemState,
    SubsystemStatus,
)
from src.domain.ports.probes import IMountProbe
from src.shared import get_logger

logger = get_logger(__name__)

LabelledOutcome = Tuple[str, ProbeOutcome]
Metrics = Dict[str, MetricValue]


class SubsystemCollector(ABC):
    """Compose probes into the status of one subsystem.

    ``collect`` never raises and never runs past ``collector_budget``: an
    overrun yields an ``unknown`` status and an unexpected error a
    ``degraded`` one.
    """

    kind: SubsystemKind

    def __init__(self, config: MonitoringConfig) -> None:
        self._config = config
        self._timeouts = config.timeouts

    async def collect(self) -> SubsystemStatus:
        budget = self._timeouts.collector_budget
        try:
            status = await asyncio.wait_for(self._collect(), timeout=budget)
        except asyncio.TimeoutError:
            logger.warning("collector.timeout", subsystem=self.kind.value, budget=budget)
            return SubsystemStatus.unknown(
                self.kind, f"collector timed out after {budget:g}s"
            )
        except Exception as exc:
            logger.warning(
                "collector.failed",
                subsystem=self.kind.value,
                error=str(exc),
                exc_info=exc,
            )
            return SubsystemStatus.degraded(self.kind, f"{type(exc).__name__}: {exc}")

        logger.debug("collector.done", subsystem=self.kind.value, state=status.state.value)
        return status

    @abstractmethod
    async def _collect(self) -> SubsystemStatus:
        """Run the probes and map their outcomes to a status."""

    def _status(
        self,
        state: SubsystemState,
        metrics: Metrics,
        *,
        primary: Iterable[LabelledOutcome] = (),
        secondary: Iterable[LabelledOutcome] = (),
        message: Optional[str] = None,
    ) -> SubsystemStatus:
        """Build the final status, downgrading it when probes failed.

        A failed primary probe means the state is unknown; a failed
        secondary probe leaves the state determinable but degraded.
        """

        primary_failures = _describe_failures(primary)
        if primary_failures:
            return SubsystemStatus.unknown(self.kind, "; ".join(primary_failures), metrics)

        secondary_failures = _describe_failures(secondary)
        if secondary_failures:
            return SubsystemStatus.degraded(
                self.kind, "; ".join(secondary_failures), metrics
            )

        return SubsystemStatus(kind=self.kind, state=state, metrics=metrics, message=message)


def _describe_failures(outcomes: Iterable[LabelledOutcome]) -> List[str]:
    failures = []
    for label, outcome in outcomes:
        reason = failure_reason(outcome)
        if reason is not None:
            failures.append(f"{label} probe {reason}")
    return failures


async def probe_mounts(
    probe: IMountProbe, mounts: Sequence[MountTarget], timeout: float
) -> List[LabelledOutcome]:
    """Query every mount concurrently, labelled by mount name."""
    outcomes = await asyncio.gather(*(probe.query(m.path, timeout) for m in mounts))
    return [(f"mount {m.name}", outcome) for m, outcome in zip(mounts, outcomes)]


def mounted_paths(outcomes: Iterable[LabelledOutcome]) -> List[str]:
    paths = []
    for _, outcome in outcomes:
        if isinstance(outcome, Fact) and isinstance(outcome.value, MountInfo):
            if outcome.value.mounted:
                paths.append(outcome.value.path)
    return paths
