"""Infrastructure implementation of the unified status aggregator."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Dict, Iterable, List, Optional, Set

from src.domain.entities.status import StatusSnapshot, SubsystemKind, SubsystemStatus
from src.domain.ports.collector import ISubsystemCollector
from src.domain.ports.status_aggregator import IStatusAggregator
from src.domain.services.health_evaluator import (
    HealthThresholds,
    escalate_for_timeout,
    evaluate,
)
from src.shared import get_logger

logger = get_logger(__name__)

TIMED_OUT_MESSAGE = "timed out"


class StatusAggregator(IStatusAggregator):
    """Run every collector concurrently and race them against one deadline."""

    def __init__(
        self,
        collectors: Iterable[ISubsystemCollector],
        *,
        thresholds: HealthThresholds = HealthThresholds(),
        global_deadline: float = 10.0,
    ) -> None:
        by_kind: Dict[SubsystemKind, ISubsystemCollector] = {}
        for collector in collectors:
            if collector.kind in by_kind:
                raise ValueError(f"Duplicate collector for {collector.kind.value}")
            by_kind[collector.kind] = collector

        missing = [kind.value for kind in SubsystemKind if kind not in by_kind]
        if missing:
            raise ValueError(f"Missing collectors for: {', '.join(missing)}")

        self._collectors = by_kind
        self._thresholds = thresholds
        self._global_deadline = global_deadline
        # Strong references to abandoned collector tasks until they settle.
        self._abandoned: Set[asyncio.Task] = set()

    async def get_unified_status(
        self, deadline: Optional[float] = None
    ) -> StatusSnapshot:
        """Collect all subsystems and evaluate health, always within ``deadline``."""

        budget = self._global_deadline if deadline is None else deadline
        start = perf_counter()

        tasks = {
            kind: asyncio.create_task(
                self._collectors[kind].collect(), name=f"collect-{kind.value}"
            )
            for kind in SubsystemKind
        }
        done, pending = await self._race(list(tasks.values()), budget)

        systems: Dict[SubsystemKind, SubsystemStatus] = {}
        timed_out: List[SubsystemKind] = []
        for kind, task in tasks.items():
            if task in done:
                systems[kind] = _task_status(kind, task)
            else:
                timed_out.append(kind)
                systems[kind] = SubsystemStatus.unknown(kind, TIMED_OUT_MESSAGE)
        self._abandon(pending)

        health = evaluate(systems, self._thresholds)
        if timed_out:
            names = ", ".join(kind.value for kind in timed_out)
            logger.warning(
                "status.aggregate.timeout", deadline=budget, subsystems=names
            )
            health = escalate_for_timeout(
                health,
                f"Status check timeout: {names} did not finish within {budget:g}s",
            )

        snapshot = StatusSnapshot(overall=health, systems=systems)
        logger.debug(
            "status.aggregate.done",
            severity=health.severity.value,
            issues=len(health.issues),
            elapsed_ms=round((perf_counter() - start) * 1000, 1),
        )
        return snapshot

    async def get_subsystem_status(
        self, kind: SubsystemKind, deadline: Optional[float] = None
    ) -> SubsystemStatus:
        """Collect one subsystem under the same deadline rules."""

        budget = self._global_deadline if deadline is None else deadline
        task = asyncio.create_task(
            self._collectors[kind].collect(), name=f"collect-{kind.value}"
        )
        done, pending = await self._race([task], budget)
        self._abandon(pending)
        if task in done:
            return _task_status(kind, task)

        logger.warning("status.subsystem.timeout", subsystem=kind.value, deadline=budget)
        return SubsystemStatus.unknown(kind, TIMED_OUT_MESSAGE)

    async def aclose(self) -> None:
        """Cancel collector tasks abandoned by earlier calls and wait for them to settle."""
        loop = asyncio.get_running_loop()
        pending = [
            task
            for task in self._abandoned
            if not task.done() and task.get_loop() is loop
        ]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.info("status.aggregator.closed", abandoned=len(pending))

    async def _race(self, tasks: List[asyncio.Task], budget: float):
        try:
            return await asyncio.wait(tasks, timeout=max(budget, 0.0))
        except asyncio.CancelledError:
            self._abandon(task for task in tasks if not task.done())
            raise

    def _abandon(self, tasks: Iterable[asyncio.Task]) -> None:
        """Cancel unfinished tasks without waiting for them."""
        for task in tasks:
            task.cancel()
            self._abandoned.add(task)
            task.add_done_callback(self._abandoned.discard)
            task.add_done_callback(_discard_late_result)


def _task_status(kind: SubsystemKind, task: asyncio.Task) -> SubsystemStatus:
    if task.cancelled():
        return SubsystemStatus.degraded(kind, "collection was cancelled")

    exc = task.exception()
    if exc is not None:
        logger.error(
            "status.collector.raised", subsystem=kind.value, error=str(exc), exc_info=exc
        )
        return SubsystemStatus.degraded(
            kind, f"collector failed: {type(exc).__name__}: {exc}"
        )
    return task.result()


def _discard_late_result(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    # Retrieve the outcome so asyncio does not report it as never retrieved.
    exc = task.exception()
    logger.debug(
        "status.collector.late_result",
        task=task.get_name(),
        error=str(exc) if exc else None,
    )
