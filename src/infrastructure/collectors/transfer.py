"""NAS transfer service: the transfer script, its watchdog job and rsync activity."""

from __future__ import annotations

import asyncio

from src.application.models.monitoring_config import MonitoringConfig
from src.domain.entities.probe import Fact
from src.domain.entities.status import SubsystemKind, SubsystemState, SubsystemStatus
from src.domain.ports.probes import IMountProbe, IProcessProbe, IScheduleProbe

from .base import Metrics, SubsystemCollector, mounted_paths, probe_mounts


class TransferServiceCollector(SubsystemCollector):
    kind = SubsystemKind.TRANSFER_SERVICE

    def __init__(
        self,
        config: MonitoringConfig,
        process_probe: IProcessProbe,
        schedule_probe: IScheduleProbe,
        mount_probe: IMountProbe,
    ) -> None:
        super().__init__(config)
        self._process_probe = process_probe
        self._schedule_probe = schedule_probe
        self._mount_probe = mount_probe

    async def _collect(self) -> SubsystemStatus:
        config, timeouts = self._config, self._timeouts
        service, schedule, rsync, mounts = await asyncio.gather(
            self._process_probe.query(config.transfer_pattern, timeouts.process),
            self._schedule_probe.query(config.transfer_job, timeouts.schedule),
            self._process_probe.query(config.rsync_pattern, timeouts.process),
            probe_mounts(self._mount_probe, config.mounts, timeouts.mount),
        )

        metrics: Metrics = {"queueDepth": 0, "expectedMounts": len(config.mounts)}
        running = False
        if isinstance(service, Fact):
            running = service.value.count > 0
            metrics["running"] = running
            if service.value.pids:
                metrics["pid"] = service.value.pids[0]
            if service.value.ages:
                metrics["uptimeSeconds"] = service.value.ages[0]

        if isinstance(schedule, Fact):
            metrics["cronConfigured"] = schedule.value.configured
            metrics["cronSchedule"] = schedule.value.schedule

        if isinstance(rsync, Fact):
            metrics["activeTransfers"] = rsync.value.count
            metrics["transferring"] = rsync.value.count > 0

        mounted = mounted_paths(mounts)
        metrics["mountedCount"] = len(mounted)
        metrics["mountedPaths"] = ",".join(mounted)

        state = SubsystemState.RUNNING if running else SubsystemState.STOPPED
        message = None
        if running and config.mounts and not mounted:
            state = SubsystemState.DEGRADED
            message = "no NAS mounts available"

        return self._status(
            state,
            metrics,
            primary=[("transfer process", service)],
            secondary=[("watchdog schedule", schedule), ("rsync process", rsync), *mounts],
            message=message,
        )
