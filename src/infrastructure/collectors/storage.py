"""Storage: local data disk usage and NAS mount availability."""

from __future__ import annotations

import asyncio

from src.application.models.monitoring_config import MonitoringConfig
from src.domain.entities.probe import Fact
from src.domain.entities.status import SubsystemKind, SubsystemState, SubsystemStatus
from src.domain.ports.probes import IDiskUsageProbe, IMountProbe

from .base import Metrics, SubsystemCollector, mounted_paths, probe_mounts


class StorageCollector(SubsystemCollector):
    kind = SubsystemKind.STORAGE

    def __init__(
        self,
        config: MonitoringConfig,
        disk_usage_probe: IDiskUsageProbe,
        mount_probe: IMountProbe,
    ) -> None:
        super().__init__(config)
        self._disk_usage_probe = disk_usage_probe
        self._mount_probe = mount_probe

    def local_status(self, used_percent: float) -> str:
        thresholds = self._config.thresholds
        if used_percent > thresholds.disk_critical_percent:
            return "critical"
        if used_percent > thresholds.disk_warning_percent:
            return "warning"
        return "good"

    async def _collect(self) -> SubsystemStatus:
        config, timeouts = self._config, self._timeouts
        disk, mounts = await asyncio.gather(
            self._disk_usage_probe.query(config.data_dir, timeouts.disk),
            probe_mounts(self._mount_probe, config.mounts, timeouts.mount),
        )

        mounted = mounted_paths(mounts)
        metrics: Metrics = {
            "mountedCount": len(mounted),
            "expectedMounts": len(config.mounts),
            "requiredMounts": config.required_mounts,
        }

        state = SubsystemState.RUNNING
        message = None
        if isinstance(disk, Fact):
            usage = disk.value
            metrics["usagePercent"] = usage.used_percent
            metrics["availableBytes"] = usage.available_bytes
            metrics["totalBytes"] = usage.total_bytes
            metrics["localStatus"] = self.local_status(usage.used_percent)

            critical = config.thresholds.disk_critical_percent
            if usage.used_percent > critical:
                state = SubsystemState.DEGRADED
                message = (
                    f"local disk usage {usage.used_percent:g}% exceeds {critical:g}%"
                )

        if state is SubsystemState.RUNNING and len(mounted) < config.required_mounts:
            state = SubsystemState.DEGRADED
            message = (
                f"only {len(mounted)} of {config.required_mounts} required NAS mounts available"
            )

        return self._status(
            state,
            metrics,
            primary=[("disk usage", disk)],
            secondary=mounts,
            message=message,
        )
