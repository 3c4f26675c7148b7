"""Immutable monitoring configuration consumed by probes and collectors."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple

from src.domain.services.health_evaluator import HealthThresholds


@dataclass(frozen=True)
class MountTarget:
    """A remote (NAS) mount point the transfer service writes to."""

    path: str
    name: str
    kind: str = "primary"


@dataclass(frozen=True)
class ProbeTimeouts:
    """Per-probe budgets and the two aggregation tiers, in seconds."""

    process: float = 5.0
    mount: float = 1.0
    disk: float = 2.0
    ping: float = 2.0
    schedule: float = 1.0
    file_count: float = 5.0
    log_tail: float = 1.0
    collector_budget: float = 8.0
    global_deadline: float = 10.0


DEFAULT_MOUNTS: Tuple[MountTarget, ...] = (
    MountTarget(path="/mnt/qnap", name="18TB Primary", kind="primary"),
    MountTarget(path="/mnt/qnap-26tb", name="26TB Overflow #1", kind="overflow"),
    MountTarget(path="/mnt/qnap-26tb-2", name="26TB Overflow #2", kind="overflow"),
)


@dataclass(frozen=True)
class MonitoringConfig:
    """Everything the monitoring core needs to know about the host.

    Built once at startup and passed explicitly into collectors and the
    aggregator; nothing in the core reads the environment directly.
    """

    data_dir: str
    mounts: Tuple[MountTarget, ...] = DEFAULT_MOUNTS
    min_mounted: Optional[int] = None
    nas_host: str = "192.168.100.2"
    network_interface: str = ""
    recordings_glob: str = "**/recordings/*.mp4"
    samples_glob: str = "**/*_sample_*.mp4"
    recording_pattern: str = "ffmpeg.*-i.*-f segment"
    transfer_pattern: str = "nas-transfer.sh"
    rsync_pattern: str = "rsync"
    sampler_pattern: str = "simple_sampler.sh"
    transfer_job: str = "nas-watchdog"
    sampler_job: str = "sample_extractor"
    log_file: str = ""
    recent_sample_window: float = 3600.0
    recent_samples_limit: int = 20
    camera_recordings_limit: int = 6
    thresholds: HealthThresholds = field(default_factory=HealthThresholds)
    timeouts: ProbeTimeouts = field(default_factory=ProbeTimeouts)

    @property
    def required_mounts(self) -> int:
        """Number of mounts that must be present for storage to be healthy."""
        if self.min_mounted is None:
            return len(self.mounts)
        return max(0, min(self.min_mounted, len(self.mounts)))

    @classmethod
    def from_dict(
        cls,
        monitoring: Mapping[str, Any],
        timeouts: Optional[Mapping[str, Any]] = None,
    ) -> "MonitoringConfig":
        """Build the configuration from the ``monitoring``/``timeouts`` settings sections."""

        base_dir = os.path.expanduser(str(monitoring.get("base_dir") or "~"))
        data_dir = monitoring.get("data_dir") or os.path.join(base_dir, "data")
        log_file = monitoring.get("log_file") or os.path.join(
            base_dir, "logs", "sample-extractor-cron.log"
        )

        return cls(
            data_dir=os.path.expanduser(str(data_dir)),
            mounts=_mounts(monitoring.get("mounts")),
            min_mounted=monitoring.get("min_mounted"),
            nas_host=monitoring.get("nas_host", cls.nas_host),
            network_interface=monitoring.get("network_interface") or "",
            recordings_glob=monitoring.get("recordings_glob", cls.recordings_glob),
            samples_glob=monitoring.get("samples_glob", cls.samples_glob),
            recording_pattern=monitoring.get("recording_pattern", cls.recording_pattern),
            transfer_pattern=monitoring.get("transfer_pattern", cls.transfer_pattern),
            rsync_pattern=monitoring.get("rsync_pattern", cls.rsync_pattern),
            sampler_pattern=monitoring.get("sampler_pattern", cls.sampler_pattern),
            transfer_job=monitoring.get("transfer_job", cls.transfer_job),
            sampler_job=monitoring.get("sampler_job", cls.sampler_job),
            log_file=os.path.expanduser(str(log_file)),
            recent_sample_window=float(
                monitoring.get("recent_sample_window", cls.recent_sample_window)
            ),
            thresholds=HealthThresholds(
                disk_warning_percent=float(monitoring.get("disk_warning_percent", 75.0)),
                disk_critical_percent=float(
                    monitoring.get("disk_critical_percent", 90.0)
                ),
            ),
            timeouts=ProbeTimeouts(
                **{
                    key: float(value)
                    for key, value in (timeouts or {}).items()
                    if key in ProbeTimeouts.__dataclass_fields__
                }
            ),
        )


def _mounts(raw: Optional[Iterable[Any]]) -> Tuple[MountTarget, ...]:
    if raw is None:
        return DEFAULT_MOUNTS
    mounts = []
    for item in raw:
        if isinstance(item, MountTarget):
            mounts.append(item)
        elif isinstance(item, Mapping):
            mounts.append(
                MountTarget(
                    path=str(item["path"]),
                    name=str(item.get("name") or item["path"]),
                    kind=str(item.get("kind") or "primary"),
                )
            )
        else:
            mounts.append(
                MountTarget(
                    path=str(getattr(item, "path")),
                    name=str(getattr(item, "name", None) or getattr(item, "path")),
                    kind=str(getattr(item, "kind", None) or "primary"),
                )
            )
    return tuple(mounts)
