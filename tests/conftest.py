from __future__ import annotations

import asyncio
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.application.models import MonitoringConfig, MountTarget, ProbeTimeouts  # noqa: E402
from src.domain.entities.probe import (  # noqa: E402
    DirectoryListing,
    DiskUsage,
    Fact,
    FileCount,
    FileEntry,
    FileListing,
    MountInfo,
    ProbeOutcome,
    ProcessInfo,
    Reachability,
    ScheduleInfo,
    TextTail,
)
from src.domain.entities.status import (  # noqa: E402
    StatusSnapshot,
    SubsystemKind,
    SubsystemState,
    SubsystemStatus,
)
from src.domain.services.health_evaluator import evaluate  # noqa: E402
from src.infrastructure.collectors import (  # noqa: E402
    NetworkCollector,
    RecordingCollector,
    SampleExtractorCollector,
    StorageCollector,
    TransferServiceCollector,
)
from src.infrastructure.collectors.base import SubsystemCollector  # noqa: E402
from src.infrastructure.services.recording_catalog import RecordingCatalog  # noqa: E402

HANG = object()
"""Probe response that never resolves."""

MIB = 1024 * 1024
RECORDED_AT = 1740830400.0  # 2025-03-01T12:00:00Z


async def _respond(response: object) -> ProbeOutcome:
    if response is HANG:
        await asyncio.sleep(3600)
    if isinstance(response, Exception):
        raise response
    return response  # type: ignore[return-value]


@dataclass
class StubProcessProbe:
    responses: Dict[str, object] = field(default_factory=dict)
    calls: List[str] = field(default_factory=list)

    async def query(self, pattern: str, timeout: float) -> ProbeOutcome[ProcessInfo]:
        self.calls.append(pattern)
        return await _respond(self.responses.get(pattern, Fact(ProcessInfo(count=0))))


@dataclass
class StubMountProbe:
    responses: Dict[str, object] = field(default_factory=dict)

    async def query(self, path: str, timeout: float) -> ProbeOutcome[MountInfo]:
        default = Fact(MountInfo(path=path, mounted=True))
        return await _respond(self.responses.get(path, default))


@dataclass
class StubDiskUsageProbe:
    response: object = field(
        default_factory=lambda: Fact(
            DiskUsage(used_percent=40.0, available_bytes=600, total_bytes=1000)
        )
    )

    async def query(self, path: str, timeout: float) -> ProbeOutcome[DiskUsage]:
        return await _respond(self.response)


@dataclass
class StubReachabilityProbe:
    response: Optional[object] = None

    async def query(self, host: str, timeout: float) -> ProbeOutcome[Reachability]:
        if self.response is None:
            return Fact(Reachability(host=host, reachable=True))
        return await _respond(self.response)


@dataclass
class StubScheduleProbe:
    responses: Dict[str, object] = field(default_factory=dict)

    async def query(self, job_name: str, timeout: float) -> ProbeOutcome[ScheduleInfo]:
        default = Fact(ScheduleInfo(configured=True, schedule="*/5 * * * *"))
        return await _respond(self.responses.get(job_name, default))


@dataclass
class StubFileCountProbe:
    """Responses keyed by ``(pattern, recent)``; ``recent`` is True when ``max_age`` is set."""

    responses: Dict[Tuple[str, bool], object] = field(default_factory=dict)

    async def query(
        self,
        path: str,
        pattern: str,
        timeout: float,
        *,
        min_age: Optional[float] = None,
        max_age: Optional[float] = None,
    ) -> ProbeOutcome[FileCount]:
        key = (pattern, max_age is not None)
        return await _respond(self.responses.get(key, Fact(FileCount(count=0))))


@dataclass
class StubFileListProbe:
    """Responses keyed by listed path; unknown paths do not exist."""

    responses: Dict[str, object] = field(default_factory=dict)
    calls: List[Tuple[str, str, Optional[float], Optional[int]]] = field(default_factory=list)

    async def query(
        self,
        path: str,
        pattern: str,
        timeout: float,
        *,
        max_age: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> ProbeOutcome[FileListing]:
        self.calls.append((path, pattern, max_age, limit))
        default = Fact(FileListing(root_exists=False))
        return await _respond(self.responses.get(path, default))


@dataclass
class StubDirectoryListProbe:
    responses: Dict[str, object] = field(default_factory=dict)

    async def query(self, path: str, timeout: float) -> ProbeOutcome[DirectoryListing]:
        default = Fact(DirectoryListing(root_exists=False))
        return await _respond(self.responses.get(path, default))


@dataclass
class StubLogTailProbe:
    response: object = field(
        default_factory=lambda: Fact(
            TextTail(
                lines=(
                    "2025-03-01 12:00:01 SUCCESS extracted 3 samples from CAM_01",
                    "2025-03-01 12:00:02 WARN slow write on /data",
                )
            )
        )
    )
    calls: List[Tuple[str, int]] = field(default_factory=list)

    async def query(self, path: str, lines: int, timeout: float) -> ProbeOutcome[TextTail]:
        self.calls.append((path, lines))
        return await _respond(self.response)


@dataclass
class ProbeSet:
    """Healthy probe stubs for the configuration built by ``monitoring_config``."""

    config: MonitoringConfig
    process: StubProcessProbe = field(default_factory=StubProcessProbe)
    mount: StubMountProbe = field(default_factory=StubMountProbe)
    disk: StubDiskUsageProbe = field(default_factory=StubDiskUsageProbe)
    reachability: StubReachabilityProbe = field(default_factory=StubReachabilityProbe)
    schedule: StubScheduleProbe = field(default_factory=StubScheduleProbe)
    files: StubFileCountProbe = field(default_factory=StubFileCountProbe)
    listings: StubFileListProbe = field(default_factory=StubFileListProbe)
    directories: StubDirectoryListProbe = field(default_factory=StubDirectoryListProbe)
    logs: StubLogTailProbe = field(default_factory=StubLogTailProbe)

    def __post_init__(self) -> None:
        config = self.config
        self.process.responses.update(
            {
                config.recording_pattern: Fact(
                    ProcessInfo(
                        count=2,
                        pids=(11, 12),
                        ages=(600, 300),
                        commands=(
                            "ffmpeg -i rtsp://10.0.0.5/CAM_01 -f segment out",
                            "ffmpeg -i rtsp://10.0.0.6/CAM_02B -f segment out",
                        ),
                    )
                ),
                config.transfer_pattern: Fact(
                    ProcessInfo(count=1, pids=(21,), ages=(900,))
                ),
            }
        )
        self.files.responses.update(
            {
                (config.recordings_glob, False): Fact(FileCount(count=10)),
                (config.samples_glob, False): Fact(FileCount(count=4)),
                (config.samples_glob, True): Fact(FileCount(count=1)),
            }
        )
        self._catalog_defaults()

    def _catalog_defaults(self) -> None:
        """CAM_01 has two recordings and is recording; CAM_07 only left samples."""
        data_dir = self.config.data_dir
        recordings = os.path.join(data_dir, "CAM_01", "recordings")
        self.directories.responses[data_dir] = Fact(
            DirectoryListing(names=("CAM_01", "CAM_07", "lost+found"))
        )
        self.listings.responses[recordings] = Fact(
            FileListing(
                entries=(
                    FileEntry(
                        os.path.join(recordings, "CAM_01_20250301_120000Z.mp4"),
                        120 * MIB,
                        RECORDED_AT,
                    ),
                    FileEntry(
                        os.path.join(recordings, "CAM_01_20250301_113000Z.mp4"),
                        60 * MIB,
                        RECORDED_AT - 1800,
                    ),
                )
            )
        )
        self.listings.responses[data_dir] = Fact(
            FileListing(
                entries=(
                    FileEntry(
                        os.path.join(
                            data_dir, "CAM_01", "samples", "CAM_01_20250301_120000Z_sample_3.mp4"
                        ),
                        1536,
                        RECORDED_AT + 60,
                    ),
                )
            )
        )

    def collectors(self) -> List[SubsystemCollector]:
        config = self.config
        return [
            RecordingCollector(config, self.process, self.files),
            TransferServiceCollector(config, self.process, self.schedule, self.mount),
            SampleExtractorCollector(config, self.process, self.schedule, self.files),
            StorageCollector(config, self.disk, self.mount),
            NetworkCollector(config, self.reachability),
        ]

    def catalog(self) -> RecordingCatalog:
        return RecordingCatalog(
            self.config,
            file_list_probe=self.listings,
            file_count_probe=self.files,
            directory_probe=self.directories,
            log_tail_probe=self.logs,
            process_probe=self.process,
            mount_probe=self.mount,
            disk_usage_probe=self.disk,
            schedule_probe=self.schedule,
        )


@pytest.fixture()
def monitoring_config(tmp_path: Path) -> MonitoringConfig:
    return MonitoringConfig(
        data_dir=str(tmp_path),
        mounts=(
            MountTarget(path="/mnt/primary", name="Primary", kind="primary"),
            MountTarget(path="/mnt/overflow", name="Overflow", kind="overflow"),
        ),
        nas_host="10.0.0.2",
        network_interface="eth1",
        log_file=str(tmp_path / "logs" / "sample-extractor-cron.log"),
        timeouts=ProbeTimeouts(
            process=0.1,
            mount=0.1,
            disk=0.1,
            ping=0.1,
            schedule=0.1,
            file_count=0.1,
            collector_budget=0.3,
            global_deadline=0.6,
        ),
    )


@pytest.fixture()
def probes(monitoring_config: MonitoringConfig) -> ProbeSet:
    return ProbeSet(config=monitoring_config)


@pytest.fixture()
def healthy_systems() -> Dict[SubsystemKind, SubsystemStatus]:
    """Every subsystem up: 3 recordings, 40% disk, NAS reachable."""
    return {
        SubsystemKind.RECORDING: SubsystemStatus(
            kind=SubsystemKind.RECORDING,
            state=SubsystemState.RUNNING,
            metrics={"activeRecordings": 3, "totalRecordings": 120, "pid": 4242},
        ),
        SubsystemKind.TRANSFER_SERVICE: SubsystemStatus(
            kind=SubsystemKind.TRANSFER_SERVICE,
            state=SubsystemState.RUNNING,
            metrics={"running": True, "transferring": False, "mountedCount": 3},
        ),
        SubsystemKind.SAMPLE_EXTRACTOR: SubsystemStatus(
            kind=SubsystemKind.SAMPLE_EXTRACTOR,
            state=SubsystemState.IDLE,
            metrics={"running": False, "totalSamples": 40, "cronConfigured": True},
        ),
        SubsystemKind.STORAGE: SubsystemStatus(
            kind=SubsystemKind.STORAGE,
            state=SubsystemState.RUNNING,
            metrics={"usagePercent": 40.0, "mountedCount": 3},
        ),
        SubsystemKind.NETWORK: SubsystemStatus(
            kind=SubsystemKind.NETWORK,
            state=SubsystemState.RUNNING,
            metrics={"reachable": True, "host": "10.0.0.2"},
        ),
    }


@pytest.fixture()
def hang() -> object:
    """Marker making a stub probe never resolve."""
    return HANG


@pytest.fixture()
def healthy_snapshot(healthy_systems) -> StatusSnapshot:
    return StatusSnapshot(overall=evaluate(healthy_systems), systems=healthy_systems)
