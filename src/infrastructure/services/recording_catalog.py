"""Infrastructure implementation of the read-only recording catalog."""

from __future__ import annotations

import asyncio
import os
from typing import Awaitable, List, Optional, Sequence, Tuple, TypeVar

from src.application.models.monitoring_config import MonitoringConfig, MountTarget
from src.domain.entities.catalog import (
    CameraRecordings,
    DriveStatus,
    LogEntry,
    NasDetails,
    NasDrive,
    Recording,
    Sample,
)
from src.domain.entities.errors import CatalogUnavailableError, InvalidQueryError
from src.domain.entities.probe import Fact, ProbeOutcome, failure_reason
from src.domain.ports.probes import (
    IDirectoryListProbe,
    IDiskUsageProbe,
    IFileCountProbe,
    IFileListProbe,
    ILogTailProbe,
    IMountProbe,
    IProcessProbe,
    IScheduleProbe,
)
from src.domain.ports.recording_catalog import IRecordingCatalog
from src.domain.services.catalog_parser import (
    classify_log_line,
    drive_status,
    looks_like_camera_id,
    mentions_camera,
    normalize_date,
    parse_recording,
    parse_sample,
    validate_camera_id,
)
from src.shared import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

NO_LOG_FILE = "No log file found"

# Cameras inspected at once; each inspection spawns two commands.
_CAMERA_CONCURRENCY = 4


class RecordingCatalog(IRecordingCatalog):
    """Answer dashboard queries by listing files through the probes.

    Each view runs under the global deadline; probes are killed when it
    expires and the view raises ``CatalogUnavailableError``.
    """

    def __init__(
        self,
        config: MonitoringConfig,
        *,
        file_list_probe: IFileListProbe,
        file_count_probe: IFileCountProbe,
        directory_probe: IDirectoryListProbe,
        log_tail_probe: ILogTailProbe,
        process_probe: IProcessProbe,
        mount_probe: IMountProbe,
        disk_usage_probe: IDiskUsageProbe,
        schedule_probe: IScheduleProbe,
    ) -> None:
        self._config = config
        self._timeouts = config.timeouts
        self._file_list_probe = file_list_probe
        self._file_count_probe = file_count_probe
        self._directory_probe = directory_probe
        self._log_tail_probe = log_tail_probe
        self._process_probe = process_probe
        self._mount_probe = mount_probe
        self._disk_usage_probe = disk_usage_probe
        self._schedule_probe = schedule_probe

    async def recent_samples(self, limit: Optional[int] = None) -> List[Sample]:
        return await self._bounded("recent samples", self._recent_samples(limit))

    async def cameras(self, search: Optional[str] = None) -> List[CameraRecordings]:
        return await self._bounded("cameras", self._cameras(search))

    async def recordings_by_date(
        self, camera_id: str, date: Optional[str] = None, limit: int = 100
    ) -> List[Recording]:
        camera_id = validate_camera_id(camera_id)
        day = normalize_date(date)
        if limit < 1:
            raise InvalidQueryError("limit", limit, "must be at least 1")
        return await self._bounded(
            "recordings", self._recordings_by_date(camera_id, day, limit)
        )

    async def recent_logs(self, lines: int = 10) -> List[LogEntry]:
        if lines < 1:
            raise InvalidQueryError("lines", lines, "must be at least 1")
        return await self._bounded("logs", self._recent_logs(lines))

    async def nas_details(self) -> NasDetails:
        return await self._bounded("NAS details", self._nas_details())

    async def _recent_samples(self, limit: Optional[int]) -> List[Sample]:
        outcome = await self._file_list_probe.query(
            self._config.data_dir,
            self._config.samples_glob,
            self._timeouts.file_count,
            max_age=self._config.recent_sample_window,
            limit=limit or self._config.recent_samples_limit,
        )
        listing = _require("recent samples", outcome)
        samples = [sample for sample in map(parse_sample, listing.entries) if sample]
        logger.debug("catalog.recent_samples", count=len(samples))
        return samples

    async def _cameras(self, search: Optional[str]) -> List[CameraRecordings]:
        outcome, recorders = await asyncio.gather(
            self._directory_probe.query(self._config.data_dir, self._timeouts.file_count),
            self._process_probe.query(
                self._config.recording_pattern, self._timeouts.process
            ),
        )
        listing = _require("cameras", outcome)
        commands = recorders.value.commands if isinstance(recorders, Fact) else ()
        needle = (search or "").strip().lower()
        names = [
            name
            for name in listing.names
            if looks_like_camera_id(name) and needle in name.lower()
        ]

        gate = asyncio.Semaphore(_CAMERA_CONCURRENCY)

        async def inspect(name: str) -> Optional[CameraRecordings]:
            async with gate:
                return await self._camera(name, commands)

        found = [camera for camera in await asyncio.gather(*map(inspect, names)) if camera]
        logger.debug("catalog.cameras", directories=len(names), cameras=len(found))
        return sorted(found, key=lambda camera: (not camera.is_recording, camera.camera_id))

    async def _camera(
        self, camera_id: str, recorder_commands: Sequence[str]
    ) -> Optional[CameraRecordings]:
        camera_dir = os.path.join(self._config.data_dir, camera_id)
        recordings_dir = os.path.join(camera_dir, "recordings")
        listing, samples = await asyncio.gather(
            self._file_list_probe.query(
                recordings_dir,
                "**/*.mp4",
                self._timeouts.file_count,
                limit=self._config.camera_recordings_limit,
            ),
            self._file_count_probe.query(
                os.path.join(camera_dir, "samples"),
                "**/*_sample_*.mp4",
                self._timeouts.file_count,
            ),
        )

        problems = _problems(("recordings", listing), ("samples", samples))
        sample_count = samples.value.count if isinstance(samples, Fact) else 0
        if isinstance(listing, Fact) and listing.value.root_exists:
            return CameraRecordings(
                camera_id=camera_id,
                is_recording=any(
                    mentions_camera(command, camera_id) for command in recorder_commands
                ),
                recordings=tuple(
                    recording
                    for recording in map(parse_recording, listing.value.entries)
                    if recording
                ),
                sample_count=sample_count,
                recordings_path=recordings_dir,
                message=problems,
            )

        # No recordings directory: only cameras that left samples are shown.
        if sample_count == 0 and problems is None:
            return None
        return CameraRecordings(
            camera_id=camera_id,
            is_recording=False,
            sample_count=sample_count,
            message=problems,
        )

    async def _recordings_by_date(
        self, camera_id: str, day: str, limit: int
    ) -> List[Recording]:
        outcome = await self._file_list_probe.query(
            os.path.join(self._config.data_dir, camera_id, "recordings"),
            f"**/{camera_id}_{day}_*.mp4",
            self._timeouts.file_count,
            limit=limit,
        )
        listing = _require("recordings", outcome)
        return [recording for recording in map(parse_recording, listing.entries) if recording]

    async def _recent_logs(self, lines: int) -> List[LogEntry]:
        outcome = await self._log_tail_probe.query(
            self._config.log_file, lines, self._timeouts.log_tail
        )
        tail = _require("logs", outcome)
        if not tail.found:
            return [LogEntry(message=NO_LOG_FILE)]
        return [classify_log_line(line) for line in tail.lines]

    async def _nas_details(self) -> NasDetails:
        config, timeouts = self._config, self._timeouts
        drives, transfers, service, cron = await asyncio.gather(
            asyncio.gather(*(self._drive(mount) for mount in config.mounts)),
            self._process_probe.query(config.rsync_pattern, timeouts.process),
            self._process_probe.query(config.transfer_pattern, timeouts.process),
            self._schedule_probe.query(config.transfer_job, timeouts.schedule),
        )
        return NasDetails(
            drives=tuple(drives),
            active_transfers=transfers.value.count if isinstance(transfers, Fact) else 0,
            service_running=isinstance(service, Fact) and service.value.count > 0,
            cron_configured=isinstance(cron, Fact) and cron.value.configured,
        )

    async def _drive(self, mount: MountTarget) -> NasDrive:
        timeouts = self._timeouts
        mounted = await self._mount_probe.query(mount.path, timeouts.mount)
        if not isinstance(mounted, Fact):
            return NasDrive(
                path=mount.path,
                name=mount.name,
                kind=mount.kind,
                mounted=False,
                status=DriveStatus.UNKNOWN,
                message=f"mount: {mounted.reason}",
            )
        if not mounted.value.mounted:
            return NasDrive(
                path=mount.path,
                name=mount.name,
                kind=mount.kind,
                mounted=False,
                status=DriveStatus.NOT_MOUNTED,
            )

        usage, files = await asyncio.gather(
            self._disk_usage_probe.query(mount.path, timeouts.disk),
            self._file_count_probe.query(
                mount.path, self._config.recordings_glob, timeouts.file_count
            ),
        )
        used_percent = usage.value.used_percent if isinstance(usage, Fact) else None
        return NasDrive(
            path=mount.path,
            name=mount.name,
            kind=mount.kind,
            mounted=True,
            status=drive_status(used_percent, self._config.thresholds),
            used_percent=used_percent,
            available_bytes=usage.value.available_bytes if isinstance(usage, Fact) else None,
            file_count=files.value.count if isinstance(files, Fact) else 0,
            message=_problems(("usage", usage), ("files", files)),
        )

    async def _bounded(self, view: str, work: Awaitable[T]) -> T:
        deadline = self._timeouts.global_deadline
        try:
            return await asyncio.wait_for(work, timeout=deadline)
        except asyncio.TimeoutError as exc:
            logger.warning("catalog.timeout", view=view, deadline=deadline)
            raise CatalogUnavailableError(view, f"timed out after {deadline:g}s") from exc


def _require(view: str, outcome: ProbeOutcome[T]) -> T:
    if isinstance(outcome, Fact):
        return outcome.value
    logger.warning("catalog.unavailable", view=view, reason=outcome.reason)
    raise CatalogUnavailableError(view, outcome.reason)


def _problems(*labelled: Tuple[str, ProbeOutcome]) -> Optional[str]:
    reasons = [
        f"{label}: {failure_reason(outcome)}"
        for label, outcome in labelled
        if failure_reason(outcome) is not None
    ]
    return "; ".join(reasons) or None
