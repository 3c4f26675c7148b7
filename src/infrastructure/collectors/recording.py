"""Recording subsystem: segmenting ffmpeg processes and recorded files."""

from __future__ import annotations

import asyncio
import re
from typing import Iterable, List

from src.application.models.monitoring_config import MonitoringConfig
from src.domain.entities.probe import Fact
from src.domain.entities.status import SubsystemKind, SubsystemState, SubsystemStatus
from src.domain.ports.probes import IFileCountProbe, IProcessProbe

from .base import Metrics, SubsystemCollector

_CAMERA_ID = re.compile(r"([A-Z]+_\d+[A-Z]*)")


def extract_cameras(commands: Iterable[str]) -> List[str]:
    """Camera identifiers (e.g. ``CAM_12B``) found in recorder command lines."""
    cameras = set()
    for command in commands:
        match = _CAMERA_ID.search(command)
        if match:
            cameras.add(match.group(1))
    return sorted(cameras)


class RecordingCollector(SubsystemCollector):
    kind = SubsystemKind.RECORDING

    def __init__(
        self,
        config: MonitoringConfig,
        process_probe: IProcessProbe,
        file_count_probe: IFileCountProbe,
    ) -> None:
        super().__init__(config)
        self._process_probe = process_probe
        self._file_count_probe = file_count_probe

    async def _collect(self) -> SubsystemStatus:
        processes, recordings = await asyncio.gather(
            self._process_probe.query(
                self._config.recording_pattern, self._timeouts.process
            ),
            self._file_count_probe.query(
                self._config.data_dir,
                self._config.recordings_glob,
                self._timeouts.file_count,
            ),
        )

        metrics: Metrics = {}
        state = SubsystemState.STOPPED
        if isinstance(processes, Fact):
            info = processes.value
            metrics["activeRecordings"] = info.count
            if info.count > 0:
                state = SubsystemState.RUNNING
            if info.pids:
                metrics["pid"] = info.pids[0]
            if info.ages:
                metrics["oldestProcessAgeSeconds"] = max(info.ages)
            cameras = extract_cameras(info.commands)
            if cameras:
                metrics["cameras"] = ",".join(cameras)

        if isinstance(recordings, Fact):
            metrics["totalRecordings"] = recordings.value.count

        return self._status(
            state,
            metrics,
            primary=[("process", processes)],
            secondary=[("recording count", recordings)],
        )
