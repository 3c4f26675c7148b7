"""Sample extractor: the sampler script, its schedule and produced samples."""

from __future__ import annotations

import asyncio

from src.application.models.monitoring_config import MonitoringConfig
from src.domain.entities.probe import Fact
from src.domain.entities.status import SubsystemKind, SubsystemState, SubsystemStatus
from src.domain.ports.probes import IFileCountProbe, IProcessProbe, IScheduleProbe

from .base import Metrics, SubsystemCollector


class SampleExtractorCollector(SubsystemCollector):
    kind = SubsystemKind.SAMPLE_EXTRACTOR

    def __init__(
        self,
        config: MonitoringConfig,
        process_probe: IProcessProbe,
        schedule_probe: IScheduleProbe,
        file_count_probe: IFileCountProbe,
    ) -> None:
        super().__init__(config)
        self._process_probe = process_probe
        self._schedule_probe = schedule_probe
        self._file_count_probe = file_count_probe

    async def _collect(self) -> SubsystemStatus:
        config, timeouts = self._config, self._timeouts
        files = self._file_count_probe
        service, schedule, samples, recent, recordings = await asyncio.gather(
            self._process_probe.query(config.sampler_pattern, timeouts.process),
            self._schedule_probe.query(config.sampler_job, timeouts.schedule),
            files.query(config.data_dir, config.samples_glob, timeouts.file_count),
            files.query(
                config.data_dir,
                config.samples_glob,
                timeouts.file_count,
                max_age=config.recent_sample_window,
            ),
            files.query(config.data_dir, config.recordings_glob, timeouts.file_count),
        )

        metrics: Metrics = {}
        state = SubsystemState.IDLE
        if isinstance(service, Fact):
            metrics["running"] = service.value.count > 0
            if service.value.count > 0:
                state = SubsystemState.RUNNING
            if service.value.pids:
                metrics["pid"] = service.value.pids[0]
            if service.value.ages:
                metrics["uptimeSeconds"] = service.value.ages[0]

        if isinstance(schedule, Fact):
            metrics["cronConfigured"] = schedule.value.configured
            metrics["cronSchedule"] = schedule.value.schedule

        if isinstance(samples, Fact):
            metrics["totalSamples"] = samples.value.count
        if isinstance(recent, Fact):
            metrics["recentSamples"] = recent.value.count
        if isinstance(recordings, Fact):
            metrics["totalRecordings"] = recordings.value.count

        if isinstance(samples, Fact) and isinstance(recordings, Fact):
            total = recordings.value.count
            metrics["sampleRatio"] = (
                round(samples.value.count / total, 2) if total > 0 else 0.0
            )

        return self._status(
            state,
            metrics,
            primary=[("sampler process", service)],
            secondary=[
                ("sampler schedule", schedule),
                ("sample count", samples),
                ("recent sample count", recent),
                ("recording count", recordings),
            ],
        )
