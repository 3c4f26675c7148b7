"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared import EnumEnvironment, EnumLogLevel


class ServiceSettings(BaseSettings):
    """HTTP service configuration settings."""

    title: str = Field(default="Fleet Status Monitor", description="Service title")
    description: str = Field(
        default="Unified status of the recording, transfer, sampling, "
        "storage and network subsystems of a recording host",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("SERVICE_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("SERVICE_BUILD_TIME", "BUILD_TIME"),
    )
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(
        default=3001,
        description="Port to bind the server",
        validation_alias=AliasChoices("SERVICE_PORT", "PORT"),
    )
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_", case_sensitive=False, extra="ignore"
    )


class MountSettings(BaseModel):
    """A NAS mount point, as given in ``MONITOR_MOUNTS`` (JSON list)."""

    path: str
    name: str
    kind: str = "primary"


class MonitoringSettings(BaseSettings):
    """What the monitoring core looks at on the host."""

    base_dir: str = Field(
        default="~/.traffic-provenance",
        description="Root of the recorder installation",
        validation_alias=AliasChoices("MONITOR_BASE_DIR", "TRAFFIC_BASE_DIR"),
    )
    data_dir: Optional[str] = Field(
        default=None, description="Recording data directory (default: <base_dir>/data)"
    )
    recordings_glob: str = Field(
        default="**/recordings/*.mp4", description="Glob of recorded segments"
    )
    samples_glob: str = Field(
        default="**/*_sample_*.mp4", description="Glob of extracted samples"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Sample extractor log (default: <base_dir>/logs/sample-extractor-cron.log)",
    )
    mounts: List[MountSettings] = Field(
        default_factory=lambda: [
            MountSettings(path="/mnt/qnap", name="18TB Primary", kind="primary"),
            MountSettings(path="/mnt/qnap-26tb", name="26TB Overflow #1", kind="overflow"),
            MountSettings(
                path="/mnt/qnap-26tb-2", name="26TB Overflow #2", kind="overflow"
            ),
        ],
        description="NAS mount points the transfer service writes to",
    )
    min_mounted: Optional[int] = Field(
        default=None,
        description="Mounts required for healthy storage (default: all of them)",
    )
    nas_host: str = Field(default="192.168.100.2", description="NAS address to ping")
    network_interface: str = Field(
        default="", description="Interface facing the NAS, reported only"
    )
    recording_pattern: str = Field(default="ffmpeg.*-i.*-f segment")
    transfer_pattern: str = Field(default="nas-transfer.sh")
    rsync_pattern: str = Field(default="rsync")
    sampler_pattern: str = Field(default="simple_sampler.sh")
    transfer_job: str = Field(default="nas-watchdog")
    sampler_job: str = Field(default="sample_extractor")
    recent_sample_window: float = Field(
        default=3600.0, description="Window, in seconds, for recent samples"
    )
    disk_warning_percent: float = Field(default=75.0, ge=0, le=100)
    disk_critical_percent: float = Field(default=90.0, ge=0, le=100)

    model_config = SettingsConfigDict(
        env_prefix="MONITOR_", case_sensitive=False, extra="ignore"
    )


class TimeoutSettings(BaseSettings):
    """Per-probe timeouts and the aggregation deadlines, in seconds."""

    process: float = Field(default=5.0, gt=0)
    mount: float = Field(default=1.0, gt=0)
    disk: float = Field(default=2.0, gt=0)
    ping: float = Field(default=2.0, gt=0)
    schedule: float = Field(default=1.0, gt=0)
    file_count: float = Field(default=5.0, gt=0)
    log_tail: float = Field(default=1.0, gt=0)
    collector_budget: float = Field(default=8.0, gt=0)
    global_deadline: float = Field(default=10.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="TIMEOUT_", case_sensitive=False, extra="ignore"
    )

    @model_validator(mode="after")
    def _budget_fits_deadline(self) -> "TimeoutSettings":
        if self.collector_budget >= self.global_deadline:
            raise ValueError(
                f"collector_budget ({self.collector_budget:g}s) must be below "
                f"global_deadline ({self.global_deadline:g}s)"
            )
        return self


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    service: ServiceSettings = Field(default_factory=ServiceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)
    timeouts: TimeoutSettings = Field(default_factory=TimeoutSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()
