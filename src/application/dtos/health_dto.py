"""DTOs for service liveness and application info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from src.domain.entities.health import ApplicationInfo
from src.domain.entities.status import HealthSeverity


class ServiceHealthDTO(BaseModel):
    """Liveness of the service itself, independent of what it monitors."""

    status: str = Field(default="ok", description="Always 'ok' while serving")
    service: str = Field(description="Service name")
    modules: List[str] = Field(
        default_factory=list, description="Mounted API module prefixes"
    )


class ModuleHealthDTO(BaseModel):
    module: str
    status: str = "ok"
    service: str


class ApplicationInfoDTO(BaseModel):
    """DTO representing the /info response payload."""

    name: str = Field(description="Application name")
    description: str = Field(description="Application description")
    version: str = Field(description="Application version")
    environment: str = Field(description="Current environment")
    git_commit: str = Field(description="Git commit hash of the build")
    build_time: str = Field(description="Build timestamp")
    started_at: datetime = Field(description="Application start time")
    uptime_seconds: float = Field(description="Uptime in seconds")
    severity: HealthSeverity = Field(description="Current overall fleet health")
    summary: str = Field(default="", description="Current activity summary")
    extras: Dict[str, Any] = Field(
        default_factory=dict, description="Configured monitoring targets"
    )

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            severity=info.severity,
            summary=info.summary,
            extras=info.extras,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Fleet Status Monitor",
                "description": "Unified status of the recording fleet host",
                "version": "1.0.0",
                "environment": "production",
                "git_commit": "abc1234",
                "build_time": "2025-03-01T10:00:00Z",
                "started_at": "2025-03-01T10:00:00Z",
                "uptime_seconds": 3600.0,
                "severity": "healthy",
                "summary": "3 recording, transferring",
                "extras": {"monitoring": {"nas_host": "192.168.100.2"}},
            }
        }
    }
