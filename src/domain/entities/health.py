"""
Health domain entities.

Application observability information surfaced by the /info endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from .status import HealthSeverity


@dataclass(slots=True)
class ApplicationInfo:
    """Operational metadata surfaced by the /info endpoint."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    severity: HealthSeverity
    summary: str = ""
    extras: Dict[str, Any] = field(default_factory=dict)
