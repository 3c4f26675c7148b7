"""Application models package."""

from .monitoring_config import DEFAULT_MOUNTS, MonitoringConfig, MountTarget, ProbeTimeouts
from .system_info import SystemInfo

__all__ = [
    "DEFAULT_MOUNTS",
    "MonitoringConfig",
    "MountTarget",
    "ProbeTimeouts",
    "SystemInfo",
]
