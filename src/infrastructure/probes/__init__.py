"""Concrete probes asking the operating system for single facts."""

from .command import CommandResult, run_command
from .directory_probe import DirectoryListProbe
from .disk_usage_probe import DiskUsageProbe
from .file_count_probe import FileCountProbe
from .file_list_probe import FileListProbe
from .log_tail_probe import LogTailProbe
from .mount_probe import MountProbe
from .process_probe import ProcessProbe
from .reachability_probe import ReachabilityProbe
from .schedule_probe import ScheduleProbe

__all__ = [
    "CommandResult",
    "DirectoryListProbe",
    "DiskUsageProbe",
    "FileCountProbe",
    "FileListProbe",
    "LogTailProbe",
    "MountProbe",
    "ProcessProbe",
    "ReachabilityProbe",
    "ScheduleProbe",
    "run_command",
]
