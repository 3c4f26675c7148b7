"""Domain services package."""

from .catalog_parser import (
    classify_log_line,
    drive_status,
    looks_like_camera_id,
    mentions_camera,
    normalize_date,
    parse_recording,
    parse_sample,
    validate_camera_id,
)
from .health_evaluator import HealthThresholds, build_summary, escalate_for_timeout, evaluate

__all__ = [
    "HealthThresholds",
    "build_summary",
    "classify_log_line",
    "drive_status",
    "escalate_for_timeout",
    "evaluate",
    "looks_like_camera_id",
    "mentions_camera",
    "normalize_date",
    "parse_recording",
    "parse_sample",
    "validate_camera_id",
]
