"""Subsystem collectors composing probes into subsystem statuses."""

from .base import SubsystemCollector
from .network import NetworkCollector
from .recording import RecordingCollector
from .sample_extractor import SampleExtractorCollector
from .storage import StorageCollector
from .transfer import TransferServiceCollector

__all__ = [
    "NetworkCollector",
    "RecordingCollector",
    "SampleExtractorCollector",
    "StorageCollector",
    "SubsystemCollector",
    "TransferServiceCollector",
]
