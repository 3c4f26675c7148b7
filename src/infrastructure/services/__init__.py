"""Infrastructure services package."""

from .recording_catalog import RecordingCatalog
from .status_aggregator import StatusAggregator

__all__ = ["RecordingCatalog", "StatusAggregator"]
