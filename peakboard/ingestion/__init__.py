"""
Ingestion module for Peakboard.

Flight-log sources feeding the per-airport cache, plus the background
updater that simulates live delay changes.
"""

from peakboard.ingestion.sources import (
    DatabaseFlightLogSource,
    HttpFlightLogSource,
    SampleFlightLogSource,
    build_source,
)
from peakboard.ingestion.updater import RealTimeUpdater

__all__ = [
    'DatabaseFlightLogSource',
    'HttpFlightLogSource',
    'SampleFlightLogSource',
    'build_source',
    'RealTimeUpdater',
]
