"""
Database models for Peakboard.

Schema for the flight store behind the database flight-log source:
1. Flights filed under a home airport, queried per airport code
2. Airport reference rows for the dashboard header
3. Analytics snapshots written alongside seeded flight logs
"""

from peakboard.models.base import Base, engine, SessionLocal, init_db, get_session
from peakboard.models.airport import Airport
from peakboard.models.analytics import AnalyticsSnapshot
from peakboard.models.flight import Flight

__all__ = [
    'Base',
    'engine',
    'SessionLocal',
    'init_db',
    'get_session',
    'Airport',
    'AnalyticsSnapshot',
    'Flight',
]
