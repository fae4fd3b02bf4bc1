"""
FlightStatsEngine - airport statistics over cached flight logs.

The engine is the single object the API layer and background updater talk
to. It owns a FlightLogCache and computes derived views on demand; nothing
derived is stored.

There is no module-level instance. Whoever wires up the service creates
one engine and passes it to every consumer:

    engine = FlightStatsEngine.from_source(SampleFlightLogSource())
    stats = engine.get_airport_statistics('BOM')
"""

import logging
import random
from typing import List, Optional

from peakboard.airline_db import airline_name
from peakboard.analytics.airport_stats import (
    AirportStatistics,
    PeakHourBucket,
    compute_airport_statistics,
    compute_peak_hours,
)
from peakboard.analytics.simulation import (
    DEFAULT_MAX_JITTER_MINUTES,
    DEFAULT_UPDATE_PROBABILITY,
    simulate_real_time_updates,
)
from peakboard.cache import FlightLog, FlightLogCache
from peakboard.config import config

logger = logging.getLogger(__name__)


class FlightStatsEngine:
    """
    Computes airport statistics from a per-airport flight-log cache.

    Read operations (get_*) may refresh the cache from the source but never
    change flight data. apply_real_time_updates() is the only operation that
    rewrites a cached log.
    """

    def __init__(
        self,
        cache: FlightLogCache,
        rng: Optional[random.Random] = None,
        update_probability: float = DEFAULT_UPDATE_PROBABILITY,
        max_jitter_minutes: int = DEFAULT_MAX_JITTER_MINUTES,
    ):
        self.cache = cache
        self.rng = rng or random.Random()
        self.update_probability = update_probability
        self.max_jitter_minutes = max_jitter_minutes

    @classmethod
    def from_source(cls, source, **kwargs) -> 'FlightStatsEngine':
        """Create an engine with a cache over the given source, using config defaults."""
        cache = FlightLogCache(
            source,
            freshness_seconds=config.cache.freshness_seconds,
            source_timeout_seconds=config.cache.source_timeout_seconds,
        )
        kwargs.setdefault('update_probability', config.realtime.update_probability)
        kwargs.setdefault('max_jitter_minutes', config.realtime.max_jitter_minutes)
        return cls(cache, **kwargs)

    def get_flight_log(self, airport_code: str) -> FlightLog:
        """
        Current flight log for an airport (may trigger a refresh).

        The returned tuple is the cached one; treat it as read-only.

        Raises:
            SourceUnavailable if a refresh failed
        """
        return self.cache.get(airport_code)

    def get_airport_statistics(self, airport_code: str) -> AirportStatistics:
        """Summary statistics computed from the current flight log."""
        return compute_airport_statistics(self.get_flight_log(airport_code))

    def get_peak_hour_analysis(self, airport_code: str) -> List[PeakHourBucket]:
        """Peak-hour buckets, busiest first."""
        return compute_peak_hours(self.get_flight_log(airport_code))

    def apply_real_time_updates(self, airport_code: str) -> FlightLog:
        """
        Jitter the cached flight log and write it back.

        Mutating: the simulated log replaces the cache entry (resetting its
        age) and is returned. The read, simulate and write happen under the
        airport's lock, so concurrent calls serialize.

        Raises:
            SourceUnavailable if the log had to be refreshed and the source failed
        """
        with self.cache.locked(airport_code) as code:
            current = self.cache.get(code)
            updated = simulate_real_time_updates(
                current,
                rng=self.rng,
                update_probability=self.update_probability,
                max_jitter_minutes=self.max_jitter_minutes,
            )
            self.cache.replace(code, updated)

        changed = sum(1 for before, after in zip(current, updated) if before is not after)
        logger.debug(f'Real-time update for {code}: {changed}/{len(updated)} flights changed')
        return updated

    @staticmethod
    def airline_name(flight_number: str) -> str:
        """Carrier name for a flight number, or 'Unknown Airline'."""
        return airline_name(flight_number)
