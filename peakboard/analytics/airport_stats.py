"""
Airport statistics and peak-hour aggregation.

Pure functions over a flight log. Nothing here touches the cache; the
engine loads the log and hands it in, so every result is a fresh value
object computed from whatever log is currently resident.

Conventions:
1. Absent delay counts as 0 for averages and distribution buckets, so a
   flight with no delay information lands in the 'minor' bucket
2. Empty logs and empty peak buckets resolve to 0 instead of dividing
3. Peak hour ties go to the hour seen first in log order, not the
   numerically smallest hour
4. Rounding is half away from zero
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Sequence, Tuple

import numpy as np

from peakboard.flight_log import FlightRecord

# Delay magnitude bucket boundaries (minutes)
MAJOR_DELAY_MINUTES = 15
CRITICAL_DELAY_MINUTES = 60


def round_half_away(value: float, places: int = 0) -> float:
    """Round half away from zero (Decimal ROUND_HALF_UP semantics)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class AirportStatistics:
    """Summary statistics for one airport's flight log."""
    total_flights: int
    delayed_flights: int
    avg_delay: float
    peak_hour: int
    peak_flights: int
    delay_distribution: Dict[str, int] = field(default_factory=dict)
    capacity_utilization: float = 0.0

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'total_flights': self.total_flights,
            'delayed_flights': self.delayed_flights,
            'avg_delay': self.avg_delay,
            'peak_hour': self.peak_hour,
            'peak_flights': self.peak_flights,
            'delay_distribution': dict(self.delay_distribution),
            'capacity_utilization': self.capacity_utilization,
        }


@dataclass(frozen=True)
class PeakHourBucket:
    """Flights scheduled in one hour of the day."""
    hour: int
    flight_count: int
    utilization: int

    def to_dict(self) -> dict:
        return {
            'hour': self.hour,
            'flight_count': self.flight_count,
            'utilization': self.utilization,
        }


def hourly_counts(flights: Sequence[FlightRecord]) -> Dict[int, int]:
    """
    Count flights per scheduled hour.

    Only hours present in the log get a key. Keys keep first-appearance
    order, which is what the peak tie-break relies on.
    """
    counts: Dict[int, int] = {}
    for flight in flights:
        counts[flight.scheduled_hour] = counts.get(flight.scheduled_hour, 0) + 1
    return counts


def find_peak(counts: Dict[int, int]) -> Tuple[int, int]:
    """
    Return (hour, count) of the strictly busiest bucket.

    Ties keep the first hour encountered in iteration order. An empty
    mapping yields (0, 0).
    """
    peak_hour, peak_count = 0, 0
    for hour, count in counts.items():
        if count > peak_count:
            peak_hour, peak_count = hour, count
    return peak_hour, peak_count


def _delay_array(flights: Sequence[FlightRecord]) -> np.ndarray:
    """Delays as a float array with absent delays treated as 0."""
    return np.array(
        [f.delay_minutes if f.delay_minutes is not None else 0 for f in flights],
        dtype=np.float64,
    )


def delay_distribution(flights: Sequence[FlightRecord]) -> Dict[str, int]:
    """
    Bucket flights by absolute delay magnitude.

    minor < 15 min, major 15-59 min, critical >= 60 min. Bucket counts
    always sum to the number of flights.
    """
    magnitudes = np.abs(_delay_array(flights))
    critical = magnitudes >= CRITICAL_DELAY_MINUTES
    major = (magnitudes >= MAJOR_DELAY_MINUTES) & ~critical
    return {
        'minor': int(len(magnitudes) - np.count_nonzero(major) - np.count_nonzero(critical)),
        'major': int(np.count_nonzero(major)),
        'critical': int(np.count_nonzero(critical)),
    }


def compute_airport_statistics(flights: Sequence[FlightRecord]) -> AirportStatistics:
    """
    Compute summary statistics for a flight log.

    An empty log is a quiet airport, not an error: average delay and
    capacity utilization are 0.
    """
    total = len(flights)
    delays = _delay_array(flights)

    delayed = sum(
        1 for f in flights
        if f.delay_minutes is not None and f.delay_minutes > 0
    )
    avg_delay = round_half_away(float(delays.sum()) / total, 2) if total else 0.0

    peak_hour, peak_flights = find_peak(hourly_counts(flights))

    # Crude proxy: assumes every hour could carry as many flights as the busiest one
    if peak_flights:
        capacity = round_half_away(total / (peak_flights * 24) * 100, 2)
    else:
        capacity = 0.0

    return AirportStatistics(
        total_flights=total,
        delayed_flights=delayed,
        avg_delay=avg_delay,
        peak_hour=peak_hour,
        peak_flights=peak_flights,
        delay_distribution=delay_distribution(flights),
        capacity_utilization=capacity,
    )


def compute_peak_hours(flights: Sequence[FlightRecord]) -> List[PeakHourBucket]:
    """
    Build the peak-hour distribution for a flight log.

    Hours without flights are omitted. Utilization is each bucket's share
    of the busiest bucket (0-100). Sorted busiest first; Python's sort is
    stable, so equal counts keep first-appearance order.
    """
    counts = hourly_counts(flights)
    if not counts:
        return []

    max_count = max(counts.values())
    buckets = [
        PeakHourBucket(
            hour=hour,
            flight_count=count,
            utilization=int(round_half_away(count / max_count * 100)),
        )
        for hour, count in counts.items()
    ]
    buckets.sort(key=lambda b: b.flight_count, reverse=True)
    return buckets
