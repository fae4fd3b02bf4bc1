"""
Analytics module for Peakboard.

Aggregates airport flight logs into dashboard figures:
- Summary statistics (delays, peak hour, capacity heuristic)
- Peak-hour distribution
- Simulated real-time delay jitter
- Dashboard analysis views
"""

from peakboard.analytics.airport_stats import (
    AirportStatistics,
    PeakHourBucket,
    compute_airport_statistics,
    compute_peak_hours,
)
from peakboard.analytics.simulation import simulate_real_time_updates

__all__ = [
    'AirportStatistics',
    'PeakHourBucket',
    'compute_airport_statistics',
    'compute_peak_hours',
    'simulate_real_time_updates',
]
