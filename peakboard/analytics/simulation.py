"""
Simulated real-time delay jitter.

Stands in for a live event feed: a random subset of flights has its delay
nudged up or down. This module only produces a new flight log; writing it
back to the cache is the engine's explicit job.
"""

import random
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from peakboard.flight_log import FlightRecord, FlightStatus

DEFAULT_UPDATE_PROBABILITY = 0.1
DEFAULT_MAX_JITTER_MINUTES = 15


def jitter_flight(flight: FlightRecord, jitter_minutes: int) -> FlightRecord:
    """
    Apply a delay change to one flight.

    Delay is clamped at 0. A positive change marks the flight DELAYED;
    otherwise the status is kept.
    """
    delay = max(0, (flight.delay_minutes or 0) + jitter_minutes)
    status = FlightStatus.DELAYED if jitter_minutes > 0 else flight.status
    return replace(flight, delay_minutes=delay, status=status)


def simulate_real_time_updates(
    flights: Sequence[FlightRecord],
    rng: Optional[random.Random] = None,
    update_probability: float = DEFAULT_UPDATE_PROBABILITY,
    max_jitter_minutes: int = DEFAULT_MAX_JITTER_MINUTES,
) -> Tuple[FlightRecord, ...]:
    """
    Return a new flight log with random delay jitter applied.

    Each flight is picked independently with update_probability; picked
    flights get a uniform integer change in [-max_jitter, +max_jitter].
    The input sequence is not modified.
    """
    rng = rng or random.Random()

    updated = []
    for flight in flights:
        if rng.random() < update_probability:
            jitter = rng.randint(-max_jitter_minutes, max_jitter_minutes)
            updated.append(jitter_flight(flight, jitter))
        else:
            updated.append(flight)
    return tuple(updated)
