"""
Dashboard analysis views built on top of airport statistics.

Each view reshapes numbers the engine already computes into the panels the
dashboard shows: peak-hour summary, delay summary, capacity summary, and
route patterns. No modelling happens here; every figure is arithmetic over
the current flight log.
"""

import logging
from datetime import timedelta
from typing import Dict, List, Sequence

from peakboard.analytics.airport_stats import (
    AirportStatistics,
    PeakHourBucket,
    find_peak,
    round_half_away,
)
from peakboard.errors import BadRequest
from peakboard.flight_log import FlightRecord

logger = logging.getLogger(__name__)

ANALYSIS_TYPES = ('peak-hours', 'delays', 'capacity', 'patterns')

MAX_SUSTAINABLE_CAPACITY = 95

# Time-of-day windows as [start, end) scheduled hours
DAY_PERIODS = {
    'morning': (6, 12),
    'afternoon': (12, 18),
    'evening': (18, 24),
}


def hour_label(hour: int) -> str:
    """Format an hour of day as 'HH:00'."""
    return f'{hour:02d}:00'


def _percentage(part: int, whole: int) -> int:
    if not whole:
        return 0
    return int(round_half_away(part / whole * 100))


def peak_hour_summary(buckets: Sequence[PeakHourBucket]) -> dict:
    """
    Summarize a peak-hour distribution.

    Period percentages are shares of the flights that fall in the
    morning, afternoon and evening windows; night flights (00-05) are
    not part of the denominator.
    """
    period_counts = {
        period: sum(b.flight_count for b in buckets if start <= b.hour < end)
        for period, (start, end) in DAY_PERIODS.items()
    }
    period_total = sum(period_counts.values())

    peak = buckets[0] if buckets else None

    insights = []
    if peak is not None:
        insights.append(
            f'Peak traffic occurs at {hour_label(peak.hour)} with {peak.flight_count} flights'
        )
        busiest_period = max(period_counts, key=period_counts.get)
        if period_counts[busiest_period]:
            insights.append(f'{busiest_period.capitalize()} hours show the highest traffic concentration')

    return {
        'peak_hour': hour_label(peak.hour) if peak else None,
        'peak_flights': peak.flight_count if peak else 0,
        'morning_percentage': _percentage(period_counts['morning'], period_total),
        'afternoon_percentage': _percentage(period_counts['afternoon'], period_total),
        'evening_percentage': _percentage(period_counts['evening'], period_total),
        'hourly_distribution': [
            {
                'hour': hour_label(b.hour),
                'flights': b.flight_count,
                'utilization': b.utilization,
            }
            for b in buckets
        ],
        'insights': insights,
    }


def cascading_risk_level(avg_delay: float) -> str:
    """Classify delay propagation risk from the average delay."""
    if avg_delay > 30:
        return 'high'
    elif avg_delay > 15:
        return 'medium'
    return 'low'


def delay_summary(stats: AirportStatistics) -> dict:
    """Delay panel: counts, distribution, and cascading risk."""
    total = stats.total_flights
    propagation_rate = round_half_away(stats.delayed_flights / total, 2) if total else 0.0
    delayed_percentage = _percentage(stats.delayed_flights, total)

    return {
        'total_flights': total,
        'total_delayed_flights': stats.delayed_flights,
        'average_delay': stats.avg_delay,
        'delay_distribution': dict(stats.delay_distribution),
        'delayed_percentage': delayed_percentage,
        'cascading_risk': {
            'level': cascading_risk_level(stats.avg_delay),
            'propagation_rate': propagation_rate,
            'affected_flights': stats.delayed_flights,
        },
        'insights': [
            f'{stats.delayed_flights} flights delayed out of {total} total operations',
            f'Average delay time is {stats.avg_delay} minutes',
            f'{delayed_percentage}% of flights experience delays',
        ],
    }


def capacity_summary(stats: AirportStatistics) -> dict:
    """Capacity panel derived from the utilization heuristic."""
    utilization = stats.capacity_utilization
    return {
        'current_utilization': utilization,
        'max_sustainable_capacity': MAX_SUSTAINABLE_CAPACITY,
        'peak_hour': hour_label(stats.peak_hour),
        'peak_flights': stats.peak_flights,
        'efficiency_metrics': {
            'runway_utilization': max(0.0, min(95.0, utilization + 5)),
            'gate_utilization': max(0.0, min(90.0, utilization - 2)),
            'ground_handling_efficiency': max(0.0, min(85.0, utilization - 7)),
        },
    }


def route_patterns(flights: Sequence[FlightRecord], airport_code: str) -> dict:
    """
    Route and time-of-day patterns for a flight log.

    Arrival hour is scheduled departure plus flight duration, so it
    follows whichever duration the record was built with.
    """
    code = airport_code.strip().upper()
    total = len(flights)

    route_counts: Dict[str, int] = {}
    departures_by_hour: Dict[int, int] = {}
    arrivals_by_hour: Dict[int, int] = {}

    for flight in flights:
        route = f'{flight.origin}-{flight.destination}'
        route_counts[route] = route_counts.get(route, 0) + 1

        dep_hour = flight.scheduled_hour
        departures_by_hour[dep_hour] = departures_by_hour.get(dep_hour, 0) + 1

        arrival = flight.scheduled_departure + timedelta(minutes=flight.flight_duration)
        arrivals_by_hour[arrival.hour] = arrivals_by_hour.get(arrival.hour, 0) + 1

    popular_routes: List[dict] = sorted(
        ({'route': route, 'frequency': count} for route, count in route_counts.items()),
        key=lambda r: r['frequency'],
        reverse=True,
    )[:5]

    incoming = sum(1 for f in flights if f.destination == code)
    outgoing = sum(1 for f in flights if f.origin == code)

    peak_departure, _ = find_peak(departures_by_hour)
    peak_arrival, _ = find_peak(arrivals_by_hour)

    return {
        'flight_ratio': {
            'incoming': _percentage(incoming, total),
            'outgoing': _percentage(outgoing, total),
        },
        'popular_routes': popular_routes,
        'time_patterns': {
            'peak_departure': hour_label(peak_departure) if total else None,
            'peak_arrival': hour_label(peak_arrival) if total else None,
        },
    }


def analyze(engine, airport_code: str, analysis_type: str) -> dict:
    """
    Dispatch one analysis view for an airport.

    Raises:
        BadRequest for unknown analysis types
        SourceUnavailable if the flight log could not be loaded
    """
    if analysis_type not in ANALYSIS_TYPES:
        raise BadRequest(
            f'Invalid analysis type: {analysis_type}',
            details={'allowed': list(ANALYSIS_TYPES)},
        )

    logger.debug(f'Running {analysis_type} analysis for {airport_code}')

    if analysis_type == 'peak-hours':
        return peak_hour_summary(engine.get_peak_hour_analysis(airport_code))
    elif analysis_type == 'delays':
        return delay_summary(engine.get_airport_statistics(airport_code))
    elif analysis_type == 'capacity':
        return capacity_summary(engine.get_airport_statistics(airport_code))
    return route_patterns(engine.get_flight_log(airport_code), airport_code)
