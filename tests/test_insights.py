from __future__ import annotations

import pytest

from peakboard.analytics.airport_stats import compute_airport_statistics, compute_peak_hours
from peakboard.analytics.insights import (
    analyze,
    capacity_summary,
    cascading_risk_level,
    delay_summary,
    hour_label,
    peak_hour_summary,
    route_patterns,
)


class StaticEngine:
    """Engine stand-in serving a fixed flight log."""

    def __init__(self, flights):
        self.flights = flights

    def get_flight_log(self, airport_code):
        return self.flights

    def get_airport_statistics(self, airport_code):
        return compute_airport_statistics(self.flights)

    def get_peak_hour_analysis(self, airport_code):
        return compute_peak_hours(self.flights)


def test_hour_label():
    assert hour_label(6) == '06:00'
    assert hour_label(23) == '23:00'


def test_peak_hour_summary_periods(flight_factory):
    hours = [7, 7, 8, 13, 19, 2]
    flights = [flight_factory(id=str(i), hour=h) for i, h in enumerate(hours)]

    summary = peak_hour_summary(compute_peak_hours(flights))

    assert summary['peak_hour'] == '07:00'
    assert summary['peak_flights'] == 2
    # The 02:00 flight sits outside every period
    assert summary['morning_percentage'] == 60
    assert summary['afternoon_percentage'] == 20
    assert summary['evening_percentage'] == 20
    assert summary['hourly_distribution'][0] == {'hour': '07:00', 'flights': 2, 'utilization': 100}
    assert summary['insights'][1] == 'Morning hours show the highest traffic concentration'


def test_peak_hour_summary_empty():
    summary = peak_hour_summary([])

    assert summary['peak_hour'] is None
    assert summary['peak_flights'] == 0
    assert summary['morning_percentage'] == 0
    assert summary['insights'] == []


@pytest.mark.parametrize('avg_delay, level', [
    (0, 'low'),
    (15, 'low'),
    (15.1, 'medium'),
    (30, 'medium'),
    (31, 'high'),
])
def test_cascading_risk_level(avg_delay, level):
    assert cascading_risk_level(avg_delay) == level


def test_delay_summary_for_scenario(scenario_flights):
    summary = delay_summary(compute_airport_statistics(scenario_flights))

    assert summary['total_delayed_flights'] == 4
    assert summary['average_delay'] == 17.8
    assert summary['delayed_percentage'] == 80
    assert summary['cascading_risk'] == {
        'level': 'medium',
        'propagation_rate': 0.8,
        'affected_flights': 4,
    }


def test_delay_summary_empty_log():
    summary = delay_summary(compute_airport_statistics([]))

    assert summary['delayed_percentage'] == 0
    assert summary['cascading_risk']['propagation_rate'] == 0.0
    assert summary['cascading_risk']['level'] == 'low'


def test_capacity_summary_clamps_efficiency(scenario_flights):
    summary = capacity_summary(compute_airport_statistics(scenario_flights))
    metrics = summary['efficiency_metrics']

    assert summary['current_utilization'] == 4.17
    assert summary['peak_hour'] == '06:00'
    assert summary['peak_flights'] == 5
    assert metrics['runway_utilization'] == pytest.approx(9.17)
    assert metrics['gate_utilization'] == pytest.approx(2.17)
    assert metrics['ground_handling_efficiency'] == 0.0


def test_route_patterns(flight_factory):
    flights = [
        flight_factory(id='1', hour=6, origin='BOM', destination='DEL'),
        flight_factory(id='2', hour=6, origin='BOM', destination='DEL'),
        flight_factory(id='3', hour=9, origin='BLR', destination='BOM', duration_minutes=90),
        flight_factory(id='4', hour=9, origin='BOM', destination='MAA'),
    ]

    patterns = route_patterns(flights, 'bom')

    assert patterns['flight_ratio'] == {'incoming': 25, 'outgoing': 75}
    assert patterns['popular_routes'][0] == {'route': 'BOM-DEL', 'frequency': 2}
    assert len(patterns['popular_routes']) == 3
    assert patterns['time_patterns'] == {'peak_departure': '06:00', 'peak_arrival': '08:00'}


def test_route_patterns_keeps_top_five(flight_factory):
    destinations = ['DEL', 'DEL', 'BLR', 'MAA', 'HYD', 'CCU', 'GOI', 'PNQ']
    flights = [flight_factory(id=str(i), destination=d) for i, d in enumerate(destinations)]

    patterns = route_patterns(flights, 'BOM')

    assert len(patterns['popular_routes']) == 5
    assert patterns['popular_routes'][0]['route'] == 'BOM-DEL'


def test_route_patterns_empty():
    patterns = route_patterns([], 'BOM')

    assert patterns['flight_ratio'] == {'incoming': 0, 'outgoing': 0}
    assert patterns['popular_routes'] == []
    assert patterns['time_patterns'] == {'peak_departure': None, 'peak_arrival': None}


def test_analyze_dispatch(scenario_flights):
    engine = StaticEngine(scenario_flights)

    assert analyze(engine, 'BOM', 'peak-hours')['peak_flights'] == 5
    assert analyze(engine, 'BOM', 'delays')['total_flights'] == 5
    assert analyze(engine, 'BOM', 'capacity')['current_utilization'] == 4.17
    assert analyze(engine, 'BOM', 'patterns')['flight_ratio']['outgoing'] == 100


def test_analyze_rejects_unknown_type(scenario_flights):
    with pytest.raises(ValueError, match='Invalid analysis type'):
        analyze(StaticEngine(scenario_flights), 'BOM', 'weather')
