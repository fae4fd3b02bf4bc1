from __future__ import annotations

import os
import tempfile
from datetime import datetime, timedelta

# Must be set before peakboard.config is imported
_DB_DIR = tempfile.mkdtemp(prefix='peakboard-tests-')
os.environ['DATABASE_URL'] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ['FLIGHT_LOG_SOURCE'] = 'sample'
os.environ['REALTIME_ENABLED'] = '0'

import pytest

from peakboard.flight_log import FlightRecord, FlightStatus


class FakeClock:
    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubSource:
    def __init__(self, logs: dict[str, list[FlightRecord]] | None = None):
        self.logs = logs or {}
        self.calls: list[str] = []
        self.error: Exception | None = None

    def load(self, airport_code: str):
        self.calls.append(airport_code)
        if self.error is not None:
            raise self.error
        return list(self.logs.get(airport_code, []))


def build_flight(
    id: str = '1',
    hour: int = 6,
    minute: int = 0,
    delay: int | None = None,
    flight_number: str = 'AI101',
    origin: str = 'BOM',
    destination: str = 'DEL',
    airport_code: str = 'BOM',
    status: FlightStatus = FlightStatus.SCHEDULED,
    duration_minutes: int = 120,
) -> FlightRecord:
    departure = datetime(2025, 7, 25, hour, minute)
    return FlightRecord.build(
        id=id,
        flight_number=flight_number,
        origin=origin,
        destination=destination,
        scheduled_departure=departure,
        scheduled_arrival=departure + timedelta(minutes=duration_minutes),
        airport_code=airport_code,
        status=status,
        delay_minutes=delay,
    )


@pytest.fixture
def flight_factory():
    return build_flight


@pytest.fixture
def scenario_flights():
    """Five flights at 06:00 with delays 20, 17, 8, 0, 44."""
    return [
        build_flight(id=str(i), hour=6, delay=delay)
        for i, delay in enumerate([20, 17, 8, 0, 44], start=1)
    ]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stub_source(scenario_flights):
    return StubSource({'BOM': scenario_flights})
