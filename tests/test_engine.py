from __future__ import annotations

import random
import threading

import pytest

from peakboard.cache import FlightLogCache
from peakboard.engine import FlightStatsEngine
from peakboard.errors import SourceUnavailable
from peakboard.flight_log import FlightStatus
from peakboard.ingestion.sources import SampleFlightLogSource


@pytest.fixture
def engine(stub_source, clock):
    cache = FlightLogCache(stub_source, freshness_seconds=300, source_timeout_seconds=0, clock=clock)
    return FlightStatsEngine(cache, rng=random.Random(7))


def test_statistics_for_scenario(engine):
    stats = engine.get_airport_statistics('BOM')

    assert stats.total_flights == 5
    assert stats.delayed_flights <= stats.total_flights
    assert stats.avg_delay == 17.8
    assert stats.capacity_utilization == 4.17


def test_statistics_for_quiet_airport(engine):
    stats = engine.get_airport_statistics('DEL')

    assert stats.total_flights == 0
    assert stats.avg_delay == 0
    assert stats.capacity_utilization == 0


def test_peak_hour_analysis(engine):
    buckets = engine.get_peak_hour_analysis('bom')

    assert len(buckets) == 1
    assert buckets[0].hour == 6
    assert buckets[0].flight_count == 5
    assert buckets[0].utilization == 100


def test_reads_share_one_fetch(engine, stub_source):
    engine.get_flight_log('BOM')
    engine.get_airport_statistics('BOM')
    engine.get_peak_hour_analysis('BOM')

    assert stub_source.calls == ['BOM']


def test_apply_real_time_updates_writes_back(engine, stub_source, clock):
    engine.update_probability = 1.0
    before = engine.get_flight_log('BOM')
    clock.advance(200)

    updated = engine.apply_real_time_updates('BOM')

    assert engine.get_flight_log('BOM') is updated
    assert updated is not before
    assert engine.cache.peek('BOM').refreshed_at == clock.now
    assert all(f.delay_minutes >= 0 for f in updated)
    for old, new in zip(before, updated):
        if new.delay_minutes > (old.delay_minutes or 0):
            assert new.status is FlightStatus.DELAYED

    # Write-back reset the age, so no refetch within the window
    clock.advance(250)
    engine.get_flight_log('BOM')
    assert stub_source.calls == ['BOM']


def test_apply_real_time_updates_surfaces_source_failure(engine, stub_source):
    stub_source.error = TimeoutError('slow feed')

    with pytest.raises(SourceUnavailable):
        engine.apply_real_time_updates('BOM')
    assert engine.cache.peek('BOM') is None


def test_concurrent_updates_serialize(engine):
    engine.update_probability = 1.0
    engine.max_jitter_minutes = 0
    engine.get_flight_log('BOM')

    errors = []

    def worker():
        try:
            for _ in range(20):
                engine.apply_real_time_updates('BOM')
        except Exception as e:  # pragma: no cover - surfaced by the assertion below
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(engine.get_flight_log('BOM')) == 5


def test_airline_lookup():
    assert FlightStatsEngine.airline_name('ai101') == 'Air India'
    assert FlightStatsEngine.airline_name('ZZ999') == 'Unknown Airline'


def test_from_source_uses_config_defaults():
    engine = FlightStatsEngine.from_source(SampleFlightLogSource())
    try:
        assert engine.cache.freshness_seconds == 300
        assert engine.update_probability == 0.1
        assert engine.max_jitter_minutes == 15
        assert len(engine.get_flight_log('BOM')) == 5
    finally:
        engine.cache.shutdown()
