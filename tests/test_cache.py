from __future__ import annotations

import threading
import time

import pytest

from peakboard.cache import FlightLogCache, normalize_airport_code
from peakboard.errors import SourceUnavailable


def make_cache(source, clock, **kwargs) -> FlightLogCache:
    kwargs.setdefault('freshness_seconds', 300)
    kwargs.setdefault('source_timeout_seconds', 0)
    return FlightLogCache(source, clock=clock, **kwargs)


def test_fresh_entry_returned_without_refetch(stub_source, clock):
    cache = make_cache(stub_source, clock)

    first = cache.get('BOM')
    clock.advance(299)
    second = cache.get('BOM')

    assert first is second
    assert stub_source.calls == ['BOM']


def test_stale_entry_triggers_exactly_one_refetch(stub_source, clock):
    cache = make_cache(stub_source, clock)

    first = cache.get('BOM')
    clock.advance(300)
    second = cache.get('BOM')
    third = cache.get('BOM')

    assert stub_source.calls == ['BOM', 'BOM']
    assert second is third
    assert second is not first
    assert second == first


def test_codes_are_normalized(stub_source, clock):
    cache = make_cache(stub_source, clock)

    cache.get(' bom ')
    cache.get('BOM')

    assert stub_source.calls == ['BOM']


def test_empty_code_rejected(stub_source, clock):
    cache = make_cache(stub_source, clock)

    with pytest.raises(ValueError):
        cache.get('  ')
    with pytest.raises(ValueError):
        normalize_airport_code('')


def test_source_failure_raises_and_keeps_previous_entry(stub_source, clock):
    cache = make_cache(stub_source, clock)
    original = cache.get('BOM')
    entry_before = cache.peek('BOM')

    stub_source.error = ConnectionError('feed down')
    clock.advance(301)

    with pytest.raises(SourceUnavailable) as excinfo:
        cache.get('BOM')

    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert excinfo.value.airport_code == 'BOM'
    assert cache.peek('BOM') is entry_before
    assert cache.peek('BOM').flights is original
    assert cache.stats['failures'] == 1


def test_source_unavailable_from_source_propagates_unchanged(stub_source, clock):
    cache = make_cache(stub_source, clock)
    error = SourceUnavailable('db down', airport_code='BOM')
    stub_source.error = error

    with pytest.raises(SourceUnavailable) as excinfo:
        cache.get('BOM')

    assert excinfo.value is error
    assert cache.peek('BOM') is None


def test_malformed_source_data_rejected(clock):
    class BadSource:
        def load(self, airport_code):
            return [{'id': '1'}]

    cache = make_cache(BadSource(), clock)

    with pytest.raises(SourceUnavailable):
        cache.get('BOM')
    assert cache.peek('BOM') is None


def test_slow_source_times_out(clock):
    release = threading.Event()

    class SlowSource:
        def load(self, airport_code):
            release.wait(5)
            return []

    cache = make_cache(SlowSource(), clock, source_timeout_seconds=0.05)
    try:
        with pytest.raises(SourceUnavailable, match='timed out'):
            cache.get('BOM')
        assert cache.peek('BOM') is None
    finally:
        release.set()
        cache.shutdown()


def test_source_called_through_executor_when_timeout_set(stub_source, clock):
    cache = make_cache(stub_source, clock, source_timeout_seconds=5)
    try:
        flights = cache.get('BOM')
    finally:
        cache.shutdown()

    assert len(flights) == 5


def test_replace_resets_age(stub_source, clock, flight_factory):
    cache = make_cache(stub_source, clock)
    cache.get('BOM')

    clock.advance(250)
    replacement = [flight_factory(id='99')]
    cache.replace('bom', replacement)
    clock.advance(100)

    flights = cache.get('BOM')

    assert [f.id for f in flights] == ['99']
    assert stub_source.calls == ['BOM']


def test_unknown_airport_is_cached_as_empty_log(stub_source, clock):
    cache = make_cache(stub_source, clock)

    assert cache.get('XYZ') == ()
    assert cache.get('XYZ') == ()
    assert stub_source.calls == ['XYZ']


def test_invalidate_and_clear(stub_source, clock):
    cache = make_cache(stub_source, clock)
    cache.get('BOM')
    cache.get('DEL')

    cache.invalidate('bom')
    assert cache.peek('BOM') is None
    assert cache.airport_codes() == ['DEL']

    cache.clear()
    assert cache.airport_codes() == []


def test_stats_track_hits_and_misses(stub_source, clock):
    cache = make_cache(stub_source, clock)
    cache.get('BOM')
    cache.get('BOM')
    cache.get('BOM')

    stats = cache.stats

    assert stats['hits'] == 2
    assert stats['misses'] == 1
    assert stats['refreshes'] == 1
    assert stats['entries'] == 1


def test_concurrent_refresh_fetches_once(scenario_flights, clock):
    class CountingSource:
        def __init__(self):
            self.calls = 0
            self._lock = threading.Lock()

        def load(self, airport_code):
            with self._lock:
                self.calls += 1
            time.sleep(0.05)
            return scenario_flights

    source = CountingSource()
    cache = make_cache(source, clock)
    results = []

    threads = [threading.Thread(target=lambda: results.append(cache.get('BOM'))) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert source.calls == 1
    assert all(r is results[0] for r in results)


def test_last_error_tracks_most_recent_load(stub_source, clock):
    cache = make_cache(stub_source, clock)
    cache.get('BOM')
    assert cache.stats['last_error'] is None

    stub_source.error = ConnectionError('feed down')
    clock.advance(301)
    with pytest.raises(SourceUnavailable):
        cache.get('BOM')
    assert 'feed down' in cache.stats['last_error']

    stub_source.error = None
    cache.get('BOM')
    assert cache.stats['last_error'] is None
