from __future__ import annotations

import random
import threading
import time

from peakboard.cache import FlightLogCache
from peakboard.engine import FlightStatsEngine
from peakboard.errors import SourceUnavailable
from peakboard.ingestion.updater import RealTimeUpdater


class RecordingEngine:
    """Engine stand-in that records update calls and fails for chosen airports."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []

    def apply_real_time_updates(self, airport_code):
        self.calls.append(airport_code)
        if airport_code in self.failing:
            raise SourceUnavailable('feed down', airport_code=airport_code)
        return ()


def test_codes_are_normalized_and_blank_codes_dropped():
    updater = RealTimeUpdater(RecordingEngine(), airport_codes=[' bom', '', 'del ', '  '])

    assert updater.airport_codes == ['BOM', 'DEL']


def test_watch_and_unwatch():
    updater = RealTimeUpdater(RecordingEngine(), airport_codes=['BOM'])

    updater.watch('blr')
    updater.watch('BLR')
    updater.unwatch('bom')

    assert updater.airport_codes == ['BLR']


def test_run_once_updates_every_airport_and_notifies(stub_source, clock):
    cache = FlightLogCache(stub_source, freshness_seconds=300, source_timeout_seconds=0, clock=clock)
    engine = FlightStatsEngine(cache, rng=random.Random(5), update_probability=1.0)
    updater = RealTimeUpdater(engine, airport_codes=['BOM', 'DEL'], interval=1)
    notified = []
    updater.add_update_callback(lambda code, flights: notified.append((code, len(flights))))

    updated = updater.run_once()

    assert updated == 2
    assert notified == [('BOM', 5), ('DEL', 0)]
    assert updater.stats['cycle_count'] == 1
    assert updater.stats['error_count'] == 0


def test_run_once_keeps_going_after_failure():
    engine = RecordingEngine(failing={'DEL'})
    updater = RealTimeUpdater(engine, airport_codes=['DEL', 'BOM'], interval=1)

    updated = updater.run_once()

    assert updated == 1
    assert engine.calls == ['DEL', 'BOM']
    assert updater.stats['error_count'] == 1


def test_callback_errors_do_not_stop_cycle():
    updater = RealTimeUpdater(RecordingEngine(), airport_codes=['BOM', 'DEL'], interval=1)
    seen = []

    def broken(code, flights):
        raise RuntimeError('subscriber gone')

    updater.add_update_callback(broken)
    updater.add_update_callback(lambda code, flights: seen.append(code))

    assert updater.run_once() == 2
    assert seen == ['BOM', 'DEL']


def test_background_thread_starts_and_stops():
    cycled = threading.Event()
    updater = RealTimeUpdater(RecordingEngine(), airport_codes=['BOM'], interval=0.01)
    updater.add_update_callback(lambda code, flights: cycled.set())

    updater.start_background()
    try:
        assert cycled.wait(2)
    finally:
        updater.stop()

    assert updater.stats['running'] is False
    assert updater.stats['cycle_count'] >= 1


class CrashingEngine:
    """Engine stand-in whose updates fail with an unexpected error."""

    def __init__(self):
        self.calls = 0

    def apply_real_time_updates(self, airport_code):
        self.calls += 1
        raise RuntimeError('corrupt flight log')


def test_run_once_counts_unexpected_errors():
    updater = RealTimeUpdater(CrashingEngine(), airport_codes=['BOM', 'DEL'], interval=1)

    assert updater.run_once() == 0
    assert updater.stats['error_count'] == 2
    assert updater.stats['cycle_count'] == 1


def test_background_thread_survives_unexpected_errors():
    engine = CrashingEngine()
    updater = RealTimeUpdater(engine, airport_codes=['BOM'], interval=0.01)

    updater.start_background()
    try:
        deadline = time.monotonic() + 2
        while updater.stats['cycle_count'] < 3 and time.monotonic() < deadline:
            time.sleep(0.01)

        assert updater._thread.is_alive()
        assert updater.stats['running'] is True
        assert updater.stats['error_count'] >= 3
    finally:
        updater.stop()

    assert updater.stats['running'] is False
