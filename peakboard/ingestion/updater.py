"""
Real-time updater - periodic simulated updates for watched airports.

Each cycle applies FlightStatsEngine.apply_real_time_updates() to every
watched airport and notifies registered callbacks with the new flight log.
A failing airport is logged and counted; the loop keeps going.

Cycle:
1. Update: jitter and write back each watched airport's flight log
2. Notify: invoke callbacks with (airport_code, flights)
"""

import logging
import threading
import time
from typing import Callable, Iterable, List, Optional, Sequence

from peakboard.config import config
from peakboard.errors import SourceUnavailable
from peakboard.flight_log import FlightRecord

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[str, Sequence[FlightRecord]], None]


class RealTimeUpdater:
    """
    Manages the simulated real-time update lifecycle.

    Can run as a background thread for continuous polling.
    """

    def __init__(
        self,
        engine,
        airport_codes: Optional[Iterable[str]] = None,
        interval: Optional[float] = None,
    ):
        """
        Initialize the updater.

        Args:
            engine: FlightStatsEngine whose cache gets updated
            airport_codes: Airports to update each cycle (config default if None)
            interval: Seconds between cycles (config default if None)
        """
        self.engine = engine
        codes = airport_codes if airport_codes is not None else config.realtime.airports
        self.airport_codes: List[str] = [code.strip().upper() for code in codes if code and code.strip()]
        self.interval = interval or config.realtime.interval_seconds

        # State tracking
        self._running = False
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last_cycle_time: float = 0
        self._cycle_count: int = 0
        self._error_count: int = 0

        self._on_update_callbacks: List[UpdateCallback] = []

    def watch(self, airport_code: str) -> None:
        """Add an airport to the update set."""
        code = airport_code.strip().upper()
        if code and code not in self.airport_codes:
            self.airport_codes.append(code)
            logger.info(f'Watching {code} for real-time updates')

    def unwatch(self, airport_code: str) -> None:
        """Remove an airport from the update set."""
        code = airport_code.strip().upper()
        if code in self.airport_codes:
            self.airport_codes.remove(code)
            logger.info(f'Stopped watching {code}')

    def add_update_callback(self, callback: UpdateCallback) -> None:
        """
        Register callback to be invoked after each airport update.

        Callback receives the airport code and its new flight log.
        """
        self._on_update_callbacks.append(callback)

    def run_once(self) -> int:
        """
        Execute one update cycle.

        Returns count of airports updated successfully.
        """
        updated = 0
        for code in list(self.airport_codes):
            try:
                flights = self.engine.apply_real_time_updates(code)
            except SourceUnavailable as e:
                self._error_count += 1
                logger.error(f'Real-time update skipped for {code}: {e}')
                continue
            except Exception:
                self._error_count += 1
                logger.exception(f'Real-time update failed for {code}')
                continue

            updated += 1
            for callback in self._on_update_callbacks:
                try:
                    callback(code, flights)
                except Exception as e:
                    logger.error(f'Update callback error: {e}')

        self._cycle_count += 1
        self._last_cycle_time = time.time()
        logger.debug(f'Real-time cycle {self._cycle_count}: {updated} airports updated')
        return updated

    def run_continuous(self, interval: Optional[float] = None) -> None:
        """
        Run update loop continuously.

        This method blocks - use start_background() for non-blocking.
        """
        interval = interval or self.interval
        self._running = True

        logger.info(f'Starting real-time updates (interval={interval}s)')

        try:
            while self._running:
                self.run_once()
                if self._stop_event.wait(interval):
                    break
        finally:
            self._running = False
        logger.info('Real-time updates stopped')

    def start_background(self, interval: Optional[float] = None) -> None:
        """Start updates in background thread."""
        if self._thread and self._thread.is_alive():
            logger.warning('Real-time updater already running')
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self.run_continuous,
            args=(interval,),
            daemon=True,
        )
        self._thread.start()
        logger.info('Background real-time updates started')

    def stop(self) -> None:
        """Stop background updates."""
        self._running = False
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=5)

    @property
    def stats(self) -> dict:
        """Get updater statistics."""
        return {
            'airports': list(self.airport_codes),
            'cycle_count': self._cycle_count,
            'error_count': self._error_count,
            'last_cycle_time': self._last_cycle_time,
            'running': self._running,
        }
