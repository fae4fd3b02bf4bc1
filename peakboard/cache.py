"""
In-memory per-airport cache for flight logs.

Keeps the most recently loaded flight log for each airport code and
reloads it from the flight-log source once it is older than the
freshness window (five minutes by default).

Design:
- Entries are replaced wholesale on refresh; there is no incremental merge
- Each airport code has its own re-entrant lock, so a refresh or a
  read-modify-write for one airport serializes while other airports
  proceed in parallel
- Source calls are bounded by a timeout; a failed or slow source raises
  SourceUnavailable and leaves the previous entry untouched
- The key space (airport codes) is small and externally bounded, so
  entries are never evicted
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from peakboard.config import config
from peakboard.errors import BadRequest, SourceUnavailable
from peakboard.flight_log import FlightRecord

logger = logging.getLogger(__name__)

FlightLog = Tuple[FlightRecord, ...]


def normalize_airport_code(airport_code: str) -> str:
    """Strip and upper-case an airport code; reject empty codes with BadRequest."""
    code = (airport_code or '').strip().upper()
    if not code:
        raise BadRequest('Airport code is required')
    return code


@dataclass(frozen=True)
class AirportCacheEntry:
    """Cached flight log for one airport with its refresh time."""
    flights: FlightLog
    refreshed_at: float

    def age(self, now: float) -> float:
        return now - self.refreshed_at


class FlightLogCache:
    """
    Thread-safe per-airport flight-log cache.

    The source is any object with a load(airport_code) method returning
    an iterable of FlightRecord.
    """

    def __init__(
        self,
        source,
        freshness_seconds: Optional[float] = None,
        source_timeout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.source = source
        self.freshness_seconds = (
            freshness_seconds if freshness_seconds is not None
            else config.cache.freshness_seconds
        )
        self.source_timeout_seconds = (
            source_timeout_seconds if source_timeout_seconds is not None
            else config.cache.source_timeout_seconds
        )
        self._clock = clock

        self._entries: Dict[str, AirportCacheEntry] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

        self._executor: Optional[ThreadPoolExecutor] = None
        if self.source_timeout_seconds and self.source_timeout_seconds > 0:
            self._executor = ThreadPoolExecutor(
                max_workers=4,
                thread_name_prefix='flight-log-source',
            )

        # Statistics
        self._hits = 0
        self._misses = 0
        self._refreshes = 0
        self._failures = 0
        self._last_error: Optional[str] = None

    def _lock_for(self, code: str) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(code)
            if lock is None:
                lock = threading.RLock()
                self._locks[code] = lock
            return lock

    @contextmanager
    def locked(self, airport_code: str) -> Iterator[str]:
        """
        Hold the per-airport lock for a read-modify-write sequence.

        Yields the normalized airport code. Re-entrant, so get() and
        replace() can be called inside the block.
        """
        code = normalize_airport_code(airport_code)
        with self._lock_for(code):
            yield code

    def get(self, airport_code: str) -> FlightLog:
        """
        Get the flight log for an airport, refreshing it if stale.

        Fresh entries are returned as the identical cached tuple.

        Raises:
            SourceUnavailable if a refresh was needed and the source failed
        """
        with self.locked(airport_code) as code:
            entry = self._entries.get(code)
            now = self._clock()
            if entry is not None and entry.age(now) < self.freshness_seconds:
                self._hits += 1
                return entry.flights

            self._misses += 1
            flights = self._load(code)
            self._store(code, flights)

            logger.info(f'Flight log for {code} refreshed with {len(flights)} flights')
            return flights

    def replace(self, airport_code: str, flights: Iterable[FlightRecord]) -> AirportCacheEntry:
        """Replace the cached flight log for an airport and reset its age."""
        with self.locked(airport_code) as code:
            return self._store(code, tuple(flights))

    def peek(self, airport_code: str) -> Optional[AirportCacheEntry]:
        """Return the current entry without refreshing, or None."""
        code = normalize_airport_code(airport_code)
        with self._lock_for(code):
            return self._entries.get(code)

    def _store(self, code: str, flights: FlightLog) -> AirportCacheEntry:
        entry = AirportCacheEntry(flights=flights, refreshed_at=self._clock())
        self._entries[code] = entry
        return entry

    def _load(self, code: str) -> FlightLog:
        """Call the source with a bounded timeout and validate the result."""
        try:
            if self._executor is None:
                raw = self.source.load(code)
                flights = tuple(raw)
            else:
                future = self._executor.submit(lambda: tuple(self.source.load(code)))
                flights = future.result(timeout=self.source_timeout_seconds)
        except SourceUnavailable as e:
            self._record_failure(e.message)
            logger.error(f'Flight-log source unavailable for {code}')
            raise
        except FutureTimeoutError as e:
            self._record_failure(f'Flight-log source timed out for {code}')
            logger.error(
                f'Flight-log source timed out for {code} '
                f'after {self.source_timeout_seconds}s'
            )
            raise SourceUnavailable(
                f'Flight-log source timed out for {code}', airport_code=code
            ) from e
        except Exception as e:
            self._record_failure(f'Flight-log source failed for {code}: {e}')
            logger.error(f'Flight-log source failed for {code}: {e}')
            raise SourceUnavailable(
                f'Flight-log source failed for {code}: {e}', airport_code=code
            ) from e

        for flight in flights:
            if not isinstance(flight, FlightRecord):
                self._record_failure(f'Flight-log source returned malformed data for {code}')
                logger.error(f'Flight-log source returned malformed data for {code}')
                raise SourceUnavailable(
                    f'Flight-log source returned malformed data for {code}',
                    airport_code=code,
                )

        self._refreshes += 1
        self._last_error = None
        return flights

    def _record_failure(self, message: str) -> None:
        self._failures += 1
        self._last_error = message

    def invalidate(self, airport_code: str) -> None:
        """Remove a specific airport from the cache."""
        code = normalize_airport_code(airport_code)
        with self._lock_for(code):
            self._entries.pop(code, None)

    def clear(self) -> None:
        """Clear the entire cache."""
        with self._registry_lock:
            codes = list(self._locks)
        for code in codes:
            with self._lock_for(code):
                self._entries.pop(code, None)

    def airport_codes(self) -> List[str]:
        """Airport codes currently cached."""
        with self._registry_lock:
            return sorted(self._entries)

    def shutdown(self) -> None:
        """Stop the source worker threads."""
        if self._executor is not None:
            self._executor.shutdown(wait=False)

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        lookups = self._hits + self._misses
        return {
            'entries': len(self._entries),
            'airports': self.airport_codes(),
            'hits': self._hits,
            'misses': self._misses,
            'hit_rate': self._hits / lookups if lookups > 0 else 0,
            'refreshes': self._refreshes,
            'failures': self._failures,
            'last_error': self._last_error,
            'freshness_seconds': self.freshness_seconds,
        }
