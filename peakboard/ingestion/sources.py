"""
Flight-log sources.

A source is any object with load(airport_code) returning an iterable of
FlightRecord. The cache calls it on refresh and wraps failures, but
sources raise SourceUnavailable themselves where they know the cause.

Implementations:
1. SampleFlightLogSource: the bundled BOM sample, no I/O
2. DatabaseFlightLogSource: flights table via SQLAlchemy
3. HttpFlightLogSource: JSON flight-log service via requests
"""

import logging
from typing import Iterable, List, Optional

import requests
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from peakboard.config import config
from peakboard.errors import SourceUnavailable
from peakboard.flight_log import FlightRecord
from peakboard.ingestion.sample_data import SAMPLE_FLIGHTS
from peakboard.models import Flight
from peakboard.models.base import SessionLocal

logger = logging.getLogger(__name__)


class SampleFlightLogSource:
    """
    Serves the bundled sample flights.

    Records are filed under BOM, so any other airport gets an empty log.
    """

    def __init__(self, flights: Optional[Iterable[dict]] = None):
        rows = SAMPLE_FLIGHTS if flights is None else list(flights)
        self._records = [FlightRecord.from_dict(row) for row in rows]

    def load(self, airport_code: str) -> List[FlightRecord]:
        code = airport_code.upper()
        return [r for r in self._records if r.airport_code == code]


class DatabaseFlightLogSource:
    """Loads an airport's flights from the database in schedule order."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or SessionLocal

    def load(self, airport_code: str) -> List[FlightRecord]:
        code = airport_code.upper()
        stmt = (
            select(Flight)
            .where(Flight.airport_code == code)
            .order_by(Flight.scheduled_departure.asc(), Flight.id.asc())
        )

        try:
            with self._session_factory() as session:
                rows = session.execute(stmt).scalars().all()
                records = [FlightRecord.from_model(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f'Database flight-log query failed for {code}: {e}')
            raise SourceUnavailable(
                f'Database unavailable for {code}', airport_code=code
            ) from e

        logger.debug(f'Loaded {len(records)} flights for {code} from database')
        return records


class HttpFlightLogSource:
    """
    Fetches an airport's flight log from a JSON HTTP service.

    Endpoint: GET {base_url}/airports/{code}/flights, answering with a
    list of flight objects or {"flights": [...]}.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> 'HttpFlightLogSource':
        """Create source from application configuration."""
        if not config.source.url:
            raise ValueError('FLIGHT_LOG_URL must be set for the http flight-log source')
        timeout = config.cache.source_timeout_seconds
        return cls(
            base_url=config.source.url,
            timeout=timeout if timeout > 0 else 10.0,
        )

    def load(self, airport_code: str) -> List[FlightRecord]:
        code = airport_code.upper()
        url = f'{self.base_url}/airports/{code}/flights'

        logger.debug(f'Fetching flight log: {url}')

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            logger.error(f'Flight-log service timeout for {code}')
            raise SourceUnavailable(f'Flight-log service timed out for {code}', airport_code=code) from e
        except requests.exceptions.HTTPError as e:
            logger.error(f'Flight-log service error for {code}: {e.response.status_code}')
            raise SourceUnavailable(
                f'Flight-log service returned {e.response.status_code} for {code}',
                airport_code=code,
            ) from e
        except ValueError as e:
            # Body was not JSON
            logger.error(f'Flight-log service returned invalid JSON for {code}: {e}')
            raise SourceUnavailable(f'Flight-log service returned invalid JSON for {code}', airport_code=code) from e
        except requests.exceptions.RequestException as e:
            logger.error(f'Flight-log request failed for {code}: {e}')
            raise SourceUnavailable(f'Flight-log service unreachable for {code}', airport_code=code) from e

        if isinstance(data, dict):
            data = data.get('flights')
        if not isinstance(data, list):
            raise SourceUnavailable(f'Flight-log service returned malformed data for {code}', airport_code=code)

        try:
            records = [FlightRecord.from_dict(item) for item in data]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise SourceUnavailable(f'Malformed flight record for {code}: {e}', airport_code=code) from e

        logger.info(f'Received {len(records)} flights for {code} from flight-log service')
        return records


def build_source():
    """Create the flight-log source selected by FLIGHT_LOG_SOURCE."""
    kind = config.source.kind
    if kind == 'sample':
        return SampleFlightLogSource()
    elif kind == 'database':
        return DatabaseFlightLogSource()
    elif kind == 'http':
        return HttpFlightLogSource.from_config()
    raise ValueError(f'Unknown flight-log source: {kind}')
