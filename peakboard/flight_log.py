"""
Flight log records.

A flight log is an ordered sequence of FlightRecord values filed under one
home airport. Records are immutable: the cache hands the same tuple to every
reader, and simulated updates produce new records instead of editing shared
ones.

Derived fields (scheduled hour, day of week, duration) are computed once at
ingestion by FlightRecord.build() so aggregation never re-parses timestamps.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

from peakboard.airline_db import aircraft_type_name, airline_name


class FlightStatus(str, Enum):
    """Operational status of a flight leg."""
    SCHEDULED = 'SCHEDULED'
    DELAYED = 'DELAYED'
    DEPARTED = 'DEPARTED'
    ARRIVED = 'ARRIVED'
    CANCELLED = 'CANCELLED'


@dataclass(frozen=True)
class FlightRecord:
    """
    One observed or scheduled flight leg.

    Fields:
        id: Opaque unique identifier
        flight_number: Carrier code + digits (e.g., 'AI101')
        origin / destination: 3-letter airport codes (not validated)
        scheduled_departure / scheduled_arrival: Planned times
        actual_departure / actual_arrival: Present once realized
        status: FlightStatus
        delay_minutes: Minutes late; None or 0 means unknown / no delay
        aircraft: Free-text identifier (e.g., 'A20N (VT-EXU)')
        airport_code: Home airport the record is filed under
        scheduled_hour: Hour of scheduled departure (0-23)
        day_of_week: Day of scheduled departure, Monday=0
        flight_duration: Minutes from departure to arrival
    """
    id: str
    flight_number: str
    origin: str
    destination: str
    scheduled_departure: datetime
    scheduled_arrival: datetime
    status: FlightStatus
    airport_code: str
    scheduled_hour: int
    day_of_week: int
    flight_duration: int
    actual_departure: Optional[datetime] = None
    actual_arrival: Optional[datetime] = None
    delay_minutes: Optional[int] = None
    aircraft: Optional[str] = None

    @classmethod
    def build(
        cls,
        id: str,
        flight_number: str,
        origin: str,
        destination: str,
        scheduled_departure: datetime,
        scheduled_arrival: datetime,
        airport_code: str,
        status: FlightStatus = FlightStatus.SCHEDULED,
        actual_departure: Optional[datetime] = None,
        actual_arrival: Optional[datetime] = None,
        delay_minutes: Optional[int] = None,
        aircraft: Optional[str] = None,
    ) -> 'FlightRecord':
        """
        Create a record and compute its derived fields.

        Duration uses actual times when both are known, scheduled times
        otherwise. Arrival before departure yields a negative duration.
        """
        if actual_departure is not None and actual_arrival is not None:
            start, end = actual_departure, actual_arrival
        else:
            start, end = scheduled_departure, scheduled_arrival

        return cls(
            id=str(id),
            flight_number=flight_number,
            origin=origin,
            destination=destination,
            scheduled_departure=scheduled_departure,
            scheduled_arrival=scheduled_arrival,
            status=FlightStatus(status),
            airport_code=airport_code.upper(),
            scheduled_hour=scheduled_departure.hour,
            day_of_week=scheduled_departure.weekday(),
            flight_duration=int((end - start).total_seconds() // 60),
            actual_departure=actual_departure,
            actual_arrival=actual_arrival,
            delay_minutes=delay_minutes,
            aircraft=aircraft,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FlightRecord':
        """
        Parse a JSON-style mapping into a record.

        Accepts snake_case or camelCase keys and ISO-8601 timestamps.
        Raises KeyError, ValueError or TypeError on malformed input.
        """
        def field(snake: str, camel: str, required: bool = True):
            if snake in data:
                return data[snake]
            if camel in data:
                return data[camel]
            if required:
                raise KeyError(snake)
            return None

        delay = field('delay_minutes', 'delayMinutes', required=False)

        return cls.build(
            id=field('id', 'id'),
            flight_number=field('flight_number', 'flightNumber'),
            origin=field('origin', 'origin'),
            destination=field('destination', 'destination'),
            scheduled_departure=_parse_datetime(field('scheduled_departure', 'scheduledDeparture')),
            scheduled_arrival=_parse_datetime(field('scheduled_arrival', 'scheduledArrival')),
            airport_code=field('airport_code', 'airportCode'),
            status=FlightStatus(field('status', 'status', required=False) or FlightStatus.SCHEDULED),
            actual_departure=_parse_optional_datetime(field('actual_departure', 'actualDeparture', required=False)),
            actual_arrival=_parse_optional_datetime(field('actual_arrival', 'actualArrival', required=False)),
            delay_minutes=int(delay) if delay is not None else None,
            aircraft=field('aircraft', 'aircraft', required=False),
        )

    @classmethod
    def from_model(cls, flight) -> 'FlightRecord':
        """Convert a database Flight row into a record."""
        return cls.build(
            id=flight.id,
            flight_number=flight.flight_number,
            origin=flight.origin,
            destination=flight.destination,
            scheduled_departure=flight.scheduled_departure,
            scheduled_arrival=flight.scheduled_arrival,
            airport_code=flight.airport_code,
            status=FlightStatus(flight.status),
            actual_departure=flight.actual_departure,
            actual_arrival=flight.actual_arrival,
            delay_minutes=flight.delay_minutes,
            aircraft=flight.aircraft,
        )

    @property
    def airline(self) -> str:
        return airline_name(self.flight_number)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'id': self.id,
            'flight_number': self.flight_number,
            'airline': self.airline,
            'origin': self.origin,
            'destination': self.destination,
            'airport_code': self.airport_code,
            'schedule': {
                'scheduled_departure': self.scheduled_departure.isoformat(),
                'scheduled_arrival': self.scheduled_arrival.isoformat(),
                'actual_departure': _isoformat(self.actual_departure),
                'actual_arrival': _isoformat(self.actual_arrival),
                'scheduled_hour': self.scheduled_hour,
                'day_of_week': self.day_of_week,
                'flight_duration': self.flight_duration,
            },
            'status': self.status.value,
            'delay_minutes': self.delay_minutes,
            'aircraft': self.aircraft,
            'aircraft_type_desc': aircraft_type_name(self.aircraft),
        }


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    # Python < 3.11 rejects the 'Z' suffix
    return datetime.fromisoformat(str(value).replace('Z', '+00:00'))


def _parse_optional_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == '':
        return None
    return _parse_datetime(value)
