"""
Flight model - stored flight legs per home airport.

Rows are read in bulk by the database flight-log source and converted to
immutable FlightRecord values; the cache never holds ORM objects.

Design notes:
- String primary key so ids from external feeds survive unchanged
- Indexed by airport_code plus scheduled_departure for the per-airport
  ordered load
- Derived fields (hour, weekday, duration) are not stored; they are
  computed when the record is built
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Integer, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from peakboard.flight_log import FlightStatus
from peakboard.models.base import Base


class Flight(Base):
    """
    One flight leg filed under a home airport.

    The home airport may be the origin or the destination, depending on
    which airport's schedule the row was ingested from.
    """

    __tablename__ = 'flights'

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment='Opaque flight identifier'
    )

    flight_number: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        index=True,
        comment='Carrier code + digits (e.g., AI101)'
    )

    airline: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment='Carrier name resolved at ingestion'
    )

    # Route
    origin: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        comment='Origin airport code'
    )

    destination: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        comment='Destination airport code'
    )

    # Schedule
    scheduled_departure: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        comment='Scheduled departure time'
    )

    scheduled_arrival: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        comment='Scheduled arrival time'
    )

    actual_departure: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True,
        comment='Actual departure time, once realized'
    )

    actual_arrival: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True,
        comment='Actual arrival time, once realized'
    )

    # Status
    status: Mapped[str] = mapped_column(
        String(10),
        default=FlightStatus.SCHEDULED.value,
        comment='SCHEDULED/DELAYED/DEPARTED/ARRIVED/CANCELLED'
    )

    delay_minutes: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment='Minutes late; null when unknown'
    )

    aircraft: Mapped[Optional[str]] = mapped_column(
        String(30),
        nullable=True,
        comment='Aircraft type and registration (e.g., A20N (VT-EXU))'
    )

    airport_code: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        comment='Home airport this flight is filed under'
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        comment='Last update timestamp'
    )

    __table_args__ = (
        # Per-airport flight log, in schedule order
        Index('ix_flights_airport_schedule', 'airport_code', 'scheduled_departure'),
    )

    def __repr__(self) -> str:
        return f'<Flight {self.flight_number} {self.origin}-{self.destination} [{self.airport_code}]>'
