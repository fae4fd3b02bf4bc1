"""
Airport model - static reference data keyed by airport code.
"""

from typing import Optional

from sqlalchemy import String, Float, Integer
from sqlalchemy.orm import Mapped, mapped_column

from peakboard.models.base import Base


class Airport(Base):
    """
    Airport reference information.

    Fields:
        code: 3-letter airport code (e.g., 'BOM')
        name: Full airport name
        city / country / timezone: Location details
        latitude / longitude: Airport reference point
        terminals / runways: Infrastructure counts
        capacity: Nominal movements per hour
    """

    __tablename__ = 'airports'

    code: Mapped[str] = mapped_column(
        String(3),
        primary_key=True,
        comment='Airport code'
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment='Airport name'
    )

    city: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    timezone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    terminals: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    runways: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    capacity: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment='Nominal movements per hour'
    )

    def __repr__(self) -> str:
        return f'<Airport {self.code} {self.name}>'

    def to_dict(self) -> dict:
        return {
            'code': self.code,
            'name': self.name,
            'city': self.city,
            'country': self.country,
            'timezone': self.timezone,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'terminals': self.terminals,
            'runways': self.runways,
            'capacity': self.capacity,
        }
