"""
Analytics snapshot model - computed airport analyses saved at a point in time.

Snapshots are written by the seeder from the same functions the API uses,
so a stored PEAK_HOURS or DELAYS row matches what the live endpoints
returned for the seeded flight log.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from peakboard.models.base import Base

PEAK_HOURS = 'PEAK_HOURS'
DELAYS = 'DELAYS'


class AnalyticsSnapshot(Base):
    """One stored analysis result for an airport."""

    __tablename__ = 'analytics'

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    airport_code: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        comment='Airport the analysis was computed for'
    )

    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment='PEAK_HOURS or DELAYS'
    )

    data: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        comment='Analysis payload as returned by the API'
    )

    confidence: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment='Confidence in the analysis (0-1)'
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        comment='When the snapshot was taken'
    )

    __table_args__ = (
        Index('ix_analytics_airport_type', 'airport_code', 'type'),
    )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'airport_code': self.airport_code,
            'type': self.type,
            'data': self.data,
            'confidence': self.confidence,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f'<AnalyticsSnapshot {self.type} [{self.airport_code}]>'
