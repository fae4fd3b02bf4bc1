"""
Seed the database with reference airports and the sample flight log.

After the flights are in, a PEAK_HOURS and a DELAYS analytics snapshot
are stored for every airport that has flights.

Usage:
    python -m peakboard.seed            # clear and reseed
    python -m peakboard.seed --append   # keep existing rows
"""

import argparse
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from peakboard.airline_db import AIRPORTS, airline_name
from peakboard.analytics.airport_stats import compute_airport_statistics, compute_peak_hours
from peakboard.flight_log import FlightRecord
from peakboard.ingestion.sample_data import SAMPLE_FLIGHTS
from peakboard.models import Airport, AnalyticsSnapshot, Flight, get_session, init_db
from peakboard.models.analytics import DELAYS, PEAK_HOURS

logger = logging.getLogger(__name__)

PEAK_HOURS_CONFIDENCE = 0.95
DELAYS_CONFIDENCE = 0.90


def seed_database(
    flights: Optional[Iterable[dict]] = None,
    clear: bool = True,
) -> Tuple[int, int]:
    """
    Insert airports and flights.

    Args:
        flights: Flight rows as dicts (defaults to the BOM sample)
        clear: Delete existing airports, flights and snapshots first

    Returns (airports_created, flights_created).
    """
    init_db()
    rows = list(SAMPLE_FLIGHTS if flights is None else flights)

    with get_session() as session:
        if clear:
            session.execute(delete(AnalyticsSnapshot))
            session.execute(delete(Flight))
            session.execute(delete(Airport))

        existing = set() if clear else {code for (code,) in session.query(Airport.code).all()}
        existing_flights = set() if clear else {fid for (fid,) in session.query(Flight.id).all()}
        rows = [row for row in rows if str(row['id']) not in existing_flights]

        airports = [
            Airport(code=code, **info)
            for code, info in AIRPORTS.items()
            if code not in existing
        ]
        session.add_all(airports)

        session.add_all(
            Flight(
                id=str(row['id']),
                flight_number=row['flight_number'],
                airline=airline_name(row['flight_number']),
                origin=row['origin'],
                destination=row['destination'],
                scheduled_departure=row['scheduled_departure'],
                scheduled_arrival=row['scheduled_arrival'],
                actual_departure=row.get('actual_departure'),
                actual_arrival=row.get('actual_arrival'),
                status=row.get('status', 'SCHEDULED'),
                delay_minutes=row.get('delay_minutes'),
                aircraft=row.get('aircraft'),
                airport_code=row['airport_code'].upper(),
            )
            for row in rows
        )
        session.flush()

        snapshots = write_analytics_snapshots(session)

    logger.info(
        f'Seeded {len(airports)} airports, {len(rows)} flights '
        f'and {snapshots} analytics snapshots'
    )
    return len(airports), len(rows)


def write_analytics_snapshots(session: Session) -> int:
    """
    Store peak-hour and delay analyses for every airport with flights.

    Logs are read in the same order as the database flight-log source, so
    the snapshots equal what the API computes for a fresh cache.

    Returns the number of snapshots added.
    """
    stmt = select(Flight).order_by(
        Flight.airport_code.asc(),
        Flight.scheduled_departure.asc(),
        Flight.id.asc(),
    )
    logs: Dict[str, List[FlightRecord]] = {}
    for flight in session.execute(stmt).scalars():
        logs.setdefault(flight.airport_code, []).append(FlightRecord.from_model(flight))

    snapshots = []
    for code, flights in logs.items():
        buckets = compute_peak_hours(flights)
        snapshots.append(AnalyticsSnapshot(
            airport_code=code,
            type=PEAK_HOURS,
            data={'peak_hours': [b.to_dict() for b in buckets]},
            confidence=PEAK_HOURS_CONFIDENCE,
        ))
        snapshots.append(AnalyticsSnapshot(
            airport_code=code,
            type=DELAYS,
            data=compute_airport_statistics(flights).to_dict(),
            confidence=DELAYS_CONFIDENCE,
        ))

    session.add_all(snapshots)
    return len(snapshots)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Seed the Peakboard database')
    parser.add_argument(
        '--append',
        action='store_true',
        help='keep existing rows instead of clearing the tables first',
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    airports, flights = seed_database(clear=not args.append)
    print(f'Database seeded: {airports} airports, {flights} flights')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
