"""
Airport analytics API endpoints.

Provides endpoints for:
- GET  /api/airports/<code> - Airport reference info
- GET  /api/airports/<code>/flights - Current flight log
- GET  /api/airports/<code>/statistics - Summary statistics
- GET  /api/airports/<code>/peak-hours - Peak-hour distribution
- POST /api/airports/<code>/real-time-updates - Apply simulated updates
- GET  /api/airports/<code>/analysis/<type> - Dashboard analysis views
- GET  /api/airlines/<flight_number> - Airline lookup
"""

import logging
import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from peakboard.airline_db import airline_name, airport_info
from peakboard.analytics.insights import analyze
from peakboard.cache import normalize_airport_code
from peakboard.models import Airport
from peakboard.models.base import SessionLocal

logger = logging.getLogger(__name__)

airports_bp = Blueprint('airports', __name__, url_prefix='/api')


def _engine():
    return current_app.extensions['peakboard']['engine']


def _timed(payload: dict, start_time: float) -> dict:
    """Add timestamp and query timing to a response payload."""
    query_time_ms = (time.perf_counter() - start_time) * 1000
    payload['timestamp'] = datetime.now(timezone.utc).isoformat()
    payload['query_time_ms'] = round(query_time_ms, 2)
    return payload


@airports_bp.route('/airports/<code>', methods=['GET'])
def get_airport(code: str):
    """
    Get airport reference information.

    Uses the airports table when seeded, the built-in reference table
    otherwise.
    """
    code = normalize_airport_code(code)

    with SessionLocal() as session:
        airport = session.get(Airport, code)
        if airport is not None:
            return jsonify({'airport': airport.to_dict(), 'source': 'database'})

    info = airport_info(code)
    if info is None:
        return jsonify({'error': f'Airport {code} not found'}), 404

    return jsonify({'airport': info, 'source': 'reference'})


@airports_bp.route('/airports/<code>/flights', methods=['GET'])
def list_flights(code: str):
    """
    List the current flight log for an airport.

    May refresh the cache from the flight-log source.
    """
    start_time = time.perf_counter()
    code = normalize_airport_code(code)

    flights = _engine().get_flight_log(code)

    return jsonify(_timed({
        'airport_code': code,
        'flights': [f.to_dict() for f in flights],
        'count': len(flights),
    }, start_time))


@airports_bp.route('/airports/<code>/statistics', methods=['GET'])
def get_statistics(code: str):
    """
    Get summary statistics for an airport.

    Returns:
    - Total and delayed flight counts
    - Average delay
    - Peak hour and its flight count
    - Delay distribution (minor/major/critical)
    - Capacity utilization heuristic
    """
    start_time = time.perf_counter()
    code = normalize_airport_code(code)

    stats = _engine().get_airport_statistics(code)

    return jsonify(_timed({
        'airport_code': code,
        'statistics': stats.to_dict(),
    }, start_time))


@airports_bp.route('/airports/<code>/peak-hours', methods=['GET'])
def get_peak_hours(code: str):
    """Get the peak-hour distribution, busiest hour first."""
    start_time = time.perf_counter()
    code = normalize_airport_code(code)

    buckets = _engine().get_peak_hour_analysis(code)

    return jsonify(_timed({
        'airport_code': code,
        'peak_hours': [b.to_dict() for b in buckets],
        'count': len(buckets),
    }, start_time))


@airports_bp.route('/airports/<code>/real-time-updates', methods=['POST'])
def apply_real_time_updates(code: str):
    """
    Apply simulated real-time updates to the airport's flight log.

    Rewrites the cached flight log and returns it.
    """
    start_time = time.perf_counter()
    code = normalize_airport_code(code)

    flights = _engine().apply_real_time_updates(code)
    logger.info(f'Applied real-time updates for {code}')

    return jsonify(_timed({
        'airport_code': code,
        'flights': [f.to_dict() for f in flights],
        'count': len(flights),
    }, start_time))


@airports_bp.route('/airports/<code>/analysis/<analysis_type>', methods=['GET'])
def get_analysis(code: str, analysis_type: str):
    """
    Get a dashboard analysis view.

    analysis_type: peak-hours | delays | capacity | patterns
    """
    start_time = time.perf_counter()
    code = normalize_airport_code(code)

    result = analyze(_engine(), code, analysis_type)

    return jsonify(_timed({
        'airport_code': code,
        'analysis_type': analysis_type,
        'data': result,
    }, start_time))


@airports_bp.route('/airlines/<flight_number>', methods=['GET'])
def get_airline(flight_number: str):
    """Resolve the carrier name for a flight number."""
    return jsonify({
        'flight_number': flight_number,
        'airline': airline_name(flight_number),
    })
