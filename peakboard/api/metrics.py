"""
Metrics and status API endpoints.

Provides endpoints for:
- GET /api/metrics/status - System status and health
- GET /api/metrics/cache - Flight-log cache statistics
"""

import logging
import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from peakboard.config import config
from peakboard.models.base import SessionLocal

logger = logging.getLogger(__name__)

metrics_bp = Blueprint('metrics', __name__, url_prefix='/api/metrics')


@metrics_bp.route('/cache', methods=['GET'])
def get_cache_metrics():
    """Get flight-log cache statistics."""
    engine = current_app.extensions['peakboard']['engine']
    return jsonify({
        'cache': engine.cache.stats,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })


@metrics_bp.route('/status', methods=['GET'])
def get_system_status():
    """
    Get system health and status information.

    Returns:
    - Database connectivity
    - Cache statistics
    - Real-time updater status
    - Configuration info
    """
    start_time = time.perf_counter()
    extension = current_app.extensions['peakboard']

    db_ok = True
    try:
        with SessionLocal() as session:
            session.execute(text('SELECT 1'))
    except SQLAlchemyError as e:
        db_ok = False
        logger.error(f'Database health check failed: {e}')

    updater = extension.get('updater')
    updater_stats = updater.stats if updater else {'running': False}

    cache_stats = extension['engine'].cache.stats
    # Healthy unless the most recent source load failed
    source_ok = cache_stats['last_error'] is None

    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        'status': 'healthy' if (db_ok and source_ok) else 'degraded',
        'database': {
            'connected': db_ok,
            'type': 'sqlite' if config.database.is_sqlite else 'postgresql',
        },
        'source': {
            'kind': config.source.kind,
            'ok': source_ok,
            'last_error': cache_stats['last_error'],
        },
        'cache': cache_stats,
        'realtime': updater_stats,
        'config': {
            'freshness_seconds': config.cache.freshness_seconds,
            'source_timeout_seconds': config.cache.source_timeout_seconds,
            'realtime_interval': config.realtime.interval_seconds,
        },
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'query_time_ms': round(query_time_ms, 2),
    })
