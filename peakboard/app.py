"""
Peakboard Flask Application.

Main entry point for the web application. Initializes:
- Database schema
- Flight-log source and FlightStatsEngine
- Real-time updater (optional)
- API routes

Usage:
    python -m peakboard.app

Or with gunicorn:
    gunicorn 'peakboard.app:create_app()'
"""

import logging
import os
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from peakboard.api import airports_bp, metrics_bp
from peakboard.config import config
from peakboard.engine import FlightStatsEngine
from peakboard.errors import BadRequest, PeakboardError, SourceUnavailable
from peakboard.ingestion import RealTimeUpdater, build_source
from peakboard.models import init_db

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(
    engine: Optional[FlightStatsEngine] = None,
    start_updater: Optional[bool] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        engine: Pre-built engine (built from the configured source if None).
                Pass one in tests to control the source and clock.
        start_updater: Whether to start the background real-time updater.
                       Defaults to REALTIME_ENABLED.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    app.config['SECRET_KEY'] = config.secret_key

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    logger.info('Initializing database...')
    init_db()

    if engine is None:
        source = build_source()
        engine = FlightStatsEngine.from_source(source)
        logger.info(f'Using {config.source.kind} flight-log source')

    app.extensions['peakboard'] = {'engine': engine, 'updater': None}

    app.register_blueprint(airports_bp)
    app.register_blueprint(metrics_bp)

    if start_updater is None:
        start_updater = config.realtime.enabled

    if start_updater:
        updater = RealTimeUpdater(engine)
        updater.start_background()
        app.extensions['peakboard']['updater'] = updater
        logger.info(
            f'Real-time updates started for {", ".join(updater.airport_codes) or "no airports"} '
            f'every {updater.interval}s'
        )

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'status': 'ok'}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(SourceUnavailable)
    def source_unavailable(e):
        logger.warning(f'Source unavailable: {e.message}')
        return jsonify(e.to_dict()), 503

    @app.errorhandler(PeakboardError)
    def application_error(e):
        logger.error(f'Application error: {e.message}')
        return jsonify(e.to_dict()), 500

    @app.errorhandler(BadRequest)
    def bad_request(e):
        return jsonify(e.to_dict()), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return jsonify({'error': 'Internal server error'}), 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    port = int(os.environ.get('PORT', 5000))

    logger.info(f'Starting Peakboard on http://localhost:{port}')
    logger.info(f'Statistics: http://localhost:{port}/api/airports/BOM/statistics')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug,
        use_reloader=False,  # Disable reloader to prevent duplicate updater threads
    )


if __name__ == '__main__':
    run_development_server()
