"""
Peakboard Backend Package.

Airport flight-delay analytics service built with Flask, SQLAlchemy, and NumPy.

Modules:
    api/          REST endpoints for airport statistics, peak hours, and status
    models/       SQLAlchemy ORM models (Flight, Airport)
    ingestion/    Flight-log sources, sample data, real-time updater
    analytics/    Delay statistics, peak-hour aggregation, and simulated jitter
    cache.py      Thread-safe per-airport flight-log cache with freshness window
    engine.py     FlightStatsEngine composing the cache and analytics
    airline_db.py Airline, aircraft type, and airport reference lookups
    seed.py       Database seeding command
    config.py     Centralized configuration from environment variables
"""

__version__ = '1.0.0'
