"""
Configuration management for Peakboard.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


def _parse_codes(value: str) -> Tuple[str, ...]:
    """Parse 'BOM,DEL' string into a tuple of upper-cased airport codes."""
    if not value:
        return ()
    return tuple(code.strip().upper() for code in value.split(',') if code.strip())


@dataclass(frozen=True)
class CacheConfig:
    """Per-airport flight-log cache settings."""
    freshness_seconds: float = float(os.getenv('CACHE_FRESHNESS_SECONDS', '300'))
    # Bounded wait on the flight-log source; <= 0 disables the timeout
    source_timeout_seconds: float = float(os.getenv('SOURCE_TIMEOUT_SECONDS', '10'))


@dataclass(frozen=True)
class SourceConfig:
    """Flight-log source selection."""
    kind: str = os.getenv('FLIGHT_LOG_SOURCE', 'sample').lower()
    url: Optional[str] = os.getenv('FLIGHT_LOG_URL') or None


@dataclass(frozen=True)
class DatabaseConfig:
    """Database configuration."""
    url: str = os.getenv('DATABASE_URL', 'sqlite:///peakboard.db')

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')


@dataclass(frozen=True)
class RealTimeConfig:
    """Simulated real-time update settings."""
    enabled: bool = os.getenv('REALTIME_ENABLED', '0') == '1'
    interval_seconds: float = float(os.getenv('REALTIME_INTERVAL_SECONDS', '5'))
    airports: Tuple[str, ...] = _parse_codes(os.getenv('REALTIME_AIRPORTS', 'BOM'))
    update_probability: float = float(os.getenv('REALTIME_UPDATE_PROBABILITY', '0.1'))
    max_jitter_minutes: int = int(os.getenv('REALTIME_MAX_JITTER_MINUTES', '15'))


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    cache: CacheConfig
    source: SourceConfig
    database: DatabaseConfig
    realtime: RealTimeConfig

    # Flask settings
    secret_key: str
    debug: bool


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        cache=CacheConfig(),
        source=SourceConfig(),
        database=DatabaseConfig(),
        realtime=RealTimeConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
