"""
API module for Peakboard.

Provides REST endpoints for:
- Airport flight logs, statistics, and peak hours
- Dashboard analysis views
- System status
"""

from peakboard.api.airports import airports_bp
from peakboard.api.metrics import metrics_bp

__all__ = ['airports_bp', 'metrics_bp']
