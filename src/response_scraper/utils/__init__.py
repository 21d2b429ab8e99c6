"""
Utility modules for the response sheet scraper.

This package contains utility classes for:
- Request metrics
- System health checks
"""

from .monitoring import ParseMetrics, HealthMonitor

__all__ = [
    'ParseMetrics',
    'HealthMonitor'
]
