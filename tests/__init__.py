"""
Test suite for the response sheet scraper.

This package contains tests for all components of the scraper:
- Marker patterns and both extraction strategies
- Merge policy and diagnostics
- Page fetchers (Playwright and offline)
- Configuration, HTTP service and command line
"""
