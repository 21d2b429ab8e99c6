"""
Page fetchers and the response sheet scraper.

This package contains the fetcher interface, its Playwright and offline
implementations, settings handling and the per-request orchestration.
"""

from .base import BasePageFetcher, RenderedPage
from .browser import PlaywrightPageFetcher
from .config import ScraperConfig
from .response_sheet import ParseResult, ResponseSheetScraper, build_parse_result
from .static import StaticHtmlFetcher, render_static_html

__all__ = [
    'BasePageFetcher',
    'RenderedPage',
    'PlaywrightPageFetcher',
    'StaticHtmlFetcher',
    'ScraperConfig',
    'ParseResult',
    'ResponseSheetScraper',
    'build_parse_result',
    'render_static_html'
]
