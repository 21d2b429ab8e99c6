"""
Response Sheet Scraper Package

Fetches rendered response sheet pages and maps each question identifier to
the identifier of the option chosen for it, using text heuristics rather than
a fixed page layout.
"""

__version__ = "1.0.0"

from .scraper.response_sheet import ResponseSheetScraper, ParseResult, build_parse_result
from .scraper.config import ScraperConfig
from .extraction import parse_from_blocks, parse_from_html, merge_results

__all__ = [
    'ResponseSheetScraper',
    'ParseResult',
    'ScraperConfig',
    'build_parse_result',
    'parse_from_blocks',
    'parse_from_html',
    'merge_results'
]
