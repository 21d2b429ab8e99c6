import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .base import BasePageFetcher, RenderedPage
from .browser import PlaywrightPageFetcher
from .config import ScraperConfig
from ..exceptions import MissingURLError
from ..extraction import (
    Diagnostics, assemble_diagnostics, merge_results, parse_from_blocks, parse_from_html
)
from ..utils.monitoring import ParseMetrics

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Outcome of parsing one page."""
    status: int
    parsed: Dict[str, Optional[str]]
    diagnostics: Optional[Diagnostics] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {'parsed': self.parsed, 'status': self.status}
        if self.diagnostics:
            result.update(self.diagnostics.to_dict())
        return result


def build_parse_result(page: RenderedPage, debug: bool = False,
                       diagnostics_config: Optional[Dict[str, int]] = None) -> ParseResult:
    """
    Run both extraction strategies over a rendered page and merge them.

    Args:
        page: Rendered page content
        debug: Attach capped diagnostics to the result
        diagnostics_config: ``max_blocks``/``snippet_length`` overrides

    Returns:
        ParseResult carrying the merged map and the page status
    """
    from_blocks = parse_from_blocks(page.blocks)
    from_html = parse_from_html(page.html)
    merged = merge_results(from_html, from_blocks)

    unresolved = sum(1 for value in merged.values() if value is None)
    logger.debug(f"Merged {len(from_html)} markup and {len(from_blocks)} block results "
                 f"into {len(merged)} questions ({unresolved} unresolved)")

    diagnostics = None
    if debug:
        limits = diagnostics_config or {}
        diagnostics = assemble_diagnostics(
            page.blocks, page.body_text, page.html,
            **{key: limits[key] for key in ('max_blocks', 'snippet_length') if key in limits}
        )
    return ParseResult(status=page.status, parsed=merged, diagnostics=diagnostics)


class ResponseSheetScraper:
    """
    Fetches response sheet pages and maps each question to its chosen option.

    Every call to ``parse`` uses a fresh fetcher; the only state shared between
    requests is the concurrency limit and the metrics.
    """

    def __init__(self, config: Optional[ScraperConfig] = None,
                 fetcher_factory: Optional[Callable[[Dict[str, Any]], BasePageFetcher]] = None,
                 metrics: Optional[ParseMetrics] = None):
        self.config = config or ScraperConfig()
        self.fetcher_factory = fetcher_factory or PlaywrightPageFetcher
        self.metrics = metrics or ParseMetrics()
        self.logger = logging.getLogger(self.__class__.__name__)
        self._sessions = asyncio.Semaphore(self.config['scraper']['concurrency'])

    @staticmethod
    def _validate_url(url: Optional[str]) -> str:
        if not url or not url.strip():
            raise MissingURLError("missing url")
        return url.strip()

    async def parse(self, url: Optional[str], debug: bool = False) -> ParseResult:
        """
        Fetch ``url`` and extract its question -> chosen option map.

        Raises:
            MissingURLError: If the URL is absent or malformed
            PageRetrievalError: If the page could not be loaded
        """
        url = self._validate_url(url)
        self.metrics.record_request()
        log_id = url.split('/')[-1][:30] or url[:30]

        try:
            async with self._sessions:
                self.logger.debug(f"[{log_id}] Fetching page")
                started = time.monotonic()
                fetcher = self.fetcher_factory(self.config.settings)
                page = await fetcher.fetch(url)
                load_time = time.monotonic() - started

            result = build_parse_result(page, debug, self.config['diagnostics'])
        except Exception as e:
            self.metrics.record_failure(type(e).__name__, str(e))
            raise

        self.metrics.record_success(result.parsed, load_time)
        self.logger.info(f"[{log_id}] Parsed {len(result.parsed)} questions "
                         f"(status {result.status}, {load_time:.2f}s)")
        return result
