"""
Offline page fetcher for saved markup.

Reproduces the in-browser block collection over BeautifulSoup so a page saved
to disk parses the same way without launching a browser. Visible text is
approximated with ``get_text``; no CSS is applied.
"""

from pathlib import Path
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup # type: ignore

from .base import BasePageFetcher, RenderedPage
from ..constants import BLOCK_LIMITS, BLOCK_SELECTORS
from ..extraction.patterns import MARKER_KEYWORD_PATTERN

# Elements whose text never renders
INVISIBLE_TAGS = ['script', 'style', 'noscript', 'template', 'head']


def _visible_soup(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html, 'html.parser')
    for element in soup(INVISIBLE_TAGS):
        element.decompose()
    return soup


def collect_blocks_from_html(html: str,
                             selectors: Sequence[str] = BLOCK_SELECTORS,
                             max_blocks: int = BLOCK_LIMITS['max_blocks'],
                             short_length: int = BLOCK_LIMITS['short_block_length']) -> List[str]:
    """
    Collect candidate text blocks from markup.

    Keeps the text of every selected element that is either shorter than
    ``short_length`` or mentions a marker keyword, in document order,
    deduplicated, capped at ``max_blocks``.

    Args:
        html: Page markup
        selectors: CSS selectors of elements to read
        max_blocks: Maximum number of blocks returned
        short_length: Length under which a block is kept without a keyword

    Returns:
        List of non-empty block texts
    """
    soup = _visible_soup(html)
    blocks = []
    for element in soup.select(', '.join(selectors)):
        text = element.get_text('\n', strip=True)
        if not text:
            continue
        if len(text) < short_length or MARKER_KEYWORD_PATTERN.search(text):
            blocks.append(text)
    return list(dict.fromkeys(blocks))[:max_blocks]


def extract_body_text(html: str) -> str:
    soup = _visible_soup(html)
    root = soup.body or soup
    return root.get_text('\n', strip=True)


def render_static_html(html: str, url: str = "", status: int = 200,
                       selectors: Optional[Sequence[str]] = None,
                       max_blocks: int = BLOCK_LIMITS['max_blocks'],
                       short_length: int = BLOCK_LIMITS['short_block_length']) -> RenderedPage:
    """Build a RenderedPage from markup already in hand."""
    return RenderedPage(
        url=url,
        status=status,
        html=html,
        body_text=extract_body_text(html),
        blocks=collect_blocks_from_html(html, selectors or BLOCK_SELECTORS, max_blocks, short_length)
    )


class StaticHtmlFetcher(BasePageFetcher):
    """Read a saved page from disk; the "URL" is a file path."""

    async def fetch(self, url: str) -> RenderedPage:
        path = Path(url)
        html = path.read_text(encoding='utf-8', errors='replace')
        settings = self._extraction_settings()
        self.logger.info(f"Loaded {len(html)} characters from {path}")
        return render_static_html(
            html,
            url=path.resolve().as_uri(),
            status=200,
            selectors=settings['block_selectors'],
            max_blocks=settings['max_blocks'],
            short_length=settings['short_block_length']
        )
