"""
Playwright-backed page fetcher.

One browser is launched per fetch and closed on every exit path. The page is
shaped to look like an ordinary desktop session before navigation, then the
markup, visible body text and candidate text blocks are read after a short
settle delay.
"""

from typing import Any, Dict, Optional

from playwright.async_api import Error as PlaywrightError, Page, Response, async_playwright # type: ignore
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt # type: ignore

from .base import BasePageFetcher, RenderedPage, get_origin
from ..exceptions import PageRetrievalError
from ..extraction.patterns import MARKER_KEYWORD_PATTERN

NAVIGATOR_OVERRIDES_SCRIPT = """
    Object.defineProperty(navigator, 'webdriver', { get: () => false });
    Object.defineProperty(navigator, 'plugins', { get: () => [1, 2, 3] });
    Object.defineProperty(navigator, 'languages', { get: () => ['en-US', 'en'] });
"""

BLOCK_COLLECTOR_SCRIPT = """
    ({ selectors, maxBlocks, shortLength, keywordPattern }) => {
        const keyword = new RegExp(keywordPattern, 'i');
        const out = [];
        for (const node of document.querySelectorAll(selectors)) {
            const text = (node.innerText || '').trim();
            if (!text) continue;
            if (text.length < shortLength || keyword.test(text)) out.push(text);
        }
        return Array.from(new Set(out)).slice(0, maxBlocks);
    }
"""

BODY_TEXT_SCRIPT = "() => document.body ? document.body.innerText : ''"


class PlaywrightPageFetcher(BasePageFetcher):
    """Render pages in headless Chromium."""

    async def fetch(self, url: str) -> RenderedPage:
        origin = get_origin(url)
        scraper_config = self.config['scraper']

        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(
                headless=scraper_config['headless'],
                args=scraper_config['launch_args']
            )
            try:
                context = await browser.new_context(
                    user_agent=self._get_random_user_agent(),
                    viewport=scraper_config['viewport'],
                    extra_http_headers={
                        'accept-language': scraper_config['accept_language'],
                        'referer': origin
                    }
                )
                await context.add_init_script(NAVIGATOR_OVERRIDES_SCRIPT)
                page = await context.new_page()

                response = await self._safe_goto(page, url)
                status = response.status if response else 0
                self.logger.info(f"Loaded {url} with status {status}")

                await page.wait_for_timeout(scraper_config['timeouts']['settle_delay'])
                return await self._read_page(page, url, status)
            finally:
                await browser.close()
                self.logger.debug("Browser closed")

    async def _safe_goto(self, page: Page, url: str) -> Optional[Response]:
        """
        Navigate to ``url``, relaxing the load-completion condition after a failure.

        Each configured wait state gets one attempt, strictest first. Only
        Playwright errors trigger the next attempt.

        Raises:
            PageRetrievalError: If every attempt failed
        """
        wait_states = self.config['scraper']['wait_states']
        timeout = self.config['scraper']['timeouts']['page_load']

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(len(wait_states)),
                retry=retry_if_exception_type(PlaywrightError),
                reraise=True
            ):
                with attempt:
                    attempt_number = attempt.retry_state.attempt_number
                    wait_until = wait_states[attempt_number - 1]
                    if attempt_number > 1:
                        self.logger.warning(f"Navigation failed, retrying {url} with wait_until={wait_until}")
                    return await page.goto(url, wait_until=wait_until, timeout=timeout)
        except PlaywrightError as e:
            self.logger.error(f"All navigation attempts failed for {url}: {e}")
            raise PageRetrievalError(url, str(e)) from e

    async def _read_page(self, page: Page, url: str, status: int) -> RenderedPage:
        settings = self._extraction_settings()
        html = await page.content()
        body_text = await page.evaluate(BODY_TEXT_SCRIPT)
        blocks = await page.evaluate(BLOCK_COLLECTOR_SCRIPT, self._collector_arguments(settings))
        self.logger.debug(f"Collected {len(blocks)} candidate blocks from {url}")
        return RenderedPage(url=url, status=status, html=html, body_text=body_text or "", blocks=blocks)

    @staticmethod
    def _collector_arguments(settings: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'selectors': ', '.join(settings['block_selectors']),
            'maxBlocks': settings['max_blocks'],
            'shortLength': settings['short_block_length'],
            'keywordPattern': MARKER_KEYWORD_PATTERN.pattern
        }
