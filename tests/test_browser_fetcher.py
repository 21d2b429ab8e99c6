"""
Tests for the Playwright fetcher using stand-in browser objects.

No real browser is launched; the stand-ins record what the fetcher asked for.
"""

import asyncio

import pytest
from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from response_scraper.exceptions import MissingURLError, PageRetrievalError
from response_scraper.extraction.patterns import MARKER_KEYWORD_PATTERN
from response_scraper.scraper import browser as browser_module
from response_scraper.scraper.browser import PlaywrightPageFetcher


class FakeResponse:
    def __init__(self, status):
        self.status = status


class FakePage:
    def __init__(self, goto_effects, html="<html></html>", body_text="", blocks=None):
        self.goto_effects = list(goto_effects)
        self.goto_calls = []
        self.html = html
        self.body_text = body_text
        self.blocks = blocks or []
        self.settle_delay = None
        self.collector_argument = None

    async def goto(self, url, wait_until, timeout):
        self.goto_calls.append((url, wait_until, timeout))
        effect = self.goto_effects.pop(0)
        if isinstance(effect, Exception):
            raise effect
        return effect

    async def wait_for_timeout(self, timeout):
        self.settle_delay = timeout

    async def content(self):
        return self.html

    async def evaluate(self, script, arg=None):
        if arg is None:
            return self.body_text
        self.collector_argument = arg
        return self.blocks


class FakeContext:
    def __init__(self, page):
        self.page = page
        self.init_scripts = []

    async def add_init_script(self, script):
        self.init_scripts.append(script)

    async def new_page(self):
        return self.page


class FakeBrowser:
    def __init__(self, page):
        self.context = FakeContext(page)
        self.context_options = None
        self.closed = False

    async def new_context(self, **options):
        self.context_options = options
        return self.context

    async def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, browser):
        self.browser = browser
        self.launch_options = None

    async def launch(self, **options):
        self.launch_options = options
        return self.browser


class FakePlaywrightManager:
    def __init__(self, browser):
        self.chromium = FakeChromium(browser)
        self.stopped = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.stopped = True


@pytest.fixture
def install_browser(monkeypatch):
    def install(page):
        manager = FakePlaywrightManager(FakeBrowser(page))
        monkeypatch.setattr(browser_module, 'async_playwright', lambda: manager)
        return manager
    return install


class TestSafeGoto:

    def test_first_strategy_succeeds(self, settings):
        page = FakePage([FakeResponse(200)])
        response = asyncio.run(PlaywrightPageFetcher(settings)._safe_goto(page, "https://a.example/x"))

        assert response.status == 200
        assert page.goto_calls == [("https://a.example/x", 'networkidle', 60000)]

    def test_falls_back_to_permissive_wait_state(self, settings):
        page = FakePage([PlaywrightTimeoutError("Timeout 60000ms exceeded"), FakeResponse(203)])
        response = asyncio.run(PlaywrightPageFetcher(settings)._safe_goto(page, "https://a.example/x"))

        assert response.status == 203
        assert [call[1] for call in page.goto_calls] == ['networkidle', 'domcontentloaded']

    def test_both_strategies_fail(self, settings):
        page = FakePage([PlaywrightError("net::ERR_NAME_NOT_RESOLVED"),
                         PlaywrightError("net::ERR_NAME_NOT_RESOLVED")])

        with pytest.raises(PageRetrievalError) as excinfo:
            asyncio.run(PlaywrightPageFetcher(settings)._safe_goto(page, "https://a.example/x"))

        assert isinstance(excinfo.value.__cause__, PlaywrightError)
        assert excinfo.value.url == "https://a.example/x"
        assert len(page.goto_calls) == 2

    def test_non_browser_errors_are_not_retried(self, settings):
        page = FakePage([ValueError("boom"), FakeResponse(200)])

        with pytest.raises(ValueError):
            asyncio.run(PlaywrightPageFetcher(settings)._safe_goto(page, "https://a.example/x"))

        assert len(page.goto_calls) == 1


class TestFetch:

    def test_collects_rendered_content(self, settings, install_browser):
        page = FakePage([FakeResponse(200)], html="<p>Question ID: Q1</p>",
                        body_text="Question ID: Q1", blocks=["Question ID: Q1"])
        manager = install_browser(page)

        rendered = asyncio.run(PlaywrightPageFetcher(settings).fetch("https://exam.example.com/sheet?id=1"))

        assert rendered.status == 200
        assert rendered.html == "<p>Question ID: Q1</p>"
        assert rendered.body_text == "Question ID: Q1"
        assert rendered.blocks == ["Question ID: Q1"]
        assert page.settle_delay == 1200
        assert page.collector_argument['maxBlocks'] == 300
        assert page.collector_argument['shortLength'] == 800
        assert 'td' in page.collector_argument['selectors']
        assert page.collector_argument['keywordPattern'] == MARKER_KEYWORD_PATTERN.pattern

        browser = manager.chromium.browser
        assert browser.closed
        assert manager.stopped
        assert manager.chromium.launch_options['args'] == settings['scraper']['launch_args']
        headers = browser.context_options['extra_http_headers']
        assert headers['referer'] == "https://exam.example.com"
        assert headers['accept-language'] == 'en-US,en;q=0.9'
        assert browser.context_options['viewport'] == {'width': 1366, 'height': 768}
        assert 'webdriver' in browser.context.init_scripts[0]

    def test_missing_response_reports_status_zero(self, settings, install_browser):
        install_browser(FakePage([None]))
        rendered = asyncio.run(PlaywrightPageFetcher(settings).fetch("https://exam.example.com/"))
        assert rendered.status == 0

    def test_browser_closed_after_fatal_navigation(self, settings, install_browser):
        manager = install_browser(FakePage([PlaywrightError("down"), PlaywrightError("still down")]))

        with pytest.raises(PageRetrievalError):
            asyncio.run(PlaywrightPageFetcher(settings).fetch("https://exam.example.com/"))

        assert manager.chromium.browser.closed
        assert manager.stopped

    def test_malformed_url_never_launches(self, settings, install_browser):
        manager = install_browser(FakePage([FakeResponse(200)]))

        with pytest.raises(MissingURLError):
            asyncio.run(PlaywrightPageFetcher(settings).fetch("not a url"))

        assert manager.chromium.launch_options is None
