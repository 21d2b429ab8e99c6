import copy
from pathlib import Path

import pytest

from response_scraper.constants import DEFAULT_SETTINGS
from response_scraper.scraper.base import BasePageFetcher, RenderedPage
from response_scraper.scraper.config import ScraperConfig

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


class FakeFetcher(BasePageFetcher):
    """Returns a canned page (or raises a canned error) and records requested URLs."""

    def __init__(self, config, page=None, error=None, calls=None):
        super().__init__(config)
        self.page = page
        self.error = error
        self.calls = calls if calls is not None else []

    async def fetch(self, url):
        self.calls.append(url)
        if self.error:
            raise self.error
        return self.page


def fake_factory(page=None, error=None, calls=None):
    return lambda config: FakeFetcher(config, page=page, error=error, calls=calls)


@pytest.fixture
def settings():
    return copy.deepcopy(DEFAULT_SETTINGS)


@pytest.fixture
def config(tmp_path, monkeypatch):
    """Defaults only: no settings file and no environment overrides."""
    monkeypatch.chdir(tmp_path)
    return ScraperConfig(environ={})


@pytest.fixture
def sheet_html():
    return (FIXTURES_DIR / 'response_sheet.html').read_text(encoding='utf-8')


@pytest.fixture
def sample_page():
    return RenderedPage(
        url='https://exam.example.com/sheet/123',
        status=200,
        html='<p>Question ID: Q1 Option 1 ID: A111111 Option 2 ID: B222222 Chosen Option: 2</p>',
        body_text='Question ID: Q1 Option 1 ID: A111111 Option 2 ID: B222222 Chosen Option: 2',
        blocks=['Question ID: Q1 Option 1 ID: A111111 Option 2 ID: B222222 Chosen Option: 2']
    )
