"""Errors raised while fetching and parsing response sheets."""


class ScraperError(Exception):
    """Base class for scraper failures."""


class MissingURLError(ScraperError):
    """The target URL is absent or unusable; no fetch is attempted."""


class PageRetrievalError(ScraperError):
    """Every navigation strategy failed for the target URL."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(message)
