from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List
from urllib.parse import urlparse
import logging
import random

from ..exceptions import MissingURLError


@dataclass
class RenderedPage:
    """Everything the extractors need from one loaded page."""
    url: str
    status: int
    html: str
    body_text: str
    blocks: List[str] = field(default_factory=list)


class BasePageFetcher(ABC):
    """Fetch a rendered page and return its status, markup, body text and candidate blocks."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    async def fetch(self, url: str) -> RenderedPage:
        """Load ``url`` and collect its rendered content."""
        pass

    def _extraction_settings(self) -> Dict[str, Any]:
        return self.config['extraction']

    def _get_random_user_agent(self) -> str:
        """Get a random user agent from the configured list."""
        return random.choice(self.config['scraper']['user_agents'])


def get_origin(url: str) -> str:
    """
    Return the ``scheme://host`` origin of ``url``.

    Raises:
        MissingURLError: If the URL has no scheme or host
    """
    parsed = urlparse(url or "")
    if not parsed.scheme or not parsed.netloc:
        raise MissingURLError(f"invalid url: {url!r}")
    return f"{parsed.scheme}://{parsed.netloc}"
