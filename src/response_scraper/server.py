"""
HTTP service
============
aiohttp application exposing the scraper.

Endpoints:
    GET /parse?url=<target>[&debug=1]   → question -> chosen option map
    GET /health                         → request metrics and system health
"""

import logging
from typing import Optional

from aiohttp import web # type: ignore

from .exceptions import MissingURLError
from .scraper.config import ScraperConfig
from .scraper.response_sheet import ResponseSheetScraper
from .utils.monitoring import HealthMonitor

logger = logging.getLogger(__name__)

SCRAPER_KEY = web.AppKey('scraper', ResponseSheetScraper)
HEALTH_KEY = web.AppKey('health', HealthMonitor)

DEBUG_FLAG_VALUES = ('1', 'true')

routes = web.RouteTableDef()


@routes.get('/parse')
async def handle_parse(request: web.Request) -> web.Response:
    url = request.query.get('url')
    debug = request.query.get('debug') in DEBUG_FLAG_VALUES
    scraper = request.app[SCRAPER_KEY]

    try:
        result = await scraper.parse(url, debug)
    except MissingURLError as e:
        return web.json_response({'ok': False, 'error': str(e)}, status=400)
    except Exception as e:
        logger.error(f"Parse failed for {url}: {e}")
        logger.debug("Parse error details:", exc_info=True)
        return web.json_response({'ok': False, 'error': str(e)}, status=500)

    return web.json_response({'ok': True, **result.to_dict()})


@routes.get('/health')
async def handle_health(request: web.Request) -> web.Response:
    scraper = request.app[SCRAPER_KEY]
    return web.json_response({
        'ok': True,
        'metrics': scraper.metrics.get_current_stats(),
        'health': request.app[HEALTH_KEY].check_system_health()
    })


def create_app(config: Optional[ScraperConfig] = None,
               scraper: Optional[ResponseSheetScraper] = None) -> web.Application:
    """Create and configure the aiohttp application."""
    app = web.Application()
    app[SCRAPER_KEY] = scraper or ResponseSheetScraper(config)
    app[HEALTH_KEY] = HealthMonitor()
    app.add_routes(routes)
    return app
