import argparse
import asyncio
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional

from aiohttp import web # type: ignore

from .scraper.config import ScraperConfig
from .scraper.response_sheet import ResponseSheetScraper
from .scraper.static import StaticHtmlFetcher
from .server import create_app

logger = logging.getLogger(__name__)


def setup_logging(config: Dict[str, Any]) -> None:
    """Set up logging for both file and console output."""
    log_config = config['logging']
    log_level = getattr(logging, str(log_config['level']).upper(), logging.INFO)

    root_logger = logging.getLogger()

    # Clear any existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    ))
    root_logger.addHandler(console_handler)

    log_file = log_config.get('file')
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=log_config.get('max_size', 10485760),
            backupCount=log_config.get('backup_count', 5),
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s'
        ))
        root_logger.addHandler(file_handler)

    root_logger.debug(f"Logging initialized - Level: {log_config['level']}, file: {log_file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Response sheet chosen-option scraper')
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument('--serve', action='store_true', help='Run the HTTP service')
    mode.add_argument('--url', type=str, help='Parse a single live page and print the result')
    mode.add_argument('--html-file', type=str, help='Parse a saved page offline (no browser)')
    parser.add_argument('--debug', action='store_true', help='Include diagnostic artifacts in the result')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to configuration file (default: config/settings.json if present)')
    parser.add_argument('--host', type=str, help='Host to bind in --serve mode')
    parser.add_argument('--port', type=int, help='Port to bind in --serve mode')
    parser.add_argument('--concurrency', type=int, help='Maximum concurrent browser sessions')
    parser.add_argument('--log-level', type=str, help='Logging level (DEBUG, INFO, WARNING, ...)')
    return parser


async def serve(config: ScraperConfig) -> None:
    """Run the HTTP service until cancelled."""
    host = config['server']['host']
    port = config['server']['port']
    runner = web.AppRunner(create_app(config))
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info(f"Listening on {host}:{port}")
    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


async def parse_once(scraper: ResponseSheetScraper, target: str, debug: bool) -> int:
    """Parse one page, print the JSON envelope and return the exit code."""
    try:
        result = await scraper.parse(target, debug)
    except Exception as e:
        logger.error(f"Failed to parse {target}: {e}")
        print(json.dumps({'ok': False, 'error': str(e)}, indent=2))
        return 1

    print(json.dumps({'ok': True, **result.to_dict()}, indent=2, ensure_ascii=False))
    return 0


async def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ScraperConfig(args.config)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 2

    config.override('server', 'host', args.host)
    config.override('server', 'port', args.port)
    config.override('scraper', 'concurrency', args.concurrency)
    config.override('logging', 'level', args.log_level.upper() if args.log_level else None)

    setup_logging(config.settings)

    validation = config.validate_settings()
    if not all(validation.values()):
        invalid = [section for section, ok in validation.items() if not ok]
        logger.error(f"Invalid settings in: {', '.join(invalid)}")
        return 2

    if args.serve:
        await serve(config)
        return 0

    if args.html_file:
        scraper = ResponseSheetScraper(config, fetcher_factory=StaticHtmlFetcher)
        return await parse_once(scraper, args.html_file, args.debug)

    return await parse_once(ResponseSheetScraper(config), args.url, args.debug)


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == '__main__':
    run()
