"""
Command line entry point.

Usage:
    gigcrawler <platform> <list_url> [<list_url> ...]

Exit codes: 0 on success, 1 on a crawl failure, 2 on bad input.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv
from loguru import logger
from pydantic import ValidationError

from config.settings import Settings, get_settings
from gigcrawler.crawler import get_crawler, launch_browser, to_platform
from gigcrawler.errors import ConfigurationError, CrawlError
from gigcrawler.jobs import CrawlingUsecase, CrawlResult
from gigcrawler.modules.projects import Platform
from gigcrawler.sinks import JsonFileSink, ProjectSink, StdoutSink

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]: <14}</cyan> | <level>{message}</level>"
)

EXIT_OK = 0
EXIT_CRAWL_ERROR = 1
EXIT_CONFIGURATION_ERROR = 2

cli_log = logger.bind(module="CLI")


def setup_logging(level: str) -> None:
    """Configure loguru with a default module name."""
    logger.configure(extra={"module": "App"})
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)


def load_settings() -> Settings:
    """
    Read settings from the environment.

    Raises:
        ConfigurationError: If an environment value is malformed or out of range
    """
    try:
        return get_settings()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError(f"Invalid settings: {problems}") from e


def validate_list_url(url: str) -> str:
    """
    Check that url is an absolute http(s) URL.

    Raises:
        ConfigurationError: If url is malformed
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"Invalid list URL: {url!r}", url=url)
    return url


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gigcrawler",
        description="Crawl freelance job listings into a JSON batch",
    )
    parser.add_argument(
        "platform", help=f"Platform ({', '.join(p.value for p in Platform)})"
    )
    parser.add_argument("urls", nargs="+", metavar="url", help="Search-results page URL")
    parser.add_argument(
        "--output-dir", type=Path, default=None, help="Directory for batch files"
    )
    parser.add_argument(
        "--stdout", action="store_true", help="Print the batch instead of writing a file"
    )
    parser.add_argument(
        "--concurrency", type=int, default=None, help="Max in-flight page fetches"
    )
    return parser


async def run(
    platform: Platform,
    urls: list[str],
    settings: Settings,
    sink: ProjectSink,
    concurrency: int | None = None,
) -> CrawlResult:
    """Launch the browser and run one crawl."""
    crawler_settings = settings.crawler
    async with launch_browser(
        headless=crawler_settings.headless,
        timeout_ms=crawler_settings.browser_launch_timeout_ms,
    ) as browser:
        crawler = get_crawler(platform, browser, crawler_settings)
        usecase = CrawlingUsecase(
            crawler,
            urls,
            sink,
            concurrency=concurrency or crawler_settings.concurrency,
            request_delay=crawler_settings.request_delay,
        )
        return await usecase.execute()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    try:
        settings = load_settings()
    except ConfigurationError as e:
        setup_logging("INFO")
        cli_log.error(str(e))
        return EXIT_CONFIGURATION_ERROR
    setup_logging(settings.log_level)

    args = build_parser().parse_args(argv)

    try:
        platform = to_platform(args.platform)
        urls = [validate_list_url(url) for url in args.urls]
        if args.concurrency is not None and args.concurrency < 1:
            raise ConfigurationError("--concurrency must be at least 1")
    except ConfigurationError as e:
        cli_log.error(str(e))
        return EXIT_CONFIGURATION_ERROR

    cli_log.info(f"Platform: {platform.value}")
    cli_log.info(f"List URLs: {urls}")

    if args.stdout:
        sink: ProjectSink = StdoutSink()
    else:
        sink = JsonFileSink(args.output_dir or settings.crawler.output_dir, platform)

    try:
        asyncio.run(run(platform, urls, settings, sink, args.concurrency))
    except ConfigurationError as e:
        cli_log.error(str(e))
        return EXIT_CONFIGURATION_ERROR
    except CrawlError as e:
        cli_log.error(f"Crawl failed: {e}")
        return EXIT_CRAWL_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
