"""
Crawler dispatch.

Maps a platform to its crawler. Adding a platform means adding a Platform
member and a branch here; type checkers flag the missing branch through
assert_never.
"""

from typing import assert_never

from playwright.async_api import Browser

from config.settings import CrawlerSettings, get_settings
from gigcrawler.crawler.base import Crawler
from gigcrawler.crawler.coconala import CoconalaCrawler
from gigcrawler.crawler.crowdworks import CrowdWorksCrawler
from gigcrawler.crawler.lancers import LancersCrawler
from gigcrawler.errors import ConfigurationError
from gigcrawler.modules.projects import Platform


def to_platform(value: Platform | str) -> Platform:
    """
    Coerce a platform name into a Platform.

    Raises:
        ConfigurationError: If value is not a supported platform

    Examples:
        >>> to_platform("lancers")
        <Platform.LANCERS: 'lancers'>
    """
    try:
        return Platform(value)
    except ValueError:
        supported = ", ".join(p.value for p in Platform)
        raise ConfigurationError(
            f"Unsupported platform {value!r} (expected one of: {supported})"
        ) from None


def get_crawler(
    platform: Platform | str,
    browser: Browser,
    settings: CrawlerSettings | None = None,
) -> Crawler:
    """
    Build a new crawler for platform.

    Each call returns a fresh instance bound to the given browser.

    Args:
        platform: Platform or its string value
        browser: Shared browser the crawler opens pages on
        settings: Timeouts to use (defaults to application settings)

    Raises:
        ConfigurationError: If platform is not supported
    """
    platform = to_platform(platform)
    settings = settings or get_settings().crawler
    timeouts = {
        "navigation_timeout_ms": settings.navigation_timeout_ms,
        "wait_timeout_ms": settings.wait_timeout_ms,
    }

    match platform:
        case Platform.COCONALA:
            return CoconalaCrawler(browser, **timeouts)
        case Platform.CROWDWORKS:
            return CrowdWorksCrawler(browser, **timeouts)
        case Platform.LANCERS:
            return LancersCrawler(browser, **timeouts)
        case _:
            assert_never(platform)
