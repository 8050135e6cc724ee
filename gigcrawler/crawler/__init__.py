"""
Crawler module.

Per-platform crawlers built on Playwright page objects.
"""

from gigcrawler.crawler.base import Crawler
from gigcrawler.crawler.browser import launch_browser
from gigcrawler.crawler.coconala import CoconalaCrawler
from gigcrawler.crawler.crowdworks import CrowdWorksCrawler
from gigcrawler.crawler.factory import get_crawler, to_platform
from gigcrawler.crawler.lancers import LancersCrawler

__all__ = [
    "Crawler",
    "CoconalaCrawler",
    "CrowdWorksCrawler",
    "LancersCrawler",
    "get_crawler",
    "launch_browser",
    "to_platform",
]
