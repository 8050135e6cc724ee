"""Page objects, one list page and one detail page per platform."""

from gigcrawler.crawler.pages.base import DetailPage, ListPage
from gigcrawler.crawler.pages.coconala import CoconalaDetailPage, CoconalaListPage
from gigcrawler.crawler.pages.crowdworks import CrowdWorksDetailPage, CrowdWorksListPage
from gigcrawler.crawler.pages.lancers import LancersDetailPage, LancersListPage

__all__ = [
    "DetailPage",
    "ListPage",
    "CoconalaDetailPage",
    "CoconalaListPage",
    "CrowdWorksDetailPage",
    "CrowdWorksListPage",
    "LancersDetailPage",
    "LancersListPage",
]
