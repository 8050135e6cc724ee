"""
Coconala crawler.

Coconala requests are fixed-price only.
"""

from loguru import logger
from playwright.async_api import Browser

from gigcrawler.crawler.base import (
    DEFAULT_NAVIGATION_TIMEOUT_MS,
    DEFAULT_WAIT_TIMEOUT_MS,
    build_visible_project,
    collect_project_ids,
    navigate,
    open_page,
    optional_recruiting_limit,
    read_detail_texts,
)
from gigcrawler.crawler.pages.coconala import BASE_URL, CoconalaDetailPage, CoconalaListPage
from gigcrawler.errors import error_context
from gigcrawler.modules.projects import Platform, Project, ProjectHidden
from gigcrawler.utils.html import html_to_text

crawler_log = logger.bind(module="Coconala")

# Delivery date texts meaning "to be discussed"
DELIVERY_DATE_ABSENT = ("", "ご相談")


class CoconalaCrawler:
    """Crawler for coconala.com requests."""

    platform = Platform.COCONALA
    list_page_cls = CoconalaListPage
    detail_page_cls = CoconalaDetailPage

    def __init__(
        self,
        browser: Browser,
        navigation_timeout_ms: float = DEFAULT_NAVIGATION_TIMEOUT_MS,
        wait_timeout_ms: float = DEFAULT_WAIT_TIMEOUT_MS,
    ):
        self.browser = browser
        self.navigation_timeout_ms = navigation_timeout_ms
        self.wait_timeout_ms = wait_timeout_ms

    @staticmethod
    def detail_url(external_id: str) -> str:
        return f"{BASE_URL}/requests/{external_id}"

    async def list_project_ids(self, url: str) -> list[str]:
        with error_context(platform=self.platform.value):
            return await collect_project_ids(
                self.browser,
                self.list_page_cls,
                url,
                self.navigation_timeout_ms,
                self.wait_timeout_ms,
                module="Coconala",
            )

    async def detail(self, external_id: str) -> Project:
        url = self.detail_url(external_id)
        log = crawler_log.bind(external_id=external_id, stage="detail")

        with error_context(platform=self.platform.value, external_id=external_id, url=url):
            async with open_page(self.browser) as page:
                log.info(f"Opening detail page {url}")
                await navigate(page, url, self.navigation_timeout_ms)

                pom = self.detail_page_cls(page, self.wait_timeout_ms)
                await pom.wait_until_ready()

                if await pom.is_hidden():
                    log.info(f"Project {external_id} is hidden")
                    return ProjectHidden(platform=self.platform, external_id=external_id)

                texts = await read_detail_texts(pom)

            log.debug(
                f"Raw fields: budget={texts.budget!r} delivery={texts.delivery_date!r} "
                f"limit={texts.recruiting_limit!r} published={texts.publication_date!r}"
            )
            project = build_visible_project(
                self.platform,
                external_id,
                url,
                texts,
                resolve_recruiting_limit=optional_recruiting_limit,
                delivery_date_absent=DELIVERY_DATE_ABSENT,
            )

        log.info(f"Parsed {external_id}: {project.title} | {html_to_text(project.description, limit=40)}")
        return project
