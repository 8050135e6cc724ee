"""
CrowdWorks crawler.

Handles both fixed-price (固定報酬制) and hourly (時間単価制) listings, and
listings hidden from logged-out visitors (非公開のお仕事).
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
    read_detail_texts,
    required_recruiting_limit,
)
from gigcrawler.crawler.pages.crowdworks import (
    BASE_URL,
    CrowdWorksDetailPage,
    CrowdWorksListPage,
)
from gigcrawler.errors import error_context
from gigcrawler.modules.projects import Platform, Project, ProjectHidden, WorkingTimeUnit
from gigcrawler.utils.html import html_to_text

crawler_log = logger.bind(module="CrowdWorks")

DELIVERY_DATE_ABSENT = ("", "-")


class CrowdWorksCrawler:
    """Crawler for crowdworks.jp job offers."""

    platform = Platform.CROWDWORKS
    list_page_cls = CrowdWorksListPage
    detail_page_cls = CrowdWorksDetailPage

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
        return f"{BASE_URL}/public/jobs/{external_id}"

    async def list_project_ids(self, url: str) -> list[str]:
        with error_context(platform=self.platform.value):
            return await collect_project_ids(
                self.browser,
                self.list_page_cls,
                url,
                self.navigation_timeout_ms,
                self.wait_timeout_ms,
                module="CrowdWorks",
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

            log.debug(f"Raw fields: {texts}")
            project = build_visible_project(
                self.platform,
                external_id,
                url,
                texts,
                resolve_recruiting_limit=required_recruiting_limit,
                delivery_date_absent=DELIVERY_DATE_ABSENT,
                # The row label is "稼働時間/週", so bare amounts are weekly
                working_time_unit=WorkingTimeUnit.WEEK,
            )

        log.info(
            f"Parsed {external_id} ({project.wage_type.value}): {project.title} | "
            f"{html_to_text(project.description, limit=40)}"
        )
        return project
