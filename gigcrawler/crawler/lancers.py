"""
Lancers crawler.

Removed or private works answer with a 404 page; those are recorded as
hidden. Recruiting limits are sometimes written as a day count ("14日間")
relative to the publication date.
"""

from datetime import datetime

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
)
from gigcrawler.crawler.pages.lancers import BASE_URL, LancersDetailPage, LancersListPage
from gigcrawler.errors import error_context
from gigcrawler.modules.projects import Platform, Project, ProjectHidden
from gigcrawler.utils.html import html_to_text
from gigcrawler.utils.parsers import add_days, parse_day_count, parse_jp_date

crawler_log = logger.bind(module="Lancers")

DATE_ABSENT = ("", "-", "なし")
NOT_FOUND_STATUS = 404


def resolve_recruiting_limit(text: str, publication_date: datetime) -> datetime | None:
    """
    Resolve a Lancers recruiting limit.

    Examples:
        "2025年1月15日" -> that date
        "14日間"        -> publication_date + 14 days
        "なし"          -> None
    """
    if text.strip() in DATE_ABSENT:
        return None
    if "年" in text:
        return parse_jp_date(text)
    return add_days(publication_date, parse_day_count(text))


class LancersCrawler:
    """Crawler for lancers.jp works."""

    platform = Platform.LANCERS
    list_page_cls = LancersListPage
    detail_page_cls = LancersDetailPage

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
        return f"{BASE_URL}/work/detail/{external_id}"

    async def list_project_ids(self, url: str) -> list[str]:
        with error_context(platform=self.platform.value):
            return await collect_project_ids(
                self.browser,
                self.list_page_cls,
                url,
                self.navigation_timeout_ms,
                self.wait_timeout_ms,
                module="Lancers",
                wait_until="networkidle",
            )

    async def detail(self, external_id: str) -> Project:
        url = self.detail_url(external_id)
        log = crawler_log.bind(external_id=external_id, stage="detail")

        with error_context(platform=self.platform.value, external_id=external_id, url=url):
            async with open_page(self.browser) as page:
                log.info(f"Opening detail page {url}")
                status = await navigate(
                    page, url, self.navigation_timeout_ms, allow_status=(NOT_FOUND_STATUS,)
                )
                if status == NOT_FOUND_STATUS:
                    log.info(f"Project {external_id} returned 404, recording as hidden")
                    return ProjectHidden(platform=self.platform, external_id=external_id)

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
                resolve_recruiting_limit=resolve_recruiting_limit,
                delivery_date_absent=DATE_ABSENT,
            )

        log.info(
            f"Parsed {external_id} ({project.wage_type.value}): {project.title} | "
            f"{html_to_text(project.description, limit=40)}"
        )
        return project
