"""
Crawler contract and shared page handling.

Every platform crawler implements the Crawler protocol. Pages are opened
per call through open_page() so they are closed on every exit path.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import AsyncIterator, Callable, Protocol, TypeVar

from loguru import logger
from playwright.async_api import Browser, Page
from playwright.async_api import Error as PlaywrightError

from gigcrawler.crawler.pages.base import DetailPage, ListPage
from gigcrawler.errors import NavigationError, ParseError, error_context
from gigcrawler.modules.projects import (
    Platform,
    Project,
    ProjectFixedWage,
    ProjectTimeWage,
    WorkingTimeUnit,
)
from gigcrawler.utils.html import clean_description_html
from gigcrawler.utils.parsers import parse_jp_date, parse_money, parse_period, parse_working_time

T = TypeVar("T")

DEFAULT_NAVIGATION_TIMEOUT_MS = 60000
DEFAULT_WAIT_TIMEOUT_MS = 30000


class Crawler(Protocol):
    """Per-platform crawler."""

    platform: Platform

    async def list_project_ids(self, url: str) -> list[str]:
        """
        Collect listing ids from one search-results page, in page order.

        Returns [] only when the page explicitly reports zero results.
        """
        ...

    async def detail(self, external_id: str) -> Project:
        """Load one listing and return its normalized record."""
        ...


@asynccontextmanager
async def open_page(browser: Browser) -> AsyncIterator[Page]:
    """
    Open a page owned by the caller; it is closed however the block exits.

    Browser failures inside the block (page crashed or closed) are raised
    as NavigationError.
    """
    try:
        page = await browser.new_page()
    except PlaywrightError as e:
        raise NavigationError(f"Failed to open page: {e}") from e

    try:
        yield page
    except PlaywrightError as e:
        raise NavigationError(f"Browser error: {e}") from e
    finally:
        try:
            await page.close()
        except PlaywrightError as e:
            logger.bind(module="Browser").warning(f"Failed to close page: {e}")


async def navigate(
    page: Page,
    url: str,
    timeout_ms: float,
    wait_until: str = "domcontentloaded",
    allow_status: tuple[int, ...] = (),
) -> int | None:
    """
    Navigate page to url.

    Returns:
        HTTP status of the main response, or None if there was none

    Raises:
        NavigationError: On load failure, timeout, or an HTTP error status
            not listed in allow_status
    """
    try:
        response = await page.goto(url, timeout=timeout_ms, wait_until=wait_until)
    except PlaywrightError as e:
        raise NavigationError(f"Failed to load page: {e}", url=url) from e

    if response is None:
        return None
    if response.status >= 400 and response.status not in allow_status:
        raise NavigationError(f"Page returned HTTP {response.status}", url=url)
    return response.status


async def collect_project_ids(
    browser: Browser,
    list_page_cls: Callable[[Page, float], ListPage],
    url: str,
    navigation_timeout_ms: float,
    wait_timeout_ms: float,
    module: str,
    wait_until: str = "domcontentloaded",
) -> list[str]:
    """Shared list-page flow: open, navigate, wait, detect empty, read ids."""
    log = logger.bind(module=module, stage="list")

    with error_context(url=url):
        async with open_page(browser) as page:
            log.info(f"Opening list page {url}")
            await navigate(page, url, navigation_timeout_ms, wait_until=wait_until)

            list_page = list_page_cls(page, wait_timeout_ms)
            await list_page.wait_for_results()

            if await list_page.is_empty():
                log.info(f"No results on {url}")
                return []

            ids = await list_page.get_project_ids()
            log.info(f"Found {len(ids)} projects on {url}")
            return ids


def parse_field(field: str, parser: Callable[..., T], *args, **kwargs) -> T:
    """Run a parser, tagging any ParseError with the field name."""
    with error_context(field=field):
        return parser(*args, **kwargs)


def parse_optional_date(
    field: str, text: str, absent_texts: tuple[str, ...] = ()
) -> datetime | None:
    """Parse a date that the listing may leave unset ("", "-", "ご相談" ...)."""
    if text.strip() in absent_texts:
        return None
    return parse_field(field, parse_jp_date, text)


def require_date(text: str) -> datetime:
    """Parse a date that must be present; empty text is a ParseError."""
    date = parse_jp_date(text)
    if date is None:
        raise ParseError("Missing mandatory date", text)
    return date


def parse_required_date(field: str, text: str) -> datetime:
    """Parse a date every visible listing carries, tagging errors with field."""
    return parse_field(field, require_date, text)


# ============================================================
# Detail assembly
# ============================================================

# (raw recruiting limit text, publication date) -> recruiting limit
RecruitingLimitResolver = Callable[[str, datetime], datetime | None]


def optional_recruiting_limit(text: str, publication_date: datetime) -> datetime | None:
    return parse_jp_date(text)


def required_recruiting_limit(text: str, publication_date: datetime) -> datetime:
    return require_date(text)


@dataclass(frozen=True)
class DetailTexts:
    """Raw field texts read from a visible detail page."""

    title: str
    category: str
    description: str
    is_fixed_wage: bool
    is_recruiting: bool
    recruiting_limit: str
    publication_date: str
    budget: str = ""
    delivery_date: str = ""
    hourly_budget: str = ""
    working_time: str = ""
    period: str = ""


async def read_detail_texts(pom: DetailPage) -> DetailTexts:
    """
    Read every field of a visible listing through its page object.

    Only the getters of the listing's wage type are called.
    """
    title = await pom.get_title()
    is_fixed_wage = await pom.is_fixed_wage()
    common = dict(
        title=title,
        is_fixed_wage=is_fixed_wage,
        is_recruiting=await pom.is_recruiting(),
        category=await pom.get_category(),
        recruiting_limit=await pom.get_recruiting_limit_text(),
        publication_date=await pom.get_publication_date_text(),
        description=clean_description_html(await pom.get_description()),
    )

    if is_fixed_wage:
        return DetailTexts(
            **common,
            budget=await pom.get_budget_text(),
            delivery_date=await pom.get_delivery_date_text(),
        )
    return DetailTexts(
        **common,
        hourly_budget=await pom.get_hourly_budget_text(),
        working_time=await pom.get_working_time_text(),
        period=await pom.get_period_text(),
    )


def build_visible_project(
    platform: Platform,
    external_id: str,
    url: str,
    texts: DetailTexts,
    resolve_recruiting_limit: RecruitingLimitResolver,
    delivery_date_absent: tuple[str, ...] = ("",),
    working_time_unit: WorkingTimeUnit | None = None,
) -> ProjectFixedWage | ProjectTimeWage:
    """
    Normalize raw detail texts into a fixed or time wage project.

    Args:
        resolve_recruiting_limit: Platform rule for the recruiting limit
        delivery_date_absent: Delivery date texts meaning "not set"
        working_time_unit: Unit for working-time amounts written without one

    Raises:
        ParseError: Tagged with the failing field
    """
    publication_date = parse_required_date("publication_date", texts.publication_date)
    common = dict(
        platform=platform,
        external_id=external_id,
        url=url,
        title=texts.title,
        category=texts.category,
        description=texts.description,
        publication_date=publication_date,
        recruiting_limit=parse_field(
            "recruiting_limit",
            resolve_recruiting_limit,
            texts.recruiting_limit,
            publication_date,
        ),
        is_recruiting=texts.is_recruiting,
    )

    if texts.is_fixed_wage:
        return ProjectFixedWage(
            **common,
            budget=parse_field("budget", parse_money, texts.budget),
            delivery_date=parse_optional_date(
                "delivery_date", texts.delivery_date, delivery_date_absent
            ),
        )
    return ProjectTimeWage(
        **common,
        hourly_budget=parse_field("hourly_budget", parse_money, texts.hourly_budget),
        working_time=parse_field(
            "working_time",
            parse_working_time,
            texts.working_time,
            default_unit=working_time_unit,
        ),
        period=parse_field("period", parse_period, texts.period),
    )
