"""
Lancers page objects.

Detail fields are rendered as definition lists
(.c-definitionList__term followed by .c-definitionList__description).
"""

import re

from playwright.async_api import Page

from gigcrawler.crawler.pages.locators import (
    LabeledField,
    RowValue,
    SiblingValue,
    all_matches,
    exact,
    first_visible,
    optional_labeled_text,
    read_attribute,
    read_html,
    read_page_title,
    read_text,
    required_labeled_text,
    wait_for_any,
)
from gigcrawler.errors import StructuralExtractionError

BASE_URL = "https://www.lancers.jp"

# ============================================================
# List page
# ============================================================

# Tried in order; the first selector yielding detail links wins
RESULT_LINK_SELECTORS = (
    ".c-media__title a",
    ".search-result-list .item-title a",
    ".job-offer-item a",
    ".result-item a[href*='/work/detail/']",
    "a[href*='/work/detail/']",
)
NO_RESULT_SELECTORS = (
    ".search-result-none",
    "text=該当するお仕事が見つかりませんでした",
)

_WORK_ID_PATTERN = re.compile(r"/work/detail/(\d+)")


class LancersListPage:
    def __init__(self, page: Page, timeout_ms: float = 30000):
        self.page = page
        self.timeout_ms = timeout_ms

    async def wait_for_results(self) -> None:
        await wait_for_any(
            self.page,
            RESULT_LINK_SELECTORS[-1:] + NO_RESULT_SELECTORS,
            "project_list",
            self.timeout_ms,
        )

    async def is_empty(self) -> bool:
        return await first_visible(self.page, NO_RESULT_SELECTORS, "project_list") is not None

    async def get_project_ids(self) -> list[str]:
        for selector in RESULT_LINK_SELECTORS:
            ids: dict[str, None] = {}
            for link in await all_matches(self.page, selector, "project_link"):
                href = await read_attribute(link, "href", "project_link", self.timeout_ms) or ""
                match = _WORK_ID_PATTERN.search(href)
                if match:
                    ids[match.group(1)] = None
            if ids:
                return list(ids)

        raise StructuralExtractionError("No work detail links found", field="project_link")


# ============================================================
# Detail page
# ============================================================

TITLE_SELECTORS = ("h1.c-heading--lv1",)
CATEGORY_SELECTORS = (
    ".c-breadcrumb__item >> nth=2",
    ".project-category",
)
DESCRIPTION_SELECTORS = (".p-jobdetail__content", ".job-description")
HIDDEN_SELECTORS = (
    "h1:has-text('404')",
    "text=ページが見つかりません",
    "text=非公開のお仕事",
)
CLOSED_SELECTORS = (".c-badge--closed",)

_PAGE_TITLE_SUFFIX = re.compile(r"\s*[|｜][\s　]*ランサーズ.*$")

_STRATEGIES = (
    SiblingValue(
        ".c-definitionList__term",
        "xpath=following-sibling::*[contains(@class, 'c-definitionList__description')][1]",
    ),
    SiblingValue("dt", "xpath=following-sibling::dd[1]"),
    RowValue("tr", "td", label_cell="th"),
)

# Budget label differs between listing revisions
BUDGET_FIELDS = (
    LabeledField("budget", exact("予算"), _STRATEGIES),
    LabeledField("budget", exact("報酬"), _STRATEGIES),
    LabeledField("budget", exact("価格"), _STRATEGIES),
)
DELIVERY_DATE = LabeledField("delivery_date", re.compile(r"^\s*(納期|納品希望日)\s*$"), _STRATEGIES)
RECRUITING_LIMIT = LabeledField(
    "recruiting_limit", re.compile(r"^\s*(応募期限|募集期限)\s*$"), _STRATEGIES
)
PUBLICATION_DATE = LabeledField(
    "publication_date", re.compile(r"^\s*(登録日時|掲載日)\s*$"), _STRATEGIES
)
WORKING_TIME = LabeledField("working_time", exact("稼働時間"), _STRATEGIES)
PERIOD = LabeledField("period", exact("期間"), _STRATEGIES)

HOURLY_MARKERS = ("時給", "時間単価", "/時")
HOURLY_LABEL_SELECTORS = ("text=時間報酬",)


class LancersDetailPage:
    def __init__(self, page: Page, timeout_ms: float = 30000):
        self.page = page
        self.timeout_ms = timeout_ms

    async def wait_until_ready(self) -> None:
        await wait_for_any(
            self.page, TITLE_SELECTORS + HIDDEN_SELECTORS, "title", self.timeout_ms
        )

    async def is_hidden(self) -> bool:
        if await first_visible(self.page, TITLE_SELECTORS, "title") is not None:
            return False
        return await first_visible(self.page, HIDDEN_SELECTORS, "hidden") is not None

    async def get_title(self) -> str:
        heading = await first_visible(self.page, TITLE_SELECTORS, "title")
        if heading is not None:
            text = await read_text(heading, "title", self.timeout_ms)
            if text:
                return text

        page_title = _PAGE_TITLE_SUFFIX.sub("", await read_page_title(self.page)).strip()
        if page_title:
            return page_title

        raise StructuralExtractionError("title not found", field="title")

    async def get_category(self) -> str:
        locator = await first_visible(self.page, CATEGORY_SELECTORS, "category")
        if locator is None:
            raise StructuralExtractionError("category not found", field="category")
        text = await read_text(locator, "category", self.timeout_ms)
        if not text:
            raise StructuralExtractionError("category is empty", field="category")
        return text

    async def get_budget_text(self) -> str:
        for field in BUDGET_FIELDS:
            text = await optional_labeled_text(self.page, field, self.timeout_ms)
            if text:
                return text
        return ""

    async def is_fixed_wage(self) -> bool:
        budget = await self.get_budget_text()
        if any(marker in budget for marker in HOURLY_MARKERS):
            return False
        if budget:
            return True
        if await first_visible(self.page, HOURLY_LABEL_SELECTORS, "wage_type") is not None:
            return False
        raise StructuralExtractionError("wage type could not be determined", field="wage_type")

    async def is_recruiting(self) -> bool:
        return await first_visible(self.page, CLOSED_SELECTORS, "is_recruiting") is None

    async def get_hourly_budget_text(self) -> str:
        budget = await self.get_budget_text()
        return budget if any(marker in budget for marker in HOURLY_MARKERS) else ""

    async def get_delivery_date_text(self) -> str:
        return await optional_labeled_text(self.page, DELIVERY_DATE, self.timeout_ms)

    async def get_recruiting_limit_text(self) -> str:
        return await optional_labeled_text(self.page, RECRUITING_LIMIT, self.timeout_ms)

    async def get_publication_date_text(self) -> str:
        return await required_labeled_text(self.page, PUBLICATION_DATE, self.timeout_ms)

    async def get_working_time_text(self) -> str:
        return await optional_labeled_text(self.page, WORKING_TIME, self.timeout_ms)

    async def get_period_text(self) -> str:
        return await optional_labeled_text(self.page, PERIOD, self.timeout_ms)

    async def get_description(self) -> str:
        locator = await first_visible(self.page, DESCRIPTION_SELECTORS, "description")
        if locator is None:
            raise StructuralExtractionError("description not found", field="description")
        return await read_html(locator, "description", self.timeout_ms)
