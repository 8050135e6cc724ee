"""
Coconala page objects.

Coconala requests are always priced as a lump sum, so the time-wage
getters return "".
"""

import re

from playwright.async_api import Page

from gigcrawler.crawler.pages.locators import (
    LabeledField,
    RowValue,
    all_matches,
    first_visible,
    optional_labeled_text,
    read_attribute,
    read_html,
    read_text,
    required_labeled_text,
    wait_for_any,
)
from gigcrawler.errors import StructuralExtractionError

BASE_URL = "https://coconala.com"

# ============================================================
# List page
# ============================================================

RESULT_LINK_SELECTORS = (
    ".c-itemInfo_title a",
    "a.c-searchItem_detailLink",
)
NO_RESULT_SELECTORS = ("text=該当する仕事が見つかりませんでした",)

_REQUEST_ID_PATTERN = re.compile(r"/requests/(\d+)")


class CoconalaListPage:
    def __init__(self, page: Page, timeout_ms: float = 30000):
        self.page = page
        self.timeout_ms = timeout_ms

    async def wait_for_results(self) -> None:
        await wait_for_any(
            self.page,
            RESULT_LINK_SELECTORS + NO_RESULT_SELECTORS,
            "project_list",
            self.timeout_ms,
        )

    async def is_empty(self) -> bool:
        return await first_visible(self.page, NO_RESULT_SELECTORS, "project_list") is not None

    async def get_project_ids(self) -> list[str]:
        for selector in RESULT_LINK_SELECTORS:
            links = await all_matches(self.page, selector, "project_link")
            if not links:
                continue

            ids = []
            for link in links:
                href = await read_attribute(link, "href", "project_link", self.timeout_ms) or ""
                match = _REQUEST_ID_PATTERN.search(href)
                if not match:
                    raise StructuralExtractionError(
                        f"Unexpected request link: {href!r}", field="project_link"
                    )
                ids.append(match.group(1))
            return ids

        raise StructuralExtractionError("No request links found", field="project_link")


# ============================================================
# Detail page
# ============================================================

TITLE_SELECTORS = (".c-requestTitle_heading", "h1")
CATEGORY_SELECTORS = (".c-requestTitle_category",)
DESCRIPTION_SELECTORS = (".c-detailRowContentText", ".c-detailRowContent")
HIDDEN_SELECTORS = (
    "text=ページが見つかりません",
    "text=この依頼は非公開",
)
CLOSED_SELECTORS = (
    ".c-requestOutlineRow:has-text('募集終了')",
    ".c-requestTitle:has-text('募集終了')",
)

_OUTLINE_ROW = ".c-requestOutlineRow"

BUDGET = LabeledField(
    "budget",
    "予算",
    (
        RowValue(_OUTLINE_ROW, ".c-requestOutlineRowContent_budget"),
        RowValue(_OUTLINE_ROW, ".c-requestOutlineRow_content"),
    ),
)
DELIVERY_DATE = LabeledField(
    "delivery_date",
    "納品希望日",
    (RowValue(_OUTLINE_ROW, ".c-requestOutlineRow_content"),),
)
RECRUITING_LIMIT = LabeledField(
    "recruiting_limit",
    "締切日",
    (
        RowValue(_OUTLINE_ROW, ".c-requestOutlineRowContent_additional"),
        RowValue(_OUTLINE_ROW, ".c-requestOutlineRow_content"),
    ),
)
PUBLICATION_DATE = LabeledField(
    "publication_date",
    "掲載日",
    (
        RowValue(_OUTLINE_ROW, ".c-requestOutlineRowContent_additional"),
        RowValue(_OUTLINE_ROW, ".c-requestOutlineRow_content"),
    ),
)

_DEADLINE_PATTERN = re.compile(r"締切日\s*(\d{4}年\d{1,2}月\d{1,2}日)")
_PUBLISHED_PATTERN = re.compile(r"掲載日\s*(\d{4}年\d{1,2}月\d{1,2}日)")


class CoconalaDetailPage:
    def __init__(self, page: Page, timeout_ms: float = 30000):
        self.page = page
        self.timeout_ms = timeout_ms

    async def wait_until_ready(self) -> None:
        await wait_for_any(
            self.page, TITLE_SELECTORS[:1] + HIDDEN_SELECTORS, "title", self.timeout_ms
        )

    async def is_hidden(self) -> bool:
        if await first_visible(self.page, TITLE_SELECTORS[:1], "title") is not None:
            return False
        return await first_visible(self.page, HIDDEN_SELECTORS, "hidden") is not None

    async def _required(self, selectors: tuple[str, ...], field: str) -> str:
        locator = await first_visible(self.page, selectors, field)
        if locator is None:
            raise StructuralExtractionError(f"{field} not found", field=field)
        text = await read_text(locator, field, self.timeout_ms)
        if not text:
            raise StructuralExtractionError(f"{field} is empty", field=field)
        return text

    async def get_title(self) -> str:
        return await self._required(TITLE_SELECTORS, "title")

    async def get_category(self) -> str:
        return await self._required(CATEGORY_SELECTORS, "category")

    async def is_fixed_wage(self) -> bool:
        return True

    async def is_recruiting(self) -> bool:
        return await first_visible(self.page, CLOSED_SELECTORS, "is_recruiting") is None

    async def get_budget_text(self) -> str:
        return await optional_labeled_text(self.page, BUDGET, self.timeout_ms)

    async def get_hourly_budget_text(self) -> str:
        return ""

    async def get_delivery_date_text(self) -> str:
        return await optional_labeled_text(self.page, DELIVERY_DATE, self.timeout_ms)

    async def get_recruiting_limit_text(self) -> str:
        text = await optional_labeled_text(self.page, RECRUITING_LIMIT, self.timeout_ms)
        match = _DEADLINE_PATTERN.search(text)
        return match.group(1) if match else ""

    async def get_publication_date_text(self) -> str:
        text = await required_labeled_text(self.page, PUBLICATION_DATE, self.timeout_ms)
        match = _PUBLISHED_PATTERN.search(text)
        # Unexpected formats go to the date parser, which reports the raw text
        return match.group(1) if match else text

    async def get_working_time_text(self) -> str:
        return ""

    async def get_period_text(self) -> str:
        return ""

    async def get_description(self) -> str:
        locator = await first_visible(self.page, DESCRIPTION_SELECTORS, "description")
        if locator is None:
            raise StructuralExtractionError("description not found", field="description")
        return await read_html(locator, "description", self.timeout_ms)
