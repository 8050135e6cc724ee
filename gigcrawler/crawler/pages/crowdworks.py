"""
CrowdWorks page objects.

The search page embeds its results as JSON in the data attribute of
#vue-container; the detail page lays out its summary as label/value
table rows.
"""

import json
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from gigcrawler.crawler.pages.locators import (
    LabeledField,
    RowValue,
    SiblingValue,
    exact,
    first_visible,
    locate_labeled,
    optional_labeled_text,
    read_attribute,
    read_html,
    read_page_title,
    read_text,
    required_labeled_text,
    wait_for_any,
)
from gigcrawler.errors import ParseError, StructuralExtractionError

BASE_URL = "https://crowdworks.jp"

# ============================================================
# List page
# ============================================================

CONTAINER_SELECTOR = "#vue-container"


class CrowdWorksListPage:
    def __init__(self, page: Page, timeout_ms: float = 30000):
        self.page = page
        self.timeout_ms = timeout_ms
        self._job_offers: list[dict[str, Any]] | None = None

    async def wait_for_results(self) -> None:
        try:
            await self.page.locator(CONTAINER_SELECTOR).wait_for(
                state="attached", timeout=self.timeout_ms
            )
        except PlaywrightError as e:
            raise StructuralExtractionError(
                f"{CONTAINER_SELECTOR} not found: {e}", field="project_list"
            ) from e

    async def _load_job_offers(self) -> list[dict[str, Any]]:
        if self._job_offers is not None:
            return self._job_offers

        data = await read_attribute(
            self.page.locator(CONTAINER_SELECTOR), "data", "project_list", self.timeout_ms
        )
        if not data:
            raise StructuralExtractionError(
                "data attribute missing on search container", field="project_list"
            )

        try:
            payload = json.loads(data)
        except json.JSONDecodeError as e:
            raise ParseError("Search payload is not JSON", data[:200]) from e

        try:
            job_offers = payload["searchResult"]["job_offers"]
        except (KeyError, TypeError) as e:
            raise StructuralExtractionError(
                f"Search payload has no job_offers: {e}", field="project_list"
            ) from e

        self._job_offers = job_offers
        return job_offers

    async def is_empty(self) -> bool:
        return len(await self._load_job_offers()) == 0

    async def get_project_ids(self) -> list[str]:
        job_offers = await self._load_job_offers()
        try:
            return [str(offer["job_offer"]["id"]) for offer in job_offers]
        except (KeyError, TypeError) as e:
            raise StructuralExtractionError(
                f"Job offer without id: {e}", field="project_list"
            ) from e


# ============================================================
# Detail page
# ============================================================

HIDDEN_TITLE = "非公開のお仕事"
PAGE_TITLE_SUFFIX = "| 在宅"
CLOSED_SELECTORS = ("text=このお仕事の募集は終了しています。",)
HEADING_SELECTORS = ("h1",)
CATEGORY_SELECTORS = (".subtitle > a", ".subtitle a")
DESCRIPTION_SELECTORS = (".confirm_outside_link", ".job_offer_detail_table td")

# Summary rows put the label in a cell and the value in the second cell:
# <tr><td>label</td><td>value</td></tr>. Header-cell layouts are fallbacks.
_STRATEGIES = (
    RowValue(".summary tr", "td >> nth=1", label_cell="td"),
    RowValue(".summary tr", "td >> nth=1", label_cell="th"),
    RowValue(".summary tr", "td", label_cell="th"),
    SiblingValue(".summary th", "xpath=following-sibling::td[1]"),
    RowValue("tr", "td", label_cell="th"),
)

FIXED_BUDGET = LabeledField("budget", "固定報酬制", _STRATEGIES)
HOURLY_BUDGET = LabeledField("hourly_budget", "時間単価制", _STRATEGIES)
DELIVERY_DATE = LabeledField("delivery_date", "納品希望日", _STRATEGIES)
RECRUITING_LIMIT = LabeledField("recruiting_limit", "応募期限", _STRATEGIES)
PUBLICATION_DATE = LabeledField("publication_date", "掲載日", _STRATEGIES)
WORKING_TIME = LabeledField("working_time", "稼働時間/週", _STRATEGIES)
PERIOD = LabeledField("period", exact("期間"), _STRATEGIES)


class CrowdWorksDetailPage:
    def __init__(self, page: Page, timeout_ms: float = 30000):
        self.page = page
        self.timeout_ms = timeout_ms

    async def wait_until_ready(self) -> None:
        await wait_for_any(self.page, HEADING_SELECTORS, "title", self.timeout_ms)

    async def get_title(self) -> str:
        page_title = (await read_page_title(self.page)).split(PAGE_TITLE_SUFFIX)[0].strip()
        if page_title:
            return page_title

        heading = await first_visible(self.page, HEADING_SELECTORS, "title")
        if heading is not None:
            text = await read_text(heading, "title", self.timeout_ms)
            if text:
                return text.splitlines()[0].strip()

        raise StructuralExtractionError("title not found", field="title")

    async def is_hidden(self) -> bool:
        return HIDDEN_TITLE in await self.get_title()

    async def get_category(self) -> str:
        locator = await first_visible(self.page, CATEGORY_SELECTORS, "category")
        if locator is None:
            raise StructuralExtractionError("category not found", field="category")
        text = await read_text(locator, "category", self.timeout_ms)
        if not text:
            raise StructuralExtractionError("category is empty", field="category")
        return text

    async def is_fixed_wage(self) -> bool:
        if await locate_labeled(self.page, FIXED_BUDGET) is not None:
            return True
        if await locate_labeled(self.page, HOURLY_BUDGET) is not None:
            return False
        raise StructuralExtractionError("wage type label not found", field="wage_type")

    async def is_recruiting(self) -> bool:
        return await first_visible(self.page, CLOSED_SELECTORS, "is_recruiting") is None

    async def get_budget_text(self) -> str:
        return await optional_labeled_text(self.page, FIXED_BUDGET, self.timeout_ms)

    async def get_hourly_budget_text(self) -> str:
        return await optional_labeled_text(self.page, HOURLY_BUDGET, self.timeout_ms)

    async def get_delivery_date_text(self) -> str:
        return await optional_labeled_text(self.page, DELIVERY_DATE, self.timeout_ms)

    async def get_recruiting_limit_text(self) -> str:
        return await required_labeled_text(self.page, RECRUITING_LIMIT, self.timeout_ms)

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
        html = await read_html(locator, "description", self.timeout_ms)
        if not html:
            raise StructuralExtractionError("description is empty", field="description")
        return html
