"""
In-memory stand-ins for Playwright objects and page objects.

FakePage parses its HTML with BeautifulSoup and resolves the selector
subset the page objects use: CSS (through soupsieve), `:has-text()`,
`text=`, `nth=`, `>>` chaining and `following-sibling` XPath steps.
"""

import asyncio
import re

import pytest
from bs4 import BeautifulSoup, Tag
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from gigcrawler.errors import ParseError
from gigcrawler.modules.projects import Platform, ProjectHidden

# ============================================================
# Playwright fakes
# ============================================================

_SIBLING_XPATH = re.compile(
    r"^xpath=following-sibling::(\*|\w+)(?:\[contains\(@class, '([^']+)'\)\])?\[1\]$"
)
_HAS_TEXT = re.compile(r""":has-text\((['"])(.*?)\1\)""")


def element_text(element: Tag) -> str:
    """Text content with whitespace collapsed, as Playwright matches it."""
    return " ".join(element.get_text(" ").split())


def matches_text(element: Tag, text: str | re.Pattern[str]) -> bool:
    content = element_text(element)
    if isinstance(text, re.Pattern):
        return text.search(content) is not None
    return " ".join(text.split()).lower() in content.lower()


class HtmlDocument:
    """
    Parsed page markup.

    If error is set, every DOM read raises it (a crashed or closed page).
    """

    def __init__(self, html: str, error: Exception | None = None):
        self.soup = BeautifulSoup(html, "html.parser")
        self.error = error
        self._order = {id(element): i for i, element in enumerate(self.soup.find_all(True))}

    def check(self) -> None:
        if self.error is not None:
            raise self.error

    def title(self) -> str:
        return self.soup.title.get_text().strip() if self.soup.title else ""

    def in_order(self, elements: list[Tag]) -> list[Tag]:
        unique = {id(element): element for element in elements}
        return sorted(unique.values(), key=lambda element: self._order.get(id(element), -1))

    def select(self, roots: list[Tag], selector: str) -> list[Tag]:
        current = roots
        for part in (part.strip() for part in selector.split(">>")):
            if part.startswith("nth="):
                index = int(part.removeprefix("nth="))
                current = current[index:][:1]
            else:
                current = self.in_order(
                    [element for root in current for element in self._select_part(root, part)]
                )
        return current

    def _select_part(self, root: Tag, part: str) -> list[Tag]:
        if part.startswith("text="):
            needle = part.removeprefix("text=").strip("\"'")
            scope = (root.body or root) if root is self.soup else root
            # Smallest elements containing the text
            return [
                element
                for element in scope.find_all(True)
                if matches_text(element, needle)
                and not any(
                    matches_text(child, needle)
                    for child in element.find_all(True, recursive=False)
                )
            ]

        match = _SIBLING_XPATH.match(part)
        if match:
            name, class_name = match.groups()
            for sibling in root.find_next_siblings(True if name == "*" else name):
                if class_name is None or class_name in " ".join(sibling.get("class", [])):
                    return [sibling]
            return []

        css = _HAS_TEXT.sub(lambda m: f':-soup-contains("{m.group(2)}")', part)
        return root.select(css)


class FakeLocator:
    """Locator over the elements a selector chain resolved to."""

    def __init__(self, document: HtmlDocument, elements: list[Tag]):
        self.document = document
        self.elements = elements

    def locator(self, selector: str, has_text=None, has: "FakeLocator | None" = None) -> "FakeLocator":
        found = FakeLocator(self.document, self.document.select(self.elements, selector))
        return found.filter(has_text=has_text, has=has)

    def filter(self, has_text=None, has: "FakeLocator | None" = None) -> "FakeLocator":
        elements = self.elements
        if has_text is not None:
            elements = [element for element in elements if matches_text(element, has_text)]
        if has is not None:
            elements = [
                element
                for element in elements
                if any(
                    any(parent is element for parent in inner.parents) for inner in has.elements
                )
            ]
        return FakeLocator(self.document, elements)

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.document, self.elements[:1])

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self.document, self.elements[index:][:1])

    def or_(self, other: "FakeLocator") -> "FakeLocator":
        return FakeLocator(self.document, self.document.in_order(self.elements + other.elements))

    async def all(self) -> list["FakeLocator"]:
        self.document.check()
        return [FakeLocator(self.document, [element]) for element in self.elements]

    async def count(self) -> int:
        self.document.check()
        return len(self.elements)

    async def is_visible(self) -> bool:
        self.document.check()
        return bool(self.elements)

    def _element(self) -> Tag:
        self.document.check()
        if not self.elements:
            raise PlaywrightTimeoutError("Timeout waiting for locator")
        return self.elements[0]

    async def wait_for(self, state: str = "visible", timeout: float | None = None) -> None:
        self._element()

    async def inner_text(self, timeout: float | None = None) -> str:
        return self._element().get_text()

    async def inner_html(self, timeout: float | None = None) -> str:
        return self._element().decode_contents()

    async def get_attribute(self, name: str, timeout: float | None = None) -> str | None:
        value = self._element().get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value


class FakeResponse:
    def __init__(self, status: int):
        self.status = status


class FakePage:
    def __init__(self, browser: "FakeBrowser"):
        self.browser = browser
        self.fields = browser.fields
        self.list_ids = browser.list_ids
        self.document = HtmlDocument(browser.html, error=browser.dom_error)
        self.visited: list[str] = []
        self.closed = False

    async def goto(self, url: str, timeout: float | None = None, wait_until: str | None = None):
        self.visited.append(url)
        if self.browser.goto_error is not None:
            raise self.browser.goto_error
        return FakeResponse(self.browser.status)

    async def title(self) -> str:
        self.document.check()
        return self.document.title()

    def locator(self, selector: str, has_text=None, has: FakeLocator | None = None) -> FakeLocator:
        return FakeLocator(self.document, [self.document.soup]).locator(
            selector, has_text=has_text, has=has
        )

    async def close(self) -> None:
        self.closed = True
        self.browser.open_count -= 1


class FakeBrowser:
    """
    Browser whose pages serve canned data.

    Pages serve html to the real page objects and fields/list_ids to the
    page object fakes. Tracks open pages so tests can check every page gets
    closed.
    """

    def __init__(
        self,
        fields: dict | None = None,
        list_ids: list[str] | None = None,
        html: str = "",
        status: int = 200,
        goto_error: Exception | None = None,
        dom_error: Exception | None = None,
        new_page_error: Exception | None = None,
    ):
        self.fields = fields or {}
        self.list_ids = list_ids
        self.html = html
        self.status = status
        self.goto_error = goto_error
        self.dom_error = dom_error
        self.new_page_error = new_page_error
        self.pages: list[FakePage] = []
        self.open_count = 0

    async def new_page(self) -> FakePage:
        if self.new_page_error is not None:
            raise self.new_page_error
        page = FakePage(self)
        self.pages.append(page)
        self.open_count += 1
        return page


# ============================================================
# Page object fakes
# ============================================================


class FakeListPage:
    """List page object backed by FakeBrowser.list_ids (None = no results)."""

    def __init__(self, page: FakePage, timeout_ms: float = 30000):
        self.page = page

    async def wait_for_results(self) -> None:
        return None

    async def is_empty(self) -> bool:
        return not self.page.list_ids

    async def get_project_ids(self) -> list[str]:
        return list(self.page.list_ids)


class FakeDetailPage:
    """
    Detail page object backed by FakeBrowser.fields.

    A field whose value is an exception is raised when read.
    """

    def __init__(self, page: FakePage, timeout_ms: float = 30000):
        self.page = page
        self.reads: list[str] = []

    def _get(self, name: str, default=""):
        self.reads.append(name)
        value = self.page.fields.get(name, default)
        if isinstance(value, Exception):
            raise value
        return value

    async def wait_until_ready(self) -> None:
        self._get("ready", None)

    async def is_hidden(self) -> bool:
        return self._get("hidden", False)

    async def get_title(self) -> str:
        return self._get("title")

    async def get_category(self) -> str:
        return self._get("category")

    async def is_fixed_wage(self) -> bool:
        return self._get("fixed", True)

    async def is_recruiting(self) -> bool:
        return self._get("recruiting", True)

    async def get_budget_text(self) -> str:
        return self._get("budget")

    async def get_hourly_budget_text(self) -> str:
        return self._get("hourly_budget")

    async def get_delivery_date_text(self) -> str:
        return self._get("delivery_date")

    async def get_recruiting_limit_text(self) -> str:
        return self._get("recruiting_limit")

    async def get_publication_date_text(self) -> str:
        return self._get("publication_date")

    async def get_working_time_text(self) -> str:
        return self._get("working_time")

    async def get_period_text(self) -> str:
        return self._get("period")

    async def get_description(self) -> str:
        return self._get("description")


def with_fake_pages(crawler):
    """Swap a crawler's page objects for the fakes."""
    crawler.list_page_cls = FakeListPage
    crawler.detail_page_cls = FakeDetailPage
    return crawler


# ============================================================
# Orchestrator fakes
# ============================================================


class FakeCrawler:
    """
    Crawler returning canned ids and hidden projects.

    Records the peak number of concurrent calls.
    """

    platform = Platform.LANCERS

    def __init__(
        self,
        ids_by_url: dict[str, list[str]],
        fail_ids: set[str] | None = None,
        fail_urls: set[str] | None = None,
        delay: float = 0.01,
    ):
        self.ids_by_url = ids_by_url
        self.fail_ids = fail_ids or set()
        self.fail_urls = fail_urls or set()
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.detail_calls: list[str] = []
        self.completed: list[str] = []

    async def _enter(self) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(self.delay)

    async def list_project_ids(self, url: str) -> list[str]:
        await self._enter()
        try:
            if url in self.fail_urls:
                raise ParseError("Broken list page", url, url=url)
            return self.ids_by_url[url]
        finally:
            self.in_flight -= 1

    async def detail(self, external_id: str) -> ProjectHidden:
        self.detail_calls.append(external_id)
        await self._enter()
        try:
            if external_id in self.fail_ids:
                raise ParseError(
                    "Unrecognized money amount", "???", external_id=external_id, field="budget"
                )
            self.completed.append(external_id)
            return ProjectHidden(platform=self.platform, external_id=external_id)
        finally:
            self.in_flight -= 1


class FakeSink:
    def __init__(self):
        self.batches: list[list] = []

    async def save_many(self, projects: list) -> None:
        self.batches.append(list(projects))


# ============================================================
# Fixtures
# ============================================================


@pytest.fixture
def fixed_wage_fields() -> dict:
    """Detail fields of a visible fixed-price listing."""
    return {
        "title": "LP制作のお仕事",
        "category": "ホームページ作成",
        "fixed": True,
        "recruiting": True,
        "budget": "5,000円 〜 10,000円",
        "delivery_date": "2025年2月1日",
        "recruiting_limit": "2025年1月20日",
        "publication_date": "2025年1月10日",
        "description": "<p>LPを作ってください</p><script>track()</script>",
    }


@pytest.fixture
def time_wage_fields() -> dict:
    """Detail fields of a visible hourly listing."""
    return {
        "title": "データ入力スタッフ募集",
        "category": "データ入力",
        "fixed": False,
        "recruiting": False,
        "hourly_budget": "1,000円 〜 1,500円",
        "working_time": "10時間/週",
        "period": "1ヶ月〜3ヶ月",
        "recruiting_limit": "2025年1月20日",
        "publication_date": "2025年1月10日",
        "description": "<div>簡単な作業です</div>",
    }


@pytest.fixture
def fake_sink() -> FakeSink:
    return FakeSink()
