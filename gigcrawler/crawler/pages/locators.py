"""
Locator strategies shared by the page objects.

Field lookups are declared as data: a LabeledField names the label text and
an ordered tuple of strategies; the first strategy that yields a visible
element wins. Markup differs between listing states and site revisions, so
most fields carry more than one strategy.
"""

import re
from dataclasses import dataclass
from typing import Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from gigcrawler.errors import StructuralExtractionError

LabelText = str | re.Pattern[str]


def exact(label: str) -> re.Pattern[str]:
    """Pattern matching an element whose whole text is label."""
    return re.compile(rf"^\s*{re.escape(label)}\s*$")


class ValueStrategy(Protocol):
    def locate(self, page: Page, label: LabelText) -> Locator: ...


@dataclass(frozen=True)
class RowValue:
    """
    Value cell inside a row that contains the label.

    If label_cell is None the row's whole text is matched against the label.
    """

    row: str
    value: str
    label_cell: str | None = None

    def locate(self, page: Page, label: LabelText) -> Locator:
        rows = page.locator(self.row)
        if self.label_cell is None:
            rows = rows.filter(has_text=label)
        else:
            rows = rows.filter(has=page.locator(self.label_cell, has_text=label))
        return rows.locator(self.value).first


@dataclass(frozen=True)
class SiblingValue:
    """Value element following the label element (th -> td, dt -> dd)."""

    label: str
    value: str = "xpath=following-sibling::*[1]"

    def locate(self, page: Page, label: LabelText) -> Locator:
        return page.locator(self.label, has_text=label).first.locator(self.value).first


@dataclass(frozen=True)
class LabeledField:
    name: str
    label: LabelText
    strategies: tuple[ValueStrategy, ...]


async def _is_visible(locator: Locator, field: str | None) -> bool:
    try:
        return await locator.is_visible()
    except PlaywrightError as e:
        raise StructuralExtractionError(
            f"Could not check {field or 'element'}: {e}", field=field
        ) from e


async def first_visible(
    page: Page, selectors: tuple[str, ...], field: str | None = None
) -> Locator | None:
    """Return the first selector's first match that is currently visible."""
    for selector in selectors:
        locator = page.locator(selector).first
        if await _is_visible(locator, field):
            return locator
    return None


async def locate_labeled(page: Page, field: LabeledField) -> Locator | None:
    """Resolve a labeled field through its strategies."""
    for strategy in field.strategies:
        locator = strategy.locate(page, field.label)
        if await _is_visible(locator, field.name):
            return locator
    return None


async def all_matches(page: Page, selector: str, field: str) -> list[Locator]:
    try:
        return await page.locator(selector).all()
    except PlaywrightError as e:
        raise StructuralExtractionError(f"Could not list {field}: {e}", field=field) from e


async def read_page_title(page: Page) -> str:
    """Document title; browser failures become StructuralExtractionError."""
    try:
        return await page.title()
    except PlaywrightError as e:
        raise StructuralExtractionError(f"Could not read title: {e}", field="title") from e


async def read_attribute(locator: Locator, name: str, field: str, timeout_ms: float) -> str | None:
    try:
        return await locator.get_attribute(name, timeout=timeout_ms)
    except PlaywrightError as e:
        raise StructuralExtractionError(
            f"Could not read {field} attribute {name!r}: {e}", field=field
        ) from e


async def read_text(locator: Locator, field: str, timeout_ms: float) -> str:
    """Visible text of locator, trimmed; markup failures become StructuralExtractionError."""
    try:
        text = await locator.inner_text(timeout=timeout_ms)
    except PlaywrightError as e:
        raise StructuralExtractionError(
            f"Could not read {field}: {e}", field=field
        ) from e
    return text.strip()


async def read_html(locator: Locator, field: str, timeout_ms: float) -> str:
    try:
        html = await locator.inner_html(timeout=timeout_ms)
    except PlaywrightError as e:
        raise StructuralExtractionError(
            f"Could not read {field}: {e}", field=field
        ) from e
    return html.strip()


async def optional_labeled_text(page: Page, field: LabeledField, timeout_ms: float) -> str:
    """Text of a conditionally rendered field, or "" when it is not shown."""
    locator = await locate_labeled(page, field)
    if locator is None:
        return ""
    return await read_text(locator, field.name, timeout_ms)


async def required_labeled_text(page: Page, field: LabeledField, timeout_ms: float) -> str:
    """Text of a field every visible listing has; raises when it is missing."""
    locator = await locate_labeled(page, field)
    if locator is None:
        raise StructuralExtractionError(f"{field.name} not found", field=field.name)

    text = await read_text(locator, field.name, timeout_ms)
    if not text:
        raise StructuralExtractionError(f"{field.name} is empty", field=field.name)
    return text


async def wait_for_any(page: Page, selectors: tuple[str, ...], field: str, timeout_ms: float) -> None:
    """
    Wait until one of selectors is visible.

    Raises:
        StructuralExtractionError: If none appears within timeout_ms
    """
    combined = page.locator(selectors[0])
    for selector in selectors[1:]:
        combined = combined.or_(page.locator(selector))

    try:
        await combined.first.wait_for(state="visible", timeout=timeout_ms)
    except PlaywrightError as e:
        raise StructuralExtractionError(
            f"None of {list(selectors)} appeared: {e}", field=field
        ) from e
