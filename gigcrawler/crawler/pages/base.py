"""
Page object capabilities.

Each platform provides a list page and a detail page implementing these
protocols. Getters return raw trimmed text; conversion happens in the
crawler via gigcrawler.utils.parsers.
"""

from typing import Protocol


class ListPage(Protocol):
    """Search-results page."""

    async def wait_for_results(self) -> None:
        """Block until either results or the no-results sentinel render."""
        ...

    async def is_empty(self) -> bool:
        """True only when the page explicitly reports zero results."""
        ...

    async def get_project_ids(self) -> list[str]: ...


class DetailPage(Protocol):
    """
    Listing detail page.

    Optional getters return "" when the field is not rendered for this
    listing. Mandatory getters raise StructuralExtractionError.
    """

    async def wait_until_ready(self) -> None: ...

    async def is_hidden(self) -> bool: ...

    async def get_title(self) -> str: ...

    async def get_category(self) -> str: ...

    async def is_fixed_wage(self) -> bool: ...

    async def is_recruiting(self) -> bool: ...

    async def get_budget_text(self) -> str: ...

    async def get_hourly_budget_text(self) -> str: ...

    async def get_delivery_date_text(self) -> str: ...

    async def get_recruiting_limit_text(self) -> str: ...

    async def get_publication_date_text(self) -> str: ...

    async def get_working_time_text(self) -> str: ...

    async def get_period_text(self) -> str: ...

    async def get_description(self) -> str:
        """Description as an HTML fragment."""
        ...
