"""
Crawl error types.

Every failure raised by the pipeline derives from CrawlError so callers can
tell crawler faults apart from programming errors. Context (platform,
listing id, field) is attached while the error propagates outward.
"""

from contextlib import contextmanager
from typing import Iterator

_CONTEXT_KEYS = ("platform", "external_id", "field", "url")


class CrawlError(Exception):
    """Base class for crawl pipeline errors."""

    def __init__(
        self,
        message: str,
        *,
        platform: str | None = None,
        external_id: str | None = None,
        field: str | None = None,
        url: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.platform = platform
        self.external_id = external_id
        self.field = field
        self.url = url

    def add_context(self, **context: str | None) -> None:
        """Fill in context attributes that are not already set."""
        for key, value in context.items():
            if key not in _CONTEXT_KEYS:
                raise ValueError(f"Unknown error context key: {key}")
            if getattr(self, key) is None and value is not None:
                setattr(self, key, value)

    @property
    def context(self) -> dict[str, str]:
        return {
            key: str(getattr(self, key))
            for key in _CONTEXT_KEYS
            if getattr(self, key) is not None
        }

    def __str__(self) -> str:
        context = self.context
        if not context:
            return self.message
        details = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{self.message} [{details}]"


class NavigationError(CrawlError):
    """Page failed to load or timed out."""


class StructuralExtractionError(CrawlError):
    """Expected DOM anchor is missing; the page markup changed."""


class ParseError(CrawlError):
    """Text did not match any recognized grammar."""

    def __init__(self, message: str, raw: str, **context: str | None):
        super().__init__(f"{message}: {raw!r}", **context)
        self.raw = raw


class ConfigurationError(CrawlError):
    """Unknown platform or malformed input, detected before crawling."""


@contextmanager
def error_context(**context: str | None) -> Iterator[None]:
    """
    Attach context to any CrawlError raised inside the block.

    Inner blocks win: context already set on the error is kept.

    Examples:
        >>> with error_context(external_id="123"):
        ...     with error_context(field="budget"):
        ...         parse_money(text)
    """
    try:
        yield
    except CrawlError as e:
        e.add_context(**context)
        raise
