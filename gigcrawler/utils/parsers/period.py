"""
Engagement period parsing utilities.

Periods are normalized to weeks, counting one month as four weeks.
"""

import re

from gigcrawler.errors import ParseError
from gigcrawler.modules.projects import Range
from gigcrawler.utils.parsers.common import (
    RANGE_SEPARATOR,
    UNSPECIFIED_TEXTS,
    compact,
    make_range,
)

WEEKS_PER_MONTH = 4

_VALUE_PATTERN = re.compile(r"^(\d+)(週間|週|[ヶヵかカケ箇]月)?$")


def _split_value(text: str, raw: str) -> tuple[int, int | None]:
    """Return (count, weeks per unit); the factor is None when no unit is written."""
    match = _VALUE_PATTERN.match(text)
    if not match:
        raise ParseError("Unrecognized period", raw)

    count, unit = match.groups()
    if unit is None:
        return int(count), None
    factor = 1 if unit.startswith("週") else WEEKS_PER_MONTH
    return int(count), factor


def _to_weeks(text: str, raw: str) -> int:
    count, factor = _split_value(text, raw)
    if factor is None:
        raise ParseError("Period has no unit", raw)
    return count * factor


def parse_period(text: str | None) -> Range | None:
    """
    Parse an engagement period into a range of weeks.

    Examples:
        >>> parse_period("3ヶ月")
        Range(min=12, max=12)
        >>> parse_period("2週間以上")
        Range(min=2, max=None)
        >>> parse_period("1ヶ月以内")
        Range(min=None, max=4)
        >>> parse_period("1〜3ヶ月")
        Range(min=4, max=12)
        >>> parse_period("1週間〜1ヶ月")
        Range(min=1, max=4)
        >>> parse_period("不問") is None
        True
    """
    raw = text or ""
    normalized = compact(raw)

    if not normalized or normalized in UNSPECIFIED_TEXTS:
        return None

    if normalized.endswith("以上"):
        return make_range(_to_weeks(normalized[: -len("以上")], raw), None, raw)

    for suffix in ("以内", "未満"):
        if normalized.endswith(suffix):
            return make_range(None, _to_weeks(normalized[: -len(suffix)], raw), raw)

    body = normalized.removesuffix("程度")

    parts = RANGE_SEPARATOR.split(body)
    if len(parts) == 2:
        high_count, high_factor = _split_value(parts[1], raw)
        if high_factor is None:
            raise ParseError("Period has no unit", raw)
        low_count, low_factor = _split_value(parts[0], raw)
        # "1〜3ヶ月": the left side borrows the right side's unit
        low = low_count * (low_factor or high_factor)
        return make_range(low, high_count * high_factor, raw)
    if len(parts) > 2:
        raise ParseError("Too many range separators in period", raw)

    return Range.point(_to_weeks(body, raw))
