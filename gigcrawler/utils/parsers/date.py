"""
Date parsing utilities.

Dates on the marketplaces are written as "2025年1月1日" and are local to
Japan, so parsed values are midnight at a fixed UTC+9 offset.
"""

import re
from datetime import datetime, timedelta, timezone

from gigcrawler.errors import ParseError
from gigcrawler.utils.parsers.common import compact, normalize

JST = timezone(timedelta(hours=9), "JST")

_DATE_PATTERN = re.compile(r"(?<!\d)(\d{4})年(\d{1,2})月(\d{1,2})日")
_DAY_COUNT_PATTERN = re.compile(r"(\d+)日")


def parse_jp_date(text: str | None) -> datetime | None:
    """
    Parse a Japanese date string.

    Args:
        text: String containing "YYYY年M月D日" (surrounding text is ignored,
            e.g. "掲載日 2025年1月1日" or "2025年01月01日 12:00")

    Returns:
        Midnight of that day in UTC+9, or None for empty input

    Raises:
        ParseError: If non-empty text has no date or the date does not exist

    Examples:
        >>> parse_jp_date("2025年1月1日")
        datetime.datetime(2025, 1, 1, 0, 0, tzinfo=datetime.timezone(datetime.timedelta(seconds=32400), 'JST'))
        >>> parse_jp_date("") is None
        True
    """
    normalized = normalize(text)
    if not normalized:
        return None

    match = _DATE_PATTERN.search(normalized)
    if not match:
        raise ParseError("Unrecognized date", text or "")

    year, month, day = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, tzinfo=JST)
    except ValueError as e:
        raise ParseError("Invalid calendar date", text or "") from e


def parse_day_count(text: str | None) -> int:
    """
    Parse a day count such as "5日間" or "あと5日".

    Raises:
        ParseError: If no day count is present

    Examples:
        >>> parse_day_count("14日間")
        14
    """
    match = _DAY_COUNT_PATTERN.search(compact(text))
    if not match:
        raise ParseError("Unrecognized day count", text or "")
    return int(match.group(1))


def add_days(date: datetime, days: int) -> datetime:
    """Shift a date by whole days, keeping its offset."""
    return date + timedelta(days=days)
