"""
Working-time parsing utilities.

Parse expected workload strings such as "10時間/週" or "週20時間程度".
"""

import re

from gigcrawler.errors import ParseError
from gigcrawler.modules.projects import WorkingTime, WorkingTimeUnit
from gigcrawler.utils.parsers.common import UNSPECIFIED_TEXTS, compact

_UNITS = {
    "週": WorkingTimeUnit.WEEK,
    "月": WorkingTimeUnit.MONTH,
}

# "10", "10時間", "10〜20時間程度"; a range keeps its lower bound
_AMOUNT_PATTERN = re.compile(r"^(\d+)(?:[〜~]\d+)?(?:時間)?(?:程度|以上|以下|以内|未満)?$")
_PREFIXED_PATTERN = re.compile(r"^(週|月)(.+)$")


def _parse_amount(text: str, raw: str) -> int:
    match = _AMOUNT_PATTERN.match(text)
    if not match:
        raise ParseError("Unrecognized working time amount", raw)
    return int(match.group(1))


def parse_working_time(
    text: str | None,
    default_unit: WorkingTimeUnit | None = None,
) -> WorkingTime | None:
    """
    Parse a workload string.

    Args:
        text: Raw text in "<amount>/<unit>" or "<unit><amount>時間" form
        default_unit: Unit to use when the text has only an amount (the
            page label already names the unit, e.g. "稼働時間/週")

    Returns:
        WorkingTime, or None for empty/unspecified input

    Raises:
        ParseError: If the text matches no grammar

    Examples:
        >>> parse_working_time("10/週")
        WorkingTime(unit=<WorkingTimeUnit.WEEK: 'week'>, amount=10)
        >>> parse_working_time("月80時間")
        WorkingTime(unit=<WorkingTimeUnit.MONTH: 'month'>, amount=80)
        >>> parse_working_time("10〜20時間", default_unit=WorkingTimeUnit.WEEK)
        WorkingTime(unit=<WorkingTimeUnit.WEEK: 'week'>, amount=10)
    """
    raw = text or ""
    normalized = compact(raw)

    if not normalized or normalized in UNSPECIFIED_TEXTS:
        return None

    if "/" in normalized:
        amount_text, _, unit_text = normalized.partition("/")
        unit = _UNITS.get(unit_text)
        if unit is None:
            raise ParseError("Unrecognized working time unit", raw)
        return WorkingTime(unit=unit, amount=_parse_amount(amount_text, raw))

    prefixed = _PREFIXED_PATTERN.match(normalized)
    if prefixed:
        unit_text, amount_text = prefixed.groups()
        return WorkingTime(unit=_UNITS[unit_text], amount=_parse_amount(amount_text, raw))

    if default_unit is None:
        raise ParseError("Working time has no unit", raw)
    return WorkingTime(unit=default_unit, amount=_parse_amount(normalized, raw))
