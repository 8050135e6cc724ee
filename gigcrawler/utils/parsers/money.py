"""
Money parsing utilities.

Parse Japanese budget strings such as "1万5千円", "5千円未満" or
"5,000円 〜 10,000円" into yen ranges.
"""

import re

from gigcrawler.errors import ParseError
from gigcrawler.modules.projects import Range
from gigcrawler.utils.parsers.common import RANGE_SEPARATOR, compact, make_range

# Budget texts that mean "to be negotiated"
NEGOTIABLE_TEXTS = frozenset(
    {
        "見積り希望",  # Coconala
        "ワーカーと相談する",  # CrowdWorks
        "相談して決める",  # Lancers
        "ご相談",
    }
)

_AMOUNT_PATTERN = re.compile(
    r"^(?:時給)?"
    r"(?:(?P<man>\d[\d,]*)万)?"
    r"(?:(?P<sen>\d[\d,]*)千)?"
    r"(?P<rest>\d[\d,]*)?"
    r"円?(?:/時間?)?$"
)


def _to_int(digits: str | None) -> int:
    if not digits:
        return 0
    return int(digits.replace(",", ""))


def parse_amount(text: str, raw: str | None = None) -> int:
    """
    Parse a single yen amount.

    Args:
        text: Amount without range words (e.g., "1万5千円", "5,000円")
        raw: Original string to report on failure (defaults to text)

    Returns:
        Amount in yen

    Raises:
        ParseError: If text is not a recognized amount

    Examples:
        >>> parse_amount("1万5千円")
        15000
        >>> parse_amount("5万円")
        50000
        >>> parse_amount("1,000")
        1000
        >>> parse_amount("時給2,000円")
        2000
    """
    match = _AMOUNT_PATTERN.match(compact(text))
    if not match or not any(match.group("man", "sen", "rest")):
        raise ParseError("Unrecognized money amount", raw if raw is not None else text)

    man, sen, rest = match.group("man", "sen", "rest")
    return _to_int(man) * 10_000 + _to_int(sen) * 1_000 + _to_int(rest)


def parse_money(text: str | None) -> Range | None:
    """
    Parse a budget string into a yen range.

    Grammars, checked in order:
        1. "" or a negotiable sentinel -> None
        2. "X未満" -> (None, X); "X以上" -> (X, None)
        3. "A〜B" -> (A, B); either side may be empty
        4. single amount -> (v, v)

    Raises:
        ParseError: If text matches none of the grammars

    Examples:
        >>> parse_money("5000円")
        Range(min=5000, max=5000)
        >>> parse_money("5千円未満")
        Range(min=None, max=5000)
        >>> parse_money("5000円〜10000円")
        Range(min=5000, max=10000)
        >>> parse_money("見積り希望") is None
        True
    """
    raw = text or ""
    normalized = compact(raw)

    if not normalized or normalized in NEGOTIABLE_TEXTS:
        return None

    if normalized.endswith("未満"):
        return make_range(None, parse_amount(normalized[: -len("未満")], raw), raw)

    if normalized.endswith("以上"):
        return make_range(parse_amount(normalized[: -len("以上")], raw), None, raw)

    parts = RANGE_SEPARATOR.split(normalized)
    if len(parts) == 2:
        low_text, high_text = parts
        low = parse_amount(low_text, raw) if low_text else None
        high = parse_amount(high_text, raw) if high_text else None
        return make_range(low, high, raw)
    if len(parts) > 2:
        raise ParseError("Too many range separators in money", raw)

    return Range.point(parse_amount(normalized, raw))
