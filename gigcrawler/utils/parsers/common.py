"""
Shared helpers for Japanese text normalizers.
"""

import re
import unicodedata

from gigcrawler.errors import ParseError
from gigcrawler.modules.projects import Range

# 〜 (WAVE DASH) survives NFKC; ～ (FULLWIDTH TILDE) becomes "~"
RANGE_SEPARATOR = re.compile(r"[〜~]")

# Values meaning "no requirement", treated as absent
UNSPECIFIED_TEXTS = frozenset({"不問"})

_WHITESPACE = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    """
    NFKC-normalize and strip a raw string.

    Full-width digits and symbols become ASCII ("５千円" -> "5千円").

    Examples:
        >>> normalize("  ５，０００円 ")
        '5,000円'
        >>> normalize(None)
        ''
    """
    if not text:
        return ""
    return unicodedata.normalize("NFKC", text).strip()


def compact(text: str | None) -> str:
    """
    Normalize and drop all whitespace.

    Examples:
        >>> compact("5,000 円 〜 10,000 円")
        '5,000円〜10,000円'
    """
    return _WHITESPACE.sub("", normalize(text))


def make_range(low: int | None, high: int | None, raw: str) -> Range:
    """Build a Range, raising ParseError instead of producing min > max."""
    if low is None and high is None:
        raise ParseError("Range has no bounds", raw)
    if low is not None and high is not None and low > high:
        raise ParseError("Range lower bound exceeds upper bound", raw)
    return Range(min=low, max=high)
