"""
Parser utilities for Japanese marketplace text.

Pure functions converting raw strings into typed values.
"""

from gigcrawler.utils.parsers.date import JST, add_days, parse_day_count, parse_jp_date
from gigcrawler.utils.parsers.money import NEGOTIABLE_TEXTS, parse_amount, parse_money
from gigcrawler.utils.parsers.period import WEEKS_PER_MONTH, parse_period
from gigcrawler.utils.parsers.working_time import parse_working_time

__all__ = [
    "JST",
    "add_days",
    "parse_day_count",
    "parse_jp_date",
    "NEGOTIABLE_TEXTS",
    "parse_amount",
    "parse_money",
    "WEEKS_PER_MONTH",
    "parse_period",
    "parse_working_time",
]
