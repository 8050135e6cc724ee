"""
Unit tests for gigcrawler/errors.py
"""

import pytest

from gigcrawler.errors import CrawlError, ParseError, StructuralExtractionError, error_context


class TestCrawlError:
    """Tests for CrawlError context handling."""

    def test_str_without_context(self):
        assert str(CrawlError("boom")) == "boom"

    def test_str_with_context(self):
        error = CrawlError("boom", platform="lancers", external_id="1")
        assert str(error) == "boom [platform=lancers external_id=1]"

    def test_add_context_keeps_existing(self):
        error = CrawlError("boom", field="budget")
        error.add_context(field="title", external_id="9")
        assert error.field == "budget"
        assert error.external_id == "9"

    def test_add_context_unknown_key(self):
        with pytest.raises(ValueError):
            CrawlError("boom").add_context(region="tokyo")

    def test_parse_error_raw(self):
        error = ParseError("Unrecognized date", "令和7年")
        assert error.raw == "令和7年"
        assert error.message == "Unrecognized date: '令和7年'"


class TestErrorContext:
    """Tests for error_context context manager."""

    def test_nested_context(self):
        with pytest.raises(ParseError) as exc_info:
            with error_context(platform="coconala", external_id="1"):
                with error_context(field="budget"):
                    raise ParseError("Unrecognized money amount", "?")

        assert exc_info.value.context == {
            "platform": "coconala",
            "external_id": "1",
            "field": "budget",
        }

    def test_inner_wins(self):
        with pytest.raises(StructuralExtractionError) as exc_info:
            with error_context(field="outer"):
                raise StructuralExtractionError("missing", field="inner")

        assert exc_info.value.field == "inner"

    def test_other_exceptions_untouched(self):
        with pytest.raises(KeyError):
            with error_context(platform="lancers"):
                raise KeyError("x")
