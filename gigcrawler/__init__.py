"""Crawl and normalize freelance-job listings from Japanese marketplaces."""

__version__ = "0.1.0"
