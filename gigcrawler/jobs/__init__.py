"""
Jobs module.
"""

from gigcrawler.jobs.crawling import CrawlingUsecase, CrawlResult

__all__ = ["CrawlingUsecase", "CrawlResult"]
