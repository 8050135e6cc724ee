"""
Crawling Job Module.

Runs one crawl: list pages -> listing ids -> details -> sink.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from loguru import logger

from gigcrawler.crawler.base import Crawler
from gigcrawler.modules.projects import Project
from gigcrawler.sinks.base import ProjectSink

T = TypeVar("T")
R = TypeVar("R")

job_log = logger.bind(module="Crawling")


@dataclass(frozen=True)
class CrawlResult:
    """Summary of a finished crawl."""

    list_pages: int
    project_ids: int
    projects: int
    hidden: int


class CrawlingUsecase:
    """
    One crawl run for a single platform.

    Workflow:
    1. Fetch every list page (bounded concurrency), collect listing ids
    2. Flatten and de-duplicate ids, keeping first-seen order
    3. Fetch every detail page (bounded concurrency)
    4. Hand the whole batch to the sink

    Any failure aborts the run after in-flight tasks settle; the sink is
    only called when every list and detail fetch succeeded.
    """

    def __init__(
        self,
        crawler: Crawler,
        list_urls: list[str],
        sink: ProjectSink,
        concurrency: int = 10,
        request_delay: float = 0.5,
    ):
        """
        Initialize CrawlingUsecase.

        Args:
            crawler: Platform crawler
            list_urls: Search-results URLs to crawl
            sink: Destination for the finished batch
            concurrency: Max in-flight fetches per stage
            request_delay: Pause before each fetch, in seconds
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.crawler = crawler
        self.list_urls = list_urls
        self.sink = sink
        self.concurrency = concurrency
        self.request_delay = request_delay

    async def _bounded_map(
        self,
        stage: str,
        items: list[T],
        func: Callable[[T], Awaitable[R]],
    ) -> list[R]:
        """
        Run func over items with at most `concurrency` calls in flight.

        Results keep input order. Failures do not cancel siblings; once all
        tasks settle, every failure is logged and the first one is raised.
        """
        semaphore = asyncio.Semaphore(self.concurrency)
        progress = {"completed": 0, "total": len(items)}

        async def run(item: T) -> R:
            async with semaphore:
                if self.request_delay > 0:
                    await asyncio.sleep(self.request_delay)
                result = await func(item)
                progress["completed"] += 1
                job_log.debug(
                    f"[{stage}] {progress['completed']}/{progress['total']}: {item}"
                )
                return result

        results = await asyncio.gather(*(run(item) for item in items), return_exceptions=True)

        failures = [r for r in results if isinstance(r, BaseException)]
        for failure in failures:
            job_log.error(f"[{stage}] Task failed: {failure}")
        if failures:
            job_log.error(f"[{stage}] {len(failures)}/{len(items)} tasks failed, aborting")
            raise failures[0]

        return results

    async def execute(self) -> CrawlResult:
        """
        Run the crawl and save the batch.

        Returns:
            CrawlResult summary

        Raises:
            CrawlError: First failure from any list or detail fetch
        """
        platform = self.crawler.platform.value
        job_log.info(f"Crawling {len(self.list_urls)} list pages on {platform}")

        id_lists = await self._bounded_map("list", self.list_urls, self.crawler.list_project_ids)

        seen: dict[str, None] = {}
        for ids in id_lists:
            for external_id in ids:
                seen.setdefault(external_id, None)
        project_ids = list(seen)

        total = sum(len(ids) for ids in id_lists)
        if total != len(project_ids):
            job_log.info(f"Dropped {total - len(project_ids)} duplicate ids")
        job_log.info(f"Fetching {len(project_ids)} detail pages")

        projects: list[Project] = await self._bounded_map(
            "detail", project_ids, self.crawler.detail
        )

        await self.sink.save_many(projects)

        result = CrawlResult(
            list_pages=len(self.list_urls),
            project_ids=len(project_ids),
            projects=len(projects),
            hidden=sum(1 for p in projects if p.hidden),
        )
        job_log.info(
            f"Crawl finished: {result.projects} projects "
            f"({result.hidden} hidden) from {result.list_pages} list pages"
        )
        return result
