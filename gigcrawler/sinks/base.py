"""
Sink contract.
"""

from typing import Protocol

from gigcrawler.modules.projects import Project


class ProjectSink(Protocol):
    """Destination for a finished batch of projects."""

    async def save_many(self, projects: list[Project]) -> None:
        """Persist the whole batch. Called once per run, only on success."""
        ...
