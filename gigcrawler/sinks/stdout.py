"""
Stdout sink, for dry runs and piping into other tools.
"""

import sys
from typing import TextIO

from gigcrawler.modules.projects import Project, dump_projects


class StdoutSink:
    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    async def save_many(self, projects: list[Project]) -> None:
        stream = self.stream or sys.stdout
        stream.write(dump_projects(projects).decode("utf-8"))
        stream.write("\n")
        stream.flush()
