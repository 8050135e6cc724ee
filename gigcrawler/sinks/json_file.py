"""
JSON file sink.

Writes one file per batch: <output_dir>/<platform>_batch_<timestamp>.json
"""

import asyncio
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from gigcrawler.modules.projects import Platform, Project, dump_projects, load_projects

sink_log = logger.bind(module="JsonSink")


def batch_filename(platform: Platform, now: datetime | None = None) -> str:
    """
    Build the batch file name for platform.

    The timestamp is UTC ISO-8601 with ":" and "." replaced by "-".

    Examples:
        >>> batch_filename(Platform.LANCERS, datetime(2025, 1, 15, 3, 4, 5, 678000, timezone.utc))
        'lancers_batch_2025-01-15T03-04-05-678Z.json'
    """
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    timestamp = now.strftime("%Y-%m-%dT%H-%M-%S") + f"-{now.microsecond // 1000:03d}Z"
    return f"{platform.value}_batch_{timestamp}.json"


def write_atomic(path: Path, data: bytes) -> None:
    """Write data to path through a temp file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_batch(path: Path | str) -> list[Project]:
    """Load a batch file written by JsonFileSink."""
    return load_projects(Path(path).read_bytes())


class JsonFileSink:
    """Saves each batch as a pretty-printed JSON array."""

    def __init__(self, output_dir: Path | str, platform: Platform):
        self.output_dir = Path(output_dir)
        self.platform = platform
        self.last_path: Path | None = None

    async def save_many(self, projects: list[Project]) -> None:
        path = self.output_dir / batch_filename(self.platform)
        data = dump_projects(projects)

        await asyncio.to_thread(write_atomic, path, data)

        self.last_path = path
        sink_log.info(f"Saved {len(projects)} projects to {path}")
