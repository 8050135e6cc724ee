"""
Sinks module.

Destinations for crawled project batches.
"""

from gigcrawler.sinks.base import ProjectSink
from gigcrawler.sinks.json_file import JsonFileSink, batch_filename, read_batch
from gigcrawler.sinks.stdout import StdoutSink

__all__ = [
    "JsonFileSink",
    "ProjectSink",
    "StdoutSink",
    "batch_filename",
    "read_batch",
]
