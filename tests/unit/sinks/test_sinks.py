"""
Unit tests for gigcrawler/sinks/
"""

import asyncio
import io
import json
from datetime import datetime, timezone

from gigcrawler.modules.projects import Platform, ProjectHidden
from gigcrawler.sinks import JsonFileSink, StdoutSink, batch_filename, read_batch
from gigcrawler.utils.parsers import JST


def hidden_batch() -> list[ProjectHidden]:
    return [
        ProjectHidden(platform=Platform.LANCERS, external_id="1"),
        ProjectHidden(platform=Platform.LANCERS, external_id="2"),
    ]


class TestBatchFilename:
    """Tests for batch_filename function."""

    def test_format(self):
        now = datetime(2025, 1, 15, 3, 4, 5, 678000, tzinfo=timezone.utc)
        assert batch_filename(Platform.LANCERS, now) == "lancers_batch_2025-01-15T03-04-05-678Z.json"

    def test_converts_to_utc(self):
        now = datetime(2025, 1, 15, 9, 0, 0, tzinfo=JST)
        assert batch_filename(Platform.COCONALA, now) == "coconala_batch_2025-01-15T00-00-00-000Z.json"


class TestJsonFileSink:
    """Tests for JsonFileSink."""

    def test_writes_batch(self, tmp_path):
        sink = JsonFileSink(tmp_path / "outputs", Platform.LANCERS)

        asyncio.run(sink.save_many(hidden_batch()))

        files = list((tmp_path / "outputs").iterdir())
        assert files == [sink.last_path]
        assert files[0].name.startswith("lancers_batch_")
        data = json.loads(files[0].read_text(encoding="utf-8"))
        assert data == [
            {"platform": "lancers", "externalId": "1", "hidden": True},
            {"platform": "lancers", "externalId": "2", "hidden": True},
        ]

    def test_read_back(self, tmp_path):
        sink = JsonFileSink(tmp_path, Platform.LANCERS)

        asyncio.run(sink.save_many(hidden_batch()))

        assert read_batch(sink.last_path) == hidden_batch()

    def test_no_temp_files_left(self, tmp_path):
        sink = JsonFileSink(tmp_path, Platform.LANCERS)

        asyncio.run(sink.save_many([]))

        assert [p.suffix for p in tmp_path.iterdir()] == [".json"]


class TestStdoutSink:
    """Tests for StdoutSink."""

    def test_prints_json(self):
        stream = io.StringIO()

        asyncio.run(StdoutSink(stream).save_many(hidden_batch()))

        assert json.loads(stream.getvalue())[1]["externalId"] == "2"
