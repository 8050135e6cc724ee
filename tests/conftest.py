"""
Shared pytest fixtures for all tests.
"""

import pytest

from config.settings import get_settings


# ============================================================
# Settings Fixtures
# ============================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep the developer's environment out of settings-driven tests."""
    for name in (
        "LOG_LEVEL",
        "CRAWLER_CONCURRENCY",
        "CRAWLER_REQUEST_DELAY",
        "CRAWLER_NAVIGATION_TIMEOUT_MS",
        "CRAWLER_WAIT_TIMEOUT_MS",
        "CRAWLER_BROWSER_LAUNCH_TIMEOUT_MS",
        "CRAWLER_HEADLESS",
        "CRAWLER_OUTPUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
