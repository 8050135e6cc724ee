"""
Shared Playwright browser.

One browser is launched per run and shared by every crawler; crawlers open
their own pages on it.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from loguru import logger
from playwright.async_api import Browser, async_playwright
from playwright.async_api import Error as PlaywrightError

from gigcrawler.errors import NavigationError

browser_log = logger.bind(module="Browser")


@asynccontextmanager
async def launch_browser(
    headless: bool = True, timeout_ms: float = 30000
) -> AsyncIterator[Browser]:
    """
    Launch Chromium and close it when the block exits.

    Args:
        headless: Run browser in headless mode
        timeout_ms: Max time to wait for the browser to start

    Raises:
        NavigationError: If the browser cannot be started
    """
    async with async_playwright() as playwright:
        browser_log.info("Starting browser...")
        try:
            browser = await playwright.chromium.launch(headless=headless, timeout=timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(f"Failed to launch browser: {e}") from e
        browser_log.info("Browser started")

        try:
            yield browser
        finally:
            await browser.close()
            browser_log.info("Browser closed")
