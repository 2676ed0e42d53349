"""
Raw metrics collector backed by a headless Chromium driven by Playwright.
"""
from typing import Any, Dict, List, Tuple

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from extractor.interfaces.perf_source_interface import (
    IRawMetricsCollector,
    RawMetricsCollectionError,
)
from extractor.models.timing_models import RawMetrics

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-extensions",
]

# Round-trip through JSON so the entries arrive as plain objects
PERFORMANCE_ENTRIES_SNIPPET = "() => JSON.parse(JSON.stringify(window.performance.getEntries()))"


class PlaywrightCollector(IRawMetricsCollector):
    """Loads a page once and reports its engine metrics and performance timeline."""

    def __init__(self, accept_insecure_certs: bool = False, headless: bool = True,
                 wait_until: str = "load", navigation_timeout_seconds: float = 30.0):
        self.accept_insecure_certs = accept_insecure_certs
        self.headless = headless
        self.wait_until = wait_until
        self.navigation_timeout_seconds = navigation_timeout_seconds

    async def collect(self, url: str) -> RawMetrics:
        logger.info(f"Collecting raw metrics for: {url}")

        try:
            page_metrics, entries = await self._measure(url)
        except PlaywrightError as e:
            raise RawMetricsCollectionError(f"Failed to measure {url}: {e}", url=url, cause=e) from e

        logger.debug(f"Page metrics: {page_metrics}")

        raw = RawMetrics.from_browser(page_metrics, entries)
        logger.info(f"Collected {len(raw.entries)} performance entries from {url}")
        if raw.navigation_entry is None:
            logger.warning(f"No navigation entry reported for {url}")
        return raw

    async def _measure(self, url: str) -> Tuple[Dict[str, Any], List[Any]]:
        """Navigate and read metrics while the page is still open."""
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=self.headless, args=BROWSER_ARGS)
            try:
                context = await browser.new_context(ignore_https_errors=self.accept_insecure_certs)
                page = await context.new_page()

                cdp = await context.new_cdp_session(page)
                await cdp.send("Performance.enable")

                await page.goto(
                    url,
                    wait_until=self.wait_until,
                    timeout=self.navigation_timeout_seconds * 1000,
                )

                page_metrics = await cdp.send("Performance.getMetrics")
                entries = await page.evaluate(PERFORMANCE_ENTRIES_SNIPPET)
            finally:
                await browser.close()

        return page_metrics, entries
