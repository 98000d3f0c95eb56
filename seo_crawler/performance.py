"""Browser-rendered performance pass (Playwright, headless Chromium)."""

from __future__ import annotations

import json
import logging
import time

from playwright.sync_api import Browser, Request, sync_playwright

from seo_crawler.config import BROWSER_TIMEOUT_MS, MAX_IMAGES
from seo_crawler.models import ImageInfo, PerformanceRecord

logger = logging.getLogger(__name__)

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"]

FCP_SCRIPT = """() => {
    const entry = performance.getEntriesByType('paint')
        .find(e => e.name === 'first-contentful-paint');
    return entry ? entry.startTime : null;
}"""

DOM_SIZE_SCRIPT = "() => document.documentElement.outerHTML.length"

IMAGES_SCRIPT = """(limit) => Array.from(document.querySelectorAll('img'))
    .slice(0, limit)
    .map(img => ({
        src: img.src || '',
        has_alt: img.hasAttribute('alt'),
        alt_text: img.getAttribute('alt') || '',
    }))"""

JSON_LD_SCRIPT = """() => Array.from(
    document.querySelectorAll('script[type="application/ld+json"]')
).map(s => s.textContent || '')"""


def summarize_images(raw_images: list[dict]) -> list[ImageInfo]:
    return [ImageInfo(**img) for img in raw_images[:MAX_IMAGES]]


def summarize_structured_data(blocks: list[str]) -> tuple[int, int]:
    """Return (blocks found, blocks whose JSON does not parse)."""
    invalid = 0
    for block in blocks:
        try:
            json.loads(block)
        except (json.JSONDecodeError, TypeError):
            invalid += 1
    return len(blocks), invalid


def _collect(browser: Browser, url: str, timeout_ms: int) -> PerformanceRecord:
    page = browser.new_page()
    counts = {"total": 0, "failed": 0}

    def on_request(_request: Request) -> None:
        counts["total"] += 1

    def on_request_failed(_request: Request) -> None:
        counts["failed"] += 1

    page.on("request", on_request)
    page.on("requestfailed", on_request_failed)

    start = time.perf_counter()
    page.goto(url, wait_until="networkidle", timeout=timeout_ms)
    load_time = time.perf_counter() - start

    fcp_ms = page.evaluate(FCP_SCRIPT)
    dom_size = page.evaluate(DOM_SIZE_SCRIPT)
    images = summarize_images(page.evaluate(IMAGES_SCRIPT, MAX_IMAGES))
    blocks, invalid = summarize_structured_data(page.evaluate(JSON_LD_SCRIPT))

    return PerformanceRecord(
        url=url,
        load_time=load_time,
        fcp=fcp_ms / 1000 if fcp_ms is not None else None,
        page_size_kb=round(dom_size / 1024) if dom_size is not None else None,
        total_requests=counts["total"],
        failed_requests=counts["failed"],
        images=images,
        images_count=len(images),
        images_without_alt=sum(1 for img in images if not img.has_alt),
        structured_data_count=blocks,
        invalid_structured_data_count=invalid,
        has_structured_data=blocks > 0,
    )


def extract_performance(url: str, timeout_ms: int = BROWSER_TIMEOUT_MS) -> PerformanceRecord:
    """Render *url* in a fresh headless browser and measure it; never raises.

    The browser lives only for this call and is closed on every exit path.
    """
    try:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=True, args=LAUNCH_ARGS)
            try:
                return _collect(browser, url, timeout_ms)
            finally:
                browser.close()
    except Exception as e:
        logger.warning("Performance pass failed for %s: %s", url, e)
        return PerformanceRecord(url=url, error=str(e))
