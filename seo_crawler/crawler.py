"""Depth-first site crawler using requests + BeautifulSoup."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterator

from seo_crawler.config import CRAWL_MAX_PAGES
from seo_crawler.errors import InvalidSeedError
from seo_crawler.extractor import error_status, extract_page
from seo_crawler.fetcher import fetch_page
from seo_crawler.models import PageRecord
from seo_crawler.urls import extract_domain, normalize_url

logger = logging.getLogger(__name__)


@dataclass
class CrawlState:
    """Visited/excluded bookkeeping owned by a single crawl run."""

    max_pages: int
    visited: set[str] = field(default_factory=set)
    # Insertion-ordered so exclusions are reported in discovery order
    excluded: dict[str, None] = field(default_factory=dict)

    @property
    def exhausted(self) -> bool:
        return len(self.visited) >= self.max_pages

    def try_visit(self, url: str) -> bool:
        """Mark *url* visited; False when already seen or over budget."""
        if self.exhausted or url in self.visited:
            return False
        self.visited.add(url)
        return True

    def exclude(self, url: str) -> None:
        if url:
            self.excluded.setdefault(url, None)


@dataclass
class CrawlResult:
    base_url: str
    pages: list[PageRecord] = field(default_factory=list)
    excluded_urls: list[str] = field(default_factory=list)
    total_time: float = 0.0

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def excluded_count(self) -> int:
        return len(self.excluded_urls)


def _visit(url: str, domain: str, state: CrawlState) -> tuple[PageRecord, list[str]]:
    """Fetch one page; failures become an error record with no children."""
    logger.info("Crawling: %s [%d/%d]", url, len(state.visited), state.max_pages)
    try:
        fetched = fetch_page(url)
        record, internal_links, excluded = extract_page(fetched, domain)
    except Exception as e:
        logger.warning("Error crawling %s: %s", url, e)
        return PageRecord.failed(url, str(e), status_code=error_status(e)), []

    for href in excluded:
        state.exclude(href)
    return record, [link for link in internal_links if link not in state.visited]


def crawl_site(seed_url: str, max_pages: int = CRAWL_MAX_PAGES) -> CrawlResult:
    """Crawl the internal link graph of *seed_url*, at most *max_pages* pages.

    Pages come back in depth-first pre-order of first discovery: a page is
    followed by the whole subtree reached through its first unvisited link,
    then the next one. Traversal is sequential; an explicit stack of link
    iterators stands in for recursion.
    """
    base_url = normalize_url(seed_url, seed_url)
    if base_url is None:
        raise InvalidSeedError(seed_url, "may contain a query string or point to a non-HTML file")
    domain = extract_domain(base_url)
    if not domain:
        raise InvalidSeedError(seed_url, "no hostname")

    logger.info("Starting crawl of %s (max %d pages)", domain, max_pages)
    start = time.perf_counter()
    state = CrawlState(max_pages=max_pages)
    pages: list[PageRecord] = []

    stack: list[Iterator[str]] = [iter([base_url])]
    while stack and not state.exhausted:
        candidate = next(stack[-1], None)
        if candidate is None:
            stack.pop()
            continue

        canonical = normalize_url(candidate, candidate)
        if canonical is None:
            state.exclude(candidate)
            continue
        if not state.try_visit(canonical):
            continue

        record, children = _visit(canonical, domain, state)
        pages.append(record)
        if children:
            stack.append(iter(children))

    total_time = time.perf_counter() - start
    logger.info(
        "Crawl of %s finished: %d page(s), %d excluded, %.2fs",
        domain, len(pages), len(state.excluded), total_time,
    )
    return CrawlResult(
        base_url=base_url,
        pages=pages,
        excluded_urls=list(state.excluded),
        total_time=total_time,
    )
