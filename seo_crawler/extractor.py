"""Structural SEO facts extracted from a fetched page."""

from __future__ import annotations

import logging
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup

from seo_crawler.config import DESCRIPTION_MAX_LENGTH, MAX_H2_TEXTS, TITLE_MAX_LENGTH
from seo_crawler.fetcher import FetchResult, fetch_page
from seo_crawler.models import LinkInfo, PageRecord
from seo_crawler.urls import extract_domain, is_internal, normalize_url

logger = logging.getLogger(__name__)

SKIPPED_SCHEMES = ("javascript:", "mailto:", "tel:", "data:")


def _text(tag) -> str:
    return tag.get_text(strip=True) if tag else ""


def _anchor_text(a) -> str:
    return a.get_text(" ", strip=True) or (a.get("title") or "").strip()


def _is_skipped_href(href: str) -> bool:
    return not href or href.startswith("#") or href.lower().startswith(SKIPPED_SCHEMES)


def _extract_links(
    soup: BeautifulSoup, page_url: str, base_domain: str
) -> tuple[list[LinkInfo], list[str], int, int, list[str]]:
    """Walk every anchor of the page.

    Internal links are deduplicated by canonical URL; external links are
    counted on every occurrence. Returns (links, internal targets,
    internal count, external count, excluded hrefs).
    """
    links: list[LinkInfo] = []
    internal_targets: list[str] = []
    seen: set[str] = set()
    excluded: list[str] = []
    internal_count = 0
    external_count = 0

    for a in soup.find_all("a", href=True):
        href = a["href"].strip()
        if _is_skipped_href(href):
            continue

        normalized = normalize_url(page_url, href)
        if normalized is None:
            # Unparseable or excluded, keep the raw href for reporting
            if urlparse(urljoin(page_url, href)).scheme in ("http", "https"):
                excluded.append(href)
            continue

        if is_internal(normalized, base_domain):
            internal_count += 1
            if normalized not in seen:
                seen.add(normalized)
                internal_targets.append(normalized)
                links.append(LinkInfo(url=normalized, anchor_text=_anchor_text(a), is_internal=True))
        else:
            external_count += 1
            links.append(LinkInfo(url=normalized, anchor_text=_anchor_text(a), is_internal=False))

    return links, internal_targets, internal_count, external_count, excluded


def extract_page(fetched: FetchResult, base_domain: str) -> tuple[PageRecord, list[str], list[str]]:
    """Build the PageRecord of a fetched page.

    Returns the record, the internal URLs worth following (in discovery
    order) and the hrefs that were excluded from the crawl.
    """
    soup = fetched.soup

    title = _text(soup.find("title"))
    desc_tag = soup.find("meta", attrs={"name": "description"})
    description = (desc_tag.get("content") or "").strip() if desc_tag else ""

    h1s = soup.find_all("h1")
    h2s = soup.find_all("h2")

    canonical_tag = soup.find("link", rel="canonical")
    canonical = (canonical_tag.get("href") or "").strip() if canonical_tag else ""
    has_hreflang = soup.find("link", rel="alternate", hreflang=True) is not None

    links, internal_targets, internal_count, external_count, excluded = _extract_links(
        soup, fetched.url, base_domain
    )

    record = PageRecord(
        url=fetched.url,
        status_code=fetched.status_code,
        content_type=fetched.content_type,
        load_time=fetched.elapsed,
        title=title,
        title_length=len(title),
        meta_description=description,
        meta_description_length=len(description),
        h1_count=len(h1s),
        h1_text=_text(h1s[0]) if h1s else "",
        h2_count=len(h2s),
        h2_texts=[_text(h2) for h2 in h2s[:MAX_H2_TEXTS]],
        canonical_url=canonical,
        has_hreflang=has_hreflang,
        internal_links_count=internal_count,
        external_links_count=external_count,
        links=links,
        missing_title=len(title) == 0,
        missing_description=len(description) == 0,
        missing_h1=len(h1s) == 0,
        has_multiple_h1=len(h1s) > 1,
        has_too_long_title=len(title) > TITLE_MAX_LENGTH,
        has_too_long_description=len(description) > DESCRIPTION_MAX_LENGTH,
    )
    return record, internal_targets, excluded


def error_status(exc: Exception) -> int:
    """HTTP status of a failed fetch, or 500 when no response was received."""
    if isinstance(exc, requests.RequestException) and exc.response is not None:
        return exc.response.status_code
    return 500


def extract_basic(url: str) -> PageRecord:
    """Fetch *url* and extract its structural signals; never raises."""
    try:
        fetched = fetch_page(url)
        record, _, _ = extract_page(fetched, extract_domain(url) or "")
        return record
    except Exception as e:
        logger.warning("Basic extraction failed for %s: %s", url, e)
        return PageRecord.failed(url, str(e), status_code=error_status(e))
