"""URL canonicalization and crawl exclusion rules."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urldefrag, urljoin, urlparse

from seo_crawler.config import EXCLUDED_EXTENSIONS

logger = logging.getLogger(__name__)


def should_exclude(url: str) -> bool:
    """Return True for binary/document URLs and URLs carrying a query string."""
    try:
        parsed = urlparse(url)
    except (TypeError, ValueError):
        return True

    path = parsed.path.lower()
    if path.endswith(EXCLUDED_EXTENSIONS):
        logger.debug("Excluded (extension): %s", url)
        return True

    if parsed.query:
        logger.debug("Excluded (query string): %s", url)
        return True

    return False


def normalize_url(base: str, raw: str) -> Optional[str]:
    """Resolve *raw* against *base* and strip the fragment.

    Returns None when the URL cannot be resolved to an absolute http(s) URL
    or is excluded from the crawl.
    """
    if not raw:
        return None
    try:
        resolved, _fragment = urldefrag(urljoin(base, raw.strip()))
        parsed = urlparse(resolved)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            return None
        # Empty path and "/" are the same resource
        if not parsed.path:
            resolved = parsed._replace(path="/").geturl()
    except (TypeError, ValueError):
        return None

    if should_exclude(resolved):
        return None
    return resolved


def extract_domain(url: str) -> Optional[str]:
    try:
        hostname = urlparse(url).hostname
    except (TypeError, ValueError):
        return None
    return hostname.lower() if hostname else None


def is_internal(url: str, domain: str) -> bool:
    return extract_domain(url) == domain
