from __future__ import annotations

import pytest

from seo_crawler.fetcher import FetchResult
from tests.helpers import http_error, make_fetch_result


@pytest.fixture()
def site():
    """Fake site: maps URL -> HTML (or an exception) for a patched fetch_page."""
    pages: dict[str, object] = {}

    def fetch(url: str, timeout: float = 0) -> FetchResult:
        page = pages.get(url)
        if page is None:
            raise http_error(url, 404)
        if isinstance(page, Exception):
            raise page
        return make_fetch_result(url, page)

    fetch.pages = pages
    return fetch
