"""Build FetchResult objects from inline HTML, no network."""

from __future__ import annotations

from datetime import timedelta

import requests
from bs4 import BeautifulSoup

from seo_crawler.fetcher import FetchResult


def make_response(url: str, html: str, status_code: int = 200, elapsed: float = 0.25) -> requests.Response:
    resp = requests.Response()
    resp.url = url
    resp.status_code = status_code
    resp._content = html.encode("utf-8")
    resp.headers["Content-Type"] = "text/html; charset=utf-8"
    resp.elapsed = timedelta(seconds=elapsed)
    return resp


def make_fetch_result(url: str, html: str, **kwargs) -> FetchResult:
    resp = make_response(url, html, **kwargs)
    return FetchResult(url=url, response=resp, soup=BeautifulSoup(resp.content, "lxml"))


def http_error(url: str, status_code: int) -> requests.HTTPError:
    resp = make_response(url, "error", status_code=status_code)
    return requests.HTTPError(f"{status_code} Error for url: {url}", response=resp)


