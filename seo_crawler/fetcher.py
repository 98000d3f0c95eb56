import requests
from bs4 import BeautifulSoup

from seo_crawler.config import ACCEPT_HEADERS, MAX_REDIRECTS, REQUEST_TIMEOUT, USER_AGENT
from seo_crawler.urls import extract_domain


class FetchResult:
    def __init__(self, url: str, response: requests.Response, soup: BeautifulSoup):
        self.url = url
        self.response = response
        self.soup = soup
        self.status_code = response.status_code
        self.content_type = response.headers.get("Content-Type", "")
        self.elapsed = response.elapsed.total_seconds()
        self.page_size_kb = len(response.content) / 1024
        self.domain = extract_domain(url)


def fetch_page(url: str, timeout: float = REQUEST_TIMEOUT) -> FetchResult:
    headers = {"User-Agent": USER_AGENT, **ACCEPT_HEADERS}
    with requests.Session() as session:
        session.max_redirects = MAX_REDIRECTS
        resp = session.get(url, headers=headers, timeout=timeout, allow_redirects=True)
    resp.raise_for_status()
    soup = BeautifulSoup(resp.content, "lxml")
    return FetchResult(url=url, response=resp, soup=soup)
