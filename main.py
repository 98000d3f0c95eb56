import logging

from fastapi import FastAPI, HTTPException

from seo_crawler.analyzer import analyze_page, analyze_site
from seo_crawler.config import CRAWL_HARD_CAP, EXCLUDED_URLS_LIMIT, LOG_LEVEL
from seo_crawler.crawler import crawl_site
from seo_crawler.errors import SeoCrawlerError
from seo_crawler.models import (
    AnalyzedPageRecord,
    AnalyzePageRequest,
    AnalyzeSiteRequest,
    AnalyzeSiteResponse,
    CrawlRequest,
    CrawlResponse,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="SEO Crawler", version="1.0.0")


@app.get("/api/health")
def health():
    return {"status": "ok"}


# Plain `def` handlers run in FastAPI's threadpool; the Playwright sync API
# refuses to run on the event loop thread.

@app.post("/api/crawl", response_model=CrawlResponse)
def run_crawl(req: CrawlRequest):
    url = str(req.url)
    max_pages = min(req.max_pages, CRAWL_HARD_CAP)

    try:
        result = crawl_site(url, max_pages=max_pages)
    except SeoCrawlerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CrawlResponse(
        base_url=result.base_url,
        pages=result.pages,
        page_count=result.page_count,
        excluded_count=result.excluded_count,
        excluded_urls=result.excluded_urls[:EXCLUDED_URLS_LIMIT],
        total_time=result.total_time,
    )


@app.post("/api/analyze-page", response_model=AnalyzedPageRecord)
def run_analyze_page(req: AnalyzePageRequest):
    return analyze_page(str(req.url), full_analysis=req.full_analysis)


@app.post("/api/analyze-site", response_model=AnalyzeSiteResponse)
def run_analyze_site(req: AnalyzeSiteRequest):
    try:
        analysis = analyze_site(req.urls, full_analysis=req.full_analysis)
    except SeoCrawlerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AnalyzeSiteResponse(
        results=analysis.results,
        stats=analysis.stats,
        total_pages=analysis.total_pages,
        total_time=analysis.total_time,
    )
