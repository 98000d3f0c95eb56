"""Batch page analysis: basic extraction, optional browser pass, scoring."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Union

from seo_crawler.config import ANALYZE_MAX_PAGES, BATCH_SIZE
from seo_crawler.errors import EmptyBatchError
from seo_crawler.extractor import extract_basic
from seo_crawler.models import (
    AnalyzedPageRecord,
    PerformanceRecord,
    SiteStatistics,
    StatisticsError,
)
from seo_crawler.performance import extract_performance
from seo_crawler.scoring import score_page
from seo_crawler.statistics import aggregate

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

PERFORMANCE_FIELDS = (
    "load_time", "fcp", "page_size_kb", "total_requests", "failed_requests",
    "images_count", "images_without_alt", "has_structured_data",
)


@dataclass
class SiteAnalysis:
    results: list[AnalyzedPageRecord]
    stats: Union[SiteStatistics, StatisticsError]
    total_time: float

    @property
    def total_pages(self) -> int:
        return len(self.results)


def analyze_page(url: str, full_analysis: bool = True) -> AnalyzedPageRecord:
    """Analyze and score one page. A failed basic pass skips everything else."""
    basic = extract_basic(url)
    if basic.error:
        return AnalyzedPageRecord(**basic.model_dump())

    perf: Optional[PerformanceRecord] = None
    performance_error = None
    if full_analysis:
        perf = extract_performance(url)
        if perf.error:
            performance_error = perf.error
            perf = None

    result = score_page(basic, perf)
    fields = basic.model_dump()
    if perf is not None:
        fields.update(perf.model_dump(include=set(PERFORMANCE_FIELDS)))

    return AnalyzedPageRecord(
        **fields,
        performance_error=performance_error,
        seo_score=result.score,
        seo_label=result.label,
        seo_penalties=result.penalties,
        score_details=result.breakdown,
    )


def _batches(urls: list[str], size: int):
    for i in range(0, len(urls), size):
        yield urls[i:i + size]


def analyze_site(
    urls: list[str],
    full_analysis: bool = False,
    progress: Optional[ProgressCallback] = None,
) -> SiteAnalysis:
    """Analyze *urls* in sequential batches of ``BATCH_SIZE`` concurrent pages.

    Each batch is fully awaited before the next starts, so at most
    ``BATCH_SIZE`` fetches or browser sessions run at once. Results keep the
    input order.
    """
    if not urls:
        raise EmptyBatchError()

    pages = urls[:ANALYZE_MAX_PAGES]
    start = time.perf_counter()
    results: list[AnalyzedPageRecord] = []

    for batch in _batches(pages, BATCH_SIZE):
        with ThreadPoolExecutor(max_workers=BATCH_SIZE) as executor:
            results.extend(executor.map(lambda u: analyze_page(u, full_analysis), batch))
        logger.info("Analysis progress: %d/%d", len(results), len(pages))
        if progress is not None:
            progress(len(results), len(pages))

    return SiteAnalysis(
        results=results,
        stats=aggregate(results),
        total_time=time.perf_counter() - start,
    )
