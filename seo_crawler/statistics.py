"""Site-wide statistics over a set of analyzed pages."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Union

from seo_crawler.config import CATEGORY_BUDGETS, COMMON_ISSUES_LIMIT
from seo_crawler.models import (
    AnalyzedPageRecord,
    CategoryAverage,
    CommonIssue,
    PageRecord,
    SiteStatistics,
    StatisticsError,
)

NO_RESULTS_ERROR = "No pages analyzed successfully"
SLOW_PAGE_SECONDS = 3


def _average(values: Iterable[Optional[float]]) -> float:
    present = [v for v in values if v is not None]
    if not present:
        return 0.0
    return sum(present) / len(present)


def _percentage(pages: list[PageRecord], predicate: Callable[[PageRecord], bool]) -> float:
    if not pages:
        return 0.0
    return round(sum(1 for p in pages if predicate(p)) / len(pages) * 100, 2)


def _attr(page: PageRecord, name: str):
    return getattr(page, name, None)


def common_issues(pages: list[PageRecord], limit: int = COMMON_ISSUES_LIMIT) -> list[CommonIssue]:
    """Group penalties by (category, name); most frequent first."""
    grouped: dict[tuple[str, str], CommonIssue] = {}
    for page in pages:
        for penalty in _attr(page, "seo_penalties") or []:
            key = (penalty.category, penalty.name)
            issue = grouped.setdefault(
                key, CommonIssue(category=penalty.category, name=penalty.name, count=0, total_points=0)
            )
            issue.count += 1
            issue.total_points += abs(penalty.points)

    ranked = sorted(grouped.values(), key=lambda i: (i.count, i.total_points), reverse=True)
    return ranked[:limit]


def _score_by_category(pages: list[PageRecord]) -> dict[str, CategoryAverage]:
    details = [d for d in (_attr(p, "score_details") for p in pages) if d is not None]
    averages = {}
    for name, budget in CATEGORY_BUDGETS.items():
        ratios = [
            d.categories[name].earned / d.categories[name].max_points * 100
            for d in details
            if name in d.categories
        ]
        averages[name] = CategoryAverage(average=_average(ratios), max_score=budget)
    return averages


def aggregate(results: list[Union[PageRecord, AnalyzedPageRecord]]) -> Union[SiteStatistics, StatisticsError]:
    valid = [r for r in results if not r.error]
    if not valid:
        return StatisticsError(error=NO_RESULTS_ERROR)

    return SiteStatistics(
        average_load_time=_average(p.load_time for p in valid),
        average_fcp=_average(_attr(p, "fcp") for p in valid),
        average_title_length=_average(p.title_length for p in valid),
        average_description_length=_average(p.meta_description_length for p in valid),
        average_page_size=_average(_attr(p, "page_size_kb") for p in valid),
        average_seo_score=_average(_attr(p, "seo_score") for p in valid),
        pages_with_title=_percentage(valid, lambda p: not p.missing_title),
        pages_with_description=_percentage(valid, lambda p: not p.missing_description),
        pages_with_h1=_percentage(valid, lambda p: not p.missing_h1),
        pages_with_multiple_h1=_percentage(valid, lambda p: p.has_multiple_h1),
        pages_with_h2=_percentage(valid, lambda p: p.h2_count > 0),
        pages_with_canonical=_percentage(valid, lambda p: bool(p.canonical_url)),
        pages_with_errors=len(results) - len(valid),
        pages_with_performance_issues=sum(
            1 for p in valid if p.load_time is not None and p.load_time > SLOW_PAGE_SECONDS
        ),
        total_pages=len(results),
        successfully_analyzed=len(valid),
        score_by_category=_score_by_category(valid),
        common_issues=common_issues(valid),
    )
