from __future__ import annotations

import pytest

from seo_crawler.models import AnalyzedPageRecord, Factor, PageRecord, SiteStatistics, StatisticsError
from seo_crawler.scoring import score_page
from seo_crawler.statistics import NO_RESULTS_ERROR, aggregate, common_issues


def _page(url: str, **fields) -> PageRecord:
    return PageRecord(url=url, status_code=200, **fields)


def _penalty(category: str, name: str, points: int) -> Factor:
    return Factor(category=category, name=name, points=points, status="penalty")


class TestAggregate:
    def test_title_percentage(self) -> None:
        pages = [
            _page("https://ex.com/1", title_length=10),
            _page("https://ex.com/2", title_length=20),
            _page("https://ex.com/3", missing_title=True),
        ]
        stats = aggregate(pages)
        assert isinstance(stats, SiteStatistics)
        assert stats.pages_with_title == pytest.approx(66.67, abs=0.01)
        assert stats.average_title_length == pytest.approx(10.0)

    def test_all_errors_returns_error_shape(self) -> None:
        pages = [PageRecord.failed("https://ex.com/1", "boom"), PageRecord.failed("https://ex.com/2", "boom")]
        stats = aggregate(pages)
        assert isinstance(stats, StatisticsError)
        assert stats.error == NO_RESULTS_ERROR

    def test_empty_input_returns_error_shape(self) -> None:
        assert isinstance(aggregate([]), StatisticsError)

    def test_errors_are_counted_but_excluded_from_means(self) -> None:
        pages = [
            _page("https://ex.com/1", load_time=2.0, h2_count=1),
            _page("https://ex.com/2", load_time=4.0),
            PageRecord.failed("https://ex.com/3", "timeout"),
        ]
        stats = aggregate(pages)
        assert stats.total_pages == 3
        assert stats.successfully_analyzed == 2
        assert stats.pages_with_errors == 1
        assert stats.average_load_time == pytest.approx(3.0)
        assert stats.pages_with_performance_issues == 1
        assert stats.pages_with_h2 == 50.0

    def test_absent_optional_fields_are_skipped(self) -> None:
        pages = [
            AnalyzedPageRecord(url="https://ex.com/1", fcp=1.0, page_size_kb=100),
            AnalyzedPageRecord(url="https://ex.com/2"),
            _page("https://ex.com/3", load_time=1.0),
        ]
        stats = aggregate(pages)
        assert stats.average_fcp == pytest.approx(1.0)
        assert stats.average_page_size == pytest.approx(100.0)
        assert stats.average_load_time == pytest.approx(1.0)
        assert stats.average_seo_score == 0.0

    def test_score_by_category(self) -> None:
        basic = _page("https://ex.com/", title="t", title_length=1, meta_description="d",
                      meta_description_length=1, h1_count=1, h2_count=1, canonical_url="c")
        result = score_page(basic, None)
        page = AnalyzedPageRecord(
            **basic.model_dump(), seo_score=result.score,
            seo_penalties=result.penalties, score_details=result.breakdown,
        )
        stats = aggregate([page])
        assert stats.score_by_category["structure"].average == pytest.approx(100.0)
        assert stats.score_by_category["performance"].average == pytest.approx(0.0)
        assert stats.score_by_category["technical"].average == pytest.approx(50.0)
        assert stats.score_by_category["performance"].max_score == 35
        assert stats.average_seo_score == pytest.approx(result.score)


class TestCommonIssues:
    def test_groups_counts_and_ranks(self) -> None:
        pages = [
            AnalyzedPageRecord(url="https://ex.com/1", seo_penalties=[
                _penalty("structure", "H2 tags", -7), _penalty("technical", "Canonical URL", -5),
            ]),
            AnalyzedPageRecord(url="https://ex.com/2", seo_penalties=[
                _penalty("structure", "H2 tags", -7), _penalty("performance", "Load time", -18),
            ]),
            AnalyzedPageRecord(url="https://ex.com/3", seo_penalties=[
                _penalty("technical", "Canonical URL", -5),
            ]),
        ]
        issues = common_issues(pages)
        assert [(i.name, i.count, i.total_points) for i in issues] == [
            ("H2 tags", 2, 14),
            ("Canonical URL", 2, 10),
            ("Load time", 1, 18),
        ]

    def test_top_five_only(self) -> None:
        penalties = [_penalty("structure", f"rule {i}", -1) for i in range(8)]
        issues = common_issues([AnalyzedPageRecord(url="https://ex.com/", seo_penalties=penalties)])
        assert len(issues) == 5

    def test_basic_only_run_reports_real_penalties_only(self) -> None:
        pages = []
        for i, h2_count in enumerate((0, 0, 3)):
            basic = _page(f"https://ex.com/{i}", title="t", title_length=1, meta_description="d",
                          meta_description_length=1, h1_count=1, h2_count=h2_count, canonical_url="c")
            result = score_page(basic, None)
            pages.append(AnalyzedPageRecord(
                **basic.model_dump(), seo_score=result.score,
                seo_penalties=result.penalties, score_details=result.breakdown,
            ))

        stats = aggregate(pages)

        assert [(i.name, i.count, i.total_points) for i in stats.common_issues] == [("H2 tags", 2, 14)]
        assert stats.score_by_category["performance"].average == pytest.approx(0.0)

    def test_pages_without_scores(self) -> None:
        assert common_issues([_page("https://ex.com/")]) == []
