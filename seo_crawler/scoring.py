"""Table-driven SEO score.

Every check is a declarative ``Rule``; ``score_page`` is the only code that
interprets them. Each category starts at its full budget and loses the points
of every band a rule falls into. Category totals are left unclamped; only the
final score is bounded to 0-100. Factors for missing measurements only
lower their category; they stay out of ``all_factors`` and the penalties.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Union

from seo_crawler.config import CATEGORY_BUDGETS, DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH
from seo_crawler.models import (
    CategoryScore,
    Factor,
    PageRecord,
    PerformanceRecord,
    ScoreBreakdown,
    ScoreResult,
)

Measure = Callable[[PageRecord, Optional[PerformanceRecord]], Optional[Union[float, bool]]]

UNAVAILABLE_DETAILS = "Measurement not available"
UNAVAILABLE_RECOMMENDATION = "Run the full analysis to evaluate this factor"

SCORE_LABELS = (
    (90, "Excellent"),
    (70, "Good"),
    (50, "Average"),
    (30, "Poor"),
)


@dataclass(frozen=True)
class Band:
    """Penalty applied when the measured value is strictly above ``above``.

    A scaled band penalizes ``ceil(value * weight)`` points, capped at the
    rule weight, instead of the fixed ``points``.
    """

    above: float
    points: int = 0
    details: str = ""
    recommendation: str = ""
    scaled: bool = False


@dataclass(frozen=True)
class Rule:
    category: str
    name: str
    weight: int
    measure: Measure
    bands: tuple[Band, ...]
    ok_details: str = "No issue detected"
    requires_performance: bool = False


RULES: tuple[Rule, ...] = (
    # --- structure (45) ---
    Rule(
        "structure", "Meta title", 18,
        lambda b, p: b.missing_title,
        (Band(0, -18, "The meta title is missing",
              "Add a descriptive title that includes the main keyword"),),
    ),
    Rule(
        "structure", "Meta title length", 6,
        lambda b, p: not b.missing_title and b.has_too_long_title,
        (Band(0, -6, "The meta title is too long ({basic.title_length} characters)",
              f"Shorten the title to under {TITLE_MAX_LENGTH} characters"),),
    ),
    Rule(
        "structure", "Meta description", 12,
        lambda b, p: b.missing_description,
        (Band(0, -12, "The meta description is missing",
              "Add an engaging meta description with a call to action"),),
    ),
    Rule(
        "structure", "Meta description length", 6,
        lambda b, p: not b.missing_description and b.has_too_long_description,
        (Band(0, -6, "The meta description is too long ({basic.meta_description_length} characters)",
              f"Keep the description under {DESCRIPTION_MAX_LENGTH} characters"),),
    ),
    Rule(
        "structure", "H1 tag", 12,
        lambda b, p: b.missing_h1,
        (Band(0, -12, "The H1 tag is missing",
              "Add an H1 describing the main content of the page"),),
    ),
    Rule(
        "structure", "H1 uniqueness", 6,
        lambda b, p: not b.missing_h1 and b.has_multiple_h1,
        (Band(0, -6, "{basic.h1_count} H1 tags found",
              "Keep a single H1 per page"),),
    ),
    Rule(
        "structure", "H2 tags", 7,
        lambda b, p: b.h2_count == 0,
        (Band(0, -7, "No H2 tag found",
              "Use H2 headings to split the content into sections"),),
    ),
    # --- performance (35) ---
    Rule(
        "performance", "Load time", 18,
        lambda b, p: p.load_time,
        (
            Band(5, -18, "Very slow load time ({value:.2f}s)",
                 "Optimize images and remove render-blocking resources"),
            Band(3, -12, "Slow load time ({value:.2f}s)",
                 "Enable caching and compression"),
        ),
        ok_details="Good load time ({value:.2f}s)",
        requires_performance=True,
    ),
    Rule(
        "performance", "First Contentful Paint (FCP)", 12,
        lambda b, p: p.fcp,
        (
            Band(3, -12, "Very slow FCP ({value:.2f}s)",
                 "Reduce the delay before the first content is painted"),
            Band(1.8, -6, "Slow FCP ({value:.2f}s)",
                 "Inline critical CSS to speed up the first paint"),
        ),
        ok_details="Good FCP ({value:.2f}s)",
        requires_performance=True,
    ),
    Rule(
        "performance", "Page weight", 5,
        lambda b, p: p.page_size_kb,
        (
            Band(3000, -5, "Very heavy page ({value} KB)",
                 "Reduce page weight by optimizing images and code"),
            Band(1500, -3, "Heavy page ({value} KB)",
                 "Trim resources to lower the total weight"),
        ),
        ok_details="Page weight is fine ({value} KB)",
        requires_performance=True,
    ),
    # --- content (10) ---
    Rule(
        "content", "Image alt attributes", 10,
        lambda b, p: p.images_without_alt / p.images_count if p.images_count else 0,
        (
            Band(0.5, -10, "{perf.images_without_alt}/{perf.images_count} images without alt attribute",
                 "Add descriptive alt attributes to every image"),
            Band(0, details="{perf.images_without_alt}/{perf.images_count} images without alt attribute",
                 recommendation="Fill in the missing alt attributes", scaled=True),
        ),
        ok_details="No image is missing its alt attribute ({perf.images_count} checked)",
        requires_performance=True,
    ),
    # --- technical (10) ---
    Rule(
        "technical", "Canonical URL", 5,
        lambda b, p: not b.canonical_url,
        (Band(0, -5, "Canonical URL is missing",
              "Add a canonical link to avoid duplicate content issues"),),
    ),
    Rule(
        "technical", "Structured data", 5,
        lambda b, p: not p.has_structured_data,
        (Band(0, -5, "No structured data found",
              "Add schema.org structured data to improve SERP visibility"),),
        requires_performance=True,
    ),
)


def score_label(score: int) -> str:
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return "Critical"


def _apply(breakdown: ScoreBreakdown, factor: Factor) -> None:
    category = breakdown.categories[factor.category]
    category.earned += factor.points
    category.factors.append(factor)
    # Missing measurements cost points but are not reported as page issues
    if factor.status != "unavailable":
        breakdown.all_factors.append(factor)


def _band_points(rule: Rule, band: Band, value: float) -> int:
    if band.scaled:
        # round() keeps float noise such as 3.0000000000000004 from adding a point
        return -min(rule.weight, math.ceil(round(value * rule.weight, 9)))
    return band.points


def _evaluate(rule: Rule, basic: PageRecord, perf: Optional[PerformanceRecord]) -> Factor:
    if rule.requires_performance and perf is None:
        value = None
    else:
        value = rule.measure(basic, perf)

    if value is None:
        return Factor(
            category=rule.category, name=rule.name, points=-rule.weight,
            status="unavailable", details=UNAVAILABLE_DETAILS,
            recommendation=UNAVAILABLE_RECOMMENDATION,
        )

    context = {"value": value, "basic": basic, "perf": perf}
    for band in rule.bands:
        if value > band.above:
            return Factor(
                category=rule.category, name=rule.name,
                points=_band_points(rule, band, value), status="penalty",
                details=band.details.format(**context),
                recommendation=band.recommendation or None,
            )

    return Factor(
        category=rule.category, name=rule.name, points=0, status="ok",
        details=rule.ok_details.format(**context),
    )


def score_page(basic: PageRecord, perf: Optional[PerformanceRecord] = None) -> ScoreResult:
    """Score one page from its basic record and optional performance record."""
    breakdown = ScoreBreakdown(
        categories={
            name: CategoryScore(max_points=budget, earned=budget)
            for name, budget in CATEGORY_BUDGETS.items()
        }
    )

    if perf is None:
        _apply(breakdown, Factor(
            category="performance", name="Performance metrics",
            points=-CATEGORY_BUDGETS["performance"], status="unavailable",
            details="Performance metrics not available",
            recommendation="Use the full analysis to evaluate performance",
        ))

    for rule in RULES:
        if perf is None and rule.category == "performance":
            continue
        _apply(breakdown, _evaluate(rule, basic, perf))

    total = sum(category.earned for category in breakdown.categories.values())
    score = round(max(0, min(100, total)))
    return ScoreResult(
        score=score,
        label=score_label(score),
        breakdown=breakdown,
        penalties=[f for f in breakdown.all_factors if f.points < 0],
    )


def top_issues(result: ScoreResult, limit: int = 5) -> list[Factor]:
    """Most severe penalties first."""
    return sorted(result.penalties, key=lambda f: f.points)[:limit]
