from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, HttpUrl

from seo_crawler.config import CRAWL_MAX_PAGES


# --- Page records ---

class LinkInfo(BaseModel):
    url: str
    anchor_text: str = ""
    is_internal: bool


class PageRecord(BaseModel):
    url: str
    status_code: int = 0
    error: Optional[str] = None
    content_type: str = ""
    load_time: Optional[float] = None
    title: str = ""
    title_length: int = 0
    meta_description: str = ""
    meta_description_length: int = 0
    h1_count: int = 0
    h1_text: str = ""
    h2_count: int = 0
    h2_texts: list[str] = Field(default_factory=list)
    canonical_url: str = ""
    has_hreflang: bool = False
    internal_links_count: int = 0
    external_links_count: int = 0
    links: list[LinkInfo] = Field(default_factory=list)

    # Derived at extraction time
    missing_title: bool = False
    missing_description: bool = False
    missing_h1: bool = False
    has_multiple_h1: bool = False
    has_too_long_title: bool = False
    has_too_long_description: bool = False

    @classmethod
    def failed(cls, url: str, message: str, status_code: int = 500) -> "PageRecord":
        return cls(url=url, status_code=status_code, error=message)


class ImageInfo(BaseModel):
    src: str = ""
    has_alt: bool
    alt_text: str = ""


class PerformanceRecord(BaseModel):
    url: str
    error: Optional[str] = None
    load_time: Optional[float] = None
    fcp: Optional[float] = None
    page_size_kb: Optional[int] = None
    total_requests: int = 0
    failed_requests: int = 0
    images: list[ImageInfo] = Field(default_factory=list)
    images_count: int = 0
    images_without_alt: int = 0
    structured_data_count: int = 0
    invalid_structured_data_count: int = 0
    has_structured_data: bool = False


# --- Scoring ---

CategoryName = Literal["structure", "performance", "content", "technical"]


class Factor(BaseModel):
    category: CategoryName
    name: str
    points: int
    status: Literal["penalty", "ok", "unavailable"]
    details: Optional[str] = None
    recommendation: Optional[str] = None


class CategoryScore(BaseModel):
    max_points: int
    earned: int
    factors: list[Factor] = Field(default_factory=list)


class ScoreBreakdown(BaseModel):
    base_score: int = 100
    categories: dict[str, CategoryScore]
    all_factors: list[Factor] = Field(default_factory=list)


class ScoreResult(BaseModel):
    score: int
    label: str
    breakdown: ScoreBreakdown
    penalties: list[Factor]


class AnalyzedPageRecord(PageRecord):
    fcp: Optional[float] = None
    page_size_kb: Optional[int] = None
    total_requests: Optional[int] = None
    failed_requests: Optional[int] = None
    images_count: Optional[int] = None
    images_without_alt: Optional[int] = None
    has_structured_data: Optional[bool] = None
    performance_error: Optional[str] = None
    seo_score: Optional[int] = None
    seo_label: Optional[str] = None
    seo_penalties: list[Factor] = Field(default_factory=list)
    score_details: Optional[ScoreBreakdown] = None


# --- Statistics ---

class CommonIssue(BaseModel):
    category: str
    name: str
    count: int
    total_points: int


class CategoryAverage(BaseModel):
    average: float
    max_score: int


class SiteStatistics(BaseModel):
    average_load_time: float
    average_fcp: float
    average_title_length: float
    average_description_length: float
    average_page_size: float
    average_seo_score: float

    pages_with_title: float
    pages_with_description: float
    pages_with_h1: float
    pages_with_multiple_h1: float
    pages_with_h2: float
    pages_with_canonical: float

    pages_with_errors: int
    pages_with_performance_issues: int
    total_pages: int
    successfully_analyzed: int

    score_by_category: dict[str, CategoryAverage]
    common_issues: list[CommonIssue]


class StatisticsError(BaseModel):
    error: str


# --- API models ---

class CrawlRequest(BaseModel):
    url: HttpUrl
    max_pages: int = Field(default=CRAWL_MAX_PAGES, ge=1)


class CrawlResponse(BaseModel):
    base_url: str
    pages: list[PageRecord]
    page_count: int
    excluded_count: int
    excluded_urls: list[str]
    total_time: float


class AnalyzePageRequest(BaseModel):
    url: HttpUrl
    full_analysis: bool = True


class AnalyzeSiteRequest(BaseModel):
    urls: list[str]
    full_analysis: bool = False


class AnalyzeSiteResponse(BaseModel):
    results: list[AnalyzedPageRecord]
    stats: Union[SiteStatistics, StatisticsError]
    total_pages: int
    total_time: float
