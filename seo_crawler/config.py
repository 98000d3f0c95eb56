import os

REQUEST_TIMEOUT = float(os.environ.get("SEO_REQUEST_TIMEOUT", "15"))
MAX_REDIRECTS = int(os.environ.get("SEO_MAX_REDIRECTS", "5"))
BROWSER_TIMEOUT_MS = int(os.environ.get("SEO_BROWSER_TIMEOUT_MS", "30000"))
LOG_LEVEL = os.environ.get("SEO_LOG_LEVEL", "INFO")

TITLE_MAX_LENGTH = 60
DESCRIPTION_MAX_LENGTH = 160
MAX_H2_TEXTS = 10
MAX_IMAGES = 20

# Crawl settings
CRAWL_MAX_PAGES = int(os.environ.get("SEO_CRAWL_MAX_PAGES", "50"))
CRAWL_HARD_CAP = int(os.environ.get("SEO_CRAWL_HARD_CAP", "50"))
EXCLUDED_URLS_LIMIT = 100

# Batch analysis (fixed, not read from the environment)
BATCH_SIZE = 5
ANALYZE_MAX_PAGES = 50
COMMON_ISSUES_LIMIT = 5

EXCLUDED_EXTENSIONS = (
    ".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp",
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    ".zip", ".rar", ".tar", ".gz", ".mp4", ".mp3", ".avi", ".mov",
)

# Point budget per scoring category (sum = 100)
CATEGORY_BUDGETS = {
    "structure": 45,
    "performance": 35,
    "content": 10,
    "technical": 10,
}

USER_AGENT = (
    "Mozilla/5.0 (compatible; SEOCrawler/1.0; +https://github.com/seo-crawler)"
)
ACCEPT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml",
    "Accept-Language": "fr,en;q=0.9",
}
