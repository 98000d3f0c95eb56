class SeoCrawlerError(Exception):
    """Base class for errors raised before any crawl or analysis work starts."""


class InvalidSeedError(SeoCrawlerError, ValueError):
    def __init__(self, url: str, reason: str = "unsupported URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid seed URL {url!r}: {reason}")


class EmptyBatchError(SeoCrawlerError, ValueError):
    def __init__(self):
        super().__init__("A non-empty list of page URLs is required")
