from .config import Config
from .errors import (
    DecodeError,
    EmptyBatchAnomaly,
    ScrapeFailedError,
    ScraperError,
    TransportError,
    ValidationError,
)
from .models import PAGES_MAX, Page, RetryPolicy, SortType
from .reviews import ReviewScraper, scrape

__all__ = [
    "Config",
    "DecodeError",
    "EmptyBatchAnomaly",
    "PAGES_MAX",
    "Page",
    "RetryPolicy",
    "ReviewScraper",
    "ScrapeFailedError",
    "ScraperError",
    "SortType",
    "TransportError",
    "ValidationError",
    "scrape",
]
