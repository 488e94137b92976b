"""
Exception types raised by the review scraper.

Only ValidationError and ScrapeFailedError ever reach a caller of scrape().
TransportError, DecodeError and EmptyBatchAnomaly are absorbed by the
retrying fetcher and turned into an exhausted fetch outcome.
"""

from typing import Any, Dict, Optional


class ScraperError(Exception):
    """Base class for every error raised by the scraper package."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(ScraperError):
    """Caller-supplied scrape parameters are malformed."""


class TransportError(ScraperError):
    """The HTTP request failed or returned a non-success status."""

    def __init__(
        self,
        message: str,
        url: str = None,
        status_code: int = None,
        reason: str = None,
    ):
        super().__init__(message, details={
            'url': url,
            'status_code': status_code,
            'reason': reason,
        })
        self.url = url
        self.status_code = status_code
        self.reason = reason


class DecodeError(ScraperError):
    """The response body is not a valid provider envelope."""


class EmptyBatchAnomaly(ScraperError):
    """A structurally valid response carried no reviews."""


class ScrapeFailedError(ScraperError):
    """The first page could not be fetched, so there is nothing to return."""
