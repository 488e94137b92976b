"""
Data types shared by the fetcher, the retry loop and the paginator.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional, Union

PAGES_MAX = "max"


class SortType(IntEnum):
    """Review orderings understood by the listing endpoint."""

    relevent = 1
    newest = 2
    highest_rating = 3
    lowest_rating = 4


def unquote_cursor(cursor: Any) -> Optional[str]:
    """Strip the literal quote characters the provider wraps cursors in.

    Returns None for a missing, non-string or empty cursor. Applying it to an
    already unquoted cursor returns the cursor unchanged.
    """
    if not isinstance(cursor, str):
        return None
    cursor = cursor.replace('"', '')
    return cursor or None


class Page:
    """One decoded response of the listing endpoint.

    The provider payload is a JSON array: index 1 holds the next page cursor
    (or null) and index 2 the batch of raw review records. Any other value is
    kept in ``raw`` but otherwise ignored.
    """

    def __init__(self, raw: Any):
        self.raw = raw

    def _item(self, index: int) -> Any:
        if isinstance(self.raw, list) and len(self.raw) > index:
            return self.raw[index]
        return None

    @property
    def cursor(self) -> Optional[str]:
        """Next page cursor with quotes removed, None on the last page."""
        return unquote_cursor(self._item(1))

    @property
    def reviews(self) -> Any:
        """Raw batch value; may be None or something other than a list."""
        return self._item(2)

    @property
    def has_reviews(self) -> bool:
        reviews = self.reviews
        return isinstance(reviews, list) and len(reviews) > 0

    @property
    def review_count(self) -> int:
        reviews = self.reviews
        return len(reviews) if isinstance(reviews, list) else 0

    def __repr__(self) -> str:
        return f"Page(cursor={self.cursor!r}, reviews={self.review_count})"


@dataclass(frozen=True)
class PageFetched:
    """The retrying fetcher obtained a page with at least one review."""

    page: Page


@dataclass(frozen=True)
class FetchExhausted:
    """Every attempt failed or came back empty; treat as end of data."""

    attempts: int
    last_error: Optional[Exception] = None


FetchOutcome = Union[PageFetched, FetchExhausted]


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    base_delay_ms: int = 2000

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.base_delay_ms < 0:
            raise ValueError(f"base_delay_ms must be >= 0, got {self.base_delay_ms}")

    def delay_ms(self, attempt: int) -> int:
        """Backoff before retrying after the 0-indexed ``attempt``."""
        return self.base_delay_ms * 2 ** attempt

