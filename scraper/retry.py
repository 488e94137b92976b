"""
Exponential backoff around a single page fetch.

Hard failures (any ScraperError, or an httpx.HTTPError raised by a custom
fetcher) and empty batches share one backoff path. Other exceptions, such as
the RuntimeError httpx raises for a closed client, are programming errors and
propagate. Once attempts run out the result is FetchExhausted, never an
exception, so a long scrape degrades to returning what it already has.

Known limitation: an empty batch that really is the end of the data looks
the same as a rate-limited response. Both are retried before giving up.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import httpx
import structlog

from .errors import EmptyBatchAnomaly, ScraperError
from .models import FetchExhausted, FetchOutcome, PageFetched, RetryPolicy

logger = structlog.get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class RetryingFetcher:
    def __init__(
        self,
        fetcher,
        policy: Optional[RetryPolicy] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Args:
            fetcher: Object with an async fetch_reviews(url, sort, next_page,
                     search_query) returning a Page, e.g. HTTPFetcher.
            policy: Retry count and base delay.
            sleep: Coroutine used for backoff pauses, in seconds.
        """
        self.fetcher = fetcher
        self.policy = policy or RetryPolicy()
        self.sleep = sleep

    async def _backoff(self, attempt: int, event: str, **context):
        delay_ms = self.policy.delay_ms(attempt)
        logger.info(event,
                    retry=attempt + 1,
                    max_retries=self.policy.max_retries,
                    delay_ms=delay_ms,
                    **context)
        await self.sleep(delay_ms / 1000)

    async def fetch(
        self,
        url: str,
        sort: int,
        next_page: str,
        search_query: str = "",
    ) -> FetchOutcome:
        max_retries = self.policy.max_retries
        last_error = None

        for attempt in range(max_retries + 1):
            try:
                page = await self.fetcher.fetch_reviews(url, sort, next_page, search_query)
            except (ScraperError, httpx.HTTPError) as e:
                last_error = e
                if attempt < max_retries:
                    await self._backoff(attempt, "fetch_error_retry", error=str(e))
                    continue
                logger.warning("fetch_failed_after_retries",
                               max_retries=max_retries,
                               error=str(e))
                return FetchExhausted(attempts=attempt + 1, last_error=e)

            if page.has_reviews:
                return PageFetched(page)

            # Possibly rate limited; retry before believing it.
            last_error = EmptyBatchAnomaly(
                "Page returned empty data",
                details={'cursor': next_page},
            )
            if attempt < max_retries:
                await self._backoff(attempt, "empty_batch_retry")

        logger.warning("empty_batch_exhausted", max_retries=max_retries)
        return FetchExhausted(attempts=max_retries + 1, last_error=last_error)
