"""
Walks the cursor chain that follows an already fetched first page.

Pages are requested strictly one after another since each cursor is only
known once the previous page arrives. Reviews are accumulated in arrival
order. The loop ends when the page budget is reached, the cursor runs out,
or the retrying fetcher gives up; all three return the reviews collected so
far.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Union

import structlog

from .cleaner import clean_reviews
from .models import PAGES_MAX, FetchExhausted, Page
from .retry import RetryingFetcher, Sleep

logger = structlog.get_logger(__name__)

Cleaner = Callable[[list], Awaitable[list]]


def within_budget(page_number: int, pages: Union[int, str]) -> bool:
    return pages == PAGES_MAX or page_number <= int(pages)


class Paginator:
    def __init__(
        self,
        retrying_fetcher: RetryingFetcher,
        page_delay_ms: int = 1000,
        sleep: Sleep = asyncio.sleep,
        cleaner: Cleaner = clean_reviews,
    ):
        self.retrying_fetcher = retrying_fetcher
        self.page_delay_ms = page_delay_ms
        self.sleep = sleep
        self.cleaner = cleaner

    async def paginate(
        self,
        url: str,
        sort: int,
        pages: Union[int, str],
        search_query: str,
        clean: bool,
        initial_page: Page,
    ) -> List:
        """Collect reviews from ``initial_page`` and every page after it.

        Args:
            url: Place URL the pages belong to.
            sort: Sort code passed through to the request builder.
            pages: Highest page number to fetch (page 1 is ``initial_page``)
                   or "max" for no limit.
            search_query: Optional review text filter.
            clean: Run the cleaner once over the full result.
            initial_page: First page, fetched by the caller.

        Returns:
            Raw review records, or cleaned ones when ``clean`` is set.
        """
        initial = initial_page.reviews
        reviews = list(initial) if isinstance(initial, list) else []
        next_page: Optional[str] = initial_page.cursor

        logger.info("initial_page", reviews=len(reviews))

        current_page = 2
        while next_page and within_budget(current_page, pages):
            logger.info("scraping_page", page=current_page)

            outcome = await self.retrying_fetcher.fetch(url, sort, next_page, search_query)

            if isinstance(outcome, FetchExhausted) or not isinstance(outcome.page.reviews, list):
                logger.info("pagination_stopped",
                            page=current_page,
                            reason="no more data after retries",
                            reviews=len(reviews))
                break

            batch = outcome.page.reviews
            logger.info("page_fetched", page=current_page, reviews=len(batch))
            reviews.extend(batch)
            next_page = outcome.page.cursor

            if not next_page:
                logger.info("pagination_complete", page=current_page)
                break

            await self.sleep(self.page_delay_ms / 1000)
            current_page += 1

        logger.info("total_reviews_collected", total=len(reviews))
        return await self.cleaner(reviews) if clean else reviews
