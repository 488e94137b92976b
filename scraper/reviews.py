"""
Entry point of the package: validate, fetch page one, paginate the rest.

Only the first page can fail the scrape. After it arrives, any later failure
ends pagination and the reviews collected so far are returned.
"""

import asyncio
import functools
from typing import Any, List, Optional

import httpx
import structlog

from .cleaner import clean_reviews
from .config import Config
from .errors import DecodeError, ScrapeFailedError, TransportError
from .fetcher import DEFAULT_USER_AGENT, HTTPFetcher
from .models import PAGES_MAX, RetryPolicy
from .paginator import Cleaner, Paginator
from .request_builder import DEFAULT_BASE_URL, build_request_url
from .retry import RetryingFetcher, Sleep
from .validator import validate_params

logger = structlog.get_logger(__name__)


class ReviewScraper:
    """Wires the fetcher, retry loop and paginator together."""

    def __init__(
        self,
        fetcher: HTTPFetcher,
        retry_policy: Optional[RetryPolicy] = None,
        page_delay_ms: int = 1000,
        sleep: Sleep = asyncio.sleep,
        cleaner: Cleaner = clean_reviews,
    ):
        self.fetcher = fetcher
        self.retrying_fetcher = RetryingFetcher(fetcher, retry_policy, sleep=sleep)
        self.paginator = Paginator(
            self.retrying_fetcher,
            page_delay_ms=page_delay_ms,
            sleep=sleep,
            cleaner=cleaner,
        )

    @classmethod
    def from_config(
        cls,
        config: Config,
        client: Optional[httpx.AsyncClient] = None,
        **kwargs,
    ) -> "ReviewScraper":
        fetcher_config = config.fetcher
        endpoint = config.endpoint
        build_url = functools.partial(
            build_request_url,
            base_url=endpoint.get('base_url', DEFAULT_BASE_URL),
            hl=endpoint.get('hl', 'en'),
        )
        fetcher = HTTPFetcher(
            user_agent=fetcher_config.get('user_agent', DEFAULT_USER_AGENT),
            timeout=float(fetcher_config.get('timeout', 30.0)),
            cookies=fetcher_config.get('cookies'),
            build_url=build_url,
            client=client,
        )
        return cls(
            fetcher,
            retry_policy=config.retry_policy,
            page_delay_ms=int(config.pagination.get('page_delay_ms', 1000)),
            **kwargs,
        )

    async def scrape(
        self,
        url: str,
        sort_type: str = "relevent",
        search_query: str = "",
        pages: Any = PAGES_MAX,
        clean: bool = False,
    ) -> List:
        """Scrape reviews of a Google Maps place.

        Args:
            url: Place URL (https://www.google.com/maps/place/...).
            sort_type: One of relevent, newest, highest_rating, lowest_rating.
            search_query: Only return reviews matching this text.
            pages: Highest page number to fetch, or "max".
            clean: Return cleaned dicts instead of raw records.

        Raises:
            ValidationError: if a parameter is malformed.
            ScrapeFailedError: if the first page cannot be fetched.
        """
        params = validate_params(url, sort_type, pages, clean)
        sort = params.sort_type

        logger.info("scrape_started",
                    url=params.url,
                    sort=sort.name,
                    pages=params.pages,
                    query=search_query or None)

        try:
            initial_page = await self.fetcher.fetch_reviews(params.url, sort, "", search_query)
        except (TransportError, DecodeError) as e:
            logger.error("first_page_failed", url=params.url, error=str(e))
            raise ScrapeFailedError(f"Failed to fetch first page: {e.message}") from e

        if not initial_page.has_reviews:
            logger.info("no_reviews_found", url=params.url)
            return []

        return await self.paginator.paginate(
            params.url,
            sort,
            params.pages,
            search_query,
            params.clean,
            initial_page,
        )

    async def close(self):
        await self.fetcher.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


async def scrape(
    url: str,
    sort_type: str = "relevent",
    search_query: str = "",
    pages: Any = PAGES_MAX,
    clean: bool = False,
    config: Optional[Config] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List:
    """One-shot scrape using ``config`` (defaults to config.yaml + environment)."""
    config = config or Config()
    async with ReviewScraper.from_config(config, client=client) as scraper:
        return await scraper.scrape(url, sort_type, search_query, pages, clean)
