"""
HTTP transport for the listing endpoint.

One GET per call, no retries. Network failures and non-2xx statuses are
raised as TransportError; retrying is the caller's job.
"""

import time
from typing import Callable, Dict, Optional

import httpx
import structlog

from .envelope import decode_page
from .errors import TransportError
from .models import Page
from .request_builder import build_request_url

logger = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:146.0) "
    "Gecko/20100101 Firefox/146.0"
)


class HTTPFetcher:
    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        cookies: Optional[str] = None,
        build_url: Callable[..., str] = build_request_url,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the fetcher.

        Args:
            user_agent: User-Agent header sent with every request.
            timeout: Per-request timeout in seconds.
            cookies: Raw Cookie header value. The endpoint usually rejects
                     requests without a browser session cookie.
            build_url: Request builder (location url, sort, cursor, query) -> url.
            client: Pre-built AsyncClient. When given, the caller owns it.
        """
        self.user_agent = user_agent
        self.timeout = timeout
        self.cookies = cookies or None
        self.build_url = build_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            limits=httpx.Limits(max_connections=5, max_keepalive_connections=2),
        )

    @property
    def headers(self) -> Dict[str, str]:
        headers = {'User-Agent': self.user_agent}
        if self.cookies:
            headers['Cookie'] = self.cookies
        return headers

    async def get_text(self, url: str) -> str:
        """GET ``url`` and return the body text of a successful response."""
        start_time = time.time()
        try:
            response = await self._client.get(url, headers=self.headers)
        except httpx.TimeoutException as e:
            raise TransportError(f"Timeout after {self.timeout}s: {e}", url=url) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Connection error: {e}", url=url) from e

        logger.debug("http_response",
                     status_code=response.status_code,
                     fetch_time=round(time.time() - start_time, 3),
                     size=len(response.content))

        if not response.is_success:
            reason = response.reason_phrase or str(response.status_code)
            raise TransportError(
                f"Failed to fetch reviews: {reason}",
                url=url,
                status_code=response.status_code,
                reason=reason,
            )
        return response.text

    async def fetch_reviews(
        self,
        url: str,
        sort: int,
        next_page: str = "",
        search_query: str = "",
    ) -> Page:
        """Fetch and decode one page of reviews for a place URL."""
        api_url = self.build_url(url, sort, next_page, search_query)
        text = await self.get_text(api_url)
        return decode_page(text)

    async def close(self):
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
