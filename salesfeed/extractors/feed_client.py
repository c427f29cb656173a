"""
HTTP client for the sales feed, item pages and art images.

The client does one request per call and never retries; retry policy is
owned by the caller (the poller simply waits for its next tick, the tag
enricher loops, the color enricher gives up). Every transport problem is
translated into an exception from core.exceptions so callers only have to
catch SalesFeedException.
"""

import httpx
from typing import Optional, Type
from core.config import settings
from core.exceptions import (
    FetchError,
    FeedFetchError,
    FeedFormatError,
    ImageLoadError,
    NetworkError,
    RateLimitError,
    ResourceNotFoundError,
    TagPageFetchError,
)
from schemas.feed import FeedSnapshot
import logging

logger = logging.getLogger(__name__)


class FeedClient:
    """
    Thin async wrapper over ``httpx.AsyncClient``.

    A client may be injected (tests pass one built on ``httpx.MockTransport``);
    otherwise one is created and owned by this instance and closed by
    ``aclose`` or by leaving the ``async with`` block.

    Attributes:
        feed_url: Feed endpoint polled by ``fetch_snapshot``
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        feed_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.feed_url = feed_url or settings.FEED_URL
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": settings.USER_AGENT},
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def _get(self, url: str, error_cls: Type[FetchError]) -> httpx.Response:
        """
        Issue a GET and map failures onto the exception hierarchy.

        Args:
            url: Request URL
            error_cls: Exception raised for failures that are not network,
                rate-limit or not-found errors

        Returns:
            A response with a 2xx status
        """
        try:
            response = await self.client.get(url, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request timeout for {url}",
                context={"url": url, "timeout": self.timeout},
                original_exception=e
            )
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Network error for {url}",
                context={"url": url},
                original_exception=e
            )
        except httpx.InvalidURL as e:
            # raised while building the request, not an HTTPError
            raise error_cls(
                f"Invalid url {url!r}",
                context={"url": url},
                original_exception=e
            )

        if response.status_code == 404:
            raise ResourceNotFoundError(
                f"Resource not found: {url}",
                context={"url": url, "status_code": 404}
            )

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                f"Rate limited by {url}",
                context={"url": url, "status_code": 429},
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
            )

        if response.status_code >= 500:
            raise NetworkError(
                f"Server error {response.status_code} for {url}",
                context={
                    "url": url,
                    "status_code": response.status_code,
                    "response_body": response.text[:500]
                }
            )

        if response.status_code >= 400:
            raise error_cls(
                f"Request rejected with {response.status_code} for {url}",
                context={"url": url, "status_code": response.status_code}
            )

        return response

    async def fetch_snapshot(self) -> FeedSnapshot:
        """
        Fetch and parse one feed snapshot.

        Raises:
            FetchError: Transport failure (see ``_get``)
            FeedFormatError: Body is not JSON or not a feed payload
        """
        response = await self._get(self.feed_url, FeedFetchError)

        try:
            payload = response.json()
        except ValueError as e:
            raise FeedFormatError(
                "Failed to parse JSON response",
                context={"feed_url": self.feed_url, "response_body": response.text[:500]},
                original_exception=e
            )

        try:
            snapshot = FeedSnapshot.from_payload(payload)
        except ValueError as e:
            # pydantic.ValidationError is a ValueError
            raise FeedFormatError(
                "Feed payload does not match the expected schema",
                context={"feed_url": self.feed_url},
                original_exception=e
            )

        logger.debug(
            f"Fetched snapshot: {len(snapshot.events)} batches, "
            f"server_time={snapshot.server_time}"
        )
        return snapshot

    async def fetch_document(self, url: str) -> str:
        """Fetch an HTML document and return its decoded text"""
        response = await self._get(url, TagPageFetchError)
        return response.text

    async def fetch_bytes(self, url: str) -> bytes:
        """Fetch a binary resource such as an art image"""
        response = await self._get(url, ImageLoadError)
        return response.content
