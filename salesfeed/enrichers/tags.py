"""
Tag enrichment: scrape tag links from each item's page.

Tags are expected to become available eventually, so a failed fetch or
parse is retried forever with a fixed delay. The loop ends only when a
page has been fetched and parsed, or when the task is cancelled.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional
from core.config import settings
from core.exceptions import SalesFeedException
from salesfeed.extractors.feed_client import FeedClient
from salesfeed.extractors.tag_parser import parse_tags
from salesfeed.loaders.item_store import ItemStore
from schemas.item import Item, Tag
import logging

logger = logging.getLogger(__name__)


class TagEnricher:
    """
    Populate ``Item.tags`` from the item page.

    Attributes:
        retry_delay: Seconds to wait between attempts (fixed, no backoff)
    """

    def __init__(
        self,
        client: FeedClient,
        store: ItemStore,
        retry_delay: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        self.client = client
        self.store = store
        self.retry_delay = retry_delay if retry_delay is not None else settings.TAG_RETRY_DELAY_SECONDS
        self._sleep = sleep

    async def fetch_tags(self, url: str) -> List[Tag]:
        """One attempt: fetch the page and parse its tags"""
        html = await self.client.fetch_document(url)
        return parse_tags(html, url)

    async def enrich(self, item: Item) -> Optional[List[Tag]]:
        """
        Fetch tags until an attempt succeeds, then assign them to the item.

        Returns:
            The item's tags after assignment. If another task assigned tags
            first, those are returned and this result is dropped.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                tags = await self.fetch_tags(item.url)
                break
            except SalesFeedException as e:
                logger.warning(
                    f"Tag fetch for {item.utc_date} failed (attempt {attempt}), "
                    f"retrying in {self.retry_delay}s: {e.message}",
                    extra={"error_context": e.to_dict()}
                )
                await self._sleep(self.retry_delay)

        if self.store.assign_tags(item, tags):
            logger.info(f"Tagged item {item.utc_date} with {len(tags)} tags after {attempt} attempt(s)")
        else:
            logger.debug(f"Tags for {item.utc_date} already set, result dropped")
        return item.tags
