"""
Pipeline Runner - drives one feed snapshot through the pipeline.

Phases, per event and in feed order:

1. Filter - drop sales that were not paid above the listed price
2. Normalize - turn the event into an Item
3. Dedup - admit the item unless its timestamp is already known
4. Enrich - start a tag task and a color task for every admitted item

Enrichment tasks run in the background and mutate items in place; the
runner does not wait for them. Partial failures (one bad event) are
logged and counted, they never abort the rest of the snapshot.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Coroutine, Dict, List, Optional, Set

from salesfeed.enrichers.colors import ColorEnricher
from salesfeed.enrichers.tags import TagEnricher
from salesfeed.extractors.feed_client import FeedClient
from salesfeed.loaders.item_store import Deduplicator, ItemStore
from salesfeed.transformers.normalizer import EventNormalizer
from salesfeed.transformers.price_filter import ItemFilter
from schemas.feed import FeedSnapshot
from schemas.item import Item
import logging

logger = logging.getLogger(__name__)


class PipelineStats:
    """Counters since process start, read by the stats endpoint"""

    def __init__(self):
        self.ticks_succeeded = 0
        self.ticks_failed = 0
        self.events_seen = 0
        self.events_accepted = 0
        self.events_rejected = 0
        self.events_duplicate = 0
        self.events_failed = 0
        self.last_tick_at: Optional[datetime] = None
        self.last_tick_succeeded: Optional[bool] = None
        self.last_error: Optional[str] = None

    def record_tick(self, succeeded: bool, error: Optional[str] = None) -> None:
        self.last_tick_at = datetime.now(timezone.utc)
        self.last_tick_succeeded = succeeded
        self.last_error = error
        if succeeded:
            self.ticks_succeeded += 1
        else:
            self.ticks_failed += 1

    def as_dict(self) -> Dict[str, Any]:
        return dict(vars(self))


class PipelineRunner:
    """
    Orchestrates Filter -> Normalize -> Dedup -> Enrich for one snapshot.

    Responsibilities:
    - Keep feed order within a snapshot
    - Start enrichment only for newly admitted items
    - Own the background enrichment tasks so they are not garbage collected
    """

    def __init__(
        self,
        store: ItemStore,
        client: FeedClient,
        item_filter: Optional[ItemFilter] = None,
        normalizer: Optional[EventNormalizer] = None,
        tag_enricher: Optional[TagEnricher] = None,
        color_enricher: Optional[ColorEnricher] = None,
        stats: Optional[PipelineStats] = None
    ):
        self.store = store
        self.client = client
        self.item_filter = item_filter or ItemFilter()
        self.normalizer = normalizer or EventNormalizer()
        self.deduplicator = Deduplicator(store)
        self.tag_enricher = tag_enricher or TagEnricher(client, store)
        self.color_enricher = color_enricher or ColorEnricher(client, store)
        self.stats = stats or PipelineStats()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending_enrichments(self) -> int:
        return len(self._tasks)

    def admit_snapshot(self, snapshot: FeedSnapshot) -> Dict[str, Any]:
        """
        Filter, normalize and deduplicate every event of the snapshot.

        Never suspends, so a whole snapshot is admitted atomically with
        respect to other coroutines on the loop.

        Returns:
            Dictionary with run statistics and the newly admitted items
        """
        seen = accepted = rejected = duplicate = 0
        # events dropped while validating the payload count as failed
        failed = snapshot.skipped_events
        new_items: List[Item] = []
        error_details = []

        for event in snapshot.raw_events():
            seen += 1
            try:
                if not self.item_filter.accept(event):
                    rejected += 1
                    continue
                accepted += 1

                admitted = self.deduplicator.admit(self.normalizer.normalize(event))
                if admitted is None:
                    duplicate += 1
                else:
                    new_items.append(admitted)

            except Exception as e:
                failed += 1
                error_detail = {
                    "utc_date": event.utc_date,
                    "error_type": type(e).__name__,
                    "error_message": str(e)
                }
                error_details.append(error_detail)
                logger.error(
                    f"Processing failed for event {event.utc_date}: {str(e)}",
                    extra={"error_context": error_detail}
                )

        self.stats.events_seen += seen
        self.stats.events_accepted += accepted
        self.stats.events_rejected += rejected
        self.stats.events_duplicate += duplicate
        self.stats.events_failed += failed

        return {
            "status": "success" if failed == 0 else "partial_success",
            "events_seen": seen,
            "events_accepted": accepted,
            "events_rejected": rejected,
            "events_duplicate": duplicate,
            "events_failed": failed,
            "new_items": new_items,
            "error_details": error_details
        }

    async def run(self, snapshot: FeedSnapshot) -> Dict[str, Any]:
        """Admit the snapshot and start enrichment for each new item"""
        result = self.admit_snapshot(snapshot)

        for item in result["new_items"]:
            self.start_enrichment(item)

        logger.info(
            f"Snapshot processed: seen={result['events_seen']}, "
            f"new={len(result['new_items'])}, rejected={result['events_rejected']}, "
            f"duplicate={result['events_duplicate']}, failed={result['events_failed']}"
        )
        return result

    def start_enrichment(self, item: Item) -> None:
        """Start the tag and color tasks for an item without awaiting them"""
        self._spawn(self.tag_enricher.enrich(item), f"tags-{item.utc_date}")
        self._spawn(self.color_enricher.enrich(item), f"colors-{item.utc_date}")

    def _spawn(self, coro: Coroutine, name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Enrichment task {task.get_name()} crashed: {exc!r}", exc_info=exc)

    async def wait_for_enrichment(self) -> None:
        """Wait until every enrichment task started so far has finished"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def cancel_enrichment(self) -> None:
        """Cancel outstanding enrichment tasks (used on shutdown)"""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
