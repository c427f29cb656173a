import logging
from typing import Any, Dict, Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from core.config import settings
from core.exceptions import SalesFeedException
from salesfeed.extractors.feed_client import FeedClient
from salesfeed.loaders.item_store import ItemStore
from salesfeed.runner import PipelineRunner

logger = logging.getLogger(__name__)


class FeedPoller:
    """
    Pull a feed snapshot on a fixed interval and hand it to the runner.

    Ticks may overlap (up to ``max_overlap`` runs of the job at once); they
    only meet in the item store. A failed tick is logged and skipped and
    never stops the schedule.
    """

    def __init__(
        self,
        runner: PipelineRunner,
        client: FeedClient,
        interval_seconds: Optional[int] = None,
        max_overlap: Optional[int] = None
    ):
        self.runner = runner
        self.client = client
        self.interval_seconds = interval_seconds or settings.POLL_INTERVAL_SECONDS
        self.max_overlap = max_overlap or settings.POLL_MAX_OVERLAP
        self.scheduler = AsyncIOScheduler()

    @property
    def store(self) -> ItemStore:
        return self.runner.store

    @property
    def stats(self):
        return self.runner.stats

    @property
    def running(self) -> bool:
        return self.scheduler.running

    async def poll_once(self) -> Dict[str, Any]:
        """Job to fetch one snapshot and run it through the pipeline"""
        logger.debug("Poller: tick")
        try:
            snapshot = await self.client.fetch_snapshot()
        except SalesFeedException as e:
            logger.warning(
                f"Poller: feed fetch failed, tick skipped - {e.message}",
                extra={"error_context": e.to_dict()}
            )
            self.stats.record_tick(False, e.message)
            return {"status": "skipped", "error": e.message}

        try:
            result = await self.runner.run(snapshot)
        except Exception as e:
            logger.error(f"Poller: pipeline run failed - {e}", exc_info=True)
            self.stats.record_tick(False, str(e))
            return {"status": "failed", "error": str(e)}

        self.stats.record_tick(True)
        return result

    def start(self):
        """Start the scheduler. Must be called from a running event loop."""
        self.scheduler.add_job(
            self.poll_once,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id="feed_poll",
            replace_existing=True,
            max_instances=self.max_overlap,
            coalesce=False
        )
        self.scheduler.start()
        logger.info(f"Feed poller started (every {self.interval_seconds}s, {self.client.feed_url})")

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        logger.info("Feed poller stopped")

    async def aclose(self) -> None:
        """Stop polling, cancel enrichment and release the HTTP client"""
        self.stop()
        await self.runner.cancel_enrichment()
        await self.client.aclose()


def build_poller(
    client: Optional[FeedClient] = None,
    store: Optional[ItemStore] = None,
    interval_seconds: Optional[int] = None
) -> FeedPoller:
    """Wire a client, a store and a runner into a ready-to-start poller"""
    client = client or FeedClient()
    store = store if store is not None else ItemStore()
    runner = PipelineRunner(store, client)
    return FeedPoller(runner, client, interval_seconds=interval_seconds)
