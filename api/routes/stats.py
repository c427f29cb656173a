"""
Pipeline statistics endpoint
"""
from fastapi import APIRouter, Depends
from api.dependencies import get_poller
from salesfeed.scheduler import FeedPoller
from schemas.api import StatsResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Statistics"])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(poller: FeedPoller = Depends(get_poller)):
    """
    Get pipeline counters since process start.

    Returns:
    - Item totals
    - Tick outcomes
    - Event outcomes (accepted, rejected by price, duplicate)
    """
    stats = poller.stats
    items = poller.store.all()

    return StatsResponse(
        total_items=len(items),
        enriched_items=sum(1 for item in items if item.is_enriched),
        ticks_succeeded=stats.ticks_succeeded,
        ticks_failed=stats.ticks_failed,
        events_seen=stats.events_seen,
        events_accepted=stats.events_accepted,
        events_rejected=stats.events_rejected,
        events_duplicate=stats.events_duplicate
    )
