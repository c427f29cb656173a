"""
Item retrieval endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from api.dependencies import get_poller
from salesfeed.scheduler import FeedPoller
from schemas.api import ItemListResponse, ItemResponse
from typing import Optional
import uuid
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Items"])


@router.get("/items", response_model=ItemListResponse)
async def list_items(
    request: Request,
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Return at most this many items"),
    enriched_only: bool = Query(False, description="Only items with both tags and colors"),
    poller: FeedPoller = Depends(get_poller)
):
    """
    Return the item collection, newest sale first.

    Items are returned as they are right now; tags and colors may still be
    null for items whose enrichment has not finished.
    """
    request_id = getattr(request.state, "request_id", f"req_{uuid.uuid4().hex[:12]}")

    items = poller.store.all()
    total_items = len(items)

    if enriched_only:
        items = [item for item in items if item.is_enriched]

    items.sort(key=lambda item: item.utc_date, reverse=True)
    if limit is not None:
        items = items[:limit]

    logger.info(f"[{request_id}] GET /items - returned {len(items)} of {total_items}")

    return ItemListResponse(
        total_items=total_items,
        items=[ItemResponse.from_item(item) for item in items]
    )


@router.get("/items/{utc_date}", response_model=ItemResponse)
async def get_item(utc_date: int, poller: FeedPoller = Depends(get_poller)):
    """Return a single item by its sale timestamp"""
    item = poller.store.get(utc_date)
    if item is None:
        raise HTTPException(status_code=404, detail=f"No item with timestamp {utc_date}")
    return ItemResponse.from_item(item)
