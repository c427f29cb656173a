"""
Health check endpoint with poller status
"""

from fastapi import APIRouter, Depends
from api.dependencies import get_poller
from salesfeed.scheduler import FeedPoller
from schemas.api import HealthCheckResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(poller: FeedPoller = Depends(get_poller)):
    """
    Health check endpoint.

    Returns:
    - Whether the poller is scheduled
    - Outcome of the most recent tick
    """
    stats = poller.stats

    return HealthCheckResponse(
        status="healthy",  # Placeholder, validator will update
        scheduler_running=poller.running,
        last_tick_at=stats.last_tick_at,
        last_tick_succeeded=stats.last_tick_succeeded,
        last_error=stats.last_error
    )
