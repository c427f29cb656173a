"""
Pydantic schemas for API request/response models
"""

from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime, timezone
from schemas.item import Item, Tag


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Health Check Schemas
# ============================================================================

class HealthCheckResponse(BaseModel):
    """Health check response model"""
    timestamp: datetime = Field(default_factory=_utcnow)
    scheduler_running: bool
    last_tick_at: Optional[datetime] = None
    last_tick_succeeded: Optional[bool] = None
    last_error: Optional[str] = None
    # Declared last so the validator sees the fields above
    status: str = Field(..., description="Overall status: healthy, degraded, unhealthy")

    @validator("status", pre=True, always=True)
    def determine_status(cls, v, values):
        """Determine overall health status"""
        if not values.get("scheduler_running", False):
            return "unhealthy"
        if values.get("last_tick_succeeded") is False:
            return "degraded"
        return "healthy"

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "timestamp": "2024-01-15T10:30:00Z",
                "scheduler_running": True,
                "last_tick_at": "2024-01-15T10:29:55Z",
                "last_tick_succeeded": True,
                "last_error": None
            }
        }


# ============================================================================
# Item Schemas
# ============================================================================

class ItemResponse(BaseModel):
    """Response model for a single item"""
    utc_date: int
    url: str
    artist: Optional[str]
    title: Optional[str]
    description: Optional[str]
    art_url: Optional[str]
    tags: Optional[List[Tag]]
    background_color: Optional[str]
    text_color: Optional[str]

    @classmethod
    def from_item(cls, item: Item) -> "ItemResponse":
        return cls(
            utc_date=item.utc_date,
            url=item.url,
            artist=item.artist,
            title=item.title,
            description=item.description,
            art_url=item.art_url,
            tags=list(item.tags) if item.tags is not None else None,
            background_color=item.background_color,
            text_color=item.text_color,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "utc_date": 1598000000,
                "url": "https://artist.bandcamp.com/album/title",
                "artist": "Artist",
                "title": "Title",
                "description": "digital album",
                "art_url": "https://f4.bcbits.com/img/a123_7.jpg",
                "tags": [
                    {"tag_url": "https://bandcamp.com/tag/ambient", "tag_name": "ambient"}
                ],
                "background_color": "rgb(10,20,30,1)",
                "text_color": "rgb(200,210,220,1)"
            }
        }


class ItemListResponse(BaseModel):
    """Item collection response, newest first"""
    total_items: int
    items: List[ItemResponse]


# ============================================================================
# Statistics Schemas
# ============================================================================

class StatsResponse(BaseModel):
    """Pipeline counters since process start"""
    timestamp: datetime = Field(default_factory=_utcnow)
    total_items: int
    enriched_items: int
    ticks_succeeded: int
    ticks_failed: int
    events_seen: int
    events_accepted: int
    events_rejected: int
    events_duplicate: int


# ============================================================================
# Error Response Schema
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str
    detail: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)
