"""
Pydantic schemas for the sales feed wire format
"""

from pydantic import BaseModel, Field, ValidationError, root_validator, validator
from typing import Optional, List, Iterator
import logging

logger = logging.getLogger(__name__)


class RawEvent(BaseModel):
    """
    A single sale as delivered by the feed.

    Only the fields the pipeline reads are declared; everything else the
    feed sends is ignored. ``utc_date`` is the identity of the sale.
    """

    item_price: float
    amount_paid: float
    url: str = Field(..., min_length=1)
    artist_name: Optional[str] = None
    album_title: Optional[str] = None
    item_description: Optional[str] = None
    art_url: Optional[str] = None
    utc_date: int
    event_type: Optional[str] = None

    @validator("url", "art_url")
    def strip_urls(cls, v):
        """Feed urls sometimes carry surrounding whitespace"""
        if v is not None:
            v = v.strip()
        return v

    class Config:
        extra = "ignore"


class FeedBatch(BaseModel):
    """
    One response batch: a group of events sharing an event type.

    Events are validated one by one; a malformed event is dropped and
    counted in ``skipped_items`` instead of failing the whole batch.
    """

    event_type: Optional[str] = None
    utc_date: Optional[float] = None
    items: List[RawEvent] = Field(default_factory=list)
    skipped_items: int = 0

    @root_validator(pre=True)
    def drop_malformed_items(cls, values):
        if not isinstance(values, dict):
            return values
        items = values.get("items")
        if items is None:
            # A batch with a null item list is an empty batch
            return {**values, "items": []}
        if not isinstance(items, list):
            return values

        valid = []
        skipped = 0
        for raw in items:
            try:
                valid.append(RawEvent.parse_obj(raw))
            except ValidationError as e:
                skipped += 1
                utc_date = raw.get("utc_date") if isinstance(raw, dict) else None
                logger.warning(
                    f"Skipping malformed feed event (utc_date={utc_date}): "
                    f"{e.error_count()} validation error(s)"
                )
        return {**values, "items": valid, "skipped_items": skipped}


class FeedSnapshot(BaseModel):
    """
    One response from the feed endpoint.

    The wire payload wraps this object in a ``feed_data`` envelope;
    use ``from_payload`` to unwrap it.
    """

    server_time: Optional[float] = None
    start_date: Optional[float] = None
    end_date: Optional[float] = None
    data_delay_sec: Optional[float] = None
    events: List[FeedBatch] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> "FeedSnapshot":
        """Build a snapshot from the decoded JSON body of a feed response"""
        if not isinstance(payload, dict):
            raise ValueError(f"Feed payload must be an object, got {type(payload).__name__}")
        feed_data = payload.get("feed_data")
        if not isinstance(feed_data, dict):
            raise ValueError("Feed payload has no 'feed_data' object")
        return cls.parse_obj(feed_data)

    @property
    def skipped_events(self) -> int:
        """Events dropped during validation, across all batches"""
        return sum(batch.skipped_items for batch in self.events)

    def raw_events(self) -> Iterator[RawEvent]:
        """Yield every event across all batches, in feed order"""
        for batch in self.events:
            for event in batch.items:
                yield event
