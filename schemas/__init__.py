"""
Pydantic schemas for data validation and serialization.

Schemas:
    feed: Wire format of the sales feed (RawEvent, FeedBatch, FeedSnapshot)
    item: Display-ready Item and its enrichment values (Tag, ColorPair)
    api: HTTP response models

Usage:
    from schemas.feed import FeedSnapshot
    from schemas.item import Item, Tag, ColorPair

Example:
    snapshot = FeedSnapshot.from_payload(response.json())
    for event in snapshot.raw_events():
        print(event.utc_date, event.amount_paid)
"""

__all__ = [
    "RawEvent",
    "FeedBatch",
    "FeedSnapshot",
    "Item",
    "Tag",
    "ColorPair",
    "ItemResponse",
    "HealthCheckResponse",
    "StatsResponse",
]
