"""
Sales feed pipeline: poll, filter, deduplicate, enrich.

Modules:
    runner: Drives one feed snapshot through the pipeline
    scheduler: APScheduler integration that polls the feed on an interval

Subpackages:
    extractors: Feed/page/image client and the tag page parser
    transformers: Price filter and event-to-item normalization
    loaders: Lock-guarded in-memory item store and deduplicator
    enrichers: Tag scraping and art color extraction

Architecture:
    Every tick the poller fetches a snapshot. Events are processed in feed
    order:

    1. Filter - keep sales paid strictly above the listed price
    2. Normalize - build an Item from the event
    3. Dedup - admit the item unless its timestamp is already stored
    4. Enrich - tag and color tasks run in the background per new item

    Failures stay local: a failed tick is skipped, tag fetches retry until
    they succeed, color extraction gives up silently.

Usage:
    from salesfeed.scheduler import build_poller

    poller = build_poller()
    poller.start()          # inside a running event loop
    ...
    for item in poller.store.all():
        print(item.title, item.tags, item.background_color)
"""

__all__ = [
    "FeedClient",
    "ItemFilter",
    "EventNormalizer",
    "ItemStore",
    "Deduplicator",
    "TagEnricher",
    "ColorEnricher",
    "PipelineRunner",
    "FeedPoller",
]
