from salesfeed.loaders.item_store import Deduplicator, ItemStore

__all__ = ["Deduplicator", "ItemStore"]
