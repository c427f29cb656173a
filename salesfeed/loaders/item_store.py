"""
In-memory item collection with idempotent admission
"""

import threading
from typing import Dict, List, Optional
from schemas.item import Item, Tag, ColorPair
import logging

logger = logging.getLogger(__name__)


class ItemStore:
    """
    Append-only collection of items keyed by sale timestamp.

    Ensures:
    - At most one item per timestamp
    - Tags and colors are assigned at most once per item
    - Every read and write happens under one lock, so the store may be
      shared by overlapping poll runs and enrichment tasks
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._items: List[Item] = []
        self._by_timestamp: Dict[int, Item] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, utc_date: int) -> bool:
        with self._lock:
            return utc_date in self._by_timestamp

    def add_if_absent(self, item: Item) -> bool:
        """
        Append ``item`` unless an item with the same timestamp is stored.

        Returns:
            True if the item was appended
        """
        with self._lock:
            if item.utc_date in self._by_timestamp:
                return False
            self._by_timestamp[item.utc_date] = item
            self._items.append(item)
            return True

    def get(self, utc_date: int) -> Optional[Item]:
        with self._lock:
            return self._by_timestamp.get(utc_date)

    def all(self) -> List[Item]:
        """Items in admission order (a copy of the list, not of the items)"""
        with self._lock:
            return list(self._items)

    def assign_tags(self, item: Item, tags: List[Tag]) -> bool:
        """Set the item's tags if they are still unset"""
        with self._lock:
            return item.set_tags(tags)

    def assign_colors(self, item: Item, colors: ColorPair) -> bool:
        """Set the item's colors if they are still unset"""
        with self._lock:
            return item.set_colors(colors)


class Deduplicator:
    """Admit candidate items into the store exactly once per timestamp"""

    def __init__(self, store: ItemStore):
        self.store = store

    def admit(self, candidate: Item) -> Optional[Item]:
        """
        Returns:
            The candidate if it was newly admitted, None if an item with
            the same timestamp was already known
        """
        if self.store.add_if_absent(candidate):
            logger.info(
                f"Admitted item {candidate.utc_date}: "
                f"{candidate.artist} - {candidate.title}"
            )
            return candidate

        logger.debug(f"Duplicate item {candidate.utc_date} discarded")
        return None
