"""
FastAPI dependencies
"""

from typing import Optional
from salesfeed.scheduler import FeedPoller, build_poller

_poller: Optional[FeedPoller] = None


def get_poller() -> FeedPoller:
    """Process-wide poller; its store is the item collection the API serves"""
    global _poller
    if _poller is None:
        _poller = build_poller()
    return _poller
